"""Shared fixtures: a ReadApi wired to an in-memory httpx transport."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import httpx
import pytest

from bc_read.core.options import ReadApiOptions
from bc_read.services.catalog import ReadApi


@dataclass
class FakeServer:
    """Answers every request with the configured body/status, or raises ``error``."""

    body: str | bytes = "{}"
    status: int = 200
    error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, bytes):
            return httpx.Response(self.status, content=self.body)
        return httpx.Response(self.status, text=self.body)

    def respond_json(self, data) -> None:
        self.body = json.dumps(data)

    @property
    def last_params(self) -> httpx.QueryParams:
        return self.requests[-1].url.params


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def api(server):
    client = httpx.Client(transport=httpx.MockTransport(server.handler))
    read_api = ReadApi(options=ReadApiOptions(token="read-token."), client=client)
    yield read_api
    client.close()


def make_video_json(video_id: int, **extra) -> dict:
    data = {
        "id": video_id,
        "name": f"Video {video_id}",
        "referenceId": f"ref-{video_id}",
        "thumbnailURL": f"http://img.example.com/{video_id}.jpg",
    }
    data.update(extra)
    return data


def make_page(items: list[dict], total_count: int, page_number: int = 0, page_size: int = 100) -> dict:
    return {
        "items": items,
        "page_number": page_number,
        "page_size": page_size,
        "total_count": total_count,
    }
