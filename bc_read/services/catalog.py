# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Read operations of the Media API.

Each public method of ``ReadApi`` is a fixed recipe: validate inputs, assemble
the parameter list, then hand it to ``ReadApi._run`` which builds the URL,
executes it, classifies the response and materializes the result. What varies
per command lives in the ``OPERATIONS`` table.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import partial
from typing import Any

import httpx

from bc_read.core.enums import PlaylistField, SortBy, SortOrder, VideoField, VideoStateFilter
from bc_read.core.errors import ErrorKind, InvalidInputError, NotFoundError
from bc_read.core.models import Playlist, Playlists, Video, Videos
from bc_read.core.options import EndpointConfig, ReadApiOptions
from bc_read.services.classifier import ABSENT, classify_response
from bc_read.services.executor import CommandExecutor
from bc_read.services.materializers import (
    playlist_from_json,
    playlists_from_json,
    video_from_json,
    videos_from_json,
)
from bc_read.services.params import (
    MAX_PLAYLISTS_PER_PAGE,
    MAX_VIDEOS_PER_PAGE,
    UDS_PARAM,
    ParamList,
    check_page_number,
    check_page_size,
    check_reference_ids,
    epoch_minutes,
)
from bc_read.services.url_builder import build_command_url

logger = logging.getLogger("bc_read")

VideoFields = Iterable[VideoField | str] | None
PlaylistFields = Iterable[PlaylistField | str] | None
CustomFields = Iterable[str] | None


class OnAbsent(str, Enum):
    """What an operation does when the API answers with the ``null`` sentinel."""

    RETURN_NONE = "return_none"
    RAISE = "raise"
    EMPTY = "empty"


@dataclass(frozen=True)
class Operation:
    command: str
    materialize: Callable[..., Any]
    on_absent: OnAbsent
    page_ceiling: int | None = None
    resource: str = "videos"


def _video_op(command: str, on_absent: OnAbsent = OnAbsent.RAISE) -> Operation:
    return Operation(command, video_from_json, on_absent)


def _videos_op(command: str, paged: bool = True) -> Operation:
    return Operation(
        command,
        partial(videos_from_json, require_count=paged),
        OnAbsent.EMPTY,
        MAX_VIDEOS_PER_PAGE if paged else None,
        "videos",
    )


def _playlist_op(command: str) -> Operation:
    return Operation(command, playlist_from_json, OnAbsent.RAISE, resource="playlists")


def _playlists_op(command: str, paged: bool = True) -> Operation:
    return Operation(
        command,
        partial(playlists_from_json, require_count=paged),
        OnAbsent.EMPTY,
        MAX_PLAYLISTS_PER_PAGE if paged else None,
        "playlists",
    )


def _invalid_argument(message: str, details: dict[str, Any] | None = None) -> InvalidInputError:
    logger.error("%s", message)
    return InvalidInputError(ErrorKind.INVALID_ARGUMENT, message, details)


OPERATIONS: dict[str, Operation] = {
    op.command: op
    for op in (
        _video_op("find_video_by_id", OnAbsent.RETURN_NONE),
        _video_op("find_video_by_reference_id", OnAbsent.RAISE),
        _videos_op("find_all_videos"),
        _videos_op("find_related_videos"),
        _videos_op("find_videos_by_ids", paged=False),
        _videos_op("find_videos_by_reference_ids", paged=False),
        _videos_op("find_videos_by_user_id"),
        _videos_op("find_videos_by_campaign_id"),
        _videos_op("find_modified_videos"),
        _videos_op("search_videos"),
        _videos_op("find_videos_by_text"),
        _videos_op("find_videos_by_tags"),
        _playlists_op("find_all_playlists"),
        _playlist_op("find_playlist_by_id"),
        _playlist_op("find_playlist_by_reference_id"),
        _playlists_op("find_playlists_by_ids", paged=False),
        _playlists_op("find_playlists_by_reference_ids", paged=False),
        _playlists_op("find_playlists_for_player_id"),
    )
}


class ReadApi:
    """Client for the read side of the Brightcove Media API.

    Args:
        token: Read token for the account. Falls back to ``options.token``.
        options: Settings (endpoint, charset, delivery mode, timeout). Read
            from the environment and ``bc_read.yaml`` when omitted.
        client: ``httpx.Client`` to send requests with. Created when omitted.

    The client keeps no per-call state. The endpoint and the ``enable_uds``
    flag are read once at the start of each call under a lock, so changing
    either never affects a call already in flight.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        options: ReadApiOptions | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        if options is None:
            options = ReadApiOptions()
        self._token = token if token is not None else options.token
        self._endpoint = options.endpoint()
        self._enable_uds = options.enable_uds
        self._lock = threading.Lock()
        self._executor = CommandExecutor(client, timeout=options.timeout)

    # --- configuration ---

    @property
    def endpoint(self) -> EndpointConfig:
        with self._lock:
            return self._endpoint

    def override_server_settings(self, scheme: str, host: str, port: int, path: str) -> None:
        """Send all subsequent calls to a test/staging server instead."""
        with self._lock:
            self._endpoint = self._endpoint.model_copy(
                update={"scheme": scheme, "host": host, "port": port, "path": path}
            )
        logger.info("Read API server overridden: %s://%s:%d%s", scheme, host, port, path)

    @property
    def enable_uds(self) -> bool:
        """Force non-streaming (HTTP) delivery URLs in every response."""
        with self._lock:
            return self._enable_uds

    @enable_uds.setter
    def enable_uds(self, value: bool) -> None:
        with self._lock:
            self._enable_uds = bool(value)

    def close(self) -> None:
        self._executor.close()

    def __enter__(self) -> ReadApi:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- pipeline ---

    def _params(self, command: str) -> ParamList:
        if not self._token:
            raise _invalid_argument(
                "A read token is required (pass token= or set BC_READ_TOKEN)."
            )
        return ParamList(command).add("token", self._token)

    def _check_paging(self, op: Operation, page_size: int | None, page_number: int | None) -> None:
        if op.page_ceiling is not None:
            check_page_size(page_size, op.page_ceiling, op.resource)
        check_page_number(page_number)

    def _run(self, params: ParamList, **context: Any) -> Any:
        op = OPERATIONS[params.command]
        with self._lock:
            endpoint = self._endpoint
            enable_uds = self._enable_uds
        if enable_uds:
            params = params.with_extra(*UDS_PARAM)

        url = build_command_url(endpoint, params)
        raw = self._executor.get(url, endpoint.charset)
        outcome = classify_response(raw)
        if outcome is ABSENT:
            return self._absent(op, params, context)
        return op.materialize(outcome.data, outcome.raw)

    def _absent(self, op: Operation, params: ParamList, context: dict[str, Any]) -> Any:
        described = ", ".join(f"{k}={v!r}" for k, v in context.items()) or "no criteria"
        if op.on_absent is OnAbsent.RETURN_NONE:
            logger.warning("%s: nothing found for %s", op.command, described)
            return None
        if op.on_absent is OnAbsent.RAISE:
            logger.error("%s: nothing found for %s", op.command, described)
            raise NotFoundError(
                f"Couldn't find {op.resource[:-1]} for {described}.",
                {"command": op.command, **context},
            )
        logger.info("%s: empty result for %s", op.command, described)
        page_size = params.get("page_size")
        page_number = params.get("page_number")
        empty = Videos if op.resource == "videos" else Playlists
        return empty(
            items=(),
            total_count=0,
            page_size=int(page_size) if page_size is not None else None,
            page_number=int(page_number) if page_number is not None else None,
        )

    # --- videos ---

    def find_video_by_id(
        self,
        video_id: int,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Video | None:
        """Find a video by its Brightcove id (not the reference id).

        Returns None, with a logged warning, when the API has no such video.
        """
        params = (
            self._params("find_video_by_id")
            .add("video_id", video_id)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params, video_id=video_id)

    def find_video_by_reference_id(
        self,
        reference_id: str,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Video:
        """Find a video by its publisher-assigned reference id.

        Raises:
            NotFoundError: When the API has no such video.
        """
        params = (
            self._params("find_video_by_reference_id")
            .add("reference_id", reference_id)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params, reference_id=reference_id)

    def find_all_videos(
        self,
        page_size: int | None = None,
        page_number: int | None = None,
        sort_by: SortBy | None = None,
        sort_order: SortOrder | None = None,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Videos:
        """List every video in the account, one page at a time (at most 100 per page)."""
        self._check_paging(OPERATIONS["find_all_videos"], page_size, page_number)
        params = (
            self._params("find_all_videos")
            .add_paging(page_size, page_number)
            .add_sort(sort_by, sort_order)
            .add("get_item_count", True)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params)

    def find_related_videos(
        self,
        video_id: int | None = None,
        reference_id: str | None = None,
        page_size: int | None = None,
        page_number: int | None = None,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Videos:
        """Find videos related to one video, identified by id or by reference id."""
        if (video_id is None) == (reference_id is None):
            raise _invalid_argument(
                "Exactly one of video_id or reference_id must be given.",
                {"video_id": video_id, "reference_id": reference_id},
            )
        self._check_paging(OPERATIONS["find_related_videos"], page_size, page_number)
        params = (
            self._params("find_related_videos")
            .add_optional("video_id", video_id)
            .add_optional("reference_id", reference_id)
            .add_paging(page_size, page_number)
            .add("get_item_count", True)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params, video_id=video_id, reference_id=reference_id)

    def find_videos_by_ids(
        self,
        video_ids: Iterable[int],
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Videos:
        video_ids = list(video_ids)
        params = (
            self._params("find_videos_by_ids")
            .add_joined("video_ids", video_ids)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params, video_ids=video_ids)

    def find_videos_by_reference_ids(
        self,
        reference_ids: Iterable[str],
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Videos:
        reference_ids = check_reference_ids(reference_ids)
        params = (
            self._params("find_videos_by_reference_ids")
            .add_joined("reference_ids", reference_ids)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params, reference_ids=reference_ids)

    def find_videos_by_user_id(
        self,
        user_id: str,
        page_size: int | None = None,
        page_number: int | None = None,
        sort_by: SortBy | None = None,
        sort_order: SortOrder | None = None,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Videos:
        self._check_paging(OPERATIONS["find_videos_by_user_id"], page_size, page_number)
        params = (
            self._params("find_videos_by_user_id")
            .add("user_id", user_id)
            .add_paging(page_size, page_number)
            .add_sort(sort_by, sort_order)
            .add("get_item_count", True)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params, user_id=user_id)

    def find_videos_by_campaign_id(
        self,
        campaign_id: str,
        page_size: int | None = None,
        page_number: int | None = None,
        sort_by: SortBy | None = None,
        sort_order: SortOrder | None = None,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Videos:
        self._check_paging(OPERATIONS["find_videos_by_campaign_id"], page_size, page_number)
        params = (
            self._params("find_videos_by_campaign_id")
            .add("campaign_id", campaign_id)
            .add_paging(page_size, page_number)
            .add_sort(sort_by, sort_order)
            .add("get_item_count", True)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params, campaign_id=campaign_id)

    def find_modified_videos(
        self,
        from_date: int | datetime,
        filter: Iterable[VideoStateFilter] | None = None,
        page_size: int | None = None,
        page_number: int | None = None,
        sort_by: SortBy | None = None,
        sort_order: SortOrder | None = None,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Videos:
        """Find videos modified since ``from_date``.

        ``from_date`` is minutes since the epoch, or a datetime converted to it.
        ``filter`` limits the result to videos in the given states.
        """
        self._check_paging(OPERATIONS["find_modified_videos"], page_size, page_number)
        minutes = epoch_minutes(from_date)
        params = (
            self._params("find_modified_videos")
            .add("from_date", minutes)
            .add_paging(page_size, page_number)
            .add_sort(sort_by, sort_order)
            .add("get_item_count", True)
            .add_joined("filter", filter)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params, from_date=minutes)

    def search_videos(
        self,
        all_terms: Iterable[str] | None = None,
        any_terms: Iterable[str] | None = None,
        none_terms: Iterable[str] | None = None,
        exact: bool | None = None,
        sort_by: SortBy | None = None,
        sort_order: SortOrder | None = None,
        page_size: int | None = None,
        page_number: int | None = None,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Videos:
        """Search videos by terms.

        Each ``all``/``any`` term is sent as its own repeated parameter (the API
        ORs repeated ``any`` terms); ``none`` terms are comma-joined. Terms may
        be qualified with a field, e.g. ``"tag:sports"``. The order is sent as
        part of ``sort_by``, so ``sort_order`` requires ``sort_by``.
        """
        if sort_order is not None and sort_by is None:
            raise _invalid_argument(
                "sort_order was given without sort_by.", {"sort_order": sort_order.value}
            )
        self._check_paging(OPERATIONS["search_videos"], page_size, page_number)
        params = (
            self._params("search_videos")
            .add_repeated("all", all_terms)
            .add_repeated("any", any_terms)
            .add_joined("none", none_terms)
            .add_optional("exact", exact)
        )
        if sort_by is not None:
            sort = sort_by.value if sort_order is None else f"{sort_by.value}:{sort_order.value}"
            params.add("sort_by", sort)
        params = (
            params.add_paging(page_size, page_number)
            .add("get_item_count", True)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params)

    def find_videos_by_text(
        self,
        text: str,
        page_size: int | None = None,
        page_number: int | None = None,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Videos:
        self._check_paging(OPERATIONS["find_videos_by_text"], page_size, page_number)
        params = (
            self._params("find_videos_by_text")
            .add("text", text)
            .add_paging(page_size, page_number)
            .add("get_item_count", True)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params, text=text)

    def find_videos_by_tags(
        self,
        and_tags: Iterable[str] | None = None,
        or_tags: Iterable[str] | None = None,
        page_size: int | None = None,
        page_number: int | None = None,
        sort_by: SortBy | None = None,
        sort_order: SortOrder | None = None,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
    ) -> Videos:
        """Find videos carrying all of ``and_tags`` and at least one of ``or_tags``."""
        self._check_paging(OPERATIONS["find_videos_by_tags"], page_size, page_number)
        params = (
            self._params("find_videos_by_tags")
            .add_paging(page_size, page_number)
            .add_sort(sort_by, sort_order)
            .add("get_item_count", True)
            .add_joined("and_tags", and_tags)
            .add_joined("or_tags", or_tags)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
        )
        return self._run(params)

    # --- playlists ---

    def find_all_playlists(
        self,
        page_size: int | None = None,
        page_number: int | None = None,
        sort_by: SortBy | None = None,
        sort_order: SortOrder | None = None,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
        playlist_fields: PlaylistFields = None,
    ) -> Playlists:
        self._check_paging(OPERATIONS["find_all_playlists"], page_size, page_number)
        params = (
            self._params("find_all_playlists")
            .add_paging(page_size, page_number)
            .add_sort(sort_by, sort_order)
            .add("get_item_count", True)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
            .add_joined("playlist_fields", playlist_fields)
        )
        return self._run(params)

    def find_playlist_by_id(
        self,
        playlist_id: int,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
        playlist_fields: PlaylistFields = None,
    ) -> Playlist:
        """Find a playlist by its Brightcove id.

        Raises:
            NotFoundError: When the API has no such playlist.
        """
        params = (
            self._params("find_playlist_by_id")
            .add("playlist_id", playlist_id)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
            .add_joined("playlist_fields", playlist_fields)
        )
        return self._run(params, playlist_id=playlist_id)

    def find_playlist_by_reference_id(
        self,
        reference_id: str,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
        playlist_fields: PlaylistFields = None,
    ) -> Playlist:
        params = (
            self._params("find_playlist_by_reference_id")
            .add("reference_id", reference_id)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
            .add_joined("playlist_fields", playlist_fields)
        )
        return self._run(params, reference_id=reference_id)

    def find_playlists_by_ids(
        self,
        playlist_ids: Iterable[int],
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
        playlist_fields: PlaylistFields = None,
    ) -> Playlists:
        playlist_ids = list(playlist_ids)
        params = (
            self._params("find_playlists_by_ids")
            .add_joined("playlist_ids", playlist_ids)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
            .add_joined("playlist_fields", playlist_fields)
        )
        return self._run(params, playlist_ids=playlist_ids)

    def find_playlists_by_reference_ids(
        self,
        reference_ids: Iterable[str],
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
        playlist_fields: PlaylistFields = None,
    ) -> Playlists:
        reference_ids = check_reference_ids(reference_ids)
        params = (
            self._params("find_playlists_by_reference_ids")
            .add_joined("reference_ids", reference_ids)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
            .add_joined("playlist_fields", playlist_fields)
        )
        return self._run(params, reference_ids=reference_ids)

    def find_playlists_for_player_id(
        self,
        player_id: int | str,
        page_size: int | None = None,
        page_number: int | None = None,
        video_fields: VideoFields = None,
        custom_fields: CustomFields = None,
        playlist_fields: PlaylistFields = None,
    ) -> Playlists:
        """List the playlists assigned to a player."""
        self._check_paging(OPERATIONS["find_playlists_for_player_id"], page_size, page_number)
        params = (
            self._params("find_playlists_for_player_id")
            .add("player_id", player_id)
            .add_paging(page_size, page_number)
            .add("get_item_count", True)
            .add_joined("video_fields", video_fields)
            .add_joined("custom_fields", custom_fields)
            .add_joined("playlist_fields", playlist_fields)
        )
        return self._run(params, player_id=player_id)
