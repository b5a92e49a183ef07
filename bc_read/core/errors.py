# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Exception hierarchy for bc-read.

Every failure raised by the library is a ``BrightcoveError`` carrying an
``ErrorKind`` so callers can discriminate without string matching::

    try:
        api.find_all_videos(page_size=100, page_number=0)
    except HttpStatusError as exc:
        log.error("HTTP %s", exc.status_code)
    except BrightcoveError as exc:
        log.error("%s: %s", exc.kind, exc)
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    INVALID_URL_SYNTAX = "InvalidUrlSyntax"
    CLIENT_PROTOCOL_ERROR = "ClientProtocolError"
    TRANSPORT_IO_ERROR = "TransportIoError"
    HTTP_ERROR_STATUS = "HttpErrorStatus"
    UNPARSABLE_RESPONSE = "UnparsableResponse"
    REMOTE_REPORTED_ERROR = "RemoteReportedError"
    UNPARSABLE_ENTITY = "UnparsableEntity"
    RESOURCE_NOT_FOUND = "ResourceNotFound"
    INVALID_PAGE_SIZE = "InvalidPageSize"
    INVALID_REFERENCE_ID = "InvalidReferenceId"
    INVALID_ARGUMENT = "InvalidArgument"


class BrightcoveError(Exception):
    """Base for all bc-read exceptions."""

    kind: ErrorKind

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class WrapperError(BrightcoveError):
    """Raised by the client itself (as opposed to the remote API)."""


class InvalidInputError(WrapperError):
    """Caller input violates a precondition. Raised before any network call."""


class UrlSyntaxError(WrapperError):
    """Endpoint configuration or parameters cannot form a valid URL."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorKind.INVALID_URL_SYNTAX, message, details)


class TransportError(WrapperError):
    """Protocol or I/O failure talking to the Media API."""


class HttpStatusError(WrapperError):
    def __init__(self, status_code: int, url: str | None = None) -> None:
        super().__init__(
            ErrorKind.HTTP_ERROR_STATUS,
            f"Response code from HTTP server: '{status_code}'",
            {"status_code": status_code, "url": url},
        )
        self.status_code = status_code


class UnparsableResponseError(WrapperError):
    def __init__(self, message: str, raw: str | None = None) -> None:
        super().__init__(ErrorKind.UNPARSABLE_RESPONSE, message, {"raw": raw})
        self.raw = raw


class UnparsableEntityError(WrapperError):
    def __init__(self, entity: str, message: str, raw: str | None = None) -> None:
        super().__init__(
            ErrorKind.UNPARSABLE_ENTITY,
            f"Couldn't parse {entity} from JSON: {message}",
            {"entity": entity, "raw": raw},
        )
        self.entity = entity
        self.raw = raw


class NotFoundError(WrapperError):
    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorKind.RESOURCE_NOT_FOUND, message, details)


class MediaApiError(BrightcoveError):
    """Error reported by the Media API inside an otherwise valid JSON response.

    The API answers with HTTP 200 and either a nested error object
    (``{"error": {"name": ..., "message": ..., "code": 210}, "result": null}``)
    or a flat one (``{"error": "...", "code": 210}``), so this is raised
    regardless of the transport status.
    """

    def __init__(self, code: int | str, message: str, error: str | None = None) -> None:
        super().__init__(
            ErrorKind.REMOTE_REPORTED_ERROR,
            f"Media API error {code}: {message}",
            {"code": code, "error": error},
        )
        self.code = code
        self.error = error
        self.remote_message = message

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> MediaApiError | None:
        """Build from a parsed response, or return None if it carries no error code."""
        nested = data.get("error")
        if isinstance(nested, dict) and nested.get("code") is not None:
            name = nested.get("name")
            message = nested.get("message") or name or "Unknown error"
            return cls(nested["code"], str(message), str(name) if name is not None else None)

        code = data.get("code")
        if code is None:
            return None
        error = data.get("error")
        message = data.get("message") or error or "Unknown error"
        return cls(code, str(message), str(error) if error is not None else None)
