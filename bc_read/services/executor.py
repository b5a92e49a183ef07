# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""HTTP execution of command URLs via httpx."""

from __future__ import annotations

import logging

import httpx

from bc_read.core.errors import (
    ErrorKind,
    HttpStatusError,
    TransportError,
    UnparsableResponseError,
)
from bc_read.core.logging import mask_token
from bc_read.core.options import DEFAULT_CHARSET

logger = logging.getLogger("bc_read")

# Failures in how the request was made, as opposed to the network carrying it.
PROTOCOL_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.ProtocolError,
    httpx.UnsupportedProtocol,
    httpx.TooManyRedirects,
)


class CommandExecutor:
    """Issues one GET per command and returns the decoded body.

    Args:
        client: Shared ``httpx.Client``. When omitted the executor creates
            (and later closes) its own.
        timeout: Passed to the client it creates; ignored for a supplied one.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        self._owns_client = client is None
        if client is None:
            client = httpx.Client(timeout=timeout) if timeout is not None else httpx.Client()
        self._client = client

    @property
    def client(self) -> httpx.Client:
        return self._client

    def get(self, url: str, charset: str = DEFAULT_CHARSET) -> str:
        """GET ``url`` and return the body decoded with ``charset``.

        Raises:
            TransportError: ``ClientProtocolError`` or ``TransportIoError``.
            HttpStatusError: On any status other than 200.
            UnparsableResponseError: If the body is not valid ``charset`` text.
        """
        safe_url = mask_token(url)
        logger.debug("JSON command to execute: '%s'", safe_url)

        try:
            response = self._client.get(url)
        except PROTOCOL_EXCEPTIONS as exc:
            logger.error("Protocol error calling Media API: %s", exc)
            raise TransportError(
                ErrorKind.CLIENT_PROTOCOL_ERROR,
                f"Exception: '{exc}'",
                {"url": safe_url},
            ) from exc
        except httpx.RequestError as exc:
            logger.error("I/O error calling Media API: %s", exc)
            raise TransportError(
                ErrorKind.TRANSPORT_IO_ERROR,
                f"Exception: '{exc}'",
                {"url": safe_url},
            ) from exc

        if response.status_code != 200:
            logger.error("Media API returned HTTP %d", response.status_code)
            raise HttpStatusError(response.status_code, safe_url)

        try:
            body = response.content.decode(charset)
        except (UnicodeDecodeError, LookupError) as exc:
            logger.error("Response body is not valid %s: %s", charset, exc)
            raise UnparsableResponseError(
                f"Response body is not valid {charset}: {exc}"
            ) from exc

        logger.debug("Raw response from server: '%s'", body)
        return body

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
