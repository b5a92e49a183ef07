# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Command URL construction."""

from __future__ import annotations

import codecs
import logging
import re
from urllib.parse import urlencode

import httpx

from bc_read.core.errors import UrlSyntaxError
from bc_read.core.logging import mask_token
from bc_read.core.options import EndpointConfig
from bc_read.services.params import ParamList

logger = logging.getLogger("bc_read")

_SCHEMES = ("http", "https")
_HOST_RE = re.compile(r"^[A-Za-z0-9.\-]+$|^\[[0-9A-Fa-f:.]+\]$")


def build_command_url(endpoint: EndpointConfig, params: ParamList) -> str:
    """Combine the endpoint and parameters into one absolute request URL.

    Values are percent-encoded with the endpoint's character set.

    Raises:
        UrlSyntaxError: If the endpoint or encoding cannot produce a valid URL.
    """
    scheme = endpoint.scheme.lower()
    if scheme not in _SCHEMES:
        raise _invalid(f"Unsupported URL scheme '{endpoint.scheme}'")
    if not endpoint.host or not _HOST_RE.match(endpoint.host):
        raise _invalid(f"Invalid host '{endpoint.host}'")
    if not 0 < endpoint.port < 65536:
        raise _invalid(f"Invalid port {endpoint.port}")

    try:
        codecs.lookup(endpoint.charset)
    except LookupError as exc:
        raise _invalid(f"Unknown character set '{endpoint.charset}'") from exc

    try:
        query = urlencode(params.items(), encoding=endpoint.charset)
    except UnicodeEncodeError as exc:
        raise _invalid(
            f"Parameter value not representable in {endpoint.charset}: {exc}"
        ) from exc

    path = endpoint.path if endpoint.path.startswith("/") else f"/{endpoint.path}"
    url = f"{scheme}://{endpoint.host}:{endpoint.port}{path}?{query}"

    try:
        httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise _invalid(f"Exception: '{exc}'", {"url": mask_token(url)}) from exc

    return url


def _invalid(message: str, details: dict | None = None) -> UrlSyntaxError:
    logger.error("Invalid command URL: %s", message)
    return UrlSyntaxError(message, details)
