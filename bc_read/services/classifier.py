# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Classification of raw Media API responses."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Final

from bc_read.core.errors import MediaApiError, UnparsableResponseError

logger = logging.getLogger("bc_read")

ABSENCE_SENTINEL: Final = "null"


@dataclass(frozen=True)
class Payload:
    """A successful response: the parsed object and the text it came from."""

    data: dict[str, Any]
    raw: str


class Absent:
    """The API answered with its bare ``null``: no matching resource."""

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = Absent()

Classified = Payload | Absent


def classify_response(raw: str) -> Classified:
    """Decide what a response body means.

    Returns ``ABSENT`` for the ``null`` sentinel (an unknown reference id, for
    instance) and a ``Payload`` for a clean JSON object.

    Raises:
        UnparsableResponseError: Body is not JSON or not a JSON object.
        MediaApiError: Body is a JSON object carrying a Media API error code.
    """
    if raw.strip() == ABSENCE_SENTINEL:
        return ABSENT

    try:
        data = json.loads(raw)
    except ValueError as exc:
        logger.error("Unparsable Media API response: %s", exc)
        raise UnparsableResponseError(f"JSON Exception: '{exc}'", raw) from exc

    if not isinstance(data, dict):
        raise UnparsableResponseError(
            f"Expected a JSON object, got {type(data).__name__}", raw
        )

    remote_error = MediaApiError.from_json(data)
    if remote_error is not None:
        logger.error("Media API reported an error: %s", remote_error.message)
        raise remote_error

    return Payload(data=data, raw=raw)
