# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Query parameter assembly following the Media API naming conventions."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from enum import Enum

from bc_read.core.enums import SortBy, SortOrder, wire_token
from bc_read.core.errors import ErrorKind, InvalidInputError

logger = logging.getLogger("bc_read")

MAX_VIDEOS_PER_PAGE = 100
MAX_PLAYLISTS_PER_PAGE = 100

UDS_PARAM = ("media_delivery", "http")


class ParamList:
    """Ordered (name, value) pairs. Repeated names are kept in insertion order."""

    def __init__(self, command: str) -> None:
        self._pairs: list[tuple[str, str]] = [("command", command)]

    @property
    def command(self) -> str:
        return self._pairs[0][1]

    def add(self, name: str, value: object) -> ParamList:
        """Append a parameter unconditionally."""
        self._pairs.append((name, _stringify(value)))
        return self

    def add_optional(self, name: str, value: object | None) -> ParamList:
        """Append a parameter only when a value is present."""
        if value is not None:
            self.add(name, value)
        return self

    def add_joined(self, name: str, values: Iterable[object] | None) -> ParamList:
        """Append a comma-joined list; omitted entirely when empty."""
        joined = join_values(values)
        if joined:
            self._pairs.append((name, joined))
        return self

    def add_repeated(self, name: str, values: Iterable[object] | None) -> ParamList:
        """Append one parameter per value, all under the same name."""
        for value in values or ():
            self.add(name, value)
        return self

    def add_paging(self, page_size: int | None, page_number: int | None) -> ParamList:
        self.add_optional("page_size", page_size)
        self.add_optional("page_number", page_number)
        return self

    def add_sort(self, sort_by: SortBy | None, sort_order: SortOrder | None) -> ParamList:
        self.add_optional("sort_by", sort_by)
        self.add_optional("sort_order", sort_order)
        return self

    def with_extra(self, name: str, value: str) -> ParamList:
        """Return a copy with one more parameter; this list is left untouched."""
        copy = ParamList.__new__(ParamList)
        copy._pairs = [*self._pairs, (name, value)]
        return copy

    def items(self) -> list[tuple[str, str]]:
        return list(self._pairs)

    def get(self, name: str) -> str | None:
        for key, value in self._pairs:
            if key == name:
                return value
        return None

    def get_all(self, name: str) -> list[str]:
        return [value for key, value in self._pairs if key == name]

    def names(self) -> list[str]:
        return [key for key, _ in self._pairs]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._pairs))

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self._pairs)

    def __repr__(self) -> str:
        return f"ParamList({self._pairs!r})"


def _stringify(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return wire_token(value)
    return str(value)


def join_values(values: Iterable[object] | None, sep: str = ",") -> str:
    """Join values in iteration order using wire tokens for enum members."""
    if values is None:
        return ""
    return sep.join(_stringify(v) for v in values)


def epoch_minutes(value: int | datetime) -> int:
    """``find_modified_videos`` takes ``from_date`` in minutes since the epoch.

    A naive datetime is taken to be UTC, not local time.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() // 60)
    return int(value)


def _reject(kind: ErrorKind, message: str, details: dict) -> InvalidInputError:
    logger.error("%s", message)
    return InvalidInputError(kind, message, details)


def check_page_size(page_size: int | None, ceiling: int, resource: str) -> None:
    """Reject page sizes above the per-resource ceiling. Never clamps."""
    if page_size is None:
        return
    if page_size > ceiling:
        raise _reject(
            ErrorKind.INVALID_PAGE_SIZE,
            f"User error - requested {page_size} {resource} per page; "
            f"maximum allowed is {ceiling} {resource} per page.",
            {"page_size": page_size, "ceiling": ceiling},
        )
    if page_size < 0:
        raise _reject(
            ErrorKind.INVALID_PAGE_SIZE,
            f"User error - page size must not be negative, got {page_size}.",
            {"page_size": page_size},
        )


def check_page_number(page_number: int | None) -> None:
    if page_number is not None and page_number < 0:
        raise _reject(
            ErrorKind.INVALID_ARGUMENT,
            f"User error - page number must not be negative, got {page_number}.",
            {"page_number": page_number},
        )


def check_reference_ids(reference_ids: Iterable[object] | None) -> list[str]:
    """Reference ids are comma-joined on the wire, so none may contain a comma.

    Non-string ids are converted with ``str()`` before the check.
    """
    checked: list[str] = []
    for value in reference_ids or ():
        reference_id = str(value)
        if "," in reference_id:
            raise _reject(
                ErrorKind.INVALID_REFERENCE_ID,
                f"Reference Id '{reference_id}' contained a comma.",
                {"reference_id": reference_id},
            )
        checked.append(reference_id)
    return checked
