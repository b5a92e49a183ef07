# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Mapping of parsed Media API objects onto entity models."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from bc_read.core.errors import UnparsableEntityError
from bc_read.core.models import Playlist, Playlists, Video, Videos

logger = logging.getLogger("bc_read")

T = TypeVar("T", bound=BaseModel)


def _unparsable(entity: str, message: str, raw: str | None) -> UnparsableEntityError:
    logger.error("Couldn't parse %s: %s", entity, message)
    return UnparsableEntityError(entity, message, raw)


def _build(model: type[T], entity: str, data: Any, raw: str | None) -> T:
    if not isinstance(data, dict):
        raise _unparsable(
            entity, f"expected an object, got {type(data).__name__}", raw
        )
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise _unparsable(entity, str(exc), raw) from exc


def _build_collection(
    model: type[T],
    item_parser: Callable[[Any, str | None], Any],
    entity: str,
    data: Any,
    raw: str | None,
    require_count: bool,
) -> T:
    if not isinstance(data, dict):
        raise _unparsable(
            entity, f"expected an object, got {type(data).__name__}", raw
        )
    if require_count:
        missing = [key for key in ("items", "total_count") if key not in data]
        if missing:
            raise _unparsable(
                entity, f"missing required field(s): {', '.join(missing)}", raw
            )

    items = data.get("items")
    if items is None:
        items = []
    if not isinstance(items, list):
        raise _unparsable(
            entity, f"'items' is {type(items).__name__}, not a list", raw
        )

    parsed = [item_parser(item, raw) for item in items]
    try:
        return model.model_validate(
            {
                "items": parsed,
                "total_count": data.get("total_count"),
                "page_number": data.get("page_number"),
                "page_size": data.get("page_size"),
            }
        )
    except ValidationError as exc:
        raise _unparsable(entity, str(exc), raw) from exc


def video_from_json(data: Any, raw: str | None = None) -> Video:
    return _build(Video, "Video", data, raw)


def playlist_from_json(data: Any, raw: str | None = None) -> Playlist:
    return _build(Playlist, "Playlist", data, raw)


def videos_from_json(data: Any, raw: str | None = None, *, require_count: bool = True) -> Videos:
    """Build a ``Videos`` page.

    With ``require_count`` (the response was requested with
    ``get_item_count=true``) both ``items`` and ``total_count`` must be present.
    """
    return _build_collection(Videos, video_from_json, "Videos", data, raw, require_count)


def playlists_from_json(
    data: Any, raw: str | None = None, *, require_count: bool = True
) -> Playlists:
    return _build_collection(
        Playlists, playlist_from_json, "Playlists", data, raw, require_count
    )
