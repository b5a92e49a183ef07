# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pydantic data models for Media API entities."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def _epoch_millis(value: Any) -> Any:
    """Media API dates are epoch milliseconds, usually sent as strings."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int) or (isinstance(value, str) and value.lstrip("-").isdigit()):
        return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)
    return value


def _none_as_empty(value: Any) -> Any:
    return () if value is None else value


class Rendition(_Entity):
    id: int | None = None
    url: str | None = None
    encoding_rate: int | None = Field(default=None, alias="encodingRate")
    frame_width: int | None = Field(default=None, alias="frameWidth")
    frame_height: int | None = Field(default=None, alias="frameHeight")
    size: int | None = None
    video_duration: int | None = Field(default=None, alias="videoDuration")
    video_codec: str | None = Field(default=None, alias="videoCodec")
    video_container: str | None = Field(default=None, alias="videoContainer")
    remote_url: str | None = Field(default=None, alias="remoteUrl")
    remote_stream_name: str | None = Field(default=None, alias="remoteStreamName")
    audio_only: bool | None = Field(default=None, alias="audioOnly")
    controller_type: str | None = Field(default=None, alias="controllerType")
    reference_id: str | None = Field(default=None, alias="referenceId")
    display_name: str | None = Field(default=None, alias="displayName")


class CuePoint(_Entity):
    id: int | None = None
    name: str | None = None
    type: int | str | None = None
    time: float | None = None
    metadata: str | None = None
    video_id: int | None = Field(default=None, alias="videoId")
    force_stop: bool | None = Field(default=None, alias="forceStop")


class Video(_Entity):
    id: int | None = None
    name: str | None = None
    short_description: str | None = Field(default=None, alias="shortDescription")
    long_description: str | None = Field(default=None, alias="longDescription")
    creation_date: datetime | None = Field(default=None, alias="creationDate")
    published_date: datetime | None = Field(default=None, alias="publishedDate")
    last_modified_date: datetime | None = Field(default=None, alias="lastModifiedDate")
    start_date: datetime | None = Field(default=None, alias="startDate")
    end_date: datetime | None = Field(default=None, alias="endDate")
    link_url: str | None = Field(default=None, alias="linkURL")
    link_text: str | None = Field(default=None, alias="linkText")
    tags: tuple[str, ...] = ()
    video_still_url: str | None = Field(default=None, alias="videoStillURL")
    thumbnail_url: str | None = Field(default=None, alias="thumbnailURL")
    reference_id: str | None = Field(default=None, alias="referenceId")
    length: int | None = None
    economics: str | None = None
    item_state: str | None = Field(default=None, alias="itemState")
    plays_total: int | None = Field(default=None, alias="playsTotal")
    plays_trailing_week: int | None = Field(default=None, alias="playsTrailingWeek")
    version: int | None = None
    account_id: int | None = Field(default=None, alias="accountId")
    flv_url: str | None = Field(default=None, alias="FLVURL")
    renditions: tuple[Rendition, ...] = ()
    video_full_length: Rendition | None = Field(default=None, alias="videoFullLength")
    geo_restricted: bool | None = Field(default=None, alias="geoRestricted")
    geo_filtered_countries: tuple[str, ...] = Field(default=(), alias="geoFilteredCountries")
    geo_filter_exclude: bool | None = Field(default=None, alias="geoFilterExclude")
    cue_points: tuple[CuePoint, ...] = Field(default=(), alias="cuePoints")
    ad_keys: str | None = Field(default=None, alias="adKeys")
    custom_fields: dict[str, Any] = Field(default_factory=dict, alias="customFields")

    @field_validator(
        "creation_date",
        "published_date",
        "last_modified_date",
        "start_date",
        "end_date",
        mode="before",
    )
    @classmethod
    def parse_epoch_dates(cls, value: Any) -> Any:
        return _epoch_millis(value)

    @field_validator("tags", "renditions", "geo_filtered_countries", "cue_points", mode="before")
    @classmethod
    def null_sequences(cls, value: Any) -> Any:
        return _none_as_empty(value)

    @field_validator("custom_fields", mode="before")
    @classmethod
    def null_custom_fields(cls, value: Any) -> Any:
        return {} if value is None else value


class Playlist(_Entity):
    id: int | None = None
    reference_id: str | None = Field(default=None, alias="referenceId")
    account_id: int | None = Field(default=None, alias="accountId")
    name: str | None = None
    short_description: str | None = Field(default=None, alias="shortDescription")
    video_ids: tuple[int, ...] = Field(default=(), alias="videoIds")
    videos: tuple[Video, ...] = ()
    thumbnail_url: str | None = Field(default=None, alias="thumbnailURL")
    filter_tags: tuple[str, ...] = Field(default=(), alias="filterTags")
    playlist_type: str | None = Field(default=None, alias="playlistType")

    @field_validator("video_ids", "videos", "filter_tags", mode="before")
    @classmethod
    def null_sequences(cls, value: Any) -> Any:
        return _none_as_empty(value)


class Videos(_Entity):
    items: tuple[Video, ...] = ()
    total_count: int | None = None
    page_number: int | None = None
    page_size: int | None = None


class Playlists(_Entity):
    items: tuple[Playlist, ...] = ()
    total_count: int | None = None
    page_number: int | None = None
    page_size: int | None = None
