# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Enumerations sent to the Media API.

Each member's value is its wire token. Encode through ``wire_token()``:
``str()`` of a member yields ``"VideoField.ID"`` on current Pythons.
"""

from __future__ import annotations

from enum import Enum


class VideoField(str, Enum):
    ID = "id"
    NAME = "name"
    SHORT_DESCRIPTION = "shortDescription"
    LONG_DESCRIPTION = "longDescription"
    CREATION_DATE = "creationDate"
    PUBLISHED_DATE = "publishedDate"
    LAST_MODIFIED_DATE = "lastModifiedDate"
    START_DATE = "startDate"
    END_DATE = "endDate"
    LINK_URL = "linkURL"
    LINK_TEXT = "linkText"
    TAGS = "tags"
    VIDEO_STILL_URL = "videoStillURL"
    THUMBNAIL_URL = "thumbnailURL"
    REFERENCE_ID = "referenceId"
    LENGTH = "length"
    ECONOMICS = "economics"
    ITEM_STATE = "itemState"
    PLAYS_TOTAL = "playsTotal"
    PLAYS_TRAILING_WEEK = "playsTrailingWeek"
    VERSION = "version"
    CUSTOM_FIELDS = "customFields"
    FLV_URL = "FLVURL"
    RENDITIONS = "renditions"
    VIDEO_FULL_LENGTH = "videoFullLength"
    GEO_RESTRICTED = "geoRestricted"
    GEO_FILTERED_COUNTRIES = "geoFilteredCountries"
    GEO_FILTER_EXCLUDE = "geoFilterExclude"
    ACCOUNT_ID = "accountId"
    CUE_POINTS = "cuePoints"
    AD_KEYS = "adKeys"


class PlaylistField(str, Enum):
    ID = "id"
    REFERENCE_ID = "referenceId"
    NAME = "name"
    SHORT_DESCRIPTION = "shortDescription"
    VIDEO_IDS = "videoIds"
    VIDEOS = "videos"
    THUMBNAIL_URL = "thumbnailURL"
    FILTER_TAGS = "filterTags"
    PLAYLIST_TYPE = "playlistType"
    ACCOUNT_ID = "accountId"


class SortBy(str, Enum):
    PUBLISH_DATE = "PUBLISH_DATE"
    CREATION_DATE = "CREATION_DATE"
    MODIFIED_DATE = "MODIFIED_DATE"
    PLAYS_TOTAL = "PLAYS_TOTAL"
    PLAYS_TRAILING_WEEK = "PLAYS_TRAILING_WEEK"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class VideoStateFilter(str, Enum):
    PLAYABLE = "PLAYABLE"
    UNSCHEDULED = "UNSCHEDULED"
    INACTIVE = "INACTIVE"
    DELETED = "DELETED"


def wire_token(value: Enum | str) -> str:
    """Return the token the Media API expects for an enum member or raw string."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)
