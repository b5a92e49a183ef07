"""bc-read: Brightcove Media API read client."""

__version__ = "0.1.0"

from bc_read.core.enums import PlaylistField, SortBy, SortOrder, VideoField, VideoStateFilter
from bc_read.core.errors import (
    BrightcoveError,
    ErrorKind,
    HttpStatusError,
    InvalidInputError,
    MediaApiError,
    NotFoundError,
    TransportError,
    UnparsableEntityError,
    UnparsableResponseError,
    UrlSyntaxError,
    WrapperError,
)
from bc_read.core.models import Playlist, Playlists, Video, Videos
from bc_read.core.options import EndpointConfig, ReadApiOptions
from bc_read.services.catalog import ReadApi


def find_video(video_id: int, options: ReadApiOptions | None = None) -> Video | None:
    """Look up a single video by Brightcove id with a one-off client.

    Args:
        video_id: Brightcove video id.
        options: Configuration options. Uses defaults (env/YAML) if not provided.

    Returns:
        The Video, or None if the Media API has no such video.
    """
    with ReadApi(options=options) as api:
        return api.find_video_by_id(video_id)


def iter_all_videos(options: ReadApiOptions | None = None, page_size: int = 100):
    """Yield every video in the account, requesting one page at a time.

    Stops after the page that reaches ``total_count`` or on an empty page.
    """
    with ReadApi(options=options) as api:
        page_number = 0
        seen = 0
        while True:
            page = api.find_all_videos(page_size=page_size, page_number=page_number)
            yield from page.items
            seen += len(page.items)
            if not page.items or seen >= (page.total_count or 0):
                return
            page_number += 1


__all__ = [
    "__version__",
    "find_video",
    "iter_all_videos",
    "ReadApi",
    "ReadApiOptions",
    "EndpointConfig",
    "Video",
    "Videos",
    "Playlist",
    "Playlists",
    "VideoField",
    "PlaylistField",
    "SortBy",
    "SortOrder",
    "VideoStateFilter",
    "BrightcoveError",
    "WrapperError",
    "MediaApiError",
    "ErrorKind",
    "InvalidInputError",
    "UrlSyntaxError",
    "TransportError",
    "HttpStatusError",
    "UnparsableResponseError",
    "UnparsableEntityError",
    "NotFoundError",
]
