# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""CLI entry point for bc-read."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import BaseModel

from bc_read import __version__
from bc_read.core.enums import SortBy, SortOrder
from bc_read.core.errors import BrightcoveError, ErrorKind, InvalidInputError, UrlSyntaxError
from bc_read.core.logging import get_logger, log_event, setup_logging
from bc_read.core.models import Video
from bc_read.core.options import ReadApiOptions
from bc_read.core.writer import EXPORT_COLUMNS, to_json, videos_to_csv, write_json, write_videos_csv
from bc_read.services.catalog import ReadApi
from bc_read.services.params import MAX_VIDEOS_PER_PAGE


# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2
EXIT_REMOTE = 3


def _common_options(fn):
    """Shared Click options that map to ReadApiOptions fields."""
    decorators = [
        click.option("--token", type=str, default=None, help="Media API read token."),
        click.option("--scheme", type=str, default=None, help="Override API scheme."),
        click.option("--host", type=str, default=None, help="Override API host."),
        click.option("--port", type=int, default=None, help="Override API port."),
        click.option("--path", type=str, default=None, help="Override API path."),
        click.option("--charset", type=str, default=None, help="URL/response character set."),
        click.option("--uds/--no-uds", "enable_uds", default=None, help="Force HTTP (non-streaming) delivery URLs."),
        click.option("--timeout", type=float, default=None, help="Request timeout in seconds."),
        click.option("--verbose", is_flag=True, default=None, help="Log command URLs and raw responses."),
        click.option("--out", type=click.Path(path_type=Path), default=None, help="Write output to this file instead of stdout."),
        click.option("--sanitize", is_flag=True, default=False, help="Escape text for HTML/JS embedding."),
        click.option("--log-file", type=click.Path(path_type=Path), default=None, help="Also write JSONL logs to this file."),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def _field_options(fn):
    decorators = [
        click.option("--fields", type=str, default=None, help="Comma-separated video fields."),
        click.option("--custom-fields", type=str, default=None, help="Comma-separated custom fields."),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def _paging_options(fn):
    decorators = [
        click.option("--page-size", type=int, default=None, help=f"Items per page (max {MAX_VIDEOS_PER_PAGE})."),
        click.option("--page-number", type=int, default=None, help="Zero-indexed page number."),
        click.option("--sort-by", type=click.Choice([m.value for m in SortBy]), default=None),
        click.option("--sort-order", type=click.Choice([m.value for m in SortOrder]), default=None),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def _build_options(**cli_kwargs) -> ReadApiOptions:
    """Build ReadApiOptions from CLI kwargs, filtering out unset (None) values.

    Only explicitly-provided CLI flags are passed to ReadApiOptions as init
    overrides. Unset flags fall through to env vars → YAML → defaults.
    """
    overrides = {key: value for key, value in cli_kwargs.items() if value is not None}
    return ReadApiOptions(**overrides)


def _split(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def _sort(sort_by: str | None, sort_order: str | None) -> tuple[SortBy | None, SortOrder | None]:
    return (
        SortBy(sort_by) if sort_by else None,
        SortOrder(sort_order) if sort_order else None,
    )


def _exit_code_for(exc: BrightcoveError) -> int:
    if exc.kind is ErrorKind.RESOURCE_NOT_FOUND:
        return EXIT_NOT_FOUND
    if isinstance(exc, (InvalidInputError, UrlSyntaxError)):
        return EXIT_ERROR
    return EXIT_REMOTE


def _emit(result: BaseModel, out: Path | None, sanitize: bool) -> None:
    if out is not None:
        write_json(result, out, sanitize=sanitize)
        get_logger().info("Wrote %s", out)
    else:
        click.echo(to_json(result, sanitize=sanitize), nl=False)


def _start(kwargs: dict) -> tuple[ReadApiOptions, Path | None, bool]:
    out = kwargs.pop("out")
    sanitize = kwargs.pop("sanitize")
    log_file = kwargs.pop("log_file")
    options = _build_options(**kwargs)
    setup_logging(verbose=options.verbose, jsonl_path=log_file)
    return options, out, sanitize


def _fail(exc: BrightcoveError) -> None:
    ctx = click.get_current_context(silent=True)
    log_event(
        logging.ERROR,
        str(exc),
        command=ctx.info_name if ctx is not None else None,
        event=exc.kind.value,
        error=exc.message,
    )
    sys.exit(_exit_code_for(exc))


@click.group()
@click.version_option(version=__version__, prog_name="bc_read")
def cli() -> None:
    """Brightcove Media API read client."""


@cli.command()
@click.option("--id", "video_id", type=int, default=None, help="Brightcove video id.")
@click.option("--ref", "reference_id", type=str, default=None, help="Video reference id.")
@_field_options
@_common_options
def video(video_id, reference_id, fields, custom_fields, **kwargs):
    """Find one video by id or reference id."""
    options, out, sanitize = _start(kwargs)
    log = get_logger()

    if (video_id is None) == (reference_id is None):
        log.error("Give exactly one of --id or --ref.")
        sys.exit(EXIT_ERROR)

    try:
        with ReadApi(options=options) as api:
            if video_id is not None:
                result = api.find_video_by_id(video_id, _split(fields), _split(custom_fields))
            else:
                result = api.find_video_by_reference_id(
                    reference_id, _split(fields), _split(custom_fields)
                )
    except BrightcoveError as exc:
        _fail(exc)

    if result is None:
        log.error("Video %s not found", video_id)
        sys.exit(EXIT_NOT_FOUND)
    _emit(result, out, sanitize)


@cli.command()
@click.option("--tag", "and_tags", multiple=True, help="Tag every video must carry (repeatable).")
@click.option("--any-tag", "or_tags", multiple=True, help="Tag of which at least one must match (repeatable).")
@click.option("--user-id", type=str, default=None, help="Only videos owned by this user.")
@click.option("--campaign-id", type=str, default=None, help="Only videos in this campaign.")
@_paging_options
@_field_options
@_common_options
def videos(and_tags, or_tags, user_id, campaign_id, page_size, page_number, sort_by, sort_order,
           fields, custom_fields, **kwargs):
    """List videos: all, by tags, by user, or by campaign."""
    options, out, sanitize = _start(kwargs)
    by, order = _sort(sort_by, sort_order)
    common = dict(
        page_size=page_size,
        page_number=page_number,
        sort_by=by,
        sort_order=order,
        video_fields=_split(fields),
        custom_fields=_split(custom_fields),
    )

    try:
        with ReadApi(options=options) as api:
            if and_tags or or_tags:
                result = api.find_videos_by_tags(list(and_tags), list(or_tags), **common)
            elif user_id is not None:
                result = api.find_videos_by_user_id(user_id, **common)
            elif campaign_id is not None:
                result = api.find_videos_by_campaign_id(campaign_id, **common)
            else:
                result = api.find_all_videos(**common)
    except BrightcoveError as exc:
        _fail(exc)

    _emit(result, out, sanitize)


@cli.command()
@click.option("--all", "all_terms", multiple=True, help="Term every result must match (repeatable).")
@click.option("--any", "any_terms", multiple=True, help="Term of which at least one must match (repeatable).")
@click.option("--none", "none_terms", multiple=True, help="Term no result may match (repeatable).")
@click.option("--exact/--no-exact", default=None, help="Require exact term matches.")
@click.option("--text", type=str, default=None, help="Free-text search instead of term search.")
@_paging_options
@_field_options
@_common_options
def search(all_terms, any_terms, none_terms, exact, text, page_size, page_number, sort_by,
           sort_order, fields, custom_fields, **kwargs):
    """Search videos by terms or free text."""
    options, out, sanitize = _start(kwargs)
    by, order = _sort(sort_by, sort_order)

    try:
        with ReadApi(options=options) as api:
            if text is not None:
                result = api.find_videos_by_text(
                    text, page_size, page_number, _split(fields), _split(custom_fields)
                )
            else:
                result = api.search_videos(
                    list(all_terms),
                    list(any_terms),
                    list(none_terms),
                    exact,
                    by,
                    order,
                    page_size,
                    page_number,
                    _split(fields),
                    _split(custom_fields),
                )
    except BrightcoveError as exc:
        _fail(exc)

    _emit(result, out, sanitize)


@cli.command()
@click.option("--id", "playlist_id", type=int, default=None, help="Brightcove playlist id.")
@click.option("--ref", "reference_id", type=str, default=None, help="Playlist reference id.")
@click.option("--playlist-fields", type=str, default=None, help="Comma-separated playlist fields.")
@_field_options
@_common_options
def playlist(playlist_id, reference_id, playlist_fields, fields, custom_fields, **kwargs):
    """Find one playlist by id or reference id."""
    options, out, sanitize = _start(kwargs)

    if (playlist_id is None) == (reference_id is None):
        get_logger().error("Give exactly one of --id or --ref.")
        sys.exit(EXIT_ERROR)

    selectors = (_split(fields), _split(custom_fields), _split(playlist_fields))
    try:
        with ReadApi(options=options) as api:
            if playlist_id is not None:
                result = api.find_playlist_by_id(playlist_id, *selectors)
            else:
                result = api.find_playlist_by_reference_id(reference_id, *selectors)
    except BrightcoveError as exc:
        _fail(exc)

    _emit(result, out, sanitize)


@cli.command()
@click.option("--player-id", type=str, default=None, help="Only playlists assigned to this player.")
@click.option("--playlist-fields", type=str, default=None, help="Comma-separated playlist fields.")
@_paging_options
@_field_options
@_common_options
def playlists(player_id, playlist_fields, page_size, page_number, sort_by, sort_order, fields,
              custom_fields, **kwargs):
    """List all playlists, or those of one player."""
    options, out, sanitize = _start(kwargs)
    by, order = _sort(sort_by, sort_order)

    try:
        with ReadApi(options=options) as api:
            if player_id is not None:
                result = api.find_playlists_for_player_id(
                    player_id,
                    page_size,
                    page_number,
                    _split(fields),
                    _split(custom_fields),
                    _split(playlist_fields),
                )
            else:
                result = api.find_all_playlists(
                    page_size,
                    page_number,
                    by,
                    order,
                    _split(fields),
                    _split(custom_fields),
                    _split(playlist_fields),
                )
    except BrightcoveError as exc:
        _fail(exc)

    _emit(result, out, sanitize)


@cli.command()
@click.option("--query", type=str, default=None, help="Only export videos matching this text.")
@_common_options
def export(query, **kwargs):
    """Export the video library (id, name, reference id, thumbnail) as CSV."""
    options, out, sanitize = _start(kwargs)
    log = get_logger()
    fields = list(EXPORT_COLUMNS)
    collected: list[Video] = []

    try:
        with ReadApi(options=options) as api:
            page_number = 0
            while True:
                if query:
                    page = api.find_videos_by_text(
                        query, MAX_VIDEOS_PER_PAGE, page_number, fields
                    )
                else:
                    page = api.find_all_videos(
                        MAX_VIDEOS_PER_PAGE, page_number, video_fields=fields
                    )
                collected.extend(page.items)
                total = page.total_count or 0
                if not page.items or len(collected) >= total:
                    break
                page_number += 1
    except BrightcoveError as exc:
        _fail(exc)

    log.info("Exporting %d videos", len(collected))
    if out is not None:
        write_videos_csv(collected, out, sanitize=sanitize)
        log_event(logging.INFO, f"Wrote {out}", command="export", event="csv_written",
                  details=f"{len(collected)} videos")
    else:
        click.echo(videos_to_csv(collected, sanitize=sanitize), nl=False)


if __name__ == "__main__":
    cli()
