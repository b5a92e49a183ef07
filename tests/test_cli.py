"""Smoke tests for bc_read CLI subcommands."""

import csv
import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from bc_read.cli import (
    EXIT_ERROR,
    EXIT_NOT_FOUND,
    EXIT_OK,
    EXIT_REMOTE,
    _build_options,
    _exit_code_for,
    _split,
    cli,
)
from bc_read.core.enums import SortBy, SortOrder
from bc_read.core.errors import (
    ErrorKind,
    HttpStatusError,
    InvalidInputError,
    MediaApiError,
    NotFoundError,
    TransportError,
    UrlSyntaxError,
)
from bc_read.core.models import Playlist, Playlists, Video, Videos


def _make_video(video_id: int = 42) -> Video:
    return Video(id=video_id, name=f"Video {video_id}", reference_id=f"ref-{video_id}")


def _mock_api(mock_cls: MagicMock) -> MagicMock:
    api = MagicMock()
    mock_cls.return_value.__enter__.return_value = api
    return api


# --- helpers ---


class TestExitCodeFor:
    def test_not_found(self):
        assert _exit_code_for(NotFoundError("gone")) == EXIT_NOT_FOUND

    def test_input_error(self):
        assert _exit_code_for(InvalidInputError(ErrorKind.INVALID_PAGE_SIZE, "big")) == EXIT_ERROR

    def test_url_syntax(self):
        assert _exit_code_for(UrlSyntaxError("bad host")) == EXIT_ERROR

    def test_remote(self):
        assert _exit_code_for(MediaApiError(210, "bad token")) == EXIT_REMOTE
        assert _exit_code_for(HttpStatusError(500)) == EXIT_REMOTE
        assert _exit_code_for(TransportError(ErrorKind.TRANSPORT_IO_ERROR, "refused")) == EXIT_REMOTE


class TestSplit:
    def test_none(self):
        assert _split(None) is None

    def test_strips(self):
        assert _split("id, name ,") == ["id", "name"]


class TestBuildOptions:
    def test_drops_unset(self):
        options = _build_options(host=None, port=8080, enable_uds=None)
        assert options.port == 8080
        assert options.host == "api.brightcove.com"
        assert options.enable_uds is False


# --- commands ---


class TestVersion:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "bc_read" in result.output


class TestVideoCommand:
    def test_requires_one_selector(self):
        result = CliRunner().invoke(cli, ["video"])
        assert result.exit_code == EXIT_ERROR

    def test_rejects_both_selectors(self):
        result = CliRunner().invoke(cli, ["video", "--id", "1", "--ref", "r"])
        assert result.exit_code == EXIT_ERROR

    @patch("bc_read.cli.ReadApi")
    def test_by_id(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_video_by_id.return_value = _make_video()
        result = CliRunner().invoke(cli, ["video", "--id", "42", "--fields", "id,name", "--token", "t"])
        assert result.exit_code == EXIT_OK
        api.find_video_by_id.assert_called_once_with(42, ["id", "name"], None)
        assert '"referenceId": "ref-42"' in result.output

    @patch("bc_read.cli.ReadApi")
    def test_by_id_absent(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_video_by_id.return_value = None
        result = CliRunner().invoke(cli, ["video", "--id", "404", "--token", "t"])
        assert result.exit_code == EXIT_NOT_FOUND

    @patch("bc_read.cli.ReadApi")
    def test_by_ref_not_found(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_video_by_reference_id.side_effect = NotFoundError("Couldn't find video")
        result = CliRunner().invoke(cli, ["video", "--ref", "missing", "--token", "t"])
        assert result.exit_code == EXIT_NOT_FOUND

    @patch("bc_read.cli.ReadApi")
    def test_remote_error(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_video_by_id.side_effect = MediaApiError(210, "invalid token")
        result = CliRunner().invoke(cli, ["video", "--id", "1", "--token", "bad"])
        assert result.exit_code == EXIT_REMOTE

    @patch("bc_read.cli.ReadApi")
    def test_out_file(self, mock_cls, tmp_path):
        api = _mock_api(mock_cls)
        api.find_video_by_id.return_value = _make_video()
        dest = tmp_path / "video.json"
        result = CliRunner().invoke(cli, ["video", "--id", "42", "--token", "t", "--out", str(dest)])
        assert result.exit_code == EXIT_OK
        assert json.loads(dest.read_text())["id"] == 42

    @patch("bc_read.cli.ReadApi")
    def test_options_passed(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_video_by_id.return_value = _make_video()
        CliRunner().invoke(cli, [
            "video", "--id", "1", "--token", "t", "--host", "staging.example.com",
            "--port", "8080", "--uds",
        ])
        options = mock_cls.call_args.kwargs["options"]
        assert options.token == "t"
        assert options.host == "staging.example.com"
        assert options.port == 8080
        assert options.enable_uds is True

    @patch("bc_read.cli.ReadApi")
    def test_log_file_records_failure(self, mock_cls, tmp_path):
        api = _mock_api(mock_cls)
        api.find_video_by_id.side_effect = HttpStatusError(503)
        log_file = tmp_path / "bc_read.jsonl"
        result = CliRunner().invoke(cli, [
            "video", "--id", "1", "--token", "t", "--log-file", str(log_file),
        ])
        assert result.exit_code == EXIT_REMOTE
        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["command"] == "video"
        assert record["event"] == "HttpErrorStatus"


class TestVideosCommand:
    @patch("bc_read.cli.ReadApi")
    def test_all(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_all_videos.return_value = Videos(items=(_make_video(),), total_count=1)
        result = CliRunner().invoke(cli, [
            "videos", "--token", "t", "--page-size", "10", "--sort-by", "PLAYS_TOTAL",
            "--sort-order", "DESC",
        ])
        assert result.exit_code == EXIT_OK
        kwargs = api.find_all_videos.call_args.kwargs
        assert kwargs["page_size"] == 10
        assert kwargs["sort_by"] is SortBy.PLAYS_TOTAL
        assert kwargs["sort_order"] is SortOrder.DESC

    @patch("bc_read.cli.ReadApi")
    def test_tags(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_videos_by_tags.return_value = Videos(total_count=0)
        result = CliRunner().invoke(cli, [
            "videos", "--token", "t", "--tag", "a", "--tag", "b", "--any-tag", "c",
        ])
        assert result.exit_code == EXIT_OK
        args = api.find_videos_by_tags.call_args.args
        assert args == (["a", "b"], ["c"])

    @patch("bc_read.cli.ReadApi")
    def test_user(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_videos_by_user_id.return_value = Videos(total_count=0)
        result = CliRunner().invoke(cli, ["videos", "--token", "t", "--user-id", "u1"])
        assert result.exit_code == EXIT_OK
        assert api.find_videos_by_user_id.call_args.args == ("u1",)

    @patch("bc_read.cli.ReadApi")
    def test_campaign(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_videos_by_campaign_id.return_value = Videos(total_count=0)
        result = CliRunner().invoke(cli, ["videos", "--token", "t", "--campaign-id", "c1"])
        assert result.exit_code == EXIT_OK
        assert api.find_videos_by_campaign_id.call_args.args == ("c1",)

    @patch("bc_read.cli.ReadApi")
    def test_page_size_error(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_all_videos.side_effect = InvalidInputError(ErrorKind.INVALID_PAGE_SIZE, "too big")
        result = CliRunner().invoke(cli, ["videos", "--token", "t", "--page-size", "500"])
        assert result.exit_code == EXIT_ERROR

    def test_bad_sort_choice(self):
        result = CliRunner().invoke(cli, ["videos", "--sort-by", "NAME"])
        assert result.exit_code != EXIT_OK


class TestSearchCommand:
    @patch("bc_read.cli.ReadApi")
    def test_terms(self, mock_cls):
        api = _mock_api(mock_cls)
        api.search_videos.return_value = Videos(total_count=0)
        result = CliRunner().invoke(cli, [
            "search", "--token", "t", "--any", "a", "--any", "b", "--none", "x", "--exact",
        ])
        assert result.exit_code == EXIT_OK
        args = api.search_videos.call_args.args
        assert args[:4] == ([], ["a", "b"], ["x"], True)

    @patch("bc_read.cli.ReadApi")
    def test_text(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_videos_by_text.return_value = Videos(total_count=0)
        result = CliRunner().invoke(cli, ["search", "--token", "t", "--text", "cats"])
        assert result.exit_code == EXIT_OK
        assert api.find_videos_by_text.call_args.args[0] == "cats"
        api.search_videos.assert_not_called()


class TestPlaylistCommands:
    def test_playlist_requires_selector(self):
        result = CliRunner().invoke(cli, ["playlist"])
        assert result.exit_code == EXIT_ERROR

    @patch("bc_read.cli.ReadApi")
    def test_playlist_by_id(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_playlist_by_id.return_value = Playlist(id=3, name="Top")
        result = CliRunner().invoke(cli, [
            "playlist", "--id", "3", "--token", "t", "--playlist-fields", "id,name",
        ])
        assert result.exit_code == EXIT_OK
        api.find_playlist_by_id.assert_called_once_with(3, None, None, ["id", "name"])

    @patch("bc_read.cli.ReadApi")
    def test_playlist_by_ref_not_found(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_playlist_by_reference_id.side_effect = NotFoundError("gone")
        result = CliRunner().invoke(cli, ["playlist", "--ref", "r", "--token", "t"])
        assert result.exit_code == EXIT_NOT_FOUND

    @patch("bc_read.cli.ReadApi")
    def test_playlists_for_player(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_playlists_for_player_id.return_value = Playlists(total_count=0)
        result = CliRunner().invoke(cli, ["playlists", "--token", "t", "--player-id", "55"])
        assert result.exit_code == EXIT_OK
        assert api.find_playlists_for_player_id.call_args.args[0] == "55"
        api.find_all_playlists.assert_not_called()

    @patch("bc_read.cli.ReadApi")
    def test_all_playlists(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_all_playlists.return_value = Playlists(items=(Playlist(id=1),), total_count=1)
        result = CliRunner().invoke(cli, ["playlists", "--token", "t"])
        assert result.exit_code == EXIT_OK
        api.find_all_playlists.assert_called_once()


class TestExportCommand:
    @patch("bc_read.cli.ReadApi")
    def test_pages_until_total(self, mock_cls, tmp_path):
        api = _mock_api(mock_cls)
        api.find_all_videos.side_effect = [
            Videos(items=tuple(_make_video(i) for i in range(100)), total_count=150),
            Videos(items=tuple(_make_video(i) for i in range(100, 150)), total_count=150),
        ]
        dest = tmp_path / "export.csv"
        result = CliRunner().invoke(cli, ["export", "--token", "t", "--out", str(dest)])
        assert result.exit_code == EXIT_OK
        assert api.find_all_videos.call_count == 2
        assert api.find_all_videos.call_args_list[1].args[:2] == (100, 1)
        rows = list(csv.reader(dest.open()))
        assert rows[0] == ["id", "name", "referenceId", "thumbnailURL"]
        assert len(rows) == 151

    @patch("bc_read.cli.ReadApi")
    def test_stops_on_empty_page(self, mock_cls, tmp_path):
        api = _mock_api(mock_cls)
        api.find_all_videos.side_effect = [
            Videos(items=(_make_video(1),), total_count=10),
            Videos(items=(), total_count=10),
        ]
        dest = tmp_path / "export.csv"
        result = CliRunner().invoke(cli, ["export", "--token", "t", "--out", str(dest)])
        assert result.exit_code == EXIT_OK
        assert api.find_all_videos.call_count == 2

    @patch("bc_read.cli.ReadApi")
    def test_query(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_videos_by_text.return_value = Videos(items=(_make_video(7),), total_count=1)
        result = CliRunner().invoke(cli, ["export", "--token", "t", "--query", "cats"])
        assert result.exit_code == EXIT_OK
        assert api.find_videos_by_text.call_args.args[0] == "cats"
        assert "7,Video 7,ref-7," in result.output

    @patch("bc_read.cli.ReadApi")
    def test_failure(self, mock_cls):
        api = _mock_api(mock_cls)
        api.find_all_videos.side_effect = TransportError(ErrorKind.TRANSPORT_IO_ERROR, "refused")
        result = CliRunner().invoke(cli, ["export", "--token", "t"])
        assert result.exit_code == EXIT_REMOTE
