"""Tests for bc_read.core.models and bc_read.core.options."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from bc_read.core.models import CuePoint, Playlist, Rendition, Video, Videos
from bc_read.core.options import (
    DEFAULT_CHARSET,
    DEFAULT_HOST,
    DEFAULT_PATH,
    DEFAULT_PORT,
    DEFAULT_SCHEME,
    EndpointConfig,
    ReadApiOptions,
)


# --- Video ---


class TestVideo:
    def test_minimal(self):
        v = Video.model_validate({"id": 1})
        assert v.id == 1
        assert v.name is None
        assert v.tags == ()
        assert v.custom_fields == {}

    def test_aliases(self):
        v = Video.model_validate(
            {
                "shortDescription": "short",
                "thumbnailURL": "http://t",
                "referenceId": "ref",
                "FLVURL": "http://flv",
                "playsTrailingWeek": 7,
            }
        )
        assert v.short_description == "short"
        assert v.thumbnail_url == "http://t"
        assert v.reference_id == "ref"
        assert v.flv_url == "http://flv"
        assert v.plays_trailing_week == 7

    def test_populate_by_name(self):
        assert Video(reference_id="r").reference_id == "r"

    def test_epoch_millis_string(self):
        v = Video.model_validate({"creationDate": "1262304000000"})
        assert v.creation_date == datetime(2010, 1, 1, tzinfo=timezone.utc)

    def test_epoch_millis_int(self):
        v = Video.model_validate({"publishedDate": 1262304000000})
        assert v.published_date == datetime(2010, 1, 1, tzinfo=timezone.utc)

    def test_empty_date(self):
        assert Video.model_validate({"endDate": ""}).end_date is None

    def test_bad_date(self):
        with pytest.raises(ValidationError):
            Video.model_validate({"creationDate": "yesterday"})

    def test_null_sequences(self):
        v = Video.model_validate({"tags": None, "renditions": None, "cuePoints": None})
        assert v.tags == ()
        assert v.renditions == ()
        assert v.cue_points == ()

    def test_null_custom_fields(self):
        assert Video.model_validate({"customFields": None}).custom_fields == {}

    def test_nested(self):
        v = Video.model_validate(
            {
                "renditions": [{"url": "http://r1", "encodingRate": 500000, "frameWidth": 640}],
                "videoFullLength": {"url": "http://full"},
                "cuePoints": [{"name": "ad", "time": 12.5, "forceStop": False}],
            }
        )
        assert isinstance(v.renditions[0], Rendition)
        assert v.renditions[0].encoding_rate == 500000
        assert v.video_full_length.url == "http://full"
        assert isinstance(v.cue_points[0], CuePoint)
        assert v.cue_points[0].time == 12.5

    def test_unknown_fields_ignored(self):
        v = Video.model_validate({"id": 1, "somethingNew": "x"})
        assert v.id == 1

    def test_frozen(self):
        v = Video(id=1)
        with pytest.raises(ValidationError):
            v.name = "changed"

    def test_dump_by_alias(self):
        data = Video(id=1, thumbnail_url="http://t").model_dump(by_alias=True)
        assert data["thumbnailURL"] == "http://t"


# --- Playlist / collections ---


class TestPlaylist:
    def test_fields(self):
        p = Playlist.model_validate(
            {
                "id": 9,
                "videoIds": [1, 2],
                "videos": [{"id": 1}, {"id": 2}],
                "playlistType": "EXPLICIT",
                "filterTags": None,
            }
        )
        assert p.video_ids == (1, 2)
        assert [v.id for v in p.videos] == [1, 2]
        assert p.playlist_type == "EXPLICIT"
        assert p.filter_tags == ()


class TestVideos:
    def test_defaults(self):
        page = Videos()
        assert page.items == ()
        assert page.total_count is None


# --- Options ---


class TestEndpointConfig:
    def test_defaults(self):
        e = EndpointConfig()
        assert (e.scheme, e.host, e.port, e.path, e.charset) == (
            "http",
            "api.brightcove.com",
            80,
            "/services/library",
            "UTF-8",
        )

    def test_frozen(self):
        with pytest.raises(ValidationError):
            EndpointConfig().host = "other"


class TestReadApiOptions:
    def test_defaults(self):
        o = ReadApiOptions()
        assert o.scheme == DEFAULT_SCHEME
        assert o.host == DEFAULT_HOST
        assert o.port == DEFAULT_PORT
        assert o.path == DEFAULT_PATH
        assert o.charset == DEFAULT_CHARSET
        assert o.enable_uds is False
        assert o.timeout is None

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("BC_READ_TOKEN", "env-token")
        monkeypatch.setenv("BC_READ_PORT", "8080")
        o = ReadApiOptions()
        assert o.token == "env-token"
        assert o.port == 8080

    def test_init_beats_env(self, monkeypatch):
        monkeypatch.setenv("BC_READ_HOST", "env.example.com")
        assert ReadApiOptions(host="init.example.com").host == "init.example.com"

    def test_yaml(self, tmp_path, monkeypatch):
        (tmp_path / "bc_read.yaml").write_text("host: yaml.example.com\nenable_uds: true\n")
        monkeypatch.chdir(tmp_path)
        o = ReadApiOptions()
        assert o.host == "yaml.example.com"
        assert o.enable_uds is True

    def test_env_beats_yaml(self, tmp_path, monkeypatch):
        (tmp_path / "bc_read.yaml").write_text("host: yaml.example.com\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BC_READ_HOST", "env.example.com")
        assert ReadApiOptions().host == "env.example.com"

    def test_endpoint(self):
        e = ReadApiOptions(scheme="https", host="h", port=443, path="/p").endpoint()
        assert e == EndpointConfig(scheme="https", host="h", port=443, path="/p")
