"""Tests for bc_read.services.executor."""

import logging

import httpx
import pytest

from bc_read.core.errors import (
    ErrorKind,
    HttpStatusError,
    TransportError,
    UnparsableResponseError,
)
from bc_read.services.executor import CommandExecutor

URL = "http://api.brightcove.com:80/services/library?command=find_all_videos&token=secret."


def _executor(server) -> CommandExecutor:
    return CommandExecutor(httpx.Client(transport=httpx.MockTransport(server.handler)))


class TestGet:
    def test_returns_body(self, server):
        server.body = '{"items": []}'
        assert _executor(server).get(URL) == '{"items": []}'

    def test_issues_get(self, server):
        _executor(server).get(URL)
        assert server.requests[0].method == "GET"
        url = server.requests[0].url
        assert url.path == "/services/library"
        assert url.params["command"] == "find_all_videos"

    def test_decodes_with_charset(self, server):
        server.body = '{"name": "café"}'.encode("iso-8859-1")
        assert _executor(server).get(URL, "ISO-8859-1") == '{"name": "café"}'

    def test_invalid_bytes(self, server):
        server.body = b"\xff\xfe\xfa"
        with pytest.raises(UnparsableResponseError) as exc_info:
            _executor(server).get(URL, "UTF-8")
        assert exc_info.value.kind is ErrorKind.UNPARSABLE_RESPONSE


class TestErrorMapping:
    @pytest.mark.parametrize("status", [404, 500, 503])
    def test_status(self, server, status):
        server.status = status
        with pytest.raises(HttpStatusError) as exc_info:
            _executor(server).get(URL)
        assert exc_info.value.status_code == status
        assert exc_info.value.kind is ErrorKind.HTTP_ERROR_STATUS
        assert f"'{status}'" in exc_info.value.message

    def test_non_200_success_status(self, server):
        server.status = 204
        server.body = ""
        with pytest.raises(HttpStatusError):
            _executor(server).get(URL)

    def test_protocol_error(self, server):
        server.error = httpx.RemoteProtocolError("malformed response")
        with pytest.raises(TransportError) as exc_info:
            _executor(server).get(URL)
        assert exc_info.value.kind is ErrorKind.CLIENT_PROTOCOL_ERROR

    def test_connect_error(self, server):
        server.error = httpx.ConnectError("connection refused")
        with pytest.raises(TransportError) as exc_info:
            _executor(server).get(URL)
        assert exc_info.value.kind is ErrorKind.TRANSPORT_IO_ERROR

    def test_timeout(self, server):
        server.error = httpx.ReadTimeout("timed out")
        with pytest.raises(TransportError) as exc_info:
            _executor(server).get(URL)
        assert exc_info.value.kind is ErrorKind.TRANSPORT_IO_ERROR

    def test_corrupt_gzip_body(self):
        def handler(request):
            return httpx.Response(
                200, headers={"Content-Encoding": "gzip"}, content=b"not-gzip"
            )

        executor = CommandExecutor(httpx.Client(transport=httpx.MockTransport(handler)))
        with pytest.raises(TransportError) as exc_info:
            executor.get(URL)
        assert exc_info.value.kind is ErrorKind.TRANSPORT_IO_ERROR
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)

    def test_token_masked_in_details(self, server):
        server.error = httpx.ConnectError("connection refused")
        with pytest.raises(TransportError) as exc_info:
            _executor(server).get(URL)
        assert "secret." not in exc_info.value.details["url"]


class TestLogging:
    def test_debug_logs_masked_url(self, server, caplog):
        with caplog.at_level(logging.DEBUG, logger="bc_read"):
            _executor(server).get(URL)
        assert "token=***" in caplog.text
        assert "secret." not in caplog.text


class TestClose:
    def test_closes_own_client(self):
        executor = CommandExecutor()
        executor.close()
        assert executor.client.is_closed

    def test_leaves_shared_client_open(self, server):
        client = httpx.Client(transport=httpx.MockTransport(server.handler))
        CommandExecutor(client).close()
        assert not client.is_closed
        client.close()
