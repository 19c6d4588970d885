"""Tests for waypoint.server.sender — Response to ASGI messages."""

import pytest

from waypoint.errors import ConfigurationError
from waypoint.http.response import Response, json_response
from waypoint.server.sender import encode_headers, send_response


async def _capture(response: Response) -> list[dict]:
    sent: list[dict] = []

    async def send(message: dict) -> None:
        sent.append(message)

    await send_response(response, send)
    return sent


class TestSendResponse:
    async def test_start_then_body(self) -> None:
        start, body = await _capture(Response(body="Hello"))
        assert start["type"] == "http.response.start"
        assert start["status"] == 200
        assert body == {"type": "http.response.body", "body": b"Hello"}

    async def test_content_headers(self) -> None:
        start, _ = await _capture(json_response({"a": 1}))
        headers = dict(start["headers"])
        assert headers[b"content-type"] == b"application/json"
        assert headers[b"content-length"] == str(len(b'{"a": 1}')).encode()

    async def test_content_length_counts_bytes(self) -> None:
        start, body = await _capture(Response(body="café"))
        assert dict(start["headers"])[b"content-length"] == b"5"
        assert body["body"] == "café".encode()

    async def test_custom_headers_lowercased(self) -> None:
        start, _ = await _capture(Response().with_header("X-Item-Id", "7"))
        assert (b"x-item-id", b"7") in start["headers"]

    @pytest.mark.parametrize("status", [204, 304, 101])
    async def test_bodyless_statuses(self, status: int) -> None:
        start, body = await _capture(Response(body="ignored", status=status))
        assert start["status"] == status
        assert body["body"] == b""
        assert dict(start["headers"])[b"content-length"] == b"0"

    async def test_error_status_keeps_body(self) -> None:
        _, body = await _capture(Response(body="Not found", status=404))
        assert body["body"] == b"Not found"


class TestEncodeHeaders:
    def test_lowercases_names(self) -> None:
        raw = encode_headers(Response().with_header("X-Item-Id", "7"), 0)
        assert raw[0] == (b"content-type", b"text/plain; charset=utf-8")
        assert raw[1] == (b"content-length", b"0")
        assert raw[2] == (b"x-item-id", b"7")

    @pytest.mark.parametrize(
        "response",
        [
            Response().with_header("X-Unit", "€"),
            Response().with_header("X-Ünit€", "eur"),
            Response().with_content_type("text/€"),
        ],
    )
    def test_non_latin1_rejected(self, response: Response) -> None:
        with pytest.raises(ConfigurationError, match="not latin-1 encodable"):
            encode_headers(response, 0)
