"""Unit tests for response classification."""

import httpx
import pytest
from structlog.testing import capture_logs

from ether.codec import JsonDecoder
from ether.errors import BadResponseCodeError, JsonDecodingError
from ether.response import Decoded, Raw, Response, classify_response, is_success_status
from tests.helpers.models import Echo


REQUEST = httpx.Request(
    "GET",
    "https://api.example.com/echo?marco=1",
    headers={"Authorization": "Bearer secret", "Accept": "application/json"},
)


def make_response(status_code: int, content: bytes = b"") -> httpx.Response:
    """Build a response bound to REQUEST."""
    return httpx.Response(status_code, content=content, request=REQUEST)


class TestIsSuccessStatus:
    """Tests for the 2xx check."""

    @pytest.mark.parametrize(("code", "expected"), [(199, False), (200, True), (299, True), (300, False), (404, False)])
    def test_bounds(self, code: int, expected: bool) -> None:
        """Test [200, 300) is the success range."""
        assert is_success_status(code) is expected


class TestClassifyResponse:
    """Tests for classify_response."""

    def test_decoded(self) -> None:
        """Test 2xx responses decode into the requested type."""
        result = classify_response(
            make_response(200, b'{"marco": "polo"}'), REQUEST, Echo, JsonDecoder()
        )

        assert result.data == Decoded(Echo(marco="polo"))
        assert result.decoded == Echo(marco="polo")
        assert result.raw is None
        assert result.status_code == 200

    def test_raw(self) -> None:
        """Test 2xx responses stay raw without a decode type."""
        result = classify_response(make_response(201, b"\x89PNG"), REQUEST, None, JsonDecoder())

        assert result.data == Raw(b"\x89PNG")
        assert result.raw == b"\x89PNG"
        assert result.decoded is None

    def test_empty_raw_body(self) -> None:
        """Test an empty 204 body is raw empty bytes."""
        result = classify_response(make_response(204), REQUEST, None, JsonDecoder())

        assert result.raw == b""

    @pytest.mark.parametrize("code", [301, 404, 500])
    def test_bad_status(self, code: int) -> None:
        """Test non-2xx statuses raise BadResponseCodeError."""
        with capture_logs(), pytest.raises(BadResponseCodeError) as exc_info:
            classify_response(make_response(code), REQUEST, Echo, JsonDecoder())

        assert exc_info.value.status_code == code

    def test_bad_status_logged_redacted(self) -> None:
        """Test the error log describes the request without secrets."""
        with capture_logs() as logs, pytest.raises(BadResponseCodeError):
            classify_response(make_response(500), REQUEST, None, JsonDecoder())

        assert len(logs) == 1
        entry = logs[0]
        assert entry["event"] == "ether_bad_response_code"
        assert entry["log_level"] == "error"
        assert entry["status_code"] == 500
        assert entry["request"]["headers"]["authorization"] == "[REDACTED]"
        assert entry["request"]["query_items"] == [("marco", "1")]
        assert "5xx" in entry["recovery_suggestion"]

    def test_status_checked_before_decoding(self) -> None:
        """Test undecodable error bodies still classify as bad status."""
        with capture_logs(), pytest.raises(BadResponseCodeError):
            classify_response(make_response(404, b"<html>"), REQUEST, Echo, JsonDecoder())

    def test_decoding_failure(self) -> None:
        """Test mismatched 2xx bodies raise JsonDecodingError."""
        with pytest.raises(JsonDecodingError) as exc_info:
            classify_response(make_response(200, b'{"polo": 1}'), REQUEST, Echo, JsonDecoder())

        assert exc_info.value.underlying is not None


class TestResponse:
    """Tests for the Response value."""

    def test_reason_phrase(self) -> None:
        """Test reason phrases come from the status code."""
        response: Response[bytes] = Response(data=Raw(b""), status_code=404, headers=httpx.Headers())

        assert response.reason_phrase == "Not Found"
        assert response.is_success is False
