"""Unit tests for parameter encodings."""

import gzip
import json

import httpx
import pytest

from ether.constants import CONTENT_TYPE_FORM_URLENCODED, CONTENT_TYPE_JSON_UTF8
from ether.encoding import (
    apply_encoding,
    encode_query_items,
    gzip_encoded,
    json_body,
    parameter_string,
    url_query,
)
from ether.errors import BadQueryItemError, JsonEncodingError
from ether.models import GZIP, JSON, URL_QUERY, CustomEncoding


BASE = httpx.URL("https://api.example.com/search")


class TestParameterString:
    """Tests for parameter value formatting."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, "true"), (False, "false"), (3, "3"), (1.5, "1.5"), ("a b", "a b")],
    )
    def test_values(self, value: object, expected: str) -> None:
        """Test canonical string forms."""
        assert parameter_string(value) == expected


class TestUrlQuery:
    """Tests for URL query encoding."""

    def test_appends_items(self) -> None:
        """Test parameters become percent-encoded query items."""
        encoded = url_query(BASE, {"q": "fish & chips", "page": 2})

        assert encoded.url.query == b"q=fish%20%26%20chips&page=2"
        assert encoded.url.params["q"] == "fish & chips"
        assert encoded.headers == {"Content-Type": CONTENT_TYPE_FORM_URLENCODED}
        assert encoded.content is None

    def test_preserves_existing_query(self) -> None:
        """Test existing query items are kept ahead of new ones."""
        url = httpx.URL("https://api.example.com/search?lang=en")

        encoded = url_query(url, {"q": "x"})

        assert encoded.url.query == b"lang=en&q=x"

    def test_empty_parameters_keep_url(self) -> None:
        """Test an empty mapping leaves the URL unchanged."""
        encoded = url_query(BASE, {})

        assert encoded.url == BASE
        assert encoded.headers["Content-Type"] == CONTENT_TYPE_FORM_URLENCODED

    def test_reserved_characters_escaped(self) -> None:
        """Test that '=', '&', '/' and non-ASCII are escaped in keys and values."""
        query = encode_query_items({"a=b": "c&d/é"})

        assert query == "a%3Db=c%26d%2F%C3%A9"

    @pytest.mark.parametrize("parameters", [{"": "value"}, {"key": None}, {1: "value"}])
    def test_bad_query_items(self, parameters: dict[object, object]) -> None:
        """Test keys that are not non-empty strings and None values."""
        with pytest.raises(BadQueryItemError):
            url_query(BASE, parameters)  # type: ignore[arg-type]


class TestJsonEncodings:
    """Tests for JSON and gzip encodings."""

    def test_json_body_pretty_printed(self) -> None:
        """Test parameters are written as a pretty-printed object."""
        body = json_body({"name": "Ether", "tags": ["a", "b"]})

        assert body.startswith(b"{\n  ")
        assert json.loads(body) == {"name": "Ether", "tags": ["a", "b"]}

    def test_json_body_keeps_unicode(self) -> None:
        """Test non-ASCII text is emitted as UTF-8."""
        assert "naïve".encode() in json_body({"word": "naïve"})

    def test_json_body_unserializable(self) -> None:
        """Test unserializable values raise JsonEncodingError."""
        with pytest.raises(JsonEncodingError) as exc_info:
            json_body({"value": object()})

        assert isinstance(exc_info.value.underlying, TypeError)

    def test_json_encoding(self) -> None:
        """Test JSON encoding sets Content-Type and leaves the URL alone."""
        encoded = apply_encoding(JSON, BASE, {"a": 1})

        assert encoded.url == BASE
        assert encoded.headers == {"Content-Type": CONTENT_TYPE_JSON_UTF8}
        assert json.loads(encoded.content or b"") == {"a": 1}

    def test_gzip_encoding(self) -> None:
        """Test gzip encoding compresses the JSON body."""
        encoded = gzip_encoded(BASE, {"a": 1})

        assert encoded.headers["Content-Encoding"] == "gzip"
        assert encoded.headers["Content-Type"] == CONTENT_TYPE_JSON_UTF8
        assert json.loads(gzip.decompress(encoded.content or b"")) == {"a": 1}

    def test_gzip_matches_json(self) -> None:
        """Test the decompressed gzip body is byte-identical to the JSON body."""
        parameters = {"marco": "polo", "count": 3, "flag": True}

        gzipped = apply_encoding(GZIP, BASE, parameters)
        plain = apply_encoding(JSON, BASE, parameters)

        assert gzip.decompress(gzipped.content or b"") == plain.content

    def test_empty_parameters_encode_empty_object(self) -> None:
        """Test an empty mapping still yields a JSON object."""
        encoded = apply_encoding(GZIP, BASE, {})

        assert json.loads(gzip.decompress(encoded.content or b"")) == {}


class TestApplyEncoding:
    """Tests for encoding dispatch."""

    def test_url_query_dispatch(self) -> None:
        """Test URL query encoding is selected."""
        encoded = apply_encoding(URL_QUERY, BASE, {"k": "v"})

        assert encoded.url.params["k"] == "v"

    def test_custom_sets_only_content_type(self) -> None:
        """Test custom encodings leave URL and body untouched."""
        encoded = apply_encoding(CustomEncoding("text/csv"), BASE, {"ignored": 1})

        assert encoded.url == BASE
        assert encoded.headers == {"Content-Type": "text/csv"}
        assert encoded.content is None
