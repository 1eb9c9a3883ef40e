"""
Unit tests for HTTP response building.
"""

import json
from datetime import datetime, timezone
from http import HTTPStatus

import pytest

from pingpong.envelope import Envelope
from pingpong.http.response import (
    HTTPResponse,
    ResponseBuilder,
    envelope_response,
)


class TestHTTPResponse:
    """Tests for HTTPResponse class."""

    def test_status_line(self):
        """Test status line generation."""
        response = HTTPResponse(status=HTTPStatus.OK)
        assert response.status_line == "HTTP/1.1 200 OK"

    def test_to_bytes_includes_headers(self):
        """Test that to_bytes includes all headers."""
        response = HTTPResponse(
            status=HTTPStatus.OK,
            headers={"X-Custom": "value"},
            body=b"test",
        )

        result = response.to_bytes()

        assert result.startswith(b"HTTP/1.1 200 OK\r\n")
        assert b"X-Custom: value\r\n" in result
        assert b"Content-Length: 4\r\n" in result
        assert result.endswith(b"\r\n\r\ntest")

    def test_content_length_counts_bytes(self):
        """Test that Content-Length is the encoded length, not characters."""
        response = HTTPResponse(body="héllo".encode("utf-8"))
        assert b"Content-Length: 6\r\n" in response.to_bytes()

    def test_explicit_content_length_kept(self):
        response = HTTPResponse(headers={"Content-Length": "99"}, body=b"x")
        assert response.to_bytes().count(b"Content-Length") == 1
        assert b"Content-Length: 99\r\n" in response.to_bytes()


class TestResponseBuilder:
    """Tests for ResponseBuilder class."""

    def test_json_body(self):
        """Test JSON body and content type."""
        response = ResponseBuilder().json('{"a":1}').build()

        assert response.headers["Content-Type"] == "application/json"
        assert json.loads(response.body) == {"a": 1}

    def test_cors_headers(self):
        """Test CORS header setting."""
        response = ResponseBuilder().cors(
            methods=["POST", "GET"],
            headers=["Content-Type"],
        ).build()

        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Access-Control-Allow-Methods"] == "POST, GET"
        assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"
        assert "Access-Control-Max-Age" not in response.headers

    def test_close_connection(self):
        """Test connection close header."""
        response = ResponseBuilder().close_connection().build()
        assert response.headers["Connection"] == "close"

    def test_build_copies_headers(self):
        """Test that later builder calls do not leak into built responses."""
        builder = ResponseBuilder().header("X-One", "1")
        response = builder.build()
        builder.header("X-Two", "2")

        assert "X-Two" not in response.headers


class TestEnvelopeResponse:
    """Tests for envelope_response()."""

    @pytest.fixture
    def envelope(self) -> Envelope:
        return Envelope(
            input="ping",
            output="pong",
            timestamp=datetime(2026, 1, 15, 12, 30, 45, tzinfo=timezone.utc),
        )

    def test_exact_wire_format(self, envelope: Envelope):
        """Test the complete response, header order included."""
        body = envelope.to_json().encode("utf-8")
        expected = (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: application/json\r\n"
            b"Access-Control-Allow-Origin: *\r\n"
            b"Access-Control-Allow-Methods: POST, GET, OPTIONS\r\n"
            b"Access-Control-Allow-Headers: Content-Type\r\n"
            + f"Content-Length: {len(body)}\r\n".encode()
            + b"Connection: close\r\n"
            b"\r\n"
            + body
        )

        assert envelope_response(envelope).to_bytes() == expected

    def test_body_is_envelope(self, envelope: Envelope):
        response = envelope_response(envelope)
        assert Envelope.from_json(response.body.decode("utf-8")) == envelope
