"""
Unit tests for HTTP response serialization.
"""

import pytest

from minihttp.http.headers import Headers
from minihttp.http.response import (
    HTTPResponse,
    text_response,
    empty_response,
    error_response,
)
from minihttp.http.status_codes import HTTPStatus, status_text


class TestHTTPResponse:
    """Tests for HTTPResponse class."""

    def test_status_line(self):
        """Test status line generation."""
        assert HTTPResponse(status=HTTPStatus.OK).status_line == "HTTP/1.1 200 OK"
        assert HTTPResponse(status=HTTPStatus.NOT_FOUND).status_line == "HTTP/1.1 404 Not Found"
        assert HTTPResponse(status=502).status_line == "HTTP/1.1 502 Bad Gateway"

    def test_unknown_status_has_empty_text(self):
        assert HTTPResponse(status=418).status_line == "HTTP/1.1 418 "

    def test_empty_body_serialization(self):
        """Test that an empty body ends right after the blank line."""
        response = empty_response(HTTPStatus.NOT_FOUND)

        assert response.to_bytes() == b"HTTP/1.1 404 Not Found\r\n\r\n"

    def test_body_gets_trailing_crlf(self):
        response = HTTPResponse(
            status=HTTPStatus.OK,
            headers=Headers({"Content-Type": "text/plain"}),
            body=b"abc",
        )

        assert response.to_bytes() == (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: text/plain\r\n"
            b"\r\n"
            b"abc\r\n"
        )

    def test_to_bytes_includes_every_header_once(self):
        response = HTTPResponse().set_header("X-One", "1").set_header("x-one", "2")
        response.set_header("X-Two", "2")

        result = response.to_bytes()

        assert result.count(b"x-one: 2\r\n") == 1
        assert b"X-One: 1" not in result
        assert b"X-Two: 2\r\n" in result

    def test_to_bytes_does_not_add_headers(self):
        """Test that serialization never invents Content-Length, Date or Server."""
        result = HTTPResponse(body=b"hello").to_bytes()

        assert result == b"HTTP/1.1 200 OK\r\n\r\nhello\r\n"

    def test_set_content_length_only_for_non_empty_body(self):
        with_body = HTTPResponse(body=b"hello world").set_content_length()
        without_body = HTTPResponse().set_content_length()

        assert with_body.headers.get("Content-Length") == "11"
        assert "Content-Length" not in without_body.headers

    def test_set_body_encodes_text(self):
        response = HTTPResponse().set_body("héllo")

        assert response.body == "héllo".encode("utf-8")


class TestConvenienceFunctions:

    def test_text_response(self):
        response = text_response("abc")

        assert response.status == HTTPStatus.OK
        assert response.headers.get("Content-Type") == "text/plain"
        assert response.body == b"abc"

    def test_empty_response_has_no_headers(self):
        response = empty_response(HTTPStatus.CREATED)

        assert response.status == HTTPStatus.CREATED
        assert len(response.headers) == 0
        assert response.body == b""

    def test_error_response(self):
        response = error_response("invalid request line parts: 2")

        assert response.status == HTTPStatus.BAD_GATEWAY
        assert response.body == b"invalid request line parts: 2"
        assert response.headers.get("Content-Length") == str(len(response.body))


class TestStatusText:

    @pytest.mark.parametrize("code,text", [
        (200, "OK"),
        (201, "Created"),
        (400, "Bad Request"),
        (404, "Not Found"),
        (502, "Bad Gateway"),
        (500, ""),
        (999, ""),
    ])
    def test_status_text(self, code: int, text: str):
        assert status_text(code) == text
