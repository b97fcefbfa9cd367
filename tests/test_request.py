"""Unit tests for request-line interpretation and request head parsing."""

import pytest

from request import HTTPRequest, parse_request_line


def test_get_request_line_returns_resource_path() -> None:
    assert parse_request_line("GET /index.html HTTP/1.1") == "/index.html"
    assert parse_request_line("GET / HTTP/1.0") == "/"


@pytest.mark.parametrize(
    "request_line",
    [
        "POST / HTTP/1.1",
        "HEAD /index.html HTTP/1.1",
        "get / HTTP/1.1",
        "GETX / HTTP/1.1",
        "",
        "GET",
    ],
)
def test_non_retrieval_requests_are_rejected(request_line: str) -> None:
    assert parse_request_line(request_line) is None


@pytest.mark.parametrize(
    "request_line",
    [
        "GET /../secret HTTP/1.1",
        "GET /docs/../../etc/passwd HTTP/1.1",
        "GET /.. HTTP/1.1",
        "GET /a..b HTTP/1.1",
    ],
)
def test_traversal_marker_is_rejected(request_line: str) -> None:
    assert parse_request_line(request_line) is None


@pytest.mark.parametrize(
    "request_line",
    [
        "GET /index.html",
        "GET /index.html HTTP/2",
        "GET  HTTP/1.1",
        "GET index.html HTTP/1.1",
        "GET /two words HTTP/1.1",
    ],
)
def test_malformed_request_lines_are_rejected(request_line: str) -> None:
    assert parse_request_line(request_line) is None


def test_from_bytes_reads_keep_alive_header() -> None:
    raw = b"GET /style.css HTTP/1.1\r\nHost: localhost\r\nConnection: Keep-Alive\r\n\r\n"

    request = HTTPRequest.from_bytes(raw)

    assert request.path == "/style.css"
    assert request.method == "GET"
    assert request.headers["host"] == "localhost"
    assert request.keep_alive is True


@pytest.mark.parametrize("value", ["keep-alive", "KEEP-ALIVE", " Keep-Alive "])
def test_keep_alive_match_is_case_insensitive(value: str) -> None:
    raw = f"GET / HTTP/1.1\r\nConnection: {value}\r\n\r\n".encode("ascii")

    assert HTTPRequest.from_bytes(raw).keep_alive is True


@pytest.mark.parametrize(
    "raw",
    [
        b"GET / HTTP/1.1\r\n\r\n",
        b"GET / HTTP/1.1\r\nConnection: close\r\n\r\n",
        b"GET / HTTP/1.1\r\nConnection: keep-alive, Upgrade\r\n\r\n",
    ],
)
def test_connection_defaults_to_close(raw: bytes) -> None:
    assert HTTPRequest.from_bytes(raw).keep_alive is False


def test_unsupported_method_produces_rejected_request() -> None:
    request = HTTPRequest.from_bytes(b"POST / HTTP/1.1\r\nContent-Length: 0\r\n\r\n")

    assert request.rejected is True
    assert request.method == "POST"


def test_malformed_header_lines_are_ignored() -> None:
    raw = b"GET / HTTP/1.1\r\nnot-a-header\r\nConnection: Keep-Alive\r\n\r\n"

    request = HTTPRequest.from_bytes(raw)

    assert request.path == "/"
    assert request.keep_alive is True
    assert "not-a-header" not in request.headers


def test_garbage_bytes_never_raise() -> None:
    request = HTTPRequest.from_bytes(b"\xff\xfe\x00garbage\r\n\r\n")

    assert request.rejected is True
