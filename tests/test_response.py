"""Unit tests for HTTP response serialization."""

import pytest

from response import (
    NOT_FOUND_CONTENT,
    NOT_IMPLEMENTED_CONTENT,
    HTTPResponse,
    not_found,
    not_implemented,
)


def test_response_serialization_has_exact_header_set() -> None:
    response = HTTPResponse(status_code=200, content_type="text/css", body=b"p{}")

    raw = response.to_bytes()

    assert raw == (
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: text/css\r\n"
        b"Content-Length: 3\r\n"
        b"Connection: close\r\n"
        b"\r\n"
        b"p{}"
    )


def test_keep_alive_response_advertises_keep_alive() -> None:
    response = HTTPResponse(status_code=200, body="hi", keep_alive=True)

    assert b"Connection: Keep-Alive\r\n" in response.to_bytes()


def test_binary_body_is_copied_verbatim() -> None:
    body = bytes(range(256)) * 4

    raw = HTTPResponse(status_code=200, content_type="image/png", body=body).to_bytes()

    head, payload = raw.split(b"\r\n\r\n", 1)
    assert b"Content-Length: 1024" in head
    assert payload == body


def test_not_found_uses_fixed_diagnostic_document() -> None:
    raw = not_found().to_bytes()

    assert raw.startswith(b"HTTP/1.1 404 Not Found\r\n")
    assert b"Content-Type: text/html\r\n" in raw
    assert f"Content-Length: {len(NOT_FOUND_CONTENT)}".encode() in raw
    assert raw.endswith(NOT_FOUND_CONTENT.encode())


def test_not_implemented_uses_fixed_diagnostic_document() -> None:
    response = not_implemented(keep_alive=True)

    assert response.reason_phrase == "Not Implemented"
    assert response.body == NOT_IMPLEMENTED_CONTENT.encode()
    assert response.to_bytes().startswith(b"HTTP/1.1 501 Not Implemented\r\n")


def test_unknown_status_code_raises_value_error() -> None:
    with pytest.raises(ValueError, match="Unsupported status code"):
        HTTPResponse(status_code=500)
