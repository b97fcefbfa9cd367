"""HTTP response model and serializer."""

from dataclasses import dataclass

REASON_PHRASES: dict[int, str] = {
    200: "OK",
    404: "Not Found",
    501: "Not Implemented",
}

NOT_FOUND_CONTENT = (
    "<html><head><title>404 Not Found</title></head><body>"
    "<h1>404 Not Found</h1>"
    "The requested resource could not be found on this server."
    "</body></html>"
)
NOT_IMPLEMENTED_CONTENT = (
    "<html><head><title>501 Not Implemented</title></head><body>"
    "<h1>501 Not Implemented</h1>"
    "The server either does not recognise the request method, "
    "or it lacks the ability to fulfill the request."
    "</body></html>"
)

KEEP_ALIVE_TOKEN = "Keep-Alive"
CLOSE_TOKEN = "close"


@dataclass(slots=True)
class HTTPResponse:
    status_code: int
    content_type: str = "text/html"
    body: bytes | str = b""
    keep_alive: bool = False

    def __post_init__(self) -> None:
        if self.status_code not in REASON_PHRASES:
            raise ValueError(f"Unsupported status code: {self.status_code}")
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")

    @property
    def reason_phrase(self) -> str:
        return REASON_PHRASES[self.status_code]

    @property
    def content_length(self) -> int:
        return len(self.body)

    @property
    def connection_token(self) -> str:
        return KEEP_ALIVE_TOKEN if self.keep_alive else CLOSE_TOKEN

    def to_bytes(self) -> bytes:
        """Serialize the response into HTTP/1.1 wire format bytes."""
        header_lines = [
            f"HTTP/1.1 {self.status_code} {self.reason_phrase}",
            f"Content-Type: {self.content_type}",
            f"Content-Length: {self.content_length}",
            f"Connection: {self.connection_token}",
        ]
        payload = bytearray("\r\n".join(header_lines).encode("iso-8859-1"))
        payload.extend(b"\r\n\r\n")
        payload.extend(self.body)
        return bytes(payload)


def not_found(*, keep_alive: bool = False) -> HTTPResponse:
    return HTTPResponse(
        status_code=404,
        content_type="text/html",
        body=NOT_FOUND_CONTENT,
        keep_alive=keep_alive,
    )


def not_implemented(*, keep_alive: bool = False) -> HTTPResponse:
    return HTTPResponse(
        status_code=501,
        content_type="text/html",
        body=NOT_IMPLEMENTED_CONTENT,
        keep_alive=keep_alive,
    )
