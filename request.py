"""HTTP request-line interpreter and request head model."""

from dataclasses import dataclass, field

ALLOWED_HTTP_VERSIONS = {"HTTP/1.1", "HTTP/1.0"}
RETRIEVAL_METHOD = "GET"
TRAVERSAL_MARKER = ".."


def parse_request_line(request_line: str) -> str | None:
    """Return the requested resource path, or None when the request is rejected.

    Only ``GET <path> HTTP/1.x`` is accepted. Any path containing a parent
    directory marker is rejected on the raw string, before resolution.
    """
    prefix = f"{RETRIEVAL_METHOD} "
    if not request_line.startswith(prefix):
        return None

    target, separator, http_version = request_line[len(prefix) :].rpartition(" ")
    if not separator or http_version not in ALLOWED_HTTP_VERSIONS:
        return None

    if TRAVERSAL_MARKER in target:
        return None

    if not target.startswith("/") or any(char.isspace() for char in target):
        return None

    return target


@dataclass(slots=True)
class HTTPRequest:
    request_line: str
    path: str | None
    headers: dict[str, str] = field(default_factory=dict)
    keep_alive: bool = False

    @property
    def method(self) -> str:
        return self.request_line.split(" ", 1)[0] or "-"

    @property
    def rejected(self) -> bool:
        return self.path is None

    @classmethod
    def from_bytes(cls, raw: bytes) -> "HTTPRequest":
        """Build a request view from raw head bytes. Never raises on bad input."""
        header_bytes = raw.split(b"\r\n\r\n", 1)[0]
        lines = header_bytes.decode("iso-8859-1").split("\r\n")
        request_line = lines[0] if lines else ""

        headers: dict[str, str] = {}
        for line in lines[1:]:
            if ":" not in line:
                continue
            name, value = line.split(":", 1)
            header_name = name.strip().lower()
            if header_name:
                headers[header_name] = value.strip()

        return cls(
            request_line=request_line,
            path=parse_request_line(request_line),
            headers=headers,
            keep_alive=_is_keep_alive(headers.get("connection")),
        )


def _is_keep_alive(connection_header: str | None) -> bool:
    if connection_header is None:
        return False
    return connection_header.strip().lower() == "keep-alive"
