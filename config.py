"""Configuration constants for the keep-alive file server."""

HOST: str = "0.0.0.0"
PORT: int = 8080
DOCUMENT_ROOT: str = "web"
DEFAULT_DOCUMENT: str = "/index.html"
BUFFER_SIZE: int = 4096
MAX_HEADER_BYTES: int = 16_384
MAX_BODY_BYTES: int = 524_288
LISTEN_BACKLOG: int = 10
ACCEPT_TIMEOUT_SECS: float = 0.2
LOG_FORMAT: str = "plain"
