"""Utility helpers shared across server modules."""

from pathlib import Path

from config import DEFAULT_DOCUMENT

CONTENT_TYPES: dict[str, str] = {
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".js": "application/javascript",
}
DEFAULT_CONTENT_TYPE = "text/plain"


def get_content_type(resource_path: str) -> str:
    suffix = Path(resource_path).suffix.lower()
    return CONTENT_TYPES.get(suffix, DEFAULT_CONTENT_TYPE)


def resolve_document_path(resource_path: str, document_root: str | Path) -> Path:
    """Map an already-validated resource path onto the document root.

    The root path is an alias for the default document. Other paths are
    appended verbatim beneath the root.
    """
    if resource_path in ("", "/"):
        resource_path = DEFAULT_DOCUMENT
    return Path(document_root) / resource_path.lstrip("/")
