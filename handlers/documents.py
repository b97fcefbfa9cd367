"""Document root handler: maps a parsed request onto a file response."""

import logging
from pathlib import Path

from request import HTTPRequest
from response import HTTPResponse, not_found, not_implemented
from utils import get_content_type, resolve_document_path

logger = logging.getLogger(__name__)


def serve_document(request: HTTPRequest, document_root: str | Path) -> HTTPResponse:
    if request.path is None:
        return not_implemented(keep_alive=request.keep_alive)

    file_path = resolve_document_path(request.path, document_root)
    try:
        with file_path.open("rb") as file_obj:
            content = file_obj.read()
    except (OSError, ValueError) as exc:
        logger.debug("Cannot open %s: %s", file_path, exc)
        return not_found(keep_alive=request.keep_alive)

    return HTTPResponse(
        status_code=200,
        content_type=get_content_type(file_path.name),
        body=content,
        keep_alive=request.keep_alive,
    )
