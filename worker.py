"""Per-connection request loop for keep-alive sessions."""

from __future__ import annotations

import json
import logging
import socket
import time
from pathlib import Path

from config import DOCUMENT_ROOT, LOG_FORMAT
from handlers.documents import serve_document
from request import HTTPRequest
from response import HTTPResponse
from socket_handler import (
    HTTPReadError,
    force_close,
    read_http_request_message,
    write_http_response,
)

logger = logging.getLogger(__name__)


class ConnectionWorker:
    """Owns one accepted connection for the lifetime of its session.

    Each cycle waits for a request head, resolves it against the document
    root, sends the full response, and loops only while the client asked for
    keep-alive. Any read or send failure ends the session; nothing raised in
    here reaches the listener.
    """

    def __init__(
        self,
        client_socket: socket.socket,
        address: tuple[str, int],
        *,
        document_root: str | Path = DOCUMENT_ROOT,
        connection_id: int = 0,
        log_format: str = LOG_FORMAT,
    ) -> None:
        self.client_socket = client_socket
        self.address = address
        self.document_root = Path(document_root)
        self.connection_id = connection_id
        self.log_format = log_format
        self.requests_served = 0
        self._carry = b""

    def run(self) -> None:
        try:
            self._serve()
        except Exception:
            logger.exception("Unhandled error on connection %s", self.connection_id)
        finally:
            force_close(self.client_socket)

    def _serve(self) -> None:
        while True:
            started_at = time.perf_counter()
            raw_request = self._await_request()
            if not raw_request:
                return

            request = HTTPRequest.from_bytes(raw_request)
            response = serve_document(request, self.document_root)
            if not self._respond(request, response, len(raw_request), started_at):
                return
            if not response.keep_alive:
                return

    def _await_request(self) -> bytes:
        try:
            raw_request, self._carry = read_http_request_message(
                self.client_socket, self._carry
            )
        except HTTPReadError as exc:
            logger.debug("Read failed on connection %s: %s", self.connection_id, exc)
            return b""
        except OSError as exc:
            logger.debug("Socket error on connection %s: %s", self.connection_id, exc)
            return b""
        return raw_request

    def _respond(
        self,
        request: HTTPRequest,
        response: HTTPResponse,
        bytes_in: int,
        started_at: float,
    ) -> bool:
        payload = response.to_bytes()
        try:
            write_http_response(self.client_socket, payload)
        except OSError as exc:
            logger.debug("Send failed on connection %s: %s", self.connection_id, exc)
            return False

        self.requests_served += 1
        self._record_and_log(
            request=request,
            response=response,
            bytes_in=bytes_in,
            bytes_out=len(payload),
            started_at=started_at,
        )
        return True

    def _record_and_log(
        self,
        *,
        request: HTTPRequest,
        response: HTTPResponse,
        bytes_in: int,
        bytes_out: int,
        started_at: float,
    ) -> None:
        duration_ms = (time.perf_counter() - started_at) * 1000
        event = {
            "client": self.address[0],
            "method": request.method,
            "path": request.path or "-",
            "status": response.status_code,
            "connection_id": self.connection_id,
            "request_id": self.requests_served,
            "bytes_in": bytes_in,
            "bytes_out": bytes_out,
            "latency_ms": round(duration_ms, 3),
            "connection_reused": self.requests_served > 1,
        }
        if self.log_format == "json":
            logger.info(json.dumps(event, sort_keys=True))
            return

        logger.info(
            (
                "client=%s method=%s path=%s status=%s "
                "connection_id=%s request_id=%s bytes_in=%s bytes_out=%s "
                "duration_ms=%.2f connection_reused=%s"
            ),
            event["client"],
            event["method"],
            event["path"],
            event["status"],
            event["connection_id"],
            event["request_id"],
            event["bytes_in"],
            event["bytes_out"],
            duration_ms,
            event["connection_reused"],
        )
