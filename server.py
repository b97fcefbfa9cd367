"""Main HTTP server entry point and connection lifecycle orchestration."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
import threading
from pathlib import Path

from config import (
    ACCEPT_TIMEOUT_SECS,
    DOCUMENT_ROOT,
    HOST,
    LISTEN_BACKLOG,
    LOG_FORMAT,
    PORT,
)
from registry import ConnectionRegistry
from shutdown import ShutdownCoordinator, install_signal_handlers, restore_signal_handlers
from socket_handler import force_close
from worker import ConnectionWorker

logger = logging.getLogger(__name__)


class HTTPServer:
    """Thread-per-connection file server.

    ``start`` blocks in the accept loop until ``shutdown_event`` is set,
    then returns once every tracked connection is closed and every worker
    thread has been joined. An instance serves a single ``start`` call.
    """

    def __init__(
        self,
        host: str = HOST,
        port: int = PORT,
        *,
        document_root: str | Path = DOCUMENT_ROOT,
        log_format: str = LOG_FORMAT,
    ) -> None:
        self.host = host
        self.port = port
        self.document_root = Path(document_root)
        self.log_format = log_format

        self.registry = ConnectionRegistry()
        self.shutdown_event = threading.Event()
        self._server_socket: socket.socket | None = None
        self._coordinator: ShutdownCoordinator | None = None
        self._next_connection_id = 0
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Bind, listen and accept until shutdown has fully drained."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server_socket:
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind((self.host, self.port))
            server_socket.listen(LISTEN_BACKLOG)
            server_socket.settimeout(ACCEPT_TIMEOUT_SECS)
            self._server_socket = server_socket

            coordinator = ShutdownCoordinator(
                self.registry,
                server_socket,
                self.shutdown_event,
            )
            self._coordinator = coordinator
            coordinator.start()

            self.port = server_socket.getsockname()[1]
            self._running = True
            logger.info(
                "Serving %s on %s:%s",
                self.document_root,
                self.host,
                self.port,
            )
            try:
                self._accept_loop(server_socket)
            finally:
                self.shutdown_event.set()
                coordinator.join()
                self._running = False
                self._server_socket = None

    def stop(self) -> None:
        """Request shutdown. The coordinator thread performs the drain."""
        self.shutdown_event.set()

    def _accept_loop(self, server_socket: socket.socket) -> None:
        while not self.shutdown_event.is_set():
            try:
                client_socket, address = server_socket.accept()
            except socket.timeout:
                continue
            except OSError as exc:
                if self.shutdown_event.is_set() or server_socket.fileno() == -1:
                    break
                logger.warning("accept() failed: %s", exc)
                self.shutdown_event.wait(ACCEPT_TIMEOUT_SECS)
                continue

            self._spawn_worker(client_socket, address)

    def _spawn_worker(self, client_socket: socket.socket, address: tuple[str, int]) -> None:
        client_socket.settimeout(None)
        self._next_connection_id += 1
        worker = ConnectionWorker(
            client_socket,
            address,
            document_root=self.document_root,
            connection_id=self._next_connection_id,
            log_format=self.log_format,
        )
        thread = threading.Thread(
            target=worker.run,
            name=f"http-conn-{self._next_connection_id}",
            daemon=True,
        )
        if not self.registry.register(client_socket, thread):
            logger.debug("Dropping connection from %s: shutting down", address[0])
            force_close(client_socket)


def _port_number(value: str) -> int:
    try:
        port = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid port number: {value!r}") from exc
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(f"illegal port number: {port}")
    return port


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Serve files from a document root over HTTP/1.1 with keep-alive",
    )
    parser.add_argument("port", type=_port_number, help="TCP port in the range 1-65535")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--document-root", default=DOCUMENT_ROOT)
    parser.add_argument("--log-format", choices=["plain", "json"], default=LOG_FORMAT)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    server = HTTPServer(
        host=args.host,
        port=args.port,
        document_root=args.document_root,
        log_format=args.log_format,
    )
    previous_handlers = install_signal_handlers(server.shutdown_event)
    try:
        server.start()
    except OSError as exc:
        logger.error("Cannot listen on %s:%s: %s", args.host, args.port, exc)
        return 1
    finally:
        restore_signal_handlers(previous_handlers)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
