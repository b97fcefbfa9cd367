"""Process-wide tracking of live client sockets and worker threads."""

from __future__ import annotations

import logging
import socket
import threading

from socket_handler import force_close

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """Lock-guarded registry used only to coordinate shutdown.

    Entries are appended on registration and removed only by the drain.
    Finished workers leave stale entries behind; closing an already-closed
    socket and joining a finished thread are both no-ops.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._connections: list[socket.socket] = []
        self._workers: list[threading.Thread] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    @property
    def connection_count(self) -> int:
        with self._lock:
            return len(self._connections)

    @property
    def worker_count(self) -> int:
        with self._lock:
            return len(self._workers)

    @property
    def workers(self) -> tuple[threading.Thread, ...]:
        with self._lock:
            return tuple(self._workers)

    def register(self, client_socket: socket.socket, worker: threading.Thread) -> bool:
        """Track a connection with its worker and start the worker.

        Returns False once the drain has begun; the caller still owns the
        socket in that case and must close it.
        """
        if worker.is_alive() or worker.ident is not None:
            raise ValueError("worker must be registered before it is started")

        with self._lock:
            if self._closed:
                return False
            self._connections.append(client_socket)
            self._workers.append(worker)
            worker.start()
        return True

    def drain_connections(self) -> int:
        with self._lock:
            self._closed = True
            connections, self._connections = self._connections, []

        for client_socket in connections:
            force_close(client_socket)
        logger.info("Closed %d tracked connection(s)", len(connections))
        return len(connections)

    def drain_workers(self) -> int:
        with self._lock:
            self._closed = True
            workers, self._workers = self._workers, []

        for worker in workers:
            worker.join()
        logger.info("Joined %d worker thread(s)", len(workers))
        return len(workers)
