"""Signal-triggered shutdown: close every connection, then join every worker."""

from __future__ import annotations

import logging
import signal
import socket
import threading

from registry import ConnectionRegistry

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownCoordinator:
    """Runs the drain on its own thread once the shutdown event is set.

    The event is the only thing a signal handler touches. Connections are
    closed before workers are joined, because a worker blocked in recv only
    wakes when its socket is shut down.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        server_socket: socket.socket,
        shutdown_event: threading.Event,
    ) -> None:
        self._registry = registry
        self._server_socket = server_socket
        self._shutdown_event = shutdown_event
        self._thread: threading.Thread | None = None
        self._finished = threading.Event()

    @property
    def finished(self) -> bool:
        return self._finished.is_set()

    def start(self) -> None:
        self._thread = threading.Thread(
            target=self._run,
            name="shutdown-coordinator",
            daemon=True,
        )
        self._thread.start()

    def join(self, timeout: float | None = None) -> bool:
        if self._thread is not None:
            self._thread.join(timeout=timeout)
        return self.finished

    def _run(self) -> None:
        self._shutdown_event.wait()
        self.drain()

    def drain(self) -> None:
        if self._finished.is_set():
            return
        logger.info("Shutdown requested, draining connections")
        self._registry.drain_connections()
        self._registry.drain_workers()
        self._server_socket.close()
        logger.info("Shutdown complete")
        self._finished.set()


def install_signal_handlers(shutdown_event: threading.Event) -> dict[int, object]:
    """Route SIGINT/SIGTERM to the shutdown event. Main thread only."""

    def _handle_signal(signum: int, _frame: object) -> None:
        shutdown_event.set()

    previous: dict[int, object] = {}
    for signum in SHUTDOWN_SIGNALS:
        previous[signum] = signal.signal(signum, _handle_signal)
    return previous


def restore_signal_handlers(previous: dict[int, object]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)
