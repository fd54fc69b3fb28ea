# syncserver/listener.py
from __future__ import annotations

import logging
import socket
import threading
from pathlib import Path
from typing import Callable, Optional, Union

from livesync.services.session import Session
from livesync.services.streams import ByteStream, SocketStream

log = logging.getLogger(__name__)

Address = Union[str, bytes]


def endpoint_address(name: str, socket_path: Optional[Path] = None) -> Address:
    """
    Filesystem socket when a path is given, otherwise the abstract namespace
    (leading NUL byte, Linux only) keyed by the endpoint name.
    """
    if socket_path is not None:
        return str(socket_path)
    return "\0" + name


class LiveSyncListener:
    """
    Accept loop on a local endpoint. Every accepted connection runs its own
    Session on a daemon thread; the loop never waits for a session to finish.
    stop() only refuses new connections, sessions in flight complete on their own.
    """

    def __init__(
        self,
        address: Address,
        session_factory: Callable[[ByteStream], Session],
        backlog: int = 16,
        poll_sec: float = 0.5,
    ):
        self.address = address
        self.session_factory = session_factory
        self.backlog = backlog
        self.poll_sec = poll_sec
        self.running = False
        self.bound = threading.Event()
        self._sock: Optional[socket.socket] = None
        self._thread: Optional[threading.Thread] = None

    def _bind(self) -> socket.socket:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            if isinstance(self.address, str) and not self.address.startswith("\0"):
                Path(self.address).unlink(missing_ok=True)
            sock.bind(self.address)
            sock.listen(self.backlog)
            sock.settimeout(self.poll_sec)
        except OSError:
            sock.close()
            raise
        return sock

    def _spawn(self, conn: socket.socket):
        session = self.session_factory(SocketStream(conn))
        t = threading.Thread(target=session.run, name="livesync-session", daemon=True)
        t.start()

    def serve(self):
        """Run the accept loop on the calling thread until stop()."""
        self.running = True
        try:
            sock = self._bind()
        except OSError:
            self.running = False
            self.bound.set()
            log.exception("LiveSync: could not bind %r", self.address)
            return
        self._sock = sock
        log.info("LiveSync listening on %r", self.address)
        self.bound.set()

        try:
            while self.running:
                try:
                    conn, _ = sock.accept()
                except socket.timeout:
                    continue
                except OSError:
                    if not self.running:
                        break
                    log.exception("LiveSync: accept failed, listener terminating")
                    break
                self._spawn(conn)
        finally:
            self.running = False
            self._close_socket()
            log.info("LiveSync listener stopped")

    def start(self) -> threading.Thread:
        self._thread = threading.Thread(target=self.serve, name="livesync-listener", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, timeout: Optional[float] = None):
        self.running = False
        self._close_socket()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def _close_socket(self):
        sock, self._sock = self._sock, None
        if sock is None:
            return
        try:
            sock.close()
        except OSError:
            log.debug("LiveSync: error closing listening socket", exc_info=True)
        if isinstance(self.address, str) and not self.address.startswith("\0"):
            Path(self.address).unlink(missing_ok=True)
