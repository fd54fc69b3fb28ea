# livesync/services/streams.py
from __future__ import annotations

import socket
from typing import Protocol


class ByteStream(Protocol):
    """
    Minimal input stream a Session reads from.
    - read(n): up to n bytes, b"" at end of stream (short reads allowed)
    - has_pending(): non-blocking check for unread bytes
    - close(): release the underlying transport
    """

    def read(self, n: int) -> bytes: ...

    def has_pending(self) -> bool: ...

    def close(self) -> None: ...


class SocketStream:
    """Blocking reads over an accepted stream socket."""

    def __init__(self, sock: socket.socket):
        self._sock = sock
        self._sock.setblocking(True)

    def read(self, n: int) -> bytes:
        return self._sock.recv(n)

    def has_pending(self) -> bool:
        try:
            peeked = self._sock.recv(1, socket.MSG_PEEK | socket.MSG_DONTWAIT)
        except (BlockingIOError, InterruptedError):
            return False
        return bool(peeked)

    def close(self) -> None:
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # peer already gone
            pass
        self._sock.close()


class BufferStream:
    """In-memory stream over a complete payload (HTTP bodies, tests)."""

    def __init__(self, data: bytes, chunk_size: int | None = None):
        self._data = memoryview(bytes(data))
        self._pos = 0
        self._chunk_size = chunk_size
        self.closed = False

    def read(self, n: int) -> bytes:
        if self._chunk_size:
            n = min(n, self._chunk_size)
        chunk = self._data[self._pos : self._pos + n].tobytes()
        self._pos += len(chunk)
        return chunk

    def has_pending(self) -> bool:
        return self._pos < len(self._data)

    def close(self) -> None:
        self.closed = True
