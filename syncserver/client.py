# syncserver/client.py
from __future__ import annotations

import socket
from typing import Iterable

from livesync.models import Operation
from livesync.services.encoder import encode_batch
from syncserver.listener import Address


def push_bytes(address: Address, payload: bytes, timeout: float | None = 10.0) -> None:
    """Send a raw protocol payload to a listener and close the write side."""
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.settimeout(timeout)
        sock.connect(address)
        sock.sendall(payload)
        sock.shutdown(socket.SHUT_WR)
        # wait for the listener to close its end, the batch is applied by then
        while sock.recv(4096):
            pass


def push_operations(address: Address, ops: Iterable[Operation], encoding: str = "utf-8") -> None:
    push_bytes(address, encode_batch(ops, encoding))
