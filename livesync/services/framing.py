# livesync/services/framing.py
from typing import Optional

from livesync.services.streams import ByteStream

# upper bound on a single read request, whatever length was declared
MAX_READ_CHUNK = 64 * 1024


def read_exact(stream: ByteStream, size: int) -> Optional[bytes]:
    """
    Read `size` bytes, retrying over short reads.

    Returns None when the stream ends before the first byte of the frame, and
    the partial buffer when it ends part way through. Length checks are left
    to the caller.
    """
    if size < 0:
        raise ValueError(f"negative frame size: {size}")
    if size == 0:
        return b""

    buf = bytearray()
    while len(buf) < size:
        chunk = stream.read(min(size - len(buf), MAX_READ_CHUNK))
        if not chunk:
            if not buf:
                return None
            break
        buf.extend(chunk)
    return bytes(buf)
