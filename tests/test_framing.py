from livesync.services.framing import MAX_READ_CHUNK, read_exact
from livesync.services.streams import BufferStream


def test_read_exact_reassembles_fragmented_reads():
    stream = BufferStream(b"0123456789", chunk_size=3)
    assert read_exact(stream, 8) == b"01234567"
    assert read_exact(stream, 2) == b"89"


def test_read_exact_no_data_is_none():
    assert read_exact(BufferStream(b""), 5) is None


def test_read_exact_short_read_returns_partial():
    stream = BufferStream(b"abc", chunk_size=1)
    assert read_exact(stream, 10) == b"abc"
    assert read_exact(stream, 1) is None


def test_read_exact_zero_size():
    assert read_exact(BufferStream(b""), 0) == b""


def test_read_exact_never_requests_more_than_remaining():
    class Spy(BufferStream):
        requested = []

        def read(self, n):
            self.requested.append(n)
            return super().read(n)

    stream = Spy(b"abcdef", chunk_size=2)
    read_exact(stream, 5)
    assert stream.requested == [5, 3, 1]


def test_read_exact_caps_each_request():
    class Spy(BufferStream):
        requested = []

        def read(self, n):
            self.requested.append(n)
            return super().read(n)

    stream = Spy(b"tiny")
    assert read_exact(stream, 9_999_999_999) == b"tiny"
    assert max(stream.requested) == MAX_READ_CHUNK
