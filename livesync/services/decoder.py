# livesync/services/decoder.py
from __future__ import annotations

import logging
from typing import Optional, Type

from livesync.errors import (
    MalformedLength,
    MalformedOperation,
    MissingFileContent,
    MissingFileName,
    SyncError,
)
from livesync.models import CreateOperation, DeleteOperation, Operation
from livesync.protocol import (
    CONTENT_LENGTH_SIZE,
    CREATE_OPERATION,
    DELETE_OPERATION,
    FILE_NAME_LENGTH_SIZE,
    OPERATION_SIZE,
)
from livesync.services.framing import read_exact
from livesync.services.streams import ByteStream

log = logging.getLogger(__name__)


def _parse_decimal(raw: bytes) -> int:
    # ASCII digits only: no sign, no whitespace, no unicode digits
    if not raw or not raw.isdigit():
        raise ValueError(f"not a non-negative decimal: {raw!r}")
    return int(raw)


def read_operation_code(stream: ByteStream) -> Optional[int]:
    """Return the operation code, or None when the stream is exhausted."""
    raw = read_exact(stream, OPERATION_SIZE)
    if raw is None:
        return None
    try:
        code = _parse_decimal(raw)
    except ValueError as e:
        raise MalformedOperation("failed to parse operation", cause=e) from e
    if code not in (DELETE_OPERATION, CREATE_OPERATION):
        raise MalformedOperation(f"operation not recognised: {code}")
    return code


def _read_length(stream: ByteStream, width: int, field: str, missing: Type[SyncError]) -> int:
    raw = read_exact(stream, width)
    if raw is None:
        raise missing(f"missing {field} bytes")
    if len(raw) < width:
        raise MalformedLength(f"failed to parse {field}: expected {width} bytes, got {len(raw)}")
    try:
        return _parse_decimal(raw)
    except ValueError as e:
        raise MalformedLength(f"failed to parse {field}", cause=e) from e


def read_file_name(stream: ByteStream, encoding: str = "utf-8") -> str:
    """
    Read (fileNameLength)(fileName) and return the trimmed name.
    The returned name may be empty when the declared length is zero.
    """
    length = _read_length(stream, FILE_NAME_LENGTH_SIZE, "fileNameLength", MissingFileName)
    raw = read_exact(stream, length)
    if raw is None or len(raw) < length:
        got = 0 if raw is None else len(raw)
        raise MissingFileName(f"missing fileName bytes: expected {length}, got {got}")

    name = raw.decode(encoding, errors="replace").strip()
    if len(name.encode(encoding, errors="replace")) < length:
        log.warning(
            "fileName parsed length is less than fileNameLength (%d). "
            "We read less information than you specified!",
            length,
        )
    return name


def read_file_content(stream: ByteStream) -> bytes:
    """Read (fileContentLength)(fileContent)."""
    length = _read_length(stream, CONTENT_LENGTH_SIZE, "fileContentLength", MissingFileContent)
    content = read_exact(stream, length)
    if content is None or len(content) < length:
        got = 0 if content is None else len(content)
        raise MissingFileContent(f"missing fileContent bytes: expected {length}, got {got}")
    return content


class MessageDecoder:
    """
    Decodes one message per call from a byte stream:
      AwaitOperation -> delete fields | create fields -> Operation
      AwaitOperation -> no data -> None (end of batch)
    """

    def __init__(self, stream: ByteStream, encoding: str = "utf-8"):
        self.stream = stream
        self.encoding = encoding

    def _file_name(self) -> str:
        name = read_file_name(self.stream, self.encoding)
        if not name:
            raise MissingFileName("fileName is empty")
        return name

    def decode(self) -> Optional[Operation]:
        code = read_operation_code(self.stream)
        if code is None:
            return None
        if code == DELETE_OPERATION:
            return DeleteOperation(file_name=self._file_name())
        file_name = self._file_name()
        content = read_file_content(self.stream)
        return CreateOperation(file_name=file_name, content=content)
