# livesync/services/encoder.py
from typing import Iterable

from livesync.models import CreateOperation, Operation
from livesync.protocol import (
    CONTENT_LENGTH_SIZE,
    CREATE_OPERATION,
    DELETE_OPERATION,
    FILE_NAME_LENGTH_SIZE,
    MAX_CONTENT_LENGTH,
    MAX_FILE_NAME_LENGTH,
)


def encode_file_name(name: str, encoding: str = "utf-8") -> bytes:
    raw = name.encode(encoding)
    if len(raw) > MAX_FILE_NAME_LENGTH:
        raise ValueError(f"file name too long: {len(raw)} bytes")
    return str(len(raw)).zfill(FILE_NAME_LENGTH_SIZE).encode("ascii") + raw


def encode_content(content: bytes) -> bytes:
    if len(content) > MAX_CONTENT_LENGTH:
        raise ValueError(f"content too long: {len(content)} bytes")
    return str(len(content)).zfill(CONTENT_LENGTH_SIZE).encode("ascii") + content


def encode_operation(op: Operation, encoding: str = "utf-8") -> bytes:
    if isinstance(op, CreateOperation):
        return (
            str(CREATE_OPERATION).encode("ascii")
            + encode_file_name(op.file_name, encoding)
            + encode_content(op.content)
        )
    return str(DELETE_OPERATION).encode("ascii") + encode_file_name(op.file_name, encoding)


def encode_batch(ops: Iterable[Operation], encoding: str = "utf-8") -> bytes:
    return b"".join(encode_operation(op, encoding) for op in ops)
