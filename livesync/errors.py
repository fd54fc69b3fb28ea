# livesync/errors.py
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from livesync.protocol import (
    CONTENT_LENGTH_SIZE,
    CREATE_OPERATION,
    DELETE_OPERATION,
    FILE_NAME_LENGTH_SIZE,
    OPERATION_SIZE,
)

PROTOCOL_REMINDER = (
    "Make sure you are following this protocol when transferring files.\n"
    "Transfer protocol:\n"
    "\tdelete: (operation)(fileNameLength)(fileName)\n"
    "\tcreate: (operation)(fileNameLength)(fileName)(fileContentLength)(fileContent)\n"
    f"\toperation: exactly {OPERATION_SIZE} byte ({DELETE_OPERATION} - delete, {CREATE_OPERATION} - create)\n"
    f"\tfileNameLength: exactly {FILE_NAME_LENGTH_SIZE} bytes\n"
    "\tfileName: relative to app folder\n"
    f"\tfileContentLength: exactly {CONTENT_LENGTH_SIZE} bytes\n"
    "\tfileContent: byte buffer\n"
    "\tExample delete: 700003./a\n"
    "\tExample create: 800007./a.txt0000000011fileContent"
)


class ErrorKind(str, Enum):
    MALFORMED_OPERATION = "malformed_operation"
    MALFORMED_LENGTH = "malformed_length"
    MISSING_FILE_NAME = "missing_file_name"
    MISSING_FILE_CONTENT = "missing_file_content"
    FILE_WRITE_FAILED = "file_write_failed"
    FILE_DELETE_FAILED = "file_delete_failed"
    SANDBOX_ESCAPE = "sandbox_escape"


_PROTOCOL_KINDS = {
    ErrorKind.MALFORMED_OPERATION,
    ErrorKind.MALFORMED_LENGTH,
    ErrorKind.MISSING_FILE_NAME,
    ErrorKind.MISSING_FILE_CONTENT,
}


class SyncError(Exception):
    """
    Single error type for a failed sync batch, tagged with an ErrorKind.

    Protocol errors (malformed or truncated input) carry the protocol reminder
    and can be fixed by the sender resending a well-formed batch. Filesystem
    errors keep the originating OSError as `cause`.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        path: Optional[Path] = None,
        cause: Optional[BaseException] = None,
    ):
        self.message = message
        self.path = path
        self.cause = cause
        super().__init__(self._render())

    @property
    def is_protocol_error(self) -> bool:
        return self.kind in _PROTOCOL_KINDS

    @property
    def recoverable_by_resend(self) -> bool:
        return self.is_protocol_error

    def _render(self) -> str:
        text = f"LiveSync: {self.message}"
        if self.cause is not None:
            text += f"\noriginal exception: {self.cause!r}"
        if self.is_protocol_error:
            text += "\n" + PROTOCOL_REMINDER
        return text


class MalformedOperation(SyncError):
    kind = ErrorKind.MALFORMED_OPERATION


class MalformedLength(SyncError):
    kind = ErrorKind.MALFORMED_LENGTH


class MissingFileName(SyncError):
    kind = ErrorKind.MISSING_FILE_NAME


class MissingFileContent(SyncError):
    kind = ErrorKind.MISSING_FILE_CONTENT


class FileWriteFailed(SyncError):
    kind = ErrorKind.FILE_WRITE_FAILED

    def __init__(self, path: Path, cause: BaseException):
        super().__init__(f"failed to write file: {path}", path=path, cause=cause)


class FileDeleteFailed(SyncError):
    kind = ErrorKind.FILE_DELETE_FAILED

    def __init__(self, path: Path, cause: BaseException):
        super().__init__(f"failed to delete: {path}", path=path, cause=cause)


class SandboxEscape(SyncError):
    kind = ErrorKind.SANDBOX_ESCAPE

    def __init__(self, path: Path):
        super().__init__(f"path escapes sandbox root: {path}", path=path)
