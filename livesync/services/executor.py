# livesync/services/executor.py
from __future__ import annotations

import logging
import os
from pathlib import Path

from livesync.errors import FileDeleteFailed, FileWriteFailed, SandboxEscape
from livesync.models import CreateOperation, DeleteOperation, Operation

log = logging.getLogger(__name__)


class FileOperationExecutor:
    """
    Apply decoded operations under the sandbox root.

    Names are joined onto the root as-is: `..` segments are not rejected, so a
    sender can reach outside the root. Such paths are logged as warnings, and
    refused only when `strict` is set.
    """

    def __init__(self, root: Path, strict: bool = False):
        self.root = Path(root).resolve()
        self.strict = strict
        self.root.mkdir(parents=True, exist_ok=True)

    def join(self, name: str) -> Path:
        # A leading separator stays under the root instead of replacing it.
        return self.root / name.lstrip("/" + os.sep)

    def resolve(self, name: str) -> Path:
        p = self.join(name)
        real = Path(os.path.realpath(p))
        if real != self.root and not real.is_relative_to(self.root):
            if self.strict:
                raise SandboxEscape(p)
            log.warning("path escapes sandbox root %s: %s", self.root, p)
        return p

    # ---------- Public API ----------

    def execute(self, op: Operation) -> Path:
        if isinstance(op, CreateOperation):
            return self.apply_create(op.file_name, op.content)
        if isinstance(op, DeleteOperation):
            return self.apply_delete(op.file_name)
        raise TypeError(f"unsupported operation: {op!r}")

    def apply_delete(self, name: str) -> Path:
        p = self.join(name)
        try:
            self.resolve(name)
            _delete_recursive(p)
        except (OSError, ValueError) as e:
            raise FileDeleteFailed(p, e) from e
        return p

    def apply_create(self, name: str, content: bytes) -> Path:
        p = self.join(name)
        try:
            self.resolve(name)
            _remove_entry(p)
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(content)
        except (OSError, ValueError) as e:
            raise FileWriteFailed(p, e) from e
        return p


def _delete_recursive(p: Path):
    # Children before parent; symlinks are removed, never followed.
    if p.is_dir() and not p.is_symlink():
        for child in p.iterdir():
            _delete_recursive(child)
        try:
            p.rmdir()
        except FileNotFoundError:
            pass
        return
    p.unlink(missing_ok=True)


def _remove_entry(p: Path):
    # A non-empty directory makes rmdir fail, which surfaces as a write failure.
    if p.is_dir() and not p.is_symlink():
        p.rmdir()
    elif p.exists() or p.is_symlink():
        p.unlink()
