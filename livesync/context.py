# livesync/context.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from livesync.services.executor import FileOperationExecutor
from livesync.services.reload import ReloadTrigger


@dataclass(frozen=True)
class SyncContext:
    """
    Capabilities handed to every Session. Built once at startup and shared
    read-only between concurrent sessions.
    """
    executor: FileOperationExecutor
    reload_script: Path
    reload: ReloadTrigger
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("livesync"))
    encoding: str = "utf-8"

    @property
    def sandbox_root(self) -> Path:
        return self.executor.root
