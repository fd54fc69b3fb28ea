# livesync/services/reload.py
from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Protocol

log = logging.getLogger(__name__)


class ReloadTrigger(Protocol):
    """Asks the host runtime to (re)execute a script. Fire-and-forget."""

    def run_script(self, path: Path) -> None: ...


class LoggingReloadTrigger:
    """
    Default trigger when no runtime hook is configured: records the request
    so a host can tail the log.
    """

    def __init__(self):
        self.requests: List[Path] = []

    def run_script(self, path: Path) -> None:
        self.requests.append(path)
        log.info("reload requested: %s", path)


class CommandReloadTrigger:
    """
    Launches `command` with the script path appended as the last argument.
    The process is not waited on.
    """

    def __init__(self, command: str):
        self.argv = shlex.split(command)
        if not self.argv:
            raise ValueError("empty reload command")

    def run_script(self, path: Path) -> None:
        argv = [*self.argv, str(path)]
        log.info("reload: %s", " ".join(shlex.quote(a) for a in argv))
        subprocess.Popen(argv, stdin=subprocess.DEVNULL)
