import logging
import threading
from pathlib import Path

import pytest

from livesync.config import Settings
from livesync.context import SyncContext
from livesync.di import build_container
from livesync.services.executor import FileOperationExecutor


class RecordingReload:
    def __init__(self):
        self.calls = []
        self.fired = threading.Event()

    def run_script(self, path: Path) -> None:
        self.calls.append(path)
        self.fired.set()


@pytest.fixture
def reload_trigger() -> RecordingReload:
    return RecordingReload()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(FILES_DIR=tmp_path / "files", APP_ID="org.test.app", ACCEPT_POLL_SEC=0.05)


@pytest.fixture
def container(settings, reload_trigger):
    return build_container(settings, reload_trigger=reload_trigger)


@pytest.fixture
def executor(tmp_path: Path) -> FileOperationExecutor:
    return FileOperationExecutor(tmp_path / "app")


@pytest.fixture
def ctx(executor, reload_trigger, tmp_path: Path) -> SyncContext:
    return SyncContext(
        executor=executor,
        reload_script=tmp_path / "internal" / "livesync.js",
        reload=reload_trigger,
        logger=logging.getLogger("livesync.test"),
    )
