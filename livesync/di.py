# livesync/di.py
import logging
from dataclasses import dataclass
from typing import Callable
from livesync.config import Settings
from livesync.context import SyncContext
from livesync.services.executor import FileOperationExecutor
from livesync.services.reload import CommandReloadTrigger, LoggingReloadTrigger, ReloadTrigger
from livesync.services.session import Session
from livesync.services.streams import ByteStream

@dataclass
class Container:
    settings: Settings
    context: SyncContext
    executor: FileOperationExecutor
    reload_trigger: ReloadTrigger

    def session_for(self, stream: ByteStream) -> Session:
        return Session(stream, self.context)

    @property
    def session_factory(self) -> Callable[[ByteStream], Session]:
        return self.session_for

def build_container(settings: Settings | None = None, reload_trigger: ReloadTrigger | None = None) -> Container:
    s = settings or Settings()

    if reload_trigger is None:
        reload_trigger = CommandReloadTrigger(s.RELOAD_COMMAND) if s.RELOAD_COMMAND else LoggingReloadTrigger()

    executor = FileOperationExecutor(s.sandbox_root, strict=s.STRICT_SANDBOX)
    ctx = SyncContext(
        executor=executor,
        reload_script=s.reload_script_path,
        reload=reload_trigger,
        logger=logging.getLogger("livesync.session"),
        encoding=s.FILE_NAME_ENCODING,
    )

    return Container(s, ctx, executor, reload_trigger)
