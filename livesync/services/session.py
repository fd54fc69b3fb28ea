# livesync/services/session.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from livesync.context import SyncContext
from livesync.logging import log_operation
from livesync.services.decoder import MessageDecoder
from livesync.services.streams import ByteStream


@dataclass
class BatchReport:
    operations: int = 0
    error: Optional[BaseException] = None
    reloaded: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class Session:
    """
    Owns one connection: decode and apply operations until the stream has no
    more pending bytes, then ask for a reload. Any failure drops the rest of
    the batch and skips the reload. The stream is closed on every exit path.
    """

    def __init__(self, stream: ByteStream, ctx: SyncContext):
        self.stream = stream
        self.ctx = ctx
        self.executor = ctx.executor
        self.decoder = MessageDecoder(stream, ctx.encoding)
        self.running = False

    def _process_batch(self, report: BatchReport):
        while self.running:
            op = self.decoder.decode()
            if op is None:
                self.ctx.logger.info("LiveSync: input stream is empty")
                break
            log_operation(self.ctx.logger, op)
            self.executor.execute(op)
            report.operations += 1
            if not self.stream.has_pending():
                break

    def run(self) -> BatchReport:
        report = BatchReport()
        self.running = True
        try:
            self._process_batch(report)
        except Exception as e:
            report.error = e
            self.ctx.logger.exception(
                "Error while LiveSyncing after %d operation(s): %s", report.operations, e
            )
        finally:
            self.running = False
            try:
                self.stream.close()
            except OSError:
                self.ctx.logger.exception("LiveSync: failed to close stream")

        if report.ok:
            try:
                self.ctx.reload.run_script(self.ctx.reload_script)
                report.reloaded = True
            except Exception:
                self.ctx.logger.exception("LiveSync: reload of %s failed", self.ctx.reload_script)
        return report
