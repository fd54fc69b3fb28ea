# livesync/logging.py
import logging
import os

from livesync.models import CreateOperation, Operation


def configure_logging(level: str | None = None):
    logging.basicConfig(
        level=level or os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def describe_operation(op: Operation) -> str:
    # Content is summarised by size; file bodies never go to the log.
    if isinstance(op, CreateOperation):
        return f"create {op.file_name!r} ({len(op.content)} bytes)"
    return f"delete {op.file_name!r}"


def log_operation(logger: logging.Logger, op: Operation):
    logger.info("livesync %s", describe_operation(op))
