# syncserver/http_app.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from livesync.config import Settings
from livesync.di import Container, build_container
from livesync.errors import SyncError
from livesync.services.streams import BufferStream


class SyncResult(BaseModel):
    ok: bool
    operations: int
    reloaded: bool
    error: Optional[Dict[str, Any]] = None


def _error_body(exc: BaseException) -> Dict[str, Any]:
    if isinstance(exc, SyncError):
        return {"kind": exc.kind.value, "message": str(exc), "recoverable": exc.recoverable_by_resend}
    return {"kind": "internal", "message": str(exc), "recoverable": False}


def create_app(container: Container | None = None) -> FastAPI:
    """
    HTTP push transport: the request body is a complete LiveSync batch, run
    through the same Session as a local socket connection.
    """
    container = container or build_container()
    settings: Settings = container.settings

    app = FastAPI(title="LiveSync HTTP", version="0.1.0")

    @app.get("/health")
    async def health():
        return {
            "endpoint": settings.endpoint_name,
            "sandboxRoot": str(container.context.sandbox_root),
        }

    @app.post(settings.HTTP_PATH, response_model=SyncResult)
    async def livesync_push(request: Request):
        payload = await request.body()
        session = container.session_for(BufferStream(payload))
        # Session does blocking file IO
        report = await run_in_threadpool(session.run)

        result = SyncResult(ok=report.ok, operations=report.operations, reloaded=report.reloaded)
        if report.ok:
            return result

        result.error = _error_body(report.error)
        is_protocol = isinstance(report.error, SyncError) and report.error.is_protocol_error
        return JSONResponse(result.model_dump(), status_code=400 if is_protocol else 500)

    return app


if __name__ == "__main__":
    import uvicorn
    from livesync.logging import configure_logging

    settings = Settings()
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(
        "syncserver.http_app:create_app",
        factory=True,
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        reload=False,
    )
