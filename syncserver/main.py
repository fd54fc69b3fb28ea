# syncserver/main.py
import logging
from livesync.config import Settings
from livesync.di import Container, build_container
from livesync.logging import configure_logging
from syncserver.listener import LiveSyncListener, endpoint_address

log = logging.getLogger(__name__)

def create_listener(container: Container) -> LiveSyncListener:
    """
    Build the local-socket listener on top of the DI container.
    Keep the transport (accept loop) separate from session/file logic.
    """
    s = container.settings
    address = endpoint_address(s.endpoint_name, s.SOCKET_PATH)
    return LiveSyncListener(
        address,
        container.session_factory,
        backlog=s.ACCEPT_BACKLOG,
        poll_sec=s.ACCEPT_POLL_SEC,
    )


def main(settings: Settings | None = None):
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)
    container = build_container(settings)
    listener = create_listener(container)

    if settings.HTTP_ENABLED:
        import uvicorn
        from syncserver.http_app import create_app

        # HTTP transport owns the main thread; the socket listener runs beside it
        listener.start()
        try:
            uvicorn.run(create_app(container), host=settings.HTTP_HOST, port=settings.HTTP_PORT)
        finally:
            listener.stop()
        return

    try:
        listener.serve()
    except KeyboardInterrupt:
        log.info("interrupted, stopping listener")
        listener.stop()


if __name__ == "__main__":
    main()
