# livesync/config.py
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LIVESYNC_", env_file=".env", extra="ignore")

    # Host application (private storage root and package identifier)
    FILES_DIR: Path = Path("./.livesync")
    APP_ID: str = "org.example.app"

    # Sandbox and reload script, both relative to FILES_DIR
    SANDBOX_SUBDIR: str = "app"
    RELOAD_SCRIPT: str = "internal/livesync.js"
    STRICT_SANDBOX: bool = False                # reject names resolving outside the sandbox

    # Local endpoint (abstract namespace unless a socket path is given)
    ENDPOINT_SUFFIX: str = "-livesync"
    SOCKET_PATH: Path | None = None
    ACCEPT_BACKLOG: int = 16
    ACCEPT_POLL_SEC: float = 0.5

    # Protocol
    FILE_NAME_ENCODING: str = "utf-8"

    # Reload: argv string, the script path is appended as the last argument
    RELOAD_COMMAND: str | None = None

    # HTTP push transport
    HTTP_ENABLED: bool = False
    HTTP_HOST: str = "127.0.0.1"
    HTTP_PORT: int = 8765
    HTTP_PATH: str = "/livesync"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def endpoint_name(self) -> str:
        return f"{self.APP_ID}{self.ENDPOINT_SUFFIX}"

    @property
    def sandbox_root(self) -> Path:
        return self.FILES_DIR.resolve() / self.SANDBOX_SUBDIR

    @property
    def reload_script_path(self) -> Path:
        return self.FILES_DIR.resolve() / self.RELOAD_SCRIPT
