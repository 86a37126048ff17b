"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, static_dir="public", ws_idle_timeout=60.0)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Static files (None disables the static collaborator)
    static_dir: str | Path | None = "assets"
    static_url: str = "/"

    # WebSocket sessions
    ws_idle_timeout: float | None = None  # seconds; None waits forever
    ws_max_message_size: int = 1_048_576  # 1 MB

    # Logging
    log_level: str = "info"
    access_log: bool = True
