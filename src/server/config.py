"""Settings for the dashboard HTTP/websocket server."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path


class ServerConfigurationError(Exception):
    """Raised when UI server configuration is invalid."""


WEBSOCKET_PATH = "/ws"
ROOT_PATH = "/"
INDEX_PATH = "/index.html"
HEALTHZ_PATH = "/healthz"


def bundled_index_file() -> Path:
    """Location of the dashboard shipped next to ``src`` (or inside a frozen bundle)."""
    base_dir = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parents[2]))
    return base_dir / "web_ui" / "index.html"


def _check_index_file(index_file: str) -> None:
    if not index_file:
        raise ServerConfigurationError("ui_server.index_file cannot be empty")
    path = Path(index_file)
    if not path.exists():
        raise ServerConfigurationError(f"UI index file not found: {path}")
    if not path.is_file():
        raise ServerConfigurationError(f"UI index path is not a file: {path}")


@dataclass(frozen=True)
class UIServerConfig:
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""

    def __post_init__(self) -> None:
        if not self.host.strip():
            raise ServerConfigurationError("ui_server.host cannot be empty")
        if isinstance(self.port, bool) or not 1 <= self.port <= 65535:
            raise ServerConfigurationError(f"ui_server.port must be in [1, 65535], got: {self.port}")
        if self.enabled:
            _check_index_file(self.index_file)

    @property
    def websocket_path(self) -> str:
        return WEBSOCKET_PATH

    @property
    def index_path(self) -> Path:
        return Path(self.index_file)

    @property
    def static_root(self) -> Path:
        """Directory whose files are served as static assets."""
        return self.index_path.parent

    @property
    def http_url(self) -> str:
        return f"http://{self.host}:{self.port}{ROOT_PATH}"

    @classmethod
    def from_settings(cls, settings) -> "UIServerConfig":
        index_file = (settings.index_file or "").strip() or str(bundled_index_file())
        return cls(
            enabled=bool(settings.enabled),
            host=settings.host.strip(),
            port=settings.port,
            index_file=index_file,
        )
