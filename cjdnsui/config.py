import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TITLE = "cjdnsui"
DEFAULT_THEME = "cjdnsui-dark"
DEFAULT_LOG_LEVEL = "INFO"


def default_log_dir() -> Path:
    return Path.home() / ".cjdnsui" / "logs"


def _log_level(value: str | None) -> str:
    level = (value or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level


@dataclass
class UiConfig:
    title: str = DEFAULT_TITLE
    theme: str = DEFAULT_THEME
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Path | None = None

    @classmethod
    def from_env(cls) -> "UiConfig":
        log_dir = os.environ.get("CJDNSUI_LOG_DIR")
        return cls(
            title=os.environ.get("CJDNSUI_TITLE", DEFAULT_TITLE),
            theme=os.environ.get("CJDNSUI_THEME", DEFAULT_THEME),
            log_level=_log_level(os.environ.get("CJDNSUI_LOG_LEVEL")),
            log_dir=Path(log_dir).expanduser() if log_dir else default_log_dir(),
        )
