from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DB_FILENAME = "clubf4.db"
DEFAULT_GEMINI_MODEL = "gemini-3-flash-preview"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _env_flag(name: str, default: bool = True) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return str(raw).strip().lower() not in {"0", "false", "no", "off"}


def _env_str(name: str, default: str | None = None) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class Settings:
    data_path: Path
    gemini_api_key: str | None
    gemini_model: str
    commentary_enabled: bool
    log_level: str


def load_settings(secret_api_key: str | None = None) -> Settings:
    default_path = Path(__file__).resolve().parent.parent / DB_FILENAME
    data_path = Path(_env_str("CLUBF4_DATA_PATH") or default_path)
    api_key = secret_api_key or _env_str("GEMINI_API_KEY") or _env_str("API_KEY")
    return Settings(
        data_path=data_path,
        gemini_api_key=api_key,
        gemini_model=_env_str("CLUBF4_GEMINI_MODEL", DEFAULT_GEMINI_MODEL) or DEFAULT_GEMINI_MODEL,
        commentary_enabled=_env_flag("CLUBF4_COMMENTARY", default=True),
        log_level=(_env_str("CLUBF4_LOG_LEVEL", "INFO") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)
