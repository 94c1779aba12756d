from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple


_DATA_PATH_ENV = "AGROVISTA_DATA_PATH"
_CORS_ORIGINS_ENV = "AGROVISTA_CORS_ORIGINS"
_HOST_ENV = "AGROVISTA_HOST"
_PORT_ENV = "AGROVISTA_PORT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    data_path: str
    cors_origins: Tuple[str, ...]
    host: str
    port: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_origins(default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(_CORS_ORIGINS_ENV)
    if value is None:
        return default
    origins = tuple(part.strip() for part in value.split(",") if part.strip())
    return origins or default


def _read_port(default: int) -> int:
    value = os.getenv(_PORT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if 0 < parsed < 65536 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        data_path=_read_str_env(_DATA_PATH_ENV, "data.csv"),
        cors_origins=_read_origins(("*",)),
        host=_read_str_env(_HOST_ENV, "127.0.0.1"),
        port=_read_port(4000),
        log_level=_read_log_level("INFO"),
    )
