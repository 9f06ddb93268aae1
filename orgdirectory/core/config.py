"""Environment driven settings.

Environment variables:
    ORGDIR_STORAGE: ``memory`` (default) or ``json``
    ORGDIR_DATA_ROOT: directory for JSON stores (default: <repo>/data)
    ORGDIR_LOG_LEVEL: logging level name (default: INFO)
    API_CORS_ORIGINS: comma separated list of allowed origins
"""
from __future__ import annotations

import os
from pathlib import Path

STORAGE_MEMORY = "memory"
STORAGE_JSON = "json"

_DEFAULT_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def data_root() -> Path:
    env_root = os.getenv("ORGDIR_DATA_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path(__file__).resolve().parents[2] / "data"


def storage_kind() -> str:
    kind = (os.getenv("ORGDIR_STORAGE") or STORAGE_MEMORY).strip().lower()
    if kind not in {STORAGE_MEMORY, STORAGE_JSON}:
        raise ValueError(f"ORGDIR_STORAGE must be '{STORAGE_MEMORY}' or '{STORAGE_JSON}', got {kind!r}")
    return kind


def log_level() -> str:
    return (os.getenv("ORGDIR_LOG_LEVEL") or "INFO").strip().upper()


def cors_origins() -> list[str]:
    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
    return origins or list(_DEFAULT_ORIGINS)
