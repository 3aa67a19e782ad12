"""
Process settings read from environment variables.

A `.env` file in the working directory is loaded once by `load_env()`
(startup only). Everything else is read on demand so tests can use
`monkeypatch.setenv`.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from fastapi import HTTPException, status

DEFAULT_CACHE_FILE = ".cache/bookmarks.json"
DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080


class ConfigError(RuntimeError):
    pass


def load_env() -> None:
    # Existing environment wins over the file.
    load_dotenv(override=False)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def require_github_token() -> str:
    """
    Return the snippet-API credential or raise `ConfigError`.

    Called at startup; the service is useless without it.
    """
    token = os.environ.get("GITHUB_ACCESS_TOKEN", "").strip()
    if not token:
        raise ConfigError("GITHUB_ACCESS_TOKEN is not set.")
    return token


def github_token() -> str:
    # FastAPI dependency variant of require_github_token().
    try:
        return require_github_token()
    except ConfigError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc


def cache_file() -> str:
    return os.environ.get("BOOKMARKS_CACHE_FILE", DEFAULT_CACHE_FILE).strip() or DEFAULT_CACHE_FILE


def upstream_timeout_s() -> float | None:
    return _env_float("UPSTREAM_TIMEOUT_S", None)


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    origins = [item.strip() for item in raw.split(",")]
    return [item for item in origins if item]


def api_host() -> str:
    return os.environ.get("API_HOST", DEFAULT_HOST).strip() or DEFAULT_HOST


def api_port() -> int:
    return _env_int("API_PORT", DEFAULT_PORT)


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
