"""
Runtime settings for the upstream API clients.

Settings come from the process environment, optionally seeded from a `.env`
file by `load_env`. Explicit arguments always win over the environment.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

GLOBAL_API_BASE_URL_ENV = "GLOBAL_API_BASE_URL"
SCHNOSE_API_BASE_URL_ENV = "SCHNOSE_API_BASE_URL"
HTTP_TIMEOUT_SECONDS_ENV = "SCHNOSE_HTTP_TIMEOUT_SECONDS"

DEFAULT_TIMEOUT_SECONDS = 30.0


def load_env(*, path: Path | None = None, override: bool = False) -> Path | None:
    """
    Load settings from `path`, or else from the first `.env` found at the repo
    root or in the working directory. Returns the file that was loaded.
    """

    if path is not None:
        candidates = [Path(path)]
    else:
        repo_root = Path(__file__).resolve().parents[2]
        candidates = [
            repo_root / ".env",
            Path.cwd() / ".env",
        ]
    for candidate in candidates:
        if candidate.is_file():
            load_dotenv(dotenv_path=candidate, override=override)
            return candidate
    return None


def resolve_base_url(base_url: str | None, env_var: str, default: str) -> str:
    resolved = (base_url or os.getenv(env_var) or "").strip()
    return (resolved or default).rstrip("/")


def resolve_timeout_seconds(timeout_seconds: float | None = None) -> float:
    if timeout_seconds is not None:
        return float(timeout_seconds)
    raw = (os.getenv(HTTP_TIMEOUT_SECONDS_ENV) or "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{HTTP_TIMEOUT_SECONDS_ENV} must be a number, got {raw!r}.") from exc
