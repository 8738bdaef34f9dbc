"""
config.py – centralised env-var handling
=======================================

• Loads the first `.env` file it finds (cwd or /app) exactly **once**.
• Exposes `ENV` – a dict-like view of the environment.
• `env(key, default=None, cast=None)` helper for one-off lookups
  with automatic type-casting (int, float, bool).

Variables read by the services
------------------------------
REDIS_URL             redis://host:port/db     (default: redis://redis:6379/0)
REDIS_TIMEOUT         socket timeout, seconds  (default: 2)
TRADE_COUNTER_PREFIX  bucket key namespace     (default: stats:trades:daily)
STATS_RATE_LIMIT      requests per window      (default: 120)
STATS_RATE_WINDOW     window length, seconds   (default: 60)
STATS_CACHE_MAX_AGE   Cache-Control max-age    (default: 5)
RECORDER_WORKERS      recorder thread pool     (default: 2)
API_PORT              stats API port           (default: 8000)
LOG_LEVEL             root log level           (default: INFO)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

# ───── locate & load .env (first one wins) ────────────────────────────
for candidate in (Path.cwd() / ".env", Path("/app/.env")):
    if candidate.is_file():
        load_dotenv(dotenv_path=candidate, override=False)
        break

_TRUTHY = ("1", "true", "yes", "y", "on")


# ───── ENV proxy object ───────────────────────────────────────────────
class _Env(dict):
    """Dict view of `os.environ` with a casting `get`."""

    def get(self, key: str, default: Any = None, cast: Optional[type] = None) -> Any:  # noqa: D401
        val = os.getenv(key)
        if val is None or val == "":
            return default
        if cast is None:
            return val
        try:
            if cast is bool:
                return val.strip().lower() in _TRUTHY
            return cast(val)
        except (ValueError, TypeError):
            return default


ENV: _Env = _Env(os.environ)  # public alias


def env(key: str, default: Any = None, cast: Optional[type] = None) -> Any:
    """Shortcut for `ENV.get(key, default, cast)`."""
    return ENV.get(key, default, cast)


__all__ = ["ENV", "env"]
