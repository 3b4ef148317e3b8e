"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI/init params
2) Environment variables
3) ~/.config/apperror/apperror.yaml (or ``config_path``)
4) Model defaults

Environment variable format:
- Prefix: ``APPERROR_``
- Nested keys: ``__`` separator
- Example: ``APPERROR_WIRE__MAX_DETAIL_BYTES=4096`` -> ``wire.max_detail_bytes = 4096``
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

from .models import _CONFIG_PATH, AppErrorSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> AppErrorSettings:
    """Load settings by applying the standard precedence cascade."""
    token = None
    if config_path is not None:
        token = _CONFIG_PATH.set(Path(config_path))
    try:
        return AppErrorSettings(**dict(cli_params or {}))
    finally:
        if token is not None:
            _CONFIG_PATH.reset(token)


@lru_cache(maxsize=1)
def default_settings() -> AppErrorSettings:
    """Return process-wide settings loaded once from env/yaml/defaults."""
    return load_settings()
