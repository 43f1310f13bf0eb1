# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

CONSTRAINT_FILE_ENV = "FIELDGUARD_CONSTRAINT_FILE"
TIMING_LOG_ENV = "FIELDGUARD_TIMING_LOG"

_FALSEY = ("", "0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    constraint_file: Optional[Path] = None
    timing_log: bool = True


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Read settings from the environment (cached; see :func:`reload_settings`)."""

    raw_path = os.getenv(CONSTRAINT_FILE_ENV)
    return Settings(
        constraint_file=Path(raw_path).expanduser() if raw_path else None,
        timing_log=os.getenv(TIMING_LOG_ENV, "1").strip().lower() not in _FALSEY,
    )


def reload_settings() -> Settings:
    load_settings.cache_clear()
    return load_settings()


__all__ = [
    "CONSTRAINT_FILE_ENV",
    "Settings",
    "TIMING_LOG_ENV",
    "load_settings",
    "reload_settings",
]
