from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import SettingsError


@dataclass(frozen=True)
class Settings:
    """Command line defaults resolved from environment variables."""

    project_root: Path
    log_level: str

    @staticmethod
    def load() -> Settings:
        root = os.getenv("ENVIED_PROJECT_ROOT") or "."
        log_level = (os.getenv("ENVIED_LOG_LEVEL") or "WARNING").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise SettingsError(f"Unknown log level in ENVIED_LOG_LEVEL: {log_level!r}")
        return Settings(
            project_root=Path(root).expanduser().resolve(),
            log_level=log_level,
        )
