from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import dotenv_values

from .errors import EnvFileError, MissingFileError

logger = logging.getLogger(__name__)


def resolve_env_path(path: str, root: Optional[Union[str, Path]] = None) -> Path:
    """Return ``path`` anchored at ``root`` unless it is already absolute."""

    candidate = Path(path).expanduser()
    if candidate.is_absolute() or root is None:
        return candidate
    return Path(root) / candidate


def load_env_file(
    path: str,
    *,
    require: bool = False,
    root: Optional[Union[str, Path]] = None,
) -> Dict[str, str]:
    """Read ``KEY=VALUE`` pairs from an env file.

    Blank lines and ``#`` comments are skipped and surrounding quotes are
    removed. Keys that appear without a value are dropped. A missing file
    raises :class:`MissingFileError` when ``require`` is set and otherwise
    yields an empty mapping.
    """

    env_path = resolve_env_path(path, root)
    if not env_path.is_file():
        if require:
            raise MissingFileError(str(env_path))
        logger.warning("Environment file %s not found, using empty values", env_path)
        return {}

    try:
        raw = dotenv_values(env_path, interpolate=False, encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise EnvFileError(f"Environment file {env_path} is not valid UTF-8") from exc
    values = {key: value for key, value in raw.items() if value is not None}
    logger.debug("Loaded %d variables from %s", len(values), env_path)
    return values
