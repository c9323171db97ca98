from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

from .emitter import RESERVED_NAMES, render_module
from .env_loader import load_env_file
from .errors import DeclarationError
from .naming import generated_class_name, sanitize_identifier
from .obfuscation import KeyFactory
from .options import EnvClass
from .resolver import ResolvedClass, ResolvedField, resolve_field

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def generate_class(env_class: EnvClass, root: Optional[PathLike] = None) -> ResolvedClass:
    """Load the env file for ``env_class`` and resolve every declared field."""

    config = env_class.config
    env = load_env_file(config.path, require=bool(config.require_env_file), root=root)

    used: Set[str] = set(RESERVED_NAMES)
    fields: List[ResolvedField] = []
    for env_field in env_class.fields:
        attr_name, _ = sanitize_identifier(env_field.name, used)
        fields.append(resolve_field(env_field, config, env, name=attr_name))

    class_name = generated_class_name(env_class.name, config.name, RESERVED_NAMES)
    logger.info(
        "Resolved %d field(s) for %s from %s", len(fields), class_name, config.path
    )
    return ResolvedClass(
        declared_name=env_class.name,
        class_name=class_name,
        env_path=str(config.path),
        fields=tuple(fields),
    )


def generate_source(
    classes: Iterable[EnvClass],
    root: Optional[PathLike] = None,
    key_factory: Optional[KeyFactory] = None,
) -> str:
    resolved = [generate_class(env_class, root) for env_class in classes]
    seen: Set[str] = set()
    for item in resolved:
        if item.class_name in seen:
            raise DeclarationError(f"Duplicate generated class name {item.class_name}")
        seen.add(item.class_name)
    return render_module(resolved, key_factory)


def generate_file(
    classes: Iterable[EnvClass],
    output: PathLike,
    root: Optional[PathLike] = None,
    key_factory: Optional[KeyFactory] = None,
) -> Path:
    """Generate a module for ``classes`` and write it to ``output``."""

    source = generate_source(classes, root, key_factory)
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    logger.info("Wrote %s", path)
    return path
