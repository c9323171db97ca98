from __future__ import annotations

import logging
import types
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union, get_args, get_origin

from pydantic import ConfigDict, TypeAdapter, ValidationError

from .errors import (
    InvalidDefaultTypeError,
    MissingKeyError,
    TypeConversionError,
    UnsupportedTypeError,
)
from .naming import to_constant_case
from .options import ClassConfig, EnvField, effective

logger = logging.getLogger(__name__)

SUPPORTED_TYPES: Tuple[type, ...] = (str, int, float, bool)

_ADAPTERS: Dict[type, TypeAdapter] = {
    str: TypeAdapter(str, config=ConfigDict(coerce_numbers_to_str=True)),
    int: TypeAdapter(int),
    float: TypeAdapter(float),
    bool: TypeAdapter(bool),
}

_UNION_ORIGINS = (Union, getattr(types, "UnionType", Union))

SOURCE_ENV = "env"
SOURCE_DEFAULT = "default"
SOURCE_OPTIONAL = "optional"


@dataclass(frozen=True)
class ResolvedField:
    name: str
    key: str
    base_type: type
    nullable: bool
    value: Any
    obfuscate: bool
    source: str

    @property
    def annotation(self) -> str:
        if self.nullable:
            return f"Optional[{self.base_type.__name__}]"
        return self.base_type.__name__


def split_type(declared: Any) -> Tuple[type, bool]:
    """Return the base type of a field annotation and whether it is nullable."""

    if declared in SUPPORTED_TYPES:
        return declared, False
    if get_origin(declared) in _UNION_ORIGINS:
        args = [arg for arg in get_args(declared) if arg is not type(None)]
        if (
            len(args) == 1
            and len(get_args(declared)) == 2
            and args[0] in SUPPORTED_TYPES
        ):
            return args[0], True
    raise UnsupportedTypeError(
        f"Unsupported field type {declared!r}; expected str, int, float, bool "
        "or Optional of one of them"
    )


def derive_key(env_field: EnvField, class_config: ClassConfig) -> str:
    """Name of the variable to look up for ``env_field``.

    An explicit ``var_name`` always wins. Otherwise the declared name is used,
    converted to constant case when the effective option asks for it.
    """

    if env_field.config.var_name:
        return env_field.config.var_name
    if effective(env_field.config.use_constant_case, class_config.use_constant_case):
        return to_constant_case(env_field.name)
    return env_field.name


def convert_value(raw: Any, base_type: type, key: str) -> Any:
    try:
        return _ADAPTERS[base_type].validate_python(raw)
    except ValidationError as exc:
        raise TypeConversionError(key, raw, base_type.__name__) from exc


def resolve_field(
    env_field: EnvField,
    class_config: ClassConfig,
    env: Mapping[str, str],
    *,
    name: Optional[str] = None,
) -> ResolvedField:
    """Resolve one field against the loaded env mapping."""

    base_type, nullable = split_type(env_field.type)
    config = env_field.config
    default = config.default_value
    if default is not None and not isinstance(default, (str, bool, int, float)):
        raise InvalidDefaultTypeError(env_field.name, default)

    key = derive_key(env_field, class_config)
    obfuscate = effective(config.obfuscate, class_config.obfuscate)

    if key in env:
        value = convert_value(env[key], base_type, key)
        source = SOURCE_ENV
    elif default is not None:
        value = convert_value(default, base_type, key)
        source = SOURCE_DEFAULT
    elif nullable and effective(config.optional, class_config.allow_optional_fields):
        value = None
        source = SOURCE_OPTIONAL
    else:
        raise MissingKeyError(key, env_field.name)

    logger.debug("Field %s resolved from %s (key %s)", env_field.name, source, key)
    return ResolvedField(
        name=name or env_field.name,
        key=key,
        base_type=base_type,
        nullable=nullable,
        value=value,
        obfuscate=obfuscate and value is not None,
        source=source,
    )


@dataclass(frozen=True)
class ResolvedClass:
    declared_name: str
    class_name: str
    env_path: str
    fields: Tuple[ResolvedField, ...]

    @property
    def has_obfuscated(self) -> bool:
        return any(item.obfuscate for item in self.fields)
