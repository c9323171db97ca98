from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union

DEFAULT_ENV_PATH = ".env"

DefaultValue = Union[str, bool, int, float, None]


@dataclass(frozen=True)
class ClassConfig:
    """Class-wide options for a generated env class.

    ``path`` is the env file to read, relative to the project root; ``None`` or
    an empty string means ``.env``. When ``require_env_file`` is true a missing
    file aborts generation, otherwise it is read as empty.

    ``name`` overrides the name of the generated class (which is always
    prefixed with an underscore). ``obfuscate``, ``allow_optional_fields`` and
    ``use_constant_case`` are defaults that every :class:`FieldConfig` may
    override.
    """

    path: Optional[str] = DEFAULT_ENV_PATH
    require_env_file: Optional[bool] = False
    name: Optional[str] = None
    obfuscate: bool = False
    allow_optional_fields: bool = False
    use_constant_case: bool = False

    def __post_init__(self) -> None:
        if not self.path:
            object.__setattr__(self, "path", DEFAULT_ENV_PATH)
        if self.require_env_file is None:
            object.__setattr__(self, "require_env_file", False)


@dataclass(frozen=True)
class FieldConfig:
    """Per-field options. ``None`` means inherit the class default."""

    var_name: Optional[str] = None
    obfuscate: Optional[bool] = None
    default_value: DefaultValue = None
    optional: Optional[bool] = None
    use_constant_case: Optional[bool] = None


@dataclass(frozen=True)
class EnvField:
    """A declared field: attribute name, Python type and options."""

    name: str
    type: Any = str
    config: FieldConfig = field(default_factory=FieldConfig)


@dataclass(frozen=True)
class EnvClass:
    """A declared class together with its fields in declaration order."""

    name: str
    config: ClassConfig = field(default_factory=ClassConfig)
    fields: Tuple[EnvField, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, "fields", tuple(self.fields))


def effective(field_value: Optional[bool], class_default: bool) -> bool:
    """Return the field override when set, otherwise the class default."""

    if field_value is None:
        return bool(class_default)
    return field_value
