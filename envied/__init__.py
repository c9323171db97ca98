"""envied: generate Python classes from ``.env`` files."""

from .errors import (
    DeclarationError,
    EnvFileError,
    EnviedError,
    InvalidDefaultTypeError,
    MissingFileError,
    MissingKeyError,
    SettingsError,
    TypeConversionError,
    UnsupportedTypeError,
)
from .generator import generate_class, generate_file, generate_source
from .options import ClassConfig, EnvClass, EnvField, FieldConfig

__all__ = [
    "ClassConfig",
    "DeclarationError",
    "EnvClass",
    "EnvField",
    "EnvFileError",
    "EnviedError",
    "FieldConfig",
    "InvalidDefaultTypeError",
    "MissingFileError",
    "MissingKeyError",
    "SettingsError",
    "TypeConversionError",
    "UnsupportedTypeError",
    "generate_class",
    "generate_file",
    "generate_source",
]
