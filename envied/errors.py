from __future__ import annotations


class EnviedError(ValueError):
    """Base class for errors raised while generating env classes."""


class MissingFileError(EnviedError):
    """Raised when a required env file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Environment file not found: {path}")
        self.path = path


class MissingKeyError(EnviedError):
    """Raised when a required variable is absent and has no default."""

    def __init__(self, key: str, field_name: str):
        super().__init__(
            f"Environment variable '{key}' not found for field '{field_name}'"
        )
        self.key = key
        self.field_name = field_name


class TypeConversionError(EnviedError):
    """Raised when a raw value cannot be converted to the field type."""

    def __init__(self, key: str, raw: object, type_name: str):
        super().__init__(
            f"Value {raw!r} for '{key}' cannot be converted to {type_name}"
        )
        self.key = key
        self.raw = raw
        self.type_name = type_name


class InvalidDefaultTypeError(EnviedError):
    """Raised when a default value is not a str, bool or number."""

    def __init__(self, field_name: str, value: object):
        super().__init__(
            f"Default value for field '{field_name}' must be a str, bool or number, "
            f"got {type(value).__name__}"
        )
        self.field_name = field_name
        self.value = value


class UnsupportedTypeError(EnviedError):
    """Raised when a field is declared with a type the generator cannot emit."""


class DeclarationError(EnviedError):
    """Raised when a declaration file is malformed."""


class EnvFileError(EnviedError):
    """Raised when an env file exists but cannot be read as text."""


class SettingsError(EnviedError):
    """Raised when an ``ENVIED_*`` environment variable holds an invalid value."""
