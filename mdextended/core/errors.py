"""configuration errors."""

from typing import Any


class ConfigError(ValueError):
    """base class for configuration failures."""


class SchemaError(ConfigError):
    """raised when a default-option tree cannot be compiled."""


class InvalidPath(ConfigError):
    """raised when a dotted path names no schema entry."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid config path: {path}")
        self.path = path


class TypeMismatch(ConfigError):
    """raised when a value's type differs from the schema-recorded type."""

    def __init__(self, path: str, expected: str, value: Any) -> None:
        actual = type(value).__name__
        super().__init__(
            f"Type mismatch for {path}: expected {expected}, got {actual}"
        )
        self.path = path
        self.expected = expected
        self.actual = actual
