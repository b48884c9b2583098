"""runtime feature configuration backed by a compiled schema."""

import copy
from collections.abc import Mapping
from typing import Any, Optional, Union

from mdextended.core.errors import InvalidPath, TypeMismatch
from mdextended.core.schema import CompiledSchema, default_schema, type_name

_MISSING = object()


class FeatureConfig:
    """
    feature flags and payload values for one engine instance.

    Boolean options live in an integer bitmask; every other option is kept
    in a payload dict. The compiled schema is shared between instances and
    never mutated.
    """

    def __init__(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        schema: Optional[CompiledSchema] = None,
    ) -> None:
        self._schema = schema if schema is not None else default_schema()
        self._mask = self._schema.default_mask
        self._payload: dict[str, Any] = {
            path: copy.deepcopy(entry.default)
            for path, entry in self._schema.entries.items()
            if path not in self._schema.bits
        }
        if overrides:
            self.set(overrides)

    @property
    def schema(self) -> CompiledSchema:
        return self._schema

    def normalise_path(self, path: str) -> str:
        """
        resolves a dotted path to its schema entry.

        A branch path resolves to its ``.enabled`` flag.

        Raises:
            InvalidPath: if neither the path nor ``{path}.enabled`` exists
        """
        if path in self._schema.entries:
            return path
        enabled = f"{path}.enabled"
        if enabled in self._schema.entries:
            return enabled
        raise InvalidPath(path)

    def get(self, path: str) -> Any:
        """returns the current value at path."""
        key = self.normalise_path(path)
        bit = self._schema.bits.get(key)
        if bit is not None:
            return bool(self._mask >> bit & 1)
        return self._payload[key]

    def enabled(self, path: str) -> bool:
        """
        returns True if a flag and every enclosing branch are switched on.

        ``enabled("emphasis.mark")`` is False when ``emphasis.enabled`` is off
        even though the ``mark`` bit itself is still set.
        """
        parts = path.split(".")
        for depth in range(1, len(parts)):
            branch = ".".join(parts[:depth]) + ".enabled"
            bit = self._schema.bits.get(branch)
            if bit is not None and not self._mask >> bit & 1:
                return False
        return self.get(path) is True

    def set(
        self, path: Union[str, Mapping[str, Any]], value: Any = _MISSING
    ) -> "FeatureConfig":
        """
        writes one value, or a nested mapping of values.

        Args:
            path: dotted path, or a mapping mirroring the option tree
            value: new value when path is a string

        Returns:
            this config, for chaining

        Raises:
            InvalidPath: if a path names no schema entry
            TypeMismatch: if a value's type differs from the schema type
        """
        if value is _MISSING:
            if not isinstance(path, Mapping):
                raise TypeError("set() needs a value or a mapping of values")
            for key, item in path.items():
                self._assign(str(key), item)
            return self

        self._assign(str(path), value)
        return self

    def _assign(self, path: str, value: Any) -> None:
        # a mapping expands only where no literal entry can hold it
        if (
            isinstance(value, Mapping)
            and path not in self._schema.entries
            and self._schema.has_children(path)
        ):
            for key, item in value.items():
                self._assign(f"{path}.{key}", item)
            return

        key = self.normalise_path(path)
        expected = self._schema.entries[key].type
        if type_name(value) != expected:
            raise TypeMismatch(key, expected, value)

        bit = self._schema.bits.get(key)
        if bit is not None:
            if value:
                self._mask |= 1 << bit
            else:
                self._mask &= ~(1 << bit)
            return

        if isinstance(value, tuple):
            value = list(value)
        self._payload[key] = copy.deepcopy(value)

    def export(self) -> dict[str, Any]:
        """returns every option's current value keyed by dotted path."""
        return {path: self.get(path) for path in self._schema.entries}
