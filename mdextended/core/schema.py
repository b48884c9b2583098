"""default option tree and its compilation into a bitmask plus payload table."""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Optional

from mdextended.core.errors import SchemaError

MAX_FEATURES = 64

DEFAULT_SCHEMA: dict[str, Any] = {
    "abbreviations": {
        "allow_custom": True,
        "predefined": {},
    },
    "code": {
        "blocks": True,
        "inline": True,
    },
    "comments": True,
    "definition_lists": True,
    "diagrams": {
        "enabled": False,
        "chartjs": True,
        "mermaid": True,
    },
    "emphasis": {
        "bold": True,
        "italic": True,
        "strikethroughs": True,
        "insertions": True,
        "subscript": False,
        "superscript": False,
        "keystrokes": True,
        "mark": True,
    },
    "footnotes": True,
    "headings": {
        "allowed_levels": ["h1", "h2", "h3", "h4", "h5", "h6"],
        "auto_anchors": {
            "delimiter": "-",
            "lowercase": True,
            "replacements": {},
            "transliterate": False,
            "blacklist": [],
        },
        "special_attributes": True,
    },
    "images": True,
    "links": {
        "email_links": True,
        "external_links": {
            "nofollow": True,
            "noopener": True,
            "noreferrer": True,
            "open_in_new_window": True,
            "internal_hosts": [],
        },
    },
    "lists": {
        "tasks": True,
    },
    "allow_raw_html": True,
    "alerts": {
        "types": ["note", "tip", "important", "warning", "caution"],
        "class": "markdown-alert",
    },
    "math": {
        "enabled": False,
        "inline": {
            "delimiters": [
                {"left": "$", "right": "$"},
                {"left": "\\(", "right": "\\)"},
            ],
        },
        "block": {
            "delimiters": [
                {"left": "$$", "right": "$$"},
                {"left": "\\[", "right": "\\]"},
            ],
        },
    },
    "quotes": True,
    "smartypants": {
        "enabled": False,
        "smart_angled_quotes": True,
        "smart_backticks": True,
        "smart_dashes": True,
        "smart_ellipses": True,
        "smart_quotes": True,
        "substitutions": {
            "ellipses": "&hellip;",
            "left_angle_quote": "&laquo;",
            "left_double_quote": "&ldquo;",
            "left_single_quote": "&lsquo;",
            "mdash": "&mdash;",
            "ndash": "&ndash;",
            "right_angle_quote": "&raquo;",
            "right_double_quote": "&rdquo;",
            "right_single_quote": "&rsquo;",
        },
    },
    "tables": {
        "tablespan": True,
    },
    "thematic_breaks": True,
    "toc": {
        "levels": ["h1", "h2", "h3", "h4", "h5", "h6"],
        "tag": "[TOC]",
        "id": "toc",
    },
    "typographer": True,
    "references": True,
}


@dataclass(frozen=True)
class SchemaEntry:
    """type name and default value recorded for one dotted path."""

    type: str
    default: Any


@dataclass(frozen=True)
class CompiledSchema:
    """read-only lookup tables produced by compile_schema."""

    entries: Mapping[str, SchemaEntry]
    bits: Mapping[str, int]
    default_mask: int

    def has_children(self, path: str) -> bool:
        """returns True if any entry lives below the given path."""
        prefix = f"{path}."
        return any(key.startswith(prefix) for key in self.entries)


def type_name(value: Any) -> str:
    """returns the schema type name for a runtime value."""
    # bool is checked before int since bool subclasses int
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "str"
    if isinstance(value, (list, tuple)):
        return "list"
    if isinstance(value, Mapping):
        return "dict"
    return type(value).__name__


def compile_schema(
    tree: Mapping[str, Any], max_features: int = MAX_FEATURES
) -> CompiledSchema:
    """
    compiles a nested default-option tree into flat lookup tables.

    Every non-empty mapping is a branch and registers an implicit
    ``{path}.enabled`` flag, defaulting to True unless the branch carries
    its own ``enabled`` key. Boolean leaves get one bit each; anything else
    is recorded as a payload entry.

    Args:
        tree: nested mapping of option names to defaults
        max_features: number of bits available for boolean options

    Returns:
        compiled schema with entries, bit assignments and default mask

    Raises:
        SchemaError: if the tree holds more booleans than available bits
    """
    entries: dict[str, SchemaEntry] = {}
    bits: dict[str, int] = {}
    mask = 0

    def add_flag(path: str, default: bool) -> None:
        nonlocal mask
        bit = len(bits)
        if bit >= max_features:
            raise SchemaError(
                f"Too many boolean options: {path} exceeds {max_features} bits"
            )
        bits[path] = bit
        entries[path] = SchemaEntry("bool", default)
        if default:
            mask |= 1 << bit

    def walk(node: Mapping[str, Any], prefix: str) -> None:
        for key, value in node.items():
            path = f"{prefix}.{key}" if prefix else key
            if isinstance(value, Mapping) and value:
                children = dict(value)
                enabled = children.pop("enabled", True)
                if not isinstance(enabled, bool):
                    raise SchemaError(f"{path}.enabled must be a boolean")
                add_flag(f"{path}.enabled", enabled)
                walk(children, path)
            elif isinstance(value, bool):
                add_flag(path, value)
            else:
                entries[path] = SchemaEntry(type_name(value), value)

    walk(tree, "")

    return CompiledSchema(
        entries=MappingProxyType(entries),
        bits=MappingProxyType(bits),
        default_mask=mask,
    )


_compiled: Optional[CompiledSchema] = None


def default_schema() -> CompiledSchema:
    """returns the process-wide compiled default schema, compiling it once."""
    global _compiled  # pylint: disable=global-statement
    if _compiled is None:
        _compiled = compile_schema(DEFAULT_SCHEMA)
    return _compiled
