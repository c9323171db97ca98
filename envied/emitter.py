from __future__ import annotations

import math
import secrets
from typing import Any, List, Optional, Sequence

from .errors import DeclarationError
from .obfuscation import KeyFactory, obfuscate
from .resolver import ResolvedClass, ResolvedField

HEADER = "# Generated by envied. Do not edit by hand."

INDENT = "    "

_RUNTIME_HELPERS = '''
class _Obfuscated:
    """Decodes an obfuscated value on first access and caches it."""

    def __init__(
        self, data: Tuple[int, ...], key: Tuple[int, ...], cast: Callable[[str], Any]
    ) -> None:
        self._data = data
        self._key = key
        self._cast = cast
        self._name = ""
        self._value: Any = None
        self._decoded = False

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if not self._decoded:
            raw = bytes(d ^ k for d, k in zip(self._data, self._key))
            self._value = self._cast(raw.decode("utf-8"))
            self._decoded = True
        return self._value

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"{self._name} is read-only")


def _as_bool(text: str) -> bool:
    return text == "True"
'''.strip("\n")

_CASTS = {str: "str", int: "int", float: "float", bool: "_as_bool"}

# Names the generated module looks up at class-body and module level.
RESERVED_NAMES = frozenset({"_Obfuscated", "_as_bool", "str", "int", "float"})


def render_literal(value: Any) -> str:
    if isinstance(value, float) and not math.isfinite(value):
        return f"float({str(value)!r})"
    return repr(value)


def _render_field(item: ResolvedField, key_factory: Optional[KeyFactory]) -> List[str]:
    if not item.obfuscate:
        return [f"{item.name}: {item.annotation} = {render_literal(item.value)}"]

    encoded = obfuscate(item.value, key_factory or secrets.token_bytes)
    return [
        f"{item.name}: {item.annotation} = _Obfuscated(  # type: ignore[assignment]",
        f"{INDENT}{encoded.data!r},",
        f"{INDENT}{encoded.key!r},",
        f"{INDENT}{_CASTS[item.base_type]},",
        ")",
    ]


def render_class(
    resolved: ResolvedClass, key_factory: Optional[KeyFactory] = None
) -> str:
    """Render a single generated class.

    Plain values become class attributes holding literals. Obfuscated values
    become ``_Obfuscated`` descriptors, so the module produced by
    :func:`render_module` must be used for classes containing them.
    """

    source = resolved.env_path.replace("\\", "\\\\").replace('"', '\\"')
    lines = [
        f"class {resolved.class_name}:",
        f'{INDENT}"""Values generated from {source}."""',
    ]
    if resolved.fields:
        lines.append("")
    for item in resolved.fields:
        lines.extend(f"{INDENT}{line}" for line in _render_field(item, key_factory))
    return "\n".join(lines) + "\n"


def render_module(
    classes: Sequence[ResolvedClass], key_factory: Optional[KeyFactory] = None
) -> str:
    """Render a complete Python module holding every class in ``classes``.

    Class and field names must not be in :data:`RESERVED_NAMES`.
    """

    for resolved in classes:
        clashes = [
            name
            for name in [resolved.class_name, *(item.name for item in resolved.fields)]
            if name in RESERVED_NAMES
        ]
        if clashes:
            raise DeclarationError(
                f"{resolved.class_name} uses reserved generated names: {clashes}"
            )

    sources = sorted({resolved.env_path for resolved in classes})
    needs_helpers = any(resolved.has_obfuscated for resolved in classes)
    needs_optional = needs_helpers or any(
        item.nullable for resolved in classes for item in resolved.fields
    )

    parts = [HEADER]
    parts.extend(f"# Source: {source}" for source in sources)
    parts.extend(["", "from __future__ import annotations"])

    typing_names = []
    if needs_helpers:
        typing_names.extend(["Any", "Callable"])
    if needs_optional:
        typing_names.append("Optional")
    if needs_helpers:
        typing_names.append("Tuple")
    if typing_names:
        parts.extend(["", f"from typing import {', '.join(typing_names)}"])

    body = []
    if needs_helpers:
        body.append(_RUNTIME_HELPERS + "\n")
    body.extend(render_class(resolved, key_factory) for resolved in classes)

    head = "\n".join(parts) + "\n"
    if not body:
        return head
    return head + "\n\n" + "\n\n".join(body)
