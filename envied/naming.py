from __future__ import annotations

import keyword
import re
from typing import Iterable, Optional, Set, Tuple

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_constant_case(name: str) -> str:
    """Convert ``lowerCamelCase`` to ``UPPER_SNAKE_CASE``.

    An underscore is inserted before every uppercase letter that follows a
    lowercase letter or a digit. Names without lowercase letters are returned
    unchanged, so the conversion is idempotent on its own output.
    """

    if not any(ch.islower() for ch in name):
        return name
    return _WORD_BOUNDARY.sub("_", name).upper()


def _clean(name: str) -> str:
    return "".join(ch if ch == "_" or f"_{ch}".isidentifier() else "_" for ch in name)


def sanitize_identifier(name: str, used: Set[str]) -> Tuple[str, Optional[str]]:
    """Return a unique Python identifier for ``name`` and the original name
    when it had to change.

    Names already in ``used`` get a numeric suffix, so callers can seed it with
    names that must not be redefined.
    """

    sanitized = _clean(name) or "field"
    if not sanitized[0].isidentifier():
        sanitized = f"field_{sanitized}"
    if keyword.iskeyword(sanitized):
        sanitized = f"{sanitized}_"
    candidate = sanitized
    index = 1
    while candidate in used:
        index += 1
        candidate = f"{sanitized}_{index}"
    original = None if candidate == name else name
    used.add(candidate)
    return candidate, original


def generated_class_name(
    declared: str, override: Optional[str] = None, reserved: Iterable[str] = ()
) -> str:
    """Name of the generated class: ``_`` + the override or the declared name.

    A trailing underscore is appended while the name is in ``reserved``.
    """

    cleaned = _clean(override or declared)
    if not cleaned:
        cleaned = "Env"
    if not cleaned[0].isidentifier():
        cleaned = f"Env{cleaned}"
    name = f"_{cleaned}"
    taken = set(reserved)
    while name in taken:
        name = f"{name}_"
    return name
