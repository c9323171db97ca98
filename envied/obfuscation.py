"""Reversible XOR obfuscation for generated values.

This deters casual inspection of generated sources only. The key is emitted
next to the data, so anyone holding the generated module can recover the
value.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Any, Callable, Tuple

KeyFactory = Callable[[int], bytes]


@dataclass(frozen=True)
class ObfuscatedValue:
    data: Tuple[int, ...]
    key: Tuple[int, ...]


def xor_bytes(data: bytes, key: bytes) -> bytes:
    if len(key) < len(data):
        raise ValueError("Obfuscation key must be at least as long as the data")
    return bytes(d ^ k for d, k in zip(data, key))


def value_to_text(value: Any) -> str:
    return str(value)


def text_to_value(text: str, base_type: type) -> Any:
    if base_type is bool:
        return text == "True"
    return base_type(text)


def obfuscate(value: Any, key_factory: KeyFactory = secrets.token_bytes) -> ObfuscatedValue:
    """Encode ``value`` with a fresh random key of the same length."""

    data = value_to_text(value).encode("utf-8")
    key = key_factory(len(data))
    return ObfuscatedValue(data=tuple(xor_bytes(data, key)), key=tuple(key))


def reveal(obfuscated: ObfuscatedValue, base_type: type) -> Any:
    text = xor_bytes(bytes(obfuscated.data), bytes(obfuscated.key)).decode("utf-8")
    return text_to_value(text, base_type)
