"""FNV-1a 64-bit hashing used to derive generator seeds."""

from __future__ import annotations

FNV_OFFSET_BASIS = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3
MASK64 = 0xFFFFFFFFFFFFFFFF


def _key_bytes(key: int | str | bytes) -> bytes:
    if isinstance(key, bool):
        raise TypeError("bool is not a valid hash key")
    if isinstance(key, int):
        if key < 0 or key > MASK64:
            raise ValueError(f"integer key {key} outside uint64 range")
        return key.to_bytes(8, "little")
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, bytes | bytearray):
        return bytes(key)
    raise TypeError(f"unsupported hash key type: {type(key).__name__}")


def fnv1a64(key: int | str | bytes) -> int:
    """
    FNV-1a 64 digest of `key`.
    Integers are hashed as 8 little-endian bytes, strings as UTF-8.
    """
    h = FNV_OFFSET_BASIS
    for b in _key_bytes(key):
        h ^= b
        h = (h * FNV_PRIME) & MASK64
    return h


def tagged_hash(tag: str, value: int | str) -> int:
    """Hash of "tag:value"; tags keep seeds for different purposes apart."""
    return fnv1a64(f"{tag}:{value}")
