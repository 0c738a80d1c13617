from __future__ import annotations

from zlib import crc32

VIRTUAL_KEY_SEPARATOR = "."


def checksum(data: bytes) -> int:
    """CRC-32 (IEEE) of ``data`` as an unsigned 32-bit integer."""
    return crc32(data) & 0xFFFFFFFF


def hash_key(key: str) -> int:
    return checksum(key.encode("utf-8"))


def virtual_key(owner: str, index: int) -> str:
    return f"{owner}{VIRTUAL_KEY_SEPARATOR}{index}"
