"""Byte helpers used to derive tree keys."""

from __future__ import annotations

from typing import Protocol

from verkle.parameters import VERKLE_NODE_WIDTH

_TYPE_ENCODING = 2
_COMMIT_CAPACITY = VERKLE_NODE_WIDTH - 1


class _Hasher(Protocol):
    def hash64(self, bytes64: bytes) -> bytes: ...


def swap_last_byte(hash32: bytes, byte: int) -> bytes:
    """Return ``hash32`` with its final byte replaced by ``byte``."""
    if len(hash32) != 32:
        raise ValueError(f"expected a 32 byte hash, got {len(hash32)} bytes")
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"number cannot be represented as a byte: {byte}")
    return bytes(hash32[:-1]) + bytes([byte])


def hash_addr_int(hasher: _Hasher, address: bytes, integer: int) -> bytes:
    """Hash a 32-byte address followed by ``integer`` as 32 little-endian bytes."""
    if len(address) != 32:
        raise ValueError(f"expected a 32 byte address, got {len(address)} bytes")
    integer_bytes = integer.to_bytes(32, "little")
    return hasher.hash64(bytes(address) + integer_bytes)


def _encoding_flag(length: int) -> int:
    return _TYPE_ENCODING + 256 * length


def chunk_bytes(data: bytes) -> list[int]:
    """Split ``data`` into 16-byte little-endian integers behind an encoding flag.

    The input is zero padded to the full commitment capacity, so the result
    always holds ``VERKLE_NODE_WIDTH`` integers.
    """
    limit = _COMMIT_CAPACITY * 16
    if len(data) > limit:
        raise ValueError(f"input of {len(data)} bytes exceeds the limit of {limit}")
    aligned = (
        _encoding_flag(len(data)).to_bytes(16, "little")
        + bytes(data)
        + bytes(limit - len(data))
    )
    return [
        int.from_bytes(aligned[start : start + 16], "little")
        for start in range(0, len(aligned), 16)
    ]


def chunk64(bytes64: bytes) -> list[int]:
    """Split exactly 64 bytes into an encoding flag and four 16-byte integers."""
    if len(bytes64) != 64:
        raise ValueError(f"expected 64 bytes, got {len(bytes64)}")
    data = bytes(bytes64)
    return [_encoding_flag(64)] + [
        int.from_bytes(data[start : start + 16], "little") for start in range(0, 64, 16)
    ]


def zero_align_bytes(data: bytes, alignment: int) -> bytes:
    """Pad ``data`` with zeroes until its length is a multiple of ``alignment``."""
    if alignment <= 0:
        raise ValueError("alignment must be positive")
    remainder = len(data) % alignment
    if remainder == 0:
        return bytes(data)
    return bytes(data) + bytes(alignment - remainder)