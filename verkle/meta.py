"""Commitment metadata stored for stems and branches of the trie."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

POINT_SIZE = 64
SCALAR_SIZE = 32
STEM_SIZE = 31

_STEM_META_SIZE = 3 * (POINT_SIZE + SCALAR_SIZE)
_BRANCH_META_SIZE = POINT_SIZE + SCALAR_SIZE


def _check_point(name: str, point: bytes) -> None:
    if len(point) != POINT_SIZE:
        raise ValueError(f"{name} must be a {POINT_SIZE} byte point, got {len(point)} bytes")


def _check_scalar(name: str, scalar: int) -> None:
    if not 0 <= scalar < 1 << (8 * SCALAR_SIZE):
        raise ValueError(f"{name} does not fit in {SCALAR_SIZE} bytes")


def _scalar_bytes(scalar: int) -> bytes:
    return scalar.to_bytes(SCALAR_SIZE, "little")


def _scalar_from(data: bytes) -> int:
    return int.from_bytes(data, "little")


@dataclass(frozen=True)
class StemMeta:
    """Commitments of a stem and the field hashes of each.

    Points are held in their 64-byte uncompressed form, scalars as integers
    serialised in 32 little-endian bytes.
    """

    c_1: bytes
    hash_c1: int
    c_2: bytes
    hash_c2: int
    stem_commitment: bytes
    hash_stem_commitment: int

    def __post_init__(self) -> None:
        for name in ("c_1", "c_2", "stem_commitment"):
            object.__setattr__(self, name, bytes(getattr(self, name)))
            _check_point(name, getattr(self, name))
        for name in ("hash_c1", "hash_c2", "hash_stem_commitment"):
            _check_scalar(name, getattr(self, name))

    @classmethod
    def from_bytes(cls, data: bytes) -> StemMeta:
        if len(data) != _STEM_META_SIZE:
            raise ValueError(
                f"stem meta must be {_STEM_META_SIZE} bytes, got {len(data)}"
            )
        data = bytes(data)
        points = [data[i * POINT_SIZE : (i + 1) * POINT_SIZE] for i in range(3)]
        scalar_part = data[3 * POINT_SIZE :]
        scalars = [
            _scalar_from(scalar_part[i * SCALAR_SIZE : (i + 1) * SCALAR_SIZE])
            for i in range(3)
        ]
        return cls(
            c_1=points[0],
            hash_c1=scalars[0],
            c_2=points[1],
            hash_c2=scalars[1],
            stem_commitment=points[2],
            hash_stem_commitment=scalars[2],
        )

    def to_bytes(self) -> bytes:
        return b"".join(
            (
                self.c_1,
                self.c_2,
                self.stem_commitment,
                _scalar_bytes(self.hash_c1),
                _scalar_bytes(self.hash_c2),
                _scalar_bytes(self.hash_stem_commitment),
            )
        )

    def __repr__(self) -> str:
        return (
            f"StemMeta(c_1={self.c_1.hex()}, c_2={self.c_2.hex()}, "
            f"hash_c1={_scalar_bytes(self.hash_c1).hex()}, "
            f"hash_c2={_scalar_bytes(self.hash_c2).hex()}, "
            f"stem_commitment={self.stem_commitment.hex()}, "
            f"hash_stem_commitment={_scalar_bytes(self.hash_stem_commitment).hex()})"
        )


@dataclass(frozen=True)
class BranchMeta:
    """Commitment of a branch node and its field hash."""

    commitment: bytes
    hash_commitment: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "commitment", bytes(self.commitment))
        _check_point("commitment", self.commitment)
        _check_scalar("hash_commitment", self.hash_commitment)

    @classmethod
    def from_bytes(cls, data: bytes) -> BranchMeta:
        if len(data) != _BRANCH_META_SIZE:
            raise ValueError(
                f"BranchMeta was not serialised properly, got {bytes(data).hex()}"
            )
        data = bytes(data)
        return cls(
            commitment=data[:POINT_SIZE],
            hash_commitment=_scalar_from(data[POINT_SIZE:]),
        )

    def to_bytes(self) -> bytes:
        return self.commitment + _scalar_bytes(self.hash_commitment)

    def __repr__(self) -> str:
        return (
            f"BranchMeta(commitment={self.commitment.hex()}, "
            f"hash_commitment={_scalar_bytes(self.hash_commitment).hex()})"
        )


BranchChild = Union[bytes, BranchMeta]
"""A child of a branch: a 31-byte stem id or the metadata of a branch."""


def branch_child_from_bytes(data: bytes) -> BranchChild:
    """Decode a branch child: 31 bytes are a stem id, anything else a branch."""
    if len(data) == STEM_SIZE:
        return bytes(data)
    return BranchMeta.from_bytes(data)


def branch_child_to_bytes(child: BranchChild) -> bytes:
    """Encode a branch child as stored on disk."""
    if isinstance(child, BranchMeta):
        return child.to_bytes()
    stem = bytes(child)
    if len(stem) != STEM_SIZE:
        raise ValueError(f"stem id must be {STEM_SIZE} bytes, got {len(stem)}")
    return stem