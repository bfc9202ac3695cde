"""Auxiliary data a verifier needs to rebuild the queries of a proof."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Protocol

from verkle.meta import STEM_SIZE

_EXT_MASK = 0b11
_DEPTH_SHIFT = 3
_MAX_DEPTH = 0xFF >> _DEPTH_SHIFT


class ExtPresent(Enum):
    """What extension sits where a key's stem would be placed."""

    # No extension at all: the key is absent and its slot is empty.
    NONE = 0
    # An extension for another stem: the key is absent.
    DIFFERENT_STEM = 1
    # The extension for the key's own stem; the key itself may still be absent.
    PRESENT = 2

    def __str__(self) -> str:
        return _EXT_LABELS[self]


_EXT_LABELS = {
    ExtPresent.NONE: "None",
    ExtPresent.DIFFERENT_STEM: "DifferentStem",
    ExtPresent.PRESENT: "Present",
}


class _Writer(Protocol):
    def write(self, data: bytes) -> object: ...


def _read_exact(reader: BinaryIO, size: int) -> bytes:
    data = reader.read(size)
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise EOFError(f"expected {size} bytes, got {got}")
    return bytes(data)


def _read_u32(reader: BinaryIO) -> int:
    return int.from_bytes(_read_exact(reader, 4), "little")


@dataclass(frozen=True)
class VerificationHint:
    """Depths and extension status of every proven key, sorted by stem.

    ``diff_stem_no_proof`` holds the stems that are in the trie but whose
    values are not themselves being proven.
    """

    depths: tuple[int, ...] = ()
    extension_present: tuple[ExtPresent, ...] = ()
    diff_stem_no_proof: frozenset[bytes] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        depths = tuple(self.depths)
        statuses = tuple(ExtPresent(status) for status in self.extension_present)
        stems = frozenset(bytes(stem) for stem in self.diff_stem_no_proof)
        if len(depths) != len(statuses):
            raise ValueError(
                f"{len(depths)} depths but {len(statuses)} extension statuses"
            )
        for depth in depths:
            if not 0 <= depth <= _MAX_DEPTH:
                raise ValueError(f"depth {depth} does not fit in 5 bits")
        for stem in stems:
            if len(stem) != STEM_SIZE:
                raise ValueError(f"stem must be {STEM_SIZE} bytes, got {len(stem)}")
        object.__setattr__(self, "depths", depths)
        object.__setattr__(self, "extension_present", statuses)
        object.__setattr__(self, "diff_stem_no_proof", stems)

    @property
    def sorted_stems(self) -> list[bytes]:
        """The stems with no value openings, in ascending order."""
        return sorted(self.diff_stem_no_proof)

    @classmethod
    def read(cls, reader: BinaryIO) -> VerificationHint:
        """Decode a hint from a binary stream.

        Raises EOFError if the stream ends early and ValueError on an
        unknown extension status.
        """
        num_stems = _read_u32(reader)
        stems: set[bytes] = {_read_exact(reader, STEM_SIZE) for _ in range(num_stems)}

        num_depths = _read_u32(reader)
        packed = _read_exact(reader, num_depths)
        depths = []
        statuses = []
        for byte in packed:
            status = byte & _EXT_MASK
            try:
                statuses.append(ExtPresent(status))
            except ValueError:
                raise ValueError(f"unexpected ext status number {status}") from None
            depths.append(byte >> _DEPTH_SHIFT)
        return cls(tuple(depths), tuple(statuses), frozenset(stems))

    def write(self, writer: _Writer) -> None:
        """Encode the hint onto a binary stream."""
        writer.write(len(self.diff_stem_no_proof).to_bytes(4, "little"))
        for stem in self.sorted_stems:
            writer.write(stem)
        writer.write(len(self.depths).to_bytes(4, "little"))
        writer.write(bytes(_pack(self.depths, self.extension_present)))

    def __str__(self) -> str:
        parts: list[str] = [str(depth) for depth in self.depths]
        parts += [str(status) for status in self.extension_present]
        parts += [stem.hex() for stem in self.sorted_stems]
        return "".join(f"{part} " for part in parts)


def _pack(depths: Iterable[int], statuses: Iterable[ExtPresent]) -> list[int]:
    # Extension status takes the low two bits, depth the top five.
    return [status.value | (depth << _DEPTH_SHIFT) for depth, status in zip(depths, statuses)]