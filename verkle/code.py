"""Code chunk tree keys and splitting of contract code into 32-byte chunks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from verkle.parameters import CODE_OFFSET, U256_LIMIT, VERKLE_NODE_WIDTH
from verkle.util import hash_addr_int, swap_last_byte, zero_align_bytes

PUSH_OFFSET = 95
PUSH1 = PUSH_OFFSET + 1
PUSH32 = PUSH_OFFSET + 32

_CHUNK_LEN = 31


class _Hasher(Protocol):
    def hash64(self, bytes64: bytes) -> bytes: ...


@dataclass(frozen=True)
class Code:
    """Tree key of one code chunk of an account."""

    code_chunk: bytes

    @classmethod
    def from_chunk_id(cls, hasher: _Hasher, address: bytes, chunk_id: int) -> Code:
        if not 0 <= chunk_id or CODE_OFFSET + chunk_id >= U256_LIMIT:
            raise OverflowError("chunk id is outside the 256-bit range")
        index = (CODE_OFFSET + chunk_id) // VERKLE_NODE_WIDTH
        sub_index = CODE_OFFSET + chunk_id % VERKLE_NODE_WIDTH
        base_hash = hash_addr_int(hasher, address, index)
        return cls(swap_last_byte(base_hash, sub_index))


def chunkify_code(code: bytes) -> list[bytes]:
    """Split code into 32-byte chunks.

    Each chunk holds 31 bytes of code behind a leading byte that counts the
    push data carried over from the previous chunk.
    """
    if not code:
        raise ValueError("code must not be empty")
    aligned = zero_align_bytes(code, _CHUNK_LEN)
    chunks = [aligned[start : start + _CHUNK_LEN] for start in range(0, len(aligned), _CHUNK_LEN)]
    last_index = len(chunks) - 1

    prefixes = [0]
    leftover = 0
    last_chunk_push_data = False
    for chunk_index, chunk in enumerate(chunks):
        if leftover > len(chunk):
            if chunk_index == last_index:
                last_chunk_push_data = True
                break
            leftover -= len(chunk)
            prefixes.append(len(chunk))
            continue
        leftover = compute_leftover_push_data(chunk[leftover:])
        prefixes.append(leftover)

    result = [bytes([prefix]) + chunk for prefix, chunk in zip(prefixes, chunks)]
    if last_chunk_push_data:
        result.append(bytes(32))
    return result


def compute_leftover_push_data(code_chunk: bytes) -> int:
    """Return how many push-data bytes run past the end of ``code_chunk``."""
    pos = 0
    while pos < len(code_chunk):
        instruction = code_chunk[pos]
        pos += 1
        if PUSH1 <= instruction <= PUSH32:
            pos += instruction - PUSH_OFFSET
    return pos - len(code_chunk)