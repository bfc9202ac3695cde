"""Account header and storage tree keys."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from verkle.parameters import (
    BALANCE_LEAF_KEY,
    CODE_KECCAK_LEAF_KEY,
    CODE_OFFSET,
    CODE_SIZE_LEAF_KEY,
    HEADER_STORAGE_OFFSET,
    MAIN_STORAGE_OFFSET,
    NONCE_LEAF_KEY,
    U256_LIMIT,
    VERKLE_NODE_WIDTH,
    VERSION_LEAF_KEY,
)
from verkle.util import chunk64, hash_addr_int, swap_last_byte


class Hasher:
    """Hashes 64-byte inputs with a commitment over their 16-byte chunks.

    ``commit`` receives the five scalars of the chunked input in order of
    their generator index and returns a 32-byte digest.
    """

    def __init__(self, commit: Callable[[Sequence[int]], bytes]) -> None:
        self._commit = commit

    def hash64(self, bytes64: bytes) -> bytes:
        digest = bytes(self._commit(chunk64(bytes64)))
        if len(digest) != 32:
            raise ValueError(f"commitment must be 32 bytes, got {len(digest)}")
        return digest


@dataclass(frozen=True)
class Header:
    """Tree keys of an account's header fields."""

    version: bytes
    balance: bytes
    nonce: bytes
    code_keccak: bytes
    code_size: bytes

    @classmethod
    def from_address(cls, hasher: Hasher, address: bytes, tree_index: int = 0) -> Header:
        base_hash = hash_addr_int(hasher, address, tree_index)
        return cls(
            version=swap_last_byte(base_hash, VERSION_LEAF_KEY),
            balance=swap_last_byte(base_hash, BALANCE_LEAF_KEY),
            nonce=swap_last_byte(base_hash, NONCE_LEAF_KEY),
            code_keccak=swap_last_byte(base_hash, CODE_KECCAK_LEAF_KEY),
            code_size=swap_last_byte(base_hash, CODE_SIZE_LEAF_KEY),
        )


@dataclass(frozen=True)
class Storage:
    """Tree key of one storage slot of an account."""

    storage_slot: bytes

    @classmethod
    def from_slot(cls, hasher: Hasher, address: bytes, storage_key: int) -> Storage:
        if storage_key < 0:
            raise OverflowError("storage key must not be negative")
        if storage_key < CODE_OFFSET - HEADER_STORAGE_OFFSET:
            pos = HEADER_STORAGE_OFFSET + storage_key
        else:
            pos = MAIN_STORAGE_OFFSET + storage_key
        if pos >= U256_LIMIT:
            raise OverflowError("storage position exceeds 256 bits")
        base_hash = hash_addr_int(hasher, address, pos // VERKLE_NODE_WIDTH)
        return cls(swap_last_byte(base_hash, pos % VERKLE_NODE_WIDTH))


def addr20_to_addr32(addr20: bytes) -> bytes:
    """Left-pad a 20-byte address with zeroes to 32 bytes."""
    if len(addr20) != 20:
        raise ValueError(f"expected a 20 byte address, got {len(addr20)} bytes")
    return bytes(12) + bytes(addr20)