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
from verkle.util import chunk64, chunk_bytes, swap_last_byte


def test_check_hardcoded_values():
    assert VERSION_LEAF_KEY == 0
    assert BALANCE_LEAF_KEY == 1
    assert NONCE_LEAF_KEY == 2
    assert CODE_KECCAK_LEAF_KEY == 3
    assert CODE_SIZE_LEAF_KEY == 4
    assert HEADER_STORAGE_OFFSET == 64
    assert CODE_OFFSET == 128
    assert VERKLE_NODE_WIDTH == 256
    assert MAIN_STORAGE_OFFSET == 256**31

    base = bytes(32)
    expected_suffixes = {
        VERSION_LEAF_KEY: 0,
        BALANCE_LEAF_KEY: 1,
        NONCE_LEAF_KEY: 2,
        CODE_KECCAK_LEAF_KEY: 3,
        CODE_SIZE_LEAF_KEY: 4,
        HEADER_STORAGE_OFFSET: 64,
        CODE_OFFSET: 128,
    }
    for leaf_key, suffix in expected_suffixes.items():
        assert swap_last_byte(base, leaf_key) == bytes(31) + bytes([suffix])


def test_check_invariants():
    assert VERKLE_NODE_WIDTH > CODE_OFFSET
    assert CODE_OFFSET > HEADER_STORAGE_OFFSET
    for leaf_key in (
        VERSION_LEAF_KEY,
        BALANCE_LEAF_KEY,
        NONCE_LEAF_KEY,
        CODE_KECCAK_LEAF_KEY,
        CODE_SIZE_LEAF_KEY,
    ):
        assert HEADER_STORAGE_OFFSET > leaf_key
    assert MAIN_STORAGE_OFFSET == VERKLE_NODE_WIDTH**31

    # One flag element plus VERKLE_NODE_WIDTH - 1 data elements.
    assert len(chunk_bytes(b"")) == VERKLE_NODE_WIDTH


def test_main_storage_offset_is_node_aligned():
    assert MAIN_STORAGE_OFFSET % VERKLE_NODE_WIDTH == 0
    assert MAIN_STORAGE_OFFSET < U256_LIMIT
    assert swap_last_byte(bytes([9]) * 32, MAIN_STORAGE_OFFSET % VERKLE_NODE_WIDTH) == (
        bytes([9]) * 31 + b"\x00"
    )


def test_encoding_flag_uses_node_width():
    assert chunk_bytes(b"")[0] == 2
    assert chunk64(bytes(64))[0] == 2 + VERKLE_NODE_WIDTH * 64