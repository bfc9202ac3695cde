import pytest

from verkle.util import (
    chunk64,
    chunk_bytes,
    hash_addr_int,
    swap_last_byte,
    zero_align_bytes,
)


class RecordingHasher:
    def __init__(self):
        self.inputs = []

    def hash64(self, bytes64):
        self.inputs.append(bytes64)
        return bytes(32)


def test_swap_byte():
    replacement_byte = 123
    hash32 = bytes([2] * 32)
    got = swap_last_byte(hash32, replacement_byte)
    expected = bytes([2] * 31 + [replacement_byte])
    assert got == expected


def test_swap_byte_rejects_large_value():
    with pytest.raises(ValueError):
        swap_last_byte(bytes(32), 256)


def test_swap_byte_rejects_wrong_hash_length():
    with pytest.raises(ValueError):
        swap_last_byte(bytes(31), 1)


def test_chunk_bytes_consistency():
    data = bytes([1] * 64)
    res_cbytes = chunk_bytes(data)
    res_c64 = chunk64(data)
    padded = res_c64 + [0] * (len(res_cbytes) - len(res_c64))
    assert padded == res_cbytes


def test_chunk_bytes_length_and_flag():
    result = chunk_bytes(b"\x05")
    assert len(result) == 256
    assert result[0] == 2 + 256
    assert result[1] == 5
    assert all(value == 0 for value in result[2:])


def test_chunk_bytes_rejects_oversized_input():
    with pytest.raises(ValueError):
        chunk_bytes(bytes(255 * 16 + 1))


def test_chunk64_flag_and_values():
    data = bytes(range(64))
    result = chunk64(data)
    assert len(result) == 5
    assert result[0] == 16386
    assert result[1] == int.from_bytes(bytes(range(16)), "little")


def test_chunk64_rejects_wrong_length():
    with pytest.raises(ValueError):
        chunk64(bytes(63))


def test_check_padding():
    for alignment in range(1, 150):
        for initial_num_elements in range(alignment):
            result = zero_align_bytes(bytes(initial_num_elements), alignment)
            assert len(result) % alignment == 0


def test_padding_keeps_aligned_input():
    assert zero_align_bytes(b"abc", 3) == b"abc"
    assert zero_align_bytes(b"abcd", 3) == b"abcd\x00\x00"


def test_padding_rejects_zero_alignment():
    with pytest.raises(ValueError):
        zero_align_bytes(b"abc", 0)


def test_hash_addr_int_layout():
    hasher = RecordingHasher()
    address = bytes(range(32))
    hash_addr_int(hasher, address, 0x0102)
    (hashed,) = hasher.inputs
    assert hashed[:32] == address
    assert hashed[32:] == b"\x02\x01" + bytes(30)


def test_hash_addr_int_rejects_overflow():
    with pytest.raises(OverflowError):
        hash_addr_int(RecordingHasher(), bytes(32), 1 << 256)