# verkle

Building blocks for a verkle-trie state store:

- **Tree-key derivation** for account headers, contract code chunks and
  storage slots (`verkle.keys`, `verkle.code`, `verkle.util`,
  `verkle.parameters`).
- **EVM code chunking**: split bytecode into 32-byte chunks. Each chunk starts
  with a byte that says how much PUSH data runs over from the chunk before it
  (`verkle.code`).
- **Node metadata encoding**: `StemMeta`, `BranchMeta` and branch children in
  their stored byte form (`verkle.meta`).
- **A disk key-value store** with atomic write batches (`verkle.kv`).
- **Proof hints**: read and write the verification hint that goes with a verkle
  proof (`verkle.proof`).

## Installing

```
pip install .
```

The package has no runtime dependencies. To run the tests:

```
pip install ".[test]"
pytest
```

## Chunking contract code

```python
from verkle.code import chunkify_code, compute_leftover_push_data

# PUSH4 followed by only two bytes: two bytes of push data are still owed.
assert compute_leftover_push_data(bytes([99, 99, 98])) == 2

chunks = chunkify_code(bytecode)   # list of 32-byte chunks
```

The code is padded with zeros to a multiple of 31 bytes. Each 31-byte piece
gets one leading byte, which gives the number of bytes at its start that are
still PUSH data from the previous chunk. If the push data of the last
instruction runs past the end of the final chunk, an all-zero chunk is added.
Empty code raises `ValueError`.

## Tree keys

Key derivation needs a `Hasher`. It is built from a commitment function that
receives the five integers produced by `verkle.util.chunk64` (an encoding flag
followed by four 16-byte little-endian chunks of the 64-byte input) and must
return 32 bytes. The package does not ship the elliptic-curve commitment; you
supply it:

```python
import hashlib

from verkle.code import Code
from verkle.keys import Hasher, Header, Storage, addr20_to_addr32

def commit(scalars):
    # Stand-in for a real vector commitment.
    return hashlib.sha256(b"".join(s.to_bytes(16, "little") for s in scalars)).digest()

hasher = Hasher(commit)
address = addr20_to_addr32(bytes(20))   # 20-byte address left-padded to 32 bytes

header = Header.from_address(hasher, address)      # tree_index defaults to 0
slot = Storage.from_slot(hasher, address, 5)
chunk = Code.from_chunk_id(hasher, address, 0)

header.balance, header.nonce, header.version, header.code_keccak, header.code_size
slot.storage_slot
chunk.code_chunk
```

Each key is the hash of the address and a tree index, with its last byte
replaced by a sub-index. `Storage` places slots below 64 next to the header
(offset 64) and all others in main storage (offset 256**31). `Code` places
chunks from offset 128. Positions beyond 256 bits raise `OverflowError`. The
layout constants live in `verkle.parameters`.

## Node metadata

`StemMeta` holds three 64-byte points (`c_1`, `c_2`, `stem_commitment`) and
their scalar hashes; `BranchMeta` holds one point and its hash. Both are frozen
dataclasses with `to_bytes()` / `from_bytes()`; scalars are written as 32
little-endian bytes after the points. A branch child is either a 31-byte stem
id or a `BranchMeta`; `branch_child_to_bytes` and `branch_child_from_bytes`
encode and decode it, telling them apart by length.

## Disk key-value store

```python
from verkle.kv import DiskKV, WriteBatch

with DiskKV("./db/verkle_db") as kv:
    batch = WriteBatch()
    batch.put(b"key", b"value")
    kv.flush(batch)                  # written atomically; later puts win
    assert kv.fetch(b"key") == b"value"
    assert kv.fetch(b"missing") is None
```

`DiskKV` creates the directory if needed and keeps its data in an SQLite file
inside it. `DiskKV.open_default()` opens `DiskKV.DEFAULT_PATH`
(`./db/verkle_db`).

## Proof hints

`VerificationHint.read` and `VerificationHint.write` handle the serialised
hint. It holds a little-endian `u32` count of the stems that are present but
not proven, then those 31-byte stems in ascending order, then a `u32` count of
per-key entries, then one byte per key. That byte packs the key's
`ExtPresent` status into its low two bits and its depth into its upper five
bits. Reading raises `EOFError` on a short stream and `ValueError` on an
unknown status. `str(hint)` lists depths, statuses and hex stems separated by
spaces.

## What this package does not do

- It has no trie: nothing inserts keys, computes root commitments or walks
  branches and stems.
- It has no node database that stores `StemMeta`, `BranchMeta` or leaves by
  path; `DiskKV` is a plain byte-keyed store and node layout on top of it is
  left to the caller.
- It does not create or check verkle proofs; only the verification hint is
  encoded and decoded.
- It has no elliptic-curve or commitment arithmetic; `Hasher` relies on a
  commitment function you provide.