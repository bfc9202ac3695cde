"""Tree-key layout parameters shared by header, code and storage keys."""

VERSION_LEAF_KEY = 0
BALANCE_LEAF_KEY = 1
NONCE_LEAF_KEY = 2
CODE_KECCAK_LEAF_KEY = 3
CODE_SIZE_LEAF_KEY = 4

HEADER_STORAGE_OFFSET = 64
CODE_OFFSET = 128
VERKLE_NODE_WIDTH = 256
MAIN_STORAGE_OFFSET = 1 << 248

U256_LIMIT = 1 << 256