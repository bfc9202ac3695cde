"""Verkle trie key derivation, EVM code chunking, node metadata encoding, a disk key-value store and proof hints."""

__version__ = "0.1.0"