"""Tests for content hashing helpers."""

from __future__ import annotations

import hashlib

from assetregistry.core.hasher import sha256_file, sha256_hex
from assetregistry.core.validation import is_content_hash


def test_sha256_hex_matches_hashlib():
    assert sha256_hex(b"hello") == hashlib.sha256(b"hello").hexdigest()


def test_sha256_file(tmp_path):
    path = tmp_path / "blob.bin"
    data = b"x" * 200_000
    path.write_bytes(data)
    digest = sha256_file(path)
    assert digest == hashlib.sha256(data).hexdigest()
    assert is_content_hash(digest)
