"""
Tests for digest contexts: published vectors, streaming and clone semantics.
"""

import pytest

from cryptoplug import DigestKind, HashContext


EMPTY_VECTORS = {
    "sha1": "da39a3ee5e6b4b0d3255bfef95601890afd80709",
    "md4": "31d6cfe0d16ae931b73c59d7e0c089c0",
    "md5": "d41d8cd98f00b204e9800998ecf8427e",
    "ripemd160": "9c1185a5c5e9fc54612808977ee8f548b2258d31",
    "sha256": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
    "sha384": ("38b060a751ac96384cd9327eb1b1e36a21fdb71114be0743"
               "4c0cc7bf63f6e1da274edebfe76f65fbd51ad2f14898b95b"),
    "sha512": ("cf83e1357eefb8bdf1542850d66d8007d620e4050b5715dc83f4a921d36ce9ce"
               "47d0d13c5d85f2b0ff8318d2877eec2f63b931bd47417a81a538327af927da3e"),
}

ABC_VECTORS = {
    "sha1": "a9993e364706816aba3e25717850c26c9cd0d89d",
    "md4": "a448017aaf21d8525fc10ae87aa6729d",
    "md5": "900150983cd24fb0d6963f7d28e17f72",
    "ripemd160": "8eb208f7e05d987a9b044a8e98c6b087f15a0bfc",
    "sha256": "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad",
}


def digest(provider, name, *chunks):
    ctx = provider.create_context(name)
    for chunk in chunks:
        ctx.update(chunk)
    return ctx.final()


class TestKnownAnswers:
    """Digests must reproduce published test vectors."""

    @pytest.mark.parametrize("name,expected", sorted(EMPTY_VECTORS.items()))
    def test_empty_input(self, provider, name, expected):
        """Test the digest of the empty string."""
        result = digest(provider, name)
        assert result.hex() == expected

    @pytest.mark.parametrize("name,expected", sorted(ABC_VECTORS.items()))
    def test_abc(self, provider, name, expected):
        """Test the digest of "abc"."""
        assert digest(provider, name, b"abc").hex() == expected

    @pytest.mark.parametrize("name", sorted(EMPTY_VECTORS))
    def test_output_length_matches_descriptor(self, provider, name):
        """Test that output length equals the declared digest size."""
        ctx = provider.create_context(name)
        ctx.update(b"some data")
        out = ctx.final()
        assert len(out) == ctx.digest_size == ctx.descriptor.kind.digest_size

    def test_digest_sizes(self):
        """Test the digest size declared for every kind."""
        sizes = {kind: kind.digest_size for kind in DigestKind}
        assert sizes[DigestKind.MD4] == 16
        assert sizes[DigestKind.RIPEMD160] == 20
        assert sizes[DigestKind.SHA384] == 48


class TestStreaming:
    """Digest of a stream depends only on the concatenated input."""

    @pytest.mark.parametrize("name", sorted(EMPTY_VECTORS))
    def test_concatenation(self, provider, name):
        """Test that update(a); update(b) equals update(a + b)."""
        a = b"The quick brown fox "
        b = b"jumps over the lazy dog" * 7
        assert digest(provider, name, a, b) == digest(provider, name, a + b)

    def test_order_sensitive(self, provider):
        """Test that chunk order matters."""
        assert digest(provider, "sha256", b"ab", b"cd") != digest(provider, "sha256", b"cd", b"ab")

    def test_final_is_repeatable(self, provider):
        """Test that final() can be called twice with the same result."""
        ctx = provider.create_context("sha256")
        ctx.update(b"abc")
        first = ctx.final()
        assert ctx.final() == first

    def test_update_after_final_extends_stream(self, provider):
        """Test that absorbing continues after final()."""
        ctx = provider.create_context("md4")
        ctx.update(b"hello ")
        ctx.final()
        ctx.update(b"world")
        assert ctx.final() == digest(provider, "md4", b"hello world")

    def test_clear_restarts(self, provider):
        """Test that clear() discards absorbed data."""
        ctx = provider.create_context("sha1")
        ctx.update(b"discard me")
        ctx.clear()
        assert ctx.final().hex() == EMPTY_VECTORS["sha1"]

    def test_accepts_bytearray_and_memoryview(self, provider):
        """Test updates with other bytes-like objects."""
        assert (digest(provider, "md5", bytearray(b"ab"), memoryview(b"c"))
                == bytes.fromhex(ABC_VECTORS["md5"]))


class TestClone:
    """Clones get a fresh engine and never share state."""

    def test_clone_is_fresh(self, provider):
        """Test that a clone starts from an empty state."""
        ctx = provider.create_context("sha256")
        ctx.update(b"abc")
        clone = ctx.clone()

        assert isinstance(clone, HashContext)
        assert clone.descriptor == ctx.descriptor
        assert clone.final().hex() == EMPTY_VECTORS["sha256"]
        assert ctx.final().hex() == ABC_VECTORS["sha256"]

    def test_clone_is_independent(self, provider):
        """Test that updating a clone leaves the original untouched."""
        ctx = provider.create_context("ripemd160")
        clone = ctx.clone()
        clone.update(b"abc")

        assert ctx.final().hex() == EMPTY_VECTORS["ripemd160"]
        assert clone.final().hex() == ABC_VECTORS["ripemd160"]
