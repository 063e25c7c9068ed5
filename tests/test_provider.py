"""
Tests for the provider: feature discovery, context factory and backend bootstrap.
"""

import logging
import threading

import pytest

from cryptoplug import (
    CATALOGUE,
    CipherContext,
    HashContext,
    KdfContext,
    PLUGIN_VERSION,
    Provider,
    ProviderConfig,
    create_provider,
)
from cryptoplug import provider as provider_module

EXPECTED_FEATURES = [
    "sha1", "md4", "md5", "ripemd160", "sha256", "sha384", "sha512",
    "aes128-ecb", "aes128-cfb", "aes128-cbc",
    "aes192-ecb", "aes192-cfb", "aes192-cbc",
    "aes256-ecb", "aes256-cfb", "aes256-cbc",
    "blowfish-ecb", "tripledes-ecb",
    "des-ecb", "des-cbc", "des-cfb",
    "pbkdf2(sha1)",
]


@pytest.fixture
def fresh_backend(monkeypatch):
    """Give Provider an unused once-gate and count backend loads."""
    calls = []

    def fake_load():
        calls.append(threading.get_ident())
        return {"cryptography": "99.0.0", "openssl": "OpenSSL test"}

    monkeypatch.setattr(Provider, "_backend_once", provider_module._Once())
    monkeypatch.setattr(provider_module.backend, "load", fake_load)
    return calls


class TestFeatures:
    """Test feature discovery."""

    def test_features_order(self, provider):
        """Test the advertised names and their order."""
        assert provider.features() == EXPECTED_FEATURES

    def test_features_stable(self, provider):
        """Test that repeated calls return equal, independent lists."""
        first = provider.features()
        first.append("tampered")
        assert provider.features() == EXPECTED_FEATURES
        assert list(CATALOGUE) == EXPECTED_FEATURES

    def test_supports(self, provider):
        """Test membership checks."""
        assert provider.supports("sha256")
        assert not provider.supports("sha3-256")

    def test_catalogue_is_read_only(self):
        """Test that the catalogue cannot be extended at runtime."""
        with pytest.raises(TypeError):
            CATALOGUE["rot13"] = None


class TestCreateContext:
    """Test the context factory."""

    @pytest.mark.parametrize("name", EXPECTED_FEATURES)
    def test_every_feature_creates_a_context(self, provider, name):
        """Test that each advertised name yields the right context variant."""
        ctx = provider.create_context(name)
        expected = {
            "pbkdf2(sha1)": KdfContext,
        }.get(name, HashContext if name in EXPECTED_FEATURES[:7] else CipherContext)
        assert isinstance(ctx, expected)
        assert ctx.name == name
        assert ctx.descriptor is CATALOGUE[name]
        assert ctx.provider is provider

    def test_unknown_name_is_not_supported(self, provider):
        """Test that unknown names give None rather than an exception."""
        assert provider.create_context("not-a-real-algorithm") is None
        assert provider.create_context("") is None
        assert provider.create_context("SHA256") is None

    def test_contexts_are_independent(self, provider):
        """Test that two contexts for one name do not share state."""
        a = provider.create_context("sha256")
        b = provider.create_context("sha256")
        a.update(b"abc")
        assert a.final() != b.final()

    def test_contexts_used_from_separate_threads(self, provider):
        """Test that distinct contexts of one algorithm hash correctly in parallel."""
        expected = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        barrier = threading.Barrier(8)
        digests = []
        lock = threading.Lock()

        def worker():
            ctx = provider.create_context("sha256")
            barrier.wait()
            for _ in range(200):
                ctx.clear()
                for byte in b"abc":
                    ctx.update(bytes([byte]))
                digest = ctx.final().hex()
                with lock:
                    digests.append(digest)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(digests) == 8 * 200
        assert set(digests) == {expected}

    def test_create_context_initializes_backend(self, provider, fresh_backend):
        """Test that creating a context bootstraps the backend."""
        assert not Provider.backend_ready()
        provider.create_context("md5")
        assert Provider.backend_ready()
        assert len(fresh_backend) == 1

    def test_unknown_name_does_not_initialize(self, provider, fresh_backend):
        """Test that probing an unsupported name has no side effects."""
        provider.create_context("nope")
        assert fresh_backend == []


class TestInitialization:
    """Test one-time backend bootstrap."""

    def test_initialize_is_idempotent(self, provider, fresh_backend):
        """Test that repeated initialization loads the backend once."""
        provider.initialize()
        provider.initialize()
        Provider(ProviderConfig()).initialize()
        assert len(fresh_backend) == 1

    def test_concurrent_first_use(self, fresh_backend):
        """Test that racing initializers load the backend exactly once."""
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            Provider(ProviderConfig()).initialize()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(fresh_backend) == 1

    def test_old_backend_warns_but_continues(self, monkeypatch, caplog):
        """Test that a version mismatch is logged as a warning only."""
        monkeypatch.setattr(Provider, "_backend_once", provider_module._Once())
        monkeypatch.setattr(provider_module.backend, "load",
                            lambda: {"cryptography": "3.4.8", "openssl": "OpenSSL test"})

        with caplog.at_level(logging.WARNING, logger="cryptoplug.provider"):
            Provider(ProviderConfig(min_backend_version="47.0.0")).initialize()

        assert "too old" in caplog.text
        assert Provider.backend_ready()

    def test_current_backend_is_quiet(self, monkeypatch, caplog):
        """Test that an acceptable backend produces no warning."""
        monkeypatch.setattr(Provider, "_backend_once", provider_module._Once())

        with caplog.at_level(logging.WARNING, logger="cryptoplug.provider"):
            Provider(ProviderConfig()).initialize()

        assert "too old" not in caplog.text


class TestPluginEntryPoint:
    """Test the host-facing factory."""

    def test_create_provider(self):
        """Test that the plugin entry point builds a provider."""
        p = create_provider(ProviderConfig())
        assert isinstance(p, Provider)
        assert p.name == "cryptoplug"
        assert isinstance(PLUGIN_VERSION, int)

    def test_create_provider_reads_environment(self, monkeypatch):
        """Test that configuration defaults come from the environment."""
        monkeypatch.setenv("CRYPTOPLUG_MIN_BACKEND_VERSION", "41.0.0")
        assert create_provider().config.min_backend_version == "41.0.0"
