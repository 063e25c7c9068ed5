"""
cryptoplug: a named-algorithm cryptographic provider.

Exposes a fixed catalogue of message digests, block ciphers and a password
based key derivation function behind one context interface, backed by the
``cryptography`` package.

Basic Usage:
    >>> from cryptoplug import create_provider, Direction
    >>>
    >>> provider = create_provider()
    >>> sha = provider.create_context("sha256")
    >>> sha.update(b"abc")
    >>> sha.final().hex()[:16]
    'ba7816bf8f01cfea'
    >>>
    >>> aes = provider.create_context("aes128-cbc")
    >>> aes.configure(Direction.ENCRYPT, key=bytes(16), iv=bytes(16))
    >>> ciphertext = aes.update(b"sixteen byte msg") + aes.final()
"""

__version__ = "1.0.0"

from .catalogue import (
    CATALOGUE,
    BlockMode,
    CipherDescriptor,
    CipherKind,
    DigestDescriptor,
    DigestKind,
    KdfDescriptor,
    KeyLength,
)
from .config import ConfigError, ProviderConfig
from .context import CipherContext, Context, Direction, HashContext, KdfContext
from .errors import (
    BackendFailure,
    CipherError,
    ConfigurationError,
    DigestError,
    KeyDerivationError,
    ProviderError,
    WeakKeyAdvisory,
)
from .provider import PLUGIN_VERSION, Provider, create_provider

__all__ = [
    '__version__',

    # Provider
    'Provider',
    'create_provider',
    'PLUGIN_VERSION',
    'ProviderConfig',

    # Catalogue
    'CATALOGUE',
    'BlockMode',
    'CipherDescriptor',
    'CipherKind',
    'DigestDescriptor',
    'DigestKind',
    'KdfDescriptor',
    'KeyLength',

    # Contexts
    'Context',
    'HashContext',
    'CipherContext',
    'Direction',
    'KdfContext',

    # Errors
    'ProviderError',
    'ConfigurationError',
    'ConfigError',
    'BackendFailure',
    'DigestError',
    'CipherError',
    'KeyDerivationError',
    'WeakKeyAdvisory',
]
