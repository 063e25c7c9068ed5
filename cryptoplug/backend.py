"""
Backend adapter for cryptoplug.

Everything that touches the underlying libraries lives here: engine
factories for digests and ciphers, capability queries (block and key
sizes), DES weak-key detection and PBKDF2. Contexts never import
``cryptography`` or ``Crypto`` directly.

``cryptography`` (OpenSSL) is the primary backend. MD4 and RIPEMD-160 are
not offered by it and come from pycryptodome.
"""

from functools import reduce
from math import gcd
from typing import Dict, FrozenSet, Optional

import cryptography
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.decrepit.ciphers.algorithms import Blowfish, TripleDES
from cryptography.hazmat.decrepit.ciphers.modes import CFB
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from Crypto.Hash import MD4, RIPEMD160

from .catalogue import BlockMode, CipherKind, DigestKind
from .errors import WeakKeyAdvisory


_CRYPTOGRAPHY_HASHES = {
    DigestKind.SHA1: hashes.SHA1,
    DigestKind.MD5: hashes.MD5,
    DigestKind.SHA256: hashes.SHA256,
    DigestKind.SHA384: hashes.SHA384,
    DigestKind.SHA512: hashes.SHA512,
}

_PYCRYPTODOME_HASHES = {
    DigestKind.MD4: MD4,
    DigestKind.RIPEMD160: RIPEMD160,
}

_CIPHER_ALGORITHMS = {
    CipherKind.AES128: algorithms.AES,
    CipherKind.AES192: algorithms.AES,
    CipherKind.AES256: algorithms.AES,
    CipherKind.BLOWFISH: Blowfish,
    # Single DES is TripleDES keyed with K1 == K2 == K3.
    CipherKind.TRIPLEDES: TripleDES,
    CipherKind.DES: TripleDES,
}

# Key sizes (bytes) where the catalogue pins a family to one length.
_FIXED_KEY_SIZES = {
    CipherKind.AES128: frozenset([16]),
    CipherKind.AES192: frozenset([24]),
    CipherKind.AES256: frozenset([32]),
    CipherKind.TRIPLEDES: frozenset([24]),
    CipherKind.DES: frozenset([8]),
}

# DES weak and semi-weak keys with parity bits stripped.
_DES_WEAK_KEYS = frozenset(
    bytes(b & 0xFE for b in bytes.fromhex(h)) for h in (
        "0101010101010101", "fefefefefefefefe",
        "e0e0e0e0f1f1f1f1", "1f1f1f1f0e0e0e0e",
        "01fe01fe01fe01fe", "fe01fe01fe01fe01",
        "1fe01fe00ef10ef1", "e01fe01ff10ef10e",
        "01e001e001f101f1", "e001e001f101f101",
        "1ffe1ffe0efe0efe", "fe1ffe1ffe0efe0e",
        "011f011f010e010e", "1f011f010e010e01",
        "e0fee0fef1fef1fe", "fee0fee0fef1fef1",
    )
)


def backend_version() -> str:
    return cryptography.__version__


def openssl_version() -> str:
    return default_backend().openssl_version_text()


def load() -> Dict[str, str]:
    """Load the OpenSSL backend and report what was loaded."""
    return {
        "cryptography": backend_version(),
        "openssl": openssl_version(),
    }


class _PycryptodomeDigest:
    """Gives a pycryptodome hash object the update/copy/finalize shape of ``hashes.Hash``."""

    def __init__(self, state):
        self._state = state

    def update(self, data: bytes) -> None:
        self._state.update(data)

    def copy(self) -> '_PycryptodomeDigest':
        return _PycryptodomeDigest(self._state.copy())

    def finalize(self) -> bytes:
        return self._state.digest()


def open_digest(kind: DigestKind):
    """
    Open a digest engine.

    Returns:
        Object with ``update(data)``, ``copy()`` and ``finalize()``
    """
    if kind in _CRYPTOGRAPHY_HASHES:
        return hashes.Hash(_CRYPTOGRAPHY_HASHES[kind]())
    if kind in _PYCRYPTODOME_HASHES:
        return _PycryptodomeDigest(_PYCRYPTODOME_HASHES[kind].new())
    raise ValueError(f"No digest engine for {kind.name}")


def hash_algorithm(kind: DigestKind) -> hashes.HashAlgorithm:
    """``cryptography`` hash algorithm instance, used as a PBKDF2 PRF."""
    if kind not in _CRYPTOGRAPHY_HASHES:
        raise ValueError(f"{kind.name} cannot be used as an HMAC PRF")
    return _CRYPTOGRAPHY_HASHES[kind]()


def block_size(kind: CipherKind) -> int:
    """Cipher block size in bytes; independent of the key."""
    return _CIPHER_ALGORITHMS[kind].block_size // 8


def key_sizes(kind: CipherKind) -> FrozenSet[int]:
    """Key sizes in bytes accepted for ``kind``."""
    if kind in _FIXED_KEY_SIZES:
        return _FIXED_KEY_SIZES[kind]
    return frozenset(bits // 8 for bits in _CIPHER_ALGORITHMS[kind].key_sizes)


def key_size_step(sizes: FrozenSet[int]) -> int:
    ordered = sorted(sizes)
    steps = [b - a for a, b in zip(ordered, ordered[1:])]
    return reduce(gcd, steps, 0) or 1


def weak_key_advisory(kind: CipherKind, key: bytes) -> Optional[WeakKeyAdvisory]:
    """Return an advisory if ``key`` contains a DES weak or semi-weak key."""
    if kind not in (CipherKind.DES, CipherKind.TRIPLEDES):
        return None
    for offset in range(0, len(key) - len(key) % 8, 8):
        part = bytes(b & 0xFE for b in key[offset:offset + 8])
        if part in _DES_WEAK_KEYS:
            return WeakKeyAdvisory(f"DES weak key at offset {offset}")
    return None


def _mode(mode: BlockMode, iv: bytes):
    if mode is BlockMode.ECB:
        return modes.ECB()
    if mode is BlockMode.CBC:
        return modes.CBC(iv)
    return CFB(iv)


def open_cipher(kind: CipherKind, mode: BlockMode, encrypt: bool, key: bytes, iv: bytes):
    """
    Open a cipher engine with key and IV installed.

    Returns:
        ``cryptography`` CipherContext (encryptor or decryptor)
    """
    if kind is CipherKind.DES:
        key = key * 3
    cipher = Cipher(_CIPHER_ALGORITHMS[kind](key), _mode(mode, iv))
    return cipher.encryptor() if encrypt else cipher.decryptor()


def pbkdf2(prf: DigestKind, secret: bytes, salt: bytes,
           length: int, iterations: int) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hash_algorithm(prf),
        length=length,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(secret)
