"""
Block cipher context.

The engine is opened lazily by configure(). Direction, key and IV are fixed
per configuration; configuring again replaces all three. No padding scheme
is applied: callers feed block-aligned data to ECB and CBC contexts.
"""

import logging
from enum import Enum

from .base import Context
from .. import backend
from ..catalogue import BlockMode, CipherDescriptor, CipherKind, KeyLength
from ..errors import CipherError, ConfigurationError, check_error
from ..utils.memory import SecureBytes

logger = logging.getLogger(__name__)


class Direction(Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


UNSUPPORTED_KEY_LENGTH = KeyLength(0, 1, 1)


def key_length_for(kind: CipherKind) -> KeyLength:
    """Accepted key sizes for a cipher kind, as reported by the backend."""
    try:
        sizes = backend.key_sizes(kind)
    except KeyError:
        return UNSUPPORTED_KEY_LENGTH
    return KeyLength(min(sizes), max(sizes), backend.key_size_step(sizes))


class CipherContext(Context):
    """
    Encrypts or decrypts a stream with one cipher kind and block mode.
    """

    def __init__(self, descriptor: CipherDescriptor, name: str, provider=None):
        super().__init__(descriptor, name, provider)
        self.direction = None
        self._key = None
        self._iv = None
        self._finalized = False

    @property
    def pad(self) -> bool:
        return self.descriptor.pad

    @property
    def configured(self) -> bool:
        return self._engine is not None

    def block_size(self) -> int:
        return backend.block_size(self.descriptor.kind)

    def key_length(self) -> KeyLength:
        return key_length_for(self.descriptor.kind)

    def configure(self, direction: Direction, key: bytes, iv: bytes = b"") -> None:
        """
        Open the backend engine and install key and IV.

        Args:
            direction: Direction.ENCRYPT or Direction.DECRYPT
            key: Symmetric key; its size must satisfy key_length()
            iv: Initialization vector of block_size() bytes (ignored for ECB)

        Raises:
            ConfigurationError: If the key or IV size is unusable
            CipherError: If the backend rejects the configuration
        """
        self._check_live()
        if not isinstance(direction, Direction):
            raise ConfigurationError(f"Invalid direction: {direction!r}")

        key = bytes(key)
        iv = bytes(iv or b"")
        if not self.key_length().accepts(len(key)):
            raise ConfigurationError(
                f"{self.name} does not accept a {len(key)}-byte key "
                f"(accepted: {self.key_length()})")

        mode = self.descriptor.mode
        if mode.needs_iv and len(iv) != self.block_size():
            raise ConfigurationError(
                f"{self.name} requires a {self.block_size()}-byte IV, got {len(iv)} bytes")
        if not mode.needs_iv:
            iv = b""

        check_error("cipher setkey", backend.weak_key_advisory(self.descriptor.kind, key), CipherError)

        try:
            engine = backend.open_cipher(self.descriptor.kind, mode,
                                         direction is Direction.ENCRYPT, key, iv)
        except Exception as e:
            check_error("cipher open", e, CipherError)

        self._clear_secrets()
        self._engine = engine
        self._key = SecureBytes(key)
        self._iv = iv
        self.direction = direction
        self._finalized = False
        logger.debug("Configured %s for %s", self.name, direction.value)

    def _check_ready(self) -> None:
        self._check_live()
        if not self.configured:
            raise ConfigurationError(f"{self.name} context used before configure()")
        if self._finalized:
            raise ConfigurationError(f"{self.name} context already finalized")

    def update(self, data: bytes) -> bytes:
        """
        Transform ``data`` in the configured direction.

        Returns:
            Exactly len(data) bytes

        Raises:
            CipherError: If the backend fails, or ECB/CBC input is not block aligned
        """
        self._check_ready()
        data = bytes(data)
        label = "update cipher encrypt/decrypt"

        if self.descriptor.mode.block_aligned and len(data) % self.block_size():
            check_error(label, ValueError(
                f"input length {len(data)} is not a multiple of the "
                f"{self.block_size()}-byte block size"), CipherError)

        try:
            out = self._engine.update(data)
        except Exception as e:
            check_error(label, e, CipherError)

        if len(out) != len(data):
            check_error(label, ValueError(
                f"backend returned {len(out)} bytes for {len(data)} bytes of input"), CipherError)
        return out

    def final(self) -> bytes:
        """
        Finish the stream.

        Returns:
            One transformed all-zero block if padding is enabled, otherwise b""
        """
        self._check_ready()
        label = "final cipher encrypt/decrypt"
        result = b""
        try:
            if self.pad:
                result = self._engine.update(bytes(self.block_size()))
            self._engine.finalize()
        except Exception as e:
            check_error(label, e, CipherError)
        self._finalized = True
        return result

    def clone(self) -> 'CipherContext':
        """
        Context with the same descriptor and configuration on a fresh engine.

        A configured clone starts at the beginning of the stream.
        """
        self._check_live()
        other = CipherContext(self.descriptor, self.name, self.provider)
        if self.configured:
            other.configure(self.direction, bytes(self._key), self._iv)
        return other

    def _clear_secrets(self) -> None:
        if self._key is not None:
            self._key.clear()
        self._key = None
        self._iv = None
