"""
Password-based key derivation context (PBKDF2-HMAC).
"""

from .base import Context
from .. import backend
from ..catalogue import KdfDescriptor
from ..errors import KeyDerivationError, check_error


class KdfContext(Context):
    """Stateless between calls; each make_key() is one derivation."""

    def __init__(self, descriptor: KdfDescriptor, name: str, provider=None):
        super().__init__(descriptor, name, provider)

    def clone(self) -> 'KdfContext':
        return KdfContext(self.descriptor, self.name, self.provider)

    def make_key(self, secret: bytes, salt: bytes, key_length: int,
                 iteration_count: int) -> bytes:
        """
        Derive key material from a secret and salt.

        Args:
            secret: Password or other low-entropy secret
            salt: Salt bytes
            key_length: Number of bytes to derive
            iteration_count: PBKDF2 iteration count

        Returns:
            ``key_length`` bytes of derived key material

        Raises:
            KeyDerivationError: If the parameters are rejected or derivation fails
        """
        self._check_live()
        label = "pbkdf2"
        if key_length <= 0:
            check_error(label, ValueError("key length must be positive"), KeyDerivationError)
        if iteration_count <= 0:
            check_error(label, ValueError("iteration count must be positive"), KeyDerivationError)

        try:
            derived = backend.pbkdf2(self.descriptor.prf, bytes(secret),
                                     bytes(salt), key_length, iteration_count)
        except Exception as e:
            check_error(label, e, KeyDerivationError)
        return derived
