"""
Streaming digest context.
"""

from .base import Context
from .. import backend
from ..catalogue import DigestDescriptor
from ..errors import DigestError, check_error


class HashContext(Context):
    """
    Digest context. The engine is opened at construction since hashing has
    no separate configuration step.
    """

    def __init__(self, descriptor: DigestDescriptor, name: str, provider=None):
        super().__init__(descriptor, name, provider)
        self._engine = self._open()

    def _open(self):
        try:
            return backend.open_digest(self.descriptor.kind)
        except Exception as e:
            check_error("open digest", e, DigestError)

    @property
    def digest_size(self) -> int:
        return self.descriptor.digest_size

    def clone(self) -> 'HashContext':
        """Fresh context for the same digest; absorbed data is not carried over."""
        return HashContext(self.descriptor, self.name, self.provider)

    def clear(self) -> None:
        """Discard everything absorbed so far."""
        self._check_live()
        self._engine = self._open()

    def update(self, data: bytes) -> None:
        self._check_live()
        try:
            self._engine.update(bytes(data))
        except Exception as e:
            check_error("digest update", e, DigestError)

    def final(self) -> bytes:
        """
        Digest of everything absorbed since construction or the last clear().

        A copy of the engine is finalized, so the stream stays open: calling
        final() again returns the same value and update() may continue.
        """
        self._check_live()
        try:
            digest = self._engine.copy().finalize()
        except Exception as e:
            check_error("digest final", e, DigestError)
        return digest
