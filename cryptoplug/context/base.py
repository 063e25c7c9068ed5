"""
Common behaviour of provider contexts.
"""

import logging

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class Context:
    """
    Base class for all per-operation contexts.

    A context is owned by the caller for the duration of one operation and
    holds at most one backend engine handle. ``release()`` drops that
    handle exactly once; contexts are also usable in ``with`` blocks.
    """

    def __init__(self, descriptor, name: str, provider=None):
        self.descriptor = descriptor
        self.name = name
        self.provider = provider
        self._engine = None
        self._released = False

    def clone(self) -> 'Context':
        raise NotImplementedError

    def release(self) -> None:
        """Drop the backend engine and any held key material."""
        if self._released:
            return
        self._released = True
        self._engine = None
        self._clear_secrets()
        logger.debug("Released %s context", self.name)

    @property
    def released(self) -> bool:
        return self._released

    def _clear_secrets(self) -> None:
        pass

    def _check_live(self) -> None:
        if self._released:
            raise ConfigurationError(f"{self.name} context has been released")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
