"""
The cryptoplug provider: backend bootstrap, feature discovery and the
context factory.
"""

import logging
import threading
from typing import List, Optional

from . import backend
from .catalogue import CATALOGUE, CipherDescriptor, DigestDescriptor, KdfDescriptor
from .config import ConfigError, ProviderConfig, parse_version
from .context import CipherContext, Context, HashContext, KdfContext

logger = logging.getLogger(__name__)

PROVIDER_NAME = "cryptoplug"
PLUGIN_VERSION = 2

_CONTEXT_TYPES = {
    DigestDescriptor: HashContext,
    CipherDescriptor: CipherContext,
    KdfDescriptor: KdfContext,
}


class _Once:
    """Runs a callable at most once per process, even under concurrent first use."""

    def __init__(self):
        self._lock = threading.Lock()
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def run(self, func) -> bool:
        """Call ``func`` unless it already ran. Returns True if this call ran it."""
        if self._done:
            return False
        with self._lock:
            if self._done:
                return False
            func()
            self._done = True
            return True


class Provider:
    """
    Exposes the algorithm catalogue and creates contexts for it.
    """

    name = PROVIDER_NAME

    # Backend state is process wide, so the gate is shared by all providers.
    _backend_once = _Once()

    def __init__(self, config: Optional[ProviderConfig] = None):
        self.config = config if config is not None else ProviderConfig.from_env()

    def initialize(self) -> None:
        """Bootstrap the backend once per process; later calls do nothing."""
        if Provider._backend_once.run(self._bootstrap_backend):
            logger.debug("Backend initialised by provider %s", self.name)

    @classmethod
    def backend_ready(cls) -> bool:
        return cls._backend_once.done

    def _bootstrap_backend(self) -> None:
        info = backend.load()
        have = info["cryptography"]
        need = self.config.min_backend_version
        try:
            too_old = parse_version(have) < self.config.min_backend_version_info
        except ConfigError:
            too_old = True
        if too_old:
            logger.warning("cryptography is too old (need %s, have %s)", need, have)
        logger.info("Backend ready: cryptography %s, %s", have, info["openssl"])

    def features(self) -> List[str]:
        """Every algorithm name this provider supports, in a fixed order."""
        return list(CATALOGUE)

    def supports(self, name: str) -> bool:
        return name in CATALOGUE

    def create_context(self, name: str) -> Optional[Context]:
        """
        Create a context for an algorithm.

        Args:
            name: Algorithm name, one of features()

        Returns:
            A new HashContext, CipherContext or KdfContext, or None when the
            name is not supported by this provider
        """
        descriptor = CATALOGUE.get(name)
        if descriptor is None:
            logger.debug("Provider %s does not support %r", self.name, name)
            return None

        self.initialize()
        context = _CONTEXT_TYPES[type(descriptor)](descriptor, name, self)
        logger.debug("Created %r", context)
        return context


def create_provider(config: Optional[ProviderConfig] = None) -> Provider:
    """Plugin entry point used by a host framework to obtain the provider."""
    return Provider(config)
