"""
Error taxonomy and backend error reporting bridge.

Every backend call made by a context hands its outcome to ``check_error``.
Weak-key advisories are informational and let the operation continue; any
other backend error is logged and raised to the caller.
"""

import logging
from enum import Enum
from typing import Optional, Type

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base class for errors raised by the provider."""
    pass


class ConfigurationError(ProviderError, ValueError):
    """Raised when a context is configured with unusable parameters or used out of order."""
    pass


class BackendFailure(ProviderError):
    """Raised when the cryptographic backend reports a failure."""

    def __init__(self, label: str, message: str):
        super().__init__(f"{label}: {message}")
        self.label = label


class DigestError(BackendFailure):
    """Raised when a digest operation fails."""
    pass


class CipherError(BackendFailure):
    """Raised when a cipher operation fails."""
    pass


class KeyDerivationError(BackendFailure):
    """Raised when key derivation fails."""
    pass


class WeakKeyAdvisory(Exception):
    """Backend notice that a key has a known structural weakness. Never a failure."""
    pass


class ErrorClass(Enum):
    NO_ERROR = "no-error"
    WEAK_KEY = "weak-key"
    OTHER = "other"


def classify(error: Optional[BaseException]) -> ErrorClass:
    """Classify a backend outcome."""
    if error is None:
        return ErrorClass.NO_ERROR
    if isinstance(error, WeakKeyAdvisory):
        return ErrorClass.WEAK_KEY
    return ErrorClass.OTHER


def error_source(error: BaseException) -> str:
    """Name of the library that produced ``error``."""
    module = type(error).__module__ or ""
    root = module.split(".")[0]
    if root in ("builtins", ""):
        return "backend"
    if root == "Crypto":
        return "pycryptodome"
    return root


def check_error(label: str, error: Optional[BaseException],
                failure: Type[BackendFailure] = BackendFailure) -> None:
    """
    Report a backend outcome.

    Args:
        label: Name of the backend step that produced the outcome
        error: The exception raised by the backend, or None on success
        failure: BackendFailure subclass to raise for real errors

    Raises:
        failure: If ``error`` is anything other than None or a weak-key advisory
    """
    error_class = classify(error)
    if error_class is ErrorClass.NO_ERROR:
        return
    if error_class is ErrorClass.WEAK_KEY:
        logger.info("Weak key (%s): %s", label, error)
        return

    message = str(error) or type(error).__name__
    logger.error("Failure (%s): %s/%s", label, error_source(error), message)
    raise failure(label, message) from error
