"""
Tests for the error reporting bridge.
"""

import logging

import pytest

from cryptoplug.errors import (
    BackendFailure,
    CipherError,
    ConfigurationError,
    ErrorClass,
    KeyDerivationError,
    ProviderError,
    WeakKeyAdvisory,
    check_error,
    classify,
    error_source,
)


class TestClassify:
    """Test classification of backend outcomes."""

    def test_no_error(self):
        assert classify(None) is ErrorClass.NO_ERROR

    def test_weak_key(self):
        assert classify(WeakKeyAdvisory("weak")) is ErrorClass.WEAK_KEY

    def test_other(self):
        assert classify(ValueError("bad")) is ErrorClass.OTHER
        assert classify(RuntimeError()) is ErrorClass.OTHER


class TestCheckError:
    """Test reporting policy."""

    def test_success_is_silent(self, caplog):
        """Test that a clean outcome logs nothing."""
        with caplog.at_level(logging.DEBUG, logger="cryptoplug.errors"):
            check_error("step", None)
        assert caplog.records == []

    def test_weak_key_is_informational(self, caplog):
        """Test that weak-key advisories are logged and not raised."""
        with caplog.at_level(logging.INFO, logger="cryptoplug.errors"):
            check_error("cipher setkey", WeakKeyAdvisory("DES weak key"), CipherError)
        assert caplog.records[0].levelno == logging.INFO
        assert "cipher setkey" in caplog.text

    def test_other_error_is_raised(self, caplog):
        """Test that real failures are logged then raised, chained to the cause."""
        cause = ValueError("invalid length")
        with caplog.at_level(logging.ERROR, logger="cryptoplug.errors"):
            with pytest.raises(CipherError) as excinfo:
                check_error("update cipher encrypt/decrypt", cause, CipherError)

        assert excinfo.value.__cause__ is cause
        assert excinfo.value.label == "update cipher encrypt/decrypt"
        assert "Failure (update cipher encrypt/decrypt): backend/invalid length" in caplog.text

    def test_default_failure_class(self):
        """Test that BackendFailure is raised when no subclass is given."""
        with pytest.raises(BackendFailure):
            check_error("step", RuntimeError("boom"))

    def test_empty_message_uses_type_name(self):
        """Test the message of an exception without text."""
        with pytest.raises(KeyDerivationError, match="RuntimeError"):
            check_error("pbkdf2", RuntimeError(), KeyDerivationError)


class TestTaxonomy:
    """Test the exception hierarchy."""

    def test_hierarchy(self):
        assert issubclass(CipherError, BackendFailure)
        assert issubclass(KeyDerivationError, BackendFailure)
        assert issubclass(BackendFailure, ProviderError)
        assert issubclass(ConfigurationError, ProviderError)
        assert issubclass(ConfigurationError, ValueError)
        assert not issubclass(WeakKeyAdvisory, ProviderError)

    def test_error_source(self):
        """Test naming of the library that raised an error."""
        from cryptography.exceptions import AlreadyFinalized

        assert error_source(ValueError()) == "backend"
        assert error_source(AlreadyFinalized()) == "cryptography"
