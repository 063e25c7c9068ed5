"""
Shared fixtures for the cryptoplug test suite.
"""

import pytest

from cryptoplug import Provider, ProviderConfig


@pytest.fixture
def provider():
    """Provider with default configuration, independent of the environment."""
    return Provider(ProviderConfig())
