"""
Per-operation contexts created by the provider.
"""

from .base import Context
from .hash import HashContext
from .cipher import CipherContext, Direction, key_length_for
from .kdf import KdfContext

__all__ = [
    'Context',
    'HashContext',
    'CipherContext',
    'Direction',
    'key_length_for',
    'KdfContext'
]
