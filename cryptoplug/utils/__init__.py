"""
Utility helpers for cryptoplug.
"""

from .memory import secure_zero, SecureBytes

__all__ = [
    'secure_zero',
    'SecureBytes'
]
