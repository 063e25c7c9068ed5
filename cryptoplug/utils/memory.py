"""
Holders for key material.

Keys, IVs and KDF secrets kept by contexts live in SecureBytes so that
releasing a context overwrites them instead of leaving them to the
garbage collector.
"""

from typing import Union


def secure_zero(data: Union[bytearray, memoryview]) -> None:
    """
    Overwrite mutable memory with zeros.

    Args:
        data: Memory to zero (must be mutable)
    """
    if isinstance(data, (bytearray, memoryview)):
        for i in range(len(data)):
            data[i] = 0
    else:
        raise TypeError("Data must be bytearray or memoryview")


class SecureBytes:
    """
    A container for sensitive byte data that zeros itself on deletion.
    """

    def __init__(self, data: bytes):
        self._data = bytearray(data)
        self._is_valid = True

    def __len__(self) -> int:
        if not self._is_valid:
            raise ValueError("SecureBytes has been cleared")
        return len(self._data)

    def __bytes__(self) -> bytes:
        """Get a copy of the stored data as bytes."""
        if not self._is_valid:
            raise ValueError("SecureBytes has been cleared")
        return bytes(self._data)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.clear()

    def __del__(self):
        if hasattr(self, '_is_valid'):
            self.clear()

    def clear(self) -> None:
        """Explicitly clear the stored data."""
        if self._is_valid:
            secure_zero(self._data)
            self._is_valid = False

    def copy(self) -> 'SecureBytes':
        """Independent SecureBytes holding the same data."""
        return SecureBytes(bytes(self))

    def is_cleared(self) -> bool:
        return not self._is_valid
