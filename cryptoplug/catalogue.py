"""
Algorithm catalogue for the cryptoplug provider.

Maps every algorithm name the provider advertises to the structural
parameters needed to instantiate it. Pure data: the catalogue is closed and
built once at import time.
"""

from collections import OrderedDict, namedtuple
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union


class DigestKind(Enum):
    """Hash functions known to the provider, valued by digest size in bytes."""
    SHA1 = ("sha1", 20)
    MD4 = ("md4", 16)
    MD5 = ("md5", 16)
    RIPEMD160 = ("ripemd160", 20)
    SHA256 = ("sha256", 32)
    SHA384 = ("sha384", 48)
    SHA512 = ("sha512", 64)

    @property
    def digest_size(self) -> int:
        return self.value[1]


class CipherKind(Enum):
    """Block cipher families (key-length family included for AES)."""
    AES128 = "aes128"
    AES192 = "aes192"
    AES256 = "aes256"
    BLOWFISH = "blowfish"
    TRIPLEDES = "tripledes"
    DES = "des"


class BlockMode(Enum):
    ECB = "ecb"
    CBC = "cbc"
    CFB = "cfb"

    @property
    def needs_iv(self) -> bool:
        return self is not BlockMode.ECB

    @property
    def block_aligned(self) -> bool:
        """True when every update must be a whole number of blocks."""
        return self is not BlockMode.CFB


class KeyLength(namedtuple("KeyLength", ["minimum", "maximum", "multiple"])):
    """Accepted symmetric key sizes in bytes: (minimum, maximum, multiple)."""
    __slots__ = ()

    def accepts(self, size: int) -> bool:
        return (self.minimum <= size <= self.maximum
                and (size - self.minimum) % self.multiple == 0)


@dataclass(frozen=True)
class DigestDescriptor:
    kind: DigestKind

    @property
    def digest_size(self) -> int:
        return self.kind.digest_size


@dataclass(frozen=True)
class CipherDescriptor:
    kind: CipherKind
    mode: BlockMode
    pad: bool = False


@dataclass(frozen=True)
class KdfDescriptor:
    """PBKDF2 parameterised by the digest used as its pseudorandom function."""
    prf: DigestKind


AlgorithmDescriptor = Union[DigestDescriptor, CipherDescriptor, KdfDescriptor]


def _build_catalogue() -> "OrderedDict[str, AlgorithmDescriptor]":
    entries = OrderedDict()

    for kind in DigestKind:
        entries[kind.value[0]] = DigestDescriptor(kind)

    for kind in (CipherKind.AES128, CipherKind.AES192, CipherKind.AES256):
        for mode in (BlockMode.ECB, BlockMode.CFB, BlockMode.CBC):
            entries[f"{kind.value}-{mode.value}"] = CipherDescriptor(kind, mode)

    entries["blowfish-ecb"] = CipherDescriptor(CipherKind.BLOWFISH, BlockMode.ECB)
    entries["tripledes-ecb"] = CipherDescriptor(CipherKind.TRIPLEDES, BlockMode.ECB)
    for mode in (BlockMode.ECB, BlockMode.CBC, BlockMode.CFB):
        entries[f"des-{mode.value}"] = CipherDescriptor(CipherKind.DES, mode)

    entries["pbkdf2(sha1)"] = KdfDescriptor(DigestKind.SHA1)
    return entries


CATALOGUE: Mapping[str, AlgorithmDescriptor] = MappingProxyType(_build_catalogue())
