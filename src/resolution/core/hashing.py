"""Namehash and childhash schemes used to address domains on chain."""

from __future__ import annotations

import hashlib
import re
import unicodedata
from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar

from eth_utils import keccak

HASH_BYTES = 32
ZERO_HASH = "0x" + "00" * HASH_BYTES


def _sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def _keccak256(data: bytes) -> bytes:
    return keccak(primitive=data)


def ens_normalize_label(label: str) -> str:
    """Compatibility-normalize and case-fold an ENS label."""
    return unicodedata.normalize("NFKC", label).casefold()


def _identity(label: str) -> str:
    return label


@dataclass(frozen=True)
class HashScheme:
    """
    A namehash algorithm: a digest function plus a per-label normalization.

    ``namehash`` folds labels right to left starting from the zero hash, so
    ``namehash("a.b") == childhash(namehash("b"), "a")``.
    """

    name: str
    digest: Callable[[bytes], bytes]
    normalize_label: Callable[[str], str] = _identity

    HASH_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^0x[0-9a-fA-F]{64}$")

    def childhash(self, parent: str, label: str) -> str:
        """Combine a parent hash with one label."""
        if not self.HASH_PATTERN.match(parent):
            raise ValueError(f"Invalid parent hash: {parent!r}")
        label_hash = self.digest(self.normalize_label(label).encode("utf-8"))
        node = self.digest(bytes.fromhex(parent[2:]) + label_hash)
        return "0x" + node.hex()

    def namehash(self, domain: str) -> str:
        """Hash a dotted domain name."""
        node = ZERO_HASH
        if not domain:
            return node
        for label in reversed(domain.split(".")):
            node = self.childhash(node, label)
        return node


ENS_HASH = HashScheme("keccak256-nfkc", _keccak256, ens_normalize_label)
CNS_HASH = HashScheme("keccak256", _keccak256)
ZNS_HASH = HashScheme("sha256", _sha256)
