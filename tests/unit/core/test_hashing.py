"""Tests for namehash and childhash schemes."""

from __future__ import annotations

import hashlib

import pytest

from fakes import CRYPTO_NAMEHASH, ETH_NAMEHASH, FOO_ETH_NAMEHASH
from resolution.core.hashing import CNS_HASH, ENS_HASH, ZERO_HASH, ZNS_HASH


def sha256_namehash(domain: str) -> str:
    """Independent sha256 namehash used to cross-check the ZNS scheme."""
    node = bytes(32)
    for label in reversed(domain.split(".")):
        node = hashlib.sha256(node + hashlib.sha256(label.encode()).digest()).digest()
    return "0x" + node.hex()


class TestKeccakNamehash:
    """ENS and CNS share keccak256 but differ in label normalization."""

    def test_empty_domain_is_zero_hash(self):
        assert ENS_HASH.namehash("") == ZERO_HASH
        assert ZERO_HASH == "0x" + "0" * 64

    def test_known_ens_hashes(self):
        """Reference values from EIP-137."""
        assert ENS_HASH.namehash("eth") == ETH_NAMEHASH
        assert ENS_HASH.namehash("foo.eth") == FOO_ETH_NAMEHASH

    def test_known_cns_root(self):
        assert CNS_HASH.namehash("crypto") == CRYPTO_NAMEHASH

    def test_childhash_matches_namehash(self):
        """namehash("foo.eth") is childhash(namehash("eth"), "foo")."""
        assert ENS_HASH.childhash(ETH_NAMEHASH, "foo") == FOO_ETH_NAMEHASH
        assert CNS_HASH.childhash(CRYPTO_NAMEHASH, "brad") == CNS_HASH.namehash("brad.crypto")

    def test_ens_normalizes_labels(self):
        """ENS case-folds and NFKC-normalizes each label."""
        assert ENS_HASH.namehash("FOO.eth") == FOO_ETH_NAMEHASH
        assert ENS_HASH.namehash("ｆｏｏ.eth") == FOO_ETH_NAMEHASH

    def test_cns_does_not_normalize_labels(self):
        """CNS hashes labels exactly as given."""
        assert CNS_HASH.namehash("Brad.crypto") != CNS_HASH.namehash("brad.crypto")

    def test_sha256_and_keccak_disagree(self):
        assert ENS_HASH.childhash(ZERO_HASH, "brad") == CNS_HASH.childhash(ZERO_HASH, "brad")
        assert ZNS_HASH.childhash(ZERO_HASH, "brad") != CNS_HASH.childhash(ZERO_HASH, "brad")


class TestSha256Namehash:
    """ZNS uses sha256."""

    @pytest.mark.parametrize("domain", ["zil", "brad.zil", "sub.brad.zil"])
    def test_matches_reference(self, domain: str):
        assert ZNS_HASH.namehash(domain) == sha256_namehash(domain)

    def test_childhash(self):
        parent = ZNS_HASH.namehash("zil")
        assert ZNS_HASH.childhash(parent, "brad") == ZNS_HASH.namehash("brad.zil")


class TestHashFormat:
    """Hashes are 0x-prefixed lowercase 32-byte hex strings."""

    @pytest.mark.parametrize("scheme", [ENS_HASH, CNS_HASH, ZNS_HASH])
    def test_format(self, scheme):
        value = scheme.namehash("brad.test")
        assert value.startswith("0x")
        assert len(value) == 66
        assert value == value.lower()

    @pytest.mark.parametrize("parent", ["", "0x1234", "93cdeb708b7545dc668eb9280176169d1c33cfd8ed6f04690a0bcc88a93fc4ae", "0x" + "zz" * 32])
    def test_invalid_parent(self, parent: str):
        with pytest.raises(ValueError, match="Invalid parent hash"):
            ENS_HASH.childhash(parent, "foo")
