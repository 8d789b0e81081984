from __future__ import annotations

import base64
import hashlib

import pytest

from denom_display.domain import ConsensusPubkey
from denom_display.validators import ValidatorDirectory, consensus_pubkey_to_hex_address

PUBKEY = bytes(range(32))
HEX_ADDRESS = hashlib.sha256(PUBKEY).digest()[:20].hex().upper()
CONSENSUS_ADDRESS = base64.b64encode(bytes.fromhex(HEX_ADDRESS)).decode()


@pytest.fixture
def directory():
    return ValidatorDirectory(
        [
            {
                "operator_address": "cosmosvaloper1abc",
                "consensus_pubkey": {
                    "@type": "/cosmos.crypto.ed25519.PubKey",
                    "key": base64.b64encode(PUBKEY).decode(),
                },
                "description": {"moniker": "Alpha"},
            },
            {
                "operator_address": "cosmosvaloper1def",
                "consensus_pubkey": {
                    "@type": "/cosmos.crypto.secp256k1.PubKey",
                    "key": "A" * 44,
                },
                "description": {"moniker": "Beta"},
            },
        ]
    )


def test_ed25519_pubkey_to_hex_address():
    pubkey = ConsensusPubkey(
        type_url="/cosmos.crypto.ed25519.PubKey",
        key=base64.b64encode(PUBKEY).decode(),
    )
    assert consensus_pubkey_to_hex_address(pubkey) == HEX_ADDRESS


def test_unsupported_or_missing_pubkey():
    assert consensus_pubkey_to_hex_address(None) is None
    secp = ConsensusPubkey(type_url="/cosmos.crypto.secp256k1.PubKey", key="AAAA")
    assert consensus_pubkey_to_hex_address(secp) is None
    bad = ConsensusPubkey(type_url="/cosmos.crypto.ed25519.PubKey", key="not*base64")
    assert consensus_pubkey_to_hex_address(bad) is None


def test_moniker_for_consensus(directory):
    assert directory.moniker_for_consensus(CONSENSUS_ADDRESS) == "Alpha"
    assert directory.moniker_for_consensus(base64.b64encode(b"x" * 20).decode()) is None
    assert directory.moniker_for_consensus("") == ""
    assert directory.moniker_for_consensus("???") is None


def test_moniker_for_operator(directory):
    assert directory.moniker_for_operator("cosmosvaloper1def") == "Beta"
    assert directory.moniker_for_operator("cosmosvaloper1zzz") is None
    assert directory.moniker_for_operator("") == ""
