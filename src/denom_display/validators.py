"""Validator moniker lookups by consensus or operator address."""

from __future__ import annotations

import base64
import binascii
import hashlib
from collections.abc import Iterable, Mapping
from typing import Any

from .domain import ConsensusPubkey, Validator
from .logger import get_logger

logger = get_logger(__name__)

# Tendermint addresses are the first 20 bytes of SHA-256(pubkey) for ed25519.
ADDRESS_LENGTH = 20


def consensus_pubkey_to_hex_address(pubkey: ConsensusPubkey | None) -> str | None:
    """Upper-case hex consensus address of an ed25519 consensus pubkey.

    Other key types return None.
    """
    if pubkey is None or not pubkey.key:
        return None
    if "ed25519" not in pubkey.type_url.lower():
        return None
    try:
        raw = base64.b64decode(pubkey.key, validate=True)
    except binascii.Error:
        logger.debug("Undecodable consensus pubkey %s", pubkey.key)
        return None
    return hashlib.sha256(raw).digest()[:ADDRESS_LENGTH].hex().upper()


class ValidatorDirectory:
    """Read-only view over a validator set for moniker lookups."""

    def __init__(self, validators: Iterable[Validator | Mapping[str, Any]] = ()):
        self.validators: list[Validator] = [
            Validator.model_validate(v) for v in validators
        ]
        self._by_hex: dict[str, Validator] = {}
        for validator in self.validators:
            hex_address = consensus_pubkey_to_hex_address(validator.consensus_pubkey)
            if hex_address:
                self._by_hex.setdefault(hex_address, validator)

    def moniker_for_consensus(self, address: str) -> str | None:
        """Moniker for a base64 consensus address, as found in block headers."""
        if not address:
            return address
        try:
            hex_address = base64.b64decode(address, validate=True).hex().upper()
        except binascii.Error:
            logger.debug("Consensus address %s is not base64", address)
            return None
        validator = self._by_hex.get(hex_address)
        return validator.description.moniker if validator else None

    def moniker_for_operator(self, operator_address: str) -> str | None:
        """Moniker for a bech32 operator address (``...valoper1...``)."""
        if not operator_address:
            return operator_address
        for validator in self.validators:
            if validator.operator_address == operator_address:
                return validator.description.moniker
        return None
