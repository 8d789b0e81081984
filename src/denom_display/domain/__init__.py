"""Domain models for denominations, coins, capital and validators."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DenomUnit(BaseModel):
    """One display alias for a base denomination at a power-of-ten scale."""

    denom: str
    exponent: int = Field(default=0, ge=0)
    aliases: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class AssetConfig(BaseModel):
    """Asset entry from a chain asset list, the global registry or the IBC
    metadata service.

    ``base`` arrives either as a plain denom or as ``{"denom": ...}``
    depending on the source; it is normalised to the plain denom here.
    """

    base: str
    symbol: str | None = None
    display: str | None = None
    name: str | None = None
    coingecko_id: str | None = None
    denom_units: list[DenomUnit] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("base", mode="before")
    @classmethod
    def normalize_base(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return v.get("denom")
        return v

    @field_validator("denom_units", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def display_unit(self) -> DenomUnit | None:
        """Return the unit with the largest exponent.

        Ties go to the later unit, so ``[{a, 6}, {b, 6}]`` displays as ``b``.
        """
        unit: DenomUnit | None = None
        for candidate in self.denom_units:
            if unit is None or candidate.exponent >= unit.exponent:
                unit = candidate
        return unit


class DenomTrace(BaseModel):
    """IBC transfer path and base denom behind an ``ibc/<hash>`` denom."""

    path: str = ""
    base_denom: str

    model_config = ConfigDict(extra="ignore")


class Coin(BaseModel):
    """Raw on-chain amount in base units."""

    denom: str = ""
    amount: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("denom", "amount", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class TokenBalance(BaseModel):
    address: Any = None
    amount: str | int | float | None = None

    model_config = ConfigDict(extra="allow")


class Capital(BaseModel):
    """Validator backing capital.

    Unknown keys are kept so schema-less payloads can still be rendered.
    """

    slashable_balance: list[TokenBalance] = Field(default_factory=list)
    non_slashable_capital: str | int | float | None = None

    model_config = ConfigDict(extra="allow")

    @field_validator("slashable_balance", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class ConsensusPubkey(BaseModel):
    type_url: str = Field(default="", alias="@type")
    key: str = ""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ValidatorDescription(BaseModel):
    moniker: str | None = None

    model_config = ConfigDict(extra="ignore")


class Validator(BaseModel):
    operator_address: str = ""
    consensus_pubkey: ConsensusPubkey | None = None
    description: ValidatorDescription = Field(default_factory=ValidatorDescription)

    model_config = ConfigDict(extra="ignore")


__all__ = [
    "AssetConfig",
    "Capital",
    "Coin",
    "ConsensusPubkey",
    "DenomTrace",
    "DenomUnit",
    "TokenBalance",
    "Validator",
    "ValidatorDescription",
]
