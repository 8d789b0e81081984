from __future__ import annotations

import pytest

from denom_display.constants import MAX_SAFE_INTEGER, MIN_SAFE_INTEGER
from denom_display.domain import Capital, TokenBalance
from denom_display.power import potential_consensus_power
from denom_display.settings import DisplaySettings


def test_harmonic_mean_of_two_balances():
    capital = {
        "slashable_balance": [
            {"address": "a", "amount": "100"},
            {"address": "b", "amount": "300"},
        ]
    }

    # 2 / (1/100 + 1/300) = 150
    assert potential_consensus_power(capital, "1") == 150


def test_numeric_amounts_and_model_input():
    capital = Capital(
        slashable_balance=[
            TokenBalance(address="a", amount=100),
            TokenBalance(address="b", amount=300),
        ]
    )

    assert potential_consensus_power(capital, "1") == 150


def test_no_capital_is_zero():
    capital = {"slashable_balance": [], "non_slashable_capital": "0"}
    assert potential_consensus_power(capital, "1") == 0
    assert potential_consensus_power({}, "1") == 0


def test_zero_power_reduction_is_zero():
    capital = {"slashable_balance": [{"address": "a", "amount": "1000"}]}
    assert potential_consensus_power(capital, "0") == 0


def test_non_slashable_capital_counts_once():
    capital = {"slashable_balance": [], "non_slashable_capital": "1000000"}
    assert potential_consensus_power(capital, "1000000") == 1

    capital = {
        "slashable_balance": [{"address": "a", "amount": "100"}],
        "non_slashable_capital": 300,
    }
    assert potential_consensus_power(capital, "1") == 150


def test_non_positive_balances_are_ignored():
    capital = {
        "slashable_balance": [
            {"address": "a", "amount": "0"},
            {"address": "b", "amount": "-5"},
            {"address": "c", "amount": "not a number"},
            {"address": "d", "amount": "200"},
        ]
    }
    assert potential_consensus_power(capital, "1") == 200


def test_only_non_positive_balances_is_zero():
    capital = {"slashable_balance": [{"address": "a", "amount": "0"}]}
    assert potential_consensus_power(capital, "1") == 0


def test_fragmented_capital_has_less_power_than_arithmetic_mean():
    capital = {
        "slashable_balance": [
            {"address": "a", "amount": "1"},
            {"address": "b", "amount": "1"},
            {"address": "c", "amount": "1000"},
        ]
    }
    # 3 / (1 + 1 + 0.001) = 1.4992...
    assert potential_consensus_power(capital, "1") == 1


def test_default_power_reduction():
    capital = {
        "slashable_balance": [
            {"address": "a", "amount": "3000000"},
            {"address": "b", "amount": "3000000"},
        ]
    }
    assert potential_consensus_power(capital) == 3


def test_power_reduction_from_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("DENOM_DISPLAY_CONFIG", str(tmp_path / "missing.toml"))
    settings = DisplaySettings(power_reduction=10**18)
    capital = {"slashable_balance": [{"address": "a", "amount": "5000000000000000000"}]}

    assert potential_consensus_power(capital, settings.power_reduction) == 5


def test_result_is_floored():
    capital = {"slashable_balance": [{"address": "a", "amount": "2999999"}]}
    assert potential_consensus_power(capital, "1000000") == 2


class TestOverflow:
    @pytest.fixture
    def capital(self):
        return {"slashable_balance": [{"address": "a", "amount": "1e308"}]}

    def test_positive_overflow_clamps_to_max(self, capital):
        assert potential_consensus_power(capital, "1e-308") == MAX_SAFE_INTEGER

    def test_negative_overflow_clamps_to_min(self, capital):
        assert potential_consensus_power(capital, "-1e-308") == MIN_SAFE_INTEGER

    def test_unparseable_reduction_clamps_to_min(self, capital):
        assert potential_consensus_power(capital, "abc") == MIN_SAFE_INTEGER

    def test_custom_bounds(self, capital):
        int64_max = 2**63 - 1
        result = potential_consensus_power(capital, "1e-308", max_power=int64_max)
        assert result == int64_max


class TestLooseCapital:
    def test_non_mapping_entries_are_skipped(self):
        capital = {"slashable_balance": ["junk", {"address": "a", "amount": "100"}]}
        assert potential_consensus_power(capital, "1") == 100

    def test_unparseable_entry_is_skipped(self):
        capital = {
            "slashable_balance": [
                {"address": "a", "amount": {"nested": 1}},
                {"address": "b", "amount": "300"},
            ]
        }
        assert potential_consensus_power(capital, "1") == 300

    def test_string_balance_list_uses_non_slashable(self):
        capital = {"slashable_balance": "oops", "non_slashable_capital": "50"}
        assert potential_consensus_power(capital, "1") == 50

    @pytest.mark.parametrize(
        "capital",
        ["not a mapping", None, {"non_slashable_capital": ["x"]}],
    )
    def test_unusable_payload_is_zero(self, capital):
        assert potential_consensus_power(capital, "1") == 0
