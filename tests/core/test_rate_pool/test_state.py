"""Tests for src/core/rate_pool/state.py: pool operations, construction and serialization."""

from dataclasses import replace

import pytest

from src.core.rate_pool.errors import InvalidFeeError
from src.core.rate_pool.state import (
    POOL_VAR_NAMES,
    initial_state,
    ledger_from_dict,
    ledger_to_dict,
    pool_from_dict,
    pool_to_dict,
    read_balances,
    read_rate,
    set_fee,
    set_rate,
    toggle_pause,
)
from src.core.rate_pool.types import LedgerState, LiquidityRecord, PoolState


class TestInitialState:
    def test_returns_ledger_state(self):
        s = initial_state("owner")
        assert isinstance(s, LedgerState)
        assert isinstance(s.pool, PoolState)

    def test_default_values(self):
        s = initial_state("owner")
        assert s.pool.owner == "owner"
        assert s.pool.token_a_balance == 0
        assert s.pool.token_b_balance == 0
        assert s.pool.exchange_rate == 100
        assert s.pool.fee_percentage == 0
        assert s.pool.paused is False
        assert dict(s.providers) == {}

    def test_overrides(self):
        s = initial_state("owner", token_a_balance=5, token_b_balance=7, exchange_rate=150, fee_percentage=3)
        assert read_balances(s.pool) == (5, 7)
        assert read_rate(s.pool) == 150
        assert s.pool.fee_percentage == 3

    @pytest.mark.parametrize("owner", ["", None, 42])
    def test_owner_required(self, owner):
        with pytest.raises(ValueError):
            initial_state(owner)  # type: ignore[arg-type]

    @pytest.mark.parametrize("overrides", [
        {"fee_percentage": 150},
        {"fee_percentage": -1},
        {"token_a_balance": -5},
        {"token_b_balance": -1},
        {"exchange_rate": -100},
        {"token_a_balance": 2**256},
    ])
    def test_out_of_range_values_rejected(self, overrides):
        with pytest.raises(ValueError):
            initial_state("owner", **overrides)

    @pytest.mark.parametrize("overrides", [
        {"token_a_balance": True},
        {"exchange_rate": 1.5},
        {"paused": 1},
    ])
    def test_wrong_types_rejected(self, overrides):
        with pytest.raises(TypeError):
            initial_state("owner", **overrides)

    def test_bounds_accepted(self):
        s = initial_state("owner", token_a_balance=2**256 - 1, fee_percentage=100, exchange_rate=0)
        assert s.pool.token_a_balance == 2**256 - 1
        assert s.pool.fee_percentage == 100

    def test_frozen(self):
        s = initial_state("owner")
        with pytest.raises(AttributeError):
            s.pool.paused = True  # type: ignore


class TestPoolOperations:
    def test_set_rate(self):
        pool = initial_state("owner").pool
        assert set_rate(pool, 250).exchange_rate == 250
        assert pool.exchange_rate == 100

    def test_set_rate_zero_allowed(self):
        pool = initial_state("owner").pool
        assert set_rate(pool, 0).exchange_rate == 0

    def test_set_fee_bounds(self):
        pool = initial_state("owner").pool
        assert set_fee(pool, 0).fee_percentage == 0
        assert set_fee(pool, 100).fee_percentage == 100

    def test_set_fee_rejects_above_100(self):
        pool = initial_state("owner", fee_percentage=3).pool
        with pytest.raises(InvalidFeeError):
            set_fee(pool, 101)
        assert pool.fee_percentage == 3

    def test_toggle_pause(self):
        pool = initial_state("owner").pool
        paused = toggle_pause(pool)
        assert paused.paused is True
        assert toggle_pause(paused).paused is False
        assert pool.paused is False


class TestSerialization:
    def test_pool_var_names(self):
        assert POOL_VAR_NAMES == (
            "owner", "token_a_balance", "token_b_balance", "exchange_rate", "fee_percentage", "paused",
        )

    def test_pool_roundtrip(self):
        pool = initial_state("owner", token_a_balance=10, paused=True).pool
        assert pool_from_dict(pool_to_dict(pool)) == pool

    def test_ledger_roundtrip(self):
        s = initial_state("owner", token_a_balance=1000, token_b_balance=1000)
        s = replace(s, providers={
            "bob": LiquidityRecord(1, 2, 3),
            "alice": LiquidityRecord(4, 5, 6),
        })
        d = ledger_to_dict(s)
        assert list(d["providers"]) == ["alice", "bob"]
        assert ledger_from_dict(d) == s

    def test_missing_field(self):
        d = pool_to_dict(initial_state("owner").pool)
        del d["exchange_rate"]
        with pytest.raises(KeyError):
            pool_from_dict(d)

    def test_bool_rejected_for_int_field(self):
        d = pool_to_dict(initial_state("owner").pool)
        d["fee_percentage"] = True
        with pytest.raises(TypeError):
            pool_from_dict(d)

    def test_paused_must_be_bool(self):
        d = pool_to_dict(initial_state("owner").pool)
        d["paused"] = 1
        with pytest.raises(TypeError):
            pool_from_dict(d)
