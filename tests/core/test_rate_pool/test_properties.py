"""Property tests for the rate_pool engine.

Uses Hypothesis to fuzz random action sequences and checks that:
- balances never go negative and the fee never leaves [0, 100],
- a rejected step returns no state (the pre-state stays authoritative),
- an accepted swap moves exactly `amount` in and `compute_swap_output` out,
- reads never change the state they read.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from src.core.rate_pool import Action, ActionParams, compute_swap_output, initial_state, step
from src.core.rate_pool.invariants import check_all
from src.core.rate_pool.registry import get_provider_info
from src.core.rate_pool.state import ledger_to_dict, read_balances, read_rate

OWNER = "owner"
CALLERS = st.sampled_from([OWNER, "alice", "bob"])
AMOUNTS = st.integers(min_value=-5, max_value=5_000)

_ACTIONS = st.one_of(
    st.builds(ActionParams, action=st.just(Action.SWAP_A_TO_B), caller=CALLERS, amount=AMOUNTS),
    st.builds(
        ActionParams,
        action=st.just(Action.ADD_LIQUIDITY),
        caller=CALLERS,
        amount_a=AMOUNTS,
        amount_b=AMOUNTS,
    ),
    st.builds(
        ActionParams,
        action=st.just(Action.UPDATE_EXCHANGE_RATE),
        caller=CALLERS,
        new_rate=st.integers(min_value=-1, max_value=400),
    ),
    st.builds(
        ActionParams,
        action=st.just(Action.UPDATE_FEE),
        caller=CALLERS,
        new_fee=st.integers(min_value=-1, max_value=150),
    ),
    st.builds(ActionParams, action=st.just(Action.TOGGLE_PAUSE), caller=CALLERS),
)

_INITIAL = st.builds(
    lambda a, b, rate, fee: initial_state(
        OWNER, token_a_balance=a, token_b_balance=b, exchange_rate=rate, fee_percentage=fee,
    ),
    st.integers(min_value=0, max_value=10_000),
    st.integers(min_value=0, max_value=10_000),
    st.integers(min_value=0, max_value=300),
    st.integers(min_value=0, max_value=100),
)


@settings(max_examples=200, deadline=None)
@given(state=_INITIAL, actions=st.lists(_ACTIONS, max_size=30))
def test_invariants_hold_across_sequences(state, actions) -> None:
    for params in actions:
        result = step(state, params)
        if result.accepted:
            assert result.state is not None
            state = result.state
        else:
            assert result.state is None
            assert result.rejection is not None
        a, b = read_balances(state.pool)
        assert a >= 0 and b >= 0
        assert 0 <= state.pool.fee_percentage <= 100
        assert check_all(state) == []


@settings(max_examples=200, deadline=None)
@given(state=_INITIAL, amount=AMOUNTS)
def test_accepted_swap_moves_exact_amounts(state, amount) -> None:
    result = step(state, ActionParams(action=Action.SWAP_A_TO_B, caller="alice", amount=amount))
    if not result.accepted:
        return
    pool = state.pool
    expected = compute_swap_output(amount, pool.fee_percentage, pool.exchange_rate)
    assert result.effect.output_amount == expected
    assert result.state.pool.token_a_balance == pool.token_a_balance + amount
    assert result.state.pool.token_b_balance == pool.token_b_balance - expected


@settings(max_examples=100, deadline=None)
@given(state=_INITIAL, participant=CALLERS)
def test_reads_do_not_mutate(state, participant) -> None:
    before = ledger_to_dict(state)
    read_balances(state.pool)
    read_rate(state.pool)
    get_provider_info(state.providers, participant)
    assert ledger_to_dict(state) == before
    assert participant not in state.providers


@settings(max_examples=100, deadline=None)
@given(state=_INITIAL, caller=st.sampled_from(["alice", "bob"]), new_fee=st.integers(min_value=-10, max_value=500))
def test_non_owner_fee_update_always_rejected(state, caller, new_fee) -> None:
    result = step(state, ActionParams(action=Action.UPDATE_FEE, caller=caller, new_fee=new_fee))
    assert not result.accepted
    assert result.rejection.label == "OwnerOnly"
