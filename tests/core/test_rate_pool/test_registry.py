"""Tests for src/core/rate_pool/registry.py: liquidity record bookkeeping."""

from src.core.rate_pool.registry import (
    get_provider_info,
    record_contribution,
    total_share_percentage,
)
from src.core.rate_pool.types import EMPTY_RECORD, LiquidityRecord


def test_absent_participant_gets_zeroed_record() -> None:
    providers: dict = {}
    assert get_provider_info(providers, "alice") == LiquidityRecord(0, 0, 0)
    assert get_provider_info(providers, "alice") is EMPTY_RECORD
    assert providers == {}


def test_first_contribution_creates_record() -> None:
    updated = record_contribution({}, "alice", 100, 200, 5)
    assert updated == {"alice": LiquidityRecord(100, 200, 5)}


def test_contribution_overwrites_amounts_and_accumulates_share() -> None:
    providers = {"alice": LiquidityRecord(100, 200, 5)}
    updated = record_contribution(providers, "alice", 7, 9, 3)
    assert updated["alice"] == LiquidityRecord(7, 9, 8)
    # input untouched
    assert providers["alice"] == LiquidityRecord(100, 200, 5)


def test_other_records_untouched() -> None:
    providers = {"bob": LiquidityRecord(1, 1, 1)}
    updated = record_contribution(providers, "alice", 2, 2, 2)
    assert updated["bob"] is providers["bob"]


def test_total_share_is_not_capped() -> None:
    providers = {
        "alice": LiquidityRecord(1, 1, 80),
        "bob": LiquidityRecord(1, 1, 70),
    }
    assert total_share_percentage(providers) == 150
