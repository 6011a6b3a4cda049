"""Tests for snapshot parsing and pool variant resolution."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from poolquote.amm.pools import StablePool, WeightedPool
from poolquote.errors import InvalidPoolSnapshot, UnsupportedPoolType
from poolquote.math.dec import Dec
from poolquote.models.raw import RawPoolSnapshot
from poolquote.resolver import check_pool_type, resolve_pool
from tests.helpers import (
    STABLE_POOL_TYPE,
    WEIGHTED_POOL_TYPE,
    stable_snapshot,
    weighted_snapshot,
)


def resolve(snapshot: dict) -> WeightedPool | StablePool:
    return resolve_pool(RawPoolSnapshot.model_validate(snapshot))


class TestRawPoolSnapshot:
    def test_type_alias(self) -> None:
        """The discriminator arrives as "@type"."""
        raw = RawPoolSnapshot.model_validate(weighted_snapshot([("uosmo", 5, 1)]))
        assert raw.type_url == "/osmosis.gamm.v1beta1.Pool"

    def test_extra_fields_kept(self) -> None:
        """Unknown fields survive validation."""
        snapshot = weighted_snapshot([("uosmo", 5, 1)])
        snapshot["future_field"] = {"x": 1}
        raw = RawPoolSnapshot.model_validate(snapshot)
        assert raw.model_extra == {"future_field": {"x": 1}}

    def test_negative_amount_rejected(self) -> None:
        """Integer strings must be non-negative."""
        with pytest.raises(ValidationError):
            RawPoolSnapshot.model_validate(weighted_snapshot([("uosmo", -5, 1)]))

    def test_missing_type_rejected(self) -> None:
        """The discriminator is required."""
        snapshot = weighted_snapshot([("uosmo", 5, 1)])
        del snapshot["@type"]
        with pytest.raises(ValidationError):
            RawPoolSnapshot.model_validate(snapshot)


class TestResolveWeighted:
    def test_parses_assets_and_fees(self) -> None:
        """Weighted snapshots become WeightedPool."""
        pool = resolve(
            weighted_snapshot(
                [("uosmo", 1_000_000, 536870912000000), ("uatom", 2_000_000, 536870912000000)],
                swap_fee="0.002",
                exit_fee="0.001",
            )
        )
        assert isinstance(pool, WeightedPool)
        assert pool.pool_type == "weighted"
        assert pool.id == "1"
        assert pool.swap_fee == Dec.from_str("0.002")
        assert pool.exit_fee == Dec.from_str("0.001")
        assert pool.share_denom == "gamm/pool/1"
        assert pool.total_share == 10**20
        assert pool.total_weight == 2 * 536870912000000
        assert [a.denom for a in pool.pool_assets] == ["uosmo", "uatom"]
        assert pool.get_pool_asset("uatom").amount == 2_000_000

    def test_parses_weight_schedule(self) -> None:
        """Smoothing params become a WeightSchedule."""
        params = {
            "start_time": "2022-01-01T00:00:00Z",
            "duration": "100s",
            "initial_pool_weights": [
                {"token": {"denom": "uosmo", "amount": "0"}, "weight": "50"},
                {"token": {"denom": "uatom", "amount": "0"}, "weight": "50"},
            ],
            "target_pool_weights": [
                {"token": {"denom": "uosmo", "amount": "0"}, "weight": "80"},
                {"token": {"denom": "uatom", "amount": "0"}, "weight": "20"},
            ],
        }
        pool = resolve(
            weighted_snapshot(
                [("uosmo", 10, 50), ("uatom", 10, 50)], smooth_weight_change_params=params
            )
        )
        schedule = pool.smooth_weight_change

        assert schedule is not None
        assert schedule.start_time == datetime(2022, 1, 1, tzinfo=timezone.utc)
        assert schedule.duration == timedelta(seconds=100)
        assert schedule.end_time == datetime(2022, 1, 1, 0, 1, 40, tzinfo=timezone.utc)
        assert schedule.target_pool_weights == (("uosmo", 80), ("uatom", 20))

    def test_fee_out_of_range(self) -> None:
        """A swap fee of 1 or more is invalid."""
        with pytest.raises(InvalidPoolSnapshot):
            resolve(weighted_snapshot([("uosmo", 10, 1), ("uatom", 10, 1)], swap_fee="1"))

    def test_missing_pool_assets(self) -> None:
        """A weighted discriminator with only pool_liquidity is unsupported."""
        snapshot = weighted_snapshot([("uosmo", 10, 1)])
        del snapshot["pool_assets"]
        snapshot["pool_liquidity"] = [{"denom": "uosmo", "amount": "10"}]
        with pytest.raises(UnsupportedPoolType):
            resolve(snapshot)


class TestResolveStable:
    def test_parses_liquidity(self) -> None:
        """Stableswap snapshots become StablePool."""
        pool = resolve(
            stable_snapshot(
                [{"denom": "uusdc", "amount": "1000"}, {"denom": "dai-pico", "amount": "2000"}],
                swap_fee="0.0001",
            )
        )
        assert isinstance(pool, StablePool)
        assert pool.pool_type == "stable"
        assert pool.swap_fee == Dec.from_str("0.0001")
        assert pool.scaling_factors == (1, 1)

    def test_scaling_factor_sources(self) -> None:
        """Per-entry scalingFactor wins over the positional list."""
        pool = resolve(
            stable_snapshot(
                [
                    {"denom": "uusdc", "amount": "1000", "scalingFactor": "7"},
                    {"denom": "dai-pico", "amount": "2000"},
                    {"denom": "uatom", "amount": "3000"},
                ],
                scaling_factors=["3", "1000000"],
            )
        )
        assert pool.scaling_factors == (7, 1_000_000, 1)

    def test_zero_scaling_factor(self) -> None:
        """Scaling factors must be positive."""
        with pytest.raises(InvalidPoolSnapshot):
            resolve(
                stable_snapshot(
                    [{"denom": "uusdc", "amount": "1000", "scalingFactor": "0"}],
                )
            )

    def test_missing_liquidity(self) -> None:
        """A stable discriminator without pool_liquidity is unsupported."""
        snapshot = stable_snapshot([])
        del snapshot["pool_liquidity"]
        with pytest.raises(UnsupportedPoolType):
            resolve(snapshot)


class TestResolveDiscriminator:
    def test_unknown_type(self) -> None:
        """Unknown discriminators are unsupported."""
        snapshot = weighted_snapshot([("uosmo", 10, 1)])
        snapshot["@type"] = "/osmosis.concentratedliquidity.v1beta1.Pool"
        with pytest.raises(UnsupportedPoolType) as exc_info:
            resolve(snapshot)
        assert exc_info.value.type_url == "/osmosis.concentratedliquidity.v1beta1.Pool"
        assert not exc_info.value.recoverable

    def test_both_lists_present(self) -> None:
        """A record can't carry both asset lists."""
        snapshot = weighted_snapshot([("uosmo", 10, 1)])
        snapshot["pool_liquidity"] = [{"denom": "uosmo", "amount": "10"}]
        with pytest.raises(UnsupportedPoolType):
            resolve(snapshot)

    def test_check_pool_type(self) -> None:
        """Only the tag is checked, before any other field is looked at."""
        check_pool_type(WEIGHTED_POOL_TYPE)
        check_pool_type(STABLE_POOL_TYPE)
        with pytest.raises(UnsupportedPoolType):
            check_pool_type("/osmosis.cosmwasmpool.v1beta1.CosmWasmPool", "1212")
