"""Pool parsing.

Functions to build typed pools from validated wire-format snapshots.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from poolquote.errors import InvalidPoolSnapshot, UnsupportedPoolType
from poolquote.math.dec import Dec

from .base import PoolAsset
from .pools import StablePool, WeightedPool, WeightSchedule

if TYPE_CHECKING:
    from poolquote.models.raw import (
        RawPoolSnapshot,
        RawSmoothWeightChangeParams,
        RawStablePoolAsset,
    )

logger = structlog.get_logger()


def _parse_fee(raw_fee: str, pool_id: str, field: str) -> Dec:
    """Parse a fee fraction, which must lie in [0, 1)."""
    fee = Dec.from_str(raw_fee)
    if fee.is_negative() or fee >= Dec.one():
        raise InvalidPoolSnapshot(f"Pool {pool_id}: {field} must be in [0, 1), got {raw_fee}")
    return fee


def _parse_scaling_factor(
    asset: RawStablePoolAsset,
    index: int,
    scaling_factors: list[str] | None,
    pool_id: str,
) -> int:
    """Resolve one asset's scaling factor.

    Looks up the scaling factor in two places:
    1. Per-asset "scalingFactor" key
    2. Top-level scaling_factors list, by position

    Falls back to 1 if neither is present.
    """
    scaling_raw: str | None = asset.scaling_factor
    if scaling_raw is None and scaling_factors is not None and index < len(scaling_factors):
        scaling_raw = scaling_factors[index]
    if scaling_raw is None:
        return 1

    scaling = int(scaling_raw)
    if scaling <= 0:
        raise InvalidPoolSnapshot(
            f"Pool {pool_id}: scaling factor for {asset.denom} must be positive, got {scaling}"
        )
    return scaling


def _parse_weight_schedule(params: RawSmoothWeightChangeParams) -> WeightSchedule:
    return WeightSchedule(
        start_time=params.start_time,
        duration=params.duration,
        initial_pool_weights=tuple(
            (w.token.denom, int(w.weight)) for w in params.initial_pool_weights
        ),
        target_pool_weights=tuple(
            (w.token.denom, int(w.weight)) for w in params.target_pool_weights
        ),
    )


def parse_weighted_pool(raw: RawPoolSnapshot) -> WeightedPool:
    """Parse a weighted pool snapshot into WeightedPool.

    Args:
        raw: Validated snapshot whose discriminator names a weighted pool

    Returns:
        WeightedPool

    Raises:
        UnsupportedPoolType: If the snapshot has no ``pool_assets`` list
        InvalidPoolSnapshot: If a fee is out of range
    """
    if raw.pool_assets is None:
        raise UnsupportedPoolType(raw.type_url, "weighted pool without pool_assets")

    pool_assets = tuple(
        PoolAsset(denom=a.token.denom, amount=int(a.token.amount), weight=int(a.weight))
        for a in raw.pool_assets
    )

    schedule = None
    if raw.pool_params.smooth_weight_change_params is not None:
        schedule = _parse_weight_schedule(raw.pool_params.smooth_weight_change_params)

    pool = WeightedPool(
        id=raw.id,
        swap_fee=_parse_fee(raw.pool_params.swap_fee, raw.id, "swap_fee"),
        exit_fee=_parse_fee(raw.pool_params.exit_fee, raw.id, "exit_fee"),
        share_denom=raw.total_shares.denom,
        total_share=int(raw.total_shares.amount),
        pool_assets=pool_assets,
        smooth_weight_change=schedule,
        address=raw.address,
    )

    logger.debug(
        "weighted_pool_parsed",
        pool_id=pool.id,
        num_assets=len(pool_assets),
        total_weight=pool.total_weight,
        has_schedule=schedule is not None,
    )
    return pool


def parse_stable_pool(raw: RawPoolSnapshot) -> StablePool:
    """Parse a stableswap pool snapshot into StablePool.

    Raises:
        UnsupportedPoolType: If the snapshot has no ``pool_liquidity`` list
        InvalidPoolSnapshot: If a fee or scaling factor is out of range
    """
    if raw.pool_liquidity is None:
        raise UnsupportedPoolType(raw.type_url, "stable pool without pool_liquidity")

    pool_assets = tuple(
        PoolAsset(
            denom=asset.denom,
            amount=int(asset.amount),
            scaling_factor=_parse_scaling_factor(asset, i, raw.scaling_factors, raw.id),
        )
        for i, asset in enumerate(raw.pool_liquidity)
    )

    pool = StablePool(
        id=raw.id,
        swap_fee=_parse_fee(raw.pool_params.swap_fee, raw.id, "swap_fee"),
        exit_fee=_parse_fee(raw.pool_params.exit_fee, raw.id, "exit_fee"),
        share_denom=raw.total_shares.denom,
        total_share=int(raw.total_shares.amount),
        pool_assets=pool_assets,
        address=raw.address,
    )

    logger.debug(
        "stable_pool_parsed",
        pool_id=pool.id,
        num_assets=len(pool_assets),
        scaling_factors=pool.scaling_factors,
    )
    return pool
