"""Weight smoothing for weighted pools.

Governance can schedule a linear change of a weighted pool's weights over a
time window. This module resolves such a schedule into currencies and
percentage ratios; interpolating the weights at a given moment is left to
the caller:

    progress = clamp((now - start_time) / duration, 0, 1)
    weight = initial + (target - initial) * progress
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from poolquote.amm.base import Pool
from poolquote.amm.pools import WeightedPool
from poolquote.math.dec import Dec
from poolquote.models.types import Currency
from poolquote.registry import CurrencyRegistry


@dataclass(frozen=True)
class PoolWeight:
    """A currency's weight within a schedule endpoint.

    Attributes:
        currency: Asset currency
        weight: Unnormalized weight
        ratio: Share of the total weight, in percent
    """

    currency: Currency
    weight: Dec
    ratio: Dec


@dataclass(frozen=True)
class WeightSmoothing:
    start_time: datetime
    end_time: datetime
    duration: timedelta
    initial_pool_weights: tuple[PoolWeight, ...]
    target_pool_weights: tuple[PoolWeight, ...]


def _pool_weights(
    weights: tuple[tuple[str, int], ...], registry: CurrencyRegistry
) -> tuple[PoolWeight, ...]:
    total = Dec.zero()
    for _, weight in weights:
        total = total.add(Dec.from_int(weight))

    result = []
    for denom, weight in weights:
        weight_dec = Dec.from_int(weight)
        result.append(
            PoolWeight(
                currency=registry.force_find_currency(denom),
                weight=weight_dec,
                ratio=weight_dec.quo_truncate(total).move_decimal_point(2),
            )
        )
    return tuple(result)


def compute_weight_smoothing(pool: Pool, registry: CurrencyRegistry) -> WeightSmoothing | None:
    """Resolve a weighted pool's smoothing schedule.

    Returns:
        WeightSmoothing, or None for non-weighted pools and pools without
        a schedule

    Raises:
        UnknownCurrency: If a scheduled denom isn't registered
        DivisionByZero: If an endpoint's weights sum to zero
    """
    if not isinstance(pool, WeightedPool):
        return None
    schedule = pool.smooth_weight_change
    if schedule is None:
        return None

    return WeightSmoothing(
        start_time=schedule.start_time,
        end_time=schedule.end_time,
        duration=schedule.duration,
        initial_pool_weights=_pool_weights(schedule.initial_pool_weights, registry),
        target_pool_weights=_pool_weights(schedule.target_pool_weights, registry),
    )
