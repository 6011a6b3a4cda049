"""Pool variant dataclasses.

Data structures for weighted and stable pools, each carrying its own curve
math behind the uniform ``Pool`` surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import ClassVar

from poolquote.math.dec import Dec

from . import stable_math, weighted_math
from .base import BasePool, PoolAsset, PoolType

_ONE = Dec.one()


@dataclass(frozen=True)
class WeightSchedule:
    """Governance-scheduled linear weight change.

    Attributes:
        start_time: When the transition starts
        duration: How long it runs; weights reach target at start + duration
        initial_pool_weights: (denom, weight) pairs at start_time
        target_pool_weights: (denom, weight) pairs at the end of the window
    """

    start_time: datetime
    duration: timedelta
    initial_pool_weights: tuple[tuple[str, int], ...]
    target_pool_weights: tuple[tuple[str, int], ...]

    @property
    def end_time(self) -> datetime:
        return self.start_time + self.duration


@dataclass(frozen=True)
class WeightedPool(BasePool):
    """Weighted product pool.

    Attributes:
        id: Pool id
        swap_fee: Swap fee as a fraction (e.g., 0.002 for 0.2%)
        exit_fee: Exit fee as a fraction
        share_denom: Denom of the pool's share token (e.g., "gamm/pool/1")
        total_share: Raw supply of share tokens
        pool_assets: Assets with raw amounts and unnormalized weights
        smooth_weight_change: Active weight schedule, if any
        address: Pool account address
    """

    pool_type: ClassVar[PoolType] = "weighted"

    id: str
    swap_fee: Dec
    exit_fee: Dec
    share_denom: str
    total_share: int
    pool_assets: tuple[PoolAsset, ...]
    smooth_weight_change: WeightSchedule | None = None
    address: str | None = None

    @property
    def total_weight(self) -> int:
        return sum(asset.weight or 0 for asset in self.pool_assets)

    def _spot_price(self, asset_in: PoolAsset, asset_out: PoolAsset, swap_fee: Dec) -> Dec:
        return weighted_math.calc_spot_price(
            balance_in=Dec.from_int(asset_in.amount),
            weight_in=Dec.from_int(asset_in.weight or 0),
            balance_out=Dec.from_int(asset_out.amount),
            weight_out=Dec.from_int(asset_out.weight or 0),
            swap_fee=swap_fee,
        )

    def _calc_out_given_in(self, asset_in: PoolAsset, asset_out: PoolAsset, amount_in: int) -> int:
        amount_out = weighted_math.calc_out_given_in(
            balance_in=Dec.from_int(asset_in.amount),
            weight_in=Dec.from_int(asset_in.weight or 0),
            balance_out=Dec.from_int(asset_out.amount),
            weight_out=Dec.from_int(asset_out.weight or 0),
            amount_in=Dec.from_int(amount_in),
            swap_fee=self.swap_fee,
        )
        return amount_out.truncate()

    def _calc_in_given_out(self, asset_in: PoolAsset, asset_out: PoolAsset, amount_out: int) -> int:
        amount_in = weighted_math.calc_in_given_out(
            balance_in=Dec.from_int(asset_in.amount),
            weight_in=Dec.from_int(asset_in.weight or 0),
            balance_out=Dec.from_int(asset_out.amount),
            weight_out=Dec.from_int(asset_out.weight or 0),
            amount_out=Dec.from_int(amount_out),
            swap_fee=self.swap_fee,
        )
        return amount_in.ceil()


@dataclass(frozen=True)
class StablePool(BasePool):
    """Stableswap pool on the xy(x^2 + y^2 + w) curve.

    Attributes:
        id: Pool id
        swap_fee: Swap fee as a fraction (e.g., 0.0001 for 0.01%)
        exit_fee: Exit fee as a fraction
        share_denom: Denom of the pool's share token
        total_share: Raw supply of share tokens
        pool_assets: Assets with raw amounts and scaling factors
        address: Pool account address
    """

    pool_type: ClassVar[PoolType] = "stable"

    id: str
    swap_fee: Dec
    exit_fee: Dec
    share_denom: str
    total_share: int
    pool_assets: tuple[PoolAsset, ...]
    address: str | None = None

    @property
    def scaling_factors(self) -> tuple[int, ...]:
        return tuple(asset.scaling_factor or 1 for asset in self.pool_assets)

    @staticmethod
    def scaled_amount(asset: PoolAsset) -> Dec:
        """Reserve divided by its scaling factor."""
        return Dec.from_int(asset.amount).quo_truncate(Dec.from_int(asset.scaling_factor or 1))

    def _other_squares(self, asset_in: PoolAsset, asset_out: PoolAsset) -> Dec:
        """w: sum of squared scaled reserves outside the traded pair."""
        w = Dec.zero()
        for asset in self.pool_assets:
            if asset.denom in (asset_in.denom, asset_out.denom):
                continue
            scaled = self.scaled_amount(asset)
            w = w.add(scaled.mul_truncate(scaled))
        return w

    def _spot_price(self, asset_in: PoolAsset, asset_out: PoolAsset, swap_fee: Dec) -> Dec:
        scaled_price = stable_math.calc_spot_price(
            self.scaled_amount(asset_in),
            self.scaled_amount(asset_out),
            self._other_squares(asset_in, asset_out),
        )
        # Back to raw units: raw = scaled * scaling_factor
        raw_price = scaled_price.mul_truncate(
            Dec.from_int(asset_in.scaling_factor or 1)
        ).quo_truncate(Dec.from_int(asset_out.scaling_factor or 1))
        return raw_price.quo_truncate(_ONE.sub(swap_fee))

    def _calc_out_given_in(self, asset_in: PoolAsset, asset_out: PoolAsset, amount_in: int) -> int:
        adjusted_in = Dec.from_int(amount_in).mul_truncate(_ONE.sub(self.swap_fee))
        scaled_in = adjusted_in.quo_truncate(Dec.from_int(asset_in.scaling_factor or 1))

        scaled_out = stable_math.calc_out_given_in(
            reserve_in=self.scaled_amount(asset_in),
            reserve_out=self.scaled_amount(asset_out),
            w=self._other_squares(asset_in, asset_out),
            amount_in=scaled_in,
        )
        return scaled_out.mul_truncate(Dec.from_int(asset_out.scaling_factor or 1)).truncate()

    def _calc_in_given_out(self, asset_in: PoolAsset, asset_out: PoolAsset, amount_out: int) -> int:
        scaled_out = Dec.from_int(amount_out).quo_truncate(
            Dec.from_int(asset_out.scaling_factor or 1)
        )

        scaled_in = stable_math.calc_in_given_out(
            reserve_in=self.scaled_amount(asset_in),
            reserve_out=self.scaled_amount(asset_out),
            w=self._other_squares(asset_in, asset_out),
            amount_out=scaled_out,
        )
        amount_in = scaled_in.mul_truncate(Dec.from_int(asset_in.scaling_factor or 1))
        return amount_in.quo_truncate(_ONE.sub(self.swap_fee)).ceil()
