"""Factory functions for creating test objects.

Usage:
    from tests.helpers import weighted_snapshot, StubPool

    snapshot = weighted_snapshot([("uosmo", 1_000_000, 1), ("uatom", 1_000_000, 1)])
"""

from dataclasses import dataclass, field
from typing import Any

from poolquote.amm.base import PoolAsset, RawSwapResult, TokenAmount
from poolquote.math.dec import Dec
from tests.helpers.constants import STABLE_POOL_TYPE, WEIGHTED_POOL_TYPE


def weighted_snapshot(
    assets: list[tuple[str, int, int]],
    pool_id: str = "1",
    swap_fee: str = "0",
    exit_fee: str = "0",
    smooth_weight_change_params: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a wire-format weighted pool record.

    Args:
        assets: (denom, raw amount, weight) triples
        pool_id: Pool id
        swap_fee: Swap fee as a decimal string
        exit_fee: Exit fee as a decimal string
        smooth_weight_change_params: Optional wire-format weight schedule

    Returns:
        Dict accepted by RawPoolSnapshot.model_validate
    """
    return {
        "@type": WEIGHTED_POOL_TYPE,
        "id": pool_id,
        "address": f"osmo1pool{pool_id}",
        "pool_params": {
            "swap_fee": swap_fee,
            "exit_fee": exit_fee,
            "smooth_weight_change_params": smooth_weight_change_params,
        },
        "total_shares": {"denom": f"gamm/pool/{pool_id}", "amount": "100000000000000000000"},
        "pool_assets": [
            {"token": {"denom": denom, "amount": str(amount)}, "weight": str(weight)}
            for denom, amount, weight in assets
        ],
        "total_weight": str(sum(weight for _, _, weight in assets)),
    }


def stable_snapshot(
    liquidity: list[dict[str, Any]],
    pool_id: str = "2",
    swap_fee: str = "0",
    scaling_factors: list[str] | None = None,
) -> dict[str, Any]:
    """Build a wire-format stableswap pool record.

    Args:
        liquidity: ``pool_liquidity`` entries ({denom, amount, scalingFactor?})
    """
    snapshot: dict[str, Any] = {
        "@type": STABLE_POOL_TYPE,
        "id": pool_id,
        "pool_params": {"swap_fee": swap_fee, "exit_fee": "0"},
        "total_shares": {"denom": f"gamm/pool/{pool_id}", "amount": "100000000000000000000"},
        "pool_liquidity": liquidity,
    }
    if scaling_factors is not None:
        snapshot["scaling_factors"] = scaling_factors
    return snapshot


def weight_schedule_params(
    initial: list[tuple[str, int]],
    target: list[tuple[str, int]],
    start_time: str = "2022-01-01T00:00:00Z",
    duration: str = "100s",
) -> dict[str, Any]:
    """Build wire-format smooth_weight_change_params."""

    def weights(pairs: list[tuple[str, int]]) -> list[dict[str, Any]]:
        return [{"token": {"denom": d, "amount": "0"}, "weight": str(w)} for d, w in pairs]

    return {
        "start_time": start_time,
        "duration": duration,
        "initial_pool_weights": weights(initial),
        "target_pool_weights": weights(target),
    }


@dataclass
class StubPool:
    """Pool kernel stand-in that counts calls and returns fixed results.

    Raw spot price in over out is ``price``; swaps return ``amount`` with
    every in-over-out price set to ``price``.
    """

    id: str = "1"
    price: Dec = field(default_factory=lambda: Dec.from_int(2))
    amount: int = 500
    pool_assets: tuple[PoolAsset, ...] = (
        PoolAsset("uosmo", 1_000_000, weight=1),
        PoolAsset("uatom", 1_000_000, weight=1),
    )
    swap_fee: Dec = field(default_factory=Dec.zero)
    exit_fee: Dec = field(default_factory=Dec.zero)
    share_denom: str = "gamm/pool/1"
    total_share: int = 10**20
    pool_type: str = "weighted"
    calls: dict[str, int] = field(default_factory=dict)

    def _count(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    def get_pool_asset(self, denom: str) -> PoolAsset:
        return next(a for a in self.pool_assets if a.denom == denom)

    def spot_price_in_over_out(self, token_in_denom: str, token_out_denom: str) -> Dec:
        self._count("spot_price_in_over_out")
        return self.price

    def spot_price_out_over_in(self, token_in_denom: str, token_out_denom: str) -> Dec:
        self._count("spot_price_out_over_in")
        return Dec.one().quo_truncate(self.price)

    def spot_price_in_over_out_without_fee(self, token_in_denom: str, token_out_denom: str) -> Dec:
        self._count("spot_price_in_over_out_without_fee")
        return self.price

    def spot_price_out_over_in_without_fee(self, token_in_denom: str, token_out_denom: str) -> Dec:
        self._count("spot_price_out_over_in_without_fee")
        return Dec.one().quo_truncate(self.price)

    def _result(self) -> RawSwapResult:
        inverse = Dec.one().quo_truncate(self.price)
        return RawSwapResult(
            amount=self.amount,
            before_spot_price_in_over_out=self.price,
            before_spot_price_out_over_in=inverse,
            after_spot_price_in_over_out=self.price,
            after_spot_price_out_over_in=inverse,
            effective_price_in_over_out=self.price,
            effective_price_out_over_in=inverse,
            price_impact=Dec.from_str("0.01"),
        )

    def get_token_out_by_token_in(
        self, token_in: TokenAmount, token_out_denom: str
    ) -> RawSwapResult:
        self._count("get_token_out_by_token_in")
        return self._result()

    def get_token_in_by_token_out(
        self, token_out: TokenAmount, token_in_denom: str
    ) -> RawSwapResult:
        self._count("get_token_in_by_token_out")
        return self._result()
