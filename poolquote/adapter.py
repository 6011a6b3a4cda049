"""Decimal-scaling quote adapter.

The pool kernels work in raw ledger units: a price of 2 means two raw units
of the input per raw unit of the output. The adapter turns those into
human-readable values using each currency's decimal exponent:

    in_over_out (display) = in_over_out (raw) * 10^(decimals(out) - decimals(in))
    out_over_in (display) = out_over_in (raw) * 10^(decimals(in) - decimals(out))

Price impact is a ratio of two prices in the same units and passes through
unscaled.

Spot prices and quotes are memoized per store version, keyed by the request's
canonical primitives.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog

from poolquote.amm.base import PoolAsset, RawSwapResult, TokenAmount
from poolquote.amm.pools import StablePool, WeightedPool
from poolquote.math.dec import Dec
from poolquote.memo import ValueMemo, canonical_amount
from poolquote.models.types import CoinAmount, Currency, SwapQuote
from poolquote.oracle import PriceOracle
from poolquote.registry import CurrencyRegistry
from poolquote.smoothing import WeightSmoothing, compute_weight_smoothing
from poolquote.store import PoolStore

logger = structlog.get_logger()

T = TypeVar("T")


@dataclass(frozen=True)
class WeightedAssetInfo:
    """Weighted pool asset with its weight.

    Attributes:
        amount: Reserve in the asset's currency
        weight: Unnormalized weight
        weight_fraction: weight / total weight
    """

    amount: CoinAmount
    weight: Dec
    weight_fraction: Dec


@dataclass(frozen=True)
class WeightedPoolInfo:
    assets: tuple[WeightedAssetInfo, ...]
    total_weight: Dec
    smooth_weight_change: WeightSmoothing | None


@dataclass(frozen=True)
class StableAssetInfo:
    """Stable pool asset with its scaling factor.

    Attributes:
        amount: Reserve in the asset's currency
        scaling_factor: Reserve divisor used by the CFMM
        amount_scaled: Raw reserve divided by scaling_factor
    """

    amount: CoinAmount
    scaling_factor: int
    amount_scaled: Dec


@dataclass(frozen=True)
class StableSwapInfo:
    assets: tuple[StableAssetInfo, ...]
    scaling_factors: tuple[int, ...]


class PoolQuoteAdapter:
    """Decimal-aware spot prices and swap quotes for one pool.

    Usage:
        adapter = PoolQuoteAdapter(store)
        quote = adapter.quote_out_given_in("uosmo", 1_000_000, "uatom")
        print(quote.amount, quote.price_impact)
    """

    def __init__(self, store: PoolStore, registry: CurrencyRegistry | None = None) -> None:
        """Initialize the adapter.

        Args:
            store: Store holding the pool's current state
            registry: Currency registry (defaults to the store's)
        """
        self._store = store
        self._registry = registry if registry is not None else store.registry
        self._memo = ValueMemo()

    @property
    def store(self) -> PoolStore:
        return self._store

    @property
    def memo(self) -> ValueMemo:
        return self._memo

    def _currency(self, denom: str) -> Currency:
        return self._registry.force_find_currency(denom)

    def _memoized(self, key: tuple[str, ...], compute: Callable[[], T]) -> T:
        return self._memo.get_or_compute(self._store.version, key, compute)

    # =========================================================================
    # Spot prices
    # =========================================================================

    def spot_price(self, in_denom: str, out_denom: str, include_fee: bool = True) -> Dec:
        """Spot price of in_denom quoted in out_denom, in display units.

        Raises:
            UnknownCurrency: If either denom isn't registered
            PoolAssetNotFound: If the pool doesn't hold either denom
        """

        def compute() -> Dec:
            in_currency = self._currency(in_denom)
            out_currency = self._currency(out_denom)
            pool = self._store.pool
            if include_fee:
                raw = pool.spot_price_in_over_out(in_denom, out_denom)
            else:
                raw = pool.spot_price_in_over_out_without_fee(in_denom, out_denom)
            return raw.move_decimal_point(out_currency.coin_decimals - in_currency.coin_decimals)

        key = ("spot_price_in_over_out", in_denom, out_denom, str(include_fee))
        return self._memoized(key, compute)

    def spot_price_out_over_in(
        self, in_denom: str, out_denom: str, include_fee: bool = True
    ) -> Dec:
        """Spot price of out_denom quoted in in_denom, in display units."""

        def compute() -> Dec:
            in_currency = self._currency(in_denom)
            out_currency = self._currency(out_denom)
            pool = self._store.pool
            if include_fee:
                raw = pool.spot_price_out_over_in(in_denom, out_denom)
            else:
                raw = pool.spot_price_out_over_in_without_fee(in_denom, out_denom)
            return raw.move_decimal_point(in_currency.coin_decimals - out_currency.coin_decimals)

        key = ("spot_price_out_over_in", in_denom, out_denom, str(include_fee))
        return self._memoized(key, compute)

    # =========================================================================
    # Quotes
    # =========================================================================

    def quote_out_given_in(self, in_denom: str, in_amount: int | Dec, out_denom: str) -> SwapQuote:
        """Quote selling an exact raw amount of in_denom for out_denom.

        Args:
            in_denom: Denom sold
            in_amount: Raw amount sold; a Dec is truncated to raw units
            out_denom: Denom bought

        Returns:
            SwapQuote whose amount is the output, in out_denom's currency

        Raises:
            ValueError: If in_amount is negative
            UnknownCurrency: If either denom isn't registered
            SwapMathError: If the kernel fails
        """
        raw_amount = canonical_amount(in_amount)

        def compute() -> SwapQuote:
            in_currency = self._currency(in_denom)
            out_currency = self._currency(out_denom)
            result = self._store.pool.get_token_out_by_token_in(
                TokenAmount(in_denom, int(raw_amount)), out_denom
            )
            return _scale_result(result, in_currency, out_currency, amount_currency=out_currency)

        key = ("quote_out_given_in", in_denom, raw_amount, out_denom)
        return self._memoized(key, compute)

    def quote_in_given_out(self, out_denom: str, out_amount: int | Dec, in_denom: str) -> SwapQuote:
        """Quote buying an exact raw amount of out_denom with in_denom.

        This runs the pool's exact-output curve math. It does not price the
        trade as an exact-input swap with the two denoms swapped, which
        values the wrong side of the trade and ignores the curve's convexity.
        Results can differ from front ends that compute it that way.

        Returns:
            SwapQuote whose amount is the input required, in in_denom's currency

        Raises:
            ValueError: If out_amount is negative
            UnknownCurrency: If either denom isn't registered
            SwapMathError: If the kernel fails (e.g., output exceeds reserves)
        """
        raw_amount = canonical_amount(out_amount)

        def compute() -> SwapQuote:
            in_currency = self._currency(in_denom)
            out_currency = self._currency(out_denom)
            result = self._store.pool.get_token_in_by_token_out(
                TokenAmount(out_denom, int(raw_amount)), in_denom
            )
            return _scale_result(result, in_currency, out_currency, amount_currency=in_currency)

        key = ("quote_in_given_out", out_denom, raw_amount, in_denom)
        return self._memoized(key, compute)

    # =========================================================================
    # Pool views
    # =========================================================================

    def _coin(self, asset: PoolAsset) -> CoinAmount:
        return CoinAmount(self._currency(asset.denom), asset.amount)

    @property
    def pool_assets(self) -> list[CoinAmount]:
        return [self._coin(asset) for asset in self._store.pool.pool_assets]

    def get_pool_asset(self, denom: str) -> CoinAmount:
        """Reserve of one asset.

        Raises:
            PoolAssetNotFound: If the pool doesn't hold the denom
            UnknownCurrency: If the denom isn't registered
        """
        return self._coin(self._store.pool.get_pool_asset(denom))

    def total_value_locked(self, oracle: PriceOracle) -> Dec:
        """Sum of the pool's reserves priced in the oracle's default currency.

        Assets the oracle can't price count as zero.
        """
        vs_currency = oracle.default_vs_currency
        total = Dec.zero()
        for coin in self.pool_assets:
            price = oracle.calculate_price(coin, vs_currency)
            if price is None:
                logger.debug(
                    "asset_unpriced",
                    pool_id=self._store.pool_id,
                    denom=coin.denom,
                    vs_currency=vs_currency,
                )
                continue
            total = total.add(price)
        return total

    def weighted_pool_info(self) -> WeightedPoolInfo | None:
        """Weights of a weighted pool; None for other pool types."""
        pool = self._store.pool
        if not isinstance(pool, WeightedPool):
            return None

        total_weight = Dec.from_int(pool.total_weight)
        assets = tuple(
            WeightedAssetInfo(
                amount=self._coin(asset),
                weight=Dec.from_int(asset.weight or 0),
                weight_fraction=Dec.from_int(asset.weight or 0).quo_truncate(total_weight),
            )
            for asset in pool.pool_assets
        )
        return WeightedPoolInfo(
            assets=assets,
            total_weight=total_weight,
            smooth_weight_change=compute_weight_smoothing(pool, self._registry),
        )

    def stable_swap_info(self) -> StableSwapInfo | None:
        """Scaling factors of a stable pool; None for other pool types."""
        pool = self._store.pool
        if not isinstance(pool, StablePool):
            return None

        assets = tuple(
            StableAssetInfo(
                amount=self._coin(asset),
                scaling_factor=asset.scaling_factor or 1,
                amount_scaled=StablePool.scaled_amount(asset),
            )
            for asset in pool.pool_assets
        )
        return StableSwapInfo(assets=assets, scaling_factors=pool.scaling_factors)

    def smooth_weight_change(self) -> WeightSmoothing | None:
        return compute_weight_smoothing(self._store.pool, self._registry)


def _scale_result(
    result: RawSwapResult,
    in_currency: Currency,
    out_currency: Currency,
    amount_currency: Currency,
) -> SwapQuote:
    """Move every raw price of a swap result into display units."""
    in_over_out = out_currency.coin_decimals - in_currency.coin_decimals
    out_over_in = -in_over_out
    return SwapQuote(
        amount=CoinAmount(amount_currency, result.amount),
        before_spot_price_in_over_out=result.before_spot_price_in_over_out.move_decimal_point(
            in_over_out
        ),
        before_spot_price_out_over_in=result.before_spot_price_out_over_in.move_decimal_point(
            out_over_in
        ),
        after_spot_price_in_over_out=result.after_spot_price_in_over_out.move_decimal_point(
            in_over_out
        ),
        after_spot_price_out_over_in=result.after_spot_price_out_over_in.move_decimal_point(
            out_over_in
        ),
        effective_price_in_over_out=result.effective_price_in_over_out.move_decimal_point(
            in_over_out
        ),
        effective_price_out_over_in=result.effective_price_out_over_in.move_decimal_point(
            out_over_in
        ),
        price_impact=result.price_impact,
    )
