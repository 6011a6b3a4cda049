"""Uniform capability surface for pool variants.

Every variant answers the same raw questions: spot prices in either
direction, with or without the swap fee, and exact-in / exact-out swap
simulations. All amounts are raw ledger integers and all prices are raw
ratios; currency decimals are applied by the quote adapter, never here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Literal, NamedTuple, Protocol, runtime_checkable

from poolquote.errors import PoolAssetNotFound
from poolquote.math.dec import Dec

from .errors import SpotPriceDecreased, SwapMathError

PoolType = Literal["weighted", "stable"]

_ONE = Dec.one()


class TokenAmount(NamedTuple):
    """A denom with a raw integer amount."""

    denom: str
    amount: int


@dataclass(frozen=True)
class PoolAsset:
    """One asset held by a pool.

    Attributes:
        denom: On-chain denom
        amount: Raw reserve (no currency decimals applied)
        weight: Unnormalized weight (weighted pools only)
        scaling_factor: Reserve divisor for the CFMM (stable pools only)
    """

    denom: str
    amount: int
    weight: int | None = None
    scaling_factor: int | None = None


@dataclass(frozen=True)
class RawSwapResult:
    """Result of a simulated swap in the raw integer domain.

    ``amount`` is the computed side: the output for exact-in swaps, the
    input for exact-out swaps.
    """

    amount: int
    before_spot_price_in_over_out: Dec
    before_spot_price_out_over_in: Dec
    after_spot_price_in_over_out: Dec
    after_spot_price_out_over_in: Dec
    effective_price_in_over_out: Dec
    effective_price_out_over_in: Dec
    price_impact: Dec


@runtime_checkable
class Pool(Protocol):
    """Protocol every pool variant implements.

    The quote adapter and the store only talk to pools through this surface,
    so a stub kernel can stand in for the real math in tests.
    """

    @property
    def pool_type(self) -> PoolType: ...

    @property
    def id(self) -> str: ...

    @property
    def swap_fee(self) -> Dec: ...

    @property
    def exit_fee(self) -> Dec: ...

    @property
    def share_denom(self) -> str: ...

    @property
    def total_share(self) -> int: ...

    @property
    def pool_assets(self) -> tuple[PoolAsset, ...]: ...

    def get_pool_asset(self, denom: str) -> PoolAsset: ...

    def spot_price_in_over_out(self, token_in_denom: str, token_out_denom: str) -> Dec: ...

    def spot_price_out_over_in(self, token_in_denom: str, token_out_denom: str) -> Dec: ...

    def spot_price_in_over_out_without_fee(
        self, token_in_denom: str, token_out_denom: str
    ) -> Dec: ...

    def spot_price_out_over_in_without_fee(
        self, token_in_denom: str, token_out_denom: str
    ) -> Dec: ...

    def get_token_out_by_token_in(
        self, token_in: TokenAmount, token_out_denom: str
    ) -> RawSwapResult: ...

    def get_token_in_by_token_out(
        self, token_out: TokenAmount, token_in_denom: str
    ) -> RawSwapResult: ...


class BasePool(ABC):
    """Shared swap-result assembly for the concrete pool variants.

    Subclasses provide the curve: a spot price for a pair of (possibly
    hypothetical) reserves, and the raw amount math in both directions.
    Subclasses are frozen dataclasses declaring ``id``, ``swap_fee`` and
    ``pool_assets``.
    """

    id: str
    swap_fee: Dec
    pool_assets: tuple[PoolAsset, ...]

    @abstractmethod
    def _spot_price(self, asset_in: PoolAsset, asset_out: PoolAsset, swap_fee: Dec) -> Dec:
        """Raw spot price of asset_in over asset_out at the given reserves."""
        ...

    @abstractmethod
    def _calc_out_given_in(self, asset_in: PoolAsset, asset_out: PoolAsset, amount_in: int) -> int:
        """Raw output for an exact raw input, fee included, rounded down."""
        ...

    @abstractmethod
    def _calc_in_given_out(
        self, asset_in: PoolAsset, asset_out: PoolAsset, amount_out: int
    ) -> int:
        """Raw input for an exact raw output, fee included, rounded up."""
        ...

    def get_pool_asset(self, denom: str) -> PoolAsset:
        """Get the pool asset for a denom.

        Raises:
            PoolAssetNotFound: If the pool doesn't hold the denom
        """
        for asset in self.pool_assets:
            if asset.denom == denom:
                return asset
        raise PoolAssetNotFound(self.id, denom)

    def _swap_assets(
        self, token_in_denom: str, token_out_denom: str
    ) -> tuple[PoolAsset, PoolAsset]:
        if token_in_denom == token_out_denom:
            raise SwapMathError(f"Pool {self.id} cannot swap {token_in_denom} for itself")
        return self.get_pool_asset(token_in_denom), self.get_pool_asset(token_out_denom)

    def spot_price_in_over_out(self, token_in_denom: str, token_out_denom: str) -> Dec:
        asset_in, asset_out = self._swap_assets(token_in_denom, token_out_denom)
        return self._spot_price(asset_in, asset_out, self.swap_fee)

    def spot_price_out_over_in(self, token_in_denom: str, token_out_denom: str) -> Dec:
        return _ONE.quo_truncate(self.spot_price_in_over_out(token_in_denom, token_out_denom))

    def spot_price_in_over_out_without_fee(self, token_in_denom: str, token_out_denom: str) -> Dec:
        asset_in, asset_out = self._swap_assets(token_in_denom, token_out_denom)
        return self._spot_price(asset_in, asset_out, Dec.zero())

    def spot_price_out_over_in_without_fee(self, token_in_denom: str, token_out_denom: str) -> Dec:
        return _ONE.quo_truncate(
            self.spot_price_in_over_out_without_fee(token_in_denom, token_out_denom)
        )

    def get_token_out_by_token_in(
        self, token_in: TokenAmount, token_out_denom: str
    ) -> RawSwapResult:
        """Simulate selling an exact raw amount of token_in.

        Returns:
            RawSwapResult whose ``amount`` is the raw output
        """
        asset_in, asset_out = self._swap_assets(token_in.denom, token_out_denom)
        before = self._spot_price(asset_in, asset_out, self.swap_fee)

        amount_out = self._calc_out_given_in(asset_in, asset_out, token_in.amount)
        if amount_out <= 0:
            return _zero_result(before)

        return self._swap_result(
            asset_in, asset_out, token_in.amount, amount_out, amount_out, before
        )

    def get_token_in_by_token_out(
        self, token_out: TokenAmount, token_in_denom: str
    ) -> RawSwapResult:
        """Simulate buying an exact raw amount of token_out.

        Returns:
            RawSwapResult whose ``amount`` is the raw input required
        """
        asset_in, asset_out = self._swap_assets(token_in_denom, token_out.denom)
        before = self._spot_price(asset_in, asset_out, self.swap_fee)

        if token_out.amount <= 0:
            return _zero_result(before)

        amount_in = self._calc_in_given_out(asset_in, asset_out, token_out.amount)
        return self._swap_result(
            asset_in, asset_out, amount_in, token_out.amount, amount_in, before
        )

    def _swap_result(
        self,
        asset_in: PoolAsset,
        asset_out: PoolAsset,
        amount_in: int,
        amount_out: int,
        amount: int,
        before: Dec,
    ) -> RawSwapResult:
        after = self._spot_price(
            replace(asset_in, amount=asset_in.amount + amount_in),
            replace(asset_out, amount=asset_out.amount - amount_out),
            self.swap_fee,
        )
        if after < before:
            raise SpotPriceDecreased(
                f"Pool {self.id}: spot price fell from {before} to {after} "
                f"swapping {asset_in.denom} for {asset_out.denom}"
            )

        effective = Dec.from_int(amount_in).quo_truncate(Dec.from_int(amount_out))
        return RawSwapResult(
            amount=amount,
            before_spot_price_in_over_out=before,
            before_spot_price_out_over_in=_ONE.quo_truncate(before),
            after_spot_price_in_over_out=after,
            after_spot_price_out_over_in=_ONE.quo_truncate(after),
            effective_price_in_over_out=effective,
            effective_price_out_over_in=_ONE.quo_truncate(effective),
            price_impact=effective.quo_truncate(before).sub(_ONE),
        )


def _zero_result(before: Dec) -> RawSwapResult:
    """Result for a swap too small to move any tokens."""
    before_out_over_in = _ONE.quo_truncate(before)
    return RawSwapResult(
        amount=0,
        before_spot_price_in_over_out=before,
        before_spot_price_out_over_in=before_out_over_in,
        after_spot_price_in_over_out=before,
        after_spot_price_out_over_in=before_out_over_in,
        effective_price_in_over_out=Dec.zero(),
        effective_price_out_over_in=Dec.zero(),
        price_impact=Dec.zero(),
    )
