"""Fiat price oracle."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

import structlog

from poolquote.config import DEFAULT_QUOTE_CONFIG
from poolquote.math.dec import Dec
from poolquote.models.types import CoinAmount

logger = structlog.get_logger()


class PriceOracle(Protocol):
    """Protocol for pricing coin amounts in a fiat currency."""

    @property
    def default_vs_currency(self) -> str: ...

    def calculate_price(self, coin: CoinAmount, vs_currency: str) -> Dec | None:
        """Price a coin amount in vs_currency.

        Returns:
            The value in vs_currency, or None if the coin has no price
        """
        ...


class StaticPriceOracle:
    """Oracle that prices coins from a fixed per-denom table.

    Prices are per display unit of the coin, so a 6-decimal coin with raw
    amount 2_000_000 and price 3 is worth 6.
    """

    def __init__(
        self,
        prices: Mapping[str, Dec],
        default_vs_currency: str = DEFAULT_QUOTE_CONFIG.default_vs_currency,
    ) -> None:
        self._prices = dict(prices)
        self._default_vs_currency = default_vs_currency

    @property
    def default_vs_currency(self) -> str:
        return self._default_vs_currency

    def calculate_price(self, coin: CoinAmount, vs_currency: str) -> Dec | None:
        if vs_currency != self._default_vs_currency:
            logger.debug("oracle_vs_currency_unsupported", vs_currency=vs_currency)
            return None
        price = self._prices.get(coin.denom)
        if price is None:
            return None
        return coin.to_dec().mul_truncate(price)
