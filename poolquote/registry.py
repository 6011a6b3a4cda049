"""Currency registry.

The registry maps on-chain denoms to currency metadata (display name and
decimal exponent). The store tells it about denoms it has not seen before;
the adapter asks it for metadata when scaling prices.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

import structlog

from poolquote.errors import UnknownCurrency
from poolquote.models.types import Currency

logger = structlog.get_logger()


class CurrencyRegistry(Protocol):
    """Protocol for denom to currency lookup.

    Implementations may fetch metadata lazily (IBC denom traces, asset
    lists); ``add_unknown_currencies`` only requests that, it never blocks.
    """

    def force_find_currency(self, denom: str) -> Currency:
        """Get the currency for a denom.

        Raises:
            UnknownCurrency: If the denom has no metadata yet
        """
        ...

    def add_unknown_currencies(self, *denoms: str) -> None:
        """Request registration of denoms seen for the first time."""
        ...


class InMemoryCurrencyRegistry:
    """Registry backed by a dict.

    Denoms passed to ``add_unknown_currencies`` that aren't registered are
    kept in ``pending_denoms`` until a currency is registered for them.
    """

    def __init__(self, currencies: Iterable[Currency] = ()) -> None:
        self._currencies: dict[str, Currency] = {}
        self._pending: set[str] = set()
        for currency in currencies:
            self.register(currency)

    def register(self, currency: Currency) -> None:
        """Register (or replace) metadata for a currency."""
        self._currencies[currency.coin_minimal_denom] = currency
        self._pending.discard(currency.coin_minimal_denom)

    def find_currency(self, denom: str) -> Currency | None:
        return self._currencies.get(denom)

    def force_find_currency(self, denom: str) -> Currency:
        currency = self._currencies.get(denom)
        if currency is None:
            raise UnknownCurrency(denom)
        return currency

    def add_unknown_currencies(self, *denoms: str) -> None:
        unknown = {d for d in denoms if d not in self._currencies}
        if not unknown:
            return
        self._pending.update(unknown)
        logger.info("currency_registration_requested", denoms=sorted(unknown))

    @property
    def pending_denoms(self) -> frozenset[str]:
        return frozenset(self._pending)
