"""Value types shared by the store, the adapter and collaborators."""

from __future__ import annotations

from dataclasses import dataclass

from poolquote.math.dec import Dec


@dataclass(frozen=True)
class Currency:
    """Currency metadata as resolved by the currency registry.

    Attributes:
        coin_denom: Display denom (e.g., "ATOM")
        coin_minimal_denom: On-chain denom (e.g., "uatom" or "ibc/27394F...")
        coin_decimals: Decimal exponent between the minimal and display units
        coin_gecko_id: Optional price-feed identifier
    """

    coin_denom: str
    coin_minimal_denom: str
    coin_decimals: int
    coin_gecko_id: str | None = None


@dataclass(frozen=True)
class CoinAmount:
    """Raw integer amount tagged with its currency."""

    currency: Currency
    amount: int

    @property
    def denom(self) -> str:
        return self.currency.coin_minimal_denom

    def to_dec(self) -> Dec:
        """Amount in display units (raw amount shifted by the currency's decimals)."""
        return Dec.from_int(self.amount).move_decimal_point(-self.currency.coin_decimals)

    def __str__(self) -> str:
        return f"{self.to_dec()} {self.currency.coin_denom}"


@dataclass(frozen=True)
class SwapQuote:
    """Decimal-scaled result of a hypothetical swap.

    Prices marked ``in_over_out`` are quoted in input units per output unit,
    ``out_over_in`` the reverse; both are expressed in display units.
    ``price_impact`` is dimensionless.

    Attributes:
        amount: Computed side of the swap (output for exact-in, input for
            exact-out) in that side's currency
    """

    amount: CoinAmount
    before_spot_price_in_over_out: Dec
    before_spot_price_out_over_in: Dec
    after_spot_price_in_over_out: Dec
    after_spot_price_out_over_in: Dec
    effective_price_in_over_out: Dec
    effective_price_out_over_in: Dec
    price_impact: Dec
