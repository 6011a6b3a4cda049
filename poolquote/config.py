"""Quote configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class QuoteConfig:
    """Configuration for share currencies and pricing.

    Attributes:
        share_decimals: Decimal exponent of pool share tokens (default: 18)
        share_coin_prefix: Display prefix for share tokens, shown as
            "<prefix>/<pool id>" (default: "GAMM")
        default_vs_currency: Default fiat currency of the static oracle
            (default: "usd")
    """

    share_decimals: int = 18
    share_coin_prefix: str = "GAMM"
    default_vs_currency: str = "usd"

    @classmethod
    def from_env(cls) -> QuoteConfig:
        """Build a config from POOLQUOTE_* environment variables."""
        return cls(
            share_decimals=int(os.environ.get("POOLQUOTE_SHARE_DECIMALS", "18")),
            share_coin_prefix=os.environ.get("POOLQUOTE_SHARE_COIN_PREFIX", "GAMM"),
            default_vs_currency=os.environ.get("POOLQUOTE_DEFAULT_VS_CURRENCY", "usd"),
        )


# Default configuration instance
DEFAULT_QUOTE_CONFIG = QuoteConfig()
