"""Wire-format and value models."""

from poolquote.models.raw import (
    RawCoin,
    RawPoolParams,
    RawPoolSnapshot,
    RawSmoothWeightChangeParams,
    RawStablePoolAsset,
    RawWeightedPoolAsset,
)
from poolquote.models.types import CoinAmount, Currency, SwapQuote

__all__ = [
    # Wire format
    "RawCoin",
    "RawPoolParams",
    "RawPoolSnapshot",
    "RawSmoothWeightChangeParams",
    "RawStablePoolAsset",
    "RawWeightedPoolAsset",
    # Values
    "Currency",
    "CoinAmount",
    "SwapQuote",
]
