"""Pool quote adapter for Osmosis-style AMM pools."""

from poolquote.adapter import PoolQuoteAdapter
from poolquote.config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from poolquote.errors import (
    InvalidPoolSnapshot,
    PoolAssetNotFound,
    PoolIdMismatch,
    PoolNotLoaded,
    PoolQuoteError,
    UnknownCurrency,
    UnsupportedPoolType,
)
from poolquote.math import Dec
from poolquote.models import CoinAmount, Currency, RawPoolSnapshot, SwapQuote
from poolquote.oracle import PriceOracle, StaticPriceOracle
from poolquote.registry import CurrencyRegistry, InMemoryCurrencyRegistry
from poolquote.resolver import resolve_pool
from poolquote.smoothing import PoolWeight, WeightSmoothing, compute_weight_smoothing
from poolquote.store import PoolState, PoolStore

__version__ = "0.1.0"
__all__ = [
    # Entry points
    "PoolStore",
    "PoolState",
    "PoolQuoteAdapter",
    "resolve_pool",
    "compute_weight_smoothing",
    # Values
    "Dec",
    "Currency",
    "CoinAmount",
    "SwapQuote",
    "RawPoolSnapshot",
    "PoolWeight",
    "WeightSmoothing",
    # Collaborators
    "CurrencyRegistry",
    "InMemoryCurrencyRegistry",
    "PriceOracle",
    "StaticPriceOracle",
    # Configuration
    "QuoteConfig",
    "DEFAULT_QUOTE_CONFIG",
    # Errors
    "PoolQuoteError",
    "UnsupportedPoolType",
    "InvalidPoolSnapshot",
    "PoolIdMismatch",
    "PoolNotLoaded",
    "UnknownCurrency",
    "PoolAssetNotFound",
    "__version__",
]
