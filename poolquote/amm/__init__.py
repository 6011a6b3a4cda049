"""Pool kernels.

Weighted and stable pool variants behind a uniform capability surface:
spot prices in both directions and raw exact-in / exact-out simulations.
"""

# Capability surface
from .base import BasePool, Pool, PoolAsset, PoolType, RawSwapResult, TokenAmount

# Errors
from .errors import (
    InsufficientLiquidity,
    SpotPriceDecreased,
    StableSolveDidNotConverge,
    SwapMathError,
)

# Pool parsing
from .parsing import parse_stable_pool, parse_weighted_pool

# Pool dataclasses
from .pools import StablePool, WeightedPool, WeightSchedule

__all__ = [
    # Capability surface
    "Pool",
    "BasePool",
    "PoolAsset",
    "PoolType",
    "RawSwapResult",
    "TokenAmount",
    # Pool dataclasses
    "WeightedPool",
    "StablePool",
    "WeightSchedule",
    # Pool parsing
    "parse_weighted_pool",
    "parse_stable_pool",
    # Errors
    "SwapMathError",
    "InsufficientLiquidity",
    "SpotPriceDecreased",
    "StableSolveDidNotConverge",
]
