"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Pool type discriminators and currencies
- factories: Wire-format snapshot builders and a call-counting stub pool
"""

from tests.helpers.constants import (
    ALL_CURRENCIES,
    ATOM,
    DAI,
    OSMO,
    STABLE_POOL_TYPE,
    USDC,
    WEIGHTED_POOL_TYPE,
    WETH,
)
from tests.helpers.factories import (
    StubPool,
    stable_snapshot,
    weight_schedule_params,
    weighted_snapshot,
)

__all__ = [
    # Constants
    "WEIGHTED_POOL_TYPE",
    "STABLE_POOL_TYPE",
    "OSMO",
    "ATOM",
    "USDC",
    "DAI",
    "WETH",
    "ALL_CURRENCIES",
    # Factories
    "weighted_snapshot",
    "stable_snapshot",
    "weight_schedule_params",
    "StubPool",
]
