"""Pytest configuration and fixtures."""

from typing import Any

import pytest

from poolquote.registry import InMemoryCurrencyRegistry
from poolquote.store import PoolStore
from tests.helpers import ALL_CURRENCIES, StubPool, weighted_snapshot


@pytest.fixture
def registry() -> InMemoryCurrencyRegistry:
    """Registry with OSMO, ATOM, USDC (6 decimals), DAI (12) and WETH (18)."""
    return InMemoryCurrencyRegistry(ALL_CURRENCIES)


@pytest.fixture
def osmo_atom_snapshot() -> dict[str, Any]:
    """Equal-weight 1,000,000 / 1,000,000 OSMO/ATOM pool with no fee."""
    return weighted_snapshot([("uosmo", 1_000_000, 1), ("uatom", 1_000_000, 1)])


@pytest.fixture
def stub_pool() -> StubPool:
    return StubPool()


@pytest.fixture
def stub_store(
    registry: InMemoryCurrencyRegistry, stub_pool: StubPool, osmo_atom_snapshot: dict[str, Any]
) -> PoolStore:
    """Store whose resolver always returns stub_pool."""
    return PoolStore(registry, osmo_atom_snapshot, resolver=lambda raw: stub_pool)
