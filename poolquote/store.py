"""Pool state store.

Holds the latest snapshot of a single pool together with its resolved typed
pool. Every install builds a complete new ``PoolState`` and swaps it in with
one assignment, so readers see either the old snapshot or the new one.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import ValidationError

from poolquote.amm.base import Pool, PoolType
from poolquote.config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from poolquote.errors import (
    InvalidPoolSnapshot,
    PoolIdMismatch,
    PoolNotLoaded,
    UnknownCurrency,
)
from poolquote.math.dec import Dec
from poolquote.models.raw import RawPoolSnapshot
from poolquote.models.types import CoinAmount, Currency
from poolquote.registry import CurrencyRegistry
from poolquote.resolver import check_pool_type, resolve_pool

logger = structlog.get_logger()

PoolResolver = Callable[[RawPoolSnapshot], Pool]


@dataclass(frozen=True)
class PoolState:
    """One installed snapshot.

    Attributes:
        raw: Validated wire-format snapshot
        pool: Typed pool resolved from raw
        denoms: Asset denoms held by the pool
        version: Install counter, starting at 1
    """

    raw: RawPoolSnapshot
    pool: Pool
    denoms: frozenset[str]
    version: int


class PoolStore:
    """Latest state of one pool.

    The store is bound to the pool id of its first snapshot; installing a
    snapshot for a different pool raises ``PoolIdMismatch``.

    Usage:
        store = PoolStore(registry)
        store.install(snapshot_json)
        store.pool.spot_price_in_over_out("uosmo", "uatom")
    """

    def __init__(
        self,
        registry: CurrencyRegistry,
        snapshot: RawPoolSnapshot | Mapping[str, Any] | None = None,
        *,
        resolver: PoolResolver = resolve_pool,
        config: QuoteConfig = DEFAULT_QUOTE_CONFIG,
    ) -> None:
        self._registry = registry
        self._resolver = resolver
        self._config = config
        self._state: PoolState | None = None
        if snapshot is not None:
            self.install(snapshot)

    @property
    def registry(self) -> CurrencyRegistry:
        return self._registry

    @property
    def config(self) -> QuoteConfig:
        return self._config

    def install(self, snapshot: RawPoolSnapshot | Mapping[str, Any]) -> PoolState:
        """Install a new snapshot.

        Args:
            snapshot: Validated snapshot, or a mapping in wire format

        Returns:
            The new PoolState

        Raises:
            InvalidPoolSnapshot: If the mapping fails validation
            UnsupportedPoolType: If the variant can't be resolved
            PoolIdMismatch: If the snapshot is for another pool

        On any error the previous state is kept.
        """
        raw = self._validate(snapshot)
        pool = self._resolver(raw)

        previous = self._state
        if previous is not None and previous.raw.id != raw.id:
            logger.warning(
                "pool_snapshot_rejected",
                expected_pool_id=previous.raw.id,
                pool_id=raw.id,
            )
            raise PoolIdMismatch(previous.raw.id, raw.id)

        denoms = frozenset(asset.denom for asset in pool.pool_assets)
        state = PoolState(
            raw=raw,
            pool=pool,
            denoms=denoms,
            version=1 if previous is None else previous.version + 1,
        )
        self._state = state

        new_denoms = denoms if previous is None else denoms - previous.denoms
        unresolved = {d for d in denoms - new_denoms if not self._is_registered(d)}
        logger.debug(
            "pool_snapshot_installed",
            pool_id=raw.id,
            pool_type=pool.pool_type,
            version=state.version,
            new_denoms=sorted(new_denoms),
            unresolved_denoms=sorted(unresolved),
        )
        announce = new_denoms | unresolved
        if announce:
            self._registry.add_unknown_currencies(*sorted(announce))
        return state

    def _is_registered(self, denom: str) -> bool:
        try:
            self._registry.force_find_currency(denom)
        except UnknownCurrency:
            return False
        return True

    @staticmethod
    def _validate(snapshot: RawPoolSnapshot | Mapping[str, Any]) -> RawPoolSnapshot:
        if isinstance(snapshot, RawPoolSnapshot):
            return snapshot

        # Other pool kinds have their own shapes; reject them by tag first
        type_url = snapshot.get("@type", snapshot.get("type_url"))
        if isinstance(type_url, str):
            pool_id = snapshot.get("id")
            check_pool_type(type_url, pool_id if isinstance(pool_id, str) else None)

        try:
            return RawPoolSnapshot.model_validate(snapshot)
        except ValidationError as err:
            logger.warning("pool_snapshot_invalid", error_count=err.error_count())
            raise InvalidPoolSnapshot(str(err)) from err

    @property
    def state(self) -> PoolState:
        """Current state.

        Raises:
            PoolNotLoaded: If nothing has been installed yet
        """
        state = self._state
        if state is None:
            raise PoolNotLoaded("No pool snapshot has been installed")
        return state

    @property
    def is_loaded(self) -> bool:
        return self._state is not None

    @property
    def pool(self) -> Pool:
        return self.state.pool

    @property
    def raw(self) -> RawPoolSnapshot:
        return self.state.raw

    @property
    def version(self) -> int:
        return self.state.version

    @property
    def denoms(self) -> frozenset[str]:
        return self.state.denoms

    @property
    def pool_id(self) -> str:
        return self.state.pool.id

    @property
    def pool_type(self) -> PoolType:
        return self.state.pool.pool_type

    @property
    def swap_fee(self) -> Dec:
        return self.state.pool.swap_fee

    @property
    def exit_fee(self) -> Dec:
        return self.state.pool.exit_fee

    @property
    def share_denom(self) -> str:
        return self.state.pool.share_denom

    @property
    def share_currency(self) -> Currency:
        """Synthetic currency for the pool's share token."""
        pool = self.state.pool
        return Currency(
            coin_denom=f"{self._config.share_coin_prefix}/{pool.id}",
            coin_minimal_denom=pool.share_denom,
            coin_decimals=self._config.share_decimals,
        )

    @property
    def total_share(self) -> CoinAmount:
        return CoinAmount(self.share_currency, self.state.pool.total_share)
