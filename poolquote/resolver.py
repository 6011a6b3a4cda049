"""Pool variant resolver.

Picks the pool variant from the snapshot's ``@type`` discriminator alone and
checks that the asset list the variant needs is the one present.
"""

from __future__ import annotations

import structlog

from poolquote.amm.base import Pool
from poolquote.amm.parsing import parse_stable_pool, parse_weighted_pool
from poolquote.errors import UnsupportedPoolType
from poolquote.models.raw import RawPoolSnapshot

logger = structlog.get_logger()

STABLE_POOL_TYPE_SUFFIX = ".stableswap.v1beta1.Pool"
WEIGHTED_POOL_TYPE_SUFFIX = ".gamm.v1beta1.Pool"

SUPPORTED_POOL_TYPE_SUFFIXES = (STABLE_POOL_TYPE_SUFFIX, WEIGHTED_POOL_TYPE_SUFFIX)


def check_pool_type(type_url: str, pool_id: str | None = None) -> None:
    """Reject a discriminator no variant handles.

    Only looks at the ``@type`` string, so it can run before the rest of the
    record is validated.

    Raises:
        UnsupportedPoolType: If no variant handles type_url
    """
    if not type_url.endswith(SUPPORTED_POOL_TYPE_SUFFIXES):
        logger.warning("unsupported_pool_type", pool_id=pool_id, type_url=type_url)
        raise UnsupportedPoolType(type_url)


def resolve_pool(raw: RawPoolSnapshot) -> Pool:
    """Resolve a snapshot into its typed pool.

    Raises:
        UnsupportedPoolType: If the discriminator is unknown, the required
            asset list is missing, or both asset lists are present
    """
    check_pool_type(raw.type_url, raw.id)

    if raw.pool_assets is not None and raw.pool_liquidity is not None:
        raise UnsupportedPoolType(raw.type_url, "both pool_assets and pool_liquidity present")

    if raw.type_url.endswith(STABLE_POOL_TYPE_SUFFIX):
        return parse_stable_pool(raw)
    return parse_weighted_pool(raw)
