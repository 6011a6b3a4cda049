"""Shared currency constants for tests.

Usage:
    from tests.helpers import OSMO, ATOM
    # or
    from tests.helpers.constants import OSMO, ATOM
"""

from poolquote.models.types import Currency

# =============================================================================
# Pool type discriminators
# =============================================================================

WEIGHTED_POOL_TYPE = "/osmosis.gamm.v1beta1.Pool"
STABLE_POOL_TYPE = "/osmosis.gamm.poolmodels.stableswap.v1beta1.Pool"

# =============================================================================
# Currencies
# =============================================================================

OSMO = Currency(coin_denom="OSMO", coin_minimal_denom="uosmo", coin_decimals=6)
ATOM = Currency(coin_denom="ATOM", coin_minimal_denom="uatom", coin_decimals=6)
USDC = Currency(coin_denom="USDC", coin_minimal_denom="uusdc", coin_decimals=6)
DAI = Currency(coin_denom="DAI", coin_minimal_denom="dai-pico", coin_decimals=12)
WETH = Currency(coin_denom="WETH", coin_minimal_denom="weth-wei", coin_decimals=18)

ALL_CURRENCIES = (OSMO, ATOM, USDC, DAI, WETH)
