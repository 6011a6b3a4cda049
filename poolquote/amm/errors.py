"""Swap kernel error classes."""

from poolquote.errors import PoolQuoteError


class SwapMathError(PoolQuoteError):
    """Base error for swap kernel operations."""

    pass


class InsufficientLiquidity(SwapMathError):
    """Requested output would drain the pool's reserve."""

    pass


class SpotPriceDecreased(SwapMathError):
    """Spot price in over out fell after a swap, which the curve forbids."""

    pass


class StableSolveDidNotConverge(SwapMathError):
    """Bisection for the stable CFMM reserve did not converge."""

    pass
