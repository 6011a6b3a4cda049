"""Stable pool math.

Stable pools hold their reserves on the constant-function market maker curve

    k = x * y * (x^2 + y^2 + w)

where x and y are the scaled reserves of the pair being traded and w is the
sum of squares of every other scaled reserve in the pool. Reserves are
scaled by dividing the raw amount by the asset's scaling factor.

There is no closed form for the new reserve after a trade, so it is found by
bisection on the Dec mantissa, rounding in the pool's favour.
"""

from poolquote.math.dec import Dec

from .errors import InsufficientLiquidity, StableSolveDidNotConverge

# Bisection over a mantissa below 2^256 needs at most 256 halvings
_STABLE_MAX_ITERATIONS = 256

_THREE = Dec.from_int(3)


def cfmm_constant(x: Dec, y: Dec, w: Dec) -> Dec:
    """Compute k = x * y * (x^2 + y^2 + w)."""
    squares = x.mul_truncate(x).add(y.mul_truncate(y)).add(w)
    return x.mul_truncate(y).mul_truncate(squares)


def calc_spot_price(x: Dec, y: Dec, w: Dec) -> Dec:
    """Marginal price of x quoted in y (scaled units, no fee).

    Along the curve, -dx/dy = (dk/dy) / (dk/dx):

        dk/dx = y * (3x^2 + y^2 + w)
        dk/dy = x * (x^2 + 3y^2 + w)

    Raises:
        DivisionByZero: If either reserve is zero
    """
    x_squared = x.mul_truncate(x)
    y_squared = y.mul_truncate(y)
    numerator = x.mul_truncate(x_squared.add(_THREE.mul_truncate(y_squared)).add(w))
    denominator = y.mul_truncate(_THREE.mul_truncate(x_squared).add(y_squared).add(w))
    return numerator.quo_truncate(denominator)


def solve_reserve(known: Dec, w: Dec, k: Dec, upper: Dec) -> Dec:
    """Find the smallest reserve r in [0, upper] with cfmm(known, r, w) >= k.

    The curve is symmetric in its two traded reserves, so the same search
    solves for either side.

    Raises:
        StableSolveDidNotConverge: If no r <= upper satisfies the curve
    """
    if cfmm_constant(known, upper, w) < k:
        raise StableSolveDidNotConverge(f"No reserve up to {upper} reaches invariant {k}")

    lo, hi = 0, upper.value
    for _ in range(_STABLE_MAX_ITERATIONS):
        if lo >= hi:
            return Dec(hi)
        mid = (lo + hi) // 2
        if cfmm_constant(known, Dec(mid), w) >= k:
            hi = mid
        else:
            lo = mid + 1

    if lo >= hi:
        return Dec(hi)
    raise StableSolveDidNotConverge(
        f"Stable reserve did not converge after {_STABLE_MAX_ITERATIONS} iterations"
    )


def calc_out_given_in(reserve_in: Dec, reserve_out: Dec, w: Dec, amount_in: Dec) -> Dec:
    """Scaled output for a scaled input (fee already deducted).

    The new output reserve is rounded up, so the output rounds down.
    """
    k = cfmm_constant(reserve_in, reserve_out, w)
    new_reserve_out = solve_reserve(reserve_in.add(amount_in), w, k, reserve_out)
    return reserve_out.sub(new_reserve_out)


def calc_in_given_out(reserve_in: Dec, reserve_out: Dec, w: Dec, amount_out: Dec) -> Dec:
    """Scaled input (before fee) for a scaled output.

    Raises:
        InsufficientLiquidity: If amount_out >= reserve_out
        StableSolveDidNotConverge: If no bracketing input reserve is found
    """
    if amount_out >= reserve_out:
        raise InsufficientLiquidity(
            f"Output {amount_out} must be less than reserve {reserve_out}"
        )

    k = cfmm_constant(reserve_in, reserve_out, w)
    new_reserve_out = reserve_out.sub(amount_out)

    # Double an upper bound until it brackets the solution
    upper = reserve_in
    for _ in range(_STABLE_MAX_ITERATIONS):
        if cfmm_constant(upper, new_reserve_out, w) >= k:
            break
        upper = upper.add(upper)
    else:
        raise StableSolveDidNotConverge(
            f"No input reserve bracket found after {_STABLE_MAX_ITERATIONS} doublings"
        )

    new_reserve_in = solve_reserve(new_reserve_out, w, k, upper)
    return new_reserve_in.sub(reserve_in)
