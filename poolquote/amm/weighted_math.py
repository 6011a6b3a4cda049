"""Weighted pool math.

Core math functions for weighted product pools. All inputs and outputs are
raw ledger amounts expressed as Dec; weights are unnormalized (only their
ratio matters).
"""

from poolquote.math.dec import Dec
from poolquote.math.pow import PowBaseOutOfBounds, pow_dec

from .errors import InsufficientLiquidity

_ONE = Dec.one()


def calc_spot_price(
    balance_in: Dec,
    weight_in: Dec,
    balance_out: Dec,
    weight_out: Dec,
    swap_fee: Dec,
) -> Dec:
    """Calculate the spot price of token in, quoted in token out.

    Formula:
        spot_price = (balance_in / weight_in) / (balance_out / weight_out) / (1 - swap_fee)

    The two ratios are cross-multiplied first so only one truncating
    division touches the balances.

    Raises:
        DivisionByZero: If a balance or weight is zero, or swap_fee is 1
    """
    numerator = balance_in.mul_truncate(weight_out)
    denominator = balance_out.mul_truncate(weight_in)
    ratio = numerator.quo_truncate(denominator)
    return ratio.quo_truncate(_ONE.sub(swap_fee))


def calc_out_given_in(
    balance_in: Dec,
    weight_in: Dec,
    balance_out: Dec,
    weight_out: Dec,
    amount_in: Dec,
    swap_fee: Dec,
) -> Dec:
    """Calculate output amount for a given input (exact in).

    Formula:
        amount_out = balance_out * (1 - (balance_in / (balance_in + amount_in * (1 - fee)))
                     ^ (weight_in / weight_out))

    Args:
        balance_in: Balance of input token
        weight_in: Weight of input token
        balance_out: Balance of output token
        weight_out: Weight of output token
        amount_in: Input amount before fee
        swap_fee: Swap fee as a fraction (e.g., 0.003 for 0.3%)

    Returns:
        Output amount (not yet truncated to an integer)
    """
    weight_ratio = weight_in.quo_truncate(weight_out)

    adjusted_in = amount_in.mul_truncate(_ONE.sub(swap_fee))

    # base = balance_in / (balance_in + adjusted_in), always in (0, 1]
    base = balance_in.quo_truncate(balance_in.add(adjusted_in))

    power = pow_dec(base, weight_ratio)
    return balance_out.mul_truncate(_ONE.sub(power))


def calc_in_given_out(
    balance_in: Dec,
    weight_in: Dec,
    balance_out: Dec,
    weight_out: Dec,
    amount_out: Dec,
    swap_fee: Dec,
) -> Dec:
    """Calculate input amount for a given output (exact out).

    Formula:
        amount_in = balance_in * ((balance_out / (balance_out - amount_out))
                    ^ (weight_out / weight_in) - 1) / (1 - fee)

    Returns:
        Input amount including fee (not yet rounded to an integer)

    Raises:
        InsufficientLiquidity: If amount_out >= balance_out, or if the weight
            ratio is fractional and amount_out is half of balance_out or more
    """
    if amount_out >= balance_out:
        raise InsufficientLiquidity(
            f"Output {amount_out} must be less than balance {balance_out}"
        )

    weight_ratio = weight_out.quo_truncate(weight_in)

    base = balance_out.quo_truncate(balance_out.sub(amount_out))
    try:
        power = pow_dec(base, weight_ratio)
    except PowBaseOutOfBounds as err:
        raise InsufficientLiquidity(
            f"Output {amount_out} is too large for balance {balance_out} "
            f"at weight ratio {weight_ratio}"
        ) from err

    amount_in_before_fee = balance_in.mul_truncate(power.sub(_ONE))
    return amount_in_before_fee.quo_truncate(_ONE.sub(swap_fee))
