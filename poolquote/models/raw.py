"""Pydantic models for the wire-format pool record.

Pools arrive as a discriminated union keyed by ``@type``:

- ``/osmosis.gamm.v1beta1.Pool`` carries ``pool_assets``
  (``[{token: {denom, amount}, weight}]``)
- ``/osmosis.gamm.poolmodels.stableswap.v1beta1.Pool`` carries
  ``pool_liquidity`` (``[{denom, amount, scalingFactor?}]``)

The models only check the shape of the record; which variant it is gets
decided by the resolver.
"""

from datetime import datetime, timedelta
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from poolquote.math.dec import Dec


def validate_int_string(value: Any) -> str:
    """Validate that a value is a non-negative decimal integer string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid integer as decimal string

    Raises:
        ValueError: If value is not a non-negative integer
    """
    if isinstance(value, bool):
        raise ValueError(f"Integer string cannot be a bool: {value}")

    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Integer string cannot be negative: {value}")
        return str(value)

    if not isinstance(value, str):
        raise ValueError(f"Integer string must be string or int, got {type(value).__name__}")

    try:
        int_value = int(value)
    except ValueError as err:
        raise ValueError(f"Must be a decimal integer string: '{value}'") from err

    if int_value < 0:
        raise ValueError(f"Integer string cannot be negative: {value}")

    return str(int_value)


def validate_dec_string(value: Any) -> str:
    """Validate a non-negative decimal string such as ``"0.002"``."""
    if not isinstance(value, str):
        raise ValueError(f"Decimal must be a string, got {type(value).__name__}")
    parsed = Dec.from_str(value)
    if parsed.is_negative():
        raise ValueError(f"Decimal cannot be negative: {value}")
    return value


def parse_duration(value: Any) -> Any:
    """Accept protobuf JSON durations (``"86400s"``) alongside pydantic's formats."""
    if isinstance(value, str) and value.endswith("s") and not value.startswith("P"):
        return timedelta(seconds=float(value[:-1]))
    return value


# Non-negative integer as decimal string (validated)
IntString = Annotated[
    str,
    BeforeValidator(validate_int_string),
    Field(description="Non-negative integer as decimal string"),
]

# Non-negative decimal as string (validated)
DecString = Annotated[str, BeforeValidator(validate_dec_string)]

# Protobuf JSON duration
ProtoDuration = Annotated[timedelta, BeforeValidator(parse_duration)]


class RawCoin(BaseModel):
    """A denom and a raw integer amount."""

    denom: str
    amount: IntString


class RawWeightedPoolAsset(BaseModel):
    """Weighted pool asset: a coin plus its (unnormalized) weight."""

    token: RawCoin
    weight: IntString


class RawStablePoolAsset(BaseModel):
    """Stable pool asset, optionally carrying its own scaling factor."""

    denom: str
    amount: IntString
    scaling_factor: IntString | None = Field(default=None, alias="scalingFactor")

    model_config = {"populate_by_name": True}


class RawSmoothWeightChangeParams(BaseModel):
    """Governance-scheduled weight change for a weighted pool."""

    start_time: datetime
    duration: ProtoDuration
    initial_pool_weights: list[RawWeightedPoolAsset] = Field(default_factory=list)
    target_pool_weights: list[RawWeightedPoolAsset] = Field(default_factory=list)


class RawPoolParams(BaseModel):
    """Fee parameters and optional weight-smoothing schedule."""

    swap_fee: DecString
    exit_fee: DecString
    smooth_weight_change_params: RawSmoothWeightChangeParams | None = None


class RawPoolSnapshot(BaseModel):
    """Wire-format pool record, as delivered by the transport layer."""

    type_url: str = Field(alias="@type")
    id: IntString
    address: str | None = None
    pool_params: RawPoolParams
    total_shares: RawCoin
    pool_assets: list[RawWeightedPoolAsset] | None = None
    pool_liquidity: list[RawStablePoolAsset] | None = None
    scaling_factors: list[IntString] | None = None
    total_weight: IntString | None = None

    model_config = {"populate_by_name": True, "extra": "allow", "frozen": True}

