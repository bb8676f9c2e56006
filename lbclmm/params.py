"""Instruction parameters of pool operations and share arithmetic for withdrawals."""

from __future__ import annotations

from dataclasses import dataclass, field

from lbclmm.constants import BASIS_POINT_MAX
from lbclmm.errors import ErrorCode, LbClmmError
from lbclmm.safe_math import IntType, safe_div, safe_mul


@dataclass
class BinLiquidityDistribution:
    """Share of the X and Y deposit, in basis points, going to one bin."""

    bin_id: int
    distribution_x: int
    distribution_y: int


@dataclass
class LiquidityParameter:
    """A deposit of X and Y spread over bins by percentage distributions."""

    amount_x: int
    amount_y: int
    bin_liquidity_dist: list[BinLiquidityDistribution] = field(default_factory=list)


@dataclass
class CompressedBinDepositAmount:
    """Deposit into one bin, scaled down by the parameter's decompress multiplier."""

    bin_id: int
    amount: int


@dataclass
class AddLiquiditySingleSidePreciseParameter:
    """Exact single-sided deposit amounts for a list of bins."""

    bins: list[CompressedBinDepositAmount] = field(default_factory=list)
    decompress_multiplier: int = 0


@dataclass
class InitPresetParametersIx:
    """Fee and range parameters of a preset that pairs can be created from."""

    bin_step: int
    base_factor: int
    filter_period: int
    decay_period: int
    reduction_factor: int
    variable_fee_control: int
    max_volatility_accumulator: int
    min_bin_id: int
    max_bin_id: int
    protocol_share: int


@dataclass
class FeeParameter:
    """New protocol share and base factor for a pair."""

    protocol_share: int
    base_factor: int


@dataclass
class InitPermissionPairIx:
    """Parameters of a pair created with launch permissions."""

    active_id: int
    bin_step: int
    base_factor: int
    min_bin_id: int
    max_bin_id: int
    lock_duration_in_slot: int


@dataclass
class BinLiquidityReduction:
    """Portion, in basis points, of a position's share in one bin to withdraw."""

    bin_id: int
    bps_to_remove: int


def _require(value: int, int_type: IntType) -> None:
    if not isinstance(value, int) or not int_type.min_value <= value <= int_type.max_value:
        raise ValueError(f"{value!r} is not a valid {int_type.label} value")


def shares_to_remove(bps: int, share_in_bin: int) -> int:
    """Return the liquidity share bps / BASIS_POINT_MAX of share_in_bin, rounded down."""
    _require(bps, IntType.U16)
    _require(share_in_bin, IntType.U128)
    product = safe_mul(bps, share_in_bin, IntType.U256)
    result = safe_div(product, BASIS_POINT_MAX, IntType.U256)
    if result > IntType.U128.max_value:
        raise LbClmmError(ErrorCode.TYPE_CAST_FAILED)
    return result