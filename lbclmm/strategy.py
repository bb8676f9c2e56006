"""Weight strategies that turn a deposit into per-bin amounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from lbclmm.errors import ErrorCode, LbClmmError
from lbclmm.safe_math import IntType, safe_div, safe_sub
from lbclmm.weight_to_amounts import (
    to_amount_ask_side,
    to_amount_bid_side,
    to_amount_both_side,
)

DEFAULT_MIN_WEIGHT = 200
DEFAULT_MAX_WEIGHT = 2000

STRATEGY_PARAMETERS_SIZE = 64

_U16_MASK = 0xFFFF


def _as_u16(value: int) -> int:
    return value & _U16_MASK


class StrategyType(Enum):
    """Shape of the weight curve and which sides of the active bin receive liquidity."""

    SPOT_ONE_SIDE = 0
    CURVE_ONE_SIDE = 1
    BID_ASK_ONE_SIDE = 2
    SPOT_BALANCED = 3
    CURVE_BALANCED = 4
    BID_ASK_BALANCED = 5
    SPOT_IM_BALANCED = 6
    CURVE_IM_BALANCED = 7
    BID_ASK_IM_BALANCED = 8


@dataclass
class StrategyParameters:
    """Bin range and strategy shape of a deposit."""

    min_bin_id: int = 0
    max_bin_id: int = 0
    strategy_type: StrategyType = StrategyType.SPOT_BALANCED
    parameters: bytes = field(default=bytes(STRATEGY_PARAMETERS_SIZE))

    def __post_init__(self) -> None:
        if len(self.parameters) != STRATEGY_PARAMETERS_SIZE:
            raise ValueError(
                f"parameters must be {STRATEGY_PARAMETERS_SIZE} bytes, "
                f"got {len(self.parameters)}"
            )

    def validate_both_side(self, active_id: int) -> None:
        """Raise unless active_id lies within the strategy's bin range."""
        if active_id < self.min_bin_id or active_id > self.max_bin_id:
            raise LbClmmError(ErrorCode.INVALID_STRATEGY_PARAMETERS)

    def bin_count(self) -> int:
        """Difference between the max and min bin id, as an unsigned size."""
        count = safe_sub(self.max_bin_id, self.min_bin_id, IntType.I32)
        return count & IntType.USIZE.max_value


def to_weight_spot_balanced(min_bin_id: int, max_bin_id: int) -> list[tuple[int, int]]:
    """Equal weight of one for every bin in the inclusive range."""
    return [(bin_id, 1) for bin_id in range(min_bin_id, max_bin_id + 1)]


def to_weight_descending_order(min_bin_id: int, max_bin_id: int) -> list[tuple[int, int]]:
    """Weights falling by one per bin, ending at one on max_bin_id."""
    return [
        (bin_id, _as_u16(max_bin_id - bin_id + 1))
        for bin_id in range(min_bin_id, max_bin_id + 1)
    ]


def to_weight_ascending_order(min_bin_id: int, max_bin_id: int) -> list[tuple[int, int]]:
    """Weights rising by one per bin, starting at one on min_bin_id."""
    return [
        (bin_id, _as_u16(bin_id - min_bin_id + 1))
        for bin_id in range(min_bin_id, max_bin_id + 1)
    ]


def _weight_steps(min_bin_id: int, max_bin_id: int, active_id: int) -> tuple[int, int]:
    if active_id < min_bin_id or active_id > max_bin_id:
        raise LbClmmError(ErrorCode.INVALID_STRATEGY_PARAMETERS)
    diff_weight = safe_sub(DEFAULT_MAX_WEIGHT, DEFAULT_MIN_WEIGHT, IntType.U16)
    if active_id > min_bin_id:
        below = _as_u16(safe_sub(active_id, min_bin_id, IntType.I32))
        diff_min_weight = safe_div(diff_weight, below, IntType.U16)
    else:
        diff_min_weight = 0
    if max_bin_id > active_id:
        above = _as_u16(safe_sub(max_bin_id, active_id, IntType.I32))
        diff_max_weight = safe_div(diff_weight, above, IntType.U16)
    else:
        diff_max_weight = 0
    return diff_min_weight, diff_max_weight


def to_weight_curve(
    min_bin_id: int, max_bin_id: int, active_id: int
) -> list[tuple[int, int]]:
    """Weights peaking at the active bin and falling linearly towards both ends."""
    diff_min_weight, diff_max_weight = _weight_steps(min_bin_id, max_bin_id, active_id)
    weights = []
    for bin_id in range(min_bin_id, max_bin_id + 1):
        if bin_id < active_id:
            delta = _as_u16(active_id - bin_id)
            weight = _as_u16(DEFAULT_MAX_WEIGHT - _as_u16(delta * diff_min_weight))
        elif bin_id > active_id:
            delta = _as_u16(bin_id - active_id)
            weight = _as_u16(DEFAULT_MAX_WEIGHT - _as_u16(delta * diff_max_weight))
        else:
            weight = DEFAULT_MAX_WEIGHT
        weights.append((bin_id, weight))
    return weights


def to_weight_bid_ask(
    min_bin_id: int, max_bin_id: int, active_id: int
) -> list[tuple[int, int]]:
    """Weights lowest at the active bin and rising linearly towards both ends."""
    diff_min_weight, diff_max_weight = _weight_steps(min_bin_id, max_bin_id, active_id)
    weights = []
    for bin_id in range(min_bin_id, max_bin_id + 1):
        if bin_id < active_id:
            delta = _as_u16(active_id - bin_id)
            weight = _as_u16(DEFAULT_MIN_WEIGHT + _as_u16(delta * diff_min_weight))
        elif bin_id > active_id:
            delta = _as_u16(bin_id - active_id)
            weight = _as_u16(DEFAULT_MIN_WEIGHT + _as_u16(delta * diff_max_weight))
        else:
            weight = DEFAULT_MIN_WEIGHT
        weights.append((bin_id, weight))
    return weights


_IMBALANCED_SHAPES = {
    StrategyType.SPOT_IM_BALANCED: (to_weight_spot_balanced, to_weight_spot_balanced),
    StrategyType.CURVE_IM_BALANCED: (to_weight_ascending_order, to_weight_descending_order),
    StrategyType.BID_ASK_IM_BALANCED: (to_weight_descending_order, to_weight_ascending_order),
}

_BALANCED_SHAPES = {
    StrategyType.SPOT_BALANCED: lambda low, high, _active: to_weight_spot_balanced(low, high),
    StrategyType.CURVE_BALANCED: to_weight_curve,
    StrategyType.BID_ASK_BALANCED: to_weight_bid_ask,
}


@dataclass
class LiquidityParameterByStrategy:
    """A two-sided deposit spread over bins by a strategy."""

    amount_x: int = 0
    amount_y: int = 0
    active_id: int = 0
    max_active_bin_slippage: int = 0
    strategy_parameters: StrategyParameters = field(default_factory=StrategyParameters)

    def to_amounts_into_bin(
        self,
        active_id: int,
        bin_step: int,
        amount_x_in_active_bin: int,
        amount_y_in_active_bin: int,
    ) -> list[tuple[int, int, int]]:
        """Return (bin_id, amount_x, amount_y) for every bin the strategy covers."""
        params = self.strategy_parameters
        min_bin_id = params.min_bin_id
        max_bin_id = params.max_bin_id
        strategy = params.strategy_type

        if strategy in _IMBALANCED_SHAPES:
            bid_shape, ask_shape = _IMBALANCED_SHAPES[strategy]
            amounts: list[tuple[int, int, int]] = []
            if min_bin_id <= active_id:
                weights = bid_shape(min_bin_id, active_id)
                amounts.extend(
                    (bin_id, 0, amount)
                    for bin_id, amount in to_amount_bid_side(active_id, self.amount_y, weights)
                )
            if active_id < max_bin_id:
                weights = ask_shape(active_id + 1, max_bin_id)
                amounts.extend(
                    (bin_id, amount, 0)
                    for bin_id, amount in to_amount_ask_side(
                        active_id, self.amount_x, bin_step, weights
                    )
                )
            return amounts

        if strategy in _BALANCED_SHAPES:
            weights = _BALANCED_SHAPES[strategy](min_bin_id, max_bin_id, active_id)
            return to_amount_both_side(
                active_id,
                bin_step,
                amount_x_in_active_bin,
                amount_y_in_active_bin,
                self.amount_x,
                self.amount_y,
                weights,
            )

        raise LbClmmError(ErrorCode.INVALID_STRATEGY_PARAMETERS)


@dataclass
class LiquidityParameterByStrategyOneSide:
    """A single-token deposit spread over bins by a one-sided strategy."""

    amount: int = 0
    active_id: int = 0
    max_active_bin_slippage: int = 0
    strategy_parameters: StrategyParameters = field(default_factory=StrategyParameters)

    def to_amounts_into_bin(
        self, active_id: int, bin_step: int, deposit_for_y: bool
    ) -> list[tuple[int, int]]:
        """Return (bin_id, amount) for every bin; Y goes to the bid side, X to the ask side."""
        params = self.strategy_parameters
        min_bin_id = params.min_bin_id
        max_bin_id = params.max_bin_id
        strategy = params.strategy_type

        if strategy is StrategyType.SPOT_ONE_SIDE:
            weights = to_weight_spot_balanced(min_bin_id, max_bin_id)
        elif strategy is StrategyType.CURVE_ONE_SIDE:
            shape = to_weight_ascending_order if deposit_for_y else to_weight_descending_order
            weights = shape(min_bin_id, max_bin_id)
        elif strategy is StrategyType.BID_ASK_ONE_SIDE:
            shape = to_weight_descending_order if deposit_for_y else to_weight_ascending_order
            weights = shape(min_bin_id, max_bin_id)
        else:
            raise LbClmmError(ErrorCode.INVALID_STRATEGY_PARAMETERS)

        if deposit_for_y:
            return to_amount_bid_side(active_id, self.amount, weights)
        return to_amount_ask_side(active_id, self.amount, bin_step, weights)