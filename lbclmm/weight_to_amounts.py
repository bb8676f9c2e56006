"""Spread deposit amounts over bins according to per-bin weights.

Weights are (bin_id, weight) pairs that must be sorted by ascending bin id.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from lbclmm.errors import ErrorCode, LbClmmError
from lbclmm.price import get_price_from_id
from lbclmm.safe_math import IntType, safe_add, safe_div, safe_mul, safe_shl
from lbclmm.u64x64 import SCALE_OFFSET
from lbclmm.utils_math import (
    safe_mul_div_cast_from_u256_to_u64,
    safe_mul_div_cast_from_u64_to_u64,
)

_U256 = IntType.U256
_DOUBLE_SCALE = SCALE_OFFSET * 2


def _require_u64(*values: int) -> None:
    for value in values:
        if not isinstance(value, int) or not 0 <= value <= IntType.U64.max_value:
            raise ValueError(f"{value!r} is not a valid u64 value")


def _to_u64(value: int) -> int:
    if value > IntType.U64.max_value:
        raise LbClmmError(ErrorCode.TYPE_CAST_FAILED)
    return value


def _weight_per_price(bin_id: int, weight: int, bin_step: int) -> int:
    shifted = safe_shl(weight, _DOUBLE_SCALE, _U256)
    return safe_div(shifted, get_price_from_id(bin_id, bin_step), _U256)


def to_amount_bid_side(
    active_id: int, amount: int, weights: Iterable[tuple[int, int]]
) -> list[tuple[int, int]]:
    """Distribute token Y over bins at or below the active bin by weight."""
    weights = list(weights)
    total_weight = 0
    for bin_id, weight in weights:
        # Bins are ascending, so the first ask bin ends the bid side.
        if bin_id > active_id:
            break
        total_weight = safe_add(total_weight, weight, IntType.U64)
    if total_weight == 0:
        raise LbClmmError(ErrorCode.INVALID_INPUT)

    return [
        (
            bin_id,
            0
            if bin_id > active_id
            else safe_mul_div_cast_from_u64_to_u64(weight, amount, total_weight),
        )
        for bin_id, weight in weights
    ]


def to_amount_ask_side(
    active_id: int, amount: int, bin_step: int, weights: Iterable[tuple[int, int]]
) -> list[tuple[int, int]]:
    """Distribute token X over bins at or above the active bin by weight per price."""
    weights = list(weights)
    per_price = [
        0 if bin_id < active_id else _weight_per_price(bin_id, weight, bin_step)
        for bin_id, weight in weights
    ]
    total_weight = 0
    for value in per_price:
        total_weight = safe_add(total_weight, value, _U256)
    if total_weight == 0:
        raise LbClmmError(ErrorCode.INVALID_INPUT)

    return [
        (
            bin_id,
            0
            if bin_id < active_id
            else safe_mul_div_cast_from_u256_to_u64(amount, weight_per_price, total_weight),
        )
        for (bin_id, _weight), weight_per_price in zip(weights, per_price)
    ]


def _active_bin_index(active_id: int, weights: Sequence[tuple[int, int]]) -> int | None:
    for index, (bin_id, _weight) in enumerate(weights):
        if bin_id == active_id:
            return index
        if bin_id > active_id:
            break
    return None


def _active_bin_weights(
    active_weight: int, p0: int, amount_x: int, amount_y: int
) -> tuple[int, int]:
    if amount_x == 0 and amount_y == 0:
        # Split the active bin evenly in value when it holds nothing yet.
        wx0 = safe_div(
            safe_shl(active_weight, _DOUBLE_SCALE, _U256), safe_mul(p0, 2, _U256), _U256
        )
        wy0 = safe_div(safe_shl(active_weight, SCALE_OFFSET, _U256), 2, _U256)
        return wx0, wy0

    if amount_x == 0:
        wx0 = 0
    else:
        y_over_x = safe_div(safe_shl(amount_y, SCALE_OFFSET, _U256), amount_x, _U256)
        wx0 = safe_div(
            safe_shl(active_weight, _DOUBLE_SCALE, _U256),
            safe_add(p0, y_over_x, _U256),
            _U256,
        )

    if amount_y == 0:
        wy0 = 0
    else:
        px_over_y = safe_div(safe_mul(p0, amount_x, _U256), amount_y, _U256)
        wy0 = safe_div(
            safe_shl(active_weight, _DOUBLE_SCALE, _U256),
            safe_add(safe_shl(1, SCALE_OFFSET, _U256), px_over_y, _U256),
            _U256,
        )
    return wx0, wy0


def to_amount_both_side(
    active_id: int,
    bin_step: int,
    amount_x: int,
    amount_y: int,
    total_amount_x: int,
    total_amount_y: int,
    weights: Iterable[tuple[int, int]],
) -> list[tuple[int, int, int]]:
    """Distribute X and Y over bins on both sides of the active bin.

    amount_x and amount_y are the reserves already in the active bin; they set
    the X/Y composition of the deposit into that bin. Returns
    (bin_id, amount_x, amount_y) triples.
    """
    _require_u64(amount_x, amount_y, total_amount_x, total_amount_y)
    weights = list(weights)
    active_index = _active_bin_index(active_id, weights)

    if active_index is None:
        wx0 = wy0 = 0
    else:
        active_bin_id, active_weight = weights[active_index]
        p0 = get_price_from_id(active_bin_id, bin_step)
        wx0, wy0 = _active_bin_weights(active_weight, p0, amount_x, amount_y)

    total_weight_x = wx0
    total_weight_y = wy0
    per_price = [0] * len(weights)
    for position, (bin_id, weight) in enumerate(weights):
        if bin_id < active_id:
            total_weight_y = safe_add(
                total_weight_y, safe_shl(weight, SCALE_OFFSET, _U256), _U256
            )
        elif bin_id > active_id:
            per_price[position] = _weight_per_price(bin_id, weight, bin_step)
            total_weight_x = safe_add(total_weight_x, per_price[position], _U256)

    ky = safe_div(safe_shl(total_amount_y, _DOUBLE_SCALE, _U256), total_weight_y, _U256)
    kx = safe_div(safe_shl(total_amount_x, _DOUBLE_SCALE, _U256), total_weight_x, _U256)
    k = min(kx, ky)

    amounts: list[tuple[int, int, int]] = []
    for (bin_id, weight), weight_per_price in zip(weights, per_price):
        if bin_id < active_id:
            amount_y_in_bin = safe_mul(k, weight, _U256) >> SCALE_OFFSET
            amounts.append((bin_id, 0, _to_u64(amount_y_in_bin)))
        elif bin_id > active_id:
            amount_x_in_bin = safe_mul(k, weight_per_price, _U256) >> _DOUBLE_SCALE
            amounts.append((bin_id, _to_u64(amount_x_in_bin), 0))
        elif active_index is not None:
            amount_x_in_bin = safe_mul(k, wx0, _U256) >> _DOUBLE_SCALE
            amount_y_in_bin = safe_mul(k, wy0, _U256) >> _DOUBLE_SCALE
            amounts.append((bin_id, _to_u64(amount_x_in_bin), _to_u64(amount_y_in_bin)))
    return amounts