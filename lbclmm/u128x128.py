"""Multiply-then-divide helpers on 128-bit values with a 256-bit intermediate."""

from __future__ import annotations

from enum import Enum, auto

from lbclmm.errors import ErrorCode, LbClmmError

U128_MAX = (1 << 128) - 1
U8_MAX = (1 << 8) - 1


class Rounding(Enum):
    """Direction in which an inexact division is rounded."""

    UP = auto()
    DOWN = auto()


def _require_u128(*values: int) -> None:
    for value in values:
        if not isinstance(value, int) or not 0 <= value <= U128_MAX:
            raise ValueError(f"{value!r} is not a valid u128 value")


def _require_u8(offset: int) -> None:
    if not isinstance(offset, int) or not 0 <= offset <= U8_MAX:
        raise ValueError(f"{offset!r} is not a valid u8 offset")


def _one_shifted(offset: int) -> int:
    _require_u8(offset)
    if offset >= 128:
        raise LbClmmError(ErrorCode.MATH_OVERFLOW)
    return 1 << offset


def mul_div(x: int, y: int, denominator: int, rounding: Rounding) -> int:
    """Compute (x * y) / denominator; the result must fit in 128 bits."""
    _require_u128(x, y, denominator)
    if denominator == 0:
        raise LbClmmError(ErrorCode.MATH_OVERFLOW)
    product = x * y
    if rounding is Rounding.UP:
        quotient = -(-product // denominator)
    else:
        quotient = product // denominator
    if quotient > U128_MAX:
        raise LbClmmError(ErrorCode.MATH_OVERFLOW)
    return quotient


def mul_shr(x: int, y: int, offset: int, rounding: Rounding) -> int:
    """Compute (x * y) >> offset with the given rounding."""
    return mul_div(x, y, _one_shifted(offset), rounding)


def shl_div(x: int, y: int, offset: int, rounding: Rounding) -> int:
    """Compute (x << offset) / y with the given rounding."""
    return mul_div(x, _one_shifted(offset), y, rounding)