"""Checked fixed-point operations whose result is cast to a target integer type."""

from __future__ import annotations

from lbclmm.errors import ErrorCode, LbClmmError
from lbclmm.safe_math import IntType, safe_div, safe_mul
from lbclmm.u128x128 import Rounding, mul_div, mul_shr, shl_div
from lbclmm.u64x64 import pow as q64_pow


def _cast(value: int, int_type: IntType) -> int:
    if not int_type.min_value <= value <= int_type.max_value:
        raise LbClmmError(ErrorCode.TYPE_CAST_FAILED)
    return value


def _require_u64(*values: int) -> None:
    for value in values:
        if not isinstance(value, int) or not 0 <= value <= IntType.U64.max_value:
            raise ValueError(f"{value!r} is not a valid u64 value")


def safe_pow_cast(base: int, exp: int, int_type: IntType) -> int:
    """Q64.64 power of base, cast to int_type."""
    return _cast(q64_pow(base, exp), int_type)


def safe_mul_div_cast(
    x: int, y: int, denominator: int, rounding: Rounding, int_type: IntType
) -> int:
    """(x * y) / denominator with rounding, cast to int_type."""
    return _cast(mul_div(x, y, denominator, rounding), int_type)


def safe_mul_div_cast_from_u64_to_u64(x: int, y: int, denominator: int) -> int:
    """(x * y) / denominator on u64 inputs, rounded down, cast back to u64."""
    _require_u64(x, y, denominator)
    product = safe_mul(x, y, IntType.U128)
    return _cast(safe_div(product, denominator, IntType.U128), IntType.U64)


def safe_mul_div_cast_from_u256_to_u64(x: int, y: int, denominator: int) -> int:
    """(x * y) / denominator with a u64 x and 256-bit y and denominator, cast to u64."""
    _require_u64(x)
    product = safe_mul(x, y, IntType.U256)
    return _cast(safe_div(product, denominator, IntType.U256), IntType.U64)


def safe_mul_shr_cast(x: int, y: int, offset: int, rounding: Rounding, int_type: IntType) -> int:
    """(x * y) >> offset with rounding, cast to int_type."""
    return _cast(mul_shr(x, y, offset, rounding), int_type)


def safe_shl_div_cast(x: int, y: int, offset: int, rounding: Rounding, int_type: IntType) -> int:
    """(x << offset) / y with rounding, cast to int_type."""
    return _cast(shl_div(x, y, offset, rounding), int_type)