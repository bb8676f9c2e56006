"""Bin price and liquidity calculations in Q64.64 fixed point."""

from __future__ import annotations

from lbclmm.constants import BASIS_POINT_MAX
from lbclmm.errors import ErrorCode, LbClmmError
from lbclmm.safe_math import IntType, safe_add, safe_div, safe_mul, safe_shl
from lbclmm.u64x64 import ONE, SCALE_OFFSET
from lbclmm.u64x64 import pow as q64_pow


def _require(value: int, int_type: IntType) -> None:
    if not isinstance(value, int) or not int_type.min_value <= value <= int_type.max_value:
        raise ValueError(f"{value!r} is not a valid {int_type.label} value")


def get_price_from_id(active_id: int, bin_step: int) -> int:
    """Return (1 + bin_step / BASIS_POINT_MAX) ** active_id in Q64.64."""
    _require(active_id, IntType.I32)
    _require(bin_step, IntType.U16)
    bps = safe_div(
        safe_shl(bin_step, SCALE_OFFSET, IntType.U128), BASIS_POINT_MAX, IntType.U128
    )
    base = safe_add(ONE, bps, IntType.U128)
    return q64_pow(base, active_id)


def get_liquidity(x: int, y: int, price: int) -> int:
    """Return liquidity L = price * x + y, with price in Q64.64 and L in Q64.64."""
    _require(x, IntType.U64)
    _require(y, IntType.U64)
    _require(price, IntType.U128)
    px = safe_mul(price, x, IntType.U256)
    y_fixed = safe_shl(y, SCALE_OFFSET, IntType.U128)
    liquidity = safe_add(px, y_fixed, IntType.U256)
    if liquidity > IntType.U128.max_value:
        raise LbClmmError(ErrorCode.TYPE_CAST_FAILED)
    return liquidity