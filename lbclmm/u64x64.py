"""Q64.64 fixed-point helpers: exponentiation and decimal conversion."""

from __future__ import annotations

from lbclmm.constants import BASIS_POINT_MAX
from lbclmm.errors import ErrorCode, LbClmmError
from lbclmm.u128x128 import U128_MAX

# Precision used when converting between decimal and fixed point: 10^12.
PRECISION = 1_000_000_000_000

# Number of fractional bits.
SCALE_OFFSET = 64

# With a 1 bps step the largest usable exponent is about 443636, which needs
# 19 bits; any exponent with the 20th bit set overflows Q64.64.
MAX_EXPONENTIAL = 0x80000

# 1.0 in Q64.64.
ONE = 1 << SCALE_OFFSET

_EXPONENT_BITS = 19
_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1
_U32_MAX = (1 << 32) - 1


def _overflow() -> LbClmmError:
    return LbClmmError(ErrorCode.MATH_OVERFLOW)


def _mul_q64(lhs: int, rhs: int) -> int:
    product = lhs * rhs
    if product > U128_MAX:
        raise _overflow()
    return product >> SCALE_OFFSET


def pow(base: int, exp: int) -> int:
    """Raise a Q64.64 base to an integer power, returning Q64.64.

    Raises a math overflow error when the result cannot be represented.
    """
    if not isinstance(base, int) or not 0 <= base <= U128_MAX:
        raise ValueError(f"{base!r} is not a valid u128 value")
    if not isinstance(exp, int) or not _I32_MIN <= exp <= _I32_MAX:
        raise ValueError(f"{exp!r} is not a valid i32 value")

    if exp == 0:
        return ONE

    invert = exp < 0
    exp = abs(exp)
    if exp >= MAX_EXPONENTIAL:
        raise _overflow()

    squared_base = base
    result = ONE

    # Squaring a base above one would need 256 bits, so work with its inverse
    # and flip the final inversion instead.
    if squared_base >= result:
        squared_base = U128_MAX // squared_base
        invert = not invert

    for bit in range(_EXPONENT_BITS):
        if bit:
            squared_base = _mul_q64(squared_base, squared_base)
        if exp & (1 << bit):
            result = _mul_q64(result, squared_base)

    if result == 0:
        raise _overflow()

    if invert:
        result = U128_MAX // result

    return result


def to_decimal(value: int) -> int:
    """Convert a Q64.64 value to a decimal scaled by PRECISION."""
    if not isinstance(value, int) or not 0 <= value <= U128_MAX:
        raise ValueError(f"{value!r} is not a valid u128 value")
    scaled = (value * PRECISION) >> SCALE_OFFSET
    if scaled > U128_MAX:
        raise _overflow()
    return scaled


def from_decimal(value: int) -> int:
    """Convert a decimal scaled by PRECISION to Q64.64."""
    if not isinstance(value, int) or not 0 <= value <= U128_MAX:
        raise ValueError(f"{value!r} is not a valid u128 value")
    fixed = (value << SCALE_OFFSET) // PRECISION
    if fixed > U128_MAX:
        raise _overflow()
    return fixed


def get_base(bin_step: int) -> int:
    """Return 1 + bin_step / BASIS_POINT_MAX in Q64.64."""
    if not isinstance(bin_step, int) or not 0 <= bin_step <= _U32_MAX:
        raise ValueError(f"{bin_step!r} is not a valid u32 value")
    fraction = (bin_step << SCALE_OFFSET) // BASIS_POINT_MAX
    return ONE + fraction