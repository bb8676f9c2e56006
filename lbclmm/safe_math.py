"""Overflow-checked integer arithmetic over fixed-width integer types."""

from __future__ import annotations

from enum import Enum

from lbclmm.errors import ErrorCode, LbClmmError


class IntType(Enum):
    """A fixed-width integer type with its bit width and signedness."""

    U16 = ("u16", 16, False)
    I32 = ("i32", 32, True)
    U32 = ("u32", 32, False)
    U64 = ("u64", 64, False)
    I64 = ("i64", 64, True)
    U128 = ("u128", 128, False)
    I128 = ("i128", 128, True)
    USIZE = ("usize", 64, False)
    U256 = ("u256", 256, False)

    def __init__(self, label: str, bits: int, signed: bool) -> None:
        self.label = label
        self.bits = bits
        self.signed = signed

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    @property
    def _rejects_lost_bits(self) -> bool:
        # The wide type refuses shifts that drop set bits; native widths only limit the offset.
        return self is IntType.U256

    def check(self, value: int) -> int:
        """Return value if it fits this type, else raise a math overflow error."""
        if not self.min_value <= value <= self.max_value:
            raise LbClmmError(ErrorCode.MATH_OVERFLOW)
        return value

    def _wrap(self, value: int) -> int:
        masked = value & ((1 << self.bits) - 1)
        if self.signed and masked >= 1 << (self.bits - 1):
            masked -= 1 << self.bits
        return masked


def _require_operands(int_type: IntType, *values: int) -> None:
    for value in values:
        if not isinstance(value, int) or not int_type.min_value <= value <= int_type.max_value:
            raise ValueError(f"{value!r} is not a valid {int_type.label} value")


def _require_offset(offset: int) -> None:
    if not isinstance(offset, int) or offset < 0:
        raise ValueError(f"shift offset must be a non-negative integer, got {offset!r}")


def _truncated_quotient(lhs: int, rhs: int, int_type: IntType) -> int:
    if rhs == 0:
        raise LbClmmError(ErrorCode.MATH_OVERFLOW)
    quotient = abs(lhs) // abs(rhs)
    if (lhs < 0) != (rhs < 0):
        quotient = -quotient
    return int_type.check(quotient)


def safe_add(lhs: int, rhs: int, int_type: IntType) -> int:
    """Add two values, raising on overflow of int_type."""
    _require_operands(int_type, lhs, rhs)
    return int_type.check(lhs + rhs)


def safe_sub(lhs: int, rhs: int, int_type: IntType) -> int:
    """Subtract rhs from lhs, raising on overflow of int_type."""
    _require_operands(int_type, lhs, rhs)
    return int_type.check(lhs - rhs)


def safe_mul(lhs: int, rhs: int, int_type: IntType) -> int:
    """Multiply two values, raising on overflow of int_type."""
    _require_operands(int_type, lhs, rhs)
    return int_type.check(lhs * rhs)


def safe_div(lhs: int, rhs: int, int_type: IntType) -> int:
    """Divide, truncating toward zero; raises on division by zero or overflow."""
    _require_operands(int_type, lhs, rhs)
    return _truncated_quotient(lhs, rhs, int_type)


def safe_rem(lhs: int, rhs: int, int_type: IntType) -> int:
    """Remainder of truncating division, taking the sign of lhs."""
    _require_operands(int_type, lhs, rhs)
    quotient = _truncated_quotient(lhs, rhs, int_type)
    return lhs - quotient * rhs


def safe_shl(value: int, offset: int, int_type: IntType) -> int:
    """Shift left.

    Native widths raise only when offset reaches the bit width and otherwise
    discard the high bits; U256 raises whenever a set bit would be lost.
    """
    _require_operands(int_type, value)
    _require_offset(offset)
    if int_type._rejects_lost_bits:
        return int_type.check(value << offset)
    if offset >= int_type.bits:
        raise LbClmmError(ErrorCode.MATH_OVERFLOW)
    return int_type._wrap(value << offset)


def safe_shr(value: int, offset: int, int_type: IntType) -> int:
    """Shift right.

    Native widths raise only when offset reaches the bit width; U256 raises
    whenever a set bit would be shifted out.
    """
    _require_operands(int_type, value)
    _require_offset(offset)
    if int_type._rejects_lost_bits:
        if value & ((1 << offset) - 1):
            raise LbClmmError(ErrorCode.MATH_OVERFLOW)
        return value >> offset
    if offset >= int_type.bits:
        raise LbClmmError(ErrorCode.MATH_OVERFLOW)
    return value >> offset