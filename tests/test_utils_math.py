import pytest
from hypothesis import given
from hypothesis import strategies as st

from lbclmm.errors import ErrorCode, LbClmmError
from lbclmm.safe_math import IntType
from lbclmm.u128x128 import Rounding, mul_div, mul_shr, shl_div
from lbclmm.u64x64 import MAX_EXPONENTIAL, ONE, get_base
from lbclmm.u64x64 import pow as q64_pow
from lbclmm.utils_math import (
    safe_mul_div_cast,
    safe_mul_div_cast_from_u256_to_u64,
    safe_mul_div_cast_from_u64_to_u64,
    safe_mul_shr_cast,
    safe_pow_cast,
    safe_shl_div_cast,
)

U64_MAX = (1 << 64) - 1
U256_MAX = (1 << 256) - 1


def _code(excinfo):
    return excinfo.value.code


@given(st.integers(0, U64_MAX), st.integers(0, 1 << 63), st.integers(1, 1 << 63))
def test_u64_mul_div_is_floor_division(x, y, extra):
    denominator = y + extra
    result = safe_mul_div_cast_from_u64_to_u64(x, y, denominator)
    assert result * denominator <= x * y < (result + 1) * denominator
    assert result <= x


def test_u64_mul_div_by_zero_overflows():
    with pytest.raises(LbClmmError) as info:
        safe_mul_div_cast_from_u64_to_u64(5, 7, 0)
    assert _code(info) is ErrorCode.MATH_OVERFLOW


def test_u64_mul_div_result_too_large_fails_cast():
    with pytest.raises(LbClmmError) as info:
        safe_mul_div_cast_from_u64_to_u64(U64_MAX, U64_MAX, 1)
    assert _code(info) is ErrorCode.TYPE_CAST_FAILED


def test_u64_mul_div_rejects_out_of_range_input():
    with pytest.raises(ValueError):
        safe_mul_div_cast_from_u64_to_u64(U64_MAX + 1, 1, 1)


def test_u256_mul_div_product_overflow():
    with pytest.raises(LbClmmError) as info:
        safe_mul_div_cast_from_u256_to_u64(2, U256_MAX, 1)
    assert _code(info) is ErrorCode.MATH_OVERFLOW


def test_u256_mul_div_by_zero_overflows():
    with pytest.raises(LbClmmError) as info:
        safe_mul_div_cast_from_u256_to_u64(2, 3, 0)
    assert _code(info) is ErrorCode.MATH_OVERFLOW


def test_u256_mul_div_result_too_large_fails_cast():
    with pytest.raises(LbClmmError) as info:
        safe_mul_div_cast_from_u256_to_u64(U64_MAX, 1 << 100, 1)
    assert _code(info) is ErrorCode.TYPE_CAST_FAILED


def test_pow_cast_of_zero_exponent_is_one():
    assert safe_pow_cast(get_base(10), 0, IntType.U128) == ONE


def test_pow_cast_one_does_not_fit_u64():
    with pytest.raises(LbClmmError) as info:
        safe_pow_cast(get_base(10), 0, IntType.U64)
    assert _code(info) is ErrorCode.TYPE_CAST_FAILED


def test_pow_cast_overflow_is_math_error():
    with pytest.raises(LbClmmError) as info:
        safe_pow_cast(get_base(1), MAX_EXPONENTIAL, IntType.U128)
    assert _code(info) is ErrorCode.MATH_OVERFLOW


@given(st.integers(-2000, 2000), st.integers(1, 100))
def test_pow_cast_agrees_with_pow(exp, bin_step):
    base = get_base(bin_step)
    assert safe_pow_cast(base, exp, IntType.U128) == q64_pow(base, exp)


@given(
    st.integers(0, U64_MAX),
    st.integers(0, U64_MAX),
    st.integers(1, U64_MAX),
    st.sampled_from(list(Rounding)),
)
def test_mul_div_cast_agrees_with_mul_div(x, y, denominator, rounding):
    result = safe_mul_div_cast(x, y, denominator, rounding, IntType.U128)
    assert result == mul_div(x, y, denominator, rounding)


@given(st.integers(0, U64_MAX), st.integers(0, U64_MAX), st.integers(1, U64_MAX))
def test_mul_div_cast_rounding_up_is_at_most_one_more(x, y, denominator):
    down = safe_mul_div_cast(x, y, denominator, Rounding.DOWN, IntType.U128)
    up = safe_mul_div_cast(x, y, denominator, Rounding.UP, IntType.U128)
    assert down <= up <= down + 1


def test_mul_div_cast_narrow_type_fails_cast():
    with pytest.raises(LbClmmError) as info:
        safe_mul_div_cast(70_000, 1, 1, Rounding.DOWN, IntType.U16)
    assert _code(info) is ErrorCode.TYPE_CAST_FAILED


def test_mul_div_cast_zero_denominator_overflows():
    with pytest.raises(LbClmmError) as info:
        safe_mul_div_cast(1, 1, 0, Rounding.DOWN, IntType.U64)
    assert _code(info) is ErrorCode.MATH_OVERFLOW


@given(st.integers(0, U64_MAX), st.integers(0, U64_MAX), st.sampled_from(list(Rounding)))
def test_mul_shr_cast_agrees_with_mul_shr(x, y, rounding):
    assert safe_mul_shr_cast(x, y, 64, rounding, IntType.U128) == mul_shr(x, y, 64, rounding)


def test_mul_shr_cast_offset_too_large_overflows():
    with pytest.raises(LbClmmError) as info:
        safe_mul_shr_cast(1, 1, 128, Rounding.DOWN, IntType.U128)
    assert _code(info) is ErrorCode.MATH_OVERFLOW


@given(st.integers(0, U64_MAX), st.integers(1, U64_MAX), st.sampled_from(list(Rounding)))
def test_shl_div_cast_agrees_with_shl_div(x, y, rounding):
    assert safe_shl_div_cast(x, y, 64, rounding, IntType.U128) == shl_div(x, y, 64, rounding)


def test_shl_div_cast_result_too_large_for_u64():
    with pytest.raises(LbClmmError) as info:
        safe_shl_div_cast(1, 1, 64, Rounding.DOWN, IntType.U64)
    assert _code(info) is ErrorCode.TYPE_CAST_FAILED