import pytest

from lbclmm.by_weight import BinLiquidityDistributionByWeight, LiquidityParameterByWeight
from lbclmm.constants import MAX_BIN_PER_POSITION
from lbclmm.errors import ErrorCode, LbClmmError


def _dist(bin_ids, weight=10):
    return [BinLiquidityDistributionByWeight(bin_id=b, weight=weight) for b in bin_ids]


def _param(bin_ids, amount_x=1_000_000, amount_y=1_000_000, active_id=0, slippage=0, weight=10):
    return LiquidityParameterByWeight(
        amount_x=amount_x,
        amount_y=amount_y,
        active_id=active_id,
        max_active_bin_slippage=slippage,
        bin_liquidity_dist=_dist(bin_ids, weight),
    )


def _code(excinfo):
    return excinfo.value.code


def test_default_distribution_entry():
    dist = BinLiquidityDistributionByWeight()
    assert (dist.bin_id, dist.weight) == (0, 0)


def test_validate_accepts_good_distribution():
    param = _param(range(-3, 4))
    param.validate(0)
    assert len(param.bin_liquidity_dist) == 7


def test_validate_rejects_empty():
    with pytest.raises(LbClmmError) as excinfo:
        _param([]).validate(0)
    assert _code(excinfo) is ErrorCode.INVALID_INPUT


def test_validate_rejects_too_many_bins():
    param = _param(range(MAX_BIN_PER_POSITION + 1))
    with pytest.raises(LbClmmError) as excinfo:
        param.validate(0)
    assert _code(excinfo) is ErrorCode.INVALID_INPUT


def test_validate_accepts_max_bins():
    param = _param(range(MAX_BIN_PER_POSITION))
    param.validate(0)
    assert len(param.bin_liquidity_dist) == MAX_BIN_PER_POSITION


def test_validate_rejects_excess_slippage():
    param = _param(range(-3, 4), active_id=0, slippage=2)
    param.validate(2)
    param.validate(-2)
    with pytest.raises(LbClmmError) as excinfo:
        param.validate(3)
    assert _code(excinfo) is ErrorCode.EXCEEDED_BIN_SLIPPAGE_TOLERANCE


def test_validate_rejects_zero_weight():
    param = _param(range(-2, 3))
    param.bin_liquidity_dist[2].weight = 0
    with pytest.raises(LbClmmError) as excinfo:
        param.validate(0)
    assert _code(excinfo) is ErrorCode.INVALID_INPUT


@pytest.mark.parametrize("bin_ids", [[0, 2, 1], [0, 1, 1]])
def test_validate_rejects_unsorted_or_repeated(bin_ids):
    with pytest.raises(LbClmmError) as excinfo:
        _param(bin_ids).validate(0)
    assert _code(excinfo) is ErrorCode.INVALID_INPUT


def test_validate_ask_only_needs_amount_x():
    with pytest.raises(LbClmmError) as excinfo:
        _param(range(1, 5), amount_x=0).validate(0)
    assert _code(excinfo) is ErrorCode.INVALID_INPUT


def test_validate_bid_only_needs_amount_y():
    with pytest.raises(LbClmmError) as excinfo:
        _param(range(-5, 0), amount_y=0).validate(0)
    assert _code(excinfo) is ErrorCode.INVALID_INPUT


def test_bid_only_deposit_puts_y_in_every_bin():
    amounts = _param(range(-5, 0), amount_y=500_000).to_amounts_into_bin(0, 10, 0, 0)
    assert [b for b, _, _ in amounts] == list(range(-5, 0))
    assert all(x == 0 for _, x, _ in amounts)
    assert len({y for _, _, y in amounts}) == 1
    assert 0 <= 500_000 - sum(y for _, _, y in amounts) < 5


def test_ask_only_deposit_puts_x_in_every_bin():
    amounts = _param(range(1, 6), amount_x=500_000).to_amounts_into_bin(0, 10, 0, 0)
    assert [b for b, _, _ in amounts] == list(range(1, 6))
    assert all(y == 0 for _, _, y in amounts)
    xs = [x for _, x, _ in amounts]
    assert xs == sorted(xs, reverse=True)
    assert sum(xs) <= 500_000


def test_both_side_deposit_splits_around_active():
    amounts = _param(range(-3, 4), amount_x=700_000, amount_y=700_000).to_amounts_into_bin(
        0, 10, 0, 0
    )
    assert [b for b, _, _ in amounts] == list(range(-3, 4))
    for bin_id, x, y in amounts:
        if bin_id < 0:
            assert x == 0 and y > 0
        elif bin_id > 0:
            assert y == 0 and x > 0
        else:
            assert x > 0 and y > 0
    assert sum(x for _, x, _ in amounts) <= 700_000
    assert sum(y for _, _, y in amounts) <= 700_000


def test_to_amounts_rejects_empty_distribution():
    with pytest.raises(LbClmmError) as excinfo:
        _param([]).to_amounts_into_bin(0, 10, 0, 0)
    assert _code(excinfo) is ErrorCode.INVALID_INPUT