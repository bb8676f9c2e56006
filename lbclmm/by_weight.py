"""Deposits described by an explicit weight for each bin."""

from __future__ import annotations

from dataclasses import dataclass, field

from lbclmm.constants import MAX_BIN_PER_POSITION
from lbclmm.errors import ErrorCode, LbClmmError
from lbclmm.weight_to_amounts import (
    to_amount_ask_side,
    to_amount_bid_side,
    to_amount_both_side,
)


def _require(condition: bool, code: ErrorCode) -> None:
    if not condition:
        raise LbClmmError(code)


@dataclass
class BinLiquidityDistributionByWeight:
    """Weight of liquidity assigned to one bin."""

    bin_id: int = 0
    weight: int = 0


@dataclass
class LiquidityParameterByWeight:
    """A deposit of X and Y spread over bins by explicit weights."""

    amount_x: int = 0
    amount_y: int = 0
    active_id: int = 0
    max_active_bin_slippage: int = 0
    bin_liquidity_dist: list[BinLiquidityDistributionByWeight] = field(default_factory=list)

    def _weights(self) -> list[tuple[int, int]]:
        return [(dist.bin_id, dist.weight) for dist in self.bin_liquidity_dist]

    def validate(self, active_id: int) -> None:
        """Raise if the distribution is empty, too wide, unsorted, or slipped too far."""
        bin_count = len(self.bin_liquidity_dist)
        _require(bin_count > 0, ErrorCode.INVALID_INPUT)
        _require(bin_count <= MAX_BIN_PER_POSITION, ErrorCode.INVALID_INPUT)

        bin_shift = abs(active_id - self.active_id)
        _require(
            bin_shift <= self.max_active_bin_slippage,
            ErrorCode.EXCEEDED_BIN_SLIPPAGE_TOLERANCE,
        )

        for dist in self.bin_liquidity_dist:
            _require(dist.weight != 0, ErrorCode.INVALID_INPUT)
        for previous, current in zip(self.bin_liquidity_dist, self.bin_liquidity_dist[1:]):
            _require(current.bin_id > previous.bin_id, ErrorCode.INVALID_INPUT)

        first_bin_id = self.bin_liquidity_dist[0].bin_id
        last_bin_id = self.bin_liquidity_dist[-1].bin_id
        if first_bin_id > active_id:
            _require(self.amount_x != 0, ErrorCode.INVALID_INPUT)
        if last_bin_id < active_id:
            _require(self.amount_y != 0, ErrorCode.INVALID_INPUT)

    def to_amounts_into_bin(
        self,
        active_id: int,
        bin_step: int,
        amount_x_in_active_bin: int,
        amount_y_in_active_bin: int,
    ) -> list[tuple[int, int, int]]:
        """Return (bin_id, amount_x, amount_y) per bin; bins must be sorted ascending."""
        _require(bool(self.bin_liquidity_dist), ErrorCode.INVALID_INPUT)
        weights = self._weights()

        if active_id > self.bin_liquidity_dist[-1].bin_id:
            return [
                (bin_id, 0, amount)
                for bin_id, amount in to_amount_bid_side(active_id, self.amount_y, weights)
            ]
        if active_id < self.bin_liquidity_dist[0].bin_id:
            return [
                (bin_id, amount, 0)
                for bin_id, amount in to_amount_ask_side(
                    active_id, self.amount_x, bin_step, weights
                )
            ]
        return to_amount_both_side(
            active_id,
            bin_step,
            amount_x_in_active_bin,
            amount_y_in_active_bin,
            self.amount_x,
            self.amount_y,
            weights,
        )