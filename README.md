# lbclmm

Integer-exact math for liquidity-book pools: pools whose liquidity sits in
discrete price *bins*, where the price of bin `i` is
`(1 + bin_step / 10000) ** i`.

Prices are unsigned Q64.64 fixed-point integers (`1.0` is `1 << 64`). The
arithmetic models fixed-width integer types (u16 up to u256) and checks
their limits:

- overflow, division by zero and failed shifts raise
  `lbclmm.errors.LbClmmError` with `ErrorCode.MATH_OVERFLOW`;
- a result that does not fit the type it is narrowed to raises
  `LbClmmError` with `ErrorCode.TYPE_CAST_FAILED`;
- an argument that is not a valid value of the type it stands for raises
  `ValueError`.

`LbClmmError.code` is an `ErrorCode` member. Each member has a `message`
and a numeric `code`, counted from 6000 in declaration order.

## Installing

```
pip install .
pip install ".[test]"   # with pytest and hypothesis
```

There are no runtime dependencies.

## Modules

| Module | What it holds |
| --- | --- |
| `lbclmm.errors` | `ErrorCode` enum and the `LbClmmError` exception |
| `lbclmm.constants` | protocol limits (`MIN_BIN_ID`, `MAX_BIN_ID`, `BASIS_POINT_MAX`, `MAX_BIN_PER_POSITION`, ...) and `bin_id_in_range` |
| `lbclmm.safe_math` | `IntType` (`U16`, `I32`, `U32`, `U64`, `I64`, `U128`, `I128`, `USIZE`, `U256`) with `IntType.check`, and checked `safe_add`, `safe_sub`, `safe_mul`, `safe_div`, `safe_rem`, `safe_shl`, `safe_shr` |
| `lbclmm.u128x128` | `mul_div`, `mul_shr`, `shl_div` with `Rounding.UP` / `Rounding.DOWN` |
| `lbclmm.u64x64` | Q64.64 `pow`, `get_base`, `to_decimal`, `from_decimal`, and the constants `ONE`, `SCALE_OFFSET`, `PRECISION` |
| `lbclmm.price` | `get_price_from_id`, `get_liquidity` (`L = price * x + y`) |
| `lbclmm.utils_math` | checked operations with a narrowing cast: `safe_pow_cast`, `safe_mul_div_cast`, `safe_mul_shr_cast`, `safe_shl_div_cast`, `safe_mul_div_cast_from_u64_to_u64`, `safe_mul_div_cast_from_u256_to_u64` |
| `lbclmm.weight_to_amounts` | turn sorted `(bin_id, weight)` pairs into token amounts: `to_amount_bid_side`, `to_amount_ask_side`, `to_amount_both_side` |
| `lbclmm.strategy` | deposit strategies: `StrategyType`, `StrategyParameters`, `LiquidityParameterByStrategy`, `LiquidityParameterByStrategyOneSide`, and the weight shapes `to_weight_spot_balanced`, `to_weight_ascending_order`, `to_weight_descending_order`, `to_weight_curve`, `to_weight_bid_ask` |
| `lbclmm.by_weight` | deposits with an explicit weight per bin: `BinLiquidityDistributionByWeight`, `LiquidityParameterByWeight` with `validate` and `to_amounts_into_bin` |
| `lbclmm.params` | instruction parameter records (`LiquidityParameter`, `InitPresetParametersIx`, `FeeParameter`, `InitPermissionPairIx`, `BinLiquidityReduction`, ...) and `shares_to_remove` |
| `lbclmm.events` | pool event records (`Swap`, `AddLiquidity`, `ClaimFee`, ...) with `event_discriminator`, `encode_event`, `decode_event` |

## Examples

Price of a bin:

```python
from lbclmm.price import get_price_from_id
from lbclmm.u64x64 import to_decimal

price_q64 = get_price_from_id(100, 10)   # bin 100, bin step 10 bps
print(to_decimal(price_q64))             # price scaled by 10**12
```

Spread a deposit over bins with a strategy:

```python
from lbclmm.strategy import (
    LiquidityParameterByStrategy,
    StrategyParameters,
    StrategyType,
)

params = LiquidityParameterByStrategy(
    amount_x=1_000_000,
    amount_y=1_000_000,
    active_id=0,
    max_active_bin_slippage=3,
    strategy_parameters=StrategyParameters(
        min_bin_id=-5,
        max_bin_id=5,
        strategy_type=StrategyType.CURVE_BALANCED,
    ),
)
# active bin 0, bin step 10, active bin currently empty
for bin_id, amount_x, amount_y in params.to_amounts_into_bin(0, 10, 0, 0):
    print(bin_id, amount_x, amount_y)
```

Bins below the active bin receive only Y, bins above it only X, and the
active bin a mix set by the reserves already in it.

Encode and decode an event:

```python
from lbclmm.events import PositionClose, decode_event, encode_event

event = PositionClose(position=bytes(32), owner=bytes([1]) * 32)
data = encode_event(event)          # 8-byte discriminator + 64 bytes of keys
assert decode_event(data) == event
```

Events are encoded as an 8-byte discriminator (the first 8 bytes of
SHA-256 of `"event:<TypeName>"`) followed by the fields in declaration
order, little-endian, with public keys as 32 raw bytes. The sender field
that other events name `from` is called `from_`.

Handle failures:

```python
from lbclmm.errors import ErrorCode, LbClmmError
from lbclmm.strategy import to_weight_curve

try:
    to_weight_curve(0, 10, 20)
except LbClmmError as exc:
    assert exc.code is ErrorCode.INVALID_STRATEGY_PARAMETERS
```

## What this package does not do

It is a calculation library only. It holds no pool, bin array, position or
oracle state, keeps no storage, talks to no network, and does not execute
swaps, deposits, withdrawals or fee and reward claims. The records in
`lbclmm.params` are plain data with no encoding of their own. There is no
command-line tool.

## Running the tests

```
pytest
```