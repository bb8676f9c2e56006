"""Fixed-point price math, liquidity distribution and event encoding for liquidity-book pools."""

__version__ = "0.1.0"

__all__ = [
    "by_weight",
    "constants",
    "errors",
    "events",
    "params",
    "price",
    "safe_math",
    "strategy",
    "u128x128",
    "u64x64",
    "utils_math",
    "weight_to_amounts",
]