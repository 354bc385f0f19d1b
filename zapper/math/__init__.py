"""Pure sizing math for zaps."""

from zapper.math.optimal_swap import naive_split, optimal_swap
from zapper.math.slippage import min_out, validate_slippage_bps
from zapper.safe_int import isqrt

__all__ = [
    "isqrt",
    "optimal_swap",
    "naive_split",
    "min_out",
    "validate_slippage_bps",
]
