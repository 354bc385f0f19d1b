"""Slippage bounds in basis points."""

from zapper.constants import BPS_DENOMINATOR
from zapper.errors import InvalidSlippage
from zapper.safe_int import S


def validate_slippage_bps(tolerance_bps: int) -> int:
    """Return tolerance_bps if it lies in [0, 10000].

    Raises:
        InvalidSlippage: If the tolerance is negative or exceeds 100%
    """
    if tolerance_bps < 0 or tolerance_bps > BPS_DENOMINATOR:
        raise InvalidSlippage(
            f"Slippage tolerance must be within [0, {BPS_DENOMINATOR}] bps, got {tolerance_bps}"
        )
    return tolerance_bps


def min_out(amount: int, tolerance_bps: int) -> int:
    """Minimum acceptable amount for a given tolerance.

    Formula: amount * (10000 - tolerance_bps) // 10000

    Each deposit leg and each swap gets its own bound; tolerances are never
    compounded across legs.

    Raises:
        InvalidSlippage: If tolerance_bps is outside [0, 10000]
    """
    validate_slippage_bps(tolerance_bps)
    return (S(amount) * (BPS_DENOMINATOR - tolerance_bps) // BPS_DENOMINATOR).value
