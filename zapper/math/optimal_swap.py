"""Optimal pre-swap sizing for single-token liquidity deposits.

Depositing a single token into a constant-product pool requires swapping
part of it for the paired token first. Swapping exactly half leaves dust
because the swap itself moves the price and pays the fee. The amount s
that leaves a remainder (a - s) matching the post-swap pool ratio solves

    s^2 * 997 + s * R * 1997 - a * R * 1000 = 0

for input amount a and input-side reserve R under the 0.3% fee. Its
positive root, scaled to integers, is

    s = (sqrt(R * (a * 3988000 + R * 3988009)) - R * 1997) / 1994

Integer floor division makes the result under-swap by at most one unit.
"""


from zapper.safe_int import S


# Coefficients of the closed form for the 997/1000 fee
_A_COEFF = 3_988_000  # 4 * 997 * 1000
_R_COEFF = 3_988_009  # 1997^2
_R_LINEAR = 1_997  # 1000 + 997
_DENOMINATOR = 1_994  # 2 * 997


def optimal_swap(amount_in: int, reserve_in: int, *, round_up: bool = False) -> int:
    """Calculate how much of amount_in to swap before depositing both legs.

    Args:
        amount_in: Total amount of the input token to deposit
        reserve_in: Pool reserve of the input token
        round_up: Add one unit when the division truncated, as long as the
            result stays below amount_in

    Returns:
        Portion of amount_in to swap for the paired token

    Raises:
        ValueError: If amount_in or reserve_in is not positive
    """
    if amount_in <= 0:
        raise ValueError(f"amount_in must be positive: {amount_in}")
    if reserve_in <= 0:
        raise ValueError(f"reserve_in must be positive: {reserve_in}")

    r = S(reserve_in)
    root = (r * (S(amount_in) * _A_COEFF + r * _R_COEFF)).isqrt()
    numerator = root - r * _R_LINEAR
    to_swap = numerator // _DENOMINATOR

    if round_up and (numerator % _DENOMINATOR) and to_swap.value + 1 < amount_in:
        to_swap = to_swap + 1

    return to_swap.value


def naive_split(amount_in: int) -> int:
    """Half of amount_in, the baseline optimal_swap improves on."""
    return amount_in // 2
