"""Zap previews computed from pool state alone.

These mirror what the orchestrators would do against a pool with the
given reserves and total supply, assuming nothing else trades in between
and no transfer fees. They touch no collaborator.
"""

from __future__ import annotations

from dataclasses import dataclass

from zapper.amm.constant_product import constant_product
from zapper.errors import SwapBoundsViolated, ZeroAmount
from zapper.math.optimal_swap import naive_split, optimal_swap
from zapper.math.slippage import min_out, validate_slippage_bps


@dataclass(frozen=True)
class ZapInQuote:
    """Expected outcome of a zap-in.

    Attributes:
        to_swap: Input units swapped for the paired token
        swap_amount_out: Paired token received from the swap
        deposit_in: Input units deposited
        deposit_other: Paired token units deposited
        liquidity: Liquidity units minted
        min_liquidity: liquidity reduced by the slippage tolerance
        dust_in: Input units left over after the deposit
        dust_other: Paired token units left over after the deposit
    """

    to_swap: int
    swap_amount_out: int
    deposit_in: int
    deposit_other: int
    liquidity: int
    min_liquidity: int
    dust_in: int
    dust_other: int


@dataclass(frozen=True)
class ZapOutQuote:
    """Expected outcome of a zap-out.

    Attributes:
        withdrawn_out: Output token units withdrawn from the pool
        withdrawn_other: Other token units withdrawn and then converted
        converted: Output token received for withdrawn_other
        amount_out: withdrawn_out + converted
        min_amount_out: amount_out reduced by the slippage tolerance
    """

    withdrawn_out: int
    withdrawn_other: int
    converted: int
    amount_out: int
    min_amount_out: int


def _check_pool(reserve_in: int, reserve_out: int, total_supply: int) -> None:
    if reserve_in <= 0 or reserve_out <= 0 or total_supply <= 0:
        raise SwapBoundsViolated(
            f"Pool must hold reserves and liquidity: ({reserve_in}, {reserve_out}, supply {total_supply})"
        )


def _zap_in_with_swap(
    amount_in: int,
    to_swap: int,
    reserve_in: int,
    reserve_out: int,
    total_supply: int,
    slippage_bps: int,
) -> ZapInQuote:
    if not 0 < to_swap < amount_in:
        raise SwapBoundsViolated(f"Swap amount {to_swap} not within (0, {amount_in})")

    swap_amount_out = constant_product.get_amount_out(to_swap, reserve_in, reserve_out)
    new_reserve_in = reserve_in + to_swap
    new_reserve_out = reserve_out - swap_amount_out
    remainder = amount_in - to_swap

    deposit_in, deposit_other = constant_product.optimal_deposit(
        remainder, swap_amount_out, new_reserve_in, new_reserve_out
    )
    liquidity = constant_product.liquidity_for_deposit(
        deposit_in, deposit_other, new_reserve_in, new_reserve_out, total_supply
    )

    return ZapInQuote(
        to_swap=to_swap,
        swap_amount_out=swap_amount_out,
        deposit_in=deposit_in,
        deposit_other=deposit_other,
        liquidity=liquidity,
        min_liquidity=min_out(liquidity, slippage_bps),
        dust_in=remainder - deposit_in,
        dust_other=swap_amount_out - deposit_other,
    )


def quote_zap_in(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    total_supply: int,
    slippage_bps: int = 0,
    *,
    round_up: bool = False,
) -> ZapInQuote:
    """Preview a zap-in sized with optimal_swap.

    Args:
        amount_in: Input token amount
        reserve_in: Pool reserve of the input token
        reserve_out: Pool reserve of the paired token
        total_supply: Liquidity units outstanding
        slippage_bps: Tolerance applied to the minted liquidity
        round_up: Swap rounding policy (see optimal_swap)

    Raises:
        ZeroAmount: amount_in is zero
        SwapBoundsViolated: Empty pool or degenerate swap size
        InvalidSlippage: slippage_bps exceeds 10000
    """
    if amount_in <= 0:
        raise ZeroAmount("amount_in must be greater than zero")
    validate_slippage_bps(slippage_bps)
    _check_pool(reserve_in, reserve_out, total_supply)

    to_swap = optimal_swap(amount_in, reserve_in, round_up=round_up)
    return _zap_in_with_swap(amount_in, to_swap, reserve_in, reserve_out, total_supply, slippage_bps)


def quote_naive_zap_in(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    total_supply: int,
    slippage_bps: int = 0,
) -> ZapInQuote:
    """Preview a zap-in that swaps half of the input."""
    if amount_in <= 0:
        raise ZeroAmount("amount_in must be greater than zero")
    validate_slippage_bps(slippage_bps)
    _check_pool(reserve_in, reserve_out, total_supply)

    return _zap_in_with_swap(
        amount_in, naive_split(amount_in), reserve_in, reserve_out, total_supply, slippage_bps
    )


def quote_zap_out(
    liquidity: int,
    reserve_out: int,
    reserve_other: int,
    total_supply: int,
    slippage_bps: int = 0,
) -> ZapOutQuote:
    """Preview a zap-out into the token whose reserve is reserve_out.

    Raises:
        ZeroAmount: liquidity is zero
        SwapBoundsViolated: Empty pool or liquidity above total supply
        InvalidSlippage: slippage_bps exceeds 10000
    """
    if liquidity <= 0:
        raise ZeroAmount("liquidity must be greater than zero")
    validate_slippage_bps(slippage_bps)
    _check_pool(reserve_out, reserve_other, total_supply)
    if liquidity > total_supply:
        raise SwapBoundsViolated(f"Liquidity {liquidity} exceeds total supply {total_supply}")

    withdrawn_out, withdrawn_other = constant_product.amounts_for_burn(
        liquidity, reserve_out, reserve_other, total_supply
    )
    converted = constant_product.get_amount_out(
        withdrawn_other, reserve_other - withdrawn_other, reserve_out - withdrawn_out
    )
    amount_out = withdrawn_out + converted

    return ZapOutQuote(
        withdrawn_out=withdrawn_out,
        withdrawn_other=withdrawn_other,
        converted=converted,
        amount_out=amount_out,
        min_amount_out=min_out(amount_out, slippage_bps),
    )
