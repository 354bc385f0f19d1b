"""Observed-effect accounting.

Fee-on-transfer tokens deliver less than the nominal amount, so any amount
a collaborator reports for them is untrusted. The credit is measured
instead: read the holder's balance, run the call, read it again and use
the difference.
"""

from collections.abc import Callable
from typing import TypeVar

from zapper.amm.interfaces import Token
from zapper.safe_int import S

T = TypeVar("T")


def measure_received(token: Token, holder: str, action: Callable[[], T]) -> tuple[int, T]:
    """Run action and return (balance increase of holder, action's result).

    Raises:
        Underflow: If the holder's balance decreased
    """
    before = token.balance_of(holder)
    result = action()
    after = token.balance_of(holder)
    return (S(after) - S(before)).value, result


def measure_received_many(
    tokens: tuple[Token, ...],
    holder: str,
    action: Callable[[], T],
) -> tuple[tuple[int, ...], T]:
    """measure_received across several tokens around a single call."""
    before = [token.balance_of(holder) for token in tokens]
    result = action()
    deltas = tuple(
        (S(token.balance_of(holder)) - S(prior)).value for token, prior in zip(tokens, before, strict=True)
    )
    return deltas, result
