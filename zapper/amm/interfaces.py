"""Collaborator interfaces consumed by the zapper.

The pool registry, pools, router and tokens are external. They are
described here as Protocols so the orchestrators can be driven by a live
chain client or by the in-memory market in zapper.sim.

Every state-changing call takes an explicit ``sender``: the account the
call is made from.
"""

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class Token(Protocol):
    """Fungible token with standard transfer and allowance semantics.

    Fee-on-transfer tokens may deliver less than the nominal amount.
    """

    address: str

    def balance_of(self, account: str) -> int: ...

    def allowance(self, owner: str, spender: str) -> int: ...

    def approve(self, sender: str, spender: str, amount: int) -> bool: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> bool: ...

    def transfer_from(self, sender: str, owner: str, recipient: str, amount: int) -> bool: ...


@runtime_checkable
class Pair(Token, Protocol):
    """Two-token constant-product pool. Its liquidity units are a Token."""

    token0: str
    token1: str

    def get_reserves(self) -> tuple[int, int]: ...

    def total_supply(self) -> int: ...


@runtime_checkable
class PairRegistry(Protocol):
    """Pool registry (factory): maps a token pair to its pool address."""

    address: str

    def get_pair(self, token_a: str, token_b: str) -> str:
        """Return the pair address, or the zero address if none exists."""
        ...


@runtime_checkable
class Router(Protocol):
    """Router executing swaps and liquidity operations with deadlines."""

    address: str

    def get_amounts_out(self, amount_in: int, path: Sequence[str]) -> list[int]: ...

    def swap_exact_tokens_for_tokens(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]: ...

    def swap_exact_tokens_for_tokens_supporting_fee_on_transfer_tokens(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> None:
        """Same as swap_exact_tokens_for_tokens but reports nothing trustworthy."""
        ...

    def add_liquidity(
        self,
        sender: str,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int, int]:
        """Returns (amount_a_used, amount_b_used, liquidity_minted)."""
        ...

    def remove_liquidity(
        self,
        sender: str,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int]:
        """Returns (amount_a, amount_b) in the order of token_a, token_b."""
        ...


# Contract handle lookups injected into the zapper
TokenLookup = Callable[[str], Token]
PairLookup = Callable[[str], Pair]
