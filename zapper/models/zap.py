"""Transient request, plan and event types for zaps.

A request is built per call, turned into a SwapPlan and a LiquidityPlan,
and discarded once the orchestrator returns or aborts.
"""

from __future__ import annotations

from dataclasses import dataclass

from zapper.models.types import normalize_address


@dataclass(frozen=True)
class ZapInRequest:
    """Deposit a single token into the token_a/token_b pool."""

    input_token: str
    token_a: str
    token_b: str
    amount_in: int
    max_slippage_bps: int
    min_liquidity_out: int
    deadline: int
    fee_on_transfer: bool = False

    @property
    def other_token(self) -> str:
        """The pair token that is not the input token."""
        if normalize_address(self.input_token) == normalize_address(self.token_a):
            return self.token_b
        return self.token_a

    def is_pair_token(self, token: str) -> bool:
        token_norm = normalize_address(token)
        return token_norm in (normalize_address(self.token_a), normalize_address(self.token_b))


@dataclass(frozen=True)
class ZapOutRequest:
    """Withdraw liquidity from the token_a/token_b pool into a single token."""

    output_token: str
    token_a: str
    token_b: str
    liquidity_in: int
    max_slippage_bps: int
    min_amount_out: int
    deadline: int
    fee_on_transfer: bool = False

    @property
    def other_token(self) -> str:
        """The pair token converted into the output token."""
        if normalize_address(self.output_token) == normalize_address(self.token_a):
            return self.token_b
        return self.token_a

    def is_pair_token(self, token: str) -> bool:
        token_norm = normalize_address(token)
        return token_norm in (normalize_address(self.token_a), normalize_address(self.token_b))


@dataclass(frozen=True)
class SwapPlan:
    """A two-token swap: path[0] is sold for path[1]."""

    path: tuple[str, str]
    amount_in: int
    min_amount_out: int

    @property
    def token_in(self) -> str:
        return self.path[0]

    @property
    def token_out(self) -> str:
        return self.path[1]


@dataclass(frozen=True)
class LiquidityPlan:
    """Deposit amounts and per-leg minima, ordered as (token_a, token_b)."""

    amount_a: int
    amount_b: int
    min_a: int
    min_b: int


@dataclass(frozen=True)
class ZapInEvent:
    """Emitted after a committed zap-in."""

    caller: str
    input_token: str
    token_a: str
    token_b: str
    amount_in: int
    liquidity_minted: int


@dataclass(frozen=True)
class ZapOutEvent:
    """Emitted after a committed zap-out."""

    caller: str
    output_token: str
    token_a: str
    token_b: str
    liquidity_in: int
    amount_out: int


ZapEvent = ZapInEvent | ZapOutEvent
