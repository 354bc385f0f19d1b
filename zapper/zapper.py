"""Single-token zap orchestration.

A zap-in pulls one token from the caller, swaps the optimal portion of it
for the paired token and deposits both legs as liquidity. A zap-out pulls
liquidity units, withdraws both legs and converts the unwanted leg into
the requested token.

Each entry point runs under a reentrancy guard and walks

    Start -> FundsAcquired -> Sized/Quoted -> Executed(swap)
          -> Executed(liquidity op) -> Verified -> Committed

Any failure raises and aborts the whole call. Rolling back effects that
already reached collaborators is the execution environment's job (a
transaction on chain, Chain.atomic() in the in-memory market); nothing
here retries.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from zapper.accounting import measure_received, measure_received_many
from zapper.allowance import AllowanceManager
from zapper.amm.interfaces import Pair, PairLookup, PairRegistry, Router, Token, TokenLookup
from zapper.config import DEFAULT_ZAPPER_CONFIG, ZapperConfig
from zapper.errors import (
    SlippageExceeded,
    SwapBoundsViolated,
    UnsupportedInputToken,
    UnsupportedOutputToken,
    ZeroAmount,
)
from zapper.math.optimal_swap import optimal_swap
from zapper.math.slippage import min_out, validate_slippage_bps
from zapper.models.types import normalize_address, same_address
from zapper.models.zap import (
    LiquidityPlan,
    SwapPlan,
    ZapEvent,
    ZapInEvent,
    ZapInRequest,
    ZapOutEvent,
    ZapOutRequest,
)
from zapper.pools.resolver import PairAddressResolver
from zapper.reentrancy import ReentrancyLock, nonreentrant

logger = structlog.get_logger()

EventSink = Callable[[ZapEvent], None]


class Zapper:
    """Enter or exit a two-token constant-product position with one token.

    Collaborators are injected and never looked up globally, so the same
    orchestrator drives a live chain client or the in-memory market.

    Args:
        address: Custody account the zapper holds funds in during a zap
        router: Router executing swaps and liquidity operations
        registry: Pair registry used to locate pools
        token_at: Returns a token handle for an address
        pair_at: Returns a pair handle for an address
        config: Pair derivation and swap rounding settings
        event_sink: Receives a ZapInEvent/ZapOutEvent after each committed zap
    """

    def __init__(
        self,
        address: str,
        router: Router,
        registry: PairRegistry,
        token_at: TokenLookup,
        pair_at: PairLookup,
        config: ZapperConfig = DEFAULT_ZAPPER_CONFIG,
        event_sink: EventSink | None = None,
    ) -> None:
        self.address = address
        self._router = router
        self._token_at = token_at
        self._pair_at = pair_at
        self._config = config
        self._event_sink = event_sink
        self._resolver = PairAddressResolver(registry, config)
        self._allowances = AllowanceManager(owner=address)
        self._reentrancy_lock = ReentrancyLock()

    @property
    def router(self) -> Router:
        return self._router

    def resolve_pool(self, token_a: str, token_b: str) -> str:
        """Pool address for a token pair, or the zero address if none exists."""
        return self._resolver.resolve_live(token_a, token_b)

    @nonreentrant
    def zap_in_single_token(
        self,
        caller: str,
        input_token: str,
        token_a: str,
        token_b: str,
        amount_in: int,
        max_slippage_bps: int,
        min_liquidity_out: int,
        deadline: int,
        fee_on_transfer: bool = False,
    ) -> int:
        """Deposit amount_in of input_token into the token_a/token_b pool.

        Liquidity units are minted to the caller; deposit leftovers the
        router did not use are refunded to the caller.

        Returns:
            Liquidity units minted

        Raises:
            ZeroAmount: amount_in is zero
            UnsupportedInputToken: input_token is not a pair token
            InvalidSlippage: max_slippage_bps exceeds 10000
            PairNotFound: No pool for the pair
            SwapBoundsViolated: Sized swap not strictly inside (0, amount_in)
            SlippageExceeded: Fewer than min_liquidity_out units minted
        """
        request = ZapInRequest(
            input_token=input_token,
            token_a=token_a,
            token_b=token_b,
            amount_in=amount_in,
            max_slippage_bps=max_slippage_bps,
            min_liquidity_out=min_liquidity_out,
            deadline=deadline,
            fee_on_transfer=fee_on_transfer,
        )
        return self._zap_in(caller, request)

    @nonreentrant
    def zap_out_single_token(
        self,
        caller: str,
        output_token: str,
        token_a: str,
        token_b: str,
        liquidity_in: int,
        max_slippage_bps: int,
        min_amount_out: int,
        deadline: int,
        fee_on_transfer: bool = False,
    ) -> int:
        """Withdraw liquidity_in units of the token_a/token_b pool as output_token.

        Returns:
            Amount of output_token sent to the caller

        Raises:
            ZeroAmount: liquidity_in is zero
            UnsupportedOutputToken: output_token is not a pair token
            InvalidSlippage: max_slippage_bps exceeds 10000
            PairNotFound: No pool for the pair
            SlippageExceeded: Amount out below min_amount_out
        """
        request = ZapOutRequest(
            output_token=output_token,
            token_a=token_a,
            token_b=token_b,
            liquidity_in=liquidity_in,
            max_slippage_bps=max_slippage_bps,
            min_amount_out=min_amount_out,
            deadline=deadline,
            fee_on_transfer=fee_on_transfer,
        )
        return self._zap_out(caller, request)

    # --- Zap-in ---

    def _zap_in(self, caller: str, request: ZapInRequest) -> int:
        if request.amount_in <= 0:
            raise ZeroAmount("amount_in must be greater than zero")
        if not request.is_pair_token(request.input_token):
            raise UnsupportedInputToken(
                f"Input token {request.input_token} is not in pair {request.token_a}/{request.token_b}"
            )
        validate_slippage_bps(request.max_slippage_bps)

        input_token = self._token_at(request.input_token)
        other_token = self._token_at(request.other_token)

        credited = self._pull(input_token, caller, request.amount_in, request.fee_on_transfer)
        self._allowances.ensure_allowance(input_token, self._router.address, credited)

        pair = self._pair_at(self._resolver.resolve(request.token_a, request.token_b))
        reserve_in, reserve_out = _reserves_for(pair, request.input_token)
        if reserve_in == 0 or reserve_out == 0:
            raise SwapBoundsViolated(f"Pool {pair.address} has empty reserves ({reserve_in}, {reserve_out})")

        to_swap = optimal_swap(credited, reserve_in, round_up=self._config.round_up_optimal_swap)
        if not 0 < to_swap < credited:
            raise SwapBoundsViolated(f"Swap amount {to_swap} not within (0, {credited})")

        logger.debug(
            "optimal_swap_sized",
            pool=pair.address,
            amount_in=credited,
            reserve_in=reserve_in,
            to_swap=to_swap,
        )

        swap_plan = self._plan_swap(
            input_token.address, other_token.address, to_swap, request.max_slippage_bps, request.deadline
        )
        received = self._execute_swap(swap_plan, other_token, request.deadline, request.fee_on_transfer)

        remainder = credited - to_swap
        if same_address(request.input_token, request.token_a):
            amount_a, amount_b = remainder, received
        else:
            amount_a, amount_b = received, remainder

        liquidity_plan = LiquidityPlan(
            amount_a=amount_a,
            amount_b=amount_b,
            min_a=min_out(amount_a, request.max_slippage_bps),
            min_b=min_out(amount_b, request.max_slippage_bps),
        )
        token_a = self._token_at(request.token_a)
        token_b = self._token_at(request.token_b)
        self._allowances.ensure_allowance(token_a, self._router.address, liquidity_plan.amount_a)
        self._allowances.ensure_allowance(token_b, self._router.address, liquidity_plan.amount_b)

        used_a, used_b, liquidity_minted = self._router.add_liquidity(
            self.address,
            token_a.address,
            token_b.address,
            liquidity_plan.amount_a,
            liquidity_plan.amount_b,
            liquidity_plan.min_a,
            liquidity_plan.min_b,
            caller,
            request.deadline,
        )

        if liquidity_minted < request.min_liquidity_out:
            raise SlippageExceeded(f"Liquidity minted {liquidity_minted} below minimum {request.min_liquidity_out}")

        self._refund(token_a, caller, liquidity_plan.amount_a - used_a)
        self._refund(token_b, caller, liquidity_plan.amount_b - used_b)

        self._emit(
            ZapInEvent(
                caller=caller,
                input_token=request.input_token,
                token_a=request.token_a,
                token_b=request.token_b,
                amount_in=request.amount_in,
                liquidity_minted=liquidity_minted,
            )
        )
        return liquidity_minted

    # --- Zap-out ---

    def _zap_out(self, caller: str, request: ZapOutRequest) -> int:
        if request.liquidity_in <= 0:
            raise ZeroAmount("liquidity_in must be greater than zero")
        validate_slippage_bps(request.max_slippage_bps)
        if not request.is_pair_token(request.output_token):
            raise UnsupportedOutputToken(
                f"Output token {request.output_token} is not in pair {request.token_a}/{request.token_b}"
            )

        pair = self._pair_at(self._resolver.resolve(request.token_a, request.token_b))
        pair.transfer_from(self.address, caller, self.address, request.liquidity_in)
        self._allowances.ensure_allowance(pair, self._router.address, request.liquidity_in)

        token_a = self._token_at(request.token_a)
        token_b = self._token_at(request.token_b)

        def withdraw() -> tuple[int, int]:
            return self._router.remove_liquidity(
                self.address,
                token_a.address,
                token_b.address,
                request.liquidity_in,
                0,
                0,
                self.address,
                request.deadline,
            )

        if request.fee_on_transfer:
            (amount_a, amount_b), _ = measure_received_many((token_a, token_b), self.address, withdraw)
        else:
            amount_a, amount_b = withdraw()

        if same_address(request.output_token, request.token_a):
            output_token, other_token = token_a, token_b
            kept, other_amount = amount_a, amount_b
        else:
            output_token, other_token = token_b, token_a
            kept, other_amount = amount_b, amount_a

        amount_out = kept
        if other_amount > 0:
            swap_plan = self._plan_swap(
                other_token.address, output_token.address, other_amount, request.max_slippage_bps, request.deadline
            )
            amount_out += self._execute_swap(swap_plan, output_token, request.deadline, request.fee_on_transfer)

        if amount_out < request.min_amount_out:
            raise SlippageExceeded(f"Amount out {amount_out} below minimum {request.min_amount_out}")

        output_token.transfer(self.address, caller, amount_out)

        self._emit(
            ZapOutEvent(
                caller=caller,
                output_token=request.output_token,
                token_a=request.token_a,
                token_b=request.token_b,
                liquidity_in=request.liquidity_in,
                amount_out=amount_out,
            )
        )
        return amount_out

    # --- Shared steps ---

    def _pull(self, token: Token, caller: str, amount: int, fee_on_transfer: bool) -> int:
        """Move amount from caller into custody; return the amount credited."""
        if not fee_on_transfer:
            token.transfer_from(self.address, caller, self.address, amount)
            return amount

        credited, _ = measure_received(
            token,
            self.address,
            lambda: token.transfer_from(self.address, caller, self.address, amount),
        )
        if credited == 0:
            raise ZeroAmount(f"Transfer of {amount} {token.address} credited nothing")
        return credited

    def _plan_swap(
        self,
        token_in: str,
        token_out: str,
        amount_in: int,
        max_slippage_bps: int,
        deadline: int,
    ) -> SwapPlan:
        path = (token_in, token_out)
        quoted = self._router.get_amounts_out(amount_in, list(path))[-1]
        logger.debug("swap_quoted", path=path, amount_in=amount_in, quoted=quoted, deadline=deadline)
        return SwapPlan(path=path, amount_in=amount_in, min_amount_out=min_out(quoted, max_slippage_bps))

    def _execute_swap(self, plan: SwapPlan, token_out: Token, deadline: int, fee_on_transfer: bool) -> int:
        """Execute a planned swap into custody and return the amount received.

        For fee-on-transfer tokens the router's numbers are ignored and the
        custody balance delta of token_out is used instead.
        """
        token_in = self._token_at(plan.token_in)
        self._allowances.ensure_allowance(token_in, self._router.address, plan.amount_in)

        if fee_on_transfer:
            received, _ = measure_received(
                token_out,
                self.address,
                lambda: self._router.swap_exact_tokens_for_tokens_supporting_fee_on_transfer_tokens(
                    self.address, plan.amount_in, plan.min_amount_out, list(plan.path), self.address, deadline
                ),
            )
            return received

        amounts = self._router.swap_exact_tokens_for_tokens(
            self.address, plan.amount_in, plan.min_amount_out, list(plan.path), self.address, deadline
        )
        return amounts[-1]

    def _refund(self, token: Token, caller: str, amount: int) -> None:
        if amount > 0:
            token.transfer(self.address, caller, amount)
            logger.debug("dust_refunded", token=token.address, caller=caller, amount=amount)

    def _emit(self, event: ZapEvent) -> None:
        if isinstance(event, ZapInEvent):
            logger.info(
                "zap_in",
                caller=event.caller,
                input_token=event.input_token,
                token_a=event.token_a,
                token_b=event.token_b,
                amount_in=event.amount_in,
                liquidity_minted=event.liquidity_minted,
            )
        else:
            logger.info(
                "zap_out",
                caller=event.caller,
                output_token=event.output_token,
                token_a=event.token_a,
                token_b=event.token_b,
                liquidity_in=event.liquidity_in,
                amount_out=event.amount_out,
            )
        if self._event_sink is not None:
            self._event_sink(event)


def _reserves_for(pair: Pair, token_in: str) -> tuple[int, int]:
    """Pair reserves ordered as (reserve_in, reserve_out)."""
    reserve0, reserve1 = pair.get_reserves()
    token_in_norm = normalize_address(token_in)
    if token_in_norm == normalize_address(pair.token0):
        return reserve0, reserve1
    if token_in_norm == normalize_address(pair.token1):
        return reserve1, reserve0
    raise UnsupportedInputToken(f"Token {token_in} not in pool {pair.address}")
