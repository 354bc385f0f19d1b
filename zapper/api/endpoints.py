"""Read-only zap preview endpoints."""

import structlog
from fastapi import APIRouter, Depends

from zapper.api.schemas import (
    OptimalSwapRequest,
    OptimalSwapResponse,
    PairAddressRequest,
    PairAddressResponse,
    ZapInQuoteRequest,
    ZapInQuoteResponse,
    ZapOutQuoteRequest,
    ZapOutQuoteResponse,
)
from zapper.config import ZapperConfig
from zapper.errors import ZeroAmount
from zapper.math.optimal_swap import naive_split, optimal_swap
from zapper.pools.resolver import compute_pair_address, sort_tokens
from zapper.quote import quote_naive_zap_in, quote_zap_in, quote_zap_out

logger = structlog.get_logger()

router = APIRouter()


def get_config() -> ZapperConfig:
    """Dependency provider for the zapper configuration.

    Override this in tests:
        app.dependency_overrides[get_config] = lambda: ZapperConfig(...)
    """
    return ZapperConfig.from_env()


@router.post("/optimal-swap")
async def size_optimal_swap(request: OptimalSwapRequest) -> OptimalSwapResponse:
    """Amount of the input token to swap before a single-token deposit."""
    amount_in = int(request.amount_in)
    reserve_in = int(request.reserve_in)
    if amount_in == 0:
        raise ZeroAmount("amountIn must be greater than zero")
    if reserve_in == 0:
        raise ValueError("reserveIn must be greater than zero")

    to_swap = optimal_swap(amount_in, reserve_in, round_up=request.round_up)
    return OptimalSwapResponse(to_swap=str(to_swap), naive_swap=str(naive_split(amount_in)))


@router.post("/quote/zap-in")
async def preview_zap_in(
    request: ZapInQuoteRequest,
    config: ZapperConfig = Depends(get_config),
) -> ZapInQuoteResponse:
    """Preview liquidity minted by a zap-in against the given pool state."""
    args = (
        int(request.amount_in),
        int(request.reserve_in),
        int(request.reserve_out),
        int(request.total_supply),
        request.max_slippage_bps,
    )
    quote = quote_zap_in(*args, round_up=config.round_up_optimal_swap)
    naive = quote_naive_zap_in(*args)

    logger.debug(
        "zap_in_quoted",
        amount_in=request.amount_in,
        to_swap=quote.to_swap,
        liquidity=quote.liquidity,
        naive_liquidity=naive.liquidity,
    )

    return ZapInQuoteResponse(
        to_swap=str(quote.to_swap),
        swap_amount_out=str(quote.swap_amount_out),
        deposit_in=str(quote.deposit_in),
        deposit_other=str(quote.deposit_other),
        liquidity=str(quote.liquidity),
        min_liquidity=str(quote.min_liquidity),
        dust_in=str(quote.dust_in),
        dust_other=str(quote.dust_other),
        naive_liquidity=str(naive.liquidity),
    )


@router.post("/quote/zap-out")
async def preview_zap_out(request: ZapOutQuoteRequest) -> ZapOutQuoteResponse:
    """Preview the single-token amount returned by a zap-out."""
    quote = quote_zap_out(
        int(request.liquidity),
        int(request.reserve_out),
        int(request.reserve_other),
        int(request.total_supply),
        request.max_slippage_bps,
    )
    return ZapOutQuoteResponse(
        withdrawn_out=str(quote.withdrawn_out),
        withdrawn_other=str(quote.withdrawn_other),
        converted=str(quote.converted),
        amount_out=str(quote.amount_out),
        min_amount_out=str(quote.min_amount_out),
    )


@router.post("/pair-address")
async def derive_pair_address(
    request: PairAddressRequest,
    config: ZapperConfig = Depends(get_config),
) -> PairAddressResponse:
    """CREATE2 address of a pair under the configured factory."""
    token0, token1 = sort_tokens(request.token_a, request.token_b)
    pair = compute_pair_address(config.factory_address, token0, token1, config.init_code_hash)
    return PairAddressResponse(pair=pair, token0=token0, token1=token1, factory=config.factory_address)
