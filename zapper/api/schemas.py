"""Pydantic request/response models for the zap preview API."""

from pydantic import BaseModel, Field

from zapper.models.types import Address, BasisPoints, Uint256


class OptimalSwapRequest(BaseModel):
    """Size the pre-swap for a single-token deposit."""

    amount_in: Uint256 = Field(alias="amountIn", description="Input token amount.")
    reserve_in: Uint256 = Field(alias="reserveIn", description="Pool reserve of the input token.")
    round_up: bool = Field(default=False, alias="roundUp", description="Round a truncated result up.")

    model_config = {"populate_by_name": True}


class OptimalSwapResponse(BaseModel):
    to_swap: Uint256 = Field(alias="toSwap")
    naive_swap: Uint256 = Field(alias="naiveSwap", description="Half of the input, for comparison.")

    model_config = {"populate_by_name": True}


class ZapInQuoteRequest(BaseModel):
    """Pool state and input for a zap-in preview."""

    amount_in: Uint256 = Field(alias="amountIn")
    reserve_in: Uint256 = Field(alias="reserveIn", description="Pool reserve of the input token.")
    reserve_out: Uint256 = Field(alias="reserveOut", description="Pool reserve of the paired token.")
    total_supply: Uint256 = Field(alias="totalSupply", description="Liquidity units outstanding.")
    max_slippage_bps: BasisPoints = Field(default=50, alias="maxSlippageBps")

    model_config = {"populate_by_name": True}


class ZapInQuoteResponse(BaseModel):
    to_swap: Uint256 = Field(alias="toSwap")
    swap_amount_out: Uint256 = Field(alias="swapAmountOut")
    deposit_in: Uint256 = Field(alias="depositIn")
    deposit_other: Uint256 = Field(alias="depositOther")
    liquidity: Uint256
    min_liquidity: Uint256 = Field(alias="minLiquidity")
    dust_in: Uint256 = Field(alias="dustIn")
    dust_other: Uint256 = Field(alias="dustOther")
    naive_liquidity: Uint256 = Field(
        alias="naiveLiquidity",
        description="Liquidity minted by swapping half of the input instead.",
    )

    model_config = {"populate_by_name": True}


class ZapOutQuoteRequest(BaseModel):
    """Pool state and liquidity for a zap-out preview."""

    liquidity: Uint256
    reserve_out: Uint256 = Field(alias="reserveOut", description="Pool reserve of the output token.")
    reserve_other: Uint256 = Field(alias="reserveOther", description="Pool reserve of the other token.")
    total_supply: Uint256 = Field(alias="totalSupply")
    max_slippage_bps: BasisPoints = Field(default=50, alias="maxSlippageBps")

    model_config = {"populate_by_name": True}


class ZapOutQuoteResponse(BaseModel):
    withdrawn_out: Uint256 = Field(alias="withdrawnOut")
    withdrawn_other: Uint256 = Field(alias="withdrawnOther")
    converted: Uint256
    amount_out: Uint256 = Field(alias="amountOut")
    min_amount_out: Uint256 = Field(alias="minAmountOut")

    model_config = {"populate_by_name": True}


class PairAddressRequest(BaseModel):
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")

    model_config = {"populate_by_name": True}


class PairAddressResponse(BaseModel):
    pair: Address
    token0: Address
    token1: Address
    factory: Address

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    error: str = Field(description="Error class name, e.g. SwapBoundsViolated.")
    message: str
