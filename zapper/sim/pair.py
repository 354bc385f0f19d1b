"""Constant-product pair holding two token reserves.

Like a UniswapV2 pair, mint/burn/swap account by comparing token balances
held by the pair against the last recorded reserves, so fee-on-transfer
tokens are credited with what actually arrived.
"""

from __future__ import annotations

from typing import Any

from zapper.amm.constant_product import constant_product
from zapper.constants import FEE_DENOMINATOR, FEE_NUMERATOR, MINIMUM_LIQUIDITY, ZERO_ADDRESS
from zapper.models.types import normalize_address
from zapper.safe_int import S
from zapper.sim.chain import Chain
from zapper.sim.errors import (
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientLiquidityBurned,
    InsufficientLiquidityMinted,
    InsufficientOutputAmount,
    KInvariantViolated,
)
from zapper.sim.token import SimToken


class SimPair(SimToken):
    """Pool for token0/token1 whose liquidity units are themselves a token."""

    def __init__(self, chain: Chain, address: str, token0: str, token1: str) -> None:
        super().__init__(chain, address, symbol="UNI-V2")
        self.token0 = normalize_address(token0)
        self.token1 = normalize_address(token1)
        self.reserve0 = 0
        self.reserve1 = 0

    def __repr__(self) -> str:
        return f"SimPair({self.token0}/{self.token1}, {self.address})"

    def get_reserves(self) -> tuple[int, int]:
        return self.reserve0, self.reserve1

    def _balances_held(self) -> tuple[int, int]:
        return (
            self.chain.token_at(self.token0).balance_of(self.address),
            self.chain.token_at(self.token1).balance_of(self.address),
        )

    def _update(self, balance0: int, balance1: int) -> None:
        self.reserve0 = balance0
        self.reserve1 = balance1

    def mint(self, to: str) -> int:
        """Mint liquidity for tokens transferred in since the last update.

        Returns:
            Liquidity units minted to ``to``
        """
        balance0, balance1 = self._balances_held()
        amount0 = (S(balance0) - S(self.reserve0)).value
        amount1 = (S(balance1) - S(self.reserve1)).value

        total_supply = self.total_supply()
        liquidity = constant_product.liquidity_for_deposit(
            amount0, amount1, self.reserve0, self.reserve1, total_supply
        )
        if liquidity <= 0:
            raise InsufficientLiquidityMinted(f"Deposit ({amount0}, {amount1}) mints no liquidity")
        if total_supply == 0:
            self.issue(ZERO_ADDRESS, MINIMUM_LIQUIDITY)

        self.issue(to, liquidity)
        self._update(balance0, balance1)
        return liquidity

    def burn(self, to: str) -> tuple[int, int]:
        """Burn the liquidity units held by the pair itself.

        Returns:
            (amount0, amount1) sent to ``to``
        """
        balance0, balance1 = self._balances_held()
        liquidity = self.balance_of(self.address)
        amount0, amount1 = constant_product.amounts_for_burn(liquidity, balance0, balance1, self.total_supply())
        if amount0 == 0 or amount1 == 0:
            raise InsufficientLiquidityBurned(f"Burning {liquidity} returns ({amount0}, {amount1})")

        self.destroy(self.address, liquidity)
        self.chain.token_at(self.token0).transfer(self.address, to, amount0)
        self.chain.token_at(self.token1).transfer(self.address, to, amount1)
        self._update(*self._balances_held())
        return amount0, amount1

    def swap(self, amount0_out: int, amount1_out: int, to: str) -> None:
        """Send out the requested amounts, then check the fee-adjusted invariant."""
        if amount0_out == 0 and amount1_out == 0:
            raise InsufficientOutputAmount("Swap must output something")
        if amount0_out >= self.reserve0 or amount1_out >= self.reserve1:
            raise InsufficientLiquidity(
                f"Outputs ({amount0_out}, {amount1_out}) exceed reserves ({self.reserve0}, {self.reserve1})"
            )

        if amount0_out > 0:
            self.chain.token_at(self.token0).transfer(self.address, to, amount0_out)
        if amount1_out > 0:
            self.chain.token_at(self.token1).transfer(self.address, to, amount1_out)

        balance0, balance1 = self._balances_held()
        amount0_in = max(0, balance0 - (self.reserve0 - amount0_out))
        amount1_in = max(0, balance1 - (self.reserve1 - amount1_out))
        if amount0_in == 0 and amount1_in == 0:
            raise InsufficientInputAmount("Swap received no input")

        fee = FEE_DENOMINATOR - FEE_NUMERATOR
        adjusted0 = S(balance0) * FEE_DENOMINATOR - S(amount0_in) * fee
        adjusted1 = S(balance1) * FEE_DENOMINATOR - S(amount1_in) * fee
        if adjusted0 * adjusted1 < S(self.reserve0) * S(self.reserve1) * (FEE_DENOMINATOR**2):
            raise KInvariantViolated("Swap would decrease k")

        self._update(balance0, balance1)

    def snapshot(self) -> Any:
        return super().snapshot(), self.reserve0, self.reserve1

    def restore(self, state: Any) -> None:
        token_state, self.reserve0, self.reserve1 = state
        super().restore(token_state)
