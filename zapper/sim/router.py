"""Router with UniswapV2 Router02 semantics over the in-memory pairs."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from zapper.amm.constant_product import constant_product
from zapper.constants import ZERO_ADDRESS
from zapper.models.types import normalize_address
from zapper.pools.resolver import sort_tokens
from zapper.safe_int import S
from zapper.sim.chain import Chain, SimContract
from zapper.sim.errors import InsufficientAmount, InsufficientLiquidity, InsufficientOutputAmount, InvalidPath
from zapper.sim.factory import SimFactory
from zapper.sim.pair import SimPair


class SimRouter(SimContract):
    """Swaps and liquidity operations with deadline and minimum-amount checks.

    The router holds no state of its own; tokens move between the caller,
    the pairs and the recipient.
    """

    def __init__(self, chain: Chain, address: str, factory: SimFactory) -> None:
        super().__init__(chain, address)
        self.factory = factory

    # --- Lookups ---

    def _pair_for(self, token_a: str, token_b: str) -> SimPair:
        address = self.factory.get_pair(token_a, token_b)
        if address == ZERO_ADDRESS:
            raise InvalidPath(f"No pair for {token_a}/{token_b}")
        return self.chain.pair_at(address)

    def _reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        """Reserves ordered as (reserve_a, reserve_b)."""
        pair = self._pair_for(token_a, token_b)
        reserve0, reserve1 = pair.get_reserves()
        if normalize_address(token_a) == pair.token0:
            return reserve0, reserve1
        return reserve1, reserve0

    def get_amounts_out(self, amount_in: int, path: Sequence[str]) -> list[int]:
        if len(path) < 2:
            raise InvalidPath(f"Path too short: {list(path)}")
        hops = []
        for token_in, token_out in zip(path, path[1:]):
            reserve_in, reserve_out = self._reserves(token_in, token_out)
            if reserve_in == 0 or reserve_out == 0:
                raise InsufficientLiquidity(f"Empty pool for {token_in}/{token_out}")
            hops.append((reserve_in, reserve_out))
        return constant_product.get_amounts_out(amount_in, hops)

    # --- Liquidity ---

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
        self.chain.ensure_deadline(deadline)
        if self.factory.get_pair(token_a, token_b) == ZERO_ADDRESS:
            self.factory.create_pair(token_a, token_b)

        reserve_a, reserve_b = self._reserves(token_a, token_b)
        amount_a, amount_b = constant_product.optimal_deposit(
            amount_a_desired, amount_b_desired, reserve_a, reserve_b
        )
        if amount_a < amount_a_min:
            raise InsufficientAmount(f"Token A amount {amount_a} below minimum {amount_a_min}")
        if amount_b < amount_b_min:
            raise InsufficientAmount(f"Token B amount {amount_b} below minimum {amount_b_min}")

        pair = self._pair_for(token_a, token_b)
        self.chain.token_at(token_a).transfer_from(self.address, sender, pair.address, amount_a)
        self.chain.token_at(token_b).transfer_from(self.address, sender, pair.address, amount_b)
        liquidity = pair.mint(to)
        return amount_a, amount_b, liquidity

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
        self.chain.ensure_deadline(deadline)
        pair = self._pair_for(token_a, token_b)
        pair.transfer_from(self.address, sender, pair.address, liquidity)
        amount0, amount1 = pair.burn(to)

        if normalize_address(token_a) == pair.token0:
            amount_a, amount_b = amount0, amount1
        else:
            amount_a, amount_b = amount1, amount0
        if amount_a < amount_a_min:
            raise InsufficientAmount(f"Token A amount {amount_a} below minimum {amount_a_min}")
        if amount_b < amount_b_min:
            raise InsufficientAmount(f"Token B amount {amount_b} below minimum {amount_b_min}")
        return amount_a, amount_b

    # --- Swaps ---

    def swap_exact_tokens_for_tokens(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        self.chain.ensure_deadline(deadline)
        amounts = self.get_amounts_out(amount_in, path)
        if amounts[-1] < amount_out_min:
            raise InsufficientOutputAmount(f"Output {amounts[-1]} below minimum {amount_out_min}")

        first_pair = self._pair_for(path[0], path[1])
        self.chain.token_at(path[0]).transfer_from(self.address, sender, first_pair.address, amount_in)
        self._swap(amounts, path, to)
        return amounts

    def swap_exact_tokens_for_tokens_supporting_fee_on_transfer_tokens(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> None:
        self.chain.ensure_deadline(deadline)
        if len(path) < 2:
            raise InvalidPath(f"Path too short: {list(path)}")

        first_pair = self._pair_for(path[0], path[1])
        self.chain.token_at(path[0]).transfer_from(self.address, sender, first_pair.address, amount_in)

        token_out = self.chain.token_at(path[-1])
        balance_before = token_out.balance_of(to)
        self._swap_supporting_fee_on_transfer(path, to)
        received = (S(token_out.balance_of(to)) - S(balance_before)).value
        if received < amount_out_min:
            raise InsufficientOutputAmount(f"Output {received} below minimum {amount_out_min}")

    def _hop_recipient(self, path: Sequence[str], index: int, to: str) -> str:
        """Next pair along the path, or the final recipient on the last hop."""
        if index < len(path) - 2:
            return self._pair_for(path[index + 1], path[index + 2]).address
        return to

    def _swap(self, amounts: list[int], path: Sequence[str], to: str) -> None:
        for i, (token_in, token_out) in enumerate(zip(path, path[1:])):
            token0, _ = sort_tokens(token_in, token_out)
            amount_out = amounts[i + 1]
            if normalize_address(token_in) == token0:
                amount0_out, amount1_out = 0, amount_out
            else:
                amount0_out, amount1_out = amount_out, 0
            pair = self._pair_for(token_in, token_out)
            pair.swap(amount0_out, amount1_out, self._hop_recipient(path, i, to))

    def _swap_supporting_fee_on_transfer(self, path: Sequence[str], to: str) -> None:
        for i, (token_in, token_out) in enumerate(zip(path, path[1:])):
            pair = self._pair_for(token_in, token_out)
            reserve_in, reserve_out = self._reserves(token_in, token_out)
            amount_input = (S(self.chain.token_at(token_in).balance_of(pair.address)) - S(reserve_in)).value
            amount_output = constant_product.get_amount_out(amount_input, reserve_in, reserve_out)
            if normalize_address(token_in) == pair.token0:
                amount0_out, amount1_out = 0, amount_output
            else:
                amount0_out, amount1_out = amount_output, 0
            pair.swap(amount0_out, amount1_out, self._hop_recipient(path, i, to))

    def snapshot(self) -> Any:
        return None

    def restore(self, state: Any) -> None:
        pass
