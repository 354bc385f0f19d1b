"""Pair registry deploying pairs at their CREATE2 addresses."""

from __future__ import annotations

from typing import Any

import structlog

from zapper.constants import UNISWAP_V2_INIT_CODE_HASH, ZERO_ADDRESS
from zapper.pools.resolver import compute_pair_address, sort_tokens
from zapper.sim.chain import Chain, SimContract
from zapper.sim.pair import SimPair

logger = structlog.get_logger()


class SimFactory(SimContract):
    """Creates and indexes pairs.

    Pair addresses are derived exactly as PairAddressResolver derives them,
    so a factory deployed at the mainnet factory address reproduces mainnet
    pair addresses.
    """

    def __init__(self, chain: Chain, address: str, init_code_hash: str = UNISWAP_V2_INIT_CODE_HASH) -> None:
        super().__init__(chain, address)
        self.init_code_hash = init_code_hash
        self._pairs: dict[tuple[str, str], str] = {}

    def get_pair(self, token_a: str, token_b: str) -> str:
        """Pair address, or the zero address if the pair does not exist."""
        try:
            key = sort_tokens(token_a, token_b)
        except ValueError:
            return ZERO_ADDRESS
        return self._pairs.get(key, ZERO_ADDRESS)

    def all_pairs(self) -> list[str]:
        return list(self._pairs.values())

    def create_pair(self, token_a: str, token_b: str) -> SimPair:
        """Deploy the pair for token_a/token_b.

        Raises:
            ValueError: If the pair exists or the tokens are invalid
        """
        token0, token1 = sort_tokens(token_a, token_b)
        if (token0, token1) in self._pairs:
            raise ValueError(f"Pair exists: {token0}/{token1}")

        address = compute_pair_address(self.address, token0, token1, self.init_code_hash)
        pair = SimPair(self.chain, address, token0, token1)
        self._pairs[(token0, token1)] = pair.address
        logger.debug("pair_created", token0=token0, token1=token1, pair=pair.address)
        return pair

    def snapshot(self) -> Any:
        return dict(self._pairs)

    def restore(self, state: Any) -> None:
        self._pairs = dict(state)
