"""Zapper configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from zapper.constants import UNISWAP_V2_FACTORY, UNISWAP_V2_INIT_CODE_HASH
from zapper.models.types import normalize_address

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class ZapperConfig:
    """Centralized configuration for pair resolution and swap sizing.

    Attributes:
        factory_address: Pair registry used for CREATE2 pair derivation
        init_code_hash: keccak256 of the pair creation code (0x-prefixed hex)
        verify_pair_address: If True, compare the registry's pair address with
            the locally derived one and log a warning on mismatch.
        round_up_optimal_swap: If True, round the optimal swap amount up by one
            unit when the closed form truncated.
    """

    factory_address: str = UNISWAP_V2_FACTORY
    init_code_hash: str = UNISWAP_V2_INIT_CODE_HASH
    verify_pair_address: bool = True
    round_up_optimal_swap: bool = False

    def __post_init__(self) -> None:
        normalize_address(self.factory_address, validate=True)
        code_hash = self.init_code_hash.lower()
        if not code_hash.startswith("0x") or len(code_hash) != 66:
            raise ValueError(f"Invalid init code hash: {self.init_code_hash} (must be 0x + 64 hex chars)")
        int(code_hash, 16)

    @classmethod
    def from_env(cls) -> ZapperConfig:
        """Build a config from environment variables.

        - ZAPPER_FACTORY_ADDRESS: pair registry address
        - ZAPPER_INIT_CODE_HASH: pair creation code hash
        - ZAPPER_VERIFY_PAIR_ADDRESS: cross-check pair addresses (default: true)
        - ZAPPER_ROUND_UP_SWAP: round optimal swap up (default: false)
        """
        return cls(
            factory_address=os.environ.get("ZAPPER_FACTORY_ADDRESS", UNISWAP_V2_FACTORY),
            init_code_hash=os.environ.get("ZAPPER_INIT_CODE_HASH", UNISWAP_V2_INIT_CODE_HASH),
            verify_pair_address=os.environ.get("ZAPPER_VERIFY_PAIR_ADDRESS", "true").lower() in _TRUTHY,
            round_up_optimal_swap=os.environ.get("ZAPPER_ROUND_UP_SWAP", "false").lower() in _TRUTHY,
        )


# Default configuration instance
DEFAULT_ZAPPER_CONFIG = ZapperConfig()
