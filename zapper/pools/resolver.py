"""Pair address resolution.

Pairs live at CREATE2 addresses determined by the factory, the sorted
token pair and the pair creation code. The registry lookup is
authoritative; the local derivation needs no external call and is used as
a consistency check.
"""

from __future__ import annotations

import structlog
from eth_abi.packed import encode_packed
from eth_utils import keccak

from zapper.amm.interfaces import PairRegistry
from zapper.config import DEFAULT_ZAPPER_CONFIG, ZapperConfig
from zapper.constants import ZERO_ADDRESS
from zapper.errors import PairNotFound
from zapper.models.types import is_valid_address, normalize_address

logger = structlog.get_logger()


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Order two token addresses the way pairs store them (by address bytes).

    Raises:
        ValueError: If the tokens are identical or either is the zero address
    """
    a = normalize_address(token_a, validate=True)
    b = normalize_address(token_b, validate=True)
    if a == b:
        raise ValueError(f"Identical token addresses: {token_a}")
    token0, token1 = (a, b) if bytes.fromhex(a[2:]) < bytes.fromhex(b[2:]) else (b, a)
    if token0 == ZERO_ADDRESS:
        raise ValueError("Zero address is not a token")
    return token0, token1


def compute_pair_address(factory: str, token_a: str, token_b: str, init_code_hash: str) -> str:
    """CREATE2 address of the token_a/token_b pair.

    address = keccak256(0xff ++ factory ++ keccak256(token0 ++ token1) ++ init_code_hash)[12:]
    """
    token0, token1 = sort_tokens(token_a, token_b)
    factory_bytes = bytes.fromhex(normalize_address(factory)[2:])
    code_hash = bytes.fromhex(init_code_hash[2:])

    salt = keccak(encode_packed(["address", "address"], [bytes.fromhex(token0[2:]), bytes.fromhex(token1[2:])]))
    digest = keccak(
        encode_packed(
            ["bytes1", "address", "bytes32", "bytes32"],
            [b"\xff", factory_bytes, salt, code_hash],
        )
    )
    return "0x" + digest[12:].hex()


class PairAddressResolver:
    """Locate the pool for a token pair.

    Args:
        registry: Pair registry queried for live lookups
        config: Supplies the factory address and init code hash for
            derivation, and whether live results are cross-checked
    """

    def __init__(self, registry: PairRegistry, config: ZapperConfig = DEFAULT_ZAPPER_CONFIG) -> None:
        self._registry = registry
        self._config = config

    def resolve_live(self, token_a: str, token_b: str) -> str:
        """Registry lookup; returns the zero address when no pool exists."""
        address = self._registry.get_pair(token_a, token_b)
        if not address or not is_valid_address(address):
            return ZERO_ADDRESS
        return normalize_address(address)

    def derive_deterministic(self, token_a: str, token_b: str) -> str:
        """Pure local derivation of the pair address."""
        return compute_pair_address(
            self._config.factory_address,
            token_a,
            token_b,
            self._config.init_code_hash,
        )

    def resolve(self, token_a: str, token_b: str) -> str:
        """Resolve a pool that must exist.

        Raises:
            PairNotFound: If the registry has no pool for the pair
        """
        address = self.resolve_live(token_a, token_b)
        if address == ZERO_ADDRESS:
            raise PairNotFound(f"No pool for {token_a}/{token_b}")

        if self._config.verify_pair_address:
            derived = self.derive_deterministic(token_a, token_b)
            if derived != address:
                logger.warning(
                    "pair_address_mismatch",
                    token_a=token_a,
                    token_b=token_b,
                    live=address,
                    derived=derived,
                )

        return address
