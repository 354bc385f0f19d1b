"""Protocol constants for the zapper.

Centralizes well-known addresses and the fixed fee parameters the
optimal-swap formula is derived for.
"""

from zapper.models.types import is_valid_address

UINT256_MAX = 2**256 - 1

# Null address returned by the pair registry for pools that do not exist
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Basis point denominator (10000 bps = 100%)
BPS_DENOMINATOR = 10_000

# Constant-product fee: 0.3% of the input amount, expressed per mille
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000

# Liquidity permanently locked by the first deposit into a pair
MINIMUM_LIQUIDITY = 1000


def _validate_address(name: str, address: str) -> str:
    """Validate and return a well-known address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# UniswapV2 factory on mainnet (lowercase for consistency)
UNISWAP_V2_FACTORY = _validate_address("UniswapV2Factory", "0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f")

# keccak256 of the UniswapV2Pair creation code, used for CREATE2 derivation
UNISWAP_V2_INIT_CODE_HASH = "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f"
