"""Test helpers module for shared test utilities.

- constants: Token addresses, accounts and deadlines
- factories: Market, token and funding helpers
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    DAI,
    DEADLINE,
    USDC,
    USDT,
    WETH,
    WETH_DAI_PAIR,
    WETH_USDC_PAIR,
)
from tests.helpers.factories import balances, fund, make_token

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "WETH_USDC_PAIR",
    "WETH_DAI_PAIR",
    "ALICE",
    "BOB",
    "DEADLINE",
    # Factories
    "make_token",
    "fund",
    "balances",
]
