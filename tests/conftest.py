"""Pytest configuration and fixtures."""

import pytest

from tests.helpers import USDC, WETH, make_token
from zapper.models.zap import ZapEvent
from zapper.sim import Market, SimPair, SimToken, deploy_market
from zapper.zapper import Zapper

# Pool seeded with 1,000,000 units of each token
BALANCED_RESERVE = 1_000_000

# Pool seeded with 1000 tokens of 18 decimals each side
DEEP_RESERVE = 1000 * 10**18


@pytest.fixture
def market() -> Market:
    """A fresh market with its factory at the mainnet factory address."""
    return deploy_market()


@pytest.fixture
def weth(market: Market) -> SimToken:
    return make_token(market, "WETH", address=WETH)


@pytest.fixture
def usdc(market: Market) -> SimToken:
    return make_token(market, "USDC", address=USDC)


@pytest.fixture
def balanced_pool(market: Market, weth: SimToken, usdc: SimToken) -> SimPair:
    """WETH/USDC pool with 1,000,000 units of each."""
    return market.create_pool(weth, usdc, BALANCED_RESERVE, BALANCED_RESERVE)


@pytest.fixture
def deep_pool(market: Market, weth: SimToken, usdc: SimToken) -> SimPair:
    """WETH/USDC pool with 1000e18 units of each."""
    return market.create_pool(weth, usdc, DEEP_RESERVE, DEEP_RESERVE)


@pytest.fixture
def events() -> list[ZapEvent]:
    """Collects events emitted by the zapper fixture."""
    return []


@pytest.fixture
def zapper(market: Market, events: list[ZapEvent]) -> Zapper:
    """A zapper wired to the market, recording events."""
    return market.zapper(event_sink=events.append)
