"""In-memory constant-product market.

Everything a zap talks to, simulated: tokens (optionally fee-on-transfer),
pairs, a factory deploying pairs at their CREATE2 addresses, a router, and
a chain providing a clock and transaction rollback. Used to dry-run zaps
and to exercise the orchestrators end to end.

Usage:
    from zapper.sim import deploy_market

    market = deploy_market()
    usdc, weth = market.create_token("USDC"), market.create_token("WETH")
    market.create_pool(usdc, weth, 10**12, 10**12)
    zapper = market.zapper()
"""

from zapper.sim.chain import Chain, SimContract
from zapper.sim.errors import (
    Expired,
    InsufficientAllowance,
    InsufficientAmount,
    InsufficientBalance,
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientLiquidityBurned,
    InsufficientLiquidityMinted,
    InsufficientOutputAmount,
    InvalidPath,
    KInvariantViolated,
    SimulationError,
    UnknownContract,
)
from zapper.sim.factory import SimFactory
from zapper.sim.market import SETUP_DEADLINE, Market, deploy_market
from zapper.sim.pair import SimPair
from zapper.sim.router import SimRouter
from zapper.sim.token import SimToken

__all__ = [
    "Chain",
    "SimContract",
    "SimToken",
    "SimPair",
    "SimFactory",
    "SimRouter",
    "Market",
    "deploy_market",
    "SETUP_DEADLINE",
    # Errors
    "SimulationError",
    "Expired",
    "InsufficientAllowance",
    "InsufficientAmount",
    "InsufficientBalance",
    "InsufficientInputAmount",
    "InsufficientLiquidity",
    "InsufficientLiquidityBurned",
    "InsufficientLiquidityMinted",
    "InsufficientOutputAmount",
    "InvalidPath",
    "KInvariantViolated",
    "UnknownContract",
]
