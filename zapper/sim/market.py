"""Deploy a complete in-memory market: factory, router and tokens."""

from __future__ import annotations

from dataclasses import dataclass, field

from zapper.config import DEFAULT_ZAPPER_CONFIG, ZapperConfig
from zapper.constants import UINT256_MAX
from zapper.sim.chain import Chain
from zapper.sim.factory import SimFactory
from zapper.sim.pair import SimPair
from zapper.sim.router import SimRouter
from zapper.sim.token import SimToken
from zapper.zapper import EventSink, Zapper

# Far-future deadline for setup transactions
SETUP_DEADLINE = 2**32 - 1


@dataclass
class Market:
    """A factory/router pair on a chain, plus helpers to seed pools."""

    chain: Chain
    factory: SimFactory
    router: SimRouter
    config: ZapperConfig = field(default=DEFAULT_ZAPPER_CONFIG)

    def create_token(self, symbol: str, transfer_fee_bps: int = 0, decimals: int = 18) -> SimToken:
        return SimToken(
            self.chain,
            self.chain.new_address(symbol),
            symbol=symbol,
            decimals=decimals,
            transfer_fee_bps=transfer_fee_bps,
        )

    def create_pool(
        self,
        token_a: SimToken,
        token_b: SimToken,
        amount_a: int,
        amount_b: int,
        provider: str | None = None,
    ) -> SimPair:
        """Create the token_a/token_b pair and seed it through the router."""
        provider = provider or self.chain.new_address("provider")
        token_a.issue(provider, amount_a)
        token_b.issue(provider, amount_b)
        token_a.approve(provider, self.router.address, UINT256_MAX)
        token_b.approve(provider, self.router.address, UINT256_MAX)
        self.router.add_liquidity(
            provider,
            token_a.address,
            token_b.address,
            amount_a,
            amount_b,
            0,
            0,
            provider,
            SETUP_DEADLINE,
        )
        return self.chain.pair_at(self.factory.get_pair(token_a.address, token_b.address))

    def zapper(self, event_sink: EventSink | None = None) -> Zapper:
        """A Zapper wired to this market with its own custody address."""
        return Zapper(
            address=self.chain.new_address("zapper"),
            router=self.router,
            registry=self.factory,
            token_at=self.chain.token_at,
            pair_at=self.chain.pair_at,
            config=self.config,
            event_sink=event_sink,
        )


def deploy_market(chain: Chain | None = None, config: ZapperConfig = DEFAULT_ZAPPER_CONFIG) -> Market:
    """Deploy a factory at config.factory_address and a router for it."""
    chain = chain or Chain()
    factory = SimFactory(chain, config.factory_address, init_code_hash=config.init_code_hash)
    router = SimRouter(chain, chain.new_address("router"), factory)
    return Market(chain=chain, factory=factory, router=router, config=config)
