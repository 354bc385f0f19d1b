"""The in-memory market satisfies the collaborator protocols."""

from zapper.amm.interfaces import Pair, PairRegistry, Router, Token


class TestProtocols:
    def test_token(self, weth):
        assert isinstance(weth, Token)

    def test_pair(self, balanced_pool):
        assert isinstance(balanced_pool, Pair)
        assert isinstance(balanced_pool, Token)

    def test_registry(self, market):
        assert isinstance(market.factory, PairRegistry)

    def test_router(self, market):
        assert isinstance(market.router, Router)

    def test_plain_object_is_not_a_router(self):
        assert not isinstance(object(), Router)
