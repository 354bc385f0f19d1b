"""Tests for the in-memory market."""

import pytest

from tests.helpers import ALICE, BOB, DEADLINE, USDC, WETH, WETH_USDC_PAIR, fund
from zapper.constants import MINIMUM_LIQUIDITY, UINT256_MAX, ZERO_ADDRESS
from zapper.sim import (
    Chain,
    Expired,
    InsufficientAllowance,
    InsufficientAmount,
    InsufficientBalance,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InvalidPath,
    KInvariantViolated,
    SimToken,
    UnknownContract,
)


class TestChain:
    """Tests for Chain bookkeeping and atomic()."""

    def test_new_addresses_are_unique(self):
        chain = Chain()
        assert chain.new_address("x") != chain.new_address("x")

    def test_duplicate_registration_raises(self, market):
        SimToken(market.chain, WETH, symbol="WETH")
        with pytest.raises(ValueError, match="already in use"):
            SimToken(market.chain, WETH, symbol="WETH2")

    def test_lookup_of_wrong_kind_raises(self, market, weth):
        with pytest.raises(UnknownContract):
            market.chain.pair_at(weth.address)
        with pytest.raises(UnknownContract):
            market.chain.token_at("0x" + "99" * 20)

    def test_deadline(self):
        chain = Chain(timestamp=100)
        chain.ensure_deadline(100)
        with pytest.raises(Expired):
            chain.ensure_deadline(99)
        assert chain.advance(5) == 105

    def test_atomic_restores_state_on_error(self, market, weth):
        weth.issue(ALICE, 1_000)

        with pytest.raises(RuntimeError):
            with market.chain.atomic():
                weth.transfer(ALICE, BOB, 400)
                weth.approve(ALICE, BOB, 5)
                raise RuntimeError("revert")

        assert weth.balance_of(ALICE) == 1_000
        assert weth.balance_of(BOB) == 0
        assert weth.allowance(ALICE, BOB) == 0

    def test_atomic_removes_contracts_created_inside(self, market):
        with pytest.raises(RuntimeError):
            with market.chain.atomic():
                token = market.create_token("TMP")
                raise RuntimeError("revert")

        with pytest.raises(UnknownContract):
            market.chain.token_at(token.address)

    def test_transact_commits_on_success(self, market, weth):
        weth.issue(ALICE, 10)
        assert market.chain.transact(weth.transfer, ALICE, BOB, 10) is True
        assert weth.balance_of(BOB) == 10


class TestSimToken:
    """Tests for SimToken transfers."""

    def test_transfer_moves_balance(self, weth):
        weth.issue(ALICE, 100)
        weth.transfer(ALICE, BOB, 60)
        assert (weth.balance_of(ALICE), weth.balance_of(BOB)) == (40, 60)
        assert weth.total_supply() == 100

    def test_transfer_over_balance_raises(self, weth):
        with pytest.raises(InsufficientBalance):
            weth.transfer(ALICE, BOB, 1)

    def test_transfer_from_spends_allowance(self, weth):
        weth.issue(ALICE, 100)
        weth.approve(ALICE, BOB, 70)
        weth.transfer_from(BOB, ALICE, BOB, 50)
        assert weth.allowance(ALICE, BOB) == 20
        with pytest.raises(InsufficientAllowance):
            weth.transfer_from(BOB, ALICE, BOB, 21)

    def test_max_allowance_not_decremented(self, weth):
        fund(weth, ALICE, 100, spender=BOB)
        weth.transfer_from(BOB, ALICE, BOB, 100)
        assert weth.allowance(ALICE, BOB) == UINT256_MAX

    def test_addresses_case_insensitive(self, weth):
        weth.issue(ALICE.upper().replace("0X", "0x"), 5)
        assert weth.balance_of(ALICE) == 5

    def test_transfer_fee_burned(self, market):
        token = market.create_token("FEE", transfer_fee_bps=200)
        token.issue(ALICE, 1_000)
        token.transfer(ALICE, BOB, 1_000)
        assert token.balance_of(BOB) == 980
        assert token.total_supply() == 980

    def test_invalid_fee_raises(self, market):
        with pytest.raises(ValueError):
            market.create_token("BAD", transfer_fee_bps=10_000)


class TestSimFactoryAndPair:
    """Tests for pair creation, minting and burning."""

    def test_pair_deployed_at_mainnet_address(self, market, balanced_pool):
        assert balanced_pool.address == WETH_USDC_PAIR
        assert market.factory.get_pair(WETH, USDC) == WETH_USDC_PAIR
        assert market.factory.get_pair(USDC, WETH) == WETH_USDC_PAIR
        assert market.factory.all_pairs() == [WETH_USDC_PAIR]

    def test_missing_pair_is_zero_address(self, market):
        assert market.factory.get_pair(WETH, USDC) == ZERO_ADDRESS
        assert market.factory.get_pair(WETH, WETH) == ZERO_ADDRESS

    def test_create_existing_pair_raises(self, market, balanced_pool):
        with pytest.raises(ValueError, match="Pair exists"):
            market.factory.create_pair(USDC, WETH)

    def test_first_mint_locks_minimum_liquidity(self, balanced_pool):
        assert balanced_pool.token0 == USDC
        assert balanced_pool.token1 == WETH
        assert balanced_pool.get_reserves() == (1_000_000, 1_000_000)
        assert balanced_pool.total_supply() == 1_000_000
        assert balanced_pool.balance_of(ZERO_ADDRESS) == MINIMUM_LIQUIDITY

    def test_burn_returns_proportional_amounts(self, market, weth, usdc, balanced_pool):
        provider = market.chain.new_address("lp")
        fund(weth, provider, 10_000, spender=market.router.address)
        fund(usdc, provider, 10_000, spender=market.router.address)
        used_a, used_b, liquidity = market.router.add_liquidity(
            provider, WETH, USDC, 10_000, 10_000, 0, 0, provider, DEADLINE
        )
        assert (used_a, used_b, liquidity) == (10_000, 10_000, 10_000)

        balanced_pool.approve(provider, market.router.address, liquidity)
        amounts = market.router.remove_liquidity(provider, WETH, USDC, liquidity, 0, 0, provider, DEADLINE)

        assert amounts == (10_000, 10_000)
        assert balanced_pool.get_reserves() == (1_000_000, 1_000_000)

    def test_swap_rejects_k_decrease(self, weth, balanced_pool):
        weth.issue(balanced_pool.address, 1_000)
        with pytest.raises(KInvariantViolated):
            balanced_pool.swap(1_000, 0, ALICE)

    def test_swap_over_reserve_raises(self, balanced_pool):
        with pytest.raises(InsufficientLiquidity):
            balanced_pool.swap(1_000_000, 0, ALICE)


class TestSimRouter:
    """Tests for router swaps and liquidity operations."""

    def test_get_amounts_out(self, market, balanced_pool):
        assert market.router.get_amounts_out(4_995, [WETH, USDC]) == [4_995, 4_955]

    def test_get_amounts_out_missing_pair_raises(self, market, weth, usdc):
        with pytest.raises(InvalidPath):
            market.router.get_amounts_out(1_000, [WETH, USDC])

    def test_get_amounts_out_empty_pool_raises(self, market, weth, usdc):
        market.factory.create_pair(WETH, USDC)
        with pytest.raises(InsufficientLiquidity):
            market.router.get_amounts_out(1_000, [WETH, USDC])

    def test_swap_exact_tokens(self, market, weth, usdc, balanced_pool):
        fund(weth, ALICE, 4_995, spender=market.router.address)

        amounts = market.router.swap_exact_tokens_for_tokens(ALICE, 4_995, 4_955, [WETH, USDC], ALICE, DEADLINE)

        assert amounts == [4_995, 4_955]
        assert usdc.balance_of(ALICE) == 4_955
        assert balanced_pool.get_reserves() == (995_045, 1_004_995)

    def test_swap_below_minimum_raises(self, market, weth, balanced_pool):
        fund(weth, ALICE, 4_995, spender=market.router.address)
        with pytest.raises(InsufficientOutputAmount):
            market.router.swap_exact_tokens_for_tokens(ALICE, 4_995, 4_956, [WETH, USDC], ALICE, DEADLINE)

    def test_swap_after_deadline_raises(self, market, weth, balanced_pool):
        fund(weth, ALICE, 4_995, spender=market.router.address)
        with pytest.raises(Expired):
            market.router.swap_exact_tokens_for_tokens(
                ALICE, 4_995, 0, [WETH, USDC], ALICE, market.chain.timestamp - 1
            )

    def test_supporting_fee_variant_measures_received(self, market, weth):
        taxed = market.create_token("FEE", transfer_fee_bps=100)
        market.create_pool(weth, taxed, 10**21, 10**21)
        fund(weth, ALICE, 10**18, spender=market.router.address)

        quoted = market.router.get_amounts_out(10**18, [WETH, taxed.address])[-1]
        market.router.swap_exact_tokens_for_tokens_supporting_fee_on_transfer_tokens(
            ALICE, 10**18, 0, [WETH, taxed.address], ALICE, DEADLINE
        )

        assert taxed.balance_of(ALICE) == quoted - taxed.transfer_fee(quoted)

    def test_add_liquidity_minimum_enforced(self, market, weth, usdc, balanced_pool):
        fund(weth, ALICE, 10_000, spender=market.router.address)
        fund(usdc, ALICE, 5_000, spender=market.router.address)
        with pytest.raises(InsufficientAmount):
            market.router.add_liquidity(ALICE, WETH, USDC, 10_000, 5_000, 10_000, 0, ALICE, DEADLINE)
