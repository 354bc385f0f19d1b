"""Constant-product (x * y = k) pool math.

UniswapV2-style pools charge a 0.3% fee on input amounts. The same
formulas are used by the in-memory market, by zap previews and by the
orchestrators' expectations, so they live in one place.
"""

from zapper.constants import FEE_DENOMINATOR, FEE_NUMERATOR, MINIMUM_LIQUIDITY
from zapper.safe_int import S


class ConstantProduct:
    """Constant-product AMM math with a fixed 997/1000 fee factor.

    Formula: amount_out = (amount_in * 997 * reserve_out) / (reserve_in * 1000 + amount_in * 997)
    """

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount for an exact input.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            Output token amount (0 for empty input or reserves)
        """
        if amount_in <= 0:
            return 0
        if reserve_in <= 0 or reserve_out <= 0:
            return 0

        amount_in_with_fee = S(amount_in) * FEE_NUMERATOR
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * FEE_DENOMINATOR + amount_in_with_fee

        return (numerator // denominator).value

    def get_amounts_out(self, amount_in: int, reserves: list[tuple[int, int]]) -> list[int]:
        """Chain get_amount_out across hops.

        Args:
            amount_in: Input amount for the first hop
            reserves: (reserve_in, reserve_out) per hop

        Returns:
            Amounts at each step, starting with amount_in
        """
        amounts = [amount_in]
        for reserve_in, reserve_out in reserves:
            amounts.append(self.get_amount_out(amounts[-1], reserve_in, reserve_out))
        return amounts

    def quote(self, amount_a: int, reserve_a: int, reserve_b: int) -> int:
        """Amount of B worth amount_a of A at the current pool ratio (no fee)."""
        if amount_a <= 0:
            return 0
        return (S(amount_a) * S(reserve_b) // S(reserve_a)).value

    def optimal_deposit(
        self,
        amount_a_desired: int,
        amount_b_desired: int,
        reserve_a: int,
        reserve_b: int,
    ) -> tuple[int, int]:
        """Largest deposit at the pool ratio within the desired amounts.

        An empty pool accepts the desired amounts as they are.
        """
        if reserve_a == 0 and reserve_b == 0:
            return amount_a_desired, amount_b_desired

        amount_b_optimal = self.quote(amount_a_desired, reserve_a, reserve_b)
        if amount_b_optimal <= amount_b_desired:
            return amount_a_desired, amount_b_optimal

        amount_a_optimal = self.quote(amount_b_desired, reserve_b, reserve_a)
        return amount_a_optimal, amount_b_desired

    def liquidity_for_deposit(
        self,
        amount0: int,
        amount1: int,
        reserve0: int,
        reserve1: int,
        total_supply: int,
    ) -> int:
        """Liquidity units minted for a deposit.

        The first deposit mints sqrt(amount0 * amount1) minus the permanently
        locked MINIMUM_LIQUIDITY; later deposits mint in proportion to the
        smaller of the two contributions.
        """
        if total_supply == 0:
            minted = (S(amount0) * S(amount1)).isqrt()
            if minted <= MINIMUM_LIQUIDITY:
                return 0
            return (minted - MINIMUM_LIQUIDITY).value

        liquidity0 = S(amount0) * S(total_supply) // S(reserve0)
        liquidity1 = S(amount1) * S(total_supply) // S(reserve1)
        return liquidity0.min(liquidity1).value

    def amounts_for_burn(
        self,
        liquidity: int,
        reserve0: int,
        reserve1: int,
        total_supply: int,
    ) -> tuple[int, int]:
        """Amounts of both tokens returned for burning liquidity units."""
        amount0 = S(liquidity) * S(reserve0) // S(total_supply)
        amount1 = S(liquidity) * S(reserve1) // S(total_supply)
        return amount0.value, amount1.value


# Singleton instance
constant_product = ConstantProduct()


__all__ = [
    "ConstantProduct",
    "constant_product",
]
