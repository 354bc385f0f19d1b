"""ERC20 token with an optional fixed fee on transfer."""

from __future__ import annotations

from typing import Any

from zapper.constants import BPS_DENOMINATOR, UINT256_MAX
from zapper.models.types import normalize_address
from zapper.sim.chain import Chain, SimContract
from zapper.sim.errors import InsufficientAllowance, InsufficientBalance


class SimToken(SimContract):
    """Fungible token.

    With transfer_fee_bps > 0, every transfer burns that share of the
    amount, so the recipient is credited less than the nominal amount.
    Maximum allowances are never decremented.
    """

    def __init__(
        self,
        chain: Chain,
        address: str,
        symbol: str,
        decimals: int = 18,
        transfer_fee_bps: int = 0,
    ) -> None:
        if not 0 <= transfer_fee_bps < BPS_DENOMINATOR:
            raise ValueError(f"transfer_fee_bps must be in [0, {BPS_DENOMINATOR}): {transfer_fee_bps}")
        super().__init__(chain, address)
        self.symbol = symbol
        self.decimals = decimals
        self.transfer_fee_bps = transfer_fee_bps
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0

    def __repr__(self) -> str:
        return f"SimToken({self.symbol}, {self.address})"

    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def approve(self, sender: str, spender: str, amount: int) -> bool:
        self._allowances[(normalize_address(sender), normalize_address(spender))] = amount
        return True

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        self._transfer(sender, recipient, amount)
        return True

    def transfer_from(self, sender: str, owner: str, recipient: str, amount: int) -> bool:
        key = (normalize_address(owner), normalize_address(sender))
        allowed = self._allowances.get(key, 0)
        if allowed < amount:
            raise InsufficientAllowance(f"{self.symbol}: allowance {allowed} < {amount}")
        if allowed != UINT256_MAX:
            self._allowances[key] = allowed - amount
        self._transfer(owner, recipient, amount)
        return True

    def issue(self, to: str, amount: int) -> None:
        """Create amount new units for to."""
        to_norm = normalize_address(to)
        self._balances[to_norm] = self._balances.get(to_norm, 0) + amount
        self._total_supply += amount

    def destroy(self, holder: str, amount: int) -> None:
        """Destroy amount units held by holder."""
        holder_norm = normalize_address(holder)
        balance = self._balances.get(holder_norm, 0)
        if balance < amount:
            raise InsufficientBalance(f"{self.symbol}: balance {balance} < {amount}")
        self._balances[holder_norm] = balance - amount
        self._total_supply -= amount

    def transfer_fee(self, amount: int) -> int:
        """Units burned when transferring amount."""
        return amount * self.transfer_fee_bps // BPS_DENOMINATOR

    def _transfer(self, sender: str, recipient: str, amount: int) -> None:
        sender_norm = normalize_address(sender)
        recipient_norm = normalize_address(recipient)
        balance = self._balances.get(sender_norm, 0)
        if balance < amount:
            raise InsufficientBalance(f"{self.symbol}: balance {balance} < {amount}")

        fee = self.transfer_fee(amount)
        self._balances[sender_norm] = balance - amount
        self._balances[recipient_norm] = self._balances.get(recipient_norm, 0) + amount - fee
        self._total_supply -= fee

    def snapshot(self) -> Any:
        return dict(self._balances), dict(self._allowances), self._total_supply

    def restore(self, state: Any) -> None:
        balances, allowances, total_supply = state
        self._balances = dict(balances)
        self._allowances = dict(allowances)
        self._total_supply = total_supply
