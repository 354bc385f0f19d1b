"""Execution environment for the in-memory market.

The chain owns every simulated contract, the block timestamp and the
all-or-nothing semantics of a transaction: ``atomic()`` snapshots all
contract state and restores it if the body raises.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from eth_utils import keccak

from zapper.models.types import normalize_address
from zapper.sim.errors import Expired, UnknownContract

if TYPE_CHECKING:
    from zapper.sim.pair import SimPair
    from zapper.sim.token import SimToken

logger = structlog.get_logger()

T = TypeVar("T")


class SimContract(ABC):
    """A contract living at an address on a Chain."""

    def __init__(self, chain: Chain, address: str) -> None:
        self.chain = chain
        self.address = normalize_address(address, validate=True)
        chain.register(self)

    @abstractmethod
    def snapshot(self) -> Any:
        """Copy of the mutable state."""
        ...

    @abstractmethod
    def restore(self, state: Any) -> None:
        """Reset mutable state to a snapshot."""
        ...


class Chain:
    """Registry of simulated contracts plus a clock.

    Args:
        timestamp: Initial block timestamp (seconds)
    """

    def __init__(self, timestamp: int = 1_700_000_000) -> None:
        self.timestamp = timestamp
        self._contracts: dict[str, SimContract] = {}
        self._address_nonce = 0

    def new_address(self, label: str = "account") -> str:
        """Fresh address derived from a label and a counter."""
        self._address_nonce += 1
        digest = keccak(text=f"{label}:{self._address_nonce}")
        return "0x" + digest[12:].hex()

    def register(self, contract: SimContract) -> None:
        if contract.address in self._contracts:
            raise ValueError(f"Address already in use: {contract.address}")
        self._contracts[contract.address] = contract

    def contract_at(self, address: str) -> SimContract:
        contract = self._contracts.get(normalize_address(address))
        if contract is None:
            raise UnknownContract(f"No contract at {address}")
        return contract

    def token_at(self, address: str) -> SimToken:
        from zapper.sim.token import SimToken

        contract = self.contract_at(address)
        if not isinstance(contract, SimToken):
            raise UnknownContract(f"{address} is not a token")
        return contract

    def pair_at(self, address: str) -> SimPair:
        from zapper.sim.pair import SimPair

        contract = self.contract_at(address)
        if not isinstance(contract, SimPair):
            raise UnknownContract(f"{address} is not a pair")
        return contract

    def advance(self, seconds: int) -> int:
        """Move the clock forward and return the new timestamp."""
        self.timestamp += seconds
        return self.timestamp

    def ensure_deadline(self, deadline: int) -> None:
        """Raises Expired if the current timestamp is past the deadline."""
        if self.timestamp > deadline:
            raise Expired(f"Deadline {deadline} passed (now {self.timestamp})")

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """All-or-nothing scope: contract state is restored if the body raises."""
        saved = {address: contract.snapshot() for address, contract in self._contracts.items()}
        registered = set(self._contracts)
        try:
            yield
        except BaseException as err:
            for address in set(self._contracts) - registered:
                del self._contracts[address]
            for address, state in saved.items():
                self._contracts[address].restore(state)
            logger.debug("transaction_reverted", error=type(err).__name__)
            raise

    def transact(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Call fn inside atomic()."""
        with self.atomic():
            return fn(*args, **kwargs)
