"""In-memory market error classes.

These mirror the revert reasons of UniswapV2 pairs, routers and ERC20
tokens. They are collaborator failures from the zapper's point of view.
"""

from zapper.errors import ExternalCollaboratorFailure


class SimulationError(ExternalCollaboratorFailure):
    """Base error for the in-memory market."""

    pass


class Expired(SimulationError):
    """Router call made after its deadline."""

    pass


class InsufficientBalance(SimulationError):
    """Transfer amount exceeds balance."""

    pass


class InsufficientAllowance(SimulationError):
    """Transfer amount exceeds allowance."""

    pass


class InsufficientOutputAmount(SimulationError):
    """Swap output below the requested minimum."""

    pass


class InsufficientInputAmount(SimulationError):
    """Swap called without any input reaching the pair."""

    pass


class InsufficientAmount(SimulationError):
    """Liquidity leg below its requested minimum."""

    pass


class InsufficientLiquidity(SimulationError):
    """Pool reserves cannot cover the requested operation."""

    pass


class InsufficientLiquidityMinted(SimulationError):
    """Deposit would mint no liquidity units."""

    pass


class InsufficientLiquidityBurned(SimulationError):
    """Burn would return nothing for one of the tokens."""

    pass


class KInvariantViolated(SimulationError):
    """Swap would decrease the fee-adjusted constant product."""

    pass


class InvalidPath(SimulationError):
    """Swap path shorter than two tokens or through a missing pair."""

    pass


class UnknownContract(SimulationError):
    """No contract of the requested kind at an address."""

    pass
