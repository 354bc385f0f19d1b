"""Zap error classes.

Every error aborts the whole zap. None is recovered locally and nothing is
retried: the caller submits a fresh request.
"""


class ZapError(Exception):
    """Base error for zap operations."""

    pass


class ZeroAmount(ZapError):
    """A zero input amount or zero liquidity amount was supplied."""

    pass


class PairNotFound(ZapError):
    """The requested pool does not exist."""

    pass


class SwapBoundsViolated(ZapError):
    """Pre-swap amount is not strictly between zero and the input amount."""

    pass


class InvalidSlippage(ZapError):
    """Slippage tolerance outside [0, 10000] basis points."""

    pass


class SlippageExceeded(ZapError):
    """Liquidity minted or amount out fell below the caller's floor."""

    pass


class UnsupportedInputToken(ZapError):
    """The input token is neither token of the pair."""

    pass


class UnsupportedOutputToken(ZapError):
    """The output token is neither token of the pair."""

    pass


class ExternalCollaboratorFailure(ZapError):
    """A pool, router or token rejected a call (deadline, liquidity, balance)."""

    pass


class ReentrancyViolation(ZapError):
    """An entry point was invoked while another was already in progress."""

    pass
