"""Single-token zaps into and out of constant-product pools."""

from zapper.errors import (
    ExternalCollaboratorFailure,
    InvalidSlippage,
    PairNotFound,
    ReentrancyViolation,
    SlippageExceeded,
    SwapBoundsViolated,
    UnsupportedInputToken,
    UnsupportedOutputToken,
    ZapError,
    ZeroAmount,
)
from zapper.zapper import Zapper

__version__ = "0.1.0"
__all__ = [
    "Zapper",
    "ZapError",
    "ZeroAmount",
    "PairNotFound",
    "SwapBoundsViolated",
    "InvalidSlippage",
    "SlippageExceeded",
    "UnsupportedInputToken",
    "UnsupportedOutputToken",
    "ExternalCollaboratorFailure",
    "ReentrancyViolation",
    "__version__",
]
