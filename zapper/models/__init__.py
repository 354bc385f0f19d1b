"""Zap data models."""

from zapper.models.types import (
    Address,
    BasisPoints,
    Uint256,
    is_valid_address,
    normalize_address,
    same_address,
)
from zapper.models.zap import (
    LiquidityPlan,
    SwapPlan,
    ZapEvent,
    ZapInEvent,
    ZapInRequest,
    ZapOutEvent,
    ZapOutRequest,
)

__all__ = [
    "Address",
    "BasisPoints",
    "Uint256",
    "is_valid_address",
    "normalize_address",
    "same_address",
    "ZapInRequest",
    "ZapOutRequest",
    "SwapPlan",
    "LiquidityPlan",
    "ZapInEvent",
    "ZapOutEvent",
    "ZapEvent",
]
