"""Constant-product AMM math and collaborator interfaces."""

from zapper.amm.constant_product import ConstantProduct, constant_product
from zapper.amm.interfaces import Pair, PairLookup, PairRegistry, Router, Token, TokenLookup

__all__ = [
    "ConstantProduct",
    "constant_product",
    "Token",
    "Pair",
    "PairRegistry",
    "Router",
    "TokenLookup",
    "PairLookup",
]
