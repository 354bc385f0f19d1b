"""Pool lookup."""

from zapper.pools.resolver import PairAddressResolver, compute_pair_address, sort_tokens

__all__ = [
    "PairAddressResolver",
    "compute_pair_address",
    "sort_tokens",
]
