"""Per-cell tile domains, stored as bit arrays.

Bit `t` of a domain is set if tile `t` is still possible for the cell.  All domains used
together in one run have the same length, the number of distinct tiles K.
"""

from typing import TypeAlias

from bitarray import bitarray, frozenbitarray
from bitarray.util import ones, zeros

Domain: TypeAlias = bitarray
"""A set of tile identities, one bit per identity."""


def full_domain(tile_count: int) -> Domain:
    """A domain in which every one of `tile_count` tiles is possible."""
    return ones(tile_count)


def empty_domain(tile_count: int) -> Domain:
    """A domain with no tile possible."""
    return zeros(tile_count)


def singleton(tile_count: int, tile: int) -> Domain:
    """A domain containing exactly `tile`."""
    if not 0 <= tile < tile_count:
        raise ValueError(f"Tile {tile} out of range for {tile_count} tiles.")
    domain = zeros(tile_count)
    domain[tile] = True
    return domain


def freeze(domain: Domain) -> frozenbitarray:
    """An immutable copy of `domain`."""
    return frozenbitarray(domain)


def members(domain: Domain) -> list[int]:
    """The tile identities contained in `domain`, in increasing order."""
    return list(domain.search(1))
