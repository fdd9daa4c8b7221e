"""Tile statistics and adjacency rules learned from an example grid.

Both structures are built once per generation and never modified afterwards.
"""

import math
from collections.abc import Sequence

import numpy as np
from bitarray import frozenbitarray

from tilecollapse.domain import Domain, empty_domain, freeze
from tilecollapse.grid import DIRECTIONS, Grid

HISTOGRAM_TOLERANCE = 1e-9
"""Allowed deviation of the histogram total from 1."""


class Histogram:
    """Probability of each tile, derived from its frequency in the example."""

    def __init__(self, probabilities: Sequence[float]) -> None:
        probs = tuple(float(p) for p in probabilities)
        if not probs:
            raise ValueError("Histogram must contain at least one tile.")
        if any(not p > 0 for p in probs):
            raise ValueError("Histogram probabilities must be strictly positive.")
        if abs(math.fsum(probs) - 1.0) > HISTOGRAM_TOLERANCE:
            raise ValueError(f"Histogram probabilities sum to {math.fsum(probs)}, expected 1.")

        self.probabilities: tuple[float, ...] = probs
        """Probability of tile `t` at index `t`."""

        # -p ln p for each tile, summed over a domain's members to get its entropy.
        self._entropy_terms: tuple[float, ...] = tuple(-p * math.log(p) for p in probs)

    @classmethod
    def from_counts(cls, counts: Sequence[int]) -> "Histogram":
        """Normalize raw tile counts into a histogram."""
        total = sum(counts)
        if total <= 0:
            raise ValueError("Tile counts must sum to a positive number.")
        return cls([count / total for count in counts])

    @classmethod
    def from_grid(cls, grid: Grid[int], tile_count: int) -> "Histogram":
        """Tile frequencies of `grid`, whose cells hold ids in [0, tile_count)."""
        counts = np.bincount(np.asarray(grid.data, dtype=np.int64), minlength=tile_count)
        if len(counts) > tile_count:
            raise ValueError(f"Grid contains tile ids outside [0, {tile_count}).")
        return cls.from_counts(counts.tolist())

    def __len__(self) -> int:
        return len(self.probabilities)

    def __getitem__(self, tile: int) -> float:
        return self.probabilities[tile]

    def __repr__(self) -> str:
        return f"Histogram({list(self.probabilities)})"

    def entropy(self, domain: Domain) -> float:
        """Shannon entropy of `domain` under the global tile probabilities.

        The probabilities are not re-normalized to the domain.  An empty domain has no
        meaningful entropy and is rejected.

        Raises:
            ValueError: If `domain` is empty.
        """
        if not domain.any():
            raise ValueError("Entropy of an empty domain is undefined.")
        terms = self._entropy_terms
        return math.fsum(terms[t] for t in domain.search(1))

    def weights(self, domain: Domain) -> tuple[list[int], list[float]]:
        """Members of `domain` with their sampling weights."""
        tiles = list(domain.search(1))
        return tiles, [self.probabilities[t] for t in tiles]


class CompatibilityModel:
    """For each direction and tile, the set of tiles observed next to it in the example.

    Directions are indexed as in `tilecollapse.grid.DIRECTIONS`.  If tiles `t` and `u`
    are adjacent in direction `d` anywhere in the example, then `u` is in
    `compatible(d, t)` (and `t` is in `compatible(opposite(d), u)`).
    """

    def __init__(self, example: Grid[int], tile_count: int) -> None:
        if tile_count <= 0:
            raise ValueError("Tile count must be positive.")
        self.tile_count: int = tile_count
        """Number of distinct tiles K."""

        for pos, tile in example.items():
            if not 0 <= tile < tile_count:
                raise ValueError(f"Tile id {tile} at {tuple(pos)} outside [0, {tile_count}).")

        table = [[empty_domain(tile_count) for _ in range(tile_count)] for _ in DIRECTIONS]
        for pos, tile in example.items():
            for direction, neighbor in example.neighbors(pos):
                table[direction][tile][example[neighbor]] = True

        self._table: tuple[tuple[frozenbitarray, ...], ...] = tuple(
            tuple(freeze(bits) for bits in row) for row in table
        )

    def compatible(self, direction: int, tile: int) -> frozenbitarray:
        """Tiles allowed next to `tile` in `direction`."""
        return self._table[direction][tile]

    def allowed(self, direction: int, domain: Domain) -> Domain:
        """Union of `compatible(direction, t)` over every tile `t` in `domain`."""
        mask = empty_domain(self.tile_count)
        row = self._table[direction]
        for tile in domain.search(1):
            mask |= row[tile]
        return mask
