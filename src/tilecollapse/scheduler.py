"""Minimum-entropy cell selection."""

import heapq
import random

from tilecollapse.grid import Coord


class EntropyQueue:
    """Min-priority queue of cells keyed by entropy, with lazy invalidation.

    Every `update()` pushes a new heap entry and makes it the coordinate's current
    version; older entries for the same coordinate stay in the heap and are skipped when
    popped.  Each live coordinate has exactly one current entry.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        """Create an empty queue.

        Args:
            rng: If given, ties in entropy are broken by a random value drawn from `rng`
                for each entry, rather than by insertion order alone.
        """
        self._heap: list[tuple[float, float, int, Coord]] = []
        self._version: dict[Coord, int] = {}
        self._seq: int = 0
        self._rng = rng

    def __len__(self) -> int:
        """Number of live coordinates."""
        return len(self._version)

    def is_empty(self) -> bool:
        return not self._version

    def update(self, coord: tuple[int, int], entropy: float) -> None:
        """Insert `coord`, or replace its priority with `entropy`."""
        coord = Coord(*coord)
        self._seq += 1
        tiebreak = self._rng.random() if self._rng is not None else 0.0
        self._version[coord] = self._seq
        heapq.heappush(self._heap, (entropy, tiebreak, self._seq, coord))

    def pop_min(self) -> Coord:
        """Remove and return the live coordinate with the smallest entropy.

        Raises:
            IndexError: If no live coordinate remains.
        """
        while self._heap:
            _, _, seq, coord = heapq.heappop(self._heap)
            if self._version.get(coord) != seq:
                continue  # Superseded
            del self._version[coord]
            return coord
        raise IndexError("pop_min from an empty EntropyQueue.")

    def stale_entries(self) -> int:
        """Number of superseded entries still held in the heap."""
        return len(self._heap) - len(self._version)
