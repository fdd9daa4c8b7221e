"""A single Wave Function Collapse attempt: observe, collapse, propagate."""

import random
import sys
from dataclasses import dataclass, field
from time import time
from typing import TextIO

from tilecollapse.domain import Domain, full_domain, singleton
from tilecollapse.grid import DIRECTIONS, Coord, Grid, translate
from tilecollapse.model import CompatibilityModel, Histogram
from tilecollapse.scheduler import EntropyQueue
from tilecollapse.solver.utils import int_comma, time_str, validate_output

REPORT_INTERVAL = 10_000
"""Default interval (in number of collapsed cells) for reporting progress."""


class Contradiction(Exception):
    """Raised when a cell is left with no possible tile.

    Always local to one attempt: the attempt is abandoned and may be restarted.
    """

    def __init__(self, coord: tuple[int, int], reason: str = "no tile remains possible") -> None:
        self.coord = Coord(*coord)
        super().__init__(f"Unsatisfied constraint encountered at {tuple(self.coord)}: {reason}.")


@dataclass
class GenerationStats:
    """Statistics collected during generation, accumulated across attempts."""

    attempts: int = 0
    """Number of attempts started."""

    contradictions: int = 0
    """Number of attempts abandoned on a contradiction."""

    cells_collapsed: int = 0
    """Number of cells collapsed, over all attempts."""

    domains_shrunk: int = 0
    """Number of times propagation removed tiles from a cell's domain."""

    start_time: float = field(default_factory=time)
    """Timestamp when generation started."""


def propagate(
    model: CompatibilityModel,
    histogram: Histogram,
    generated: Grid[int | None],
    wave: Grid[Domain],
    queue: EntropyQueue,
    origin: tuple[int, int],
) -> int:
    """Shrink the domains around `origin` until they are consistent with it.

    Uses an explicit stack of cells whose domain changed.  For each of them, every
    in-bounds neighbor that is not yet set is intersected with the union of tiles
    compatible with the cell's current domain.  A neighbor whose domain changes is
    re-keyed in `queue` and pushed on the stack; an unchanged neighbor ends that branch.
    Every push follows a strict shrink of some domain, so this terminates.

    Args:
        model: Compatibility rules learned from the example.
        histogram: Tile probabilities, used to recompute entropies.
        generated: Output grid; cells that are not None are never revisited.
        wave: Current domain of every cell.  Modified in-place.
        queue: Scheduler to re-key as domains shrink.  Modified in-place.
        origin: The cell whose domain just changed.

    Returns:
        The number of domains that were shrunk.

    Raises:
        Contradiction: If some domain becomes empty.
    """
    shrunk = 0
    stack: list[Coord] = [Coord(*origin)]
    while stack:
        coord = stack.pop()
        available = wave[coord]
        for direction, step in enumerate(DIRECTIONS):
            neighbor = translate(coord, step)
            if not wave.inside(neighbor) or generated[neighbor] is not None:
                continue
            old_domain = wave[neighbor]
            new_domain = old_domain & model.allowed(direction, available)
            if new_domain == old_domain:
                continue
            if not new_domain.any():
                raise Contradiction(neighbor)
            wave[neighbor] = new_domain
            queue.update(neighbor, histogram.entropy(new_domain))
            stack.append(neighbor)
            shrunk += 1
    return shrunk


def sample_tile(
    histogram: Histogram, domain: Domain, rng: random.Random, coord: tuple[int, int] = (-1, -1)
) -> int:
    """Pick one tile of `domain`, weighted by its probability in the histogram.

    Raises:
        Contradiction: If `domain` is empty.
    """
    tiles, weights = histogram.weights(domain)
    if not tiles:
        raise Contradiction(coord, "nothing left to sample")
    if len(tiles) == 1:
        return tiles[0]
    return rng.choices(tiles, weights=weights, k=1)[0]


def run_attempt(
    model: CompatibilityModel,
    histogram: Histogram,
    width: int,
    height: int,
    *,
    rng: random.Random,
    randomize_ties: bool = False,
    stats: GenerationStats | None = None,
    logf: TextIO | None = None,
    report_interval: int = REPORT_INTERVAL,
) -> Grid[int]:
    """Run one attempt at generating a `height` x `width` grid.

    The wave, the output grid and the scheduler are created here and dropped when the
    attempt ends, whether it succeeds or not.

    Args:
        model: Compatibility rules learned from the example.
        histogram: Tile probabilities learned from the example.
        width: Number of columns of the output.
        height: Number of rows of the output.
        rng: Random generator used for sampling (and tie-breaking, if enabled).
        randomize_ties: Whether the scheduler breaks entropy ties randomly.
        stats: Statistics to update in-place.
        logf: Stream for progress reports.  Defaults to stdout.
        report_interval: Report progress every this many collapsed cells.

    Returns:
        The generated grid, with every cell set to a tile id in [0, K).

    Raises:
        Contradiction: If the attempt reaches a cell with no possible tile.
    """
    logf = logf if logf is not None else sys.stdout
    stats = stats if stats is not None else GenerationStats()
    tile_count = model.tile_count

    wave: Grid[Domain] = Grid(height, width)
    wave.data = [full_domain(tile_count) for _ in range(len(wave))]
    generated: Grid[int | None] = Grid(height, width)

    queue = EntropyQueue(rng if randomize_ties else None)
    initial_entropy = histogram.entropy(full_domain(tile_count))
    for coord in wave.coords():
        queue.update(coord, initial_entropy)

    n_cells = len(wave)
    n_collapsed = 0
    while not queue.is_empty():
        coord = queue.pop_min()
        if generated[coord] is not None:
            continue

        tile = sample_tile(histogram, wave[coord], rng, coord)
        wave[coord] = singleton(tile_count, tile)
        generated[coord] = tile
        n_collapsed += 1
        stats.cells_collapsed += 1

        stats.domains_shrunk += propagate(model, histogram, generated, wave, queue, coord)

        if n_collapsed % report_interval == 0:
            print(
                f"Collapsed {int_comma(n_collapsed)} / {int_comma(n_cells)} cells after "
                f"{time_str(time() - stats.start_time)}; "
                f"{int_comma(queue.stale_entries())} stale queue entries.",
                file=logf,
                flush=True,
            )

    if n_collapsed != n_cells:
        raise RuntimeError(f"Queue drained with {n_cells - n_collapsed} cells left unset.")

    output: Grid[int] = Grid(height, width)
    output.data = list(generated.data)
    if not validate_output(output, model):
        raise RuntimeError("Generated grid violates the adjacency rules of the example.")
    return output
