"""Main generator module: runs attempts and restarts them on contradiction."""

import random
import sys
from datetime import datetime
from pathlib import Path
from pprint import pprint
from time import time
from typing import Any, Final, TextIO

from tilecollapse.example import Example, load_ascii, load_image
from tilecollapse.grid import Grid
from tilecollapse.model import CompatibilityModel, Histogram
from tilecollapse.solver.attempt import Contradiction, GenerationStats, run_attempt
from tilecollapse.solver.config import config as solver_config
from tilecollapse.solver.utils import TIMESTAMP_FMT, int_comma, time_str

__all__ = [
    "AttemptsExhausted",
    "Contradiction",
    "GenerationStats",
    "generate",
    "generate_from_example",
    "run",
]


class _FromConfig:
    """Marker for arguments whose default comes from the generator configuration."""

    def __repr__(self) -> str:
        return "FROM_CONFIG"


FROM_CONFIG: Final = _FromConfig()


class AttemptsExhausted(Exception):
    """Raised when every allowed attempt ended in a contradiction."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"No consistent grid found after {attempts} attempts.")


def generate(
    example_grid: Grid[int],
    tile_count: int,
    histogram: Histogram,
    output_width: int,
    output_height: int,
    *,
    max_attempts: int | None | _FromConfig = FROM_CONFIG,
    rng: random.Random | None = None,
    seed: int | None | _FromConfig = FROM_CONFIG,
    randomize_ties: bool | _FromConfig = FROM_CONFIG,
    report_interval: int | _FromConfig = FROM_CONFIG,
    logf: TextIO | None = None,
    stats: GenerationStats | None = None,
) -> Grid[int]:
    """Generate an `output_height` x `output_width` grid that locally resembles the example.

    The compatibility model is built once and shared by all attempts; each attempt starts
    from a fresh wave.  On a contradiction the attempt is discarded and a new one begins,
    until one succeeds or `max_attempts` attempts have failed.

    Args:
        example_grid: The example, as a grid of tile ids in [0, tile_count).
        tile_count: Number of distinct tiles K.
        histogram: Probability of each tile (K entries).
        output_width: Number of columns of the generated grid.
        output_height: Number of rows of the generated grid.
        max_attempts: Maximum number of attempts; None retries until success.
        rng: Random generator shared by all attempts.  If None, one is created from `seed`.
        seed: Seed for the random generator created when `rng` is None.
        randomize_ties: Whether to break entropy ties randomly.
        report_interval: Report progress every this many collapsed cells.
        logf: Stream for progress reports.  Defaults to stdout.
        stats: Statistics to update in-place.

    Returns:
        The generated grid; every cell holds a tile id in [0, tile_count).

    Raises:
        AttemptsExhausted: If `max_attempts` attempts all ended in a contradiction.
        ValueError: If the inputs are inconsistent.
    """
    if isinstance(max_attempts, _FromConfig):
        max_attempts = solver_config.max_attempts
    if isinstance(seed, _FromConfig):
        seed = solver_config.seed
    if isinstance(randomize_ties, _FromConfig):
        randomize_ties = solver_config.randomize_ties
    if isinstance(report_interval, _FromConfig):
        report_interval = solver_config.report_interval

    if output_width < 1 or output_height < 1:
        raise ValueError(f"Output size must be positive, got {output_height}x{output_width}.")
    if max_attempts is not None and max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1 or None, got {max_attempts}.")
    if len(histogram) != tile_count:
        raise ValueError(
            f"Histogram has {len(histogram)} entries but the example has {tile_count} tiles."
        )

    logf = logf if logf is not None else sys.stdout
    stats = stats if stats is not None else GenerationStats()
    rng = rng if rng is not None else random.Random(seed)

    model = CompatibilityModel(example_grid, tile_count)

    print(
        f"Generating {output_height}x{output_width} grid from a "
        f"{example_grid.n_rows}x{example_grid.n_cols} example with {tile_count} tiles "
        f"(max attempts: {'unbounded' if max_attempts is None else max_attempts}).",
        file=logf,
        flush=True,
    )

    attempt = 0
    last_contradiction: Contradiction | None = None
    while max_attempts is None or attempt < max_attempts:
        attempt += 1
        stats.attempts += 1
        print(f"Attempt {attempt}...", file=logf, flush=True)
        try:
            output = run_attempt(
                model,
                histogram,
                output_width,
                output_height,
                rng=rng,
                randomize_ties=randomize_ties,
                stats=stats,
                logf=logf,
                report_interval=report_interval,
            )
        except Contradiction as e:
            stats.contradictions += 1
            last_contradiction = e
            print(f"Attempt {attempt}: {e}", file=logf, flush=True)
            continue

        print(f"Attempt {attempt}: success!", file=logf, flush=True)
        print(
            f"Collapsed {int_comma(stats.cells_collapsed)} cells and shrunk "
            f"{int_comma(stats.domains_shrunk)} domains in {time_str(time() - stats.start_time)}.",
            file=logf,
            flush=True,
        )
        return output

    print(f"Giving up after {attempt} attempts.", file=logf, flush=True)
    raise AttemptsExhausted(attempt) from last_contradiction


def generate_from_example(
    example: Example, output_width: int, output_height: int, **kwargs: Any
) -> Grid[int]:
    """Generate a grid from a loaded `Example`.  See `generate()` for keyword arguments."""
    return generate(
        example.grid,
        example.tile_count,
        example.histogram,
        output_width,
        output_height,
        **kwargs,
    )


def run(
    example_path: str | Path,
    output_width: int,
    output_height: int,
    *,
    image: bool = False,
    tile_size: int = 1,
    **kwargs: Any,
) -> tuple[Example, Grid[int]]:
    """Load an example file and generate a grid from it, logging to a per-run log file.

    Args:
        example_path: Path to the example (ASCII text, or an image if `image` is True).
        output_width: Number of columns of the generated grid.
        output_height: Number of rows of the generated grid.
        image: Whether the example is an image to be cut into pixel blocks.
        tile_size: Side length, in pixels, of each image tile.
        **kwargs: Passed on to `generate()`.

    Returns:
        The loaded example (whose palette renders the output) and the generated grid.

    Raises:
        AttemptsExhausted: If no attempt succeeded.
    """
    example_path = Path(example_path)
    example = load_image(example_path, tile_size) if image else load_ascii(example_path)

    logfile = Path(solver_config.log_dir) / example_path.stem / f"{output_height}x{output_width}.log"
    print(f"Log file: {logfile}", file=sys.stderr)
    logfile.parent.mkdir(parents=True, exist_ok=True)

    with open(logfile, "w", encoding="utf-8") as logf:
        start_time_str = datetime.now().astimezone().strftime(TIMESTAMP_FMT)
        print(f"Start time: {start_time_str}", file=logf, flush=True)
        print(f"Example: {example_path.resolve()}", file=logf, flush=True)
        print("Generator config:", file=logf, flush=True)
        pprint(solver_config.model_dump(), stream=logf, width=120)
        print("", file=logf, flush=True)

        kwargs.setdefault("logf", logf)
        output = generate_from_example(example, output_width, output_height, **kwargs)
    return example, output
