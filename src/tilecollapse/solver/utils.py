"""Utility functions for the tile generator."""

from tilecollapse.grid import DIRECTIONS, Grid, opposite, translate
from tilecollapse.model import CompatibilityModel

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"


def time_str(seconds: float) -> str:
    """Convert a time duration in seconds to a human-readable string.

    Args:
        seconds: Time duration in seconds.

    Returns:
        A string formatted as "HH:MM:SS.ss".
    """
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{int(hours):02}:{int(minutes):02}:{secs:05.2f}"


def int_comma(n: int) -> str:
    """Format an integer with commas as thousands separators."""
    return f"{n:,}"


def validate_output(output: Grid[int | None], model: CompatibilityModel) -> bool:
    """Validate that a generated grid is complete and locally consistent with the example.

    Every cell must hold a tile id in [0, K), and every pair of horizontally or
    vertically adjacent tiles must have been observed adjacent, in the same direction,
    in the example.
    """
    for pos, tile in output.items():
        if tile is None or not 0 <= tile < model.tile_count:
            return False
        # Right and down neighbors cover every adjacent pair once
        for direction in (0, 1):
            neighbor = translate(pos, DIRECTIONS[direction])
            if not output.inside(neighbor):
                continue
            other = output[neighbor]
            if other is None or not 0 <= other < model.tile_count:
                return False
            if not model.compatible(direction, tile)[other]:
                return False
            if not model.compatible(opposite(direction), other)[tile]:
                return False
    return True
