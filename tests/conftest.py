"""Shared test fixtures for the tile generator."""

import io
import random

import pytest

from tilecollapse.example import Example, parse_ascii
from tilecollapse.solver.config import config as solver_config


@pytest.fixture
def rng() -> random.Random:
    """A seeded random generator."""
    return random.Random(1234)


@pytest.fixture
def logf() -> io.StringIO:
    """A stream capturing progress output."""
    return io.StringIO()


@pytest.fixture
def checkerboard() -> Example:
    """2x2 checkerboard: every tile must be surrounded by the other tile."""
    return parse_ascii("2 2\nAB\nBA\n")


@pytest.fixture
def uniform() -> Example:
    """2x2 example made of a single tile."""
    return parse_ascii("2 2\nAA\nAA\n")


@pytest.fixture
def single_cell() -> Example:
    """1x1 example: no adjacency is ever observed."""
    return parse_ascii("1 1\nA\n")


@pytest.fixture
def permissive() -> Example:
    """3x3 example in which both tiles are seen next to both tiles in every direction."""
    return parse_ascii("3 3\nAAB\nABB\nBBA\n")


@pytest.fixture
def dead_end() -> Example:
    """1x2 example 'AB': nothing may follow B, and nothing may be stacked vertically."""
    return parse_ascii("1 2\nAB\n")


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    """Keep log files written by `run()` inside the test's temporary directory."""
    path = tmp_path / "logs"
    monkeypatch.setattr(solver_config, "log_dir", str(path))
    return path
