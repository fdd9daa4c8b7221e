"""Solver: single attempts, propagation and the restart controller."""
