"""Polyline simplification preserving point identity."""

from .simplify import SIMPLIFY_EPSILON, simplify, simplify_points

__all__ = ["SIMPLIFY_EPSILON", "simplify", "simplify_points"]
