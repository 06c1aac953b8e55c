"""Fréchet-based confidence scoring of two simplified traces."""

from .confidence_configs import ConfidenceConfig
from .frechet import confidence_score, discrete_frechet_distance

__all__ = ["ConfidenceConfig", "confidence_score", "discrete_frechet_distance"]
