"""Raw GPS trace cleaning.

Removes GPS spikes, normalizes point density and drops repeated fixes,
turning a raw trace into a cleaned one.
"""

from .preprocess import densify_trace, preprocess
from .preprocessing_configs import FINE_DENSIFY_SPACING_M, PreprocessingConfig

__all__ = [
    "FINE_DENSIFY_SPACING_M",
    "PreprocessingConfig",
    "densify_trace",
    "preprocess",
]
