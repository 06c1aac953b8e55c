"""Configuration model for trace preprocessing.

NOISE MODEL:
============

Raw GPS traces contain three kinds of noise the later heuristics are
sensitive to:

1. SPIKES: isolated fixes far from their neighbours. Removed with a local
   outlier factor (LOF) over the ``k`` nearest neighbours in coordinate
   space. A score above the threshold means the fix sits in a sparser
   neighbourhood than its neighbours do.
2. IRREGULAR SAMPLING: sampling rates vary between devices. Densification
   inserts great-circle points so consecutive fixes are never farther apart
   than a fixed spacing, which keeps distance-based thresholds comparable.
3. REPEATED FIXES: consecutive identical coordinates (stationary device).
   Only the first is kept.
"""

from pydantic import BaseModel, Field

OUTLIER_NEIGHBOURS = 3
OUTLIER_THRESHOLD = 1.0
DENSIFY_SPACING_M = 10.0
# Stricter variant for simplification-sensitive callers, and the finest spacing accepted
FINE_DENSIFY_SPACING_M = 0.1


class PreprocessingConfig(BaseModel):
    """Configuration for raw trace cleaning.

    Attributes:
        remove_outliers: Whether to run the LOF outlier filter
        outlier_neighbours: Number of nearest neighbours used by LOF
        outlier_threshold: Fixes with a LOF score above this are dropped
        densify_spacing_m: Maximum spacing between consecutive fixes after
            densification, in meters, at least FINE_DENSIFY_SPACING_M. None
            disables densification.
    """

    remove_outliers: bool = Field(
        default=True,
        description="Whether to drop GPS spikes with the local outlier factor",
    )

    outlier_neighbours: int = Field(
        default=OUTLIER_NEIGHBOURS,
        ge=1,
        description="Number of nearest neighbours used to score each fix",
    )

    outlier_threshold: float = Field(
        default=OUTLIER_THRESHOLD,
        gt=0,
        description="Fixes whose local outlier factor exceeds this are dropped",
    )

    densify_spacing_m: float | None = Field(
        default=DENSIFY_SPACING_M,
        ge=FINE_DENSIFY_SPACING_M,
        description=(
            "Maximum great-circle spacing between consecutive fixes in meters. "
            "None disables densification."
        ),
    )
