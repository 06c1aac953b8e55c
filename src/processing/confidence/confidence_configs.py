"""Configuration model for confidence scoring.

The score is ``1 - clamp(frechet / scale, 0, 1)``. Two normalizations are
supported:

- ``bbox_diagonal``: Fréchet distance in meters (haversine pointwise),
  scaled by the haversine diagonal of the bounding box of both traces.
  Scale-invariant across short and long trips.
- ``fixed``: Fréchet distance in coordinate degrees (Euclidean pointwise),
  scaled by a fixed number of degrees. Kept for comparison with scores
  produced by earlier deployments.
"""

from typing import Literal

from pydantic import BaseModel, Field

FIXED_SCALE_DEG = 0.1


class ConfidenceConfig(BaseModel):
    """Configuration for the Fréchet-based confidence score.

    Attributes:
        normalization: How the Fréchet distance is scaled into [0, 1]
        fixed_scale_deg: Scale of the ``fixed`` normalization, in degrees
    """

    normalization: Literal["bbox_diagonal", "fixed"] = Field(
        default="bbox_diagonal",
        description="Normalization scale: bounding-box diagonal or fixed degrees",
    )

    fixed_scale_deg: float = Field(
        default=FIXED_SCALE_DEG,
        gt=0,
        description="Scale in coordinate degrees for the fixed normalization",
    )
