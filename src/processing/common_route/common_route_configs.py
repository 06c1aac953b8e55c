"""Configuration model for common route extraction.

ALGORITHM DESIGN NOTES:
========================

The common route is the part of the trip both traces travelled together.
Extraction works on the time-ordered merge of both traces:

1. WINDOW: the last fix overall belongs to one trace (A). Walking back,
   the latest fix of the other trace (B) lying within ``proximity_radius_m``
   of any fix of A marks the last moment the two were together. Everything
   after it is dropped.

2. SEGMENTS: the window is split into homogeneous runs (one owner) and mixed
   segments (owners alternating). The common distance is the sum of their
   haversine lengths. Mixed segments are measured as if the alternating
   fixes formed one path, which over-counts when the devices are apart.

3. REPRESENTATIVE PATH: three filtering passes reduce the window to the
   fixes marking real direction changes:
   - Pass 1 keeps fixes whose turn angle reaches ``turn_angle_deg`` and
     resolves short ownership flickers (``short_hop_m``)
   - Pass 2 slides a ``window_size`` window and keeps wide-span starts or
     the fixes of a dominating owner (``window_size - 2`` occurrences)
   - Pass 3 re-checks each candidate against the last kept fix

All thresholds are heuristics and tunable.
"""

from pydantic import BaseModel, Field

PROXIMITY_RADIUS_M = 1000.0
TURN_ANGLE_DEG = 50.0
SHORT_HOP_M = 250.0
CONSOLIDATION_WINDOW = 5
WINDOW_SPAN_M = 100.0


class CommonRouteConfig(BaseModel):
    """Configuration for common route extraction.

    Attributes:
        proximity_radius_m: Fixes closer than this are considered together
        turn_angle_deg: Minimum heading change for a fix to mark a turn
        short_hop_m: Predecessor-to-successor distance below which an
            ownership flicker is collapsed
        window_size: Size of the consolidation window of pass 2
        window_span_m: End-to-end span above which a consolidation window
            keeps its first fix
    """

    proximity_radius_m: float = Field(
        default=PROXIMITY_RADIUS_M,
        gt=0,
        description="Haversine radius in meters within which two fixes are together",
    )

    turn_angle_deg: float = Field(
        default=TURN_ANGLE_DEG,
        ge=0,
        le=180,
        description="Minimum heading change in degrees for a fix to be kept as a turn",
    )

    short_hop_m: float = Field(
        default=SHORT_HOP_M,
        ge=0,
        description="Maximum hop in meters for collapsing an ownership flicker",
    )

    window_size: int = Field(
        default=CONSOLIDATION_WINDOW,
        ge=3,
        description="Number of fixes in each consolidation window",
    )

    window_span_m: float = Field(
        default=WINDOW_SPAN_M,
        ge=0,
        description="Span in meters above which a window keeps its first fix",
    )

    @property
    def dominance_count(self) -> int:
        """Occurrences needed for one owner to dominate a window."""
        return self.window_size - 2
