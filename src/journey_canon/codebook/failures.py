"""Codebook of journey validation failure reasons.

Labels are the user-facing messages. Labels containing ``{detail}`` are
templates filled with the role ("driver"/"passenger"), the edge
("start"/"end") or the distance bound ("short"/"long").
"""

from journey_canon.core.labeled_enum import LabeledEnum


class FailureReason(LabeledEnum):
    """Reasons a journey is rejected."""

    # Input-shape failures
    MISSING_START_TIME = (1, "Missing startTime")
    MISSING_END_TIME = (2, "Missing endTime")
    MISSING_DRIVER = (3, "Missing driver")
    MISSING_PASSENGER = (4, "Missing passenger")
    INVALID_PASSENGER = (5, "Driver is passenger")
    MISSING_TRACE = (6, "Missing {detail} trace")
    EMPTY_TRACE = (7, "Empty trace {detail}")

    # Plausibility failures
    TIMESTAMPS_DELTA_TOO_BIG = (10, "{detail} points timestamps are too far apart")
    NOT_IN_FRANCE = (11, "Not in France")
    NO_COMMON_POINTS = (12, "No common points between traces")
    INVALID_DISTANCE = (13, "Common distance is too {detail}")

    def message(self, detail: str | None = None) -> str:
        """Render the label, substituting ``detail`` where the label expects one."""
        if "{detail}" in self.label:
            return self.label.format(detail=detail or "")
        return self.label


class TraceRole(LabeledEnum):
    """Role of a trace within a journey."""

    DRIVER = (1, "driver")
    PASSENGER = (2, "passenger")


class Edge(LabeledEnum):
    """Edge of a trace compared between driver and passenger."""

    START = (1, "start")
    END = (2, "end")


class DistanceBound(LabeledEnum):
    """Bound violated by the common distance."""

    SHORT = (1, "short")
    LONG = (2, "long")
