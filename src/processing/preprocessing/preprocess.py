"""Raw trace cleaning: outlier removal, densification and de-duplication.

Each step takes and returns a polars frame of fixes with the columns of
``POINT_SCHEMA``; ``preprocess`` wires them together and converts back to a
``CleanedTrace``. No step mutates its input.
"""

import logging
import math

import numpy as np
import polars as pl
from scipy.spatial import cKDTree

from journey_canon.codebook.failures import FailureReason, TraceRole
from journey_canon.core.exceptions import JourneyValidationError
from journey_canon.models.journey import MIN_TRACE_POINTS
from journey_canon.models.point import Point
from journey_canon.models.trace import CleanedTrace, RawTrace, require_stage
from utils.helpers import expr_haversine, intermediate_point

from .preprocessing_configs import PreprocessingConfig

logger = logging.getLogger(__name__)

POINT_SCHEMA = {
    "id": pl.String,
    "longitude": pl.Float64,
    "latitude": pl.Float64,
    "timestamp": pl.Datetime("us", "UTC"),
    "interpolated": pl.Boolean,
}


def preprocess(
    trace: RawTrace,
    config: PreprocessingConfig | None = None,
    role: TraceRole = TraceRole.DRIVER,
    *,
    densified: bool = True,
) -> CleanedTrace:
    """Clean a raw trace.

    Args:
        trace: Trace exactly as received
        config: Preprocessing parameters, defaults when None
        role: Role of the trace in the journey, used in failure details
        densified: Whether to densify. The validator passes False and
            densifies with ``densify_trace`` before simplification.

    Returns:
        Cleaned trace keeping the identity of every retained fix

    Raises:
        JourneyValidationError: EmptyTrace(role) when fewer than two fixes
            survive cleaning
    """
    require_stage(trace, RawTrace)
    config = config or PreprocessingConfig()

    frame = trace_to_frame(trace)
    n_raw = frame.height

    if config.remove_outliers:
        frame = remove_outliers(frame, config.outlier_neighbours, config.outlier_threshold)
    n_inliers = frame.height

    if densified and config.densify_spacing_m is not None:
        frame = densify(frame, config.densify_spacing_m)

    frame = drop_consecutive_duplicates(frame)

    logger.debug(
        "Preprocessed %s trace %s: %d raw, %d inliers, %d cleaned fixes",
        role.label,
        trace.id,
        n_raw,
        n_inliers,
        frame.height,
    )

    if frame.height < MIN_TRACE_POINTS:
        raise JourneyValidationError(FailureReason.EMPTY_TRACE, role.label)

    return CleanedTrace.from_points(trace, frame_to_points(frame, trace.id))


def densify_trace(trace: CleanedTrace, spacing_m: float | None) -> CleanedTrace:
    """Densify an already cleaned trace. None returns it unchanged."""
    require_stage(trace, CleanedTrace)
    if spacing_m is None:
        return trace

    frame = drop_consecutive_duplicates(densify(trace_to_frame(trace), spacing_m))
    logger.debug("Densified trace %s: %d -> %d fixes", trace.id, len(trace), frame.height)
    return CleanedTrace.from_points(trace, frame_to_points(frame, trace.id))


# Frame conversion -------------------------------------------------------------
def trace_to_frame(trace: RawTrace | CleanedTrace) -> pl.DataFrame:
    """Build a frame of fixes in trace order."""
    return pl.DataFrame(
        {
            "id": [p.id for p in trace],
            "longitude": [p.longitude for p in trace],
            "latitude": [p.latitude for p in trace],
            "timestamp": [p.timestamp for p in trace],
            "interpolated": [p.interpolated for p in trace],
        },
        schema=POINT_SCHEMA,
    )


def frame_to_points(frame: pl.DataFrame, trace_id: str) -> list[Point]:
    return [
        Point(
            id=row["id"],
            longitude=row["longitude"],
            latitude=row["latitude"],
            timestamp=row["timestamp"],
            trace_id=trace_id,
            interpolated=row["interpolated"],
        )
        for row in frame.iter_rows(named=True)
    ]


# Outlier removal --------------------------------------------------------------
def local_outlier_factor(coords: np.ndarray, k: int) -> np.ndarray:
    """Local outlier factor of each coordinate over its k nearest neighbours.

    Scores near 1.0 mean the fix is as dense as its neighbourhood; larger
    scores mean it is isolated. A set with ``k`` or fewer coordinates scores
    1.0 everywhere, and so does any fix whose density is undefined because
    its neighbourhood is coincident.

    Args:
        coords: Array of shape (n, 2) with longitude/latitude columns
        k: Number of neighbours

    Returns:
        Array of n scores
    """
    n = len(coords)
    if n <= k:
        return np.ones(n)

    tree = cKDTree(coords)
    distances, indices = tree.query(coords, k=k + 1)

    # Drop each point from its own neighbour list. With duplicates the point
    # itself may not be returned, in which case the farthest one is dropped.
    neighbours = np.empty((n, k), dtype=np.int64)
    neighbour_dist = np.empty((n, k))
    for i in range(n):
        keep = indices[i] != i
        neighbours[i] = indices[i][keep][:k]
        neighbour_dist[i] = distances[i][keep][:k]

    k_distance = neighbour_dist[:, -1]
    reach_dist = np.maximum(k_distance[neighbours], neighbour_dist)

    with np.errstate(divide="ignore", invalid="ignore"):
        lrd = 1.0 / reach_dist.mean(axis=1)
        scores = lrd[neighbours].mean(axis=1) / lrd

    return np.where(np.isfinite(scores), scores, 1.0)


def remove_outliers(frame: pl.DataFrame, k: int, threshold: float) -> pl.DataFrame:
    """Drop fixes whose local outlier factor exceeds ``threshold``."""
    coords = frame.select("longitude", "latitude").to_numpy()
    scores = local_outlier_factor(coords, k)

    kept = frame.filter(pl.Series(scores <= threshold))
    if kept.height < frame.height:
        logger.debug("Dropped %d outlier fix(es)", frame.height - kept.height)
    return kept


# Densification ----------------------------------------------------------------
def densify(frame: pl.DataFrame, spacing_m: float) -> pl.DataFrame:
    """Insert great-circle points so no consecutive pair is farther than spacing_m.

    A segment of length d is split into ceil(d / spacing_m) equal parts.
    Inserted fixes get the id ``"<source id>+<n>"``, a timestamp linearly
    interpolated between the segment ends and ``interpolated=True``.
    """
    if frame.height < 2:  # noqa: PLR2004
        return frame

    segments = frame.with_columns(
        expr_haversine(
            pl.col("latitude"),
            pl.col("longitude"),
            pl.col("latitude").shift(-1),
            pl.col("longitude").shift(-1),
        ).alias("segment_m")
    )

    rows = list(segments.iter_rows(named=True))
    dense: list[dict] = []
    for current, following in zip(rows, rows[1:] + [None], strict=True):
        dense.append({key: current[key] for key in POINT_SCHEMA})
        if following is None:
            continue

        n_parts = math.ceil(current["segment_m"] / spacing_m)
        for i in range(1, n_parts):
            fraction = i / n_parts
            lon, lat = intermediate_point(
                current["longitude"],
                current["latitude"],
                following["longitude"],
                following["latitude"],
                fraction,
            )
            elapsed = following["timestamp"] - current["timestamp"]
            dense.append(
                {
                    "id": f"{current['id']}+{i}",
                    "longitude": lon,
                    "latitude": lat,
                    "timestamp": current["timestamp"] + elapsed * fraction,
                    "interpolated": True,
                }
            )

    return pl.DataFrame(dense, schema=POINT_SCHEMA)


# De-duplication ---------------------------------------------------------------
def drop_consecutive_duplicates(frame: pl.DataFrame) -> pl.DataFrame:
    """Drop fixes repeating the coordinates of the preceding fix."""
    repeated = (
        (pl.col("longitude") == pl.col("longitude").shift(1))
        & (pl.col("latitude") == pl.col("latitude").shift(1))
    ).fill_null(False)
    return frame.filter(~repeated)
