"""Discrete Fréchet distance and the confidence score derived from it."""

import logging

import numpy as np

from journey_canon.models.trace import SimplifiedTrace, require_stage
from utils.helpers import bbox_diagonal_m, haversine_to_many

from .confidence_configs import ConfidenceConfig

logger = logging.getLogger(__name__)


def euclidean_matrix(p: np.ndarray, q: np.ndarray) -> np.ndarray:
    """Pairwise Euclidean distances between two (n, 2) coordinate arrays."""
    return np.hypot(p[:, None, 0] - q[None, :, 0], p[:, None, 1] - q[None, :, 1])


def haversine_matrix(p: np.ndarray, q: np.ndarray) -> np.ndarray:
    """Pairwise haversine distances in meters between two lon/lat arrays."""
    return np.vstack([haversine_to_many(lon, lat, q[:, 0], q[:, 1]) for lon, lat in p])


def discrete_frechet_distance(distances: np.ndarray) -> float:
    """Discrete Fréchet distance from a pairwise distance matrix.

    Dynamic programme over the coupling matrix: each cell holds the smallest
    achievable maximum distance of a monotone coupling ending there.
    """
    n, m = distances.shape
    if n == 0 or m == 0:
        msg = "Curves must have at least one point each."
        raise ValueError(msg)

    coupling = np.empty((n, m))
    coupling[:, 0] = np.maximum.accumulate(distances[:, 0])
    coupling[0, :] = np.maximum.accumulate(distances[0, :])
    for i in range(1, n):
        for j in range(1, m):
            coupling[i, j] = max(
                min(coupling[i - 1, j], coupling[i - 1, j - 1], coupling[i, j - 1]),
                distances[i, j],
            )
    return float(coupling[-1, -1])


def confidence_score(
    driver: SimplifiedTrace,
    passenger: SimplifiedTrace,
    config: ConfidenceConfig | None = None,
) -> float:
    """Similarity of two simplified traces in [0, 1].

    1.0 means the paths are indistinguishable at simplification resolution,
    0.0 means they diverge by at least the normalization scale.
    """
    require_stage(driver, SimplifiedTrace)
    require_stage(passenger, SimplifiedTrace)
    config = config or ConfidenceConfig()

    p = np.array(driver.coords(), dtype=float).reshape(-1, 2)
    q = np.array(passenger.coords(), dtype=float).reshape(-1, 2)

    if config.normalization == "fixed":
        distance = discrete_frechet_distance(euclidean_matrix(p, q))
        scale = config.fixed_scale_deg
    else:
        distance = discrete_frechet_distance(haversine_matrix(p, q))
        scale = bbox_diagonal_m(driver.coords() + passenger.coords())

    if scale == 0:
        score = 1.0 if distance == 0 else 0.0
    else:
        score = 1.0 - float(np.clip(distance / scale, 0.0, 1.0))

    logger.debug(
        "Confidence (%s): frechet=%.6f scale=%.6f score=%.4f",
        config.normalization,
        distance,
        scale,
        score,
    )
    return score
