"""Tests for the Fréchet-based confidence score."""

import math

import numpy as np
import pytest

from journey_canon.core.exceptions import TraceStageError
from journey_canon.models.trace import CleanedTrace, SimplifiedTrace
from processing.confidence import ConfidenceConfig, confidence_score, discrete_frechet_distance
from processing.confidence.frechet import euclidean_matrix, haversine_matrix
from processing.simplification import simplify
from tests.fixtures import (
    LYON,
    REFERENCE_CONFIDENCE,
    create_trace,
    driver_trace,
    passenger_trace,
)
from utils.helpers import haversine_m

FIXED = ConfidenceConfig(normalization="fixed")


def _lyon_trace() -> SimplifiedTrace:
    return create_trace(
        [("a", LYON.lon, LYON.lat, 0), ("b", LYON.lon + 0.01, LYON.lat, 1204)],
        trace_id="passenger-trace",
        owner_user_id="passenger-1",
        stage=SimplifiedTrace,
    )


class TestDiscreteFrechet:
    """Test the coupling distance."""

    def test_parallel_lines(self):
        """Test parallel polylines one unit apart."""
        p = np.array([[0.0, 0.0], [1.0, 0.0], [2.0, 0.0]])
        q = np.array([[0.0, 1.0], [1.0, 1.0], [2.0, 1.0]])
        assert discrete_frechet_distance(euclidean_matrix(p, q)) == pytest.approx(1.0)

    def test_unequal_lengths(self):
        """Test curves with different vertex counts."""
        p = np.array([[0.0, 0.0], [1.0, 0.0], [2.0, 0.0]])
        q = np.array([[0.0, 1.0], [2.0, 1.0]])
        assert discrete_frechet_distance(euclidean_matrix(p, q)) == pytest.approx(math.sqrt(2))

    def test_reversed_direction(self):
        """Test direction matters: a reversed curve is far from the original."""
        p = np.array([[0.0, 0.0], [4.0, 0.0]])
        q = p[::-1]
        assert discrete_frechet_distance(euclidean_matrix(p, q)) == pytest.approx(4.0)

    def test_identical(self):
        """Test a curve is at distance zero from itself."""
        p = np.array([[0.0, 0.0], [1.0, 2.0], [3.0, 1.0]])
        assert discrete_frechet_distance(euclidean_matrix(p, p)) == 0.0

    def test_empty_curve(self):
        """Test empty curves are rejected."""
        with pytest.raises(ValueError, match="at least one point"):
            discrete_frechet_distance(np.empty((0, 3)))

    def test_haversine_matrix(self):
        """Test pointwise haversine distances."""
        p = np.array([[0.0, 0.0], [0.0, 1.0]])
        q = np.array([[0.0, 1.0]])
        matrix = haversine_matrix(p, q)
        assert matrix.shape == (2, 1)
        assert matrix[0, 0] == pytest.approx(haversine_m(0.0, 0.0, 0.0, 1.0))
        assert matrix[1, 0] == pytest.approx(0.0)


class TestConfidenceScore:
    """Test normalization of the Fréchet distance into a score."""

    def test_reference_fixed_normalization(self):
        """Test the reference journey under the fixed normalization."""
        score = confidence_score(simplify(driver_trace()), simplify(passenger_trace()), FIXED)
        assert score == pytest.approx(REFERENCE_CONFIDENCE, rel=1e-9)

    def test_reference_bbox_normalization(self):
        """Test the reference journey under the default normalization."""
        score = confidence_score(
            driver_trace(stage=SimplifiedTrace), passenger_trace(stage=SimplifiedTrace)
        )
        assert 0.9 < score < 1.0

    def test_self_similarity(self):
        """Test a trace scores 1.0 against itself."""
        trace = driver_trace(stage=SimplifiedTrace)
        assert confidence_score(trace, trace) == pytest.approx(1.0)
        assert confidence_score(trace, trace, FIXED) == pytest.approx(1.0)

    def test_divergent_traces_fixed(self):
        """Test traces farther apart than the fixed scale score zero."""
        score = confidence_score(driver_trace(stage=SimplifiedTrace), _lyon_trace(), FIXED)
        assert score == 0.0

    def test_reversed_trace_bbox(self):
        """Test a trace against its reverse scores about zero."""
        driver = create_trace(
            [("a", 2.3, 48.8, 0), ("b", 2.4, 48.9, 10)], stage=SimplifiedTrace
        )
        reverse = create_trace(
            [("c", 2.4, 48.9, 0), ("d", 2.3, 48.8, 10)],
            trace_id="passenger-trace",
            owner_user_id="passenger-1",
            stage=SimplifiedTrace,
        )
        assert confidence_score(driver, reverse) == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize("normalization", ["bbox_diagonal", "fixed"])
    def test_score_in_range(self, normalization):
        """Test scores stay within [0, 1]."""
        config = ConfidenceConfig(normalization=normalization)
        driver = driver_trace(stage=SimplifiedTrace)
        for other in (passenger_trace(stage=SimplifiedTrace), _lyon_trace(), driver):
            assert 0.0 <= confidence_score(driver, other, config) <= 1.0

    def test_degenerate_scale(self):
        """Test a zero-size bounding box scores 1.0 for coincident traces."""
        point = create_trace([("a", 2.3, 48.8, 0)], stage=SimplifiedTrace)
        assert confidence_score(point, point) == 1.0

    def test_requires_simplified_traces(self):
        """Test cleaned traces are rejected."""
        with pytest.raises(TraceStageError):
            confidence_score(
                driver_trace(stage=CleanedTrace), passenger_trace(stage=SimplifiedTrace)
            )

    def test_fixed_scale_configurable(self):
        """Test a larger fixed scale raises the score."""
        driver = driver_trace(stage=SimplifiedTrace)
        passenger = passenger_trace(stage=SimplifiedTrace)
        wide = ConfidenceConfig(normalization="fixed", fixed_scale_deg=1.0)
        assert confidence_score(driver, passenger, wide) > confidence_score(
            driver, passenger, FIXED
        )
