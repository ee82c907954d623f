"""Tests for link functions."""

import math

import numpy as np
import pytest

from xgb_scorer.links import LogisticLink, sigmoid


class TestSigmoid:
    """Tests for the logistic sigmoid."""

    def test_zero(self) -> None:
        """Test sigmoid(0) is exactly one half."""
        assert sigmoid(0.0) == 0.5

    def test_open_interval(self) -> None:
        """Test outputs stay strictly between 0 and 1 for moderate inputs."""
        for x in np.linspace(-30.0, 30.0, 121):
            p = sigmoid(float(x))
            assert 0.0 < p < 1.0

    def test_strictly_increasing(self) -> None:
        """Test sigmoid is strictly increasing."""
        xs = np.linspace(-20.0, 20.0, 401)
        ps = [sigmoid(float(x)) for x in xs]
        assert all(a < b for a, b in zip(ps, ps[1:]))

    def test_matches_definition(self) -> None:
        """Test agreement with 1 / (1 + e^-x)."""
        for x in (-5.0, -0.3, 0.7, 2.0, 9.5):
            assert sigmoid(x) == pytest.approx(1.0 / (1.0 + math.exp(-x)))

    def test_symmetry(self) -> None:
        """Test sigmoid(-x) == 1 - sigmoid(x)."""
        for x in (0.1, 1.0, 3.0):
            assert sigmoid(-x) == pytest.approx(1.0 - sigmoid(x))

    def test_large_magnitude_no_warning(self) -> None:
        """Test extreme inputs saturate without overflow warnings."""
        with np.errstate(over="raise"):
            assert sigmoid(1000.0) == 1.0
            assert sigmoid(-1000.0) == 0.0

    def test_infinities(self) -> None:
        """Test infinite inputs map to the bounds."""
        assert sigmoid(math.inf) == 1.0
        assert sigmoid(-math.inf) == 0.0

    def test_nan_propagates(self) -> None:
        """Test NaN input yields NaN."""
        assert math.isnan(sigmoid(math.nan))

    def test_returns_python_float(self) -> None:
        """Test the result is a plain float."""
        assert type(sigmoid(1.5)) is float


class TestLogisticLink:
    """Tests for LogisticLink."""

    def test_transform_is_sigmoid(self) -> None:
        """Test transform applies the sigmoid."""
        assert LogisticLink.transform(2.0) == sigmoid(2.0)

    def test_inverse(self) -> None:
        """Test inverse recovers the raw score."""
        assert LogisticLink.inverse(0.5) == 0.0
        assert LogisticLink.inverse(sigmoid(1.25)) == pytest.approx(1.25)

    def test_inverse_bounds(self) -> None:
        """Test inverse is infinite at the bounds."""
        assert LogisticLink.inverse(1.0) == math.inf
        assert LogisticLink.inverse(0.0) == -math.inf
