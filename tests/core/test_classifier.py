"""Tests for nearest-attractor classification and the palette."""

import numpy as np
import pytest

from basinscope.core.classifier import (
    FALLBACK_COLOR,
    PALETTE,
    classify,
    classify_many,
    color_for,
    colors_for,
)
from basinscope.core.field import Attractor, Point


class TestClassify:
    def test_nearest_attractor(self, default_attractors):
        assert classify(default_attractors, Point(0.9, 1.2)) == 0
        assert classify(default_attractors, Point(-0.5, -2.0)) == 1

    def test_tie_goes_to_lowest_index(self):
        attractors = (Attractor(1.0, 0.0, 1.0), Attractor(-1.0, 0.0, 1.0))
        assert classify(attractors, Point(0.0, 5.0)) == 0

    def test_escaped_point_falls_back_to_nearest(self, default_attractors):
        assert classify(default_attractors, Point(1600.0, 1500.0)) == 0
        assert classify(default_attractors, Point(-1600.0, -1500.0)) == 1

    def test_result_is_nearest(self):
        attractors = (
            Attractor(1.0, 1.0, 1.0),
            Attractor(-1.0, -1.0, 1.0),
            Attractor(-1.0, 1.0, 1.0),
            Attractor(1.0, -1.0, 1.0),
        )
        rng = np.random.default_rng(11)
        for x, y in rng.uniform(-5, 5, (200, 2)):
            idx = classify(attractors, Point(x, y))
            assert 0 <= idx < len(attractors)
            best = attractors[idx].distance_to(x, y)
            assert all(best <= a.distance_to(x, y) for a in attractors)

    def test_single_attractor(self):
        assert classify((Attractor(3.0, 3.0, 1.0),), Point(-100.0, 0.0)) == 0

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            classify((), Point(0.0, 0.0))


class TestClassifyMany:
    def test_matches_scalar(self, default_attractors):
        rng = np.random.default_rng(5)
        xs = rng.uniform(-4, 4, 100)
        ys = rng.uniform(-4, 4, 100)
        result = classify_many(default_attractors, xs, ys)
        expected = [classify(default_attractors, Point(x, y)) for x, y in zip(xs, ys)]
        np.testing.assert_array_equal(result, expected)

    def test_tie_goes_to_lowest_index(self, default_attractors):
        result = classify_many(default_attractors, np.array([0.0, 2.0]), np.array([0.0, -2.0]))
        np.testing.assert_array_equal(result, [0, 0])


class TestPalette:
    def test_known_colors(self):
        assert color_for(0) == (255, 255, 255)
        assert color_for(1) == (0, 0, 0)
        assert color_for(2) == (0, 0, 255)
        assert color_for(3) == (255, 255, 0)
        assert color_for(4) == (255, 255, 255)

    def test_unknown_index_is_black(self):
        assert color_for(5) == FALLBACK_COLOR == (0, 0, 0)
        assert color_for(-1) == (0, 0, 0)

    def test_colors_for_array(self):
        colors = colors_for(np.array([0, 1, 2, 3, 4, 9]))
        assert colors.shape == (6, 3)
        assert colors.dtype == np.uint8
        for i, index in enumerate([0, 1, 2, 3, 4]):
            assert tuple(colors[i]) == PALETTE[index]
        assert tuple(colors[5]) == (0, 0, 0)
