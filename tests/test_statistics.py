import math
import pytest
import numpy as np
from core.evaluation_types import Point2D
from stats.descriptive import descriptive_stats, histogram, parse_sample
from stats.distributions import normal_curve, normal_density
from stats.regression import linear_regression

def test_parse_sample_discards_garbage():
    assert parse_sample("1, 2, abc, 3.5, , 4e1, 7x, -2") == [1.0, 2.0, 3.5, 40.0, 7.0, -2.0]

def test_parse_sample_rejects_non_finite():
    assert parse_sample("nan, inf, -Infinity, 2") == [2.0]
    assert parse_sample("") == []

def test_descriptive_stats_odd_sample():
    stats = descriptive_stats([1, 2, 3, 4, 5])
    assert stats.mean == 3.0
    assert stats.median == 3.0
    assert stats.variance == 2.0
    assert stats.std_dev == pytest.approx(1.41421, abs=1e-5)
    assert (stats.min, stats.max) == (1.0, 5.0)
    assert (stats.q1, stats.q3) == (2.0, 4.0)

def test_descriptive_stats_even_sample_uses_unsorted_input():
    stats = descriptive_stats([4, 1, 3, 2])
    assert stats.median == 2.5
    assert stats.q1 == 2.0
    assert stats.q3 == 4.0
    assert stats.variance == pytest.approx(1.25)

def test_descriptive_stats_single_value():
    stats = descriptive_stats([7.5])
    assert stats.mean == stats.median == stats.q1 == stats.q3 == 7.5
    assert stats.variance == 0.0

def test_descriptive_stats_empty():
    assert descriptive_stats([]) is None
    assert descriptive_stats(parse_sample("a, b")) is None

def test_histogram_bins_and_labels():
    bins = histogram([1, 2, 3, 4, 5], 2)
    assert [b.count for b in bins] == [2, 3]
    assert [b.range_label for b in bins] == ["1.00-3.00", "3.00-5.00"]

def test_histogram_single_value_sample():
    bins = histogram([5, 5, 5], 3)
    assert [b.count for b in bins] == [3, 0, 0]
    assert bins[0].range_label == "5.00-6.00"
    assert bins[2].range_label == "7.00-8.00"

def test_histogram_empty_and_invalid():
    assert histogram([], 10) == []
    with pytest.raises(ValueError):
        histogram([1, 2], 0)

@pytest.mark.parametrize("text, bins", [
    ("1, 2, 3, 4, 5", 10),
    ("3.2, -1, 9, 9, 9, 0.001, 42, x, , 7", 3),
    ("garbage, 1e3, 2e3, -5e2", 30),
    ("0.1, 0.2, 0.30000000000000004, 0.3", 7),
    ("nothing here", 5),
])
def test_histogram_counts_cover_every_value(text, bins):
    values = parse_sample(text)
    assert sum(b.count for b in histogram(values, bins)) == len(values)

def test_regression_exact_line():
    line = linear_regression([(1, 2), (2, 4), (3, 6)])
    assert line.slope == pytest.approx(2.0, abs=1e-9)
    assert line.intercept == pytest.approx(0.0, abs=1e-9)
    assert line.endpoints == (Point2D(1.0, 2.0), Point2D(3.0, 6.0))

def test_regression_endpoints_use_min_and_max_x():
    line = linear_regression([Point2D(5, 1), Point2D(-1, 3), Point2D(2, 0)])
    assert line.endpoints[0].x == -1.0
    assert line.endpoints[1].x == 5.0
    assert line.endpoints[1].y == pytest.approx(line.predict(5.0))

def test_regression_matches_numpy_polyfit():
    rng = np.random.default_rng(0)
    xs = rng.uniform(-5, 5, 50)
    ys = 0.7 * xs - 3 + rng.normal(0, 0.1, 50)
    line = linear_regression(list(zip(xs, ys)))
    slope, intercept = np.polyfit(xs, ys, 1)
    np.testing.assert_allclose([line.slope, line.intercept], [slope, intercept], rtol=1e-9)

def test_regression_too_few_points():
    assert linear_regression([]) == linear_regression([(1, 1)])
    line = linear_regression([(1, 1)])
    assert (line.slope, line.intercept, line.endpoints) == (0.0, 0.0, ())

def test_regression_vertical_sample_falls_back():
    line = linear_regression([(1, 1), (1, 3)])
    assert line.slope == 0.0
    assert line.intercept == 2.0

def test_normal_curve_shape():
    curve = normal_curve(0.0, 1.0, 100)
    assert len(curve) == 101
    assert curve[0][0] == pytest.approx(-4.0)
    assert curve[-1][0] == pytest.approx(4.0)
    peak = max(curve, key=lambda p: p[1])
    assert peak[0] == pytest.approx(0.0, abs=1e-12)
    assert peak[1] == pytest.approx(1 / math.sqrt(2 * math.pi))
    np.testing.assert_allclose([p[1] for p in curve], [p[1] for p in reversed(curve)], rtol=1e-9)

def test_normal_curve_scaled():
    curve = normal_curve(2.0, 0.5, 8)
    np.testing.assert_allclose([p[0] for p in curve], np.arange(0.0, 4.01, 0.5))
    assert curve[4][1] == pytest.approx(normal_density(2.0, 2.0, 0.5))
    assert curve[4][1] == pytest.approx(1 / (0.5 * math.sqrt(2 * math.pi)))

def test_normal_curve_non_integral_step():
    assert len(normal_curve(0.0, 1.0, 3)) == 4

@pytest.mark.parametrize("std_dev, sample_size", [(0.0, 10), (-1.0, 10), (1.0, 0)])
def test_normal_curve_invalid_arguments(std_dev, sample_size):
    with pytest.raises(ValueError):
        normal_curve(0.0, std_dev, sample_size)
