import pytest
import numpy as np
from core.evaluation_types import AngleMode, Domain
from core.exceptions import DomainError, ParseError
from evaluation.sampler import sample, sample_with_report, x_values

def test_sample_full_resolution(plot_domain):
    points = sample("x^2 - 4", plot_domain)
    assert len(points) == 200
    assert points[0].x == pytest.approx(-10.0)
    assert points[-1].x == pytest.approx(10.0)
    xs = [p.x for p in points]
    assert xs == sorted(xs)

def test_x_values_spacing():
    xs = x_values(Domain(0.0, 1.0, 5))
    np.testing.assert_allclose(xs, [0.0, 0.25, 0.5, 0.75, 1.0])

def test_failed_points_are_dropped(plot_domain):
    result = sample_with_report("sqrt(x)", plot_domain)
    expected = int(np.sum(x_values(plot_domain) >= 0))
    assert len(result.points) == expected < 200
    assert all(p.x >= 0 for p in result.points)
    assert len(result.errors) == 200 - expected
    assert result.stats["points"] == 200
    assert result.stats["kept"] == expected

def test_division_by_zero_point_is_dropped():
    points = sample("1/x", Domain(-1.0, 1.0, 3))
    assert [p.x for p in points] == [-1.0, 1.0]
    assert [p.y for p in points] == [-1.0, 1.0]

def test_no_zero_substitution():
    points = sample("ln(x)", Domain(-2.0, 2.0, 5))
    assert all(p.x > 0 for p in points)

def test_bindings_template(plot_domain):
    points = sample("a*x + b", plot_domain, {"a": 2.0, "b": 1.0})
    for p in points:
        assert p.y == pytest.approx(2.0 * p.x + 1.0)

def test_unbound_variable_drops_every_point(plot_domain):
    result = sample_with_report("x + k", plot_domain)
    assert result.points == []
    assert len(result.errors) == 200

def test_malformed_expression_fails_whole_call(plot_domain):
    with pytest.raises(ParseError):
        sample("x +", plot_domain)

def test_sample_in_degrees():
    points = sample("sin(x)", Domain(0.0, 90.0, 2), mode=AngleMode.DEGREES)
    np.testing.assert_allclose([p.y for p in points], [0.0, 1.0], atol=1e-12)

def test_domain_steps_are_clamped():
    assert Domain(0.0, 1.0, 1).steps == 2
    assert Domain(0.0, 1.0, -5).steps == 2
    assert len(sample("x", Domain(0.0, 1.0, 0))) == 2

@pytest.mark.parametrize("lo, hi", [(1.0, 1.0), (2.0, 1.0), (0.0, float("inf")), (float("nan"), 1.0)])
def test_invalid_domain(lo, hi):
    with pytest.raises(DomainError):
        Domain(lo, hi, 10)

def test_sample_result_to_dataframe():
    result = sample_with_report("2x", Domain(0.0, 1.0, 3))
    df = result.to_dataframe()
    assert list(df.columns) == ["x", "y"]
    np.testing.assert_allclose(df["y"].to_numpy(), [0.0, 1.0, 2.0])

def test_dropped_points_logged(dummy_logger):
    sample("1/x", Domain(-1.0, 1.0, 3))
    assert any("Dropping x=0" in r.message for r in dummy_logger.records)

def test_x_values_end_exactly_on_domain_bounds():
    xs = x_values(Domain(-3.3, 9.1, 137))
    assert xs[0] == -3.3
    assert xs[-1] == 9.1
    assert len(xs) == 137
