"""Tests for trapezoidal integration."""

import pytest

from wifi_aci.spectrum.integrate import trapezoid_area


def test_trapezoids():
    assert trapezoid_area([(0, 0), (1, 2), (2, 2), (3, 0)]) == 4.0


def test_empty():
    assert trapezoid_area([]) == 0.0


def test_single_point():
    assert trapezoid_area([(5, 3)]) == 0.0


def test_uneven_spacing():
    # 0.5·(1+3)·2 + 0.5·(3+1)·0.5
    assert trapezoid_area([(0, 1), (2, 3), (2.5, 1)]) == pytest.approx(5.0)


def test_accepts_zip():
    assert trapezoid_area(zip([0.0, 10.0], [1.0, 1.0])) == pytest.approx(10.0)


@pytest.mark.parametrize("bad", [[0, 1, 2, 3], [(0, 1, 2), (1, 2, 3)], [[(0, 1)], [(1, 2)]]])
def test_rejects_non_pairs(bad):
    with pytest.raises(ValueError, match=r"\(x, y\) pairs"):
        trapezoid_area(bad)


def test_non_increasing_x_raises():
    with pytest.raises(ValueError, match="strictly increasing"):
        trapezoid_area([(0, 1), (0, 2)])
