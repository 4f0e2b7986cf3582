import math

import numpy as np
import pytest

from catenary_cvx.closed_form import ClosedFormCatenary, compare_with_closed_form
from catenary_cvx.errors import InvalidInputError
from catenary_cvx.model import CatenarySolution


def test_symmetric_fit():
    catenary = ClosedFormCatenary.through(0, 0, 1, 0, 2)
    assert catenary.y(0) == pytest.approx(0, abs=1e-9)
    assert catenary.y(1) == pytest.approx(0, abs=1e-9)
    assert catenary.arc_length() == pytest.approx(2, rel=1e-9)
    assert catenary.b == pytest.approx(0.5)
    low_x, low_y = catenary.lowest_point()
    assert low_x == pytest.approx(0.5)
    assert low_y < 0
    # 2a sinh(1 / 2a) == 2
    assert 2 * catenary.a * math.sinh(1 / (2 * catenary.a)) == pytest.approx(2)


def test_uneven_fit_in_either_order():
    forward = ClosedFormCatenary.through(0, 0, 2, 1, 3)
    backward = ClosedFormCatenary.through(2, 1, 0, 0, 3)
    for catenary in (forward, backward):
        assert catenary.y(0) == pytest.approx(0, abs=1e-9)
        assert catenary.y(2) == pytest.approx(1, abs=1e-9)
        assert catenary.arc_length() == pytest.approx(3, rel=1e-9)
    assert forward.a == pytest.approx(backward.a)


def test_vertex_outside_the_span():
    catenary = ClosedFormCatenary.through(0, 0, 1, 3, 3.2)
    low_x, low_y = catenary.lowest_point()
    assert low_x == pytest.approx(0)
    assert low_y == pytest.approx(0, abs=1e-9)


def test_sample_is_vectorised():
    catenary = ClosedFormCatenary.through(0, 0, 1, 0, 1.5)
    xs, ys = catenary.sample(7)
    assert xs[0] == 0 and xs[-1] == 1
    np.testing.assert_allclose(ys, [catenary.y(float(x)) for x in xs])


@pytest.mark.parametrize(
    "args",
    [
        (0, 0, 1, 0, 1),  # taut: no sag left to fit
        (0, 0, 1, 0, 0.5),
        (0, 0, 0, 1, 2),  # vertical
    ],
)
def test_rejects_unfittable(args):
    with pytest.raises(InvalidInputError):
        ClosedFormCatenary.through(*args)


def test_compare_is_zero_on_the_curve():
    catenary = ClosedFormCatenary.through(0, 0, 1, 0, 2)
    xs, ys = catenary.sample(11)
    assert compare_with_closed_form(CatenarySolution(xs, ys), catenary) == pytest.approx(0, abs=1e-12)


def test_compare_reports_the_largest_gap():
    catenary = ClosedFormCatenary.through(0, 0, 1, 0, 2)
    xs, ys = catenary.sample(11)
    ys = ys.copy()
    ys[4] += 0.25
    assert compare_with_closed_form(CatenarySolution(xs, ys), catenary) == pytest.approx(0.25)


def test_summary_and_describe():
    catenary = ClosedFormCatenary.through(0, 0, 1, 0, 2)
    assert "Arc length: 2.0000000" in catenary.summary()
    assert catenary.describe().startswith("**Closed-form catenary:**")
