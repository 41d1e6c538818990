import math

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pytest

from fib_convergence import (MAX_INT64_INDEX, fib_eigen, fib_fixed_width,
                             golden_ratio, plot_convergence, ratio_frame,
                             sequence_frame, transition_eigenvalues)
from fib_engine import InvalidArgument, ResourceLimitExceeded, fib

PHI = (1 + math.sqrt(5)) / 2


def test_sequence_frame_keeps_exact_values():
    df = sequence_frame(98, 100)
    assert list(df['n']) == [98, 99, 100]
    assert df['fib'].iloc[-1] == 354224848179261915075
    assert df['fib'].dtype == object


def test_golden_ratio_precision():
    phi = golden_ratio(50)
    assert str(phi).startswith("1.6180339887498948482045868343656381177203091798")
    assert float(phi) == pytest.approx(PHI)


def test_ratio_frame_converges_to_phi():
    df = ratio_frame(1, 40)
    assert list(df['n']) == list(range(1, 41))
    assert df['ratio'].iloc[0] == 1.0
    assert df['ratio'].iloc[1] == 2.0
    assert df['ratio'].iloc[-1] == pytest.approx(1.6180339887498949)

    magnitude = df['error'].abs()
    assert (magnitude.diff().dropna() < 0).all()


def test_ratio_error_decays_geometrically():
    df = ratio_frame(1, 40)
    errors = df['error'].tolist()
    # consecutive errors alternate in sign and shrink by 1/phi**2
    assert errors[-1] * errors[-2] < 0
    assert abs(errors[-1] / errors[-2]) == pytest.approx(1 / PHI ** 2, rel=1e-6)


@pytest.mark.parametrize("start, end", [(0, 10), (5, 4), (-2, 3)])
def test_ratio_frame_rejects_bad_range(start, end):
    with pytest.raises(InvalidArgument):
        ratio_frame(start, end)


def test_transition_eigenvalues():
    eigenvalues = transition_eigenvalues()
    assert eigenvalues[0] == pytest.approx(PHI)
    assert eigenvalues[1] == pytest.approx(-1 / PHI)


def test_fib_eigen_approximates_exact_values():
    assert round(fib_eigen(10)) == 55
    assert fib_eigen(70) == pytest.approx(fib(70), rel=1e-10)


def test_fib_eigen_overflow():
    with pytest.raises(ResourceLimitExceeded):
        fib_eigen(2000)


def test_fib_fixed_width():
    assert fib_fixed_width(10) == 55
    assert fib_fixed_width(MAX_INT64_INDEX) == fib(MAX_INT64_INDEX)
    with pytest.raises(ResourceLimitExceeded):
        fib_fixed_width(MAX_INT64_INDEX + 1)


def test_plot_convergence():
    df = ratio_frame(1, 20)
    ax = plot_convergence(df)
    try:
        ratio_line, phi_line = ax.get_lines()
        np.testing.assert_allclose(ratio_line.get_ydata(), df['ratio'])
        assert phi_line.get_ydata()[0] == pytest.approx(PHI)
        assert ax.get_xlabel() == 'n'
    finally:
        plt.close(ax.figure)
