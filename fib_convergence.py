"""
Tables, floating-point formulations and the golden ratio convergence plot
built on top of the exact engine.
"""
import logging
from decimal import Decimal, localcontext

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

import fib_settings
from fib_engine import (InvalidArgument, ResourceLimitExceeded, check_index,
                        fib, fib_range)

logger = logging.getLogger(__name__)

# Largest index whose Fibonacci number fits in a signed 64-bit integer
MAX_INT64_INDEX = 92


def sequence_frame(start, end):
    values = fib_range(start, end)
    # object dtype keeps the values as exact Python ints
    return pd.DataFrame({
        'n': range(start, end + 1),
        'fib': pd.Series(values, dtype=object),
    })


def golden_ratio(precision=None):
    if precision is None:
        precision = fib_settings.get_ratio_precision()
    with localcontext() as ctx:
        ctx.prec = precision
        return (1 + Decimal(5).sqrt()) / 2


def ratio_frame(start=1, end=40, precision=None):
    """Tabulate f(n+1)/f(n) and its distance from the golden ratio.

    Ratios are evaluated in decimal with ``precision`` significant digits
    before being stored as floats, so the error column stays meaningful well
    past the point where float64 ratios collapse onto phi.
    """
    start = check_index(start, "start")
    end = check_index(end, "end")
    if start < 1:
        raise InvalidArgument("start must be >= 1, f(0) is zero")
    if start > end:
        raise InvalidArgument("start must be <= end, got {} > {}".format(start, end))
    if precision is None:
        precision = fib_settings.get_ratio_precision()

    values = fib_range(start, end + 1)
    phi = golden_ratio(precision)
    ratios = []
    errors = []
    with localcontext() as ctx:
        ctx.prec = precision
        for current, following in zip(values, values[1:]):
            ratio = Decimal(following) / Decimal(current)
            ratios.append(float(ratio))
            errors.append(float(ratio - phi))

    logger.debug("Computed %d ratios at precision %d", len(ratios), precision)
    return pd.DataFrame({
        'n': range(start, end + 1),
        'fib': pd.Series(values[:-1], dtype=object),
        'ratio': ratios,
        'error': errors,
    })


def transition_eigenvalues():
    eigenvalues = np.linalg.eigvals(np.array([[1.0, 1.0], [1.0, 0.0]]))
    return np.sort(eigenvalues)[::-1]


def fib_eigen(n):
    """Approximate f(n) in float64 through the eigendecomposition of the
    transition matrix (Binet's formula)."""
    n = check_index(n)
    eigenvalues, vectors = np.linalg.eig(np.array([[1.0, 1.0], [1.0, 0.0]]))
    with np.errstate(over='ignore', invalid='ignore'):
        powered = vectors @ np.diag(eigenvalues ** n) @ np.linalg.inv(vectors)
        value = powered[0, 1]
    if not np.isfinite(value):
        raise ResourceLimitExceeded(
            "f({}) overflows float64 in the eigenvalue formulation".format(n))
    return float(value)


def fib_fixed_width(n):
    """Compute f(n) with numpy int64 matrix power; refuses indices that would
    silently wrap around."""
    n = check_index(n)
    if n > MAX_INT64_INDEX:
        raise ResourceLimitExceeded(
            "f({}) does not fit in int64, the limit is n={}".format(n, MAX_INT64_INDEX))
    matrix = np.array([[1, 1], [1, 0]], dtype=np.int64)
    return int(np.linalg.matrix_power(matrix, n)[0, 1])


def plot_convergence(frame, ax=None):
    if ax is None:
        _, ax = plt.subplots()
    phi = float(golden_ratio())
    ax.plot(frame['n'], frame['ratio'], marker='o', linestyle='-', label='f(n+1)/f(n)')
    ax.axhline(phi, color='r', linestyle='dashed', label='golden ratio')
    ax.set_xlabel('n')
    ax.set_ylabel('f(n+1)/f(n)')
    ax.set_title('Convergence of consecutive Fibonacci ratios')
    ax.legend()
    return ax
