import logging
import numbers
import operator

import fib_settings

logger = logging.getLogger(__name__)


class FibonacciError(Exception):
    """Base class for errors raised by the Fibonacci engine."""


class InvalidArgument(FibonacciError, ValueError):
    """Index is negative, not an integer, or a range is reversed."""


class ResourceLimitExceeded(FibonacciError):
    """Index or result is beyond what the chosen formulation can hold."""


def check_index(n, name="n"):
    # bool is an Integral but never a meaningful index
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidArgument("{} must be an integer, got {!r}".format(name, n))
    n = int(n)
    if n < 0:
        raise InvalidArgument("{} must be non-negative, got {}".format(name, n))
    return n


def _check_limit(n, name="n"):
    max_index = fib_settings.get_max_index()
    if max_index and n > max_index:
        logger.warning("Rejecting %s=%d above FIB_MAX_INDEX=%d", name, n, max_index)
        raise ResourceLimitExceeded(
            "{}={} exceeds the maximum index {}".format(name, n, max_index))


def _fib_pair(n, mul=operator.mul):
    # Fast doubling, walking the bits of n from the most significant one.
    # Invariant: (a, b) == (f(k), f(k+1)) for the prefix k read so far.
    a, b = 0, 1
    for bit in bin(n)[2:]:
        c = mul(a, (b << 1) - a)   # f(2k)
        d = mul(a, a) + mul(b, b)  # f(2k+1)
        if bit == "1":
            a, b = d, c + d
        else:
            a, b = c, d
    return a, b


def fib(n, mul=operator.mul):
    """Return the exact Fibonacci number f(n), with f(0)=0 and f(1)=f(2)=1.

    Uses fast doubling: three big-integer multiplications per bit of n, all
    routed through ``mul`` so callers can substitute or count them.
    """
    n = check_index(n)
    _check_limit(n)
    return _fib_pair(n, mul)[0]


def fib_range(start, end):
    """Return [f(start), ..., f(end)] in ascending index order.

    The first pair is seeded with fast doubling, every later term costs a
    single addition.
    """
    start = check_index(start, "start")
    end = check_index(end, "end")
    if start > end:
        raise InvalidArgument("start must be <= end, got {} > {}".format(start, end))
    _check_limit(end, "end")

    a, b = _fib_pair(start)
    result = [a]
    for _ in range(end - start):
        a, b = b, a + b
        result.append(a)
    return result


# Fibonacci via matrix exponentiation of [[1, 1], [1, 0]]
IDENTITY = ((1, 0), (0, 1))
TRANSITION = ((1, 1), (1, 0))


def matrix_mult(a, b):
    return (
        (a[0][0] * b[0][0] + a[0][1] * b[1][0], a[0][0] * b[0][1] + a[0][1] * b[1][1]),
        (a[1][0] * b[0][0] + a[1][1] * b[1][0], a[1][0] * b[0][1] + a[1][1] * b[1][1]),
    )


def matrix_power(matrix, n):
    if n == 0:
        return IDENTITY
    if n == 1:
        return matrix

    if n % 2:
        return matrix_mult(matrix, matrix_power(matrix, n - 1))

    half_pow = matrix_power(matrix, n // 2)
    return matrix_mult(half_pow, half_pow)


def fib_matrix(n):
    """Return f(n) read off the n-th power of the transition matrix."""
    n = check_index(n)
    _check_limit(n)
    # T^n == [[f(n+1), f(n)], [f(n), f(n-1)]]
    return matrix_power(TRANSITION, n)[0][1]
