import os
import logging

logger = logging.getLogger(__name__)

# Upper bound on the index accepted by the engine, 0 disables the guard
DEFAULT_MAX_INDEX = 10000000
# Significant digits used when ratios are evaluated with decimal
DEFAULT_RATIO_PRECISION = 60


def _read_int(name, default, minimum):
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError("{} must be an integer, got {!r}".format(name, raw))
    if value < minimum:
        raise ValueError("{} must be >= {}, got {}".format(name, minimum, value))
    logger.debug("%s overridden from environment: %d", name, value)
    return value


def get_max_index():
    return _read_int("FIB_MAX_INDEX", DEFAULT_MAX_INDEX, 0)


def get_ratio_precision():
    return _read_int("FIB_RATIO_PRECISION", DEFAULT_RATIO_PRECISION, 1)
