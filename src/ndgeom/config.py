"""Runtime configuration for ndgeom.

Settings come from the environment:

``NDGEOM_VALIDATE``
    Shape and range checks on hot-path calls.  On by default; set to
    ``0``/``false``/``no``/``off`` to skip them.  Running under
    ``python -O`` also disables them.  Callers that turn validation off
    take responsibility for passing well-formed input.

``NDGEOM_ROTATION_ENGINE``
    Name of the rotation composition backend (see :mod:`ndgeom.engines`).
    Defaults to ``reference``.
"""

import logging
import os

logger = logging.getLogger(__name__)

## tolerance for near-zero tests (homogeneous w, degenerate vectors)
EPSILON = 1e-10
DEGENERATE_EPSILON = 1e-10

## default tolerance for approximate comparisons of vectors and matrices
COMPARE_EPSILON = 1e-6

DEFAULT_ROTATION_ENGINE = 'reference'

_FALSE_VALUES = ('0', 'false', 'no', 'off')


def _env_validate():
    value = os.environ.get('NDGEOM_VALIDATE', '1').strip().lower()
    return __debug__ and value not in _FALSE_VALUES


## Read by hot-path functions on every call as ``config.VALIDATE``, so
## toggling it takes effect immediately.
VALIDATE = _env_validate()


def set_validation(flag):
    """Enable or disable hot-path validation, returning the previous setting."""
    global VALIDATE
    previous = VALIDATE
    VALIDATE = bool(flag)
    if previous != VALIDATE:
        logger.debug('ndgeom validation %s', 'enabled' if VALIDATE else 'disabled')
    return previous


def rotation_engine_name(engine=None):
    """Resolve the rotation backend name from an argument or the environment."""
    return engine or os.environ.get('NDGEOM_ROTATION_ENGINE', DEFAULT_ROTATION_ENGINE)
