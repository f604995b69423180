"""Rotation composition backends.

Every backend module exposes ``ENGINE_NAME``, ``is_available()`` and
``compose_rotations(dim, angles, out=None, kernel=None, fast=False)``
and must agree with the ``reference`` backend to within floating point
tolerance.  The active backend is chosen per call, or through the
``NDGEOM_ROTATION_ENGINE`` environment variable.
"""

import logging

from . import reference as reference

logger = logging.getLogger(__name__)

__all__ = ['reference']

try:
    from . import numpy_engine as numpy
except ImportError:  # optional dependency
    numpy = None
    logger.debug('numpy rotation engine unavailable')
else:
    __all__.append('numpy')

ENGINE_REGISTRY = {'reference': reference}
if numpy is not None:
    ENGINE_REGISTRY['numpy'] = numpy


def get_engine(name: str):
    return ENGINE_REGISTRY.get(name)


def available_engines():
    """Names of the registered backends that can run."""
    return [name for name, mod in ENGINE_REGISTRY.items() if mod.is_available()]


__all__.extend(['ENGINE_REGISTRY', 'get_engine', 'available_engines'])
