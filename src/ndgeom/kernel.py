"""Per-thread cache context for the ndgeom kernel.

A :class:`Kernel` owns every piece of state that ndgeom keeps between
calls:

- rotation-plane tables and plane-name lookups, built once per dimension
  and never modified afterwards;
- scratch matrices used by alias-safe multiplication and by rotation
  composition, overwritten on every call;
- a growable scratch list used when sorting vertices by depth.

All caches are keyed by dimension and grow monotonically.  A kernel is
not safe to share between threads.  Functions that accept ``kernel=None``
fall back to :func:`default_kernel`, which hands each thread its own
instance.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Mapping, Tuple

logger = logging.getLogger(__name__)


class Kernel:
    """Owner of dimension-keyed tables and scratch buffers."""

    def __init__(self) -> None:
        # dim -> tuple of RotationPlane (see ndgeom.rotation)
        self.plane_tables: Dict[int, tuple] = {}
        # dim -> read-only {plane name: (i, j)}
        self.plane_lookups: Dict[int, Mapping[str, Tuple[int, int]]] = {}
        self._scratch: Dict[Tuple[int, str], List[float]] = {}
        self._depths: List[float] = []

    def __repr__(self) -> str:
        return 'Kernel(dims={}, scratch={})'.format(
            sorted(self.plane_tables), len(self._scratch))

    def scratch(self, dim: int, slot: str) -> List[float]:
        """Return the ``dim*dim`` scratch matrix registered under ``slot``.

        The contents are whatever the last user left there; callers must
        fully overwrite the buffer before reading it.
        """
        key = (dim, slot)
        buf = self._scratch.get(key)
        if buf is None:
            buf = [0.0] * (dim * dim)
            self._scratch[key] = buf
            logger.debug('allocated %dx%d scratch matrix %r', dim, dim, slot)
        return buf

    def depth_scratch(self, count: int) -> List[float]:
        """Return a scratch list holding at least ``count`` floats."""
        depths = self._depths
        if len(depths) < count:
            logger.debug('growing depth scratch from %d to %d', len(depths), count)
            depths.extend([0.0] * (count - len(depths)))
        return depths

    def clear_scratch(self) -> None:
        """Drop scratch buffers; plane tables are kept."""
        self._scratch.clear()
        del self._depths[:]


_local = threading.local()


def default_kernel() -> Kernel:
    """Return the calling thread's kernel, creating it on first use."""
    kern = getattr(_local, 'kernel', None)
    if kern is None:
        kern = Kernel()
        _local.kernel = kern
        logger.debug('created kernel for thread %s', threading.current_thread().name)
    return kern
