"""Rotations in arbitrary-dimensional space built from plane rotations.

A rotation in n dimensions is composed from independent rotations in
the ``n(n-1)/2`` coordinate planes.  Planes are named by their axis
letters (``X Y Z W V U`` for axes 0-5, ``A6``, ``A7``... beyond), so the
4D planes are ``XY XZ XW YZ YW ZW``.

Plane tables and name lookups are cached on a :class:`ndgeom.kernel.Kernel`
and never change once built.  :func:`compose_rotations` is the per-frame
entry point; the arithmetic is delegated to a backend from
:mod:`ndgeom.engines`.
"""

from __future__ import annotations

import logging
import re
from collections import namedtuple
from types import MappingProxyType
from math import cos, sin
from typing import Mapping, Optional, Sequence, Tuple

from ndgeom import config
from ndgeom.errors import InvalidDimension, InvalidIndex, InvalidPlaneName
from ndgeom.fasttrig import fast_cos, fast_sin
from ndgeom.kernel import Kernel, default_kernel
from ndgeom.matrix import identity, multiply_vector

logger = logging.getLogger(__name__)

AXIS_NAMES = ('X', 'Y', 'Z', 'W', 'V', 'U')

_AXIS_INDEX = {name: i for i, name in enumerate(AXIS_NAMES)}
_AXIS_TOKEN = re.compile(r'[A-Z][0-9]*')

RotationPlane = namedtuple('RotationPlane', ['i', 'j', 'name'])
RotationPlane.__doc__ = 'A coordinate plane spanned by axes ``i < j``.'


def plane_count(dim: int) -> int:
    """Number of independent rotation planes in ``dim`` dimensions."""
    if dim < 2:
        raise InvalidDimension('rotation requires at least 2 dimensions, got {}'.format(dim))
    return dim * (dim - 1) // 2


def axis_name(index: int) -> str:
    """Display name for axis ``index``."""
    if index < 0:
        raise InvalidIndex('axis index must be non-negative: {}'.format(index))
    if index < len(AXIS_NAMES):
        return AXIS_NAMES[index]
    return 'A{}'.format(index)


def _axis_index(token):
    index = _AXIS_INDEX.get(token)
    if index is not None:
        return index
    if token.startswith('A') and token[1:].isdigit():
        num = int(token[1:])
        if num >= len(AXIS_NAMES):
            return num
    return -1


def create_plane_name(i: int, j: int) -> str:
    """Name of the plane spanned by axes ``i`` and ``j`` (any order)."""
    if i == j:
        raise InvalidIndex('plane axes must be different: {}'.format(i))
    lo, hi = (i, j) if i < j else (j, i)
    return axis_name(lo) + axis_name(hi)


def parse_plane_name(name: str) -> Tuple[int, int]:
    """Parse a plane name like ``"XW"`` or ``"A6A7"`` into ``(i, j)``, ``i < j``."""
    tokens = _AXIS_TOKEN.findall(name) if isinstance(name, str) else []
    if len(tokens) != 2 or ''.join(tokens) != name:
        raise InvalidPlaneName('invalid plane name {!r}'.format(name))
    i = _axis_index(tokens[0])
    j = _axis_index(tokens[1])
    if i < 0 or j < 0:
        raise InvalidPlaneName('invalid plane name {!r}'.format(name))
    if i == j:
        raise InvalidPlaneName('plane axes must be different: {!r}'.format(name))
    return (i, j) if i < j else (j, i)


def _build_tables(dim, kern):
    table = []
    for i in range(dim):
        for j in range(i + 1, dim):
            table.append(RotationPlane(i, j, axis_name(i) + axis_name(j)))
    table = tuple(table)
    kern.plane_tables[dim] = table
    kern.plane_lookups[dim] = MappingProxyType({p.name: (p.i, p.j) for p in table})
    logger.debug('built %d rotation planes for %dD', len(table), dim)
    return table


def planes(dim: int, kernel: Optional[Kernel] = None) -> Tuple[RotationPlane, ...]:
    """All rotation planes of ``dim``-space, in ``(i, j)`` lexicographic order."""
    if dim < 2:
        raise InvalidDimension('rotation requires at least 2 dimensions, got {}'.format(dim))
    kern = kernel or default_kernel()
    table = kern.plane_tables.get(dim)
    if table is None:
        table = _build_tables(dim, kern)
    return table


def plane_lookup(dim: int, kernel: Optional[Kernel] = None) -> Mapping[str, Tuple[int, int]]:
    """Read-only mapping from plane name to ``(i, j)`` for ``dim``-space."""
    kern = kernel or default_kernel()
    lookup = kern.plane_lookups.get(dim)
    if lookup is None:
        planes(dim, kern)
        lookup = kern.plane_lookups[dim]
    return lookup


def trig_functions(fast=False):
    """Return the ``(sin, cos)`` pair used for building rotations."""
    if fast:
        return fast_sin, fast_cos
    return sin, cos


def rotation_matrix(dim: int, i: int, j: int, angle: float) -> list:
    """Rotation by ``angle`` radians in the plane of axes ``i < j``.

    The result is the identity except for
    ``R[i][i] = R[j][j] = cos``, ``R[i][j] = -sin``, ``R[j][i] = sin``,
    which makes it orthogonal with determinant 1.
    """
    if dim < 2:
        raise InvalidDimension('rotation requires at least 2 dimensions, got {}'.format(dim))
    if i < 0 or j < 0 or i >= dim or j >= dim:
        raise InvalidIndex('plane indices must be in range [0, {}]: {},{}'.format(dim - 1, i, j))
    if i == j:
        raise InvalidIndex('plane indices must be different: {}'.format(i))
    if i > j:
        raise InvalidIndex('first plane index must be less than second: {},{}'.format(i, j))
    m = identity(dim)
    c = cos(angle)
    s = sin(angle)
    m[i*dim+i] = c
    m[j*dim+j] = c
    m[i*dim+j] = -s
    m[j*dim+i] = s
    return m


def compose_rotations(dim: int, angles: Mapping[str, float], out: Optional[list] = None, *,
                      kernel: Optional[Kernel] = None, engine: Optional[str] = None,
                      fast: bool = False) -> list:
    """Compose the plane rotations in ``angles`` into one matrix.

    ``angles`` maps plane names to angles in radians and is applied in
    its iteration order, so ``{'XY': a, 'ZW': b}`` yields
    ``R_XY(a) * R_ZW(b)``.  The product is written into ``out`` when
    given, otherwise into a new list.

    An unknown plane name raises ``InvalidPlaneName`` while validation is
    on and is skipped otherwise.  ``fast=True`` uses the approximate
    trigonometry of :mod:`ndgeom.fasttrig`.  ``engine`` selects the
    backend by name; see :func:`ndgeom.engines.get_engine`.
    """
    from ndgeom import engines

    name = config.rotation_engine_name(engine)
    backend = engines.get_engine(name)
    if backend is None:
        raise ValueError('unknown rotation engine {!r}'.format(name))
    return backend.compose_rotations(dim, angles, out, kernel=kernel, fast=fast)


def rotate_vertices(matrix: Sequence[float], vertices, out=None):
    """Apply ``matrix`` to every vertex, returning a list of new vertices.

    When ``out`` is a list of vertex lists of matching shape, results are
    written into it instead.
    """
    if out is None:
        return [multiply_vector(matrix, v) for v in vertices]
    for k, v in enumerate(vertices):
        multiply_vector(matrix, v, out[k])
    return out
