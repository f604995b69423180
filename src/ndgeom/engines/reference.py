"""Pure-Python rotation composition with swap-buffer accumulation.

Two kernel scratch matrices alternate as the running product: each plane
rotation multiplies the current product into the idle buffer, then the
roles swap.  A third scratch matrix holds the single-plane rotation; only
its four plane entries are touched per step and they are reset to the
identity afterwards.  No lists are allocated inside the loop.
"""

from __future__ import annotations

from ndgeom import config
from ndgeom.errors import DimensionMismatch, InvalidDimension, InvalidPlaneName
from ndgeom.kernel import default_kernel
from ndgeom.matrix import mcopy, multiply_into
from ndgeom.rotation import plane_lookup, trig_functions

ENGINE_NAME = "reference"


def is_available() -> bool:
    return True


def _set_identity(m, dim):
    for k in range(dim * dim):
        m[k] = 0.0
    for k in range(dim):
        m[k*dim+k] = 1.0


def compose_rotations(dim, angles, out=None, kernel=None, fast=False):
    validate = config.VALIDATE
    if validate:
        if dim < 2:
            raise InvalidDimension('rotation requires at least 2 dimensions, got {}'.format(dim))
        if out is not None and len(out) != dim * dim:
            raise DimensionMismatch(
                'output matrix has {} elements, expected {}'.format(len(out), dim * dim))
    kern = kernel or default_kernel()
    lookup = plane_lookup(dim, kern)
    fsin, fcos = trig_functions(fast)

    cur = kern.scratch(dim, 'accum_a')
    nxt = kern.scratch(dim, 'accum_b')
    rot = kern.scratch(dim, 'plane')
    _set_identity(cur, dim)
    _set_identity(rot, dim)

    items = angles.items() if hasattr(angles, 'items') else angles
    for name, angle in items:
        idx = lookup.get(name)
        if idx is None:
            if validate:
                raise InvalidPlaneName(
                    'invalid plane name {!r} for {}D space'.format(name, dim),
                    {'plane': name, 'dimension': dim})
            continue
        i, j = idx
        ii = i*dim + i
        jj = j*dim + j
        ij = i*dim + j
        ji = j*dim + i
        c = fcos(angle)
        s = fsin(angle)
        rot[ii] = c
        rot[jj] = c
        rot[ij] = -s
        rot[ji] = s
        multiply_into(nxt, cur, rot, kern)
        rot[ii] = 1.0
        rot[jj] = 1.0
        rot[ij] = 0.0
        rot[ji] = 0.0
        cur, nxt = nxt, cur

    if out is None:
        return list(cur)
    return mcopy(cur, out)
