"""numpy-backed rotation composition.

Instead of forming each plane rotation as a full matrix, the running
product is updated by rewriting the two affected columns, which is what
the multiplication by a single-plane rotation reduces to:

    (M R)[:, i] =  c * M[:, i] + s * M[:, j]
    (M R)[:, j] = -s * M[:, i] + c * M[:, j]
"""

from __future__ import annotations

import numpy as np

from ndgeom import config
from ndgeom.errors import DimensionMismatch, InvalidDimension, InvalidPlaneName
from ndgeom.matrix import mcopy
from ndgeom.rotation import plane_lookup, trig_functions

ENGINE_NAME = "numpy"


def is_available() -> bool:
    return True


def compose_rotations(dim, angles, out=None, kernel=None, fast=False):
    validate = config.VALIDATE
    if validate:
        if dim < 2:
            raise InvalidDimension('rotation requires at least 2 dimensions, got {}'.format(dim))
        if out is not None and len(out) != dim * dim:
            raise DimensionMismatch(
                'output matrix has {} elements, expected {}'.format(len(out), dim * dim))
    lookup = plane_lookup(dim, kernel)
    fsin, fcos = trig_functions(fast)

    result = np.eye(dim, dtype=np.float64)
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
        c = fcos(angle)
        s = fsin(angle)
        col_i = result[:, i].copy()
        col_j = result[:, j].copy()
        result[:, i] = c * col_i + s * col_j
        result[:, j] = c * col_j - s * col_i

    flat = result.ravel().tolist()
    if out is None:
        return flat
    return mcopy(flat, out)
