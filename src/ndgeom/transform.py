## generalized affine transformation matrices for n-dimensional
## coordinates in ndgeom

## Copyright (c) 2024 ndgeom contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

## Scale and shear act on n-vectors directly and are n x n matrices.
## Translation is not linear, so it is expressed as an (n+1) x (n+1)
## matrix acting on homogeneous coordinates [x0, ..., xn-1, 1].  To
## compose a translation with the linear transforms, the linear
## matrices are lifted into homogeneous form with homogeneous_lift().
##
## compose_transformations() multiplies left to right, which means the
## LAST matrix in the list is applied to a vector FIRST.

from ndgeom import config
from ndgeom.errors import (DimensionMismatch, InvalidDimension, InvalidIndex,
                           NDGeomError, SingularHomogeneous)
from ndgeom.matrix import (isnested, dimensions, from_rows, identity, mcopy,
                           multiply, multiply_vector)


def _check_dim(dim):
    if isinstance(dim, bool) or not isinstance(dim, int) or dim <= 0:
        raise InvalidDimension('dimension must be a positive integer: {}'.format(dim))


def scale_matrix(dim, scales):
    """ diagonal matrix scaling axis i by ``scales[i]``"""
    _check_dim(dim)
    if len(scales) != dim:
        raise DimensionMismatch(
            'scales length ({}) must match dimension ({})'.format(len(scales), dim),
            {'scales': len(scales), 'dimension': dim})
    m = [0.0] * (dim * dim)
    for i in range(dim):
        m[i*dim+i] = scales[i]
    return m


def uniform_scale_matrix(dim, s):
    """ diagonal matrix scaling every axis by ``s``"""
    _check_dim(dim)
    m = [0.0] * (dim * dim)
    for i in range(dim):
        m[i*dim+i] = s
    return m


def shear_matrix(dim, shear_axis, reference_axis, amount):
    """Shear ``shear_axis`` proportionally to ``reference_axis``.

    ``v'[shear_axis] = v[shear_axis] + amount * v[reference_axis]``; all
    other coordinates are unchanged.
    """
    _check_dim(dim)
    if shear_axis < 0 or shear_axis >= dim:
        raise InvalidIndex('shear axis {} out of range [0, {}]'.format(shear_axis, dim - 1))
    if reference_axis < 0 or reference_axis >= dim:
        raise InvalidIndex('reference axis {} out of range [0, {}]'.format(reference_axis, dim - 1))
    if shear_axis == reference_axis:
        raise InvalidIndex('shear axis and reference axis must be different: {}'.format(shear_axis))
    m = identity(dim)
    m[shear_axis*dim+reference_axis] = amount
    return m


def translation_matrix(dim, delta):
    """ (dim+1) x (dim+1) homogeneous translation by ``delta``"""
    _check_dim(dim)
    if len(delta) != dim:
        raise DimensionMismatch(
            'translation length ({}) must match dimension ({})'.format(len(delta), dim),
            {'translation': len(delta), 'dimension': dim})
    n = dim + 1
    m = identity(n)
    for i in range(dim):
        m[i*n+dim] = delta[i]
    return m


def translate_vector(v, delta, out=None):
    """ ``v + delta`` without going through homogeneous coordinates"""
    if config.VALIDATE and len(v) != len(delta):
        raise DimensionMismatch('vector dimensions must match: {} != {}'.format(len(v), len(delta)))
    n = len(v)
    r = out if out is not None else [0.0] * n
    for i in range(n):
        r[i] = v[i] + delta[i]
    return r


## append a trailing 1 to put a vector in the w=1 hyperplane
def to_homogeneous(v, out=None):
    n = len(v)
    if out is None:
        out = [0.0] * (n + 1)
    elif len(out) < n + 1:
        raise DimensionMismatch('homogeneous output needs {} elements, got {}'.format(n + 1, len(out)))
    for i in range(n):
        out[i] = v[i]
    out[n] = 1.0
    return out


## project back to the w=1 plane by dividing by w, then drop w
def from_homogeneous(v):
    if len(v) == 0:
        raise DimensionMismatch('cannot convert empty vector from homogeneous coordinates')
    w = v[-1]
    if abs(w) < config.EPSILON:
        raise SingularHomogeneous(
            'cannot convert from homogeneous coordinates: w component is zero', {'w': w})
    return [v[i] / w for i in range(len(v) - 1)]


def homogeneous_lift(m):
    """embed an n x n linear matrix in the upper-left of an (n+1) x (n+1) identity"""
    if isnested(m):
        m = from_rows(m)
    n, _ = dimensions(m)
    h = n + 1
    r = identity(h)
    for i in range(n):
        for j in range(n):
            r[i*h+j] = m[i*n+j]
    return r


def compose_transformations(matrices):
    """Multiply ``matrices`` left to right into one matrix.

    The last matrix in the list is the first one applied to a vector.
    All matrices must have the same size.
    """
    if len(matrices) == 0:
        raise NDGeomError('cannot compose an empty list of matrices')
    result = mcopy(matrices[0])
    for m in matrices[1:]:
        if len(m) != len(result):
            raise DimensionMismatch(
                'cannot compose matrices of {} and {} elements'.format(len(result), len(m)),
                {'left': len(result), 'right': len(m)})
        result = multiply(result, m)
    return result


def transform_matrix(dim, scale=None, rotation=None, shear=None, translation=None):
    """Build one matrix applying Scale, then Rotation, then Shear, then Translation.

    ``scale`` is a number (uniform) or a per-axis sequence; ``rotation`` is
    a dim x dim matrix (flat or nested); ``shear`` is a sequence of
    ``(shear_axis, reference_axis, amount)`` tuples applied in order;
    ``translation`` is a dim-vector.  Without a translation the result is
    dim x dim, with one it is the (dim+1) x (dim+1) homogeneous form.
    """
    _check_dim(dim)
    applied = []
    if scale is not None:
        if isinstance(scale, (int, float)):
            applied.append(uniform_scale_matrix(dim, scale))
        else:
            applied.append(scale_matrix(dim, scale))
    if rotation is not None:
        if isnested(rotation):
            rotation = from_rows(rotation)
        if len(rotation) != dim * dim:
            raise DimensionMismatch(
                'rotation matrix has {} elements, expected {}'.format(len(rotation), dim * dim))
        applied.append(rotation)
    for axis, reference, amount in shear or ():
        applied.append(shear_matrix(dim, axis, reference, amount))

    if translation is not None:
        applied = [homogeneous_lift(m) for m in applied]
        applied.append(translation_matrix(dim, translation))
    if not applied:
        return identity(dim + 1 if translation is not None else dim)

    ## reverse so the first transform to apply ends up rightmost
    return compose_transformations(applied[::-1])


def transform_point(m, v):
    """Apply ``m`` to the n-vector ``v``.

    ``m`` may be n x n (linear) or (n+1) x (n+1) (homogeneous, as
    returned by transform_matrix() with a translation).
    """
    if isnested(m):
        m = from_rows(m)
    d, _ = dimensions(m)
    n = len(v)
    if d == n:
        return multiply_vector(m, v)
    if d == n + 1:
        return from_homogeneous(multiply_vector(m, to_homogeneous(v)))
    raise DimensionMismatch(
        'cannot apply {}x{} matrix to {}-vector'.format(d, d, n), {'matrix': d, 'vector': n})
