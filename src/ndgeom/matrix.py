## square n-dimensional matrix operations for ndgeom

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

## A matrix is represented as a flat, row-major list of dim*dim
## numbers, so element (i,j) of an n x n matrix lives at m[i*n+j].
## Vectors are lists, and we assume that operations like Mv imply a
## column vector.
##
## A nested list-of-rows form is accepted by the non-hot-path
## functions (dimensions, transpose, determinant, mclose) and can be
## converted with from_rows() and to_rows().

from math import isqrt

from ndgeom import config
from ndgeom.errors import DimensionMismatch, InvalidDimension, InvalidIndex, NotSquareError
from ndgeom.kernel import default_kernel
from ndgeom.vector import isgoodnum


def isnested(m):
    return len(m) > 0 and isinstance(m[0], (list, tuple))


def _flatdim(m):
    n = isqrt(len(m))
    if n * n != len(m) or n == 0:
        raise NotSquareError('matrix with {} elements is not square'.format(len(m)),
                             {'elements': len(m)})
    return n


def from_rows(rows):
    """convert a nested list of rows into a flat row-major matrix"""
    n = len(rows)
    if n == 0:
        raise NotSquareError('cannot build matrix from empty row list')
    flat = []
    for i, row in enumerate(rows):
        if len(row) != n:
            raise NotSquareError(
                'matrix must be square: row {} has {} columns, expected {}'.format(i, len(row), n),
                {'row': i, 'columns': len(row), 'expected': n})
        flat.extend(row)
    return flat


def to_rows(m):
    """convert a flat row-major matrix into a nested list of rows"""
    n = _flatdim(m)
    return [list(m[i*n:(i+1)*n]) for i in range(n)]


def dimensions(m):
    """return ``(rows, cols)`` of a flat or nested matrix"""
    if len(m) == 0:
        return (0, 0)
    if isnested(m):
        return (len(m), len(m[0]))
    n = _flatdim(m)
    return (n, n)


def identity(dim):
    """ n x n identity matrix"""
    if isinstance(dim, bool) or not isinstance(dim, int) or dim <= 0:
        raise InvalidDimension('dimension must be a positive integer: {}'.format(dim))
    m = [0.0] * (dim * dim)
    for i in range(dim):
        m[i*dim+i] = 1.0
    return m


def zeros(rows, cols=None):
    """ rows x cols matrix of zeros, flat row-major"""
    if cols is None:
        cols = rows
    for x in (rows, cols):
        if isinstance(x, bool) or not isinstance(x, int) or x <= 0:
            raise InvalidDimension('matrix dimensions must be positive integers: {}x{}'.format(rows, cols))
    return [0.0] * (rows * cols)


def get(m, i, j):
    """return element (i,j) of flat matrix ``m``"""
    n = _flatdim(m)
    if i < 0 or i >= n or j < 0 or j >= n:
        raise InvalidIndex('bad index passed to get: {},{}'.format(i, j))
    return m[i*n+j]


def put(m, i, j, x):
    """set element (i,j) of flat matrix ``m`` to ``x``"""
    n = _flatdim(m)
    if i < 0 or i >= n or j < 0 or j >= n:
        raise InvalidIndex('bad index passed to put: {},{}'.format(i, j))
    if not isgoodnum(x):
        raise ValueError('bad value passed to put: {}'.format(x))
    m[i*n+j] = x


def _product(target, a, b, n):
    for i in range(n):
        row = i * n
        for j in range(n):
            s = 0.0
            for k in range(n):
                s += a[row+k] * b[k*n+j]
            target[row+j] = s


def multiply_into(out, a, b, kernel=None):
    """Compute ``a * b`` into ``out`` without allocating.

    ``out`` may be the same list as ``a`` or ``b``: in that case the
    product is formed in the kernel's per-dimension scratch matrix and
    copied back, so in-place chains like ``multiply_into(m, m, r)`` are
    correct.  Returns ``out``.
    """
    n = isqrt(len(a))
    if config.VALIDATE:
        n = _flatdim(a)
        if len(b) != len(a) or len(out) != len(a):
            raise DimensionMismatch(
                'matrix sizes incompatible: {}, {} into {}'.format(len(a), len(b), len(out)),
                {'a': len(a), 'b': len(b), 'out': len(out)})
    if out is a or out is b:
        target = (kernel or default_kernel()).scratch(n, 'product')
        _product(target, a, b, n)
        for k in range(n * n):
            out[k] = target[k]
    else:
        _product(out, a, b, n)
    return out


def multiply(a, b, out=None, kernel=None):
    """ matrix product ``a * b``, into ``out`` if supplied"""
    if out is None:
        if config.VALIDATE:
            n = _flatdim(a)
            if len(b) != len(a):
                raise DimensionMismatch(
                    'matrix sizes incompatible: {} and {}'.format(len(a), len(b)),
                    {'a': len(a), 'b': len(b)})
        else:
            n = isqrt(len(a))
        out = [0.0] * (n * n)
        _product(out, a, b, n)
        return out
    return multiply_into(out, a, b, kernel)


def multiply_vector(m, v, out=None):
    """ matrix-vector product ``M v`` treating ``v`` as a column vector"""
    n = len(v)
    if config.VALIDATE and len(m) != n * n:
        raise DimensionMismatch(
            'matrix-vector dimensions incompatible: {} elements and {}-vector'.format(len(m), n),
            {'matrix': len(m), 'vector': n})
    if out is None:
        out = [0.0] * n
    elif out is v:
        v = list(v)
    for i in range(n):
        row = i * n
        s = 0.0
        for j in range(n):
            s += m[row+j] * v[j]
        out[i] = s
    return out


def transpose(m):
    """return the transpose of ``m``, in the same (flat or nested) form"""
    if isnested(m):
        rows = len(m)
        cols = len(m[0])
        return [[m[i][j] for i in range(rows)] for j in range(cols)]
    n = _flatdim(m)
    t = [0.0] * (n * n)
    for i in range(n):
        for j in range(n):
            t[j*n+i] = m[i*n+j]
    return t


def _minor(rows, col):
    return [row[:col] + row[col+1:] for row in rows[1:]]


def _det(rows):
    n = len(rows)
    if n == 1:
        return rows[0][0]
    if n == 2:
        return rows[0][0] * rows[1][1] - rows[0][1] * rows[1][0]
    d = 0.0
    for j in range(n):
        if rows[0][j] == 0:
            continue
        sign = 1.0 if j % 2 == 0 else -1.0
        d += sign * rows[0][j] * _det(_minor(rows, j))
    return d


def determinant(m):
    """Determinant by recursive Laplace expansion along the first row.

    This is O(n!) and intended for tests and occasional checks, not for
    per-frame use.
    """
    if len(m) == 0:
        raise NotSquareError('cannot compute determinant of empty matrix')
    if isnested(m):
        rows = [list(r) for r in m]
        n = len(rows)
        for i, r in enumerate(rows):
            if len(r) != n:
                raise NotSquareError(
                    'matrix must be square: row {} has {} columns, expected {}'.format(i, len(r), n))
    else:
        rows = to_rows(m)
    return _det(rows)


def mclose(a, b, eps=config.COMPARE_EPSILON):
    """are two matrices (flat or nested) the same to within ``eps``"""
    fa = from_rows(a) if isnested(a) else a
    fb = from_rows(b) if isnested(b) else b
    if len(fa) != len(fb):
        return False
    for i in range(len(fa)):
        if abs(fa[i] - fb[i]) >= eps:
            return False
    return True


def mcopy(m, out=None):
    """copy matrix ``m`` into ``out`` (or a fresh list)"""
    if out is None:
        return list(m)
    ## element-wise so typed buffers (array.array, numpy) work as well
    for k in range(len(m)):
        out[k] = m[k]
    return out
