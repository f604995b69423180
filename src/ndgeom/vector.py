## dense n-dimensional vector operations for ndgeom

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

"""dense n-dimensional vector operations

Vectors are plain Python lists of numbers; their dimension is their
length.  Any sequence is accepted as an input.  Functions that produce
a vector accept an optional ``out`` list which is overwritten in place
and returned, so per-frame code can avoid allocation.

Length checks on pairwise operations only run while
``ndgeom.config.VALIDATE`` is true.
"""

from math import sqrt

from ndgeom import config
from ndgeom.errors import DegenerateVector, DimensionMismatch, InvalidDimension


def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, (int, float))


def _check_pair(a, b, op):
    if len(a) != len(b):
        raise DimensionMismatch(
            'vector dimensions must match for {}: {} != {}'.format(op, len(a), len(b)),
            {'left': len(a), 'right': len(b)})


def vect(dim, fill=0.0):
    """create a vector of dimension ``dim`` filled with ``fill``"""
    if isinstance(dim, bool) or not isinstance(dim, int) or dim <= 0:
        raise InvalidDimension('vector dimension must be a positive integer: {}'.format(dim))
    return [fill] * dim


def add(a, b, out=None):
    """ element-wise `a + b`"""
    if config.VALIDATE:
        _check_pair(a, b, 'add')
    n = len(a)
    r = out if out is not None else [0.0] * n
    for i in range(n):
        r[i] = a[i] + b[i]
    return r


def sub(a, b, out=None):
    """ element-wise `a - b`"""
    if config.VALIDATE:
        _check_pair(a, b, 'sub')
    n = len(a)
    r = out if out is not None else [0.0] * n
    for i in range(n):
        r[i] = a[i] - b[i]
    return r


def scale(a, c, out=None):
    """ vector ``a`` times scalar ``c``"""
    n = len(a)
    r = out if out is not None else [0.0] * n
    for i in range(n):
        r[i] = a[i] * c
    return r


def dot(a, b):
    """ ``a`` dot ``b`` """
    if config.VALIDATE:
        _check_pair(a, b, 'dot')
    s = 0.0
    for i in range(len(a)):
        s += a[i] * b[i]
    return s


def mag(a):
    """ euclidean magnitude of ``a``"""
    s = 0.0
    for x in a:
        s += x * x
    return sqrt(s)


def normalize(a, out=None):
    """return the unit vector in the direction of ``a``

    Raises ``DegenerateVector`` when the magnitude is below
    ``config.DEGENERATE_EPSILON``.
    """
    m = mag(a)
    if m < config.DEGENERATE_EPSILON:
        raise DegenerateVector('cannot normalize zero-length vector', {'magnitude': m})
    return scale(a, 1.0 / m, out)


## compare vectors to within eps; vectors of different dimension are
## never close
def vclose(a, b, eps=config.COMPARE_EPSILON):
    if len(a) != len(b):
        return False
    for i in range(len(a)):
        if abs(a[i] - b[i]) >= eps:
            return False
    return True


def vcopy(a, out=None):
    """copy ``a`` into ``out`` (or a fresh list)"""
    if out is None:
        return list(a)
    for i in range(len(a)):
        out[i] = a[i]
    return out


def dist2(a, b):
    """ squared euclidean distance between ``a`` and ``b``"""
    if config.VALIDATE:
        _check_pair(a, b, 'dist2')
    s = 0.0
    for i in range(len(a)):
        d = a[i] - b[i]
        s += d * d
    return s


def dist(a, b):
    """ euclidean distance between ``a`` and ``b``"""
    return sqrt(dist2(a, b))
