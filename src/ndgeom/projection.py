"""Projection of n-dimensional points onto the three display axes.

Perspective projection uses a single division.  The first three
coordinates are kept, every coordinate past the third is summed into one
*effective depth* ``w = sum(v[3:]) / sqrt(n - 3)``, and

    (x', y', z') = (x, y, z) / (d - w)

where ``d`` is the projection distance.  Dividing once per dimension
instead would shrink the image geometrically with every extra axis.
When ``|d - w|`` drops below :data:`MIN_SAFE_DISTANCE` the signed minimum
is used instead, so points crossing the projection plane during
animation stay finite.

The ``*_to_positions`` functions write straight into a caller-owned flat
float buffer (a list, ``array.array`` or numpy array) ready for upload
to a vertex buffer.
"""

from __future__ import annotations

from math import sqrt
from typing import List, Optional, Sequence, Tuple

from ndgeom import config
from ndgeom.errors import BufferTooSmall, DimensionMismatch, NDGeomError
from ndgeom.kernel import Kernel, default_kernel

DEFAULT_PROJECTION_DISTANCE = 4.0

MIN_SAFE_DISTANCE = 0.01


def _normalization(dim):
    return sqrt(dim - 3) if dim > 3 else 1.0


def _inverse_denominator(vertex, distance, norm):
    depth = 0.0
    for k in range(3, len(vertex)):
        depth += vertex[k]
    denominator = distance - depth / norm
    if abs(denominator) < MIN_SAFE_DISTANCE:
        denominator = MIN_SAFE_DISTANCE if denominator >= 0 else -MIN_SAFE_DISTANCE
    return 1.0 / denominator


def _check_projectable(dim, distance):
    if dim < 3:
        raise DimensionMismatch(
            'cannot project {}D vertex to 3D: need at least 3 dimensions'.format(dim),
            {'dimension': dim})
    if distance <= 0:
        raise NDGeomError('projection distance must be positive: {}'.format(distance))


def project_perspective(vertex: Sequence[float],
                        distance: float = DEFAULT_PROJECTION_DISTANCE,
                        out: Optional[List[float]] = None,
                        normalization: Optional[float] = None) -> List[float]:
    """Project ``vertex`` to 3D with one perspective division.

    ``normalization`` may carry a precomputed ``sqrt(n - 3)`` when
    projecting many vertices of the same dimension.
    """
    if config.VALIDATE:
        _check_projectable(len(vertex), distance)
    norm = normalization if normalization is not None else _normalization(len(vertex))
    inv = _inverse_denominator(vertex, distance, norm)
    result = out if out is not None else [0.0, 0.0, 0.0]
    result[0] = vertex[0] * inv
    result[1] = vertex[1] * inv
    result[2] = vertex[2] * inv
    return result


def project_orthographic(vertex: Sequence[float],
                         out: Optional[List[float]] = None) -> List[float]:
    """Drop every coordinate past the third."""
    if config.VALIDATE and len(vertex) < 3:
        raise DimensionMismatch(
            'cannot project {}D vertex to 3D: need at least 3 dimensions'.format(len(vertex)))
    result = out if out is not None else [0.0, 0.0, 0.0]
    result[0] = vertex[0]
    result[1] = vertex[1]
    result[2] = vertex[2]
    return result


def _check_uniform(vertices):
    dim = len(vertices[0])
    for k in range(1, len(vertices)):
        if len(vertices[k]) != dim:
            raise DimensionMismatch(
                'all vertices must have the same dimension: vertex 0 has {}, vertex {} has {}'.format(
                    dim, k, len(vertices[k])),
                {'index': k, 'expected': dim, 'actual': len(vertices[k])})
    return dim


def project_vertices(vertices: Sequence[Sequence[float]],
                     distance: float = DEFAULT_PROJECTION_DISTANCE,
                     perspective: bool = True) -> List[List[float]]:
    """Project a vertex set that shares one dimension."""
    if len(vertices) == 0:
        return []
    dim = _check_uniform(vertices)
    if not perspective:
        return [project_orthographic(v) for v in vertices]
    norm = _normalization(dim)
    return [project_perspective(v, distance, None, norm) for v in vertices]


def calculate_depth(vertex: Sequence[float]) -> float:
    """Euclidean length of the coordinates past the third (0 for 3D)."""
    s = 0.0
    for k in range(3, len(vertex)):
        s += vertex[k] * vertex[k]
    return sqrt(s)


def sort_by_depth(vertices: Sequence[Sequence[float]],
                  kernel: Optional[Kernel] = None) -> List[int]:
    """Vertex indices ordered furthest first, for back-to-front painting.

    Equal depths keep their original relative order.
    """
    n = len(vertices)
    depths = (kernel or default_kernel()).depth_scratch(n)
    for k in range(n):
        depths[k] = calculate_depth(vertices[k])
    return sorted(range(n), key=depths.__getitem__, reverse=True)


def calculate_projection_distance(vertices: Sequence[Sequence[float]],
                                  margin: float = 2.0) -> float:
    """Projection distance that keeps ``d - w`` clear of zero for ``vertices``.

    ``margin * max|higher-dimensional coordinate| + 1``, or the default
    distance when there are no coordinates past the third.
    """
    if len(vertices) == 0 or len(vertices[0]) <= 3:
        return DEFAULT_PROJECTION_DISTANCE
    largest = 0.0
    for v in vertices:
        for k in range(3, len(v)):
            a = abs(v[k])
            if a > largest:
                largest = a
    return largest * margin + 1.0


def clip_line(v1: Sequence[float], v2: Sequence[float],
              distance: float) -> Optional[Tuple[Sequence[float], Sequence[float]]]:
    """Decide whether the segment ``v1``-``v2`` should be drawn.

    Returns ``(v1, v2)`` when both endpoints are in front of the
    projection plane and ``None`` otherwise.  The side test uses the last
    coordinate.  A segment that crosses the plane is dropped rather than
    cut at the crossing point.
    """
    if len(v1) != len(v2):
        raise DimensionMismatch(
            'vertices must have the same dimension: {} != {}'.format(len(v1), len(v2)))
    if len(v1) <= 3:
        return (v1, v2)
    d1 = distance - v1[-1]
    d2 = distance - v2[-1]
    if d1 > MIN_SAFE_DISTANCE and d2 > MIN_SAFE_DISTANCE:
        return (v1, v2)
    # both behind, or crossing: not drawn
    return None


def project_vertices_to_positions(vertices: Sequence[Sequence[float]], positions,
                                  distance: float = DEFAULT_PROJECTION_DISTANCE,
                                  offset: int = 0) -> int:
    """Write the perspective projection of each vertex into ``positions``.

    Vertex ``k`` lands at ``positions[offset + 3k : offset + 3k + 3]``.
    Returns the number of vertices written.
    """
    count = len(vertices)
    if count == 0:
        return 0
    dim = len(vertices[0])
    if config.VALIDATE:
        _check_projectable(dim, distance)
        needed = offset + count * 3
        if len(positions) < needed:
            raise BufferTooSmall(
                'position buffer too small: need {}, have {}'.format(needed, len(positions)),
                {'needed': needed, 'available': len(positions)})
    norm = _normalization(dim)
    p = offset
    for v in vertices:
        inv = _inverse_denominator(v, distance, norm)
        positions[p] = v[0] * inv
        positions[p+1] = v[1] * inv
        positions[p+2] = v[2] * inv
        p += 3
    return count


def project_edges_to_positions(vertices: Sequence[Sequence[float]],
                               edges: Sequence[Tuple[int, int]], positions,
                               distance: float = DEFAULT_PROJECTION_DISTANCE,
                               offset: int = 0) -> int:
    """Write both projected endpoints of every edge into ``positions``.

    Edge ``k`` occupies six floats starting at ``offset + 6k``, the
    layout used for line-segment geometry.  An edge that refers to a
    missing vertex is written as zeros.  Returns the number of edges
    written.
    """
    count = len(edges)
    if count == 0:
        return 0
    nverts = len(vertices)
    if config.VALIDATE:
        needed = offset + count * 6
        if len(positions) < needed:
            raise BufferTooSmall(
                'position buffer too small: need {}, have {}'.format(needed, len(positions)),
                {'needed': needed, 'available': len(positions)})
        if nverts:
            _check_projectable(len(vertices[0]), distance)
    norm = _normalization(len(vertices[0])) if nverts else 1.0
    p = offset
    for a, b in edges:
        if a < 0 or b < 0 or a >= nverts or b >= nverts:
            for k in range(6):
                positions[p+k] = 0.0
        else:
            va = vertices[a]
            vb = vertices[b]
            inv = _inverse_denominator(va, distance, norm)
            positions[p] = va[0] * inv
            positions[p+1] = va[1] * inv
            positions[p+2] = va[2] * inv
            inv = _inverse_denominator(vb, distance, norm)
            positions[p+3] = vb[0] * inv
            positions[p+4] = vb[1] * inv
            positions[p+5] = vb[2] * inv
        p += 6
    return count
