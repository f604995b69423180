"""One animation frame: rotate a vertex set and project it for display.

:func:`render_frame` strings the kernel together in the order a
renderer needs each tick:

1. compose the frame's plane rotations into one matrix,
2. rotate the object's base vertices,
3. shift the higher-dimensional coordinates by the object's parameter
   vector (e.g. the slice offset of a raymarched object),
4. project into a flat position buffer (one entry per vertex, or two
   per edge when ``edges`` is given),
5. order the vertices back to front.
"""

from __future__ import annotations

from collections import namedtuple
from typing import Mapping, Optional, Sequence

from ndgeom import config
from ndgeom.errors import DimensionMismatch
from ndgeom.kernel import Kernel
from ndgeom.projection import (DEFAULT_PROJECTION_DISTANCE, calculate_projection_distance,
                               project_edges_to_positions, project_vertices_to_positions,
                               sort_by_depth)
from ndgeom.rotation import compose_rotations, rotate_vertices


FrameResult = namedtuple('FrameResult', ['rotation', 'vertices', 'positions', 'order', 'distance'])
FrameResult.__doc__ = """Everything the renderer consumes for one frame.

rotation  -- composed rotation matrix (flat, row-major)
vertices  -- rotated n-dimensional vertices
positions -- flat buffer of projected xyz triples
order     -- vertex indices, furthest first
distance  -- projection distance used
"""


def render_frame(base_vertices: Sequence[Sequence[float]],
                 angles: Mapping[str, float], *,
                 edges=None,
                 positions=None,
                 parameters: Optional[Sequence[float]] = None,
                 distance: Optional[float] = None,
                 offset: int = 0,
                 kernel: Optional[Kernel] = None,
                 engine: Optional[str] = None,
                 fast: bool = False) -> FrameResult:
    """Rotate and project ``base_vertices`` for one frame.

    ``angles`` maps plane names to radians in application order.
    ``parameters`` holds one offset per axis past the third and is added
    to those coordinates after rotation.  When ``distance`` is omitted it
    is derived with :func:`calculate_projection_distance`.  ``positions``
    is allocated when not supplied.
    """
    if len(base_vertices) == 0:
        return FrameResult([], [], positions if positions is not None else [], [],
                           distance if distance is not None else DEFAULT_PROJECTION_DISTANCE)
    dim = len(base_vertices[0])
    rotation = compose_rotations(dim, angles, kernel=kernel, engine=engine, fast=fast)
    vertices = rotate_vertices(rotation, base_vertices)

    if parameters is not None and dim > 3:
        if config.VALIDATE and len(parameters) != dim - 3:
            raise DimensionMismatch(
                'expected {} parameters for {}D object, got {}'.format(dim - 3, dim, len(parameters)),
                {'expected': dim - 3, 'actual': len(parameters)})
        for v in vertices:
            for k in range(3, dim):
                v[k] += parameters[k - 3]

    if distance is None:
        distance = calculate_projection_distance(vertices)

    if edges is None:
        if positions is None:
            positions = [0.0] * (offset + 3 * len(vertices))
        project_vertices_to_positions(vertices, positions, distance, offset)
    else:
        if positions is None:
            positions = [0.0] * (offset + 6 * len(edges))
        project_edges_to_positions(vertices, edges, positions, distance, offset)

    order = sort_by_depth(vertices, kernel)
    return FrameResult(rotation, vertices, positions, order, distance)
