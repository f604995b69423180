import math
import pytest
from ndgeom.errors import DimensionMismatch
from ndgeom.frame import FrameResult, render_frame
from ndgeom.kernel import Kernel
from ndgeom.projection import DEFAULT_PROJECTION_DISTANCE, project_perspective
from ndgeom.rotation import compose_rotations
from ndgeom.vector import vclose
## unit tests for ndgeom frame.py


def tesseract():
    verts = []
    for k in range(16):
        verts.append([1.0 if k & (1 << b) else -1.0 for b in range(4)])
    edges = []
    for a in range(16):
        for b in range(4):
            other = a ^ (1 << b)
            if a < other:
                edges.append((a, other))
    return verts, edges


class TestRenderFrame:
    """one rotate-and-project step"""

    def test_tesseract_edges(self):
        verts, edges = tesseract()
        assert len(edges) == 32
        angles = {'XW': 0.4, 'YZ': 0.2}
        result = render_frame(verts, angles, edges=edges, kernel=Kernel())
        assert isinstance(result, FrameResult)
        assert len(result.positions) == 32 * 6
        assert len(result.order) == 16
        assert sorted(result.order) == list(range(16))
        assert vclose(result.rotation, compose_rotations(4, angles))
        assert all(math.isfinite(x) for x in result.positions)

    def test_vertices_and_distance(self):
        verts = [[1.0, 0.0, 0.0, 0.0], [0.0, 1.0, 0.0, 0.5]]
        result = render_frame(verts, {}, distance=4.0)
        assert result.distance == 4.0
        assert result.positions[0:3] == pytest.approx([0.25, 0.0, 0.0])
        assert result.positions[3:6] == pytest.approx(project_perspective(verts[1]))
        assert result.order == [1, 0]
        # base vertices are left untouched
        assert verts[0] == [1.0, 0.0, 0.0, 0.0]

    def test_automatic_distance(self):
        result = render_frame([[0.0, 0.0, 0.0, 1.0], [1.0, 0.0, 0.0, -0.5]], {})
        assert result.distance == 3.0

    def test_parameters(self):
        verts = [[1.0, 0.0, 0.0, 0.0]]
        result = render_frame(verts, {}, parameters=[1.0], distance=4.0)
        assert vclose(result.vertices[0], [1.0, 0.0, 0.0, 1.0])
        assert result.positions == pytest.approx([1 / 3, 0.0, 0.0])
        with pytest.raises(DimensionMismatch):
            render_frame(verts, {}, parameters=[1.0, 2.0])

    def test_supplied_buffer(self):
        positions = [0.0] * 8
        result = render_frame([[0.0, 0.0, 2.0]], {'XY': 1.0}, positions=positions,
                              offset=2, distance=4.0)
        assert result.positions is positions
        assert positions[2:5] == pytest.approx([0.0, 0.0, 0.5])
        assert positions[5:] == [0.0, 0.0, 0.0]

    def test_empty(self):
        result = render_frame([], {'XY': 1.0})
        assert result.vertices == [] and result.order == []
        assert result.positions == []
        assert result.distance == DEFAULT_PROJECTION_DISTANCE
        assert render_frame([], {}, distance=2.5).distance == 2.5
