import math
from array import array
import pytest
from ndgeom import engines
from ndgeom.errors import InvalidDimension, InvalidIndex, InvalidPlaneName
from ndgeom.kernel import Kernel
from ndgeom.matrix import determinant, identity, mclose, multiply, transpose
from ndgeom.rotation import *
from ndgeom.vector import mag, vclose
## unit tests for ndgeom rotation.py and the composition backends

ENGINES = sorted(engines.ENGINE_REGISTRY)


class TestPlanes:
    """plane enumeration and naming"""

    def test_plane_count(self):
        assert [plane_count(d) for d in range(2, 9)] == [1, 3, 6, 10, 15, 21, 28]
        with pytest.raises(InvalidDimension):
            plane_count(1)

    def test_planes(self):
        p4 = planes(4)
        assert [p.name for p in p4] == ['XY', 'XZ', 'XW', 'YZ', 'YW', 'ZW']
        assert p4[2] == RotationPlane(0, 3, 'XW')
        assert len(planes(7)) == 21
        assert planes(7)[5].name == 'XA6'
        assert planes(8)[-1].name == 'A6A7'
        with pytest.raises(InvalidDimension):
            planes(1)

    def test_planes_cached(self):
        k = Kernel()
        assert planes(5, k) is planes(5, k)
        assert plane_lookup(5, k)['YV'] == (1, 4)

    def test_lookup_read_only(self):
        k = Kernel()
        lookup = plane_lookup(4, k)
        with pytest.raises(TypeError):
            lookup['XY'] = (2, 3)
        assert plane_lookup(4, k)['XY'] == (0, 1)
        r = compose_rotations(4, {'XY': 0.5}, kernel=k)
        assert mclose(r, rotation_matrix(4, 0, 1, 0.5))

    def test_names(self):
        assert axis_name(0) == 'X'
        assert axis_name(5) == 'U'
        assert axis_name(6) == 'A6'
        assert axis_name(12) == 'A12'
        with pytest.raises(InvalidIndex):
            axis_name(-1)
        assert create_plane_name(0, 3) == 'XW'
        assert create_plane_name(3, 0) == 'XW'
        assert create_plane_name(6, 7) == 'A6A7'
        with pytest.raises(InvalidIndex):
            create_plane_name(2, 2)

    def test_parse(self):
        assert parse_plane_name('XY') == (0, 1)
        assert parse_plane_name('WX') == (0, 3)
        assert parse_plane_name('XA6') == (0, 6)
        assert parse_plane_name('A6A7') == (6, 7)
        for bad in ('', 'X', 'XYZ', 'XX', 'xy', 'QX', 'A3X', 'X-Y', None):
            with pytest.raises(InvalidPlaneName):
                parse_plane_name(bad)

    def test_round_trip_names(self):
        for dim in (2, 4, 9):
            for p in planes(dim):
                assert parse_plane_name(p.name) == (p.i, p.j)
                assert create_plane_name(p.i, p.j) == p.name


class TestRotationMatrix:
    def test_basic(self):
        r = rotation_matrix(2, 0, 1, math.pi / 2)
        assert mclose(r, [0, -1, 1, 0])
        v = rotate_vertices(r, [[1.0, 0.0]])[0]
        assert vclose(v, [0.0, 1.0])

    @pytest.mark.parametrize("angle", [0.0, 0.7, -1.3, math.pi, 2 * math.pi + 0.4, -7.5 * math.pi])
    def test_orthogonal(self, angle):
        for dim in (2, 3, 4, 6):
            for p in planes(dim):
                r = rotation_matrix(dim, p.i, p.j, angle)
                assert mclose(multiply(r, transpose(r)), identity(dim), 1e-12)
                assert abs(determinant(r) - 1.0) < 1e-9

    def test_bad_indices(self):
        with pytest.raises(InvalidIndex):
            rotation_matrix(4, 1, 1, 0.5)
        with pytest.raises(InvalidIndex):
            rotation_matrix(4, 2, 1, 0.5)
        with pytest.raises(InvalidIndex):
            rotation_matrix(4, 0, 4, 0.5)
        with pytest.raises(InvalidDimension):
            rotation_matrix(1, 0, 1, 0.5)


@pytest.mark.parametrize('engine', ENGINES)
class TestCompose:
    """composition, run against every registered backend"""

    def test_quarter_turn(self, engine):
        r = compose_rotations(4, {'XY': math.pi / 2}, engine=engine)
        assert vclose(rotate_vertices(r, [[1, 0, 0, 0]])[0], [0, 1, 0, 0])

    def test_empty_is_identity(self, engine):
        assert mclose(compose_rotations(5, {}, engine=engine), identity(5))

    def test_matches_product(self, engine):
        angles = {'XY': 0.3, 'ZW': -1.2, 'XW': 2.1, 'YZ': 0.4}
        expected = identity(4)
        for name, a in angles.items():
            i, j = parse_plane_name(name)
            expected = multiply(expected, rotation_matrix(4, i, j, a))
        assert mclose(compose_rotations(4, angles, engine=engine), expected, 1e-12)

    def test_order_matters(self, engine):
        a = compose_rotations(3, {'XY': 0.5, 'YZ': 0.9}, engine=engine)
        b = compose_rotations(3, [('YZ', 0.9), ('XY', 0.5)], engine=engine)
        assert not mclose(a, b)

    def test_preserves_length(self, engine):
        angles = {p.name: 0.1 * (k + 1) for k, p in enumerate(planes(6))}
        r = compose_rotations(6, angles, engine=engine)
        v = [1.0, -2.0, 0.5, 3.0, 0.25, -1.0]
        assert abs(mag(rotate_vertices(r, [v])[0]) - mag(v)) < 1e-9
        assert abs(determinant(r) - 1.0) < 1e-9

    def test_out(self, engine):
        out = [7.0] * 16
        r = compose_rotations(4, {'ZW': 1.0}, out, engine=engine)
        assert r is out
        assert mclose(out, rotation_matrix(4, 2, 3, 1.0))

    def test_out_array(self, engine):
        out = array('d', [0.0] * 16)
        r = compose_rotations(4, {'XY': 0.5, 'ZW': -0.25}, out, engine=engine)
        assert r is out
        expected = multiply(rotation_matrix(4, 0, 1, 0.5), rotation_matrix(4, 2, 3, -0.25))
        assert mclose(list(out), expected, 1e-12)

    def test_fast(self, engine):
        exact = compose_rotations(4, {'XW': 0.8, 'YZ': -2.0}, engine=engine)
        approx = compose_rotations(4, {'XW': 0.8, 'YZ': -2.0}, engine=engine, fast=True)
        assert mclose(exact, approx, 0.15)
        quarter = compose_rotations(4, {'XY': math.pi / 2}, engine=engine, fast=True)
        assert mclose(quarter, rotation_matrix(4, 0, 1, math.pi / 2), 1e-12)

    def test_unknown_plane(self, engine):
        with pytest.raises(InvalidPlaneName):
            compose_rotations(3, {'XW': 1.0}, engine=engine)
        with pytest.raises(InvalidDimension):
            compose_rotations(1, {}, engine=engine)

    def test_unknown_plane_skipped_without_validation(self, engine, monkeypatch):
        monkeypatch.setattr('ndgeom.config.VALIDATE', False)
        r = compose_rotations(3, {'XW': 1.0, 'XY': 0.5}, engine=engine)
        assert mclose(r, rotation_matrix(3, 0, 1, 0.5))


def test_engines_agree():
    angles = {p.name: 0.37 * (k - 4) for k, p in enumerate(planes(5))}
    results = [compose_rotations(5, angles, engine=name) for name in ENGINES]
    for r in results[1:]:
        assert mclose(results[0], r, 1e-12)


def test_engine_from_environment(monkeypatch):
    monkeypatch.setenv('NDGEOM_ROTATION_ENGINE', 'bogus')
    with pytest.raises(ValueError):
        compose_rotations(3, {'XY': 1.0})
    monkeypatch.setenv('NDGEOM_ROTATION_ENGINE', 'reference')
    assert mclose(compose_rotations(3, {'XY': 1.0}), rotation_matrix(3, 0, 1, 1.0))


def test_available_engines():
    assert 'reference' in engines.available_engines()
    assert engines.get_engine('reference') is engines.reference


def test_rotate_vertices_out():
    r = rotation_matrix(3, 0, 2, math.pi)
    verts = [[1.0, 2.0, 3.0], [0.0, 1.0, 0.0]]
    out = [[0.0] * 3, [0.0] * 3]
    assert rotate_vertices(r, verts, out) is out
    assert vclose(out[0], [-1.0, 2.0, -3.0])
    assert vclose(out[1], [0.0, 1.0, 0.0])
