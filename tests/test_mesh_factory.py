import numpy as np
import pytest

from meshforge.mesh_builder import MeshBuilder
from meshforge.mesh_factory import (
    add_cube,
    add_cube_transformed,
    add_ico_sphere,
    add_plane,
    add_uv_sphere,
    invert_faces,
)
from meshforge.vertex import VertexPosCol, VertexPosNormTexCol

RED = (1.0, 0.0, 0.0, 1.0)


def _triangles(mesh, start=0):
    idx = mesh.indices[start:]
    return [tuple(idx[k:k + 3]) for k in range(0, len(idx), 3)]


def _face_normal(mesh, tri):
    p0, p1, p2 = (np.array(mesh.vertices[i].position) for i in tri)
    return np.cross(p1 - p0, p2 - p0)


def _plane_mesh():
    mesh = MeshBuilder()
    add_plane(mesh, (1.0, 2.0, 3.0), (0.0, 0.0, 2.0), (3.0, 0.0, 0.0), (2.0, 4.0), RED)
    return mesh


def test_plane_vertices_lie_in_plane_with_unit_normal():
    mesh = _plane_mesh()
    assert mesh.vertex_count == 4
    assert mesh.index_count == 6
    for vertex in mesh.vertices:
        assert vertex.position[2] == pytest.approx(3.0)
        assert vertex.normal == pytest.approx((0.0, 0.0, 1.0))
        assert vertex.color == RED
    assert sorted(v.uv for v in mesh.vertices) == [(0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0)]


def test_plane_extent_matches_scale():
    mesh = _plane_mesh()
    xs = [v.position[0] for v in mesh.vertices]
    ys = [v.position[1] for v in mesh.vertices]
    assert max(xs) - min(xs) == pytest.approx(2.0)
    assert max(ys) - min(ys) == pytest.approx(4.0)


def test_plane_winding_follows_normal_and_invert_flips_it():
    mesh = _plane_mesh()
    for tri in _triangles(mesh):
        assert _face_normal(mesh, tri)[2] > 0
    invert_faces(mesh)
    for tri in _triangles(mesh):
        assert _face_normal(mesh, tri)[2] < 0


def test_invert_faces_twice_restores_indices():
    mesh = _plane_mesh()
    original = list(mesh.indices)
    invert_faces(mesh)
    assert mesh.indices != original
    assert sorted(mesh.indices) == sorted(original)
    invert_faces(mesh)
    assert mesh.indices == original


def test_invert_faces_without_indices_swaps_vertices():
    mesh = MeshBuilder()
    verts = [VertexPosNormTexCol(position=(x, 0, 0)) for x in range(3)]
    for v in verts:
        mesh.add_vertex(v)
    invert_faces(mesh)
    assert mesh.vertices == [verts[0], verts[2], verts[1]]


def test_plane_zero_normal_rejected():
    with pytest.raises(ValueError):
        add_plane(MeshBuilder(), (0, 0, 0), (0, 0, 0), (1, 0, 0), (1, 1), RED)


def test_cube_counts_and_bounds():
    mesh = MeshBuilder()
    add_cube(mesh, (1.0, -2.0, 3.0), (2.0, 4.0, 6.0), (0.0, 0.0, 0.0), RED)
    assert mesh.vertex_count == 24
    assert mesh.index_count == 36
    positions = np.array([v.position for v in mesh.vertices])
    assert positions.min(axis=0) == pytest.approx([0.0, -4.0, 0.0])
    assert positions.max(axis=0) == pytest.approx([2.0, 0.0, 6.0])


def test_cube_triangles_face_along_vertex_normals():
    mesh = MeshBuilder()
    add_cube(mesh, (0.0, 0.0, 0.0), (1.0, 1.0, 1.0), (30.0, 45.0, 10.0), RED)
    for tri in _triangles(mesh):
        face = _face_normal(mesh, tri)
        assert np.dot(face, mesh.vertices[tri[0]].normal) > 0
    for vertex in mesh.vertices:
        assert np.linalg.norm(vertex.normal) == pytest.approx(1.0)
        assert np.linalg.norm(vertex.position) == pytest.approx(np.sqrt(0.75))


def test_cube_identity_transform_matches_unit_cube():
    mesh = MeshBuilder()
    add_cube_transformed(mesh, np.identity(4), RED)
    for vertex in mesh.vertices:
        assert all(abs(c) == pytest.approx(0.5) for c in vertex.position)
    assert {v.color for v in mesh.vertices} == {RED}


def test_cube_bad_transform_shape():
    with pytest.raises(ValueError):
        add_cube_transformed(MeshBuilder(), np.identity(3), RED)


def test_factory_requires_matching_vertex_type():
    with pytest.raises(TypeError):
        add_cube_transformed(MeshBuilder(VertexPosCol), np.identity(4), RED)


def test_second_primitive_indices_are_offset():
    mesh = MeshBuilder()
    add_plane(mesh, (0, 0, 0), (0, 1, 0), (1, 0, 0), (1, 1), RED)
    before = mesh.vertex_count
    add_cube(mesh, (0, 0, 0), (1, 1, 1), (0, 0, 0), RED)
    assert all(before <= i < mesh.vertex_count for i in mesh.indices[6:])


@pytest.mark.parametrize("tessellation", [0, 1, 2])
def test_ico_sphere_on_ellipsoid(tessellation):
    mesh = MeshBuilder()
    center = np.array([1.0, 2.0, 3.0])
    radii = np.array([2.0, 3.0, 4.0])
    add_ico_sphere(mesh, center, radii, tessellation, RED)
    assert mesh.triangle_count == 20 * 4**tessellation
    assert all(0 <= i < mesh.vertex_count for i in mesh.indices)
    for vertex in mesh.vertices:
        scaled = (np.array(vertex.position) - center) / radii
        assert np.linalg.norm(scaled) == pytest.approx(1.0)
        assert np.linalg.norm(vertex.normal) == pytest.approx(1.0)
        assert vertex.color == RED


@pytest.mark.parametrize("tessellation", [0, 1, 2])
def test_ico_sphere_uv_seams_corrected(tessellation):
    mesh = MeshBuilder()
    add_ico_sphere(mesh, (0, 0, 0), 1.0, tessellation, RED)
    for tri in _triangles(mesh):
        u0, u1, u2 = (mesh.vertices[i].uv[0] for i in tri)
        assert abs(u1 - u0) <= 0.5 + 1e-9
        assert abs(u2 - u0) <= 0.5 + 1e-9


def test_ico_sphere_shares_midpoints():
    mesh = MeshBuilder()
    add_ico_sphere(mesh, (0, 0, 0), 1.0, 1, RED)
    positions = {tuple(np.round(v.position, 9)) for v in mesh.vertices}
    # Each distinct position appears once apart from seam duplicates.
    assert len(positions) == 42


def test_negative_tessellation_rejected():
    with pytest.raises(ValueError):
        add_ico_sphere(MeshBuilder(), (0, 0, 0), 1.0, -1, RED)
    with pytest.raises(ValueError):
        add_uv_sphere(MeshBuilder(), (0, 0, 0), 1.0, -1, RED)


@pytest.mark.parametrize("tessellation", [0, 1, 3])
def test_uv_sphere_geometry(tessellation):
    mesh = MeshBuilder()
    center = np.array([0.5, -1.0, 2.0])
    add_uv_sphere(mesh, center, 2.0, tessellation, RED)
    assert mesh.index_count % 3 == 0
    assert all(0 <= i < mesh.vertex_count for i in mesh.indices)
    for vertex in mesh.vertices:
        assert np.linalg.norm(np.array(vertex.position) - center) == pytest.approx(2.0)
        assert vertex.color == RED
    assert mesh.vertices[0].position == pytest.approx(center + [0.0, 0.0, 2.0])
    assert mesh.vertices[-1].position == pytest.approx(center - [0.0, 0.0, 2.0])
    assert mesh.vertices[0].uv == (0.5, 1.0)
    assert mesh.vertices[-1].uv == (0.5, 0.0)


def test_uv_sphere_lowest_tessellation_vertex_count():
    mesh = MeshBuilder()
    add_uv_sphere(mesh, (0, 0, 0), 1.0, 0, RED)
    assert mesh.vertex_count == 12


def test_uv_sphere_after_existing_geometry():
    mesh = MeshBuilder()
    add_plane(mesh, (0, 0, 0), (0, 1, 0), (1, 0, 0), (1, 1), RED)
    add_uv_sphere(mesh, (0, 0, 0), 1.0, 1, RED)
    assert all(i >= 4 for i in mesh.indices[6:])
    assert mesh.vertices[4].uv == (0.5, 1.0)


def test_baked_sphere_round_trips_vertices():
    mesh = MeshBuilder()
    add_ico_sphere(mesh, (0, 0, 0), 1.0, 1, RED)
    baked = mesh.bake()
    assert baked.vertex_count == mesh.vertex_count
    assert baked.index_data.tolist() == mesh.indices
    assert baked.vertex_data[5].tolist() == pytest.approx(mesh.vertices[5].to_floats(), abs=1e-6)