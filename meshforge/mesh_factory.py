"""Procedural primitives appended to a mesh of ``VertexPosNormTexCol`` vertices."""

from __future__ import annotations

import dataclasses
import math

import numpy as np

from .mesh_builder import MeshBuilder
from .transform import quat_from_euler_degrees, quat_to_mat4
from .vertex import VertexPosNormTexCol as Vertex

_GOLDEN = (1.0 + math.sqrt(5.0)) / 2.0

_ICO_NORMALS = (
    (-1, _GOLDEN, 0), (1, _GOLDEN, 0), (-1, -_GOLDEN, 0), (1, -_GOLDEN, 0),
    (0, -1, _GOLDEN), (0, 1, _GOLDEN), (0, -1, -_GOLDEN), (0, 1, -_GOLDEN),
    (_GOLDEN, 0, -1), (_GOLDEN, 0, 1), (-_GOLDEN, 0, -1), (-_GOLDEN, 0, 1),
)

_ICO_FACES = (
    (0, 11, 5), (0, 5, 1), (0, 1, 7), (0, 7, 10), (0, 10, 11),
    (1, 5, 9), (5, 11, 4), (11, 10, 2), (10, 7, 6), (7, 1, 8),
    (3, 9, 4), (3, 4, 2), (3, 2, 6), (3, 6, 8), (3, 8, 9),
    (4, 9, 5), (2, 4, 11), (6, 2, 10), (8, 6, 7), (9, 8, 1),
)

_CUBE_CORNERS = (
    (-0.5, -0.5, -0.5), (0.5, -0.5, -0.5), (-0.5, 0.5, -0.5), (0.5, 0.5, -0.5),
    (-0.5, -0.5, 0.5), (0.5, -0.5, 0.5), (-0.5, 0.5, 0.5), (0.5, 0.5, 0.5),
)
_CUBE_NORMALS = (
    (-1.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, -1.0, 0.0),
    (0.0, 1.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, 1.0),
)
_CUBE_UVS = ((1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0))
# (normal index, ((corner index, uv index), ...)) for bottom, top, left, right, front, back
_CUBE_FACES = (
    (4, ((0, 3), (2, 2), (3, 1), (1, 0))),
    (5, ((6, 0), (4, 1), (5, 2), (7, 3))),
    (0, ((0, 0), (4, 1), (6, 2), (2, 3))),
    (1, ((3, 0), (7, 1), (5, 2), (1, 3))),
    (3, ((2, 0), (6, 1), (7, 2), (3, 3))),
    (2, ((1, 0), (5, 1), (4, 2), (0, 3))),
)


def _require(mesh: MeshBuilder) -> None:
    if mesh.vertex_type is not Vertex:
        raise TypeError("mesh must hold VertexPosNormTexCol vertices")


def _vec(values, size: int) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.shape != (size,):
        raise ValueError(f"expected {size} components, got shape {array.shape}")
    return array


def _radii(values) -> np.ndarray:
    return np.broadcast_to(np.asarray(values, dtype=float), (3,)).copy()


def _color(values) -> tuple[float, ...]:
    return tuple(float(v) for v in _vec(values, 4))


def _normalize(v: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(v))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return v / length


def _sphere_uv(direction: np.ndarray) -> tuple[float, float]:
    u = math.atan2(direction[1], direction[0]) / (2.0 * math.pi)
    v = math.asin(min(1.0, max(-1.0, float(direction[2])))) / math.pi + 0.5
    return (u, v)


def _sphere_vertex(direction, radii: np.ndarray, center: np.ndarray) -> Vertex:
    normal = _normalize(np.asarray(direction, dtype=float))
    return Vertex(position=center + normal * radii, normal=normal, uv=_sphere_uv(normal))


def _middle_point(a: int, b: int, radii, center, vertices: list, cache: dict) -> int:
    key = (min(a, b), max(a, b))
    if key in cache:
        return cache[key]
    p1, p2 = vertices[a], vertices[b]
    normal = _normalize((np.array(p1.normal) + np.array(p2.normal)) / 2.0)
    color = (np.array(p1.color) + np.array(p2.color)) / 2.0
    vertices.append(
        Vertex(position=center + normal * radii, normal=normal, uv=_sphere_uv(normal), color=color)
    )
    cache[key] = len(vertices) - 1
    return cache[key]


def _correct_uv_seams(vertices: list, indices: list, offset: int) -> None:
    """Duplicate vertices of triangles that straddle the u wrap-around."""

    def split(slot: int, uv) -> None:
        source = vertices[indices[slot]]
        indices[slot] = len(vertices)
        vertices.append(dataclasses.replace(source, uv=uv))

    first = offset // 3
    count = (len(indices) - offset) // 3
    for triangle in range(first, first + count):
        base = triangle * 3
        uv0, uv1, uv2 = (vertices[indices[base + k]].uv for k in range(3))
        d1 = uv1[0] - uv0[0]
        d2 = uv2[0] - uv0[0]
        if abs(d1) > 0.5 and abs(d2) > 0.5:
            split(base, (uv0[0] + (1.0 if d1 > 0.0 else -1.0), uv0[1]))
        elif abs(d1) > 0.5:
            split(base + 1, (uv1[0] + (1.0 if d1 < 0.0 else -1.0), uv1[1]))
        elif abs(d2) > 0.5:
            split(base + 2, (uv2[0] + (1.0 if d2 < 0.0 else -1.0), uv2[1]))


def add_ico_sphere(mesh: MeshBuilder, center, radii, tessellation: int, color) -> None:
    """Append a subdivided icosahedron projected onto an ellipsoid."""
    _require(mesh)
    if tessellation < 0:
        raise ValueError("tessellation must not be negative")
    center = _vec(center, 3)
    radii = _radii(radii)
    color = _color(color)
    vertices, indices = mesh.vertices, mesh.indices
    offset = len(vertices)
    initial_index = len(indices)

    vertices.extend(_sphere_vertex(n, radii, center) for n in _ICO_NORMALS)
    faces = [tuple(offset + i for i in face) for face in _ICO_FACES]

    cache: dict[tuple[int, int], int] = {}
    for _ in range(tessellation):
        refined = []
        for i0, i1, i2 in faces:
            a = _middle_point(i0, i1, radii, center, vertices, cache)
            b = _middle_point(i1, i2, radii, center, vertices, cache)
            c = _middle_point(i2, i0, radii, center, vertices, cache)
            refined.extend(((i0, a, c), (i1, b, a), (i2, c, b), (a, b, c)))
        faces = refined

    for face in faces:
        mesh.add_index_tri(*face)
    for vertex in vertices[offset:]:
        vertex.color = color
    _correct_uv_seams(vertices, indices, initial_index)


def add_uv_sphere(mesh: MeshBuilder, center, radii, tessellation: int, color) -> None:
    """Append a latitude/longitude sphere with ``2**(tessellation+1) + 1`` slices."""
    _require(mesh)
    if tessellation < 0:
        raise ValueError("tessellation must not be negative")
    center = _vec(center, 3)
    radii = _radii(radii)
    color = _color(color)
    slices = 1 + 2 ** (tessellation + 1)
    stacks = slices // 2 + 1
    vertices = mesh.vertices
    offset = len(vertices)

    d_long = 2.0 * math.pi / slices
    d_lat = math.pi / stacks
    for i in range(stacks + 1):
        stack_angle = math.pi / 2.0 - i * d_lat
        xy = math.cos(stack_angle)
        z = math.sin(stack_angle)
        for j in range(slices + 1):
            slice_angle = j * d_long
            normal = np.array([xy * math.cos(slice_angle), xy * math.sin(slice_angle), z])
            vertices.append(Vertex(
                position=center + normal * radii,
                normal=normal,
                uv=(j / slices, 1.0 - i / stacks),
                color=color,
            ))
    vertices[offset].uv = (0.5, 1.0)
    vertices[-1].uv = (0.5, 0.0)

    for i in range(stacks):
        k1 = i * (slices + 1)
        k2 = k1 + slices + 1
        for j in range(slices):
            top, bottom = offset + k1 + j, offset + k2 + j
            if i != 0:
                mesh.add_index_tri(top, bottom, top + 1)
            if i != stacks - 1:
                mesh.add_index_tri(top + 1, bottom, bottom + 1)


def add_plane(mesh: MeshBuilder, pos, normal, tangent, scale, color) -> None:
    """Append a quad centred on ``pos`` facing ``normal``."""
    _require(mesh)
    pos = _vec(pos, 3)
    n = _normalize(_vec(normal, 3))
    t = _normalize(_vec(tangent, 3))
    binormal = np.cross(n, t)
    half = _vec(scale, 2) / 2.0
    color = _color(color)
    corners = (
        (pos - t * half[0] - binormal * half[1], (0.0, 0.0)),
        (pos - t * half[0] + binormal * half[1], (0.0, 1.0)),
        (pos + t * half[0] + binormal * half[1], (1.0, 1.0)),
        (pos + t * half[0] - binormal * half[1], (1.0, 0.0)),
    )
    p1, p2, p3, p4 = (
        mesh.add_vertex(Vertex(position=p, normal=n, uv=uv, color=color)) for p, uv in corners
    )
    mesh.add_index_tri(p1, p3, p2)
    mesh.add_index_tri(p1, p4, p3)


def invert_faces(mesh: MeshBuilder) -> None:
    """Reverse the winding of every triangle in the mesh."""
    items = mesh.indices if mesh.indices else mesh.vertices
    for base in range(0, len(items) - 2, 3):
        items[base + 1], items[base + 2] = items[base + 2], items[base + 1]


def add_cube(mesh: MeshBuilder, pos, scale, euler_degrees, color) -> None:
    """Append a cube translated, rotated (Euler degrees) and scaled."""
    translation = np.identity(4)
    translation[:3, 3] = _vec(pos, 3)
    scaling = np.diag([*_vec(scale, 3), 1.0])
    rotation = quat_to_mat4(quat_from_euler_degrees(euler_degrees))
    add_cube_transformed(mesh, translation @ rotation @ scaling, color)


def add_cube_transformed(mesh: MeshBuilder, transform, color) -> None:
    """Append a unit cube transformed by a 4x4 matrix acting on column vectors."""
    _require(mesh)
    matrix = np.asarray(transform, dtype=float)
    if matrix.shape != (4, 4):
        raise ValueError(f"transform must be 4x4, got shape {matrix.shape}")
    color = _color(color)
    positions = [(matrix @ np.array([*corner, 1.0]))[:3] for corner in _CUBE_CORNERS]
    rotation = matrix[:3, :3]
    normals = [rotation @ np.array(normal) for normal in _CUBE_NORMALS]

    for normal_index, corners in _CUBE_FACES:
        a, b, c, d = (
            mesh.add_vertex(Vertex(
                position=positions[corner],
                normal=normals[normal_index],
                uv=_CUBE_UVS[uv],
                color=color,
            ))
            for corner, uv in corners
        )
        mesh.add_index_tri(a, b, c)
        mesh.add_index_tri(a, c, d)