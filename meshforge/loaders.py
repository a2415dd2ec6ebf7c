"""Readers for the primitive-description format and for Wavefront OBJ meshes."""

from __future__ import annotations

import os
from collections.abc import Iterable

from .mesh_builder import BakedMesh, MeshBuilder
from .mesh_factory import add_cube, add_ico_sphere, add_plane, add_uv_sphere
from .strings import trim
from .vertex import VertexPosNormTexCol

_WHITE = (1.0, 1.0, 1.0, 1.0)
_DEFAULT_NORMAL = (0.0, 0.0, 1.0)
_DEFAULT_UV = (0.0, 0.0)


def _floats(tokens: list[str], count: int, what: str) -> list[float]:
    if len(tokens) < count:
        raise ValueError(f"{what} needs {count} numbers, got {len(tokens)}")
    try:
        return [float(token) for token in tokens[:count]]
    except ValueError as error:
        raise ValueError(f"{what}: {error}") from None


def _optional_color(tokens: list[str], what: str) -> tuple[float, ...]:
    """Read an optional ``r g b [a]`` tail; alpha defaults to one."""
    if not tokens:
        return _WHITE
    if len(tokens) not in (3, 4):
        raise ValueError(f"{what} color needs 3 or 4 numbers, got {len(tokens)}")
    values = _floats(tokens, len(tokens), f"{what} color")
    return tuple(values) + (_WHITE[3],) * (4 - len(values))


def _parse_primitive(mesh: MeshBuilder, line: str) -> None:
    if line.startswith("cube "):
        tokens = line[5:].split()
        values = _floats(tokens, 9, "cube")
        color = _optional_color(tokens[9:], "cube")
        add_cube(mesh, values[0:3], values[3:6], values[6:9], color)
    elif line.startswith("plane "):
        tokens = line[6:].split()
        values = _floats(tokens, 11, "plane")
        color = _optional_color(tokens[11:], "plane")
        add_plane(mesh, values[0:3], values[3:6], values[6:9], values[9:11], color)
    elif line.startswith("sphere "):
        tokens = line[7:].split()
        if len(tokens) < 2:
            raise ValueError("sphere needs a mode and a tessellation level")
        mode = tokens[0]
        try:
            tessellation = int(tokens[1])
        except ValueError:
            raise ValueError(f"sphere tessellation must be an integer: {tokens[1]!r}") from None
        rest = tokens[2:]
        values = _floats(rest, 6, "sphere")
        color = _optional_color(rest[6:], "sphere")
        if mode == "ico":
            add_ico_sphere(mesh, values[0:3], values[3:6], tessellation, color)
        elif mode == "uv":
            add_uv_sphere(mesh, values[0:3], values[3:6], tessellation, color)


def parse_not_obj(lines: Iterable[str] | str) -> MeshBuilder:
    """Build a mesh from ``cube``, ``plane`` and ``sphere`` primitive lines.

    Lines starting with ``#`` and lines with an unknown command are ignored.
    """
    if isinstance(lines, str):
        lines = lines.splitlines()
    mesh: MeshBuilder = MeshBuilder(VertexPosNormTexCol)
    for raw in lines:
        line = trim(raw)
        if line.startswith("#"):
            continue
        _parse_primitive(mesh, line)
    return mesh


def load_not_obj(path: str | os.PathLike) -> BakedMesh:
    """Read a primitive-description file and bake it."""
    with open(path, encoding="utf-8") as handle:
        return parse_not_obj(handle).bake()


def _resolve(index: int, count: int, what: str, *, allow_zero: bool) -> int:
    """Turn a 1-based or negative (relative to the end) OBJ index into 1-based form."""
    if index < 0:
        index = count + 1 + index
        if index < 1:
            raise ValueError(f"{what} index out of range")
    if index == 0:
        if allow_zero:
            return 0
        raise ValueError(f"{what} index must not be zero")
    if index > count:
        raise ValueError(f"{what} index {index} out of range (have {count})")
    return index


def _face_indices(token: str) -> tuple[int, int, int]:
    parts = token.split("/")
    if len(parts) > 3:
        raise ValueError(f"malformed face vertex {token!r}")
    parts += [""] * (3 - len(parts))
    try:
        return tuple(int(part) if part else 0 for part in parts)  # type: ignore[return-value]
    except ValueError:
        raise ValueError(f"malformed face vertex {token!r}") from None


def parse_obj(text: str, color=_WHITE) -> MeshBuilder:
    """Build a mesh from OBJ text, reading ``v``, ``vn``, ``vt`` and ``f`` lines.

    Faces of three or four corners become one or two triangles; corners past
    the fourth are ignored. Identical attribute combinations share a vertex.
    """
    color = tuple(float(c) for c in color)
    if len(color) != 4:
        raise ValueError(f"color needs 4 components, got {len(color)}")

    positions: list[list[float]] = []
    normals: list[list[float]] = []
    uvs: list[list[float]] = []
    index_map: dict[tuple[int, int, int], int] = {}
    mesh: MeshBuilder = MeshBuilder(VertexPosNormTexCol)

    for raw in text.splitlines():
        tokens = trim(raw).split()
        if not tokens:
            continue
        command, args = tokens[0], tokens[1:]
        if command == "v":
            positions.append(_floats(args, 3, "v"))
        elif command == "vn":
            normals.append(_floats(args, 3, "vn"))
        elif command == "vt":
            uvs.append(_floats(args, 2, "vt"))
        elif command == "f":
            corners = []
            for token in args[:4]:
                p, t, n = _face_indices(token)
                key = (
                    _resolve(p, len(positions), "position", allow_zero=False),
                    _resolve(t, len(uvs), "texture", allow_zero=True),
                    _resolve(n, len(normals), "normal", allow_zero=True),
                )
                if key not in index_map:
                    p, t, n = key
                    index_map[key] = mesh.add_vertex(VertexPosNormTexCol(
                        position=positions[p - 1],
                        normal=normals[n - 1] if n else _DEFAULT_NORMAL,
                        uv=uvs[t - 1] if t else _DEFAULT_UV,
                        color=color,
                    ))
                corners.append(index_map[key])
            if len(corners) == 3:
                mesh.add_index_tri(*corners)
            elif len(corners) == 4:
                mesh.add_index_tri(corners[0], corners[1], corners[2])
                mesh.add_index_tri(corners[0], corners[2], corners[3])
    return mesh


def load_obj(path: str | os.PathLike, color=_WHITE) -> BakedMesh:
    """Read an OBJ file and bake it, giving every vertex ``color``."""
    with open(path, encoding="utf-8") as handle:
        return parse_obj(handle.read(), color).bake()