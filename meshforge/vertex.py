"""Vertex layouts and the attribute declarations that describe them."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import IntEnum
from typing import ClassVar

GL_FLOAT = 0x1406
FLOAT_SIZE = 4

_COMPONENTS = {"position": 3, "normal": 3, "uv": 2, "color": 4}


class AttribUsage(IntEnum):
    """The intended meaning of a vertex attribute."""

    UNKNOWN = 0
    POSITION = 1
    COLOR = 2
    COLOR1 = 3
    COLOR2 = 4
    COLOR3 = 5
    TEXTURE = 6
    TEXTURE1 = 7
    TEXTURE2 = 8
    TEXTURE3 = 9
    NORMAL = 10
    TANGENT = 11
    BINORMAL = 12
    USER0 = 13
    USER1 = 14
    USER2 = 15
    USER3 = 16


@dataclass(frozen=True)
class BufferAttribute:
    """Describes how one shader input slot reads from an interleaved buffer."""

    slot: int
    size: int
    type: int
    normalized: bool
    stride: int
    offset: int
    usage: AttribUsage = AttribUsage.UNKNOWN


def _normalize_components(vertex) -> None:
    for f in fields(vertex):
        values = tuple(float(v) for v in getattr(vertex, f.name))
        expected = _COMPONENTS[f.name]
        if len(values) != expected:
            raise ValueError(
                f"{f.name} needs {expected} components, got {len(values)}"
            )
        setattr(vertex, f.name, values)


def _flatten(vertex) -> tuple[float, ...]:
    return tuple(v for f in fields(vertex) for v in getattr(vertex, f.name))


def _declare(cls, order):
    offsets = {}
    offset = 0
    for f in fields(cls):
        offsets[f.name] = offset
        offset += _COMPONENTS[f.name] * FLOAT_SIZE
    return tuple(
        BufferAttribute(slot, _COMPONENTS[name], GL_FLOAT, False, offset, offsets[name], usage)
        for name, slot, usage in order
    )


@dataclass
class VertexPosCol:
    """A vertex with a position and a color."""

    V_DECL: ClassVar[tuple[BufferAttribute, ...]] = ()

    position: tuple[float, ...] = (0.0, 0.0, 0.0)
    color: tuple[float, ...] = (0.0, 0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        _normalize_components(self)

    def to_floats(self) -> tuple[float, ...]:
        """Return the vertex as a flat tuple in memory layout order."""
        return _flatten(self)


@dataclass
class VertexPosNormCol:
    """A vertex with a position, a normal and a color."""

    V_DECL: ClassVar[tuple[BufferAttribute, ...]] = ()

    position: tuple[float, ...] = (0.0, 0.0, 0.0)
    normal: tuple[float, ...] = (0.0, 0.0, 0.0)
    color: tuple[float, ...] = (0.0, 0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        _normalize_components(self)

    def to_floats(self) -> tuple[float, ...]:
        """Return the vertex as a flat tuple in memory layout order."""
        return _flatten(self)


@dataclass
class VertexPosNormTex:
    """A vertex with a position, a normal and texture coordinates."""

    V_DECL: ClassVar[tuple[BufferAttribute, ...]] = ()

    position: tuple[float, ...] = (0.0, 0.0, 0.0)
    normal: tuple[float, ...] = (0.0, 0.0, 0.0)
    uv: tuple[float, ...] = (0.0, 0.0)

    def __post_init__(self) -> None:
        _normalize_components(self)

    def to_floats(self) -> tuple[float, ...]:
        """Return the vertex as a flat tuple in memory layout order."""
        return _flatten(self)


@dataclass
class VertexPosNormTexCol:
    """A vertex with a position, a normal, texture coordinates and a color."""

    V_DECL: ClassVar[tuple[BufferAttribute, ...]] = ()

    position: tuple[float, ...] = (0.0, 0.0, 0.0)
    normal: tuple[float, ...] = (0.0, 0.0, 0.0)
    uv: tuple[float, ...] = (0.0, 0.0)
    color: tuple[float, ...] = (0.0, 0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        _normalize_components(self)

    def to_floats(self) -> tuple[float, ...]:
        """Return the vertex as a flat tuple in memory layout order."""
        return _flatten(self)


VertexPosCol.V_DECL = _declare(
    VertexPosCol,
    [("position", 0, AttribUsage.POSITION), ("color", 1, AttribUsage.COLOR)],
)
VertexPosNormCol.V_DECL = _declare(
    VertexPosNormCol,
    [
        ("position", 0, AttribUsage.POSITION),
        ("color", 1, AttribUsage.COLOR),
        ("normal", 2, AttribUsage.NORMAL),
    ],
)
VertexPosNormTex.V_DECL = _declare(
    VertexPosNormTex,
    [
        ("position", 0, AttribUsage.POSITION),
        ("normal", 2, AttribUsage.NORMAL),
        ("uv", 3, AttribUsage.TEXTURE),
    ],
)
VertexPosNormTexCol.V_DECL = _declare(
    VertexPosNormTexCol,
    [
        ("position", 0, AttribUsage.POSITION),
        ("color", 1, AttribUsage.COLOR),
        ("normal", 2, AttribUsage.NORMAL),
        ("uv", 3, AttribUsage.TEXTURE),
    ],
)