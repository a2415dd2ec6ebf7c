"""Accumulates vertices and indices and bakes them into packed arrays."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np

from .vertex import BufferAttribute, VertexPosNormTexCol

V = TypeVar("V")

_MAX_INDEX = 2**32


@dataclass(frozen=True, eq=False)
class BakedMesh:
    """Packed vertex and index data, ready to upload to a graphics API."""

    vertex_data: np.ndarray
    index_data: np.ndarray
    attributes: tuple[BufferAttribute, ...]

    @property
    def vertex_count(self) -> int:
        return int(self.vertex_data.shape[0])

    @property
    def index_count(self) -> int:
        return int(self.index_data.shape[0])

    @property
    def stride(self) -> int:
        """Size in bytes of one interleaved vertex."""
        if self.attributes:
            return self.attributes[0].stride
        return int(self.vertex_data.itemsize * self.vertex_data.shape[1])

    @property
    def triangle_count(self) -> int:
        if self.index_count > 0:
            return self.index_count // 3
        return self.vertex_count // 3


class MeshBuilder(Generic[V]):
    """Collects vertices of one layout together with a triangle index list."""

    def __init__(self, vertex_type: type = VertexPosNormTexCol) -> None:
        self.vertex_type = vertex_type
        self.vertices: list[V] = []
        self.indices: list[int] = []

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def index_count(self) -> int:
        return len(self.indices)

    @property
    def triangle_count(self) -> int:
        """Triangles described by the indices, or by the vertices if there are none."""
        if self.indices:
            return len(self.indices) // 3
        return len(self.vertices) // 3

    def add_vertex(self, vertex: V) -> int:
        """Append a vertex and return its index."""
        if not isinstance(vertex, self.vertex_type):
            raise TypeError(
                f"expected a {self.vertex_type.__name__}, got {type(vertex).__name__}"
            )
        self.vertices.append(vertex)
        return len(self.vertices) - 1

    def add_index(self, index: int) -> None:
        """Append one index to the index list."""
        value = operator.index(index)
        if not 0 <= value < _MAX_INDEX:
            raise ValueError(f"index {value} does not fit in 32 unsigned bits")
        self.indices.append(value)

    def add_index_tri(self, a: int, b: int, c: int) -> None:
        """Append a triangle made of three vertex indices."""
        for index in (a, b, c):
            self.add_index(index)

    def bake(self) -> BakedMesh:
        """Pack the vertices as float32 rows and the indices as uint32."""
        width = len(self.vertex_type().to_floats())
        vertex_data = np.array(
            [vertex.to_floats() for vertex in self.vertices], dtype=np.float32
        ).reshape(len(self.vertices), width)
        index_data = np.array(self.indices, dtype=np.uint32)
        attributes = tuple(getattr(self.vertex_type, "V_DECL", ()))
        return BakedMesh(vertex_data, index_data, attributes)