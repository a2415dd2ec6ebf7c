"""A unit cube as a flat list of positions and normals, two triangles per face."""

from __future__ import annotations

CUBE_DATA: tuple[tuple[float, float, float, float, float, float], ...] = (
    (-0.5, 0.5, 0.5, 0.0, 1.0, 0.0),
    (0.5, 0.5, -0.5, 0.0, 1.0, 0.0),
    (-0.5, 0.5, -0.5, 0.0, 1.0, 0.0),
    (0.5, 0.5, 0.5, 1.0, 0.0, 0.0),
    (0.5, -0.5, -0.5, 1.0, 0.0, 0.0),
    (0.5, 0.5, -0.5, 1.0, 0.0, 0.0),
    (0.5, -0.5, 0.5, 0.0, -1.0, 0.0),
    (-0.5, -0.5, -0.5, 0.0, -1.0, 0.0),
    (0.5, -0.5, -0.5, 0.0, -1.0, 0.0),
    (-0.5, -0.5, 0.5, -1.0, 0.0, 0.0),
    (-0.5, 0.5, -0.5, -1.0, 0.0, 0.0),
    (-0.5, -0.5, -0.5, -1.0, 0.0, 0.0),
    (0.5, -0.5, -0.5, 0.0, 0.0, -1.0),
    (-0.5, 0.5, -0.5, 0.0, 0.0, -1.0),
    (0.5, 0.5, -0.5, 0.0, 0.0, -1.0),
    (0.5, 0.5, 0.5, 0.0, 0.0, 1.0),
    (-0.5, -0.5, 0.5, 0.0, 0.0, 1.0),
    (0.5, -0.5, 0.5, 0.0, 0.0, 1.0),
    (-0.5, 0.5, 0.5, 0.0, 1.0, 0.0),
    (0.5, 0.5, 0.5, 0.0, 1.0, 0.0),
    (0.5, 0.5, -0.5, 0.0, 1.0, 0.0),
    (0.5, 0.5, 0.5, 1.0, 0.0, 0.0),
    (0.5, -0.5, 0.5, 1.0, 0.0, 0.0),
    (0.5, -0.5, -0.5, 1.0, 0.0, 0.0),
    (0.5, -0.5, 0.5, 0.0, -1.0, 0.0),
    (-0.5, -0.5, 0.5, 0.0, -1.0, 0.0),
    (-0.5, -0.5, -0.5, 0.0, -1.0, 0.0),
    (-0.5, -0.5, 0.5, -1.0, 0.0, 0.0),
    (-0.5, 0.5, 0.5, -1.0, 0.0, 0.0),
    (-0.5, 0.5, -0.5, -1.0, 0.0, 0.0),
    (0.5, -0.5, -0.5, 0.0, 0.0, -1.0),
    (-0.5, -0.5, -0.5, 0.0, 0.0, -1.0),
    (-0.5, 0.5, -0.5, 0.0, 0.0, -1.0),
    (0.5, 0.5, 0.5, 0.0, 0.0, 1.0),
    (-0.5, 0.5, 0.5, 0.0, 0.0, 1.0),
    (-0.5, -0.5, 0.5, 0.0, 0.0, 1.0),
)


def cube_vertices() -> list[tuple[tuple[float, float, float], tuple[float, float, float]]]:
    """Return the cube's 36 vertices as ``(position, normal)`` pairs."""
    return [(row[:3], row[3:]) for row in CUBE_DATA]