# meshforge

Build triangle meshes in Python: add vertices and indices by hand, generate
primitives (cubes, planes, UV spheres and icospheres), read meshes from
Wavefront OBJ text or from a small line-based primitive format, and place
objects with a hierarchical `Transform`. Meshes are baked into packed numpy
arrays together with a description of their vertex layout.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building a mesh

```python
from meshforge.mesh_builder import MeshBuilder
from meshforge.mesh_factory import add_cube, add_uv_sphere, invert_faces
from meshforge.vertex import VertexPosNormTexCol

mesh = MeshBuilder()                      # holds VertexPosNormTexCol vertices
add_cube(mesh, (0, 0, 0), (1, 1, 1), (0, 45, 0), (1, 0, 0, 1))
add_uv_sphere(mesh, (3, 0, 0), (1, 1, 1), 2, (0, 1, 0, 1))

i = mesh.add_vertex(VertexPosNormTexCol(position=(0, 0, 5)))
mesh.add_index_tri(i, i, i)

baked = mesh.bake()
baked.vertex_data      # float32 array, one row per vertex
baked.index_data       # uint32 array
baked.attributes       # tuple of BufferAttribute
baked.triangle_count
```

`MeshBuilder` checks that every vertex is of its `vertex_type` and that every
index fits in 32 unsigned bits. It reports `vertex_count`, `index_count` and
`triangle_count` (counted from the indices, or from the vertices when there
are no indices).

`meshforge.mesh_factory` provides:

- `add_cube(mesh, pos, scale, euler_degrees, color)` and
  `add_cube_transformed(mesh, transform, color)` for a 4x4 matrix;
- `add_plane(mesh, pos, normal, tangent, scale, color)`;
- `add_uv_sphere(mesh, center, radii, tessellation, color)` with
  `2**(tessellation+1) + 1` slices;
- `add_ico_sphere(mesh, center, radii, tessellation, color)`, a subdivided
  icosahedron whose texture seam is repaired by duplicating vertices;
- `invert_faces(mesh)`, which flips the winding of every triangle (of the
  indices, or of the vertices when there are none).

The primitive functions work on meshes of `VertexPosNormTexCol` vertices and
raise `TypeError` otherwise; a negative tessellation raises `ValueError`.

## Vertex types

`meshforge.vertex` defines `VertexPosCol`, `VertexPosNormCol`,
`VertexPosNormTex` and `VertexPosNormTexCol`. Each is a dataclass whose
`to_floats()` returns its components in layout order, and whose `V_DECL`
lists one `BufferAttribute` (slot, size, type, normalized, stride, offset,
`AttribUsage`) per attribute.

`meshforge.cube.cube_vertices()` returns a unit cube as 36
`(position, normal)` pairs, two triangles per face.

## Reading files

```python
from meshforge.loaders import load_obj, load_not_obj, parse_obj, parse_not_obj

teapot = load_obj("teapot.obj", (1, 1, 1, 1))   # BakedMesh
scene = load_not_obj("scene.txt")               # BakedMesh
```

`load_obj` reads `v`, `vn`, `vt` and `f` lines. Faces with three or four
corners become one or two triangles; negative indices count back from the end;
identical attribute combinations share one vertex. Missing normals default to
`(0, 0, 1)` and missing texture coordinates to `(0, 0)`.

The primitive format has one primitive per line; lines starting with `#` and
lines with an unknown command are ignored, and the colour defaults to white
with alpha 1:

```
cube   px py pz  sx sy sz  rx ry rz  [r g b [a]]
plane  px py pz  nx ny nz  tx ty tz  w h  [r g b [a]]
sphere ico|uv tessellation  px py pz  rx ry rz  [r g b [a]]
```

`parse_obj` and `parse_not_obj` take text already in memory and return the
unbaked `MeshBuilder`. Malformed numbers and out-of-range indices raise
`ValueError`.

## Transforms

```python
from meshforge.transform import Transform

root = Transform()
child = Transform()
child.set_parent(root)
child.set_local_position((0, 2, 0)).rotate_local((0, 90, 0))

root.update_world_matrix()     # parents first: a child reads the
child.update_world_matrix()    # parent's stored world matrix
child.world_transform
```

Setters and movers return the transform, so calls chain. Besides the methods
above there are `set_local_rotation`, `set_local_rotation_quat`,
`set_local_scale`, `rotate_local_fixed`, `move_local`, `move_local_fixed`,
`look_at` and `recalculate`; `local_transform`, `normal_matrix`,
`hierarchy_depth`, `parent` and `children` are read-only properties. The
module also exposes quaternion helpers (`quat_from_euler_degrees`,
`euler_degrees_from_quat`, `quat_multiply`, `quat_rotate`, `quat_to_mat4`,
`quat_look_at`), with quaternions ordered `(w, x, y, z)`.

## Process statistics

`meshforge.sysinfo` reports the current process's resident memory
(`memory_usage_bytes`, `_kb`, `_mb`, `_gb`), page-file or virtual memory
(`page_usage_*`), peak memory (`peak_memory_usage_*`) and `cpu_usage()`, the
share of total CPU time used since the previous call (the first call
returns 0.0).

## What it does not do

meshforge only produces data. It does not open windows, talk to a graphics
API, upload buffers, compile shaders or load textures; `BakedMesh` and the
`BufferAttribute` declarations are what you hand to a renderer of your own.