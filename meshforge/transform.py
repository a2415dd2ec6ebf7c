"""Quaternion helpers and a hierarchical translate-rotate-scale transform.

Quaternions are numpy arrays ordered ``(w, x, y, z)``; matrices act on column
vectors (``matrix @ vector``).
"""

from __future__ import annotations

import math

import numpy as np

_EPSILON = 1e-12


def _vec(values, size: int) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.shape != (size,):
        raise ValueError(f"expected {size} components, got shape {array.shape}")
    return array.copy()


def _normalize(v: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(v))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return v / length


def quat_from_euler_degrees(euler) -> np.ndarray:
    """Build a quaternion from pitch, yaw and roll angles in degrees."""
    half = np.radians(_vec(euler, 3)) * 0.5
    c = np.cos(half)
    s = np.sin(half)
    return np.array([
        c[0] * c[1] * c[2] + s[0] * s[1] * s[2],
        s[0] * c[1] * c[2] - c[0] * s[1] * s[2],
        c[0] * s[1] * c[2] + s[0] * c[1] * s[2],
        c[0] * c[1] * s[2] - s[0] * s[1] * c[2],
    ])


def euler_degrees_from_quat(q) -> np.ndarray:
    """Return the pitch, yaw and roll of a quaternion in degrees."""
    w, x, y, z = _vec(q, 4)

    pitch_y = 2.0 * (y * z + w * x)
    pitch_x = w * w - x * x - y * y + z * z
    if abs(pitch_y) < _EPSILON and abs(pitch_x) < _EPSILON:
        pitch = 2.0 * math.atan2(x, w)
    else:
        pitch = math.atan2(pitch_y, pitch_x)

    yaw = math.asin(min(1.0, max(-1.0, -2.0 * (x * z - w * y))))

    roll_y = 2.0 * (x * y + w * z)
    roll_x = w * w + x * x - y * y - z * z
    if abs(roll_y) < _EPSILON and abs(roll_x) < _EPSILON:
        roll = 0.0
    else:
        roll = math.atan2(roll_y, roll_x)

    return np.degrees([pitch, yaw, roll])


def quat_multiply(a, b) -> np.ndarray:
    """Return the Hamilton product ``a * b``."""
    aw, ax, ay, az = _vec(a, 4)
    bw, bx, by, bz = _vec(b, 4)
    return np.array([
        aw * bw - ax * bx - ay * by - az * bz,
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by + ay * bw + az * bx - ax * bz,
        aw * bz + az * bw + ax * by - ay * bx,
    ])


def quat_rotate(q, v) -> np.ndarray:
    """Rotate vector ``v`` by quaternion ``q``."""
    q = _vec(q, 4)
    v = _vec(v, 3)
    axis = q[1:]
    uv = np.cross(axis, v)
    uuv = np.cross(axis, uv)
    return v + (uv * q[0] + uuv) * 2.0


def _quat_to_mat3(q) -> np.ndarray:
    w, x, y, z = _vec(q, 4)
    return np.array([
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ])


def quat_to_mat4(q) -> np.ndarray:
    """Return the 4x4 rotation matrix of a quaternion."""
    result = np.identity(4)
    result[:3, :3] = _quat_to_mat3(q)
    return result


def _quat_from_columns(columns) -> np.ndarray:
    m = columns  # m[column][row]
    candidates = [
        m[0][0] + m[1][1] + m[2][2],
        m[0][0] - m[1][1] - m[2][2],
        m[1][1] - m[0][0] - m[2][2],
        m[2][2] - m[0][0] - m[1][1],
    ]
    biggest = max(range(4), key=lambda i: candidates[i])
    big = math.sqrt(candidates[biggest] + 1.0) * 0.5
    mult = 0.25 / big
    if biggest == 0:
        return np.array([
            big,
            (m[1][2] - m[2][1]) * mult,
            (m[2][0] - m[0][2]) * mult,
            (m[0][1] - m[1][0]) * mult,
        ])
    if biggest == 1:
        return np.array([
            (m[1][2] - m[2][1]) * mult,
            big,
            (m[0][1] + m[1][0]) * mult,
            (m[2][0] + m[0][2]) * mult,
        ])
    if biggest == 2:
        return np.array([
            (m[2][0] - m[0][2]) * mult,
            (m[0][1] + m[1][0]) * mult,
            big,
            (m[1][2] + m[2][1]) * mult,
        ])
    return np.array([
        (m[0][1] - m[1][0]) * mult,
        (m[2][0] + m[0][2]) * mult,
        (m[1][2] + m[2][1]) * mult,
        big,
    ])


def quat_look_at(direction, up) -> np.ndarray:
    """Return a rotation whose local -Z axis points along ``direction``."""
    back = -_vec(direction, 3)
    right = np.cross(_vec(up, 3), back)
    right = right / math.sqrt(max(1e-5, float(np.dot(right, right))))
    new_up = np.cross(back, right)
    return _quat_from_columns((right, new_up, back))


class Transform:
    """Position, rotation and scale of an object, optionally under a parent."""

    def __init__(self, position=(0.0, 0.0, 0.0), rotation_degrees=(0.0, 0.0, 0.0),
                 scale=(1.0, 1.0, 1.0)):
        self._position = _vec(position, 3)
        self._euler_degrees = _vec(rotation_degrees, 3)
        self._rotation = quat_from_euler_degrees(self._euler_degrees)
        self._scale = _vec(scale, 3)
        self._local_transform = np.identity(4)
        self._normal_matrix = np.identity(3)
        self._world_transform = np.identity(4)
        self._world_normal_matrix = np.identity(3)
        self._is_local_dirty = True
        self._parent: Transform | None = None
        self._children: list[Transform] = []
        self._hierarchy_depth = 0

    # --- state ---------------------------------------------------------

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation.copy()

    @property
    def rotation_euler_degrees(self) -> np.ndarray:
        return self._euler_degrees.copy()

    @property
    def scale(self) -> np.ndarray:
        return self._scale.copy()

    @property
    def parent(self) -> Transform | None:
        return self._parent

    @property
    def children(self) -> tuple[Transform, ...]:
        return tuple(self._children)

    @property
    def hierarchy_depth(self) -> int:
        return self._hierarchy_depth

    @property
    def local_transform(self) -> np.ndarray:
        self._update_local_if_dirty()
        return self._local_transform.copy()

    @property
    def normal_matrix(self) -> np.ndarray:
        self._update_local_if_dirty()
        return self._normal_matrix.copy()

    @property
    def world_transform(self) -> np.ndarray:
        return self._world_transform.copy()

    @property
    def world_normal_matrix(self) -> np.ndarray:
        return self._world_normal_matrix.copy()

    # --- mutation ------------------------------------------------------

    def set_local_rotation(self, euler_degrees) -> Transform:
        """Set the rotation from pitch, yaw and roll in degrees."""
        self._euler_degrees = _vec(euler_degrees, 3)
        self._rotation = quat_from_euler_degrees(self._euler_degrees)
        self._is_local_dirty = True
        return self

    def set_local_rotation_quat(self, quaternion) -> Transform:
        """Set the rotation from a ``(w, x, y, z)`` quaternion."""
        self._rotation = _vec(quaternion, 4)
        self._euler_degrees = euler_degrees_from_quat(self._rotation)
        self._is_local_dirty = True
        return self

    def set_local_position(self, position) -> Transform:
        self._position = _vec(position, 3)
        self._is_local_dirty = True
        return self

    def set_local_scale(self, scale) -> Transform:
        self._scale = _vec(scale, 3)
        self._is_local_dirty = True
        return self

    def rotate_local(self, rotation_degrees) -> Transform:
        """Rotate about the object's own axes."""
        self._rotation = quat_multiply(self._rotation, quat_from_euler_degrees(rotation_degrees))
        self._euler_degrees = euler_degrees_from_quat(self._rotation)
        self._is_local_dirty = True
        return self

    def rotate_local_fixed(self, rotation_degrees) -> Transform:
        """Rotate about the parent's fixed axes."""
        self._rotation = quat_multiply(quat_from_euler_degrees(rotation_degrees), self._rotation)
        self._euler_degrees = euler_degrees_from_quat(self._rotation)
        self._is_local_dirty = True
        return self

    def move_local(self, movement) -> Transform:
        """Move along the object's rotated axes."""
        self._position = self._position + quat_rotate(self._rotation, movement)
        self._is_local_dirty = True
        return self

    def move_local_fixed(self, movement) -> Transform:
        """Move along the parent's fixed axes."""
        self._position = self._position + _vec(movement, 3)
        self._is_local_dirty = True
        return self

    def look_at(self, target) -> Transform:
        """Turn so that the local -Z axis points at ``target``."""
        direction = -_normalize(self._position - _vec(target, 3))
        up = _normalize(quat_rotate(self._rotation, (0.0, 0.0, 1.0)))
        self._rotation = quat_look_at(direction, up)
        self._euler_degrees = euler_degrees_from_quat(self._rotation)
        self._is_local_dirty = True
        return self

    def recalculate(self) -> None:
        """Rebuild the cached local matrices if anything changed."""
        self._update_local_if_dirty()

    def set_parent(self, parent: Transform | None) -> None:
        """Attach to ``parent`` (or detach with ``None``) and refresh depths."""
        node = parent
        while node is not None:
            if node is self:
                raise ValueError("a transform cannot be its own ancestor")
            node = node._parent
        if self._parent is not None:
            self._parent._children.remove(self)
        self._parent = parent
        if parent is not None:
            parent._children.append(self)
        self._refresh_depth()

    def update_world_matrix(self) -> None:
        """Combine the parent's stored world matrix with this local matrix."""
        local = self.local_transform
        if self._parent is not None:
            self._world_transform = self._parent._world_transform @ local
            self._world_normal_matrix = np.linalg.inv(self._world_transform).T[:3, :3]
        else:
            self._world_transform = local
            self._world_normal_matrix = self._normal_matrix.copy()

    # --- internals -----------------------------------------------------

    def _refresh_depth(self) -> None:
        self._hierarchy_depth = 0 if self._parent is None else self._parent._hierarchy_depth + 1
        for child in self._children:
            child._refresh_depth()

    def _update_local_if_dirty(self) -> None:
        if not self._is_local_dirty:
            return
        translation = np.identity(4)
        translation[:3, 3] = self._position
        scaling = np.diag([*self._scale, 1.0])
        self._local_transform = translation @ quat_to_mat4(self._rotation) @ scaling
        self._normal_matrix = np.linalg.inv(self._local_transform).T[:3, :3]
        self._is_local_dirty = False