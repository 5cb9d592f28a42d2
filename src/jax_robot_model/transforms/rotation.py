"""Rotation construction and application in JAX.

Rotation matrices built from Euler angles are returned as flat 9-element
row-major arrays, the layout origin transforms are exchanged in. Quaternions
use (w, x, y, z) order.
"""

import jax
import jax.numpy as jnp

from ..core.types import Euler, Vector3
from .vector import cross_product, dot_product, normalize_vector

Array = jax.Array


def euler_to_rotation_matrix(euler: Euler) -> Array:
    """
    Build the rotation matrix R = Rz(yaw) @ Ry(pitch) @ Rx(roll).

    Roll is applied first (innermost), matching how URDF-style ``rpy`` origins
    are interpreted.

    Args:
        euler: Roll/pitch/yaw in radians.

    Returns:
        (9,) row-major rotation matrix [m00, m01, m02, m10, ..., m22]
    """
    cr, sr = jnp.cos(euler.r), jnp.sin(euler.r)
    cp, sp = jnp.cos(euler.p), jnp.sin(euler.p)
    cy, sy = jnp.cos(euler.y), jnp.sin(euler.y)

    return jnp.stack([
        cy * cp, cy * sp * sr - sy * cr, cy * sp * cr + sy * sr,
        sy * cp, sy * sp * sr + cy * cr, sy * sp * cr - cy * sr,
        -sp, cp * sr, cp * cr,
    ])


def euler_to_matrix3(euler: Euler) -> Array:
    """Same rotation as :func:`euler_to_rotation_matrix`, shaped (3, 3)."""
    return euler_to_rotation_matrix(euler).reshape(3, 3)


def rotate_vector(v: Vector3, matrix: Array) -> Vector3:
    """
    Apply a rotation matrix to a vector.

    Args:
        v: Vector to rotate.
        matrix: (9,) row-major or (3, 3) rotation matrix.
    """
    m = jnp.reshape(jnp.asarray(matrix), (3, 3))
    return Vector3.from_array(m @ v.to_array())


def rotate_vector_around_axis(v: Vector3, axis: Vector3, angle) -> Vector3:
    """
    Rotate *v* about *axis* by *angle* radians using Rodrigues' formula:

        v_rot = v cos(a) + (k x v) sin(a) + k (k . v)(1 - cos(a))

    where k is the normalized axis. A zero axis leaves only the ``v cos(a)``
    term.
    """
    k = normalize_vector(axis)
    cos_a = jnp.cos(angle)
    sin_a = jnp.sin(angle)

    k_cross_v = cross_product(k, v).to_array()
    k_dot_v = dot_product(k, v)

    rotated = v.to_array() * cos_a + k_cross_v * sin_a + k.to_array() * k_dot_v * (1.0 - cos_a)
    return Vector3.from_array(rotated)


def skew_symmetric(v: Array) -> Array:
    """(3,) vector -> (3, 3) cross-product matrix."""
    return jnp.array([
        [0.0, -v[2], v[1]],
        [v[2], 0.0, -v[0]],
        [-v[1], v[0], 0.0],
    ])


def axis_angle_to_matrix(axis: Vector3, angle) -> Array:
    """
    Rotation about *axis* by *angle* as a (3, 3) matrix.

    R = I + sin(a) K + (1 - cos(a)) K^2 with K the cross-product matrix of the
    normalized axis. A zero axis yields the identity.
    """
    k = skew_symmetric(normalize_vector(axis).to_array())
    return jnp.eye(3) + jnp.sin(angle) * k + (1.0 - jnp.cos(angle)) * (k @ k)


def quaternion_to_matrix(quaternion: Array) -> Array:
    """
    Convert a (w, x, y, z) quaternion to a (3, 3) rotation matrix.

    The quaternion is normalized first.
    """
    q = quaternion / jnp.linalg.norm(quaternion)
    w, x, y, z = q[0], q[1], q[2], q[3]

    xx, yy, zz = x * x, y * y, z * z
    wx, wy, wz = w * x, w * y, w * z
    xy, xz, yz = x * y, x * z, y * z

    return jnp.array([
        [1 - 2 * (yy + zz), 2 * (xy - wz), 2 * (xz + wy)],
        [2 * (xy + wz), 1 - 2 * (xx + zz), 2 * (yz - wx)],
        [2 * (xz - wy), 2 * (yz + wx), 1 - 2 * (xx + yy)],
    ])


def matrix_to_quaternion(matrix: Array) -> Array:
    """
    Convert a (3, 3) rotation matrix to a unit (w, x, y, z) quaternion.

    All four classical candidates are computed and the numerically best one is
    selected, which keeps the function branch-free and jit-able. The result
    has a non-negative scalar part.
    """
    m00, m01, m02 = matrix[0, 0], matrix[0, 1], matrix[0, 2]
    m10, m11, m12 = matrix[1, 0], matrix[1, 1], matrix[1, 2]
    m20, m21, m22 = matrix[2, 0], matrix[2, 1], matrix[2, 2]
    trace = m00 + m11 + m22

    eps = jnp.finfo(jnp.result_type(matrix)).eps

    candidates = jnp.stack([
        jnp.stack([trace + 1.0, m21 - m12, m02 - m20, m10 - m01]),
        jnp.stack([m21 - m12, m00 - m11 - m22 + 1.0, m01 + m10, m02 + m20]),
        jnp.stack([m02 - m20, m01 + m10, m11 - m00 - m22 + 1.0, m12 + m21]),
        jnp.stack([m10 - m01, m02 + m20, m12 + m21, m22 - m00 - m11 + 1.0]),
    ])
    scales = 0.5 / jnp.sqrt(jnp.maximum(
        jnp.stack([1.0 + trace, 1.0 + m00 - m11 - m22, 1.0 + m11 - m00 - m22, 1.0 + m22 - m00 - m11]),
        eps,
    ))

    case = jnp.select(
        [trace > 0, (m00 > m11) & (m00 > m22), m11 > m22],
        [0, 1, 2],
        default=3,
    )
    quaternion = candidates[case] * scales[case]

    quaternion = jnp.where(quaternion[0] < 0, -quaternion, quaternion)
    return quaternion / jnp.linalg.norm(quaternion)
