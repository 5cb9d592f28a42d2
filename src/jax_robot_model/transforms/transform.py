"""Point transforms between a parent frame and a child frame given by an origin."""

import jax
import jax.numpy as jnp

from ..core.types import Euler, Origin, Vector3
from .rotation import euler_to_matrix3, euler_to_rotation_matrix, rotate_vector
from .vector import add_vectors, subtract_vectors

Array = jax.Array


def transform_point(point: Vector3, position: Vector3, rotation: Euler) -> Vector3:
    """Map a child-frame point into the parent frame: rotate, then translate."""
    rotated = rotate_vector(point, euler_to_rotation_matrix(rotation))
    return add_vectors(rotated, position)


def inverse_transform_point(point: Vector3, position: Vector3, rotation: Euler) -> Vector3:
    """
    Approximate inverse of :func:`transform_point`.

    Translates by ``-position`` and rotates by the matrix built from the negated
    Euler angles. This is only an exact inverse when at most one angle is
    non-zero (the true inverse is the transpose of the rotation matrix), but
    placement code built on top of it expects exactly this behaviour.
    """
    translated = subtract_vectors(point, position)
    return rotate_vector(translated, euler_to_rotation_matrix(rotation.negated()))


def from_position_and_rotation(p: Array, R: Array) -> Array:
    """
    Construct a homogeneous transform.

    Args:
        p: (3,) position vector
        R: (3, 3) rotation matrix

    Returns:
        (4, 4) homogeneous transformation matrix
    """
    T = jnp.eye(4, dtype=jnp.result_type(p, R, float))
    T = T.at[:3, :3].set(R)
    T = T.at[:3, 3].set(p)
    return T


def origin_to_matrix(origin: Origin) -> Array:
    """(4, 4) homogeneous matrix of an origin pose."""
    return from_position_and_rotation(origin.xyz.to_array(), euler_to_matrix3(origin.rpy))


def compose(T1: Array, T2: Array) -> Array:
    """T1 @ T2: apply *T2* first, then *T1*."""
    return jnp.matmul(T1, T2)


def apply(T: Array, point: Vector3) -> Vector3:
    """Apply a (4, 4) homogeneous transform to a point."""
    return Vector3.from_array(T[:3, :3] @ point.to_array() + T[:3, 3])


def get_position(T: Array) -> Vector3:
    return Vector3.from_array(T[:3, 3])


def get_rotation(T: Array) -> Array:
    return T[:3, :3]
