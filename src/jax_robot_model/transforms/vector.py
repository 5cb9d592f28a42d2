"""Vector3 and Euler algebra in JAX.

All functions are pure and operate on the Vector3/Euler PyTrees, so they can
be used inside jitted code. Components of returned values may be JAX scalars.
"""

from typing import Union

import jax
import jax.numpy as jnp

from ..core.types import Euler, Vector3

Array = jax.Array
Scalar = Union[float, Array]


def zero_vector() -> Vector3:
    return Vector3(0.0, 0.0, 0.0)


def zero_euler() -> Euler:
    return Euler(0.0, 0.0, 0.0)


def add_vectors(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)


def subtract_vectors(a: Vector3, b: Vector3) -> Vector3:
    """a - b"""
    return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)


def scale_vector(v: Vector3, s: Scalar) -> Vector3:
    return Vector3(v.x * s, v.y * s, v.z * s)


def vector_magnitude(v: Vector3) -> Array:
    return jnp.linalg.norm(v.to_array())


def normalize_vector(v: Vector3) -> Vector3:
    """
    Scale *v* to unit length.

    The zero vector normalizes to the zero vector rather than NaN, which keeps
    axis handling total for degenerate joints.
    """
    mag = vector_magnitude(v)
    is_zero = mag == 0.0
    # Guard the division so the unused branch stays finite
    inv_mag = jnp.where(is_zero, 0.0, 1.0 / jnp.where(is_zero, 1.0, mag))
    return Vector3.from_array(v.to_array() * inv_mag)


def dot_product(a: Vector3, b: Vector3) -> Scalar:
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross_product(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def distance(a: Vector3, b: Vector3) -> Array:
    return vector_magnitude(subtract_vectors(a, b))


def deg_to_rad(deg: Scalar) -> Scalar:
    return deg * jnp.pi / 180.0


def rad_to_deg(rad: Scalar) -> Scalar:
    return rad * 180.0 / jnp.pi


def clamp(value: Scalar, min_value: Scalar, max_value: Scalar) -> Array:
    return jnp.maximum(min_value, jnp.minimum(max_value, value))


def lerp(a: Scalar, b: Scalar, t: Scalar) -> Scalar:
    return a + (b - a) * t


def lerp_vector(a: Vector3, b: Vector3, t: Scalar) -> Vector3:
    """Componentwise linear interpolation."""
    return Vector3(lerp(a.x, b.x, t), lerp(a.y, b.y, t), lerp(a.z, b.z, t))


def vectors_equal(a: Vector3, b: Vector3, epsilon: float = 1e-4) -> Array:
    """True when every component differs by less than *epsilon*."""
    return jnp.all(jnp.abs(a.to_array() - b.to_array()) < epsilon)


def eulers_equal(a: Euler, b: Euler, epsilon: float = 1e-4) -> Array:
    return jnp.all(jnp.abs(a.to_array() - b.to_array()) < epsilon)
