"""
JAX transforms for robot description editing.

This package provides pure, jit-compatible implementations of:
- Vector3 / Euler algebra (vector module)
- Euler, axis-angle and quaternion rotations (rotation module)
- Point and homogeneous transforms (transform module)
- Fixed-precision number formatting (formatting module)
"""

from . import vector
from . import rotation
from . import transform
from . import formatting

from .vector import (
    add_vectors,
    clamp,
    cross_product,
    deg_to_rad,
    distance,
    dot_product,
    eulers_equal,
    lerp,
    lerp_vector,
    normalize_vector,
    rad_to_deg,
    scale_vector,
    subtract_vectors,
    vector_magnitude,
    vectors_equal,
    zero_euler,
    zero_vector,
)
from .rotation import (
    axis_angle_to_matrix,
    euler_to_rotation_matrix,
    matrix_to_quaternion,
    quaternion_to_matrix,
    rotate_vector,
    rotate_vector_around_axis,
)
from .transform import inverse_transform_point, origin_to_matrix, transform_point
from .formatting import format_euler, format_number, format_vector

__all__ = [
    "vector",
    "rotation",
    "transform",
    "formatting",
    "add_vectors",
    "clamp",
    "cross_product",
    "deg_to_rad",
    "distance",
    "dot_product",
    "eulers_equal",
    "lerp",
    "lerp_vector",
    "normalize_vector",
    "rad_to_deg",
    "scale_vector",
    "subtract_vectors",
    "vector_magnitude",
    "vectors_equal",
    "zero_euler",
    "zero_vector",
    "axis_angle_to_matrix",
    "euler_to_rotation_matrix",
    "matrix_to_quaternion",
    "quaternion_to_matrix",
    "rotate_vector",
    "rotate_vector_around_axis",
    "inverse_transform_point",
    "origin_to_matrix",
    "transform_point",
    "format_euler",
    "format_number",
    "format_vector",
]
