"""Inertia tensor analysis for visualization.

This module provides a jit-compatible Jacobi eigen-decomposition for symmetric
3x3 matrices and the derivation of a uniform-density box whose inertia matches
a link's inertia tensor, used to draw an inertia gizmo. Both are best-effort:
the decomposition always returns after a fixed iteration budget and the box
falls back to approximate values instead of failing on non-physical tensors.
"""

import logging
from typing import Optional

import jax
import jax.numpy as jnp
from flax import struct

from .core.types import Inertial
from .transforms.rotation import matrix_to_quaternion

Array = jax.Array

logger = logging.getLogger(__name__)

MAX_JACOBI_ITERATIONS = 50
OFF_DIAGONAL_TOLERANCE = 1e-10

MIN_MASS = 0.001  # 1 g
MIN_INERTIA = 1e-12
MIN_SQUARED_DIMENSION = 1e-6
MIN_BOX_SIZE = 0.005
MAX_BOX_SIZE = 2.0

# (p, q) index pairs of the upper off-diagonal entries
_PAIRS = jnp.array([[0, 1], [0, 2], [1, 2]])


@struct.dataclass
class EigenDecomposition:
    """
    Attributes:
        eigenvalues: (3,) final diagonal, unsorted.
        eigenvectors: (3, 3) array whose row i is the eigenvector of eigenvalues[i].
    """
    eigenvalues: Array
    eigenvectors: Array


@struct.dataclass
class InertiaBox:
    """
    Box with the same principal inertias as a link.

    Attributes:
        width: Extent along the box x axis.
        height: Extent along the box y axis.
        depth: Extent along the box z axis.
        rotation: (4,) quaternion (w, x, y, z) aligning the box with the principal axes.
    """
    width: float
    height: float
    depth: float
    rotation: Array


def _off_diagonal(a: Array) -> Array:
    return jnp.stack([a[0, 1], a[0, 2], a[1, 2]])


def _jacobi_rotation(a: Array, p: Array, q: Array) -> Array:
    """Plane rotation G such that (G^T a G)[p, q] == 0."""
    app, aqq, apq = a[p, p], a[q, q], a[p, q]
    tau = (aqq - app) / (2.0 * apq)
    # tau == 0 takes the positive root so equal diagonals still rotate by 45 degrees
    sign = jnp.where(tau >= 0.0, 1.0, -1.0)
    t = sign / (jnp.abs(tau) + jnp.sqrt(1.0 + tau * tau))
    c = 1.0 / jnp.sqrt(1.0 + t * t)
    s = t * c

    g = jnp.eye(3, dtype=a.dtype)
    g = g.at[p, p].set(c).at[q, q].set(c)
    g = g.at[p, q].set(s).at[q, p].set(-s)
    return g


def compute_eigen_decomposition_3x3(matrix: Array) -> EigenDecomposition:
    """
    Cyclic Jacobi eigen-decomposition of a symmetric 3x3 matrix.

    Each sweep zeroes the largest upper off-diagonal entry with a plane
    rotation and accumulates the rotation into the eigenvector matrix. The
    loop ends when that entry drops below 1e-10 or after 50 rotations; the
    current estimate is returned either way, there is no convergence error.

    Only the upper triangle of *matrix* is read.

    Args:
        matrix: (3, 3) symmetric matrix

    Returns:
        EigenDecomposition with unsorted eigenvalues paired index-for-index
        with eigenvector rows, so that ``V @ matrix @ V.T ~= diag(eigenvalues)``.
    """
    a = jnp.asarray(matrix, dtype=float)
    a = jnp.triu(a) + jnp.triu(a, 1).T
    v = jnp.eye(3, dtype=a.dtype)

    def cond(state):
        i, a, _ = state
        return (i < MAX_JACOBI_ITERATIONS) & (jnp.max(jnp.abs(_off_diagonal(a))) >= OFF_DIAGONAL_TOLERANCE)

    def body(state):
        i, a, v = state
        k = jnp.argmax(jnp.abs(_off_diagonal(a)))
        p, q = _PAIRS[k, 0], _PAIRS[k, 1]
        g = _jacobi_rotation(a, p, q)
        a = g.T @ a @ g
        a = a.at[p, q].set(0.0).at[q, p].set(0.0)
        return i + 1, a, g.T @ v

    _, a, v = jax.lax.while_loop(cond, body, (jnp.asarray(0), a, v))
    return EigenDecomposition(eigenvalues=jnp.diagonal(a), eigenvectors=v)


def compute_inertia_box(inertial: Inertial, max_size: Optional[float] = None) -> Optional[InertiaBox]:
    """
    Derive a box with the same principal inertias as *inertial*.

    For a uniform box of mass m, Ixx = m/12 (h^2 + d^2) and cyclically, so

        w^2 = 6/m (Iy + Iz - Ix)
        h^2 = 6/m (Ix + Iz - Iy)
        d^2 = 6/m (Ix + Iy - Iz)

    A squared dimension that is not positive (principal inertias violating the
    triangle inequality) is replaced by ``max(|value|, 1e-6)``. Dimensions are
    clamped to [0.005, min(2 * max_size, 2.0)].

    Args:
        inertial: Mass and inertia tensor of a link.
        max_size: Optional reference size, e.g. the link's bounding box extent.

    Returns:
        InertiaBox, or None when the mass is below 1 g or every diagonal term
        is ~0, i.e. the input is not worth visualizing.
    """
    mass = float(inertial.mass)
    tensor = inertial.inertia

    if mass < MIN_MASS:
        logger.debug("No inertia box: mass %g below %g", mass, MIN_MASS)
        return None
    if all(abs(float(i)) < MIN_INERTIA for i in (tensor.ixx, tensor.iyy, tensor.izz)):
        logger.debug("No inertia box: diagonal inertia is zero")
        return None

    has_off_diagonal = any(abs(float(i)) > OFF_DIAGONAL_TOLERANCE for i in (tensor.ixy, tensor.ixz, tensor.iyz))
    if has_off_diagonal:
        eigen = compute_eigen_decomposition_3x3(tensor.to_matrix())
        principal = [float(x) for x in eigen.eigenvalues]
        # columns of the box rotation are the principal axes
        rotation = matrix_to_quaternion(eigen.eigenvectors.T)
    else:
        # no sorting: dimension i stays paired with principal axis i
        principal = [float(tensor.ixx), float(tensor.iyy), float(tensor.izz)]
        rotation = jnp.array([1.0, 0.0, 0.0, 0.0])

    ix, iy, iz = principal
    factor = 6.0 / mass
    squared = (factor * (iy + iz - ix), factor * (ix + iz - iy), factor * (ix + iy - iz))

    ceiling = MAX_BOX_SIZE
    if max_size is not None and max_size > 0:
        ceiling = min(2.0 * max_size, MAX_BOX_SIZE)

    width, height, depth = (
        min(max(max(abs(sq), MIN_SQUARED_DIMENSION) ** 0.5, MIN_BOX_SIZE), ceiling)
        for sq in squared
    )
    return InertiaBox(width=width, height=height, depth=depth, rotation=rotation)
