"""Tests for the inertia module."""

import jax
import jax.numpy as jnp
import numpy as np
from hypothesis import given, settings
from hypothesis import strategies as st

from jax_robot_model.core.types import Inertial, InertiaTensor, Vector3
from jax_robot_model.inertia import (
    MAX_BOX_SIZE,
    MIN_BOX_SIZE,
    compute_eigen_decomposition_3x3,
    compute_inertia_box,
)
from jax_robot_model.transforms.rotation import axis_angle_to_matrix, quaternion_to_matrix


def tensor_from_matrix(I) -> InertiaTensor:
    I = np.asarray(I)
    return InertiaTensor(
        ixx=float(I[0, 0]), ixy=float(I[0, 1]), ixz=float(I[0, 2]),
        iyy=float(I[1, 1]), iyz=float(I[1, 2]), izz=float(I[2, 2]),
    )


def box_inertia(mass, w, h, d):
    return np.diag([
        mass / 12.0 * (h**2 + d**2),
        mass / 12.0 * (w**2 + d**2),
        mass / 12.0 * (w**2 + h**2),
    ])


# Eigen-decomposition
def test_eigen_decomposition_diagonal():
    """A diagonal matrix is returned unchanged with identity eigenvectors."""
    M = jnp.diag(jnp.array([3.0, 1.0, 2.0]))
    eig = compute_eigen_decomposition_3x3(M)

    np.testing.assert_allclose(eig.eigenvalues, [3.0, 1.0, 2.0])
    np.testing.assert_allclose(eig.eigenvectors, np.eye(3))


def test_eigen_decomposition_equal_diagonal():
    """Equal diagonal entries still rotate the off-diagonal term away."""
    M = jnp.array([
        [0.2, 0.05, 0.0],
        [0.05, 0.2, 0.0],
        [0.0, 0.0, 0.1],
    ])
    eig = compute_eigen_decomposition_3x3(M)

    np.testing.assert_allclose(np.sort(eig.eigenvalues), [0.1, 0.15, 0.25], rtol=1e-10, atol=1e-10)
    V = np.asarray(eig.eigenvectors)
    np.testing.assert_allclose(V @ np.asarray(M) @ V.T, np.diag(eig.eigenvalues), rtol=1e-9, atol=1e-9)


def test_eigen_decomposition_jit():
    """Test the decomposition under JIT."""
    M = jnp.array([
        [2.0, 1.0, 0.0],
        [1.0, 2.0, 1.0],
        [0.0, 1.0, 2.0],
    ])
    eig = jax.jit(compute_eigen_decomposition_3x3)(M)
    np.testing.assert_allclose(np.sort(eig.eigenvalues), np.linalg.eigvalsh(np.asarray(M)), rtol=1e-8, atol=1e-8)


def test_eigen_decomposition_reads_upper_triangle():
    """The lower triangle is ignored."""
    upper = jnp.array([
        [1.0, 0.5, 0.25],
        [0.0, 2.0, 0.1],
        [0.0, 0.0, 3.0],
    ])
    symmetric = jnp.triu(upper) + jnp.triu(upper, 1).T
    a = compute_eigen_decomposition_3x3(upper)
    b = compute_eigen_decomposition_3x3(symmetric)
    np.testing.assert_allclose(a.eigenvalues, b.eigenvalues)
    np.testing.assert_allclose(a.eigenvectors, b.eigenvectors)


def test_eigen_decomposition_ill_conditioned_returns_finite():
    """Badly scaled inputs still return an estimate."""
    M = jnp.array([
        [1e12, 1.0, 0.0],
        [1.0, 1e-12, 1.0],
        [0.0, 1.0, 0.0],
    ])
    eig = compute_eigen_decomposition_3x3(M)
    assert np.all(np.isfinite(eig.eigenvalues))
    assert np.all(np.isfinite(eig.eigenvectors))


symmetric_entries = st.lists(
    st.floats(min_value=-1.0, max_value=1.0, allow_nan=False),
    min_size=6,
    max_size=6,
)


@given(symmetric_entries)
@settings(deadline=None, max_examples=25)
def test_eigen_decomposition_matches_numpy(entries):
    """Eigenvalues agree with numpy and the eigenvectors are orthonormal."""
    a, b, c, d, e, f = entries
    M = np.array([[a, b, c], [b, d, e], [c, e, f]])
    eig = compute_eigen_decomposition_3x3(jnp.asarray(M))

    np.testing.assert_allclose(np.sort(eig.eigenvalues), np.linalg.eigvalsh(M), rtol=1e-7, atol=1e-7)
    V = np.asarray(eig.eigenvectors)
    np.testing.assert_allclose(V @ V.T, np.eye(3), rtol=1e-9, atol=1e-9)
    np.testing.assert_allclose(V @ M @ V.T, np.diag(eig.eigenvalues), rtol=1e-7, atol=1e-7)


# Inertia box
def test_inertia_box_diagonal():
    """Diagonal inertia 0.1 with mass 1 gives a sqrt(0.6) cube."""
    inertial = Inertial(mass=1.0, inertia=InertiaTensor(ixx=0.1, iyy=0.1, izz=0.1))
    box = compute_inertia_box(inertial)

    assert box is not None
    expected = np.sqrt(0.6)
    np.testing.assert_allclose([box.width, box.height, box.depth], [expected] * 3, rtol=1e-6)
    np.testing.assert_allclose(box.rotation, [1.0, 0.0, 0.0, 0.0])


def test_inertia_box_recovers_box_dimensions():
    """A real box's inertia maps back to its own dimensions."""
    inertial = Inertial(mass=2.0, inertia=tensor_from_matrix(box_inertia(2.0, 0.4, 0.2, 0.1)))
    box = compute_inertia_box(inertial)

    np.testing.assert_allclose([box.width, box.height, box.depth], [0.4, 0.2, 0.1], rtol=1e-9)


def test_inertia_box_rotated_tensor():
    """Off-diagonal tensors are aligned with their principal axes."""
    R = np.asarray(axis_angle_to_matrix(Vector3(0.2, 0.3, 1.0), 0.5))
    I = R @ box_inertia(2.0, 0.4, 0.2, 0.1) @ R.T
    box = compute_inertia_box(Inertial(mass=2.0, inertia=tensor_from_matrix(I)))

    np.testing.assert_allclose(
        sorted([box.width, box.height, box.depth]), [0.1, 0.2, 0.4], rtol=1e-6
    )

    R_box = np.asarray(quaternion_to_matrix(box.rotation))
    np.testing.assert_allclose(R_box @ R_box.T, np.eye(3), rtol=1e-9, atol=1e-9)
    local = R_box.T @ I @ R_box
    np.testing.assert_allclose(local - np.diag(np.diag(local)), np.zeros((3, 3)), atol=1e-9)


def test_inertia_box_small_mass_returns_none():
    """Masses below one gram are not visualized."""
    inertial = Inertial(mass=0.0001, inertia=InertiaTensor(ixx=0.1, iyy=0.1, izz=0.1))
    assert compute_inertia_box(inertial) is None


def test_inertia_box_zero_mass_returns_none():
    """A zero mass is not treated as one kilogram."""
    inertial = Inertial(mass=0.0, inertia=InertiaTensor(ixx=0.1, iyy=0.1, izz=0.1))
    assert compute_inertia_box(inertial) is None


def test_inertia_box_zero_inertia_returns_none():
    """Test that an all-zero diagonal is skipped."""
    inertial = Inertial(mass=1.0, inertia=InertiaTensor(ixx=0.0, iyy=0.0, izz=0.0))
    assert compute_inertia_box(inertial) is None


def test_inertia_box_clamps_to_bounds():
    """Degenerate dimensions are floored, oversized ones capped."""
    flat = Inertial(mass=1.0, inertia=InertiaTensor(ixx=0.01, iyy=0.01, izz=0.02))
    box = compute_inertia_box(flat)
    np.testing.assert_allclose([box.width, box.height], [np.sqrt(0.12)] * 2, rtol=1e-9)
    assert box.depth == MIN_BOX_SIZE

    huge = Inertial(mass=1.0, inertia=InertiaTensor(ixx=1.0, iyy=0.1, izz=0.1))
    box = compute_inertia_box(huge)
    assert [box.width, box.height, box.depth] == [MAX_BOX_SIZE] * 3


def test_inertia_box_non_physical_tensor():
    """A tensor violating the triangle inequality still yields a box."""
    inertial = Inertial(mass=1.0, inertia=InertiaTensor(ixx=0.1, iyy=0.01, izz=0.01))
    box = compute_inertia_box(inertial)

    assert box is not None
    # w^2 = 6 * (0.01 + 0.01 - 0.1) is negative and mirrored
    np.testing.assert_allclose(box.width, np.sqrt(0.48), rtol=1e-9)
    for size in (box.width, box.height, box.depth):
        assert MIN_BOX_SIZE <= size <= MAX_BOX_SIZE


def test_inertia_box_max_size():
    """A reference size lowers the ceiling to twice its value."""
    inertial = Inertial(mass=1.0, inertia=InertiaTensor(ixx=0.1, iyy=0.1, izz=0.1))

    box = compute_inertia_box(inertial, max_size=0.2)
    assert [box.width, box.height, box.depth] == [0.4] * 3

    box = compute_inertia_box(inertial, max_size=5.0)
    np.testing.assert_allclose(box.width, np.sqrt(0.6), rtol=1e-6)
