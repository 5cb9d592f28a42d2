"""Robot description data types.

Small geometric values (vectors, Euler angles, poses) are immutable PyTrees so
they can flow through jitted transform code. Links, joints and their nested
records are plain mutable dataclasses owned by a RobotState.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

import jax
import jax.numpy as jnp
from flax import struct

Array = jax.Array


@struct.dataclass
class Vector3:
    """Real-valued 3D vector."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_array(self) -> Array:
        return jnp.asarray([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, array: Array) -> "Vector3":
        return cls(x=array[..., 0], y=array[..., 1], z=array[..., 2])


@struct.dataclass
class Euler:
    """Roll/pitch/yaw angles in radians (ZYX intrinsic convention)."""
    r: float = 0.0
    p: float = 0.0
    y: float = 0.0

    def to_array(self) -> Array:
        return jnp.asarray([self.r, self.p, self.y], dtype=float)

    def negated(self) -> "Euler":
        return Euler(r=-self.r, p=-self.p, y=-self.y)


@struct.dataclass
class Origin:
    """Pose of a child frame relative to its parent frame."""
    xyz: Vector3 = Vector3()
    rpy: Euler = Euler()


class GeometryType(str, Enum):
    BOX = "box"
    CYLINDER = "cylinder"
    SPHERE = "sphere"
    CAPSULE = "capsule"
    MESH = "mesh"
    NONE = "none"


class JointType(str, Enum):
    FIXED = "fixed"
    REVOLUTE = "revolute"
    CONTINUOUS = "continuous"
    PRISMATIC = "prismatic"


@dataclass
class Geometry:
    """Visual or collision shape attached to a link.

    Attributes:
        type: Shape variant.
        dimensions: Interpreted per variant. Box uses (width, depth, height),
                    cylinder uses x=radius and y=length, sphere uses x=radius.
        color: Hex color string.
        origin: Offset of the shape relative to the link frame.
        mesh_path: Asset path for mesh geometry.
    """
    type: Union[GeometryType, str] = GeometryType.NONE
    dimensions: Vector3 = Vector3()
    color: str = "#ffffff"
    origin: Origin = Origin()
    mesh_path: Optional[str] = None


@dataclass
class InertiaTensor:
    ixx: float = 0.0
    ixy: float = 0.0
    ixz: float = 0.0
    iyy: float = 0.0
    iyz: float = 0.0
    izz: float = 0.0

    def to_matrix(self) -> Array:
        """Symmetric 3x3 inertia matrix."""
        return jnp.array([
            [self.ixx, self.ixy, self.ixz],
            [self.ixy, self.iyy, self.iyz],
            [self.ixz, self.iyz, self.izz],
        ])


@dataclass
class Inertial:
    mass: float = 0.0
    origin: Optional[Origin] = None  # center of mass
    inertia: InertiaTensor = field(default_factory=InertiaTensor)


@dataclass
class Link:
    """Rigid body node of the kinematic tree."""
    id: str = ""
    name: str = ""
    visual: Geometry = field(default_factory=Geometry)
    collision: Geometry = field(default_factory=Geometry)
    inertial: Inertial = field(default_factory=Inertial)
    visible: bool = True


@dataclass
class JointLimit:
    lower: float = 0.0
    upper: float = 0.0
    effort: float = 0.0
    velocity: float = 0.0


@dataclass
class JointDynamics:
    damping: float = 0.0
    friction: float = 0.0


@dataclass
class JointHardware:
    armature: float = 0.0
    motor_type: str = ""
    motor_id: str = ""
    motor_direction: int = 1  # +1 or -1


@dataclass
class Joint:
    """Directed edge from a parent link to a child link.

    Attributes:
        origin: Pose of the child frame in the parent frame.
        axis: Rotation axis (revolute/continuous) or sliding direction (prismatic).
        angle: Current joint position, used when placing links in world space.
    """
    id: str = ""
    name: str = ""
    type: Union[JointType, str] = JointType.REVOLUTE
    parent_link_id: str = ""
    child_link_id: str = ""
    origin: Origin = Origin()
    axis: Vector3 = Vector3(0.0, 0.0, 1.0)
    limit: JointLimit = field(default_factory=JointLimit)
    dynamics: JointDynamics = field(default_factory=JointDynamics)
    hardware: JointHardware = field(default_factory=JointHardware)
    angle: Optional[float] = None


@dataclass
class Selection:
    type: Optional[str] = None  # "link" or "joint"
    id: Optional[str] = None
    sub_type: Optional[str] = None  # "visual" or "collision"
