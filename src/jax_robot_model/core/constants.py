"""Default value tables used as the merge base of the entity builders.

These objects are shared process-wide and must be treated as read-only;
builders always work on deep copies.
"""

from .types import (
    Euler,
    Geometry,
    GeometryType,
    Inertial,
    InertiaTensor,
    Joint,
    JointDynamics,
    JointHardware,
    JointLimit,
    JointType,
    Link,
    Origin,
    Vector3,
)

DEFAULT_ROBOT_NAME = "robot"
ROOT_LINK_NAME = "base_link"

# ID prefixes for generated identifiers
LINK_ID_PREFIX = "link_"
JOINT_ID_PREFIX = "joint_"

DEFAULT_LINK_RADIUS = 0.05
DEFAULT_LINK_LENGTH = 0.5
DEFAULT_JOINT_OFFSET_Z = 0.5
SIBLING_OFFSET_Y = 0.5

AXIS_X = Vector3(1.0, 0.0, 0.0)
AXIS_Y = Vector3(0.0, 1.0, 0.0)
AXIS_Z = Vector3(0.0, 0.0, 1.0)

DEFAULT_VISUAL_COLOR = "#3b82f6"
DEFAULT_COLLISION_COLOR = "#ef4444"

DEFAULT_LINK = Link(
    id="",
    name="link",
    visible=True,
    visual=Geometry(
        type=GeometryType.CYLINDER,
        dimensions=Vector3(DEFAULT_LINK_RADIUS, DEFAULT_LINK_LENGTH, DEFAULT_LINK_RADIUS),
        color=DEFAULT_VISUAL_COLOR,
        origin=Origin(),
    ),
    collision=Geometry(
        type=GeometryType.CYLINDER,
        dimensions=Vector3(DEFAULT_LINK_RADIUS, DEFAULT_LINK_LENGTH, DEFAULT_LINK_RADIUS),
        color=DEFAULT_COLLISION_COLOR,
        origin=Origin(),
    ),
    inertial=Inertial(
        mass=1.0,
        origin=Origin(),
        inertia=InertiaTensor(ixx=0.1, ixy=0.0, ixz=0.0, iyy=0.1, iyz=0.0, izz=0.1),
    ),
)

DEFAULT_JOINT = Joint(
    id="",
    name="joint",
    type=JointType.REVOLUTE,
    parent_link_id="",
    child_link_id="",
    origin=Origin(xyz=Vector3(0.0, 0.0, DEFAULT_JOINT_OFFSET_Z), rpy=Euler()),
    axis=AXIS_Z,
    limit=JointLimit(lower=-1.57, upper=1.57, effort=100.0, velocity=10.0),
    dynamics=JointDynamics(damping=0.0, friction=0.0),
    hardware=JointHardware(armature=0.0, motor_type="Go1-M8010-6", motor_id="0", motor_direction=1),
)
