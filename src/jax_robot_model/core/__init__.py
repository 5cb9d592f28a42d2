"""Core robot description data structures.

This module provides the editable kinematic graph (links, joints and the
RobotState that owns them), the builders that create entities with defaults,
the validator that checks tree invariants, and in-place edit commands.
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
    Selection,
    Vector3,
)
from .arena import Arena, Handle, JointHandle, LinkHandle
from .robot_state import RobotState
from .builders import (
    add_child_to_robot,
    clone_joint,
    clone_link,
    create_empty_robot,
    create_joint,
    create_link,
    generate_id,
    generate_joint_id,
    generate_link_id,
)
from .validators import (
    Severity,
    ValidationIssue,
    ValidationResult,
    get_child_joints,
    get_parent_joint,
    has_children,
    has_joints,
    has_links,
    is_root_link,
    validate_joint,
    validate_link,
    validate_robot,
)
from . import commands

__all__ = [
    "Euler",
    "Geometry",
    "GeometryType",
    "Inertial",
    "InertiaTensor",
    "Joint",
    "JointDynamics",
    "JointHardware",
    "JointLimit",
    "JointType",
    "Link",
    "Origin",
    "Selection",
    "Vector3",
    "Arena",
    "Handle",
    "JointHandle",
    "LinkHandle",
    "RobotState",
    "add_child_to_robot",
    "clone_joint",
    "clone_link",
    "create_empty_robot",
    "create_joint",
    "create_link",
    "generate_id",
    "generate_joint_id",
    "generate_link_id",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "get_child_joints",
    "get_parent_joint",
    "has_children",
    "has_joints",
    "has_links",
    "is_root_link",
    "validate_joint",
    "validate_link",
    "validate_robot",
    "commands",
]
