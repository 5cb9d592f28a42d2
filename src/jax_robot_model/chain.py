"""World-space placement of links and their geometry.

Walks the kinematic tree from the root and composes joint origins with the
current joint motion, giving the scene layer a 4x4 world pose per link.
"""

from collections import defaultdict, deque
from typing import Dict

import jax
import jax.numpy as jnp

from .core.robot_state import RobotState
from .core.types import Geometry, Joint, JointType
from .transforms.rotation import axis_angle_to_matrix
from .transforms.transform import compose, from_position_and_rotation, origin_to_matrix
from .transforms.vector import normalize_vector, scale_vector

Array = jax.Array


def joint_motion(joint: Joint) -> Array:
    """
    (4, 4) transform produced by moving *joint* to its current angle.

    Revolute and continuous joints rotate about the normalized axis, prismatic
    joints slide along it. Fixed joints, joints without an angle and unknown
    joint types do not move.
    """
    angle = joint.angle if joint.angle is not None else 0.0
    if joint.type in (JointType.REVOLUTE, JointType.CONTINUOUS):
        return from_position_and_rotation(jnp.zeros(3), axis_angle_to_matrix(joint.axis, angle))
    if joint.type == JointType.PRISMATIC:
        offset = scale_vector(normalize_vector(joint.axis), angle).to_array()
        return from_position_and_rotation(offset, jnp.eye(3))
    return jnp.eye(4)


def forward_kinematics(robot: RobotState) -> Dict[str, Array]:
    """
    Compute world poses for every link reachable from the root.

    Args:
        robot: Robot whose root link sits at the world origin.

    Returns:
        Dictionary mapping link ids to (4, 4) world transforms. Links that are
        not connected to the root are absent; cycles are not followed twice.
    """
    if robot.root_link_id not in robot.links:
        return {}

    children = defaultdict(list)
    for joint in robot.joints.values():
        children[joint.parent_link_id].append(joint)

    world = {robot.root_link_id: jnp.eye(4)}
    queue = deque([robot.root_link_id])
    while queue:
        parent_id = queue.popleft()
        for joint in children.get(parent_id, ()):
            child_id = joint.child_link_id
            if child_id in world or child_id not in robot.links:
                continue
            T_parent_to_child = compose(origin_to_matrix(joint.origin), joint_motion(joint))
            world[child_id] = compose(world[parent_id], T_parent_to_child)
            queue.append(child_id)
    return world


def geometry_world_transform(robot: RobotState, link_id: str, geometry: Geometry) -> Array:
    """
    World transform of a visual or collision geometry of *link_id*.

    Raises:
        ValueError: If the link is not placed in the tree.
    """
    world = forward_kinematics(robot)
    if link_id not in world:
        raise ValueError(f"Link '{link_id}' not found in the kinematic tree")
    return compose(world[link_id], origin_to_matrix(geometry.origin))
