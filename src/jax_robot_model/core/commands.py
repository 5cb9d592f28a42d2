"""Edit commands on an owned RobotState.

Each command mutates the robot in place and returns the ValidationResult of a
full re-validation, so the caller can gate export or simulation on it. No
history is kept here; take a :meth:`RobotState.copy` before a command if it
must be undoable.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Set

from .builders import build_child, merge_fields
from .robot_state import RobotState
from .types import Joint, Link, Selection
from .validators import ValidationResult, validate_robot

logger = logging.getLogger(__name__)


def _finish(robot: RobotState, action: str) -> ValidationResult:
    result = validate_robot(robot)
    logger.debug("%s on robot '%s'", action, robot.name)
    if not result.valid:
        logger.info("Robot '%s' is invalid after %s: %s", robot.name, action, "; ".join(result.error_messages))
    return result


def _require_link(robot: RobotState, link_id: str) -> Link:
    if link_id not in robot.links:
        raise ValueError(f"Link '{link_id}' not found in robot model")
    return robot.links[link_id]


def _require_joint(robot: RobotState, joint_id: str) -> Joint:
    if joint_id not in robot.joints:
        raise ValueError(f"Joint '{joint_id}' not found in robot model")
    return robot.joints[joint_id]


def set_name(robot: RobotState, name: str) -> ValidationResult:
    robot.name = name
    return _finish(robot, "set_name")


def add_link(robot: RobotState, link: Link) -> ValidationResult:
    """Insert *link*; an existing link with the same id is replaced."""
    robot.links.insert(link)
    return _finish(robot, f"add_link({link.id})")


def update_link(robot: RobotState, link_id: str, **updates: Any) -> ValidationResult:
    """Deep-merge *updates* into a link, e.g. ``update_link(r, lid, inertial={"mass": 2.0})``.

    The id cannot be changed this way.
    """
    link = _require_link(robot, link_id)
    name = updates.pop("name", None)
    updates.pop("id", None)
    merge_fields(link, updates)
    if name is not None:
        robot.links.rename(link_id, name)
    return _finish(robot, f"update_link({link_id})")


def delete_link(robot: RobotState, link_id: str) -> ValidationResult:
    """Remove a link and every joint attached to it. The root cannot be deleted."""
    _require_link(robot, link_id)
    if link_id == robot.root_link_id:
        raise ValueError("Cannot delete the root link")

    robot.links.remove(link_id)
    attached = [
        jid for jid, j in robot.joints.items()
        if j.parent_link_id == link_id or j.child_link_id == link_id
    ]
    for jid in attached:
        robot.joints.remove(jid)
    _clear_selection(robot, {link_id}, set(attached))
    return _finish(robot, f"delete_link({link_id})")


def set_link_visibility(robot: RobotState, link_id: str, visible: bool) -> ValidationResult:
    _require_link(robot, link_id).visible = visible
    return _finish(robot, f"set_link_visibility({link_id})")


def set_all_links_visibility(robot: RobotState, visible: bool) -> ValidationResult:
    for link in robot.links.values():
        link.visible = visible
    return _finish(robot, "set_all_links_visibility")


def add_joint(robot: RobotState, joint: Joint) -> ValidationResult:
    robot.joints.insert(joint)
    return _finish(robot, f"add_joint({joint.id})")


def update_joint(robot: RobotState, joint_id: str, **updates: Any) -> ValidationResult:
    joint = _require_joint(robot, joint_id)
    name = updates.pop("name", None)
    updates.pop("id", None)
    merge_fields(joint, updates)
    if name is not None:
        robot.joints.rename(joint_id, name)
    return _finish(robot, f"update_joint({joint_id})")


def delete_joint(robot: RobotState, joint_id: str) -> ValidationResult:
    _require_joint(robot, joint_id)
    robot.joints.remove(joint_id)
    _clear_selection(robot, set(), {joint_id})
    return _finish(robot, f"delete_joint({joint_id})")


def set_joint_angle(robot: RobotState, joint_name: str, angle: float) -> ValidationResult:
    """Set the current position of the joint with display name *joint_name*.

    Unknown names are ignored; slider updates may race with renames.
    """
    joint = robot.joints.find_by_name(joint_name)
    if joint is None:
        logger.debug("set_joint_angle: no joint named '%s'", joint_name)
    else:
        joint.angle = angle
    return _finish(robot, f"set_joint_angle({joint_name})")


def add_child(
    robot: RobotState,
    parent_link_id: str,
    link_options: Optional[Mapping[str, Any]] = None,
    joint_options: Optional[Mapping[str, Any]] = None,
) -> ValidationResult:
    """In-place child insertion; the new joint becomes the selection.

    The new link is ``robot.joints[robot.selection.id].child_link_id``.
    """
    _require_link(robot, parent_link_id)
    link, joint = build_child(robot, parent_link_id, link_options, joint_options)
    robot.links.insert(link)
    robot.joints.insert(joint)
    robot.selection = Selection(type="joint", id=joint.id)
    return _finish(robot, f"add_child({parent_link_id})")


def delete_subtree(robot: RobotState, link_id: str) -> ValidationResult:
    """Remove a link, all its descendants and every joint touching them."""
    _require_link(robot, link_id)
    if link_id == robot.root_link_id:
        raise ValueError("Cannot delete the root link")

    doomed_links: Set[str] = set()
    doomed_joints: Set[str] = set()
    stack = [link_id]
    while stack:
        current = stack.pop()
        # a cycle may lead back to the root, which always survives
        if current in doomed_links or current == robot.root_link_id:
            continue
        doomed_links.add(current)
        for jid, joint in robot.joints.items():
            if joint.parent_link_id == current:
                doomed_joints.add(jid)
                stack.append(joint.child_link_id)
            elif joint.child_link_id == current:
                doomed_joints.add(jid)

    for lid in doomed_links:
        if lid in robot.links:
            robot.links.remove(lid)
    for jid in doomed_joints:
        robot.joints.remove(jid)
    _clear_selection(robot, doomed_links, doomed_joints)
    return _finish(robot, f"delete_subtree({link_id})")


def _clear_selection(robot: RobotState, link_ids: Set[str], joint_ids: Set[str]) -> None:
    sel = robot.selection
    if (sel.type == "link" and sel.id in link_ids) or (sel.type == "joint" and sel.id in joint_ids):
        robot.selection = Selection()


def get_root_link(robot: RobotState) -> Optional[Link]:
    return robot.root_link


def get_link_by_name(robot: RobotState, name: str) -> Optional[Link]:
    return robot.links.find_by_name(name)


def get_joint_by_name(robot: RobotState, name: str) -> Optional[Joint]:
    return robot.joints.find_by_name(name)


def get_joint_angles(robot: RobotState) -> Dict[str, float]:
    """Joint name -> current angle, for joints that have one."""
    return {j.name: j.angle for j in robot.joints.values() if j.angle is not None}
