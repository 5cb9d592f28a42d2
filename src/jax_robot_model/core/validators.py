"""Structural and numeric validation of links, joints and whole robots.

Issues come in two severities. Errors mark states that must not be exported
or simulated (dangling references, cycles, inverted limits, negative physical
quantities). Warnings are surfaced but keep the result valid (zero mass,
non-unit axes, orphaned branches, duplicate names). Validators never raise.
"""

import logging
from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Set

from ..transforms.vector import vector_magnitude
from .robot_state import RobotState
from .types import GeometryType, Joint, JointType, Link

logger = logging.getLogger(__name__)

AXIS_UNIT_TOLERANCE = 1e-3

_KNOWN_JOINT_TYPES = tuple(t.value for t in JointType)


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    type: Severity
    message: str
    path: Optional[str] = None


@dataclass
class ValidationResult:
    """Outcome of a validation pass. ``valid`` is False iff any issue is an error."""
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)

    @classmethod
    def from_issues(cls, issues: List[ValidationIssue]) -> "ValidationResult":
        return cls(valid=not any(i.type == Severity.ERROR for i in issues), errors=issues)

    def issues_of(self, severity: Severity) -> List[ValidationIssue]:
        return [i for i in self.errors if i.type == severity]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return self.issues_of(Severity.WARNING)

    @property
    def error_messages(self) -> List[str]:
        return [i.message for i in self.issues_of(Severity.ERROR)]


def _error(message: str, path: Optional[str] = None) -> ValidationIssue:
    return ValidationIssue(Severity.ERROR, message, path)


def _warning(message: str, path: Optional[str] = None) -> ValidationIssue:
    return ValidationIssue(Severity.WARNING, message, path)


def validate_link(link: Link) -> ValidationResult:
    issues: List[ValidationIssue] = []

    if not link.id:
        issues.append(_error("Link must have an ID", "id"))
    if not link.name:
        issues.append(_error("Link must have a name", "name"))

    mass = link.inertial.mass
    if mass < 0:
        issues.append(_error("Link mass cannot be negative", "inertial.mass"))
    if mass == 0:
        issues.append(_warning("Link has zero mass", "inertial.mass"))

    visual = link.visual
    dims = visual.dimensions
    if visual.type == GeometryType.BOX:
        if dims.x <= 0 or dims.y <= 0 or dims.z <= 0:
            issues.append(_error("Box dimensions must be positive", "visual.dimensions"))
    elif visual.type == GeometryType.CYLINDER:
        if dims.x <= 0 or dims.y <= 0:
            issues.append(_error("Cylinder radius and length must be positive", "visual.dimensions"))
    elif visual.type == GeometryType.SPHERE:
        if dims.x <= 0:
            issues.append(_error("Sphere radius must be positive", "visual.dimensions"))

    return ValidationResult.from_issues(issues)


def validate_joint(joint: Joint, links: Mapping[str, Link]) -> ValidationResult:
    """Validate a joint against the links it may reference."""
    issues: List[ValidationIssue] = []

    if not joint.id:
        issues.append(_error("Joint must have an ID", "id"))
    if not joint.name:
        issues.append(_error("Joint must have a name", "name"))

    if not joint.parent_link_id:
        issues.append(_error("Joint must have a parent link", "parent_link_id"))
    elif joint.parent_link_id not in links:
        issues.append(_error(f'Parent link "{joint.parent_link_id}" not found', "parent_link_id"))

    if not joint.child_link_id:
        issues.append(_error("Joint must have a child link", "child_link_id"))
    elif joint.child_link_id not in links:
        issues.append(_error(f'Child link "{joint.child_link_id}" not found', "child_link_id"))

    if joint.parent_link_id == joint.child_link_id:
        issues.append(_error("Parent and child link cannot be the same", "child_link_id"))

    if joint.type not in _KNOWN_JOINT_TYPES:
        issues.append(_error(f"Invalid joint type: {joint.type}", "type"))

    if joint.type != JointType.FIXED:
        axis_length = float(vector_magnitude(joint.axis))
        if abs(axis_length - 1.0) > AXIS_UNIT_TOLERANCE:
            issues.append(_warning("Joint axis should be normalized", "axis"))
        if axis_length == 0.0:
            issues.append(_error("Joint axis cannot be zero vector", "axis"))

    if joint.type in (JointType.REVOLUTE, JointType.PRISMATIC):
        limit = joint.limit
        if limit.lower > limit.upper:
            issues.append(_error("Lower limit cannot be greater than upper limit", "limit"))
        if limit.effort < 0:
            issues.append(_error("Effort limit cannot be negative", "limit.effort"))
        if limit.velocity < 0:
            issues.append(_error("Velocity limit cannot be negative", "limit.velocity"))

    return ValidationResult.from_issues(issues)


def _children_index(joints: Mapping[str, Joint]) -> Dict[str, List[str]]:
    children: Dict[str, List[str]] = defaultdict(list)
    for joint in joints.values():
        children[joint.parent_link_id].append(joint.child_link_id)
    return children


def _has_cycle(root_id: str, children: Mapping[str, List[str]]) -> bool:
    """Depth-first search from *root_id* for a back edge.

    A child that was already visited is only a cycle when it is still on the
    active path; reaching a finished node again (a diamond) is not.
    """
    visited: Set[str] = {root_id}
    on_path: Set[str] = {root_id}
    stack = [(root_id, iter(children.get(root_id, ())))]

    while stack:
        link_id, pending = stack[-1]
        child_id = next(pending, None)
        if child_id is None:
            stack.pop()
            on_path.discard(link_id)
            continue
        if child_id in on_path:
            return True
        if child_id not in visited:
            visited.add(child_id)
            on_path.add(child_id)
            stack.append((child_id, iter(children.get(child_id, ()))))
    return False


def _reachable_from(root_id: str, children: Mapping[str, List[str]]) -> Set[str]:
    connected = {root_id}
    queue = deque([root_id])
    while queue:
        for child_id in children.get(queue.popleft(), ()):
            if child_id not in connected:
                connected.add(child_id)
                queue.append(child_id)
    return connected


def validate_robot(robot: RobotState) -> ValidationResult:
    """
    Validate every link and joint plus the whole-graph invariants.

    Entity issues are re-pathed as ``links.<id>.<field>`` and
    ``joints.<id>.<field>``. Graph checks cover the robot name, the root
    reference, cycles reachable from the root, links not connected to the root
    and duplicate display names.
    """
    issues: List[ValidationIssue] = []

    if not robot.name:
        issues.append(_error("Robot must have a name", "name"))

    if not robot.root_link_id:
        issues.append(_error("Robot must have a root link", "root_link_id"))
    elif robot.root_link_id not in robot.links:
        issues.append(_error(f'Root link "{robot.root_link_id}" not found', "root_link_id"))

    for link_id, link in robot.links.items():
        for issue in validate_link(link).errors:
            issues.append(ValidationIssue(issue.type, issue.message, f"links.{link_id}.{issue.path}"))

    for joint_id, joint in robot.joints.items():
        for issue in validate_joint(joint, robot.links).errors:
            issues.append(ValidationIssue(issue.type, issue.message, f"joints.{joint_id}.{issue.path}"))

    children = _children_index(robot.joints)

    if robot.root_link_id and _has_cycle(robot.root_link_id, children):
        issues.append(_error("Kinematic tree contains a cycle"))

    connected = _reachable_from(robot.root_link_id, children) if robot.root_link_id else set()
    for link_id in robot.links:
        if link_id not in connected and link_id != robot.root_link_id:
            issues.append(_warning(f'Link "{link_id}" is not connected to the kinematic tree', f"links.{link_id}"))

    for kind, entities in (("link", robot.links), ("joint", robot.joints)):
        seen: Set[str] = set()
        for entity in entities.values():
            if entity.name in seen:
                issues.append(_warning(f'Duplicate {kind} name: "{entity.name}"'))
            seen.add(entity.name)

    result = ValidationResult.from_issues(issues)
    logger.debug(
        "Validated robot '%s': %d links, %d joints, %d errors, %d warnings",
        robot.name, len(robot.links), len(robot.joints),
        len(result.issues_of(Severity.ERROR)), len(result.warnings),
    )
    return result


def has_links(robot: RobotState) -> bool:
    return len(robot.links) > 0


def has_joints(robot: RobotState) -> bool:
    return len(robot.joints) > 0


def is_root_link(robot: RobotState, link_id: str) -> bool:
    return robot.root_link_id == link_id


def has_children(robot: RobotState, link_id: str) -> bool:
    return any(j.parent_link_id == link_id for j in robot.joints.values())


def get_parent_joint(robot: RobotState, link_id: str) -> Optional[Joint]:
    """The joint whose child is *link_id*; a tree has at most one."""
    return next((j for j in robot.joints.values() if j.child_link_id == link_id), None)


def get_child_joints(robot: RobotState, link_id: str) -> List[Joint]:
    return [j for j in robot.joints.values() if j.parent_link_id == link_id]
