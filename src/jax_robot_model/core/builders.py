"""Factory functions for links, joints and robots.

Builders only assemble structure: supplied partial fields are deep-merged over
the default templates and missing ids are generated. They never validate and
never raise; use :mod:`jax_robot_model.core.validators` for that.
"""

import copy
import dataclasses
import logging
import random
import string
import time
from enum import Enum
from typing import Any, Mapping, Optional

from .constants import (
    DEFAULT_JOINT,
    DEFAULT_JOINT_OFFSET_Z,
    DEFAULT_LINK,
    DEFAULT_ROBOT_NAME,
    JOINT_ID_PREFIX,
    LINK_ID_PREFIX,
    ROOT_LINK_NAME,
    SIBLING_OFFSET_Y,
)
from .robot_state import RobotState
from .types import Euler, Joint, Link, Origin, Selection, Vector3

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def generate_id(prefix: str) -> str:
    """Human-readable, practically unique id: ``<prefix><millis>_<5 base36 chars>``.

    Not cryptographically unique and not monotonic.
    """
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_BASE36, k=5))
    return f"{prefix}{millis}_{suffix}"


def generate_link_id() -> str:
    return generate_id(LINK_ID_PREFIX)


def generate_joint_id() -> str:
    return generate_id(JOINT_ID_PREFIX)


def merge_fields(target: Any, overrides: Mapping[str, Any], path: str = "") -> Any:
    """Deep-merge *overrides* into a dataclass value and return the result.

    Mapping overrides recurse into nested dataclasses (mutable ones are updated
    in place, frozen PyTree values are rebuilt). Any other override value is
    deep-copied and assigned. Strings assigned to enum fields are converted
    when they name a known member and kept raw otherwise, so invalid input
    still produces an entity the validator can report on. Unknown field names
    are logged and skipped.
    """
    names = {f.name for f in dataclasses.fields(target)}
    updates = {}
    for key, value in overrides.items():
        if key not in names:
            logger.warning("Ignoring unknown field '%s%s' on %s", path, key, type(target).__name__)
            continue
        current = getattr(target, key)
        if isinstance(value, Mapping) and dataclasses.is_dataclass(current):
            updates[key] = merge_fields(current, value, f"{path}{key}.")
        elif isinstance(current, Enum) and isinstance(value, str) and not isinstance(value, Enum):
            updates[key] = _coerce_enum(type(current), value)
        else:
            updates[key] = copy.deepcopy(value)

    if _is_frozen(target):
        return dataclasses.replace(target, **updates)
    for key, value in updates.items():
        setattr(target, key, value)
    return target


def _is_frozen(value: Any) -> bool:
    return type(value).__dataclass_params__.frozen


def _coerce_enum(enum_type, value: str):
    try:
        return enum_type(value)
    except ValueError:
        return value


def create_link(**options: Any) -> Link:
    """Create a link from the default template.

    Args:
        **options: Partial link fields. Nested records accept either full
                   values or mappings of their fields, e.g.
                   ``create_link(name="arm", inertial={"mass": 2.0})``.

    Returns:
        Link with a generated id (unless supplied) and ``name`` defaulting to the id.
    """
    link = copy.deepcopy(DEFAULT_LINK)
    merge_fields(link, options)
    if not options.get("id"):
        link.id = generate_link_id()
    if not options.get("name"):
        link.name = link.id
    return link


def create_joint(parent_link_id: str, child_link_id: str, **options: Any) -> Joint:
    """Create a joint between two links from the default template.

    The link references are stored as given; nothing checks that they exist.
    """
    joint = copy.deepcopy(DEFAULT_JOINT)
    merge_fields(joint, options)
    joint.parent_link_id = parent_link_id
    joint.child_link_id = child_link_id
    if not options.get("id"):
        joint.id = generate_joint_id()
    if not options.get("name"):
        joint.name = joint.id
    return joint


def create_empty_robot(name: str = DEFAULT_ROBOT_NAME) -> RobotState:
    """Robot with a single ``base_link`` root, no joints, and the root selected."""
    root = create_link(name=ROOT_LINK_NAME)
    robot = RobotState(name=name, root_link_id=root.id, selection=Selection(type="link", id=root.id))
    robot.links.insert(root)
    return robot


def build_child(
    robot: RobotState,
    parent_link_id: str,
    link_options: Optional[Mapping[str, Any]] = None,
    joint_options: Optional[Mapping[str, Any]] = None,
):
    """Build (but do not insert) a new child link and its connecting joint.

    Siblings are spread along y by ``0.5 * existing children`` so their default
    visuals do not overlap.
    """
    sibling_count = sum(1 for j in robot.joints.values() if j.parent_link_id == parent_link_id)
    y_offset = sibling_count * SIBLING_OFFSET_Y

    link = create_link(**{"name": f"link_{len(robot.links) + 1}", **(link_options or {})})
    joint = create_joint(
        parent_link_id,
        link.id,
        **{
            "name": f"joint_{len(robot.joints) + 1}",
            "origin": Origin(xyz=Vector3(0.0, y_offset, DEFAULT_JOINT_OFFSET_Z), rpy=Euler()),
            **(joint_options or {}),
        },
    )
    return link, joint


def add_child_to_robot(
    robot: RobotState,
    parent_link_id: str,
    link_options: Optional[Mapping[str, Any]] = None,
    joint_options: Optional[Mapping[str, Any]] = None,
) -> RobotState:
    """Copy-on-write child insertion.

    Returns a new RobotState holding the new link and joint with the joint
    selected. *robot* is left untouched.
    """
    new_robot = robot.copy()
    link, joint = build_child(new_robot, parent_link_id, link_options, joint_options)
    new_robot.links.insert(link)
    new_robot.joints.insert(joint)
    new_robot.selection = Selection(type="joint", id=joint.id)
    return new_robot


def clone_link(link: Link, new_id: Optional[str] = None) -> Link:
    """Deep copy of *link* with a new id and a ``_copy`` name suffix."""
    clone = copy.deepcopy(link)
    clone.id = new_id or generate_link_id()
    clone.name = f"{link.name}_copy"
    return clone


def clone_joint(
    joint: Joint,
    new_parent_link_id: str,
    new_child_link_id: str,
    new_id: Optional[str] = None,
) -> Joint:
    """Deep copy of *joint* reattached to the given links (references are not checked)."""
    clone = copy.deepcopy(joint)
    clone.id = new_id or generate_joint_id()
    clone.name = f"{joint.name}_copy"
    clone.parent_link_id = new_parent_link_id
    clone.child_link_id = new_child_link_id
    return clone
