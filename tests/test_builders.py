"""Tests for the entity builders."""

import logging
import re

from jax_robot_model.core import builders
from jax_robot_model.core.constants import DEFAULT_LINK, ROOT_LINK_NAME
from jax_robot_model.core.types import (
    Euler,
    GeometryType,
    JointType,
    Origin,
    Vector3,
)
from jax_robot_model.core.validators import validate_robot


def test_generate_id_format():
    """Ids are ``<prefix><millis>_<5 base36 chars>``."""
    assert re.fullmatch(r"link_\d+_[0-9a-z]{5}", builders.generate_link_id())
    assert re.fullmatch(r"joint_\d+_[0-9a-z]{5}", builders.generate_joint_id())
    assert builders.generate_id("x_").startswith("x_")


def test_generate_id_is_practically_unique():
    """Ids generated in the same millisecond still differ."""
    ids = {builders.generate_link_id() for _ in range(200)}
    assert len(ids) == 200


def test_create_link_defaults():
    """A bare link uses the default template with a generated id."""
    link = builders.create_link()

    assert link.id.startswith("link_")
    assert link.name == link.id
    assert link.visible
    assert link.visual.type == GeometryType.CYLINDER
    assert link.visual.color == "#3b82f6"
    assert link.collision.color == "#ef4444"
    assert link.visual.dimensions.x == 0.05
    assert link.visual.dimensions.y == 0.5
    assert link.inertial.mass == 1.0
    assert link.inertial.inertia.ixx == 0.1


def test_create_link_explicit_id_and_name():
    """Test that supplied id and name are kept."""
    link = builders.create_link(id="arm", name="upper_arm")
    assert link.id == "arm"
    assert link.name == "upper_arm"


def test_create_link_deep_merges_nested_fields():
    """Partial nested options only replace the fields they name."""
    link = builders.create_link(
        name="arm",
        visual={"type": "box", "dimensions": {"x": 0.1}},
        inertial={"mass": 2.5},
    )

    assert link.visual.type == GeometryType.BOX
    assert link.visual.dimensions.x == 0.1
    assert link.visual.dimensions.y == 0.5
    assert link.visual.color == "#3b82f6"
    assert link.inertial.mass == 2.5
    assert link.inertial.inertia.iyy == 0.1


def test_create_link_accepts_full_values():
    """Frozen values can be passed whole."""
    origin = Origin(xyz=Vector3(0.0, 0.0, 0.25), rpy=Euler(0.0, 0.0, 0.0))
    link = builders.create_link(visual={"origin": origin})
    assert link.visual.origin.xyz.z == 0.25


def test_create_link_does_not_touch_defaults():
    """Mutating a built link never leaks into the default template."""
    link = builders.create_link()
    link.inertial.mass = 42.0
    link.visual.color = "#000000"

    assert DEFAULT_LINK.inertial.mass == 1.0
    assert DEFAULT_LINK.visual.color == "#3b82f6"
    assert builders.create_link().inertial.mass == 1.0


def test_create_link_unknown_option_is_ignored(caplog):
    """Unknown option keys are logged and skipped."""
    with caplog.at_level(logging.WARNING, logger="jax_robot_model"):
        link = builders.create_link(name="arm", colour="red", visual={"shine": 1.0})

    assert link.name == "arm"
    assert "colour" in caplog.text
    assert "visual.shine" in caplog.text


def test_create_joint_defaults():
    """A bare joint uses the default template."""
    joint = builders.create_joint("a", "b")

    assert joint.id.startswith("joint_")
    assert joint.name == joint.id
    assert joint.parent_link_id == "a"
    assert joint.child_link_id == "b"
    assert joint.type == JointType.REVOLUTE
    assert joint.origin.xyz.z == 0.5
    assert (joint.axis.x, joint.axis.y, joint.axis.z) == (0.0, 0.0, 1.0)
    assert (joint.limit.lower, joint.limit.upper) == (-1.57, 1.57)
    assert (joint.limit.effort, joint.limit.velocity) == (100.0, 10.0)
    assert joint.hardware.motor_type == "Go1-M8010-6"
    assert joint.hardware.motor_direction == 1
    assert joint.angle is None


def test_create_joint_options():
    """Joint type strings are converted, unknown ones kept raw."""
    prismatic = builders.create_joint("a", "b", type="prismatic", limit={"upper": 0.2})
    assert prismatic.type == JointType.PRISMATIC
    assert prismatic.limit.upper == 0.2
    assert prismatic.limit.lower == -1.57

    ball = builders.create_joint("a", "b", type="ball")
    assert ball.type == "ball"


def test_create_joint_references_are_not_checked():
    """Builders never validate."""
    joint = builders.create_joint("missing", "missing")
    assert joint.parent_link_id == joint.child_link_id == "missing"


def test_create_empty_robot():
    """An empty robot holds only a selected root link."""
    robot = builders.create_empty_robot()

    assert robot.name == "robot"
    assert len(robot.links) == 1
    assert len(robot.joints) == 0
    assert robot.root_link.name == ROOT_LINK_NAME
    assert robot.selection.type == "link"
    assert robot.selection.id == robot.root_link_id
    assert validate_robot(robot).valid

    assert builders.create_empty_robot("walker").name == "walker"


def test_add_child_to_robot_is_copy_on_write():
    """The input robot is not modified."""
    robot = builders.create_empty_robot()
    new_robot = builders.add_child_to_robot(robot, robot.root_link_id)

    assert len(robot.links) == 1
    assert len(robot.joints) == 0
    assert len(new_robot.links) == 2
    assert len(new_robot.joints) == 1

    joint = new_robot.joints[new_robot.selection.id]
    assert new_robot.selection.type == "joint"
    assert joint.parent_link_id == robot.root_link_id
    assert joint.child_link_id in new_robot.links
    assert joint.name == "joint_1"
    assert new_robot.links[joint.child_link_id].name == "link_2"
    assert validate_robot(new_robot).valid


def test_add_child_to_robot_offsets_siblings():
    """Each additional sibling is shifted 0.5 along y."""
    robot = builders.create_empty_robot()
    root = robot.root_link_id
    for _ in range(3):
        robot = builders.add_child_to_robot(robot, root)

    offsets = sorted(j.origin.xyz.y for j in robot.joints.values())
    assert offsets == [0.0, 0.5, 1.0]
    assert all(j.origin.xyz.z == 0.5 for j in robot.joints.values())


def test_add_child_to_robot_options():
    """Link and joint options override the generated defaults."""
    robot = builders.create_empty_robot()
    robot = builders.add_child_to_robot(
        robot,
        robot.root_link_id,
        link_options={"name": "wheel", "visual": {"type": "sphere"}},
        joint_options={"type": "continuous"},
    )

    joint = robot.joints[robot.selection.id]
    child = robot.links[joint.child_link_id]
    assert child.name == "wheel"
    assert child.visual.type == GeometryType.SPHERE
    assert joint.type == JointType.CONTINUOUS


def test_clone_link_is_independent():
    """Clones get a new id, a suffixed name and no shared nested state."""
    link = builders.create_link(name="arm")
    clone = builders.clone_link(link)

    assert clone.id != link.id
    assert clone.name == "arm_copy"

    clone.inertial.inertia.ixx = 5.0
    clone.visual.origin = Origin(xyz=Vector3(1.0, 2.0, 3.0))
    assert link.inertial.inertia.ixx == 0.1
    assert link.visual.origin.xyz.x == 0.0

    assert builders.clone_link(link, new_id="arm2").id == "arm2"


def test_clone_joint_is_independent():
    """Cloned joints are rewired and share no nested state."""
    joint = builders.create_joint("a", "b", name="elbow")
    clone = builders.clone_joint(joint, "c", "d")

    assert clone.id != joint.id
    assert clone.name == "elbow_copy"
    assert (clone.parent_link_id, clone.child_link_id) == ("c", "d")
    assert (joint.parent_link_id, joint.child_link_id) == ("a", "b")

    clone.limit.lower = -3.0
    clone.hardware.motor_id = "7"
    assert joint.limit.lower == -1.57
    assert joint.hardware.motor_id == "0"
