"""Shared fixtures."""

import pytest

from jax_robot_model.core.builders import create_joint, create_link
from jax_robot_model.core.robot_state import RobotState


def _build_robot(edges, link_ids=None, root="base", name="robot"):
    ids = list(link_ids or [])
    for parent, child in edges:
        for link_id in (parent, child):
            if link_id not in ids:
                ids.append(link_id)
    if root not in ids:
        ids.insert(0, root)

    links = [create_link(id=link_id, name=link_id) for link_id in ids]
    joints = [
        create_joint(parent, child, id=f"{parent}_{child}", name=f"{parent}_{child}")
        for parent, child in edges
    ]
    return RobotState.from_entities(name, links, joints, root)


@pytest.fixture
def make_robot():
    """Factory building a robot from ``(parent, child)`` pairs.

    Link ids double as names; joints are named ``<parent>_<child>``.
    """
    return _build_robot


@pytest.fixture
def arm():
    """base -> shoulder -> elbow -> wrist, plus a second base branch to ``tool``."""
    return _build_robot([
        ("base", "shoulder"),
        ("shoulder", "elbow"),
        ("elbow", "wrist"),
        ("base", "tool"),
    ])
