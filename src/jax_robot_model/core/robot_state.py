"""RobotState: the editable kinematic graph.

A RobotState exclusively owns its links and joints through two arenas. It is
mutated in place by the edit commands; callers that need snapshots (undo
history, copy-on-write editing) take them with :meth:`RobotState.copy`.
"""

import copy
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .arena import Arena
from .types import Joint, Link, Selection


@dataclass
class RobotState:
    """Robot description graph.

    Attributes:
        name: Robot name.
        links: Arena of links, readable as ``id -> Link``.
        joints: Arena of joints, readable as ``id -> Joint``.
        root_link_id: Id of the base of the kinematic tree.
        selection: Current editor selection.
    """
    name: str
    links: Arena = field(default_factory=Arena)
    joints: Arena = field(default_factory=Arena)
    root_link_id: str = ""
    selection: Selection = field(default_factory=Selection)

    @classmethod
    def from_entities(
        cls,
        name: str,
        links: Iterable[Link],
        joints: Iterable[Joint],
        root_link_id: str,
        selection: Optional[Selection] = None,
    ) -> "RobotState":
        """Assemble a state from already-built entities, e.g. the output of a parser."""
        robot = cls(name=name, root_link_id=root_link_id, selection=selection or Selection())
        for link in links:
            robot.links.insert(link)
        for joint in joints:
            robot.joints.insert(joint)
        return robot

    @property
    def root_link(self) -> Optional[Link]:
        return self.links.get(self.root_link_id)

    def copy(self) -> "RobotState":
        """Fully independent deep copy; no entity is shared with the original."""
        return copy.deepcopy(self)
