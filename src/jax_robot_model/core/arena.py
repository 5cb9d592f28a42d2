"""Dense entity store owning the links or joints of a robot.

Records live in a flat list and are addressed by integer handles. Two side
indices map entity ids and display names to handles, so lookups by either
stay O(1) while the arena remains the single owner of every entity.
"""

from typing import Dict, Iterator, List, Mapping, NewType, Optional, TypeVar

from .types import Joint, Link

Handle = NewType("Handle", int)
LinkHandle = Handle
JointHandle = Handle

T = TypeVar("T", Link, Joint)


class Arena(Mapping[str, T]):
    """Handle-addressed store of entities, readable as an ``id -> entity`` mapping.

    Removing an entity empties its slot; handles are never reused, so a stale
    handle raises instead of resolving to a different entity. Renames must go
    through :meth:`rename` to keep the name index current; an entity renamed
    by plain attribute assignment is only found again after :meth:`reindex`.
    """

    def __init__(self, entities: Optional[Mapping[str, T]] = None):
        self._records: List[Optional[T]] = []
        self._by_id: Dict[str, Handle] = {}
        self._by_name: Dict[str, List[Handle]] = {}
        self._indexed_names: Dict[Handle, str] = {}
        if entities:
            for entity in entities.values():
                self.insert(entity)

    # Mapping protocol
    def __getitem__(self, entity_id: str) -> T:
        return self._records[self._by_id[entity_id]]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._by_id

    def __repr__(self) -> str:
        return f"Arena({list(self._by_id)})"

    # Handle access
    def insert(self, entity: T) -> Handle:
        """Store *entity* under its id; an existing entity with that id is replaced in place."""
        handle = self._by_id.get(entity.id)
        if handle is not None:
            self._unindex_name(handle)
            self._records[handle] = entity
        else:
            handle = Handle(len(self._records))
            self._records.append(entity)
            self._by_id[entity.id] = handle
        self._index_name(handle)
        return handle

    def remove(self, entity_id: str) -> T:
        handle = self._by_id.pop(entity_id)
        self._unindex_name(handle)
        entity = self._records[handle]
        self._records[handle] = None
        return entity

    def get_by_handle(self, handle: Handle) -> T:
        if handle < 0 or handle >= len(self._records) or self._records[handle] is None:
            raise KeyError(f"Handle {handle} does not refer to a live entity")
        return self._records[handle]

    def handle_of(self, entity_id: str) -> Handle:
        return self._by_id[entity_id]

    def handles(self) -> List[Handle]:
        return list(self._by_id.values())

    # Name index
    def rename(self, entity_id: str, new_name: str) -> None:
        handle = self._by_id[entity_id]
        self._unindex_name(handle)
        self._records[handle].name = new_name
        self._index_name(handle)

    def reindex(self) -> None:
        """Rebuild the name index from the current entity names."""
        self._by_name.clear()
        self._indexed_names.clear()
        for handle in self._by_id.values():
            self._index_name(handle)

    def find_all_by_name(self, name: str) -> List[T]:
        # entities renamed by plain attribute assignment are filtered out here
        return [
            self._records[h] for h in self._by_name.get(name, [])
            if self._records[h].name == name
        ]

    def find_by_name(self, name: str) -> Optional[T]:
        matches = self.find_all_by_name(name)
        return matches[0] if matches else None

    def _index_name(self, handle: Handle) -> None:
        name = self._records[handle].name
        self._indexed_names[handle] = name
        self._by_name.setdefault(name, []).append(handle)

    def _unindex_name(self, handle: Handle) -> None:
        name = self._indexed_names.pop(handle)
        handles = self._by_name[name]
        handles.remove(handle)
        if not handles:
            del self._by_name[name]
