"""OSM primitive data models produced by the conversion engine.

Nodes, ways and relations share no base class. Each one carries a ``Tags``
object, and that object is the capability the tag mapper and the inclusion
filter rely on. Way geometry refers to nodes through integer handles into a
``NodeArena``, so a node shared at a split boundary or a ring closure is the
same handle in both ways rather than two equal coordinates.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union


class Tags:
    """Ordered tag collection with unique keys.

    Adding an existing key overwrites its value (last write wins) while the
    key keeps its original position.
    """

    __slots__ = ('_tags',)

    def __init__(self, tags: Optional[Dict[str, str]] = None):
        self._tags: Dict[str, str] = dict(tags) if tags else {}

    def add(self, key: str, value: str) -> None:
        """Add or overwrite a tag."""
        self._tags[key] = value

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._tags.get(key, default)

    def items(self):
        return self._tags.items()

    def matches(self, predicate: Callable[[str, str], bool]) -> bool:
        """Check whether any (key, value) pair satisfies ``predicate``.

        Args:
            predicate: Callable taking a tag key and value

        Returns:
            True if at least one tag is accepted by the predicate
        """
        return any(predicate(k, v) for k, v in self._tags.items())

    def __contains__(self, key: object) -> bool:
        return key in self._tags

    def __getitem__(self, key: str) -> str:
        return self._tags[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __bool__(self) -> bool:
        return bool(self._tags)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Tags):
            return self._tags == other._tags
        if isinstance(other, dict):
            return self._tags == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Tags({self._tags!r})"


@dataclass(eq=False)
class Node:
    """OSM Node with a WGS84 location and tags."""
    lat: float
    lon: float
    tags: Tags = field(default_factory=Tags)

    @property
    def coordinates(self) -> Tuple[float, float]:
        """Location as an (x, y) / (lon, lat) pair."""
        return (self.lon, self.lat)


class NodeArena:
    """Index-based node store.

    Each ``add`` call creates a new node and returns its integer handle.
    Handles are positions in the arena and stay valid for its lifetime;
    the converter uses one arena per source feature.
    """

    def __init__(self):
        self.nodes: List[Node] = []

    def add(self, lat: float, lon: float) -> int:
        """Create a node and return its handle."""
        self.nodes.append(Node(lat=lat, lon=lon))
        return len(self.nodes) - 1

    def __getitem__(self, handle: int) -> Node:
        return self.nodes[handle]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)


@dataclass(eq=False)
class Way:
    """OSM Way as an ordered list of node handles into an arena.

    The same handle may appear more than once, e.g. first and last node of
    a closed ring.
    """
    arena: NodeArena = field(repr=False)
    nodes: List[int] = field(default_factory=list)
    tags: Tags = field(default_factory=Tags)

    @property
    def is_closed(self) -> bool:
        """Check if this way ends on the node it starts with."""
        return len(self.nodes) >= 2 and self.nodes[0] == self.nodes[-1]

    def node(self, index: int) -> Node:
        """Resolve the node at ``index`` through the arena."""
        return self.arena[self.nodes[index]]

    def coordinates(self) -> List[Tuple[float, float]]:
        """Resolve all handles to (lon, lat) pairs."""
        return [self.arena[h].coordinates for h in self.nodes]


@dataclass(eq=False)
class Member:
    """Relation member: a referenced primitive with a role."""
    primitive: 'Primitive'
    role: str

    @property
    def member_type(self) -> str:
        """OSM member type name ('node', 'way' or 'relation')."""
        if isinstance(self.primitive, Node):
            return 'node'
        if isinstance(self.primitive, Way):
            return 'way'
        return 'relation'


@dataclass(eq=False)
class Relation:
    """OSM Relation with ordered, role-labelled members and tags."""
    members: List[Member] = field(default_factory=list)
    tags: Tags = field(default_factory=Tags)

    def add_member(self, primitive: 'Primitive', role: str) -> None:
        self.members.append(Member(primitive, role))

    @property
    def member_count(self) -> int:
        """Get the number of members in this relation."""
        return len(self.members)

    def get_members_by_role(self, role: str) -> List[Member]:
        """Get all members with a specific role.

        Args:
            role: The role to filter by (e.g., 'outer', 'inner')

        Returns:
            List of members with the specified role
        """
        return [m for m in self.members if m.role == role]


Primitive = Union[Node, Way, Relation]
