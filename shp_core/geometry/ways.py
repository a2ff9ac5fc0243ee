"""Split coordinate sequences into bounded-size OSM ways.

OSM limits a way to 2000 node references. Longer lines and rings are cut
into consecutive ways that share their junction node, so the connectivity
of the source geometry survives the split.
"""
from typing import List, Sequence

from shp_core.exceptions import GeometryError
from shp_core.models.elements import NodeArena, Way

MAX_NODES_IN_WAY = 2000


def _check_max_nodes(max_nodes: int) -> None:
    if max_nodes < 2:
        raise ValueError(f"max_nodes must be at least 2, got {max_nodes}")


def linestring_to_ways(coords: Sequence[Sequence[float]], arena: NodeArena,
                       max_nodes: int = MAX_NODES_IN_WAY) -> List[Way]:
    """Convert an open line into the fewest ways of at most ``max_nodes`` nodes.

    Every coordinate becomes a new node in ``arena``. When a way is full,
    the next way starts with the full way's last handle.

    Args:
        coords: Ordered (x, y) coordinates, x being longitude
        arena: Node store receiving the new nodes
        max_nodes: Node ceiling per way

    Returns:
        Ordered list of ways; empty if ``coords`` is empty

    Examples:
        >>> arena = NodeArena()
        >>> ways = linestring_to_ways([(0, 0), (1, 1), (2, 2)], arena, max_nodes=2)
        >>> [w.nodes for w in ways]
        [[0, 1], [1, 2]]
    """
    _check_max_nodes(max_nodes)

    ways: List[Way] = []
    way = Way(arena)

    for coord in coords:
        handle = arena.add(lat=coord[1], lon=coord[0])
        if len(way.nodes) == max_nodes:
            ways.append(way)
            way = Way(arena, nodes=[way.nodes[-1]])
        way.nodes.append(handle)

    # Add the last way to the list of ways
    if way.nodes:
        ways.append(way)

    return ways


def polygon_to_ways(ring: Sequence[Sequence[float]], arena: NodeArena,
                    max_nodes: int = MAX_NODES_IN_WAY) -> List[Way]:
    """Convert a polygon ring into ways of at most ``max_nodes`` nodes.

    If the last coordinate equals the first one exactly, the last way ends
    with the first way's first handle instead of a duplicate node. An
    unclosed ring keeps its last coordinate as a separate node.

    Splitting happens every ``max_nodes - 1`` middle nodes because the
    junction node counts against both neighbouring ways.

    Args:
        ring: Ordered (x, y) coordinates of the ring
        arena: Node store receiving the new nodes
        max_nodes: Node ceiling per way

    Returns:
        Ordered list of ways, never empty

    Raises:
        GeometryError: If the ring has fewer than 2 coordinates
    """
    _check_max_nodes(max_nodes)
    if len(ring) < 2:
        raise GeometryError(f"Way with less than 2 nodes ({len(ring)} coordinates in ring).")

    ways: List[Way] = []

    first_coord = ring[0]
    first = arena.add(lat=first_coord[1], lon=first_coord[0])
    way = Way(arena, nodes=[first])

    for i in range(1, len(ring) - 1):
        coord = ring[i]
        handle = arena.add(lat=coord[1], lon=coord[0])
        way.nodes.append(handle)

        if i % (max_nodes - 1) == 0:
            ways.append(way)
            way = Way(arena, nodes=[handle])

    last_coord = ring[-1]
    if last_coord[0] == first_coord[0] and last_coord[1] == first_coord[1]:
        way.nodes.append(first)
    else:
        way.nodes.append(arena.add(lat=last_coord[1], lon=last_coord[0]))

    ways.append(way)
    return ways
