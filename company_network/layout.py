"""Node placement for the network graph.

Initial placement puts officers and PSCs on semicircular arcs and related
companies on a circle around the primary company. The optional
hierarchical pass then lays every level out on its own horizontal band.
All coordinates are canvas pixels; y grows downwards.
"""

import math
from collections.abc import Sequence
from typing import Final

from company_network.schema import CompanyNode, PersonNode, Position

CENTER_X: Final[float] = 500.0
CENTER_Y: Final[float] = 300.0

ARC_RADIUS: Final[float] = 200.0
OFFICER_ARC_CENTER_Y: Final[float] = 500.0
PSC_ARC_CENTER_Y: Final[float] = 100.0
RELATED_RADIUS: Final[float] = 350.0

LEVEL_SPACING: Final[float] = 200.0
BAND_WIDTH: Final[float] = 800.0
MAX_NODE_SPACING: Final[float] = 300.0

PRIMARY_LEVEL: Final[int] = 1


def center_position() -> Position:
    """Fixed position of the primary company."""
    return Position(x=CENTER_X, y=CENTER_Y)


def _arc_position(index: int, count: int, offset: float, center_y: float) -> Position:
    angle = (index / max(count - 1, 1)) * math.pi + offset
    return Position(
        x=CENTER_X + math.cos(angle) * ARC_RADIUS,
        y=center_y + math.sin(angle) * ARC_RADIUS,
    )


def officer_arc_position(index: int, count: int) -> Position:
    """Position of the index-th of count officers, below the company."""
    return _arc_position(index, count, -math.pi / 2, OFFICER_ARC_CENTER_Y)


def psc_arc_position(index: int, count: int) -> Position:
    """Position of the index-th of count PSCs, above the company."""
    return _arc_position(index, count, math.pi / 2, PSC_ARC_CENTER_Y)


def related_circle_position(index: int, count: int) -> Position:
    """Position of the index-th of count related companies on a full circle."""
    angle = (index / count) * 2 * math.pi
    return Position(
        x=CENTER_X + math.cos(angle) * RELATED_RADIUS,
        y=CENTER_Y + math.sin(angle) * RELATED_RADIUS,
    )


def apply_hierarchical_layout(nodes: Sequence[CompanyNode | PersonNode]) -> None:
    """Lay nodes out in horizontal bands by level, in place.

    Level n sits at y = n * LEVEL_SPACING. Nodes of a level are spaced
    evenly, at most MAX_NODE_SPACING apart, across a band no wider than
    BAND_WIDTH centred on CENTER_X. The level-1 node always returns to
    the fixed centre position.

    Args:
        nodes: Graph nodes whose positions are overwritten.
    """
    nodes_by_level: dict[int, list[CompanyNode | PersonNode]] = {}
    for node in nodes:
        nodes_by_level.setdefault(node.level or PRIMARY_LEVEL, []).append(node)

    for level, level_nodes in nodes_by_level.items():
        count = len(level_nodes)
        y_position = level * LEVEL_SPACING
        spacing = min(MAX_NODE_SPACING, BAND_WIDTH / count)
        start_x = CENTER_X - ((count - 1) * spacing) / 2

        for index, node in enumerate(level_nodes):
            if level == PRIMARY_LEVEL:
                node.position = center_position()
            else:
                node.position = Position(x=start_x + index * spacing, y=y_position)
