import logging
from collections import defaultdict
from dataclasses import dataclass

from pert_utils.analysis import build_dependency_graph, compute_levels

logger = logging.getLogger(__name__)

# Spacing and margin in diagram units
HORIZONTAL_SPACING = 250
VERTICAL_SPACING = 150
X_OFFSET = 50
Y_OFFSET = 50


@dataclass(frozen=True)
class LayoutNode:
    code: str
    level: int
    slot: int
    x: float
    y: float


@dataclass(frozen=True)
class LayoutEdge:
    source: str
    target: str

    @property
    def id(self) -> str:
        return f"{self.source}-{self.target}"


@dataclass(frozen=True)
class Layout:
    nodes: tuple[LayoutNode, ...]
    edges: tuple[LayoutEdge, ...]

    def positions(self) -> dict[str, tuple[float, float]]:
        return {node.code: (node.x, node.y) for node in self.nodes}

    def node(self, code: str) -> LayoutNode:
        for node in self.nodes:
            if node.code == code:
                return node
        raise KeyError(code)


def compute_layout(activities,
                   horizontal_spacing=HORIZONTAL_SPACING,
                   vertical_spacing=VERTICAL_SPACING,
                   x_offset=X_OFFSET,
                   y_offset=Y_OFFSET) -> Layout:
    """
    Place activities left to right by level.

    Activities sharing a level are stacked top to bottom in the order they
    were added. Arrows run from each existing requirement to its dependent.
    """
    G = build_dependency_graph(activities)
    levels = compute_levels(G)

    # Step 1: Group codes by level, keeping snapshot order
    level_groups = defaultdict(list)
    for code in G:
        level_groups[levels[code]].append(code)

    slots = {}
    for codes in level_groups.values():
        for slot, code in enumerate(codes):
            slots[code] = slot

    # Step 2: Coordinates
    nodes = tuple(
        LayoutNode(code=code,
                   level=levels[code],
                   slot=slots[code],
                   x=levels[code] * horizontal_spacing + x_offset,
                   y=slots[code] * vertical_spacing + y_offset)
        for code in G
    )

    # Step 3: One edge per valid requirement, grouped by dependent
    edges = tuple(
        LayoutEdge(source=requirement, target=code)
        for code in G
        for requirement in G.predecessors(code)
    )

    logger.debug("Layout with %d nodes on %d levels and %d edges", len(nodes), len(level_groups), len(edges))
    return Layout(nodes=nodes, edges=edges)
