"""
Dependency-graph analysis of a project snapshot.

Every function takes the current activities (or a graph already built from
them by `build_dependency_graph`) and recomputes from scratch. Requirements
naming unknown codes are ignored, as are self-references.

On an acyclic graph the values come from a single pass over a topological
order. On a cyclic graph, activities at or below a cycle are found by
recursive traversal where a node met again while still on the current path
contributes 0; the call terminates but the numbers for the cycle are
truncated. Activities above or beside the cycle keep exact values. Pass
``strict=True`` to get a `CyclicDependencyError` instead.
"""
import logging

import networkx as nx

logger = logging.getLogger(__name__)


class CyclicDependencyError(ValueError):
    def __init__(self, cycle: list[str]):
        self.cycle = list(cycle)
        super().__init__(f"Cyclic dependency: {' -> '.join(self.cycle + self.cycle[:1])}")


def build_dependency_graph(activities) -> nx.DiGraph:
    """
    Build a directed graph with an edge requirement -> dependent.

    Nodes keep the snapshot order and predecessors keep the requirement
    order, both of which decide ties later on.
    """
    if isinstance(activities, nx.DiGraph):
        return activities

    activities = list(activities)
    G = nx.DiGraph()
    for activity in activities:
        G.add_node(activity.code,
                   description=activity.description,
                   duration=activity.duration,
                   cost=activity.cost)

    for activity in activities:
        for requirement in activity.requirements:
            if requirement in G and requirement != activity.code:
                G.add_edge(requirement, activity.code)

    return G


def find_dependency_cycle(activities) -> list[str] | None:
    """Return the codes of one dependency cycle in dependency order, or None."""
    G = build_dependency_graph(activities)
    try:
        edges = nx.find_cycle(G)
    except nx.NetworkXNoCycle:
        return None
    return [u for u, _ in edges]


def _topological_order(G: nx.DiGraph, strict: bool):
    try:
        return list(nx.topological_sort(G))
    except nx.NetworkXUnfeasible:
        cycle = find_dependency_cycle(G)
        if strict:
            raise CyclicDependencyError(cycle)
        logger.warning("Dependency cycle %s, results along it are truncated", " -> ".join(cycle))
        return None


def compute_levels(activities, strict: bool = False) -> dict[str, int]:
    """
    Level of each activity: 0 without requirements, otherwise one more than
    the highest level among its requirements.
    """
    G = build_dependency_graph(activities)
    order = _topological_order(G, strict)

    if order is None:
        return _guarded_levels(G)

    levels = {}
    for code in order:
        levels[code] = max((levels[r] + 1 for r in G.predecessors(code)), default=0)
    return {code: levels[code] for code in G}


def _guarded_levels(G):
    # Activities with no cycle among their requirements keep exact levels
    below_cycle = set()
    for component in nx.strongly_connected_components(G):
        if len(component) > 1:
            below_cycle |= component
    for code in list(below_cycle):
        below_cycle |= nx.descendants(G, code)

    levels = {}
    for code in nx.topological_sort(G.subgraph(n for n in G if n not in below_cycle)):
        levels[code] = max((levels[r] + 1 for r in G.predecessors(code)), default=0)

    def level(code, path):
        if code in levels:
            return levels[code]
        if code in path:
            return 0
        path = path | {code}
        return max((level(r, path) + 1 for r in G.predecessors(code)), default=0)

    return {code: level(code, frozenset()) for code in G}


def _extend_chain(G, code, lookup):
    # First requirement reaching the maximum wins
    best = None
    for requirement in G.predecessors(code):
        candidate = lookup(requirement)
        if best is None or candidate[0] > best[0]:
            best = candidate

    duration = G.nodes[code]["duration"]
    if best is None:
        return duration, [code]
    return best[0] + duration, best[1] + [code]


def compute_longest_paths(activities, strict: bool = False) -> dict[str, tuple[int, list[str]]]:
    """
    For every activity, the longest requirement chain ending with it.

    Returns:
        dict: code -> (summed duration of the chain, codes of the chain)
    """
    G = build_dependency_graph(activities)
    order = _topological_order(G, strict)

    if order is None:
        return _guarded_longest_paths(G)

    longest = {}
    for code in order:
        longest[code] = _extend_chain(G, code, longest.__getitem__)
    return {code: longest[code] for code in G}


def _guarded_longest_paths(G):
    memo = {}
    on_path = set()

    def visit(code):
        if code in memo:
            return memo[code]
        if code in on_path:
            return 0, []
        on_path.add(code)
        memo[code] = _extend_chain(G, code, visit)
        on_path.discard(code)
        return memo[code]

    for code in G:
        visit(code)
    return {code: memo[code] for code in G}


def compute_cumulative_durations(activities, strict: bool = False) -> dict[str, int]:
    """Own duration plus the largest cumulative duration among the requirements."""
    return {code: length for code, (length, _) in compute_longest_paths(activities, strict).items()}


def compute_critical_path(activities, strict: bool = False) -> tuple[list[str], int]:
    """
    The longest chain in the project and its duration.

    Ties go to the activity that comes first in the snapshot. An empty
    project has the path [] and duration 0.
    """
    best_length, best_path = None, []
    for length, path in compute_longest_paths(activities, strict).values():
        if best_length is None or length > best_length:
            best_length, best_path = length, path
    return list(best_path), best_length or 0
