import logging

import networkx as nx
import pandas as pd

from pert_utils.analysis import CyclicDependencyError, build_dependency_graph, find_dependency_cycle

logger = logging.getLogger(__name__)

SCHEDULE_COLUMNS = ["Code", "Description", "Duration", "Cost",
                    "EST", "EFT", "LST", "LFT", "TF", "FF", "Critical", "Requirements"]

DEFAULT_CRITICALITY_THRESHOLDS = {
    'near_critical': 5,    # 1-5 units float
    'medium_critical': 15  # 6-15 units float
}


def schedule_activities(activities) -> pd.DataFrame:
    """
    Forward and backward pass over the dependency graph.

    Times are in duration units since project start. The graph must be
    acyclic, otherwise `CyclicDependencyError` is raised.
    """
    activities = list(activities)
    if not activities:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)

    G = build_dependency_graph(activities)
    try:
        order = list(nx.topological_sort(G))
    except nx.NetworkXUnfeasible:
        raise CyclicDependencyError(find_dependency_cycle(G)) from None

    # Forward pass: EST and EFT
    est, eft = {}, {}
    for code in order:
        est[code] = max((eft[pred] for pred in G.predecessors(code)), default=0)
        eft[code] = est[code] + G.nodes[code]["duration"]

    project_finish = max(eft.values())

    # Backward pass: LFT and LST, end activities finish with the project
    lst, lft = {}, {}
    for code in reversed(order):
        lft[code] = min((lst[succ] for succ in G.successors(code)), default=project_finish)
        lst[code] = lft[code] - G.nodes[code]["duration"]

    data = []
    for activity in activities:
        code = activity.code

        # TF (Total Float): LFT - EFT
        tf = lft[code] - eft[code]

        # FF (Free Float): min(EST of dependents) - EFT
        successor_est_values = [est[succ] for succ in G.successors(code)]
        ff = min(successor_est_values) - eft[code] if successor_est_values else tf

        data.append({
            "Code": code,
            "Description": activity.description,
            "Duration": activity.duration,
            "Cost": activity.cost,
            "EST": est[code],
            "EFT": eft[code],
            "LST": lst[code],
            "LFT": lft[code],
            "TF": tf,
            "FF": ff,
            "Critical": tf == 0,
            "Requirements": list(activity.requirements),
        })

    logger.debug("Scheduled %d activities, project finishes at %d", len(data), project_finish)
    return pd.DataFrame(data, columns=SCHEDULE_COLUMNS)


def get_activity_floats(activities) -> dict[str, int]:
    """Map code -> total float, or an empty dict if the project has a cycle."""
    try:
        table = schedule_activities(activities)
    except CyclicDependencyError as exc:
        logger.warning("No float values: %s", exc)
        return {}
    return {code: int(tf) for code, tf in zip(table["Code"], table["TF"])}


def get_criticality_category(float_value, thresholds=None):
    """
    Classify an activity by its total float.

    Zero float is critical; up to ``thresholds['near_critical']`` is near
    critical, up to ``thresholds['medium_critical']`` medium critical, and
    anything above uncritical. `DEFAULT_CRITICALITY_THRESHOLDS` applies when
    no thresholds are given.

    Returns:
        tuple: (category_name, color, is_bold)
    """
    if thresholds is None:
        thresholds = DEFAULT_CRITICALITY_THRESHOLDS

    if float_value == 0:
        return ('critical', 'black', True)
    elif float_value <= thresholds['near_critical']:
        return ('near_critical', 'red', False)
    elif float_value <= thresholds['medium_critical']:
        return ('medium_critical', 'orange', False)
    else:
        return ('uncritical', 'green', False)
