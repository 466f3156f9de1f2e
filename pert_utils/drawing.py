"""
Matplotlib rendering of the activity-on-node network.
"""
import logging
from pathlib import Path

import matplotlib.pyplot as plt
import networkx as nx

from pert_utils.analysis import build_dependency_graph, compute_critical_path
from pert_utils.layout import compute_layout
from pert_utils.schedule import DEFAULT_CRITICALITY_THRESHOLDS, get_activity_floats, get_criticality_category

logger = logging.getLogger(__name__)

FIGURE_SIZE = (16, 9)
NODE_SIZE = 2000


def draw_pert_network(activities, title="PERT Network", ax=None, criticality_thresholds=None):
    """
    Draw activities at their layout positions, colored by total float.

    Returns:
        tuple: (figure, axes)
    """
    activities = list(activities)
    if ax is None:
        fig, ax = plt.subplots(figsize=FIGURE_SIZE)
    else:
        fig = ax.figure

    ax.set_title(title, fontsize=16, fontweight='bold', pad=20)
    ax.axis('off')

    if not activities:
        ax.text(0.5, 0.5, "No activities to show", transform=ax.transAxes,
                ha='center', va='center', fontsize=12, color='gray')
        return fig, ax

    G = build_dependency_graph(activities)
    pos = compute_layout(G).positions()
    task_floats = get_activity_floats(activities)
    critical_path, total_duration = compute_critical_path(G)
    critical_edges = set(zip(critical_path, critical_path[1:]))

    # Nodes: unfilled circles with colored borders
    node_edge_colors = []
    node_linewidths = []
    node_styles = {}
    for code in G.nodes():
        if code in task_floats:
            _, color, is_bold = get_criticality_category(task_floats[code], criticality_thresholds)
        else:
            color, is_bold = 'gray', False
        node_styles[code] = (color, is_bold)
        node_edge_colors.append(color)
        node_linewidths.append(3 if is_bold else 2)

    nx.draw_networkx_nodes(G, pos,
                           node_color='white',
                           node_size=NODE_SIZE,
                           edgecolors=node_edge_colors,
                           linewidths=node_linewidths,
                           ax=ax)

    for code in G.nodes():
        color, is_bold = node_styles[code]
        x, y = pos[code]
        ax.text(x, y, f"{code}\n({G.nodes[code]['duration']})",
                ha='center', va='center',
                color=color,
                fontsize=9,
                fontweight='bold' if is_bold else 'normal',
                zorder=5)

    # Arrows: critical path bold black, everything else thin gray
    bold_edges = [(u, v) for u, v in G.edges() if (u, v) in critical_edges]
    thin_edges = [(u, v) for u, v in G.edges() if (u, v) not in critical_edges]
    for edgelist, color, width in ((bold_edges, 'black', 3), (thin_edges, 'gray', 1.5)):
        if edgelist:
            nx.draw_networkx_edges(G, pos, edgelist=edgelist,
                                   edge_color=color,
                                   width=width,
                                   arrows=True,
                                   arrowstyle='->',
                                   arrowsize=20,
                                   node_size=NODE_SIZE,
                                   ax=ax)

    thresholds = criticality_thresholds or DEFAULT_CRITICALITY_THRESHOLDS
    legend_text = (
        f"Critical path: {' → '.join(critical_path)}\n"
        f"Total duration: {total_duration}\n"
        "• BLACK (Bold): Critical (0 float)\n"
        f"• RED: Near critical (1-{thresholds['near_critical']} float)\n"
        f"• ORANGE: Medium critical (up to {thresholds['medium_critical']} float)\n"
        f"• GREEN: Uncritical (>{thresholds['medium_critical']} float)"
    )
    ax.text(1.02, 0.5, legend_text, transform=ax.transAxes,
            fontsize=10, verticalalignment='center',
            bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.9))

    # Slot 0 on top
    ax.invert_yaxis()
    ax.margins(0.15)
    fig.tight_layout()

    return fig, ax


def export_pert_network(activities, path, title="PERT Network", criticality_thresholds=None, dpi=150):
    """Draw the network and write it to `path`; the format follows the suffix (pdf, png, svg)."""
    path = Path(path)
    fig, _ = draw_pert_network(activities, title=title, criticality_thresholds=criticality_thresholds)
    try:
        fig.savefig(path, dpi=dpi, bbox_inches='tight')
    finally:
        plt.close(fig)
    logger.info("Saved PERT network to %s", path)
    return path
