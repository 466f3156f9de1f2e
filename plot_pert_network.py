#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Standalone script to plot the PERT network of an example project.

Usage:
    python plot_pert_network.py                 # show the diagram
    python plot_pert_network.py network.pdf     # write it to a file instead
"""
import logging
import sys

import matplotlib.pyplot as plt

from pert_utils.project import Project

logger = logging.getLogger(__name__)


def build_example_project():
    project = Project("Example Project")
    project.add_activity("A", "Requirements", 3, 1200)
    project.add_activity("B", "Design", 2, 800, requirements=["A"])
    project.add_activity("C", "Implementation", 4, 4500, requirements=["A"])
    project.add_activity("D", "Release", 1, 300, requirements=["B", "C"])
    project.add_activity("E", "Documentation", 2, 600, requirements=["B"])
    return project


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    project = build_example_project()

    summary = project.compute_summary()
    logger.info("Critical path: %s", " → ".join(summary.critical_path))
    logger.info("Total duration: %s, total cost: %.2f", summary.total_duration, summary.total_cost)
    logger.info("Schedule:\n%s", project.schedule_activities().to_string(index=False))

    if argv:
        return project.export_pert_network(argv[0])

    project.draw_pert_network()
    plt.show()
    return None


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    main()
