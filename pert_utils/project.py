#!/usr/bin/env python
# coding: utf-8

import logging

import pandas as pd

from pert_utils.activity import Activity
from pert_utils.drawing import draw_pert_network, export_pert_network
from pert_utils.layout import compute_layout
from pert_utils.schedule import schedule_activities
from pert_utils.summary import compute_summary
from pert_utils.validation import (
    DeleteOutcome,
    apply_deletion,
    plan_deletion,
    validate_activity_update,
    validate_new_activity,
)

logger = logging.getLogger(__name__)


class Project:
    """
    Owns the activities of a project and applies validated edits to them.

    Derived views (layout, summary, schedule, diagram) are never stored;
    each call computes them from the current activities.
    """

    def __init__(self, name: str, activities: list[dict] | None = None):
        self.name = name
        self._activities: dict[str, Activity] = {}
        for activity in activities or []:
            self.add_activity(activity.get("code"),
                              activity.get("description"),
                              activity.get("duration"),
                              activity.get("cost"),
                              activity.get("requirements"))

    @property
    def activities(self) -> list[Activity]:
        """Snapshot of the activities in the order they were added."""
        return list(self._activities.values())

    def __len__(self):
        return len(self._activities)

    def __contains__(self, code):
        return code in self._activities

    def get_activity(self, code: str) -> Activity:
        return self._activities[code]

    def add_activity(self, code, description, duration, cost, requirements=None) -> Activity:
        candidate = {
            "code": code,
            "description": description,
            "duration": duration,
            "cost": cost,
            "requirements": requirements,
        }
        activity = validate_new_activity(candidate, self.activities)
        self._activities[activity.code] = activity
        logger.info("Added activity %s to %s", activity.code, self.name)
        return activity

    def update_activity(self, code, description, duration, cost, requirements=None) -> Activity:
        """Replace the fields of an existing activity; its code and position stay."""
        candidate = {
            "code": code,
            "description": description,
            "duration": duration,
            "cost": cost,
            "requirements": requirements,
        }
        activity = validate_activity_update(candidate, self.activities)
        self._activities[activity.code] = activity
        logger.info("Updated activity %s in %s", activity.code, self.name)
        return activity

    def dependents_of(self, code: str) -> list[str]:
        return list(plan_deletion(code, self.activities).dependents)

    def delete_activity(self, code: str, confirmed: bool = False) -> DeleteOutcome:
        """
        Delete an activity.

        Without dependents the activity is removed right away. If other
        activities still require it, nothing happens until the call is
        repeated with ``confirmed=True``; then it is removed together with
        every reference to it.
        """
        outcome = plan_deletion(code, self.activities)
        if outcome.requires_confirmation and not confirmed:
            logger.info("Deleting %s needs confirmation, required by %s", code, ", ".join(outcome.dependents))
            return outcome

        remaining = apply_deletion(code, self.activities)
        self._activities = {activity.code: activity for activity in remaining}
        logger.info("Deleted activity %s from %s, cleaned %d dependents", code, self.name, len(outcome.dependents))
        return DeleteOutcome(code=code, dependents=outcome.dependents, removed=True)

    def get_activity_table(self) -> pd.DataFrame:
        return pd.DataFrame([activity.to_row() for activity in self.activities],
                            columns=["Code", "Description", "Duration", "Cost", "Requirements"])

    def compute_layout(self, **spacing):
        return compute_layout(self.activities, **spacing)

    def compute_summary(self):
        return compute_summary(self.activities)

    def schedule_activities(self) -> pd.DataFrame:
        return schedule_activities(self.activities)

    def draw_pert_network(self, title=None, ax=None, criticality_thresholds=None):
        return draw_pert_network(self.activities,
                                 title=title or f"PERT network for {self.name}",
                                 ax=ax,
                                 criticality_thresholds=criticality_thresholds)

    def export_pert_network(self, path, title=None, criticality_thresholds=None):
        return export_pert_network(self.activities, path,
                                   title=title or f"PERT network for {self.name}",
                                   criticality_thresholds=criticality_thresholds)
