"""
Shared pytest fixtures for pert_utils tests.
"""
import matplotlib

matplotlib.use("Agg")

import pytest

from pert_utils.activity import Activity
from pert_utils.project import Project


@pytest.fixture
def make_activity():
    """Factory for activities built directly, bypassing validation."""
    def _make(code, duration, requirements=(), cost=0.0, description=None):
        return Activity(code=code,
                        description=description or f"Activity {code}",
                        duration=duration,
                        cost=cost,
                        requirements=tuple(requirements))
    return _make


@pytest.fixture
def diamond_activities(make_activity):
    """A(3) -> B(2), C(4) -> D(1); the critical path is A, C, D."""
    return [
        make_activity("A", 3, cost=100.0),
        make_activity("B", 2, ["A"], cost=200.0),
        make_activity("C", 4, ["A"], cost=300.0),
        make_activity("D", 1, ["B", "C"], cost=400.5),
    ]


@pytest.fixture
def diamond_project():
    return Project("Diamond", [
        {"code": "A", "description": "Plan", "duration": 3, "cost": 100},
        {"code": "B", "description": "Design", "duration": 2, "cost": 200, "requirements": ["A"]},
        {"code": "C", "description": "Build", "duration": 4, "cost": 300, "requirements": ["A"]},
        {"code": "D", "description": "Ship", "duration": 1, "cost": 400.5, "requirements": ["B", "C"]},
    ])


@pytest.fixture
def cyclic_activities(make_activity):
    """Two activities requiring each other, as could only come from unvalidated data."""
    return [
        make_activity("A", 1, ["B"]),
        make_activity("B", 2, ["A"]),
    ]
