import pytest

from pert_utils.analysis import CyclicDependencyError
from pert_utils.schedule import (
    DEFAULT_CRITICALITY_THRESHOLDS,
    SCHEDULE_COLUMNS,
    get_activity_floats,
    get_criticality_category,
    schedule_activities,
)


def test_diamond_schedule(diamond_activities):
    table = schedule_activities(diamond_activities)

    assert list(table.columns) == SCHEDULE_COLUMNS
    assert list(table["Code"]) == ["A", "B", "C", "D"]
    assert list(table["EST"]) == [0, 3, 3, 7]
    assert list(table["EFT"]) == [3, 5, 7, 8]
    assert list(table["LST"]) == [0, 5, 3, 7]
    assert list(table["LFT"]) == [3, 7, 7, 8]
    assert list(table["TF"]) == [0, 2, 0, 0]
    assert list(table["FF"]) == [0, 2, 0, 0]
    assert list(table["Critical"]) == [True, False, True, True]


def test_free_float_differs_from_total_float(make_activity):
    # B and C share 3 units of slack, only C can use it without moving a dependent
    activities = [
        make_activity("A", 5),
        make_activity("B", 1),
        make_activity("C", 1, ["B"]),
        make_activity("D", 1, ["A", "C"]),
    ]
    table = schedule_activities(activities).set_index("Code")

    assert table.loc["B", "TF"] == 3
    assert table.loc["B", "FF"] == 0
    assert table.loc["C", "TF"] == 3
    assert table.loc["C", "FF"] == 3


def test_dangling_reference_starts_at_zero(make_activity):
    table = schedule_activities([make_activity("E", 5, ["X"])])
    assert table.loc[0, "EST"] == 0
    assert table.loc[0, "EFT"] == 5
    assert table.loc[0, "Requirements"] == ["X"]


def test_empty_schedule():
    table = schedule_activities([])
    assert list(table.columns) == SCHEDULE_COLUMNS
    assert len(table) == 0


def test_schedule_rejects_cycles(cyclic_activities):
    with pytest.raises(CyclicDependencyError):
        schedule_activities(cyclic_activities)


def test_activity_floats(diamond_activities, cyclic_activities):
    assert get_activity_floats(diamond_activities) == {"A": 0, "B": 2, "C": 0, "D": 0}
    assert get_activity_floats(cyclic_activities) == {}


NEAR = DEFAULT_CRITICALITY_THRESHOLDS['near_critical']
MEDIUM = DEFAULT_CRITICALITY_THRESHOLDS['medium_critical']


@pytest.mark.parametrize("float_value, expected", [
    (0, ('critical', 'black', True)),
    (1, ('near_critical', 'red', False)),
    (NEAR, ('near_critical', 'red', False)),
    (NEAR + 1, ('medium_critical', 'orange', False)),
    (MEDIUM, ('medium_critical', 'orange', False)),
    (MEDIUM + 1, ('uncritical', 'green', False)),
])
def test_criticality_category(float_value, expected):
    assert get_criticality_category(float_value) == expected


def test_criticality_category_custom_thresholds():
    thresholds = {'near_critical': 1, 'medium_critical': 2}
    assert get_criticality_category(2, thresholds)[0] == 'medium_critical'
    assert get_criticality_category(3, thresholds)[0] == 'uncritical'
