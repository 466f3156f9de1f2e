import pytest

from pert_utils.layout import Layout, LayoutEdge, LayoutNode, compute_layout


def test_diamond_layout(diamond_activities):
    layout = compute_layout(diamond_activities)

    assert layout.nodes == (
        LayoutNode(code="A", level=0, slot=0, x=50, y=50),
        LayoutNode(code="B", level=1, slot=0, x=300, y=50),
        LayoutNode(code="C", level=1, slot=1, x=300, y=200),
        LayoutNode(code="D", level=2, slot=0, x=550, y=50),
    )
    assert [edge.id for edge in layout.edges] == ["A-B", "A-C", "B-D", "C-D"]


def test_slots_follow_insertion_order(make_activity):
    layout = compute_layout([make_activity("Z", 1), make_activity("X", 1), make_activity("Y", 1)])
    assert [(n.code, n.slot) for n in layout.nodes] == [("Z", 0), ("X", 1), ("Y", 2)]
    assert all(n.level == 0 for n in layout.nodes)


def test_dangling_reference_has_no_edge(make_activity):
    layout = compute_layout([make_activity("A", 2), make_activity("E", 5, ["X", "A"])])

    assert layout.node("E").level == 1
    assert layout.edges == (LayoutEdge(source="A", target="E"),)


def test_only_dangling_reference_stays_on_level_zero(make_activity):
    layout = compute_layout([make_activity("E", 5, ["X"])])
    assert layout.node("E").level == 0
    assert layout.edges == ()


def test_custom_spacing(diamond_activities):
    layout = compute_layout(diamond_activities,
                            horizontal_spacing=10,
                            vertical_spacing=5,
                            x_offset=0,
                            y_offset=1)
    assert layout.positions() == {"A": (0, 1), "B": (10, 1), "C": (10, 6), "D": (20, 1)}


def test_layout_is_idempotent(diamond_activities):
    assert compute_layout(diamond_activities) == compute_layout(diamond_activities)


def test_empty_layout():
    assert compute_layout([]) == Layout(nodes=(), edges=())


def test_unknown_node_raises(diamond_activities):
    with pytest.raises(KeyError):
        compute_layout(diamond_activities).node("Q")
