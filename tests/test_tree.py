"""Tests for the StepTree builder and its step cursor."""

from __future__ import annotations

import pytest

from steptree.model.anchors import AnchorLine, Edge
from steptree.model.errors import NoOpenNodeError, StepTreeError, SteppingInProgressError
from steptree.model.tree import StepTree


def visibility(tree: StepTree) -> list[bool]:
    return [node.visible for node in tree.nodes]


# ---- building ----

def test_new_tree_is_empty(tree: StepTree) -> None:
    assert len(tree) == 0
    assert tree.cursor == -1
    assert tree.current is None
    assert tree.depth == 0
    assert tree.at_start and tree.at_end


def test_add_without_end_descends_each_time(tree: StepTree, factory) -> None:
    titles = ["a", "b", "c", "d"]
    for title in titles:
        tree.add_node(title)

    assert tree.depth == len(titles)
    assert [n.title for n in tree.nodes] == titles
    assert list(tree.nodes) == factory.created
    assert tree.cursor == len(titles) - 1
    assert tree.current.node is tree.nodes[-1]
    assert tree.current.parent.node is tree.nodes[-2]


def test_added_nodes_are_revealed(tree: StepTree) -> None:
    tree.add_node("root")
    tree.add_node("child")
    assert visibility(tree) == [True, True]


def test_root_has_no_anchors(tree: StepTree) -> None:
    tree.add_node("root")
    assert tree.nodes[0].anchors == {}
    assert tree.current.parent is None
    assert tree.current.right_side is None


def test_end_returns_to_previous_frame(tree: StepTree) -> None:
    tree.add_node("root")
    root_frame = tree.current
    tree.add_node("child")

    tree.end()
    assert tree.current is root_frame
    tree.end()
    assert tree.current is None


def test_end_too_many_times_raises(tree: StepTree) -> None:
    tree.add_node("root")
    tree.end()
    with pytest.raises(NoOpenNodeError):
        tree.end()


def test_end_on_empty_tree_raises(tree: StepTree) -> None:
    with pytest.raises(StepTreeError, match="No open node"):
        tree.end()


def test_first_child_centered_later_children_chained(tree: StepTree) -> None:
    tree.add_node("R")
    tree.add_node("A")
    tree.end()
    tree.add_node("B")

    r, a, b = tree.nodes
    assert a.anchors[Edge.TOP] == AnchorLine(r, Edge.BOTTOM)
    assert a.anchors[Edge.HORIZONTAL_CENTER] == AnchorLine(r, Edge.HORIZONTAL_CENTER)
    assert Edge.LEFT not in a.anchors

    assert b.anchors[Edge.TOP] == AnchorLine(r, Edge.BOTTOM)
    assert b.anchors[Edge.LEFT] == AnchorLine(a, Edge.RIGHT)
    assert Edge.HORIZONTAL_CENTER not in b.anchors

    root_frame = tree.current.parent
    assert root_frame.node is r
    assert root_frame.right_side == AnchorLine(b, Edge.RIGHT)


def test_sibling_after_end_attaches_to_parent_not_previous_child(tree: StepTree) -> None:
    tree.add_node("root")
    tree.add_node("child1")
    tree.end()
    tree.add_node("child2")

    root, child1, child2 = tree.nodes
    assert child2.anchors[Edge.TOP].node is root
    assert child2.anchors[Edge.LEFT] == AnchorLine(child1, Edge.RIGHT)
    assert tree.depth == 2


def test_extension_point_is_per_frame(tree: StepTree) -> None:
    tree.add_node("root")
    tree.add_node("a")
    tree.add_node("a1")
    tree.end()
    tree.end()
    tree.add_node("b")

    root, a, a1, b = tree.nodes
    # a's own children do not move b's attachment point
    assert b.anchors[Edge.LEFT] == AnchorLine(a, Edge.RIGHT)
    assert a1.anchors[Edge.HORIZONTAL_CENTER] == AnchorLine(a, Edge.HORIZONTAL_CENTER)


def test_second_root_is_unanchored(tree: StepTree) -> None:
    tree.add_node("first")
    tree.end()
    tree.add_node("second")
    assert tree.nodes[1].anchors == {}
    assert tree.depth == 1


# ---- stepping ----

def test_next_step_reveals_in_creation_order(tree: StepTree) -> None:
    for title in "abc":
        tree.add_node(title)
    tree.hide_nodes()

    for i in range(3):
        tree.next_step()
        assert tree.cursor == i
        assert visibility(tree) == [j <= i for j in range(3)]


def test_next_step_past_end_is_noop(tree: StepTree) -> None:
    tree.add_node("a")
    tree.add_node("b")
    tree.hide_nodes()
    tree.next_step()
    tree.next_step()

    tree.next_step()
    assert tree.cursor == 1
    assert visibility(tree) == [True, True]


def test_prev_step_hides_in_reverse_order(tree: StepTree) -> None:
    for title in "abc":
        tree.add_node(title)

    expected = [[True, True, False], [True, False, False], [False, False, False]]
    for i, vis in enumerate(expected):
        tree.prev_step()
        assert tree.cursor == 1 - i
        assert visibility(tree) == vis

    tree.prev_step()
    tree.prev_step()
    assert tree.cursor == -1
    assert visibility(tree) == [False, False, False]


def test_stepping_on_empty_tree_is_noop(tree: StepTree) -> None:
    tree.next_step()
    tree.prev_step()
    tree.next_step()
    assert tree.cursor == -1
    assert len(tree) == 0


def test_view_hide_view_round_trip(tree: StepTree) -> None:
    for title in "abcd":
        tree.add_node(title)

    tree.view_nodes()
    tree.hide_nodes()
    assert tree.cursor == -1
    assert visibility(tree) == [False] * 4

    tree.view_nodes()
    assert tree.cursor == 3
    assert visibility(tree) == [True] * 4
    assert not any(node.released for node in tree.nodes)


def test_view_nodes_from_middle(tree: StepTree) -> None:
    for title in "abc":
        tree.add_node(title)
    tree.hide_nodes()
    tree.next_step()

    tree.view_nodes()
    assert tree.at_end
    assert visibility(tree) == [True, True, True]


# ---- building while stepping ----

def test_add_while_stepped_back_raises(tree: StepTree) -> None:
    tree.add_node("a")
    tree.add_node("b")
    tree.prev_step()

    with pytest.raises(SteppingInProgressError) as excinfo:
        tree.add_node("c")
    assert excinfo.value.cursor == 0
    assert len(tree) == 2


def test_add_after_view_nodes_is_allowed(tree: StepTree) -> None:
    tree.add_node("a")
    tree.hide_nodes()
    tree.view_nodes()

    tree.add_node("b")
    assert tree.cursor == 1


# ---- teardown ----

def test_destroy_releases_and_resets(tree: StepTree, factory) -> None:
    tree.add_node("a")
    tree.add_node("b")
    tree.prev_step()

    tree.destroy_nodes()
    assert all(node.released for node in factory.created)
    assert len(tree) == 0
    assert tree.cursor == -1
    assert tree.current is None

    tree.next_step()
    tree.prev_step()
    assert tree.cursor == -1
    with pytest.raises(NoOpenNodeError):
        tree.end()


def test_tree_can_be_rebuilt_after_destroy(tree: StepTree, factory) -> None:
    tree.add_node("old")
    tree.destroy_nodes()

    tree.add_node("new")
    assert [n.title for n in tree.nodes] == ["new"]
    assert tree.nodes[0] is factory.created[1]
    assert tree.nodes[0].anchors == {}


def test_destroy_resets_even_when_release_fails(tree: StepTree, factory) -> None:
    tree.add_node("a")
    tree.add_node("b")
    tree.add_node("c")

    def broken_release() -> None:
        raise RuntimeError("renderer gone")

    tree.nodes[1].release = broken_release

    with pytest.raises(RuntimeError, match="renderer gone"):
        tree.destroy_nodes()
    assert factory.created[0].released
    assert len(tree) == 0
    assert tree.cursor == -1
    assert tree.current is None
