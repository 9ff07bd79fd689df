"""Tests for coggle_api.tree."""

import pytest

from coggle_api import CoggleApi, Node, NodeResource
from coggle_api.tree import find_node, summarize_tree, walk


@pytest.fixture
def forest():
    """Two roots: r1 -> (a -> (a1, a2), b) and a lone r2."""
    diagram = CoggleApi(token="t").diagram("d1")
    resource = NodeResource.model_validate({
        "_id": "r1", "text": "root", "offset": {"x": 0, "y": 0},
        "children": [
            {"_id": "a", "text": "a", "offset": {"x": 1, "y": 0}, "children": [
                {"_id": "a1", "text": "a1", "offset": {"x": 1, "y": 0}},
                {"_id": "a2", "text": "a2", "offset": {"x": 1, "y": 1}},
            ]},
            {"_id": "b", "text": "b", "offset": {"x": 1, "y": 1}},
        ],
    })
    lone = NodeResource.model_validate({"_id": "r2", "text": "other", "offset": {"x": 0, "y": 0}})
    return [Node.from_resource(diagram, resource), Node.from_resource(diagram, lone)]


def test_walk_is_depth_first_preorder(forest):
    assert [n.id for n in walk(forest)] == ["r1", "a", "a1", "a2", "b", "r2"]


def test_walk_empty():
    assert list(walk([])) == []


def test_find_node(forest):
    assert find_node(forest, "a2").text == "a2"
    assert find_node(forest, "a2").parent_id == "a"
    assert find_node(forest, "missing") is None


def test_summarize_tree(forest):
    summary = summarize_tree(forest)
    assert summary.total_nodes == 6
    assert summary.root_count == 2
    assert summary.leaf_count == 4
    assert summary.depth == 3
    assert summary.nodes_per_level == {1: 2, 2: 2, 3: 2}
    assert summary.to_dict()["total_nodes"] == 6


def test_summarize_empty_tree():
    summary = summarize_tree([])
    assert summary.total_nodes == 0
    assert summary.depth == 0
    assert summary.nodes_per_level == {}
