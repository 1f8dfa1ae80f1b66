"""Tests for region identifiers and the adjacency graph type."""
import dataclasses

import pytest

from regiongraph.graph import AdjacencyGraph, RegionId


class TestRegionId:
    def test_ordering_by_raw_string(self):
        assert RegionId("181570052001013") < RegionId("181570052001014")
        assert sorted([RegionId("b"), RegionId("a"), RegionId("c")]) == [
            RegionId("a"), RegionId("b"), RegionId("c"),
        ]

    def test_equality_and_hash(self):
        assert RegionId("x") == RegionId("x")
        assert len({RegionId("x"), RegionId("x")}) == 1

    def test_frozen(self):
        region = RegionId("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            region.value = "y"

    def test_str(self):
        assert str(RegionId("18157")) == "18157"


class TestAdjacencyGraph:
    def test_sorted_and_deduplicated(self):
        graph = AdjacencyGraph.from_strings({"b": ["c", "a", "c"], "a": ["b"]})
        assert graph.regions() == [RegionId("a"), RegionId("b")]
        assert graph.neighbors(RegionId("b")) == (RegionId("a"), RegionId("c"))

    def test_pairs_in_order(self):
        graph = AdjacencyGraph.from_strings({"b": ["a"], "a": ["c", "b"]})
        assert [(str(r), str(n)) for r, n in graph.pairs()] == [
            ("a", "b"), ("a", "c"), ("b", "a"),
        ]

    def test_counts(self):
        graph = AdjacencyGraph.from_strings({"a": ["b"], "b": ["a"]})
        assert len(graph) == 2
        assert graph.edge_count() == 2
        assert RegionId("a") in graph
        assert RegionId("z") not in graph

    def test_missing_region_has_no_neighbors(self):
        assert AdjacencyGraph({}).neighbors(RegionId("z")) == ()

    def test_to_dict(self):
        graph = AdjacencyGraph.from_strings({"b": ["a"], "a": ["b"]})
        assert graph.to_dict() == {"a": ["b"], "b": ["a"]}
        assert list(graph.to_dict()) == ["a", "b"]

    def test_equality_ignores_construction_order(self):
        first = AdjacencyGraph.from_strings({"a": ["b", "c"], "b": ["a"]})
        second = AdjacencyGraph.from_strings({"b": ["a"], "a": ["c", "b"]})
        assert first == second
        assert first != AdjacencyGraph.from_strings({"a": ["b"]})
