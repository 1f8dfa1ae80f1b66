"""Tests for the adjacency serializer."""
import json

import pytest

import regiongraph.serialize as serialize_module
from regiongraph.errors import OutputWriteFailedError
from regiongraph.graph import AdjacencyGraph
from regiongraph.serialize import (
    adjacency_to_frame,
    format_adjacency_pairs,
    save_adjacency_json,
    write_adjacency_pairs,
)


@pytest.fixture
def graph():
    return AdjacencyGraph.from_strings({
        "18157002": ["18157001"],
        "18157001": ["18157003", "18157002"],
        "18157003": ["18157001"],
    })


def test_format_pairs(graph):
    assert list(format_adjacency_pairs(graph)) == [
        "18157001,18157002\n",
        "18157001,18157003\n",
        "18157002,18157001\n",
        "18157003,18157001\n",
    ]


def test_format_custom_delimiter(graph):
    assert next(format_adjacency_pairs(graph, "\t")) == "18157001\t18157002\n"


def test_write_pairs(graph, tmp_path):
    out = tmp_path / "nested" / "adjacency.csv"
    records = write_adjacency_pairs(graph, str(out))
    assert records == 4
    assert out.read_bytes() == (
        b"18157001,18157002\n18157001,18157003\n18157002,18157001\n18157003,18157001\n"
    )
    assert [p.name for p in out.parent.iterdir()] == ["adjacency.csv"]


def test_write_empty_graph(tmp_path):
    out = tmp_path / "empty.csv"
    assert write_adjacency_pairs(AdjacencyGraph({}), str(out)) == 0
    assert out.read_bytes() == b""


def test_write_utf8(tmp_path):
    out = tmp_path / "utf8.csv"
    write_adjacency_pairs(AdjacencyGraph.from_strings({"Zürich": ["Genève"]}), str(out))
    assert out.read_bytes() == "Zürich,Genève\n".encode("utf-8")


def test_unwritable_destination(graph, tmp_path):
    target = tmp_path / "out"
    target.mkdir()
    with pytest.raises(OutputWriteFailedError) as excinfo:
        write_adjacency_pairs(graph, str(target))
    assert excinfo.value.kind == "OutputWriteFailed"
    assert isinstance(excinfo.value, IOError)
    assert list(tmp_path.glob(".out.*.tmp")) == []


def test_failed_write_keeps_previous_output(graph, tmp_path, monkeypatch):
    out = tmp_path / "adjacency.csv"
    out.write_text("previous\n", encoding="utf-8")

    def failing_pairs(graph, delimiter=","):
        yield "partial,line\n"
        raise OSError("disk full")

    monkeypatch.setattr(serialize_module, "format_adjacency_pairs", failing_pairs)
    with pytest.raises(OutputWriteFailedError):
        write_adjacency_pairs(graph, str(out))

    assert out.read_text(encoding="utf-8") == "previous\n"
    assert [p.name for p in tmp_path.iterdir()] == ["adjacency.csv"]


def test_save_json(graph, tmp_path):
    out = tmp_path / "adjacency.json"
    save_adjacency_json(graph, str(out))
    assert json.loads(out.read_text(encoding="utf-8")) == {
        "18157001": ["18157002", "18157003"],
        "18157002": ["18157001"],
        "18157003": ["18157001"],
    }


def test_frame(graph):
    frame = adjacency_to_frame(graph)
    assert list(frame.columns) == ["region_id", "neighbor_id"]
    assert len(frame) == 4
    assert frame.iloc[0].tolist() == ["18157001", "18157002"]


def test_frame_empty():
    frame = adjacency_to_frame(AdjacencyGraph({}))
    assert frame.empty
    assert list(frame.columns) == ["region_id", "neighbor_id"]
