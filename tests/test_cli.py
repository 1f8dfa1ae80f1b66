"""End-to-end tests for the command line entry point."""
import pytest

from conftest import collection, polygon_feature, square
from regiongraph.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("RG_N_JOBS", "RG_BACKEND", "RG_DELIMITER", "RG_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_success(two_squares, write_geojson, tmp_path, capsys):
    source = write_geojson(two_squares)
    out = tmp_path / "adjacency.csv"

    assert main([str(source), str(out), "--jobs", "1"]) == 0
    assert out.read_text(encoding="utf-8") == "A,B\nB,A\n"

    captured = capsys.readouterr()
    assert "Total regions: 2" in captured.out
    assert "A,B" not in captured.out


def test_options(with_isolated, write_geojson, tmp_path, capsys):
    source = write_geojson(with_isolated)
    out = tmp_path / "adjacency.tsv"
    json_out = tmp_path / "adjacency.json"

    code = main([
        str(source), str(out),
        "--delimiter", "\t", "--jobs", "2", "--backend", "threading",
        "--json", str(json_out), "--log-level", "warning",
    ])
    assert code == 0
    assert out.read_text(encoding="utf-8") == "A\tB\nB\tA\n"
    assert json_out.exists()
    assert "Isolated regions: 1" in capsys.readouterr().out


def test_missing_identifier(write_geojson, tmp_path, capsys):
    data = collection(polygon_feature("A", [square(0, 0)], key="NAME"))
    source = write_geojson(data)
    out = tmp_path / "adjacency.csv"

    assert main([str(source), str(out)]) == 1
    assert "MissingIdentifier" in capsys.readouterr().err
    assert not out.exists()


def test_unsupported_shape(write_geojson, tmp_path, capsys):
    source = write_geojson(polygon_feature("A", [square(0, 0)]))
    out = tmp_path / "adjacency.csv"

    assert main([str(source), str(out)]) == 1
    assert "UnsupportedInputShape" in capsys.readouterr().err
    assert not out.exists()


def test_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "absent.geojson"), str(tmp_path / "out.csv")]) == 1
    assert "File not found" in capsys.readouterr().err


def test_output_write_failure(two_squares, write_geojson, tmp_path, capsys):
    source = write_geojson(two_squares)
    target = tmp_path / "taken"
    target.mkdir()

    assert main([str(source), str(target), "--jobs", "1"]) == 1
    assert "OutputWriteFailed" in capsys.readouterr().err


def test_bad_config(two_squares, write_geojson, tmp_path, capsys):
    source = write_geojson(two_squares)
    assert main([str(source), str(tmp_path / "out.csv"), "--backend", "dask"]) == 1
    assert "Configuration error" in capsys.readouterr().err


def test_missing_arguments():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2
