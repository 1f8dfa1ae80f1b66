"""Shared pytest fixtures: small boundary feature collections."""
import json

import pytest


def square(x0, y0, size=1.0):
    return [[x0, y0], [x0 + size, y0], [x0 + size, y0 + size], [x0, y0 + size], [x0, y0]]


def polygon_feature(geoid, rings, key="GEOID20", **extra):
    properties = {key: geoid}
    properties.update(extra)
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {"type": "Polygon", "coordinates": rings},
    }


def collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}


def grid_collection(rows, cols, origin=(-86.0, 39.0), size=0.01):
    # Shared vertices must be the same float, so every corner comes from one table
    xs = [origin[0] + k * size for k in range(cols + 1)]
    ys = [origin[1] + k * size for k in range(rows + 1)]
    features = []
    for i in range(rows):
        for j in range(cols):
            ring = [
                [xs[j], ys[i]], [xs[j + 1], ys[i]], [xs[j + 1], ys[i + 1]],
                [xs[j], ys[i + 1]], [xs[j], ys[i]],
            ]
            features.append(polygon_feature(f"R{i:02d}{j:02d}", [ring]))
    return collection(*features)


@pytest.fixture
def grid():
    return grid_collection(4, 5)


@pytest.fixture
def write_geojson(tmp_path):
    def _write(data, name="regions.geojson"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def two_squares():
    """Two unit squares sharing the edge x = 1."""
    return collection(
        polygon_feature("A", [square(0, 0)]),
        polygon_feature("B", [square(1, 0)]),
    )


@pytest.fixture
def corner_triple():
    """Three regions meeting only at the vertex (1, 1)."""
    return collection(
        polygon_feature("A", [square(0, 0)]),
        polygon_feature("B", [square(1, 1)]),
        polygon_feature("C", [[[1, 1], [2, 0.5], [1.5, 0.2], [1, 1]]]),
    )


@pytest.fixture
def with_isolated(two_squares):
    """The two squares plus a far-away region sharing nothing."""
    features = list(two_squares["features"])
    features.append(polygon_feature("Z", [square(10, 10)]))
    return collection(*features)
