"""
Geometry Ingestion

Loads a feature collection, resolves each feature's identifier, quantizes
every vertex of its geometry and records which regions own each vertex.

The resulting point index is the pivot of the adjacency computation:
two regions touch exactly when some quantized vertex lists both of them.
Features with no identifier or no usable geometry stop ingestion with a
typed error instead of being dropped, since a missing region silently
breaks adjacency for all of its neighbours.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set, Tuple

import geopandas as gpd
import shapely
from shapely.errors import ShapelyError
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from .constants import GEOJSON_SUFFIXES, ID_KEY_PREFIX, KNOWN_ID_KEYS
from .errors import (
    CoordinateOutOfRangeError,
    MissingIdentifierError,
    UnresolvableFeatureError,
    UnsupportedInputShapeError,
)
from .feature_id import feature_id
from .interner import RegionIdInterner
from .quantize import QuantizedCoordinate, quantize_array

logger = logging.getLogger(__name__)

POLYGONAL_TYPES = ('Polygon', 'MultiPolygon')


class PointIndex:
    """Quantized vertex -> set of interned region ids owning that vertex."""

    def __init__(self) -> None:
        self._owners: Dict[QuantizedCoordinate, Set[int]] = {}

    def insert(self, region: int, points: Set[QuantizedCoordinate]) -> None:
        for point in points:
            self._owners.setdefault(point, set()).add(region)

    def owners(self, point: Tuple[int, int]) -> Set[int]:
        return self._owners.get(QuantizedCoordinate(*point), set())

    def items(self) -> Iterator[Tuple[QuantizedCoordinate, Set[int]]]:
        return iter(self._owners.items())

    def owner_sets(self, min_owners: int = 1) -> List[Tuple[int, ...]]:
        """Owner sets as sorted tuples for points with at least ``min_owners`` owners."""
        return [
            tuple(sorted(owners)) for owners in self._owners.values()
            if len(owners) >= min_owners
        ]

    def __iter__(self) -> Iterator[QuantizedCoordinate]:
        return iter(self._owners)

    def __len__(self) -> int:
        return len(self._owners)


@dataclass
class IngestedRegions:
    """Everything ingestion produces for the adjacency phase."""

    interner: RegionIdInterner
    point_index: PointIndex
    feature_count: int = 0
    points_per_region: Dict[int, int] = field(default_factory=dict)

    @property
    def region_count(self) -> int:
        return len(self.interner)


def load_feature_collection(path: str) -> Dict[str, Any]:
    """
    Load a feature collection from disk.

    GeoJSON files are parsed directly. Any other format geopandas can read
    (census shapefiles, zipped shapefiles, GeoPackage) is converted to a
    feature collection through its geo interface.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnsupportedInputShapeError: If the file cannot be parsed.
    """
    input_path = Path(path)

    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    if not input_path.is_file():
        raise UnsupportedInputShapeError(f"Path is not a file: {path}")

    if input_path.suffix.lower() in GEOJSON_SUFFIXES:
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise UnsupportedInputShapeError(f"Failed to parse GeoJSON file: {e}") from e
    else:
        try:
            gdf = gpd.read_file(input_path)
        except Exception as e:
            raise UnsupportedInputShapeError(f"Failed to read geographic file: {e}") from e
        data = gdf.__geo_interface__

    logger.info(f"Loaded input from {input_path}")
    return data


def features_of(collection: Any) -> List[Mapping[str, Any]]:
    """
    Return the features of a FeatureCollection.

    Raises:
        UnsupportedInputShapeError: If the input is not a FeatureCollection.
    """
    if not isinstance(collection, Mapping):
        raise UnsupportedInputShapeError(
            f"Expected a FeatureCollection object, got {type(collection).__name__}"
        )

    kind = collection.get('type')
    if kind != 'FeatureCollection':
        raise UnsupportedInputShapeError(f"Expected a FeatureCollection, got type {kind!r}")

    features = collection.get('features')
    if not isinstance(features, list):
        raise UnsupportedInputShapeError("FeatureCollection has no 'features' list")

    return features


def feature_geometry(feature: Mapping[str, Any]) -> BaseGeometry:
    """
    Parse a feature's geometry with shapely.

    Raises:
        UnresolvableFeatureError: If the geometry is null, malformed or empty.
    """
    geometry = feature.get('geometry')
    if geometry is None:
        raise UnresolvableFeatureError("Feature has no geometry")

    try:
        geom = shape(geometry)
    except (ShapelyError, ValueError, TypeError, KeyError, IndexError, AttributeError) as e:
        raise UnresolvableFeatureError(f"Feature geometry could not be parsed: {e}") from e

    if geom.is_empty:
        raise UnresolvableFeatureError("Feature geometry is empty")

    if geom.geom_type not in POLYGONAL_TYPES:
        logger.warning(f"Non-polygonal geometry {geom.geom_type}; using its vertices as boundary")

    return geom


def feature_points(geometry: BaseGeometry) -> Set[QuantizedCoordinate]:
    """All quantized vertices of every ring and part of a geometry."""
    coords = shapely.get_coordinates(geometry)
    quantized = quantize_array(coords)
    return {QuantizedCoordinate(int(x), int(y)) for x, y in quantized}


def ingest_feature_collection(
    collection: Any,
    interner: Optional[RegionIdInterner] = None,
    config: Optional[Dict[str, Any]] = None,
) -> IngestedRegions:
    """
    Build the point index for a feature collection.

    Args:
        collection: Parsed GeoJSON FeatureCollection mapping.
        interner: Interner to populate; a fresh one is created if omitted.
        config: Runtime config; only ``known_id_keys`` and ``id_prefix``
            are read.

    Returns:
        IngestedRegions holding the interner and point index.

    Raises:
        UnsupportedInputShapeError: If the input is not a FeatureCollection.
        MissingIdentifierError: If a feature has no identifier property.
        UnresolvableFeatureError: If a feature has no usable geometry.
        CoordinateOutOfRangeError: If a vertex lies outside (-180, 180).
    """
    config = config or {}
    known_keys = config.get('known_id_keys', KNOWN_ID_KEYS)
    prefix = config.get('id_prefix', ID_KEY_PREFIX)

    features = features_of(collection)

    result = IngestedRegions(
        interner=interner if interner is not None else RegionIdInterner(),
        point_index=PointIndex(),
    )

    for position, feature in enumerate(features):
        if not isinstance(feature, Mapping):
            raise UnresolvableFeatureError(f"Feature {position} is not an object")

        properties = feature.get('properties')
        if properties is not None and not isinstance(properties, Mapping):
            raise UnresolvableFeatureError(
                f"Feature {position} properties must be an object, "
                f"got {type(properties).__name__}"
            )

        try:
            raw_id = feature_id(properties, known_keys, prefix)
        except MissingIdentifierError as e:
            raise MissingIdentifierError(f"Feature {position}: {e}") from e

        try:
            points = feature_points(feature_geometry(feature))
        except UnresolvableFeatureError as e:
            raise UnresolvableFeatureError(f"Feature {position} ({raw_id}): {e}") from e
        except CoordinateOutOfRangeError:
            logger.error(f"Feature {position} ({raw_id}) has an out-of-range coordinate")
            raise

        if raw_id in result.interner:
            logger.debug(f"Identifier {raw_id} repeated; merging its vertices")

        region = result.interner.intern(raw_id)
        result.point_index.insert(region, points)
        result.points_per_region[region] = result.points_per_region.get(region, 0) + len(points)
        result.feature_count += 1

    logger.info(
        f"Ingested {result.feature_count} features as {result.region_count} regions "
        f"({len(result.point_index)} unique points)"
    )

    return result
