"""
Region adjacency graph package
"""
from .adjacency import compute_adjacency, isolated_regions
from .errors import (
    AdjacencyInvariantError,
    CoordinateOutOfRangeError,
    MissingIdentifierError,
    OutputWriteFailedError,
    RegionGraphError,
    UnresolvableFeatureError,
    UnsupportedInputShapeError,
)
from .feature_id import feature_id
from .graph import AdjacencyGraph, RegionId
from .ingest import PointIndex, ingest_feature_collection, load_feature_collection
from .interner import RegionIdInterner
from .pipeline import build_region_adjacency
from .quantize import QuantizedCoordinate, dequantize, quantize
from .runtime_config import load_runtime_config
from .serialize import save_adjacency_json, write_adjacency_pairs

__all__ = [
    'compute_adjacency',
    'isolated_regions',
    'AdjacencyInvariantError',
    'CoordinateOutOfRangeError',
    'MissingIdentifierError',
    'OutputWriteFailedError',
    'RegionGraphError',
    'UnresolvableFeatureError',
    'UnsupportedInputShapeError',
    'feature_id',
    'AdjacencyGraph',
    'RegionId',
    'PointIndex',
    'ingest_feature_collection',
    'load_feature_collection',
    'RegionIdInterner',
    'build_region_adjacency',
    'QuantizedCoordinate',
    'dequantize',
    'quantize',
    'load_runtime_config',
    'save_adjacency_json',
    'write_adjacency_pairs',
]
