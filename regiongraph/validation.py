"""
Adjacency graph validation.

Structural checks (symmetry, no self-neighbours, ordering) plus a
geometric cross-check: every vertex-adjacent pair must also intersect
according to shapely. The cross-check queries a geopandas spatial index
by bounding box, so it touches only candidate pairs.
"""

import logging
from typing import Any, Dict, List, Tuple

import geopandas as gpd
import pandas as pd
from shapely.geometry import shape

from .constants import FRAME_NEIGHBOR_COL, FRAME_REGION_COL, ID_KEY_PREFIX, KNOWN_ID_KEYS
from .feature_id import feature_id
from .graph import AdjacencyGraph, RegionId
from .ingest import features_of
from .serialize import adjacency_to_frame

logger = logging.getLogger(__name__)


def find_self_neighbors(graph: AdjacencyGraph) -> List[RegionId]:
    return [region for region, neighbors in graph.items() if region in neighbors]


def find_asymmetric_pairs(graph: AdjacencyGraph) -> List[Tuple[RegionId, RegionId]]:
    """Pairs (a, b) where b neighbours a but a does not neighbour b."""
    return [
        (region, neighbor)
        for region, neighbor in graph.pairs()
        if region not in graph.neighbors(neighbor)
    ]


def find_unsorted_regions(graph: AdjacencyGraph) -> List[RegionId]:
    return [
        region for region, neighbors in graph.items()
        if list(neighbors) != sorted(set(neighbors))
    ]


def regions_frame(
    collection: Any,
    known_keys=KNOWN_ID_KEYS,
    prefix: str = ID_KEY_PREFIX,
) -> gpd.GeoDataFrame:
    """GeoDataFrame with one dissolved geometry per region identifier."""
    rows = [
        {
            'region_id': feature_id(feature.get('properties'), known_keys, prefix),
            'geometry': shape(feature['geometry']),
        }
        for feature in features_of(collection)
    ]
    gdf = gpd.GeoDataFrame(rows, columns=['region_id', 'geometry'], geometry='geometry')
    return gdf.dissolve(by='region_id', as_index=False)


def find_non_intersecting_pairs(
    graph: AdjacencyGraph,
    gdf: gpd.GeoDataFrame,
) -> List[Tuple[RegionId, RegionId]]:
    """
    Vertex-adjacent pairs whose geometries do not intersect.

    Shared vertices imply intersection, so any pair returned here means
    the graph and the geometries disagree.
    """
    geometries = dict(zip(gdf['region_id'].astype(str), gdf.geometry))
    sindex = gdf.sindex
    positions = {region_id: i for i, region_id in enumerate(gdf['region_id'].astype(str))}

    mismatches: List[Tuple[RegionId, RegionId]] = []
    for region, neighbor in graph.pairs():
        geom = geometries.get(str(region))
        other = geometries.get(str(neighbor))
        if geom is None or other is None:
            mismatches.append((region, neighbor))
            continue

        candidates = set(sindex.intersection(geom.bounds))
        if positions[str(neighbor)] not in candidates or not geom.intersects(other):
            mismatches.append((region, neighbor))

    return mismatches


def summarize_adjacency(graph: AdjacencyGraph, region_count: int) -> Dict[str, Any]:
    """Neighbour statistics over ``region_count`` regions (isolated ones included)."""
    frame = adjacency_to_frame(graph)
    counts = frame.groupby(FRAME_REGION_COL)[FRAME_NEIGHBOR_COL].size()

    isolated = max(region_count - len(counts), 0)
    all_counts = pd.concat(
        [counts.reset_index(drop=True).astype('int64'), pd.Series([0] * isolated, dtype='int64')],
        ignore_index=True,
    )
    total = int(counts.sum())

    if all_counts.empty:
        min_n, max_n, avg_n = 0, 0, 0.0
    else:
        min_n, max_n, avg_n = int(all_counts.min()), int(all_counts.max()), float(all_counts.mean())

    return {
        'region_count': region_count,
        'connected_regions': int(len(counts)),
        'isolated_regions': int(isolated),
        'ordered_pairs': total,
        'touching_pairs': total // 2,
        'min_neighbors': min_n,
        'max_neighbors': max_n,
        'avg_neighbors': avg_n,
    }
