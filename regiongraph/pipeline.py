"""End-to-end orchestration: input file to adjacency pairs on disk."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .adjacency import compute_adjacency
from .graph import AdjacencyGraph
from .ingest import IngestedRegions, ingest_feature_collection, load_feature_collection
from .runtime_config import DEFAULT_CONFIG
from .serialize import save_adjacency_json, write_adjacency_pairs

logger = logging.getLogger(__name__)


@dataclass
class AdjacencyRun:
    graph: AdjacencyGraph
    regions: IngestedRegions
    records_written: int


def build_region_adjacency(
    input_path: str,
    output_path: str,
    config: Optional[Dict[str, Any]] = None,
    json_path: Optional[str] = None,
) -> AdjacencyRun:
    """
    Orchestrate adjacency computation and persistence.

    Loads the feature collection, builds the point index, computes the
    graph in parallel and writes the delimited pairs (plus an optional
    JSON export).

    Args:
        input_path: GeoJSON (or any geopandas-readable) boundary file.
        output_path: Destination for the delimited pairs.
        config: Runtime config from ``load_runtime_config``; defaults used
            when omitted.
        json_path: Optional destination for a JSON adjacency export.

    Returns:
        AdjacencyRun with the graph, ingestion result and record count.

    Raises:
        FileNotFoundError: If the input file does not exist.
        RegionGraphError: Any typed pipeline error; nothing is written.
    """
    config = config or DEFAULT_CONFIG

    collection = load_feature_collection(input_path)
    regions = ingest_feature_collection(collection, config=config)

    graph = compute_adjacency(
        regions.point_index,
        regions.interner,
        n_jobs=config.get('n_jobs'),
        backend=config.get('backend'),
    )

    records = write_adjacency_pairs(graph, output_path, delimiter=config.get('delimiter', ','))
    if json_path:
        save_adjacency_json(graph, json_path)

    return AdjacencyRun(graph=graph, regions=regions, records_written=records)
