"""
Adjacency Serializer

Writes the adjacency graph as delimited ordered pairs, one per line:

    <region-id><delimiter><neighbor-id>

No header, UTF-8, newline-terminated. Order follows the graph: by region,
then by neighbour. Output is written to a temporary file next to the
destination and renamed into place only once complete, so a failed run
never leaves a partial file at the destination.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Iterator, TextIO

import pandas as pd

from .constants import DEFAULT_DELIMITER, FRAME_NEIGHBOR_COL, FRAME_REGION_COL
from .errors import OutputWriteFailedError
from .graph import AdjacencyGraph

logger = logging.getLogger(__name__)


def format_adjacency_pairs(
    graph: AdjacencyGraph,
    delimiter: str = DEFAULT_DELIMITER,
) -> Iterator[str]:
    for region, neighbor in graph.pairs():
        yield f"{region}{delimiter}{neighbor}\n"


def _atomic_write(output_path: str, write: Callable[[TextIO], None]) -> None:
    output_file = Path(output_path)
    tmp_name = None

    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output_file.name}.", suffix=".tmp", dir=output_file.parent
        )
        with os.fdopen(fd, 'w', encoding='utf-8', newline='\n') as f:
            write(f)
        os.replace(tmp_name, output_file)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteFailedError(f"Failed to write {output_path}: {e}") from e


def write_adjacency_pairs(
    graph: AdjacencyGraph,
    output_path: str,
    delimiter: str = DEFAULT_DELIMITER,
) -> int:
    """
    Persist the graph as delimited pairs.

    Args:
        graph: Adjacency graph to write.
        output_path: Destination file path.
        delimiter: Field separator.

    Returns:
        Number of records written.

    Raises:
        OutputWriteFailedError: If the destination cannot be written.
    """
    def _write(f: TextIO) -> None:
        f.writelines(format_adjacency_pairs(graph, delimiter))

    _atomic_write(output_path, _write)

    records = graph.edge_count()
    logger.info(f"Wrote {records} adjacency records to {output_path}")
    return records


def save_adjacency_json(graph: AdjacencyGraph, output_path: str) -> None:
    """
    Persist the graph as a JSON object mapping region to sorted neighbours.

    Raises:
        OutputWriteFailedError: If the destination cannot be written.
    """
    def _write(f: TextIO) -> None:
        json.dump(graph.to_dict(), f, indent=2, ensure_ascii=False)
        f.write('\n')

    _atomic_write(output_path, _write)
    logger.info(f"Wrote adjacency JSON for {len(graph)} regions to {output_path}")


def adjacency_to_frame(graph: AdjacencyGraph) -> pd.DataFrame:
    """One row per ordered (region, neighbour) pair, in graph order."""
    return pd.DataFrame(
        [(str(region), str(neighbor)) for region, neighbor in graph.pairs()],
        columns=[FRAME_REGION_COL, FRAME_NEIGHBOR_COL],
    )
