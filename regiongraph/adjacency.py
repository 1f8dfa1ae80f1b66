"""
Adjacency Computation Engine

Derives region adjacency from the point index built during ingestion.

Two regions are adjacent if some quantized vertex is owned by both:
    A ~ B  <=>  points(A) ∩ points(B) ≠ ∅

Each point is an independent unit of work. Points owned by n >= 2 regions
produce all n·(n-1) ordered pairs. Chunks of points are folded into
worker-local partial graphs with joblib, then unioned sequentially. Set
union is commutative and idempotent, so the result does not depend on
point order, worker count or merge order.

Interned ids are resolved back to region identifiers only at the end.
"""

import logging
from itertools import permutations
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, TypeVar

from joblib import Parallel, cpu_count, delayed

from .constants import DEFAULT_BACKEND, DEFAULT_N_JOBS
from .errors import AdjacencyInvariantError
from .graph import AdjacencyGraph, RegionId
from .ingest import PointIndex
from .interner import RegionIdInterner

logger = logging.getLogger(__name__)

T = TypeVar('T')

PartialGraph = Dict[int, Set[int]]


def point_pairs(owners: Iterable[int]) -> List[Tuple[int, int]]:
    """Ordered pairs of distinct regions sharing one point."""
    owners = sorted(set(owners))

    if len(owners) == 0:
        logger.warning("Point has no owning regions; skipping")
        return []
    if len(owners) == 1:
        return []

    return list(permutations(owners, 2))


def fold_pairs(owner_sets: Iterable[Iterable[int]]) -> PartialGraph:
    """Fold the pairs of many points into one worker-local partial graph."""
    partial: PartialGraph = {}
    for owners in owner_sets:
        for region, neighbor in point_pairs(owners):
            partial.setdefault(region, set()).add(neighbor)
    return partial


def partition(items: Sequence[T], n_chunks: int) -> List[Sequence[T]]:
    """Split ``items`` into at most ``n_chunks`` contiguous, non-empty chunks."""
    if not items:
        return []

    n_chunks = max(1, min(n_chunks, len(items)))
    size, extra = divmod(len(items), n_chunks)

    chunks = []
    start = 0
    for i in range(n_chunks):
        end = start + size + (1 if i < extra else 0)
        chunks.append(items[start:end])
        start = end
    return chunks


def merge_partials(partials: Iterable[PartialGraph]) -> PartialGraph:
    """Union partial graphs into one. Runs after all workers have joined."""
    merged: PartialGraph = {}
    for i, partial in enumerate(partials):
        logger.debug(f"Merging partial graph {i} with {len(partial)} regions")
        for region, neighbors in partial.items():
            merged.setdefault(region, set()).update(neighbors)
    return merged


def resolve_graph(merged: PartialGraph, interner: RegionIdInterner) -> AdjacencyGraph:
    """
    Translate interned ids into region identifiers.

    Raises:
        AdjacencyInvariantError: If an id was not issued by ``interner``.
    """
    def _resolve(interned: int) -> RegionId:
        raw = interner.resolve(interned)
        if raw is None:
            raise AdjacencyInvariantError(f"Interned id {interned} was never issued")
        return RegionId(raw)

    return AdjacencyGraph({
        _resolve(region): [_resolve(n) for n in neighbors]
        for region, neighbors in merged.items()
    })


def _effective_workers(n_jobs: int) -> int:
    if n_jobs < 0:
        return max(1, cpu_count() + 1 + n_jobs)
    return n_jobs


def compute_adjacency(
    point_index: PointIndex,
    interner: RegionIdInterner,
    n_jobs: Optional[int] = None,
    backend: Optional[str] = None,
) -> AdjacencyGraph:
    """
    Compute the region adjacency graph from a point index.

    Args:
        point_index: Vertex ownership built during ingestion (read-only here).
        interner: Interner that issued the ids in ``point_index``.
        n_jobs: Worker count, joblib convention (-1 = all cores, 1 = in-process).
        backend: joblib backend name; ``"sequential"`` skips the pool.

    Returns:
        AdjacencyGraph. Regions sharing no vertex have no entry.

    Raises:
        AdjacencyInvariantError: On an internal inconsistency.
        Any exception raised by a worker propagates and aborts the run.
    """
    n_jobs = DEFAULT_N_JOBS if n_jobs is None else n_jobs
    backend = backend or DEFAULT_BACKEND

    logger.info(
        f"Computing adjacencies on {len(interner)} regions "
        f"({len(point_index)} unique points)"
    )

    # Single-owner points cannot produce a pair.
    owner_sets = point_index.owner_sets(min_owners=2)
    logger.debug(
        f"{len(owner_sets)} shared points; skipped {len(point_index) - len(owner_sets)} "
        f"single-owner points"
    )

    if backend == 'sequential' or n_jobs == 1:
        partials = [fold_pairs(owner_sets)]
    else:
        workers = _effective_workers(n_jobs)
        chunks = partition(owner_sets, workers)
        logger.debug(f"Dispatching {len(chunks)} chunks to {workers} workers ({backend})")
        partials = Parallel(n_jobs=n_jobs, backend=backend)(
            delayed(fold_pairs)(chunk) for chunk in chunks
        )

    logger.info(f"Collected {len(partials)} partial graphs; merging")
    merged = merge_partials(partials)

    graph = resolve_graph(merged, interner)
    logger.info(f"Adjacency graph has {len(graph)} regions and {graph.edge_count()} ordered pairs")
    return graph


def isolated_regions(graph: AdjacencyGraph, interner: RegionIdInterner) -> List[RegionId]:
    """Regions known to ``interner`` that have no neighbours in ``graph``."""
    return sorted(
        RegionId(raw) for raw in interner.strings() if RegionId(raw) not in graph
    )
