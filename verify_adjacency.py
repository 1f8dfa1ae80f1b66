"""
Region Adjacency Verification Utility

Standalone verification script for the vertex-adjacency computation.
Does NOT modify the input or output files.

Validates:
1. Input loads as a FeatureCollection and every feature resolves
2. Adjacency is symmetric, free of self-neighbours and sorted
3. Every vertex-adjacent pair also intersects geometrically
4. An existing output file matches a fresh computation byte for byte

Run: python verify_adjacency.py INPUT [OUTPUT]
"""

import sys
import tempfile
from pathlib import Path
from typing import Optional, Tuple

from regiongraph.adjacency import compute_adjacency
from regiongraph.errors import RegionGraphError
from regiongraph.graph import AdjacencyGraph
from regiongraph.ingest import IngestedRegions, ingest_feature_collection, load_feature_collection
from regiongraph.serialize import write_adjacency_pairs
from regiongraph.validation import (
    find_asymmetric_pairs,
    find_non_intersecting_pairs,
    find_self_neighbors,
    find_unsorted_regions,
    regions_frame,
    summarize_adjacency,
)


def print_header(title: str) -> None:
    """Print formatted section header."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def print_check(name: str, passed: bool, detail: str = "") -> None:
    """Print check result with symbol."""
    symbol = "✓" if passed else "✗"
    status = "PASS" if passed else "FAIL"
    msg = f"[{symbol}] {name}: {status}"
    if detail:
        msg += f" - {detail}"
    print(msg)


# === Step 1: Input Loading ===
def verify_input(input_path: str) -> Tuple[bool, Optional[dict], Optional[IngestedRegions]]:
    print_header("Step 1: Input Loading Verification")

    try:
        collection = load_feature_collection(input_path)
        print_check("Input parsable", True, input_path)
    except (FileNotFoundError, RegionGraphError) as e:
        print_check("Input parsable", False, str(e))
        return False, None, None

    try:
        regions = ingest_feature_collection(collection)
    except RegionGraphError as e:
        print_check("All features resolvable", False, f"{e.kind}: {e}")
        return False, collection, None

    print_check(
        "All features resolvable", True,
        f"{regions.feature_count} features, {regions.region_count} regions, "
        f"{len(regions.point_index)} unique points",
    )
    return True, collection, regions


# === Step 2: Structural Checks ===
def verify_structure(graph: AdjacencyGraph) -> bool:
    print_header("Step 2: Graph Structure Verification")

    self_neighbors = find_self_neighbors(graph)
    no_self = len(self_neighbors) == 0
    print_check("No self-neighbors", no_self, f"{len(self_neighbors)} found")

    asymmetric = find_asymmetric_pairs(graph)
    symmetric = len(asymmetric) == 0
    print_check("Symmetry holds", symmetric, f"{len(asymmetric)} asymmetric pairs")
    for region, neighbor in asymmetric[:5]:
        print(f"    Asymmetry: {region} -> {neighbor} but not reverse")

    unsorted = find_unsorted_regions(graph)
    all_sorted = len(unsorted) == 0
    print_check("Neighbor lists sorted", all_sorted, f"{len(unsorted)} unsorted")

    return no_self and symmetric and all_sorted


# === Step 3: Geometric Cross-Check ===
def verify_geometry(graph: AdjacencyGraph, collection: dict) -> bool:
    print_header("Step 3: Geometric Cross-Check")

    gdf = regions_frame(collection)
    mismatches = find_non_intersecting_pairs(graph, gdf)
    passed = len(mismatches) == 0
    print_check("Adjacent pairs intersect", passed, f"{len(mismatches)} mismatches")
    for region, neighbor in mismatches[:5]:
        print(f"    Mismatch: {region} <-> {neighbor}")
    return passed


# === Step 4: Output Determinism ===
def verify_output(graph: AdjacencyGraph, regions: IngestedRegions, output_path: str) -> bool:
    print_header("Step 4: Output File Verification")

    existing = Path(output_path)
    if not existing.exists():
        print_check("Output file exists", False, output_path)
        return False

    parallel_graph = compute_adjacency(regions.point_index, regions.interner, n_jobs=2)
    same_graph = parallel_graph == graph
    print_check("Sequential and parallel graphs agree", same_graph)

    with tempfile.TemporaryDirectory() as tmp:
        fresh = Path(tmp) / "adjacency.csv"
        write_adjacency_pairs(graph, str(fresh))
        identical = fresh.read_bytes() == existing.read_bytes()
    print_check("Output matches fresh computation", identical)

    return same_graph and identical


# === Main Entry Point ===
def main(argv=None) -> int:
    """Run all verification checks."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("usage: python verify_adjacency.py INPUT [OUTPUT]")
        return 2

    input_path = argv[0]
    output_path = argv[1] if len(argv) > 1 else None

    print("\n" + "=" * 60)
    print("  REGION ADJACENCY VERIFICATION UTILITY")
    print("=" * 60)

    step1_passed, collection, regions = verify_input(input_path)
    if regions is None:
        print("\n[!] Cannot proceed without a fully resolvable input")
        return 1

    graph = compute_adjacency(regions.point_index, regions.interner, n_jobs=1)

    step2_passed = verify_structure(graph)
    step3_passed = verify_geometry(graph, collection)
    results = [
        ("Input Loading", step1_passed),
        ("Graph Structure", step2_passed),
        ("Geometric Cross-Check", step3_passed),
    ]
    if output_path:
        results.append(("Output File", verify_output(graph, regions, output_path)))

    stats = summarize_adjacency(graph, regions.region_count)
    print(f"\n  Neighbor statistics:")
    print(f"    Total regions: {stats['region_count']}")
    print(f"    Isolated regions: {stats['isolated_regions']}")
    print(f"    Min neighbors: {stats['min_neighbors']}")
    print(f"    Max neighbors: {stats['max_neighbors']}")
    print(f"    Avg neighbors: {stats['avg_neighbors']:.1f}")
    print(f"    Total touching pairs: {stats['touching_pairs']}")
    vertex_counts = list(regions.points_per_region.values()) or [0]
    print(f"    Vertices per region: min {min(vertex_counts)}, max {max(vertex_counts)}")

    print_header("VERIFICATION SUMMARY")
    for name, passed in results:
        print_check(name, passed)

    all_passed = all(passed for _, passed in results)
    overall = "ALL CHECKS PASSED" if all_passed else "SOME CHECKS FAILED"
    symbol = "✓" if all_passed else "✗"
    print(f"\n[{symbol}] {overall}")

    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
