"""Region identifiers and the immutable adjacency graph."""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple


@dataclass(frozen=True, order=True)
class RegionId:
    """Opaque region identifier; compares and sorts by its raw string."""

    value: str

    def __str__(self) -> str:
        return self.value


class AdjacencyGraph:
    """
    Mapping from region to its sorted, duplicate-free neighbour tuple.

    Keys iterate in sorted order and every neighbour tuple is sorted, so
    anything derived from the graph by iteration is deterministic.
    Regions without neighbours have no entry.
    """

    def __init__(self, adjacency: Mapping[RegionId, Iterable[RegionId]]):
        self._adjacency: Dict[RegionId, Tuple[RegionId, ...]] = {
            region: tuple(sorted(set(neighbors)))
            for region, neighbors in sorted(adjacency.items())
        }

    @classmethod
    def from_strings(cls, adjacency: Mapping[str, Iterable[str]]) -> "AdjacencyGraph":
        return cls({
            RegionId(region): [RegionId(n) for n in neighbors]
            for region, neighbors in adjacency.items()
        })

    def neighbors(self, region: RegionId) -> Tuple[RegionId, ...]:
        return self._adjacency.get(region, ())

    def regions(self) -> List[RegionId]:
        return list(self._adjacency)

    def items(self) -> Iterator[Tuple[RegionId, Tuple[RegionId, ...]]]:
        return iter(self._adjacency.items())

    def pairs(self) -> Iterator[Tuple[RegionId, RegionId]]:
        """Yield every (region, neighbour) pair in graph order."""
        for region, neighbors in self._adjacency.items():
            for neighbor in neighbors:
                yield region, neighbor

    def edge_count(self) -> int:
        """Number of ordered pairs (twice the number of touching pairs)."""
        return sum(len(neighbors) for neighbors in self._adjacency.values())

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            str(region): [str(n) for n in neighbors]
            for region, neighbors in self._adjacency.items()
        }

    def __contains__(self, region: object) -> bool:
        return region in self._adjacency

    def __iter__(self) -> Iterator[RegionId]:
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AdjacencyGraph):
            return NotImplemented
        return list(self._adjacency.items()) == list(other._adjacency.items())

    def __repr__(self) -> str:
        return f"AdjacencyGraph({len(self)} regions, {self.edge_count()} pairs)"
