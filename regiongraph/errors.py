"""
Typed errors raised while building a region adjacency graph.

Every error carries a ``kind`` naming the failure so the command line can
report it without inspecting the class hierarchy. None of them are retried:
each one means the graph would be incomplete if processing went on.
"""


class RegionGraphError(Exception):
    """Base class for all adjacency pipeline errors."""

    kind = 'RegionGraphError'

    def __str__(self) -> str:
        message = super().__str__()
        return message or self.kind


class UnresolvableFeatureError(RegionGraphError, ValueError):
    """A feature lacks an identifier or a usable geometry."""

    kind = 'UnresolvableFeature'


class MissingIdentifierError(UnresolvableFeatureError):
    """No known or identifier-like property was found on a feature."""

    kind = 'MissingIdentifier'


class CoordinateOutOfRangeError(RegionGraphError, ValueError):
    """A coordinate fell outside the open interval (-180, 180)."""

    kind = 'CoordinateOutOfRange'

    def __init__(self, value: float):
        super().__init__(f"Coordinate {value!r} outside (-180.0, 180.0)")
        self.value = value


class UnsupportedInputShapeError(RegionGraphError, ValueError):
    """The top-level input is not a feature collection."""

    kind = 'UnsupportedInputShape'


class OutputWriteFailedError(RegionGraphError, IOError):
    """The adjacency output could not be written."""

    kind = 'OutputWriteFailed'


class AdjacencyInvariantError(RegionGraphError, RuntimeError):
    """Internal inconsistency detected while computing adjacency."""

    kind = 'AdjacencyInvariant'
