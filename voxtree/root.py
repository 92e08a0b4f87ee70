"""Root of the sparse tree: a map from 128^3 regions to internal nodes."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol

from voxtree.coord import Coord
from voxtree.internal import INTERNAL_TOTAL_LOG2DIM, InternalNode
from voxtree.leaf import LeafNode


class Visitor(Protocol):
    """Receives voxels during a tree walk."""

    def visit(self, coord: Coord, value: Any, is_active: bool) -> None:
        """Called once per voxel with its coordinate, value and activity."""


class RootNode:
    """Sparse three-level tree: root map -> internal nodes (16^3) -> leaves (8^3)."""

    __slots__ = ("_tiles", "_background")

    def __init__(self, background: Any) -> None:
        self._tiles: dict[Coord, InternalNode] = {}
        self._background = background

    def background(self) -> Any:
        """Value returned for unallocated regions."""
        return self._background

    def internal_count(self) -> int:
        """Number of allocated internal nodes."""
        return len(self._tiles)

    def leaf_count(self) -> int:
        """Number of allocated leaves across all internal nodes."""
        return sum(node.child_count() for node in self._tiles.values())

    def active_voxel_count(self) -> int:
        """Total number of active voxels in the tree."""
        return sum(node.active_voxel_count() for node in self._tiles.values())

    @staticmethod
    def _key(coord: Coord) -> Coord:
        return coord.aligned(INTERNAL_TOTAL_LOG2DIM)

    def get(self, coord: Coord) -> Any:
        """Value at ``coord``, or the background where nothing is allocated."""
        node = self._tiles.get(self._key(coord))
        return self._background if node is None else node.get(coord)

    def set(self, coord: Coord, value: Any) -> None:
        """Store ``value`` at ``coord``, allocating nodes as needed."""
        key = self._key(coord)
        node = self._tiles.get(key)
        if node is None:
            node = InternalNode(key, self._background)
            self._tiles[key] = node
        node.set(coord, value)

    def is_active(self, coord: Coord) -> bool:
        """Whether the voxel at ``coord`` is active."""
        node = self._tiles.get(self._key(coord))
        return node is not None and node.is_active(coord)

    def leaves(self) -> Iterator[LeafNode]:
        """Yield every allocated leaf."""
        for node in self._tiles.values():
            yield from node.leaves()

    def leaf_origins(self) -> list[Coord]:
        """Origins of all allocated leaves."""
        return [leaf.origin() for leaf in self.leaves()]

    def leaf_at(self, origin: Coord) -> LeafNode | None:
        """The allocated leaf containing ``origin``, or None."""
        node = self._tiles.get(self._key(origin))
        return None if node is None else node.leaf_at(origin)

    def iter_active(self) -> Iterator[tuple[Coord, Any]]:
        """Yield ``(coord, value)`` for every active voxel in the tree."""
        for node in self._tiles.values():
            yield from node.iter_active()

    def iter_inactive(self) -> Iterator[tuple[Coord, Any]]:
        """Yield ``(coord, value)`` for inactive voxels inside allocated leaves."""
        for leaf in self.leaves():
            yield from leaf.iter_off()

    def iter_all_leaf_voxels(self) -> Iterator[tuple[Coord, Any, bool]]:
        """Yield ``(coord, value, is_active)`` for every voxel of every leaf."""
        for leaf in self.leaves():
            yield from leaf.iter_all()

    def accept_visitor(self, visitor: Visitor) -> None:
        """Call ``visitor.visit`` for every voxel in every allocated leaf."""
        for coord, value, active in self.iter_all_leaf_voxels():
            visitor.visit(coord, value, active)

    def accept_active_visitor(self, visitor: Visitor) -> None:
        """Call ``visitor.visit`` for every active voxel."""
        for coord, value in self.iter_active():
            visitor.visit(coord, value, True)

    def deactivate(self, coord: Coord) -> None:
        """Deactivate the voxel at ``coord``, resetting it to background."""
        node = self._tiles.get(self._key(coord))
        if node is not None:
            node.deactivate(coord)

    def prune(self, tolerance: Any) -> None:
        """Collapse near-constant leaves into tiles in every internal node."""
        for node in self._tiles.values():
            node.prune(tolerance)

    def remove_empty_leaves(self) -> None:
        """Drop leaves with no active voxels in every internal node."""
        for node in self._tiles.values():
            node.remove_empty_leaves()

    def clear(self) -> None:
        """Remove all data, keeping the background value."""
        self._tiles.clear()