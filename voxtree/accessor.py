"""Cached accessor that remembers the last leaf it found."""

from __future__ import annotations

from typing import Any

from voxtree.coord import Coord
from voxtree.leaf import LEAF_LOG2DIM, LeafNode
from voxtree.root import RootNode


class ValueAccessor:
    """Reads and writes a tree, caching the most recently probed leaf."""

    __slots__ = ("_tree", "_cached_origin", "_cached_leaf")

    def __init__(self, tree: RootNode) -> None:
        self._tree = tree
        self._cached_origin: Coord | None = None
        self._cached_leaf: LeafNode | None = None

    def _cached(self, coord: Coord) -> LeafNode | None:
        if self._cached_leaf is not None and coord.aligned(LEAF_LOG2DIM) == self._cached_origin:
            return self._cached_leaf
        return None

    def get(self, coord: Coord) -> Any:
        """Value at ``coord``, read from the cached leaf when it covers it."""
        leaf = self._cached(coord)
        return self._tree.get(coord) if leaf is None else leaf.get(coord)

    def set(self, coord: Coord, value: Any) -> None:
        """Store ``value`` at ``coord`` and drop the cache."""
        self.clear_cache()
        self._tree.set(coord, value)

    def probe_and_get(self, coord: Coord) -> Any:
        """Value at ``coord``; caches the containing leaf for later lookups."""
        leaf = self._cached(coord)
        if leaf is not None:
            return leaf.get(coord)
        value = self._tree.get(coord)
        found = self._tree.leaf_at(coord)
        if found is None:
            self.clear_cache()
        else:
            self._cached_leaf = found
            self._cached_origin = coord.aligned(LEAF_LOG2DIM)
        return value

    def is_active(self, coord: Coord) -> bool:
        """Whether the voxel at ``coord`` is active."""
        return self._tree.is_active(coord)

    def clear_cache(self) -> None:
        """Forget the cached leaf."""
        self._cached_leaf = None
        self._cached_origin = None


class AccessorTree:
    """Owns a tree and hands out accessors for it."""

    __slots__ = ("_tree",)

    def __init__(self, tree: RootNode) -> None:
        self._tree = tree

    def accessor(self) -> ValueAccessor:
        """A new accessor over the wrapped tree."""
        return ValueAccessor(self._tree)

    def tree(self) -> RootNode:
        """The wrapped tree."""
        return self._tree