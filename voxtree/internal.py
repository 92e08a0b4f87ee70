"""Internal node: a 16x16x16 grid of leaf children or uniform tiles."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from voxtree.coord import Coord
from voxtree.leaf import LEAF_DIM, LEAF_LOG2DIM, LEAF_SIZE, LeafNode

INTERNAL_LOG2DIM = 4
INTERNAL_DIM = 1 << INTERNAL_LOG2DIM
INTERNAL_SIZE = 1 << (3 * INTERNAL_LOG2DIM)
INTERNAL_TOTAL_LOG2DIM = INTERNAL_LOG2DIM + LEAF_LOG2DIM
INTERNAL_TOTAL_DIM = 1 << INTERNAL_TOTAL_LOG2DIM


class InternalNode:
    """Node covering 128^3 voxels as 16^3 slots of 8^3 each.

    Every slot holds either a child :class:`LeafNode` or a uniform tile
    value, which may be active or inactive.
    """

    __slots__ = ("_origin", "_background", "_leaves", "_tiles", "_active_tiles")

    def __init__(self, origin: Coord, background: Any) -> None:
        self._origin = origin.aligned(INTERNAL_TOTAL_LOG2DIM)
        self._background = background
        self._leaves: list[LeafNode | None] = [None] * INTERNAL_SIZE
        self._tiles: list[Any] = [background] * INTERNAL_SIZE
        self._active_tiles: set[int] = set()

    def origin(self) -> Coord:
        """Lower corner of this node, aligned to a 128 boundary."""
        return self._origin

    def background(self) -> Any:
        """Background value used for deactivated voxels and cleared slots."""
        return self._background

    def _child_index(self, coord: Coord) -> int:
        o = self._origin
        lx = (coord.x - o.x) >> LEAF_LOG2DIM
        ly = (coord.y - o.y) >> LEAF_LOG2DIM
        lz = (coord.z - o.z) >> LEAF_LOG2DIM
        if not (0 <= lx < INTERNAL_DIM and 0 <= ly < INTERNAL_DIM and 0 <= lz < INTERNAL_DIM):
            raise IndexError(f"{coord} lies outside the node at {o}")
        return (lx << (2 * INTERNAL_LOG2DIM)) | (ly << INTERNAL_LOG2DIM) | lz

    def _child_origin(self, idx: int) -> Coord:
        o = self._origin
        x = idx // (INTERNAL_DIM * INTERNAL_DIM)
        y = (idx // INTERNAL_DIM) % INTERNAL_DIM
        z = idx % INTERNAL_DIM
        return Coord(o.x + x * LEAF_DIM, o.y + y * LEAF_DIM, o.z + z * LEAF_DIM)

    def _make_tile(self, idx: int, value: Any, active: bool) -> None:
        self._leaves[idx] = None
        self._tiles[idx] = value
        if active:
            self._active_tiles.add(idx)
        else:
            self._active_tiles.discard(idx)

    def get(self, coord: Coord) -> Any:
        """Value at ``coord``."""
        idx = self._child_index(coord)
        leaf = self._leaves[idx]
        return self._tiles[idx] if leaf is None else leaf.get(coord)

    def set(self, coord: Coord, value: Any) -> None:
        """Store ``value`` at ``coord``, turning its tile into a leaf if needed."""
        idx = self._child_index(coord)
        leaf = self._leaves[idx]
        if leaf is None:
            leaf = LeafNode(coord.aligned(LEAF_LOG2DIM), self._tiles[idx])
            self._leaves[idx] = leaf
            self._active_tiles.discard(idx)
        leaf.set(coord, value)

    def is_active(self, coord: Coord) -> bool:
        """Whether the voxel at ``coord`` is active."""
        idx = self._child_index(coord)
        leaf = self._leaves[idx]
        return idx in self._active_tiles if leaf is None else leaf.is_active(coord)

    def deactivate(self, coord: Coord) -> None:
        """Deactivate the voxel at ``coord`` inside an allocated leaf.

        Tile slots are left unchanged.
        """
        leaf = self._leaves[self._child_index(coord)]
        if leaf is not None:
            leaf.deactivate(coord, self._background)

    def active_voxel_count(self) -> int:
        """Active voxels in leaves plus 512 for each active tile."""
        in_leaves = sum(leaf.active_count() for leaf in self.leaves())
        return in_leaves + LEAF_SIZE * len(self._active_tiles)

    def child_count(self) -> int:
        """Number of allocated child leaves."""
        return sum(1 for _ in self.leaves())

    def leaves(self) -> Iterator[LeafNode]:
        """Yield the allocated child leaves in slot order."""
        return (leaf for leaf in self._leaves if leaf is not None)

    def leaf_at(self, coord: Coord) -> LeafNode | None:
        """The child leaf containing ``coord``, or None for a tile slot."""
        return self._leaves[self._child_index(coord)]

    def active_tile_count(self) -> int:
        """Number of active tile slots."""
        return len(self._active_tiles)

    def remove_empty_leaves(self) -> None:
        """Replace leaves without active voxels by inactive background tiles."""
        for idx, leaf in enumerate(self._leaves):
            if leaf is not None and leaf.is_empty():
                self._make_tile(idx, self._background, active=False)

    def prune(self, tolerance: Any) -> None:
        """Collapse leaves whose values all lie within ``tolerance`` of the first.

        A collapsed leaf becomes a tile holding its first value, active if
        the leaf had any active voxel.
        """
        for idx, leaf in enumerate(self._leaves):
            if leaf is None:
                continue
            values = leaf.values()
            first = values[0]
            if all(
                not ((v - first if v > first else first - v) > tolerance)
                for v in values[1:]
            ):
                self._make_tile(idx, first, active=not leaf.is_empty())

    def iter_active(self) -> Iterator[tuple[Coord, Any]]:
        """Yield ``(coord, value)`` for every active voxel, active tiles expanded."""
        for idx, leaf in enumerate(self._leaves):
            if leaf is not None:
                yield from leaf.iter_active()
            elif idx in self._active_tiles:
                value = self._tiles[idx]
                o = self._child_origin(idx)
                for x in range(LEAF_DIM):
                    for y in range(LEAF_DIM):
                        for z in range(LEAF_DIM):
                            yield Coord(o.x + x, o.y + y, o.z + z), value