"""Dense 8x8x8 voxel tile with an activity mask."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from voxtree.coord import Coord

LEAF_LOG2DIM = 3
LEAF_DIM = 1 << LEAF_LOG2DIM
LEAF_SIZE = 1 << (3 * LEAF_LOG2DIM)

_WORD_BITS = 64
_WORD_MASK = (1 << _WORD_BITS) - 1
_WORD_COUNT = LEAF_SIZE // _WORD_BITS


class LeafNode:
    """Dense 8^3 voxel tile.

    Active voxels hold meaningful values; inactive voxels hold the
    background value.
    """

    __slots__ = ("_origin", "_values", "_active")

    def __init__(self, origin: Coord, background: Any) -> None:
        self._origin = origin.aligned(LEAF_LOG2DIM)
        self._values: list[Any] = [background] * LEAF_SIZE
        self._active = 0

    def origin(self) -> Coord:
        """Tile-aligned lower corner of this leaf."""
        return self._origin

    def get(self, coord: Coord) -> Any:
        """Value stored at ``coord``."""
        return self._values[coord.offset_in_tile(LEAF_LOG2DIM)]

    def set(self, coord: Coord, value: Any) -> None:
        """Store ``value`` at ``coord`` and mark it active."""
        off = coord.offset_in_tile(LEAF_LOG2DIM)
        self._values[off] = value
        self._active |= 1 << off

    def set_inactive(self, coord: Coord, background: Any) -> None:
        """Clear the active flag at ``coord`` and reset it to ``background``."""
        off = coord.offset_in_tile(LEAF_LOG2DIM)
        self._values[off] = background
        self._active &= ~(1 << off)

    def deactivate(self, coord: Coord, background: Any) -> None:
        """Same as :meth:`set_inactive`."""
        self.set_inactive(coord, background)

    def is_active(self, coord: Coord) -> bool:
        """Whether the voxel at ``coord`` is active."""
        off = coord.offset_in_tile(LEAF_LOG2DIM)
        return bool((self._active >> off) & 1)

    def active_count(self) -> int:
        """Number of active voxels."""
        return bin(self._active).count("1")

    def is_empty(self) -> bool:
        """True when no voxel is active."""
        return self._active == 0

    def active_mask(self) -> tuple[int, ...]:
        """The activity mask as eight 64-bit words, lowest offsets first."""
        return tuple(
            (self._active >> (word * _WORD_BITS)) & _WORD_MASK
            for word in range(_WORD_COUNT)
        )

    def values(self) -> list[Any]:
        """The live list of all 512 stored values in ZYX order."""
        return self._values

    def _coord_at(self, off: int) -> Coord:
        o = self._origin
        return Coord(
            o.x + (off >> (2 * LEAF_LOG2DIM)),
            o.y + ((off >> LEAF_LOG2DIM) & (LEAF_DIM - 1)),
            o.z + (off & (LEAF_DIM - 1)),
        )

    def iter_off(self) -> Iterator[tuple[Coord, Any]]:
        """Yield ``(coord, value)`` for every inactive voxel of this leaf."""
        mask = self._active
        for off, value in enumerate(self._values):
            if not (mask >> off) & 1:
                yield self._coord_at(off), value

    def iter_all(self) -> Iterator[tuple[Coord, Any, bool]]:
        """Yield ``(coord, value, is_active)`` for all 512 voxels."""
        mask = self._active
        for off, value in enumerate(self._values):
            yield self._coord_at(off), value, bool((mask >> off) & 1)

    def iter_active(self) -> Iterator[tuple[Coord, Any]]:
        """Yield ``(coord, value)`` for every active voxel, in offset order."""
        remaining = self._active
        while remaining:
            low = remaining & -remaining
            off = low.bit_length() - 1
            remaining ^= low
            yield self._coord_at(off), self._values[off]