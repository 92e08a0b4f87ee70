"""Integer index-space coordinates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Coord:
    """A voxel coordinate in integer index space."""

    x: int
    y: int
    z: int

    @classmethod
    def origin(cls) -> Coord:
        """The coordinate (0, 0, 0)."""
        return cls(0, 0, 0)

    def aligned(self, log2dim: int) -> Coord:
        """Round each component down to a multiple of ``2**log2dim``."""
        mask = ~((1 << log2dim) - 1)
        return Coord(self.x & mask, self.y & mask, self.z & mask)

    def offset_in_tile(self, log2dim: int) -> int:
        """Linear offset of this coordinate inside its ``2**log2dim`` cube.

        The layout is ZYX order: ``x * dim * dim + y * dim + z``.
        """
        mask = (1 << log2dim) - 1
        return (
            ((self.x & mask) << (2 * log2dim))
            | ((self.y & mask) << log2dim)
            | (self.z & mask)
        )