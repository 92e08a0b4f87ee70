"""Sparse three-level voxel trees: coordinates, dense leaves, internal nodes, a root map and cached accessors."""

__version__ = "0.1.0"
__all__ = ["coord", "leaf", "internal", "root", "accessor"]