import pytest

from voxtree.coord import Coord
from voxtree.internal import INTERNAL_TOTAL_DIM, InternalNode


def _filled(items=(), background=0.0, origin=None):
    """Build an internal node and set each ((x, y, z), value) pair in it."""
    node = InternalNode(Coord.origin() if origin is None else origin, background)
    for xyz, value in items:
        node.set(Coord(*xyz), value)
    return node


def test_internal_new_empty():
    node = _filled()
    assert node.origin() == Coord.origin()
    assert node.child_count() == 0
    assert node.active_voxel_count() == 0
    assert node.active_tile_count() == 0


@pytest.mark.parametrize(
    "origin, expected",
    [
        (Coord(13, 200, 50), Coord(0, 128, 0)),
        (Coord(INTERNAL_TOTAL_DIM + 5, 0, 0), Coord(128, 0, 0)),
        (Coord(-1, -1, -1), Coord(-128, -128, -128)),
    ],
)
def test_internal_origin_aligned(origin, expected):
    assert _filled(origin=origin).origin() == expected


def test_internal_background():
    assert _filled(background=-3.5).background() == -3.5


def test_internal_total_dim_spans_node():
    assert INTERNAL_TOTAL_DIM == 128
    last = INTERNAL_TOTAL_DIM - 1
    corner = Coord(128 + last, last, last)
    node = _filled([((128 + last, last, last), 4.0)], origin=Coord(133, 0, 0))
    assert node.get(corner) == 4.0
    with pytest.raises(IndexError):
        node.get(Coord(128 + INTERNAL_TOTAL_DIM, 0, 0))


def test_internal_set_get():
    node = _filled([((5, 5, 5), 42.0)], background=-1.0)
    assert node.get(Coord(5, 5, 5)) == 42.0
    assert node.is_active(Coord(5, 5, 5))
    assert node.child_count() == 1


def test_internal_unset_returns_background():
    node = _filled(background=-1.0)
    assert node.get(Coord(5, 5, 5)) == -1.0
    assert not node.is_active(Coord(5, 5, 5))


@pytest.mark.parametrize(
    "items, children, active",
    [
        ([((0, 0, 0), 1.0), ((8, 0, 0), 2.0)], 2, 2),
        ([((0, 0, 0), 1.0), ((7, 7, 7), 2.0)], 1, 2),
        ([((0, 0, 0), 1.0), ((8, 0, 0), 2.0), ((16, 0, 0), 3.0)], 3, 3),
        ([((0, 0, 0), 1.0), ((127, 127, 127), 2.0)], 2, 2),
    ],
)
def test_internal_leaf_allocation(items, children, active):
    node = _filled(items)
    assert node.child_count() == children
    assert len(list(node.leaves())) == children
    assert node.active_voxel_count() == active
    for xyz, value in items:
        assert node.get(Coord(*xyz)) == value


def test_internal_leaves_in_slot_order():
    node = _filled([((16, 0, 0), 3.0), ((0, 0, 8), 1.0), ((8, 0, 0), 2.0)])
    origins = [leaf.origin() for leaf in node.leaves()]
    assert origins == [Coord(0, 0, 8), Coord(8, 0, 0), Coord(16, 0, 0)]


def test_internal_leaf_at():
    node = _filled()
    assert node.leaf_at(Coord(5, 5, 5)) is None
    node.set(Coord(5, 5, 5), 42.0)
    assert node.leaf_at(Coord(5, 5, 5)).origin() == Coord(0, 0, 0)
    assert node.leaf_at(Coord(0, 0, 0)).get(Coord(5, 5, 5)) == 42.0


def test_internal_iter_active():
    node = _filled([((1, 2, 3), 10.0), ((9, 10, 11), 20.0)])
    active = list(node.iter_active())
    assert len(active) == 2
    assert (Coord(1, 2, 3), 10.0) in active
    assert (Coord(9, 10, 11), 20.0) in active


def test_internal_negative_origin():
    node = _filled([((-1, -1, -1), 7.0)], origin=Coord(-1, -1, -1))
    assert node.get(Coord(-1, -1, -1)) == 7.0
    assert node.leaf_at(Coord(-1, -1, -1)).origin() == Coord(-8, -8, -8)


@pytest.mark.parametrize("coord", [Coord(128, 0, 0), Coord(0, -1, 0), Coord(0, 0, 200)])
def test_internal_coord_outside_raises(coord):
    node = _filled()
    with pytest.raises(IndexError):
        node.get(coord)
    with pytest.raises(IndexError):
        node.set(coord, 1.0)


def test_internal_deactivate_voxel():
    node = _filled([((1, 1, 1), 5.0)])
    assert node.is_active(Coord(1, 1, 1))
    node.deactivate(Coord(1, 1, 1))
    assert not node.is_active(Coord(1, 1, 1))
    assert node.get(Coord(1, 1, 1)) == 0.0


def test_internal_deactivate_tile_slot_is_noop():
    node = _filled()
    node.deactivate(Coord(3, 3, 3))
    assert node.child_count() == 0
    assert node.get(Coord(3, 3, 3)) == 0.0


def test_internal_remove_empty_leaves():
    node = _filled([((0, 0, 0), 1.0), ((8, 0, 0), 2.0)])
    node.deactivate(Coord(0, 0, 0))
    node.remove_empty_leaves()
    assert node.child_count() == 1
    assert node.get(Coord(0, 0, 0)) == 0.0
    assert node.active_tile_count() == 0


@pytest.mark.parametrize(
    "items, background, tolerance, children, tiles",
    [
        ([((0, 0, 0), 5.0)], 5.0, 0.0, 0, 1),
        ([((0, 0, 0), 5.0), ((1, 1, 1), 5.001)], 5.0, 0.0001, 1, 0),
        ([((0, 0, 0), 5.0), ((1, 1, 1), 5.001)], 5.0, 0.01, 0, 1),
        ([((0, 0, 0), 1.0), ((1, 1, 1), 100.0)], 0.0, 0.0, 1, 0),
    ],
)
def test_internal_prune(items, background, tolerance, children, tiles):
    node = _filled(items, background=background)
    assert node.child_count() == 1
    node.prune(tolerance)
    assert node.child_count() == children
    assert node.active_tile_count() == tiles


def test_internal_pruned_active_tile_expands_in_iteration():
    node = _filled([((9, 1, 1), 5.0)], background=5.0)
    node.prune(0.0)
    assert node.active_voxel_count() == 512
    active = list(node.iter_active())
    assert len(active) == 512
    assert active[0] == (Coord(8, 0, 0), 5.0)
    assert active[-1] == (Coord(15, 7, 7), 5.0)
    assert node.is_active(Coord(12, 3, 4))
    assert node.get(Coord(12, 3, 4)) == 5.0


def test_internal_set_in_active_tile_promotes_to_leaf():
    node = _filled([((0, 0, 0), 5.0)], background=5.0)
    node.prune(0.0)
    assert node.active_tile_count() == 1
    node.set(Coord(2, 2, 2), 9.0)
    assert node.child_count() == 1
    assert node.active_tile_count() == 0
    assert node.get(Coord(2, 2, 2)) == 9.0
    assert node.get(Coord(3, 3, 3)) == 5.0
    assert node.active_voxel_count() == 1


def test_internal_prune_inactive_leaf_gives_inactive_tile():
    node = _filled([((0, 0, 0), 0.0)])
    node.deactivate(Coord(0, 0, 0))
    node.prune(0.0)
    assert node.child_count() == 0
    assert node.active_tile_count() == 0
    assert not node.is_active(Coord(0, 0, 0))