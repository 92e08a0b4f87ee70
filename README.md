# voxtree

A sparse voxel tree for volumetric data, in pure Python. Space is split
into three levels:

- a `RootNode` (`voxtree.root`) that maps 128³ regions to internal nodes,
  creating them on first write,
- an `InternalNode` (`voxtree.internal`) with 16³ slots, each holding either
  a child leaf or a uniform tile value that is active or inactive,
- a `LeafNode` (`voxtree.leaf`) holding a dense 8³ block of values with an
  activity mask.

Coordinates are `Coord(x, y, z)` values from `voxtree.coord`: frozen,
hashable and ordered. Only regions that have been written to take up
memory; everything else reads back as the tree's background value.

## Installing

```
pip install .
```

## Using it

```python
from voxtree.coord import Coord
from voxtree.root import RootNode

tree = RootNode(background=0.0)
tree.set(Coord(5, 5, 5), 42.0)

tree.get(Coord(5, 5, 5))          # 42.0
tree.get(Coord(1000, 0, 0))       # 0.0 (background)
tree.is_active(Coord(5, 5, 5))    # True
tree.leaf_count()                 # 1
tree.internal_count()             # 1
tree.active_voxel_count()         # 1

for coord, value in tree.iter_active():
    print(coord, value)
```

`iter_inactive()` yields the inactive voxels of the allocated leaves, and
`iter_all_leaf_voxels()` yields `(coord, value, is_active)` for every voxel
of every allocated leaf. `leaves()`, `leaf_origins()` and `leaf_at(coord)`
give access to the leaves themselves.

Voxels can be switched off again, empty leaves dropped, and nearly
constant leaves collapsed into tiles:

```python
tree.deactivate(Coord(5, 5, 5))   # value goes back to the background
tree.remove_empty_leaves()        # leaves with no active voxel become tiles
tree.prune(0.01)                  # leaves whose values all lie within 0.01
                                  # of their first value become tiles
tree.clear()                      # drop everything, keep the background
```

A pruned leaf becomes a tile holding its first value; the tile is active if
the leaf had any active voxel, and then counts as 512 active voxels and is
expanded voxel by voxel by `iter_active()`. `deactivate` only affects voxels
in allocated leaves; tile slots are left as they are.

An `InternalNode` raises `IndexError` when given a coordinate outside its
128³ region. `RootNode` always routes a coordinate to the right node.

### Visitors

Any object with a `visit(coord, value, is_active)` method can walk the tree;
`voxtree.root.Visitor` describes that shape and can be subclassed:

```python
from voxtree.root import Visitor

class Counter(Visitor):
    def __init__(self):
        self.active = 0
        self.inactive = 0

    def visit(self, coord, value, is_active):
        if is_active:
            self.active += 1
        else:
            self.inactive += 1

counter = Counter()
tree.accept_visitor(counter)         # every voxel of every allocated leaf
tree.accept_active_visitor(counter)  # active voxels only
```

### Cached access

A `ValueAccessor` (`voxtree.accessor`) remembers the last leaf found by
`probe_and_get`. Reading more voxels in the same 8³ block then goes straight
to that leaf:

```python
from voxtree.accessor import AccessorTree

wrapped = AccessorTree(RootNode(0.0))
acc = wrapped.accessor()
acc.set(Coord(1, 1, 1), 10.0)
acc.probe_and_get(Coord(1, 1, 1))   # 10.0, and the leaf is now cached
acc.get(Coord(2, 2, 2))             # read from the cached leaf
acc.is_active(Coord(1, 1, 1))       # True
acc.clear_cache()
wrapped.tree()                      # the wrapped RootNode
```

Writing through the accessor with `set` clears its cache.

## What it does not do

The package is an in-memory data structure only. It has no command-line
tool, does not read or write volume files, and has no rendering or
level-set operations.

## Running the tests

```
pip install .[test]
pytest
```