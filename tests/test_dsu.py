import math

import pytest

from dsu import DSU


def _depth(dsu, v):
    depth = 0
    while dsu.parent[v] != v:
        v = dsu.parent[v]
        depth += 1
    return depth


def test_new_dsu_has_singletons():
    dsu = DSU(5)
    assert [dsu.find(i) for i in range(5)] == [0, 1, 2, 3, 4]
    assert dsu.num_components() == 5
    assert len(dsu) == 5


def test_union_reports_whether_it_merged():
    dsu = DSU(3)
    assert dsu.union(0, 1)
    assert not dsu.union(1, 0)
    assert dsu.connected(0, 1)
    assert not dsu.connected(0, 2)
    assert dsu.num_components() == 2


def test_equal_sizes_attach_second_root_under_first():
    dsu = DSU(4)
    dsu.union(0, 1)
    dsu.union(2, 3)
    assert dsu.find(1) == 0
    assert dsu.find(3) == 2
    dsu.union(0, 2)
    assert dsu.find(3) == 0
    assert dsu.component_size(3) == 4


def test_smaller_tree_goes_under_larger():
    dsu = DSU(3)
    dsu.union(0, 1)
    dsu.union(2, 0)
    assert dsu.find(2) == 0
    assert dsu.size[0] == 3


def test_find_compresses_path():
    dsu = DSU(4)
    dsu.parent = [0, 0, 1, 2]
    assert dsu.find(3) == 0
    assert dsu.parent[3] == 0
    assert dsu.parent[2] == 0


@pytest.mark.parametrize("bad", [-1, 4, 100])
def test_find_rejects_out_of_range(bad):
    dsu = DSU(4)
    with pytest.raises(IndexError):
        dsu.find(bad)
    with pytest.raises(IndexError):
        dsu.union(0, bad)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        DSU(-1)


def test_union_by_size_bounds_height():
    n = 1024
    dsu = DSU(n)
    step = 1
    while step < n:
        for i in range(0, n, 2 * step):
            dsu.union(i + step, i)
        step *= 2
    assert dsu.num_components() == 1
    assert max(_depth(dsu, v) for v in range(n)) <= math.log2(n)


def test_components_groups_members():
    dsu = DSU(5)
    dsu.union(0, 3)
    dsu.union(4, 1)
    comps = sorted(dsu.components().values())
    assert comps == [[0, 3], [1, 4], [2]]
