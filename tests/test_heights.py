# tests/test_heights.py
import numpy as np
import pytest
from dendcut.heights import (
    cluster_count_at_height,
    collect_heights,
    heights_per_k,
    is_natural_number,
)
from dendcut.options import CutreeOptions
from dendcut.tree import DendrogramNode, build_dendrogram


def test_collect_heights(five_leaf_tree):
    np.testing.assert_allclose(collect_heights(five_leaf_tree), [2.0, 3.0, 5.0, 8.0])


def test_collect_heights_single_leaf():
    assert collect_heights(DendrogramNode(label="A", index=0)).size == 0


def test_collect_heights_drops_zero_merges():
    """Duplicate observations merge at height 0 and are not cut heights."""
    tree = build_dendrogram(np.array([1.0, 1.0, 4.0]))
    internal = [node for node in tree.walk() if not node.is_leaf]
    zero = [node for node in internal if node.height == 0]
    assert len(zero) == 1
    assert len(collect_heights(tree)) == len(internal) - len(zero)


def test_heights_per_k(five_leaf_tree):
    table = heights_per_k(five_leaf_tree)
    assert list(table) == [1, 2, 3, 4, 5]
    # Half the smallest gap (3 - 2) on either side of the merges
    np.testing.assert_allclose(list(table.values()), [8.5, 7.5, 4.5, 2.5, 1.5])


def test_heights_per_k_with_ties(tied_tree):
    table = heights_per_k(tied_tree)
    assert sorted(table) == [1, 2, 4]
    assert 3 not in table


def test_heights_per_k_single_leaf():
    table = heights_per_k(DendrogramNode(label="A", index=0))
    assert table == {1: 0.5}


def test_heights_per_k_single_merge():
    tree = DendrogramNode(2.0, (DendrogramNode(label="A", index=0),
                                DendrogramNode(label="B", index=1)))
    assert heights_per_k(tree) == {1: 3.0, 2: 1.0}


def _inverted_tree():
    """Centroid-style inversion: the child merge sits above its parent."""
    ab = DendrogramNode(4.0, (DendrogramNode(label="A", index=0),
                              DendrogramNode(label="B", index=1)))
    abc = DendrogramNode(3.0, (ab, DendrogramNode(label="C", index=2)))
    return DendrogramNode(6.0, (abc, DendrogramNode(label="D", index=3)))


def test_heights_per_k_tie_break():
    # Candidates 6.5, 5.5, 3.5, 2.5 give 1, 2, 2, 4 clusters
    tree = _inverted_tree()
    assert heights_per_k(tree)[2] == pytest.approx(3.5)
    assert heights_per_k(tree, CutreeOptions(tie_break="first"))[2] == pytest.approx(5.5)


def test_single_cluster_height_stays_on_top():
    """A root merged below its child still gets its k=1 cut above the child."""
    ab = DendrogramNode(4.0, (DendrogramNode(label="A", index=0),
                              DendrogramNode(label="B", index=1)))
    tree = DendrogramNode(3.0, (ab, DendrogramNode(label="C", index=2)))
    table = heights_per_k(tree)
    assert table[1] == pytest.approx(4.5)
    assert table[1] > max(collect_heights(tree))
    assert heights_per_k(tree, CutreeOptions(tie_break="first"))[1] == pytest.approx(4.5)


def test_unknown_tie_break():
    with pytest.raises(ValueError):
        CutreeOptions(tie_break="middle")


def test_first_entry_above_tree():
    rng = np.random.default_rng(1)
    for _ in range(5):
        tree = build_dendrogram(rng.normal(size=(15, 2)), method="ward")
        table = heights_per_k(tree)
        assert table[1] > tree.height
        assert cluster_count_at_height(tree, table[1]) == 1


def test_every_entry_gives_its_count():
    rng = np.random.default_rng(2)
    tree = build_dendrogram(rng.normal(size=(20, 2)), method="average")
    table = heights_per_k(tree)
    # Continuous data, so no tied heights
    assert sorted(table) == list(range(1, 21))
    for k, h in table.items():
        assert cluster_count_at_height(tree, h) == k


def test_is_natural_number():
    x = np.arange(-1, 5.5, 0.5)
    expected = [False, False, False, False, True, False, True, False, True, False, True, False, True]
    assert is_natural_number(x).tolist() == expected
    assert is_natural_number(3)
    assert not is_natural_number(3.2)
