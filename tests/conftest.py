# tests/conftest.py
import pytest
from dendcut.tree import DendrogramNode


def leaf(label, index):
    return DendrogramNode(label=label, index=index)


@pytest.fixture
def five_leaf_tree():
    """{A,B} merge at 2, {C,D} at 3, the two pairs at 5, E joins at 8."""
    ab = DendrogramNode(2.0, (leaf("A", 0), leaf("B", 1)))
    cd = DendrogramNode(3.0, (leaf("C", 2), leaf("D", 3)))
    return DendrogramNode(8.0, (DendrogramNode(5.0, (ab, cd)), leaf("E", 4)))


@pytest.fixture
def tied_tree():
    """Two pairs merged at the same height, so 3 clusters can't be made."""
    ab = DendrogramNode(2.0, (leaf("A", 0), leaf("B", 1)))
    cd = DendrogramNode(2.0, (leaf("C", 2), leaf("D", 3)))
    return DendrogramNode(5.0, (ab, cd))


@pytest.fixture
def shuffled_tree():
    """Dendrogram order C, A, B differs from data order A, B, C."""
    ab = DendrogramNode(1.0, (leaf("A", 0), leaf("B", 1)))
    return DendrogramNode(4.0, (leaf("C", 2), ab))
