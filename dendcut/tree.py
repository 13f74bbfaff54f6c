"""Dendrogram tree model and the split-at-height primitive.

A dendrogram is a rooted tree of merges: every internal node carries the
height at which its children were joined, every leaf carries its position in
the original data and a label.  Trees are immutable once built; the cutting
code only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Hashable, Iterator, Sequence

import numpy as np
from numpy.typing import NDArray
from scipy.cluster.hierarchy import is_valid_linkage, linkage


@dataclass(frozen=True, eq=False)
class DendrogramNode:
    """One node of a dendrogram.

    Leaves have no children, height 0, an original-data ``index`` and a
    ``label``.  Internal nodes have an ordered tuple of children and the merge
    height.
    """

    height: float = 0.0
    children: tuple[DendrogramNode, ...] = ()
    label: Hashable | None = None
    index: int | None = None

    def __post_init__(self):
        if not self.children and self.index is None:
            raise ValueError(f"Leaf {self.label!r} has no original-data index")

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator[DendrogramNode]:
        """Pre-order, left-to-right iteration over every node."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> Iterator[DendrogramNode]:
        return (node for node in self.walk() if node.is_leaf)

    @cached_property
    def members(self) -> tuple[int, ...]:
        """Original-data indices of the leaves under this node, left to right."""
        return tuple(leaf.index for leaf in self.leaves())

    def order(self) -> list[int]:
        return list(self.members)

    def labels(self) -> list[Hashable]:
        return [leaf.label for leaf in self.leaves()]

    @property
    def nleaves(self) -> int:
        return len(self.members)


def leaves_of(subtree: DendrogramNode) -> list[Hashable]:
    """Leaf labels of a subtree in dendrogram order."""
    return subtree.labels()


def leaf_indices_of(subtree: DendrogramNode) -> list[int]:
    """Leaf original-data indices of a subtree in dendrogram order.

    Much cheaper than :func:`leaves_of` on large trees since the indices are
    cached on each node.
    """
    return subtree.order()


def split_at_height(tree: DendrogramNode, h: float) -> list[DendrogramNode]:
    """Split a tree into the maximal subtrees whose root height is <= h.

    Subtrees are returned in the order a left-to-right scan meets them.
    A leaf reached by the scan is always a subtree of its own, so a negative
    ``h`` isolates every leaf.  ``h`` at or above the root height returns the
    whole tree as the only subtree.
    """
    lower = []
    stack = [tree]
    while stack:
        node = stack.pop()
        if node.is_leaf or node.height <= h:
            lower.append(node)
        else:
            stack.extend(reversed(node.children))
    return lower


def from_linkage(Z: NDArray, labels: Sequence[Hashable] | None = None) -> DendrogramNode:
    """Convert a scipy linkage matrix into a dendrogram.

    Args:
        Z: Linkage matrix, (N-1, 4) array as returned by ``linkage``.
        labels: Optional leaf labels, one per original observation.
            Defaults to the string form of each observation index.

    Returns:
        Root node.  Leaf ``i`` carries ``index=i``.  For an empty linkage
        (one observation) the root is that single leaf.
    """
    Z = np.asarray(Z, dtype=float)
    n = Z.shape[0] + 1
    if labels is None:
        labels = [str(i) for i in range(n)]
    if len(labels) != n:
        raise ValueError(f"Expected {n} labels for a linkage of {n} observations, got {len(labels)}")
    if Z.shape[0] > 0:
        is_valid_linkage(Z, throw=True, name="Z")

    nodes = [DendrogramNode(label=labels[i], index=i) for i in range(n)]
    for left, right, height, _ in Z:
        nodes.append(DendrogramNode(
            height=float(height),
            children=(nodes[int(left)], nodes[int(right)]),
        ))
    return nodes[-1]


def build_dendrogram(
    data: NDArray,
    method: str = "average",
    metric: str = "euclidean",
    labels: Sequence[Hashable] | None = None,
) -> DendrogramNode:
    """Build a dendrogram by agglomerative clustering of a data matrix.

    Args:
        data: 1D array of scalar observations or 2D (n_obs, n_features) array.
        method: Linkage method passed to ``scipy.cluster.hierarchy.linkage``.
        metric: Distance metric passed to ``linkage``.
        labels: Optional leaf labels.

    Returns:
        Root node.  A single observation gives a lone leaf.
    """
    data = np.asarray(data, dtype=float)
    if data.ndim == 1:
        data = data.reshape(-1, 1)
    if data.shape[0] < 2:
        return from_linkage(np.empty((0, 4)), labels)
    return from_linkage(linkage(data, method=method, metric=metric), labels)
