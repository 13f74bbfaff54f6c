"""Merge heights of a dendrogram and the cut height that yields each cluster count."""

import numpy as np
from numpy.typing import NDArray
from tqdm import tqdm

from dendcut.options import DEFAULT_OPTIONS, CutreeOptions
from dendcut.tree import DendrogramNode, split_at_height


def is_natural_number(x, tol: float = np.finfo(float).eps ** 0.5) -> NDArray:
    """Elementwise test for positive whole numbers, up to floating point tolerance."""
    x = np.asarray(x, dtype=float)
    return (x > tol) & (np.abs(x - np.round(x)) < tol)


def collect_heights(tree: DendrogramNode) -> NDArray:
    """All non-zero node heights of the tree, sorted ascending.

    Leaves sit at height 0 and are dropped, as are merges made at exactly 0.
    A lone leaf gives an empty array.
    """
    heights = np.array([node.height for node in tree.walk() if not node.is_leaf], dtype=float)
    heights = heights[heights != 0]
    return np.sort(heights)


def cluster_count_at_height(tree: DendrogramNode, h: float) -> int:
    """Number of clusters produced by cutting the tree at height h."""
    return len(split_at_height(tree, h))


def heights_per_k(
    tree: DendrogramNode,
    options: CutreeOptions | None = None,
) -> dict[int, float]:
    """Map every achievable cluster count to a height that produces it.

    Cut heights are placed half the smallest gap between distinct merge heights
    below each merge height, plus one above the top merge, so that no cut lands
    exactly on a merge.  Counting the clusters for each candidate takes one tree
    split per distinct height, which dominates the cost of cutting by k; pass
    the result back into ``cutree_k`` to avoid recomputing it.

    Args:
        tree: Dendrogram root.
        options: Cutting options; ``tie_break`` decides which height is kept
            when two candidates give the same count.

    Returns:
        Dict from cluster count to cut height, k=1 first.  Counts made
        unreachable by tied merge heights are absent.
    """
    options = options or DEFAULT_OPTIONS
    heights = np.unique(collect_heights(tree))[::-1]

    if len(heights) > 1:
        gap = np.min(-np.diff(heights)) / 2
    elif len(heights) == 1:
        gap = heights[0] / 2
    else:
        gap = 0.5
    top = heights[0] if len(heights) else 0.0
    candidates = [top + gap] + [h - gap for h in heights]

    table = {}
    for i, h in enumerate(tqdm(candidates, desc="Cutting at candidate heights",
                               disable=not options.show_progress)):
        # Above the top merge there is only ever one cluster.
        k = 1 if i == 0 else cluster_count_at_height(tree, h)
        # The entry for a single cluster always stays above the top merge.
        if k in table and (k == 1 or options.tie_break == "first"):
            continue
        table[k] = float(h)
    return table


heights_per_cluster_count = heights_per_k
