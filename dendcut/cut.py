"""Cut a dendrogram into clusters, by height or by number of clusters.

Cluster ids follow the conventions of ``cutree`` on agglomerative clustering
output: the subtree met first in a left-to-right scan of the dendrogram gets
the highest id and the last one gets id 1, except when every leaf ends up
alone, in which case ids simply count up along the output.
"""

import warnings
from typing import Hashable

import numpy as np
from scipy.stats import rankdata

from dendcut.errors import (
    ConflictingArgumentsWarning,
    DegenerateOrderingWarning,
    MissingArgumentError,
    TruncatedInputWarning,
    UnreachableClusterCountWarning,
)
from dendcut.heights import heights_per_k, is_natural_number
from dendcut.options import DEFAULT_OPTIONS, CutreeOptions
from dendcut.tree import DendrogramNode, leaf_indices_of, leaves_of, split_at_height


def _scalar(value, name: str):
    """First element of value if it is a sequence, value itself otherwise."""
    if np.ndim(value) == 0:
        return value
    values = np.ravel(value)
    if values.size == 0:
        raise MissingArgumentError(f"{name} is empty")
    if values.size > 1:
        warnings.warn(
            f"{name} has length > 1 and only the first element will be used",
            TruncatedInputWarning,
            stacklevel=3,
        )
    return values[0].item()


def _data_order(order: list[int]) -> np.ndarray:
    """Permutation that puts dendrogram-ordered leaves back in data order."""
    order = np.asarray(order)
    if sorted(order.tolist()) != list(range(len(order))):
        warnings.warn(
            "Leaf indices are not a permutation of the data positions, so their ranks "
            "were used instead. The tree was probably trimmed or merged with another "
            f"tree. Leaf indices in dendrogram order: {order.tolist()}",
            DegenerateOrderingWarning,
            stacklevel=3,
        )
        order = rankdata(order, method="ordinal") - 1
    return np.argsort(order, kind="stable")


def cutree_1h(
    tree: DendrogramNode,
    h: float,
    order_by_data: bool = True,
    use_labels: bool = True,
) -> dict[Hashable, int]:
    """Cut a dendrogram at a single height.

    Args:
        tree: Dendrogram root.
        h: Cut height.  If a sequence is given only its first element is used.
        order_by_data: Return leaves in the order of the original data rather
            than the left-to-right order of the dendrogram.
        use_labels: Key the result by leaf label.  When False the leaf indices
            are used, which skips collecting labels and is faster on big trees.

    Returns:
        Dict from leaf key to cluster id in 1..number of clusters.
    """
    if h is None:
        raise MissingArgumentError("h is missing")
    h = float(_scalar(h, "h"))

    clusters = split_at_height(tree, h)
    n_clusters = len(clusters)
    collect = leaves_of if use_labels else leaf_indices_of
    members = [collect(cluster) for cluster in clusters]

    keys = [key for cluster_members in members for key in cluster_members]
    ids = np.repeat(np.arange(n_clusters, 0, -1), [len(m) for m in members])

    if order_by_data:
        perm = _data_order(tree.order())
        keys = [keys[i] for i in perm]
        ids = ids[perm]

    if n_clusters == len(keys):
        ids = np.arange(1, n_clusters + 1)

    return dict(zip(keys, ids.tolist()))


def _unreachable_reason(k, n_leaves: int) -> str:
    if k < 1 or k > n_leaves:
        return (f"No cut exists for creating {k} clusters. "
                f"The possible range for clusters is: [1-{n_leaves}]")
    if not (is_natural_number(k) and float(k).is_integer()):
        return f"k must be a natural number. The k you used ({k}) is not a natural number"
    return (f"You (probably) have some branches with equal heights so that there "
            f"exists no height (h) that can create {k} clusters")


def cutree_k(
    tree: DendrogramNode,
    k: int,
    height_table: dict[int, float] | None = None,
    use_labels: bool = True,
    order_by_data: bool = True,
    options: CutreeOptions | None = None,
) -> dict[Hashable, int] | None:
    """Cut a dendrogram into k clusters.

    Args:
        tree: Dendrogram root.
        k: Desired number of clusters.
        height_table: Output of ``heights_per_k`` for this tree.  Computing it
            is the slow part, so pass it in when cutting the same tree repeatedly.
        use_labels: See ``cutree_1h``.
        order_by_data: See ``cutree_1h``.
        options: Cutting options.

    Returns:
        Cluster assignment, or None (with an UnreachableClusterCountWarning)
        when no height produces k clusters.
    """
    if k is None:
        raise MissingArgumentError("k is missing")
    options = options or DEFAULT_OPTIONS
    k = _scalar(k, "k")
    if height_table is None:
        height_table = heights_per_k(tree, options)

    h = height_table.get(k)
    if h is None:
        if options.warn_on_ambiguous_k:
            warnings.warn(_unreachable_reason(k, tree.nleaves),
                          UnreachableClusterCountWarning, stacklevel=2)
        return None

    assignment = cutree_1h(tree, h, order_by_data=order_by_data, use_labels=use_labels)
    if options.report_height:
        print(f"The dendrogram was cut at height {round(h, 4)} in order to create {k} clusters.")
    return assignment


def cutree(
    tree: DendrogramNode,
    k: int | None = None,
    h: float | None = None,
    order_by_data: bool = True,
    use_labels: bool = True,
    height_table: dict[int, float] | None = None,
    options: CutreeOptions | None = None,
) -> dict[Hashable, int] | None:
    """Cut a dendrogram by number of clusters k or by height h.

    If both are given, h is used.  Returns None when k is unreachable.
    """
    if k is None and h is None:
        raise MissingArgumentError("Neither k nor h were specified")
    if k is not None and h is not None:
        warnings.warn(
            "Both k and h were specified - using h as default "
            "(consider using only h or k in order to avoid confusions)",
            ConflictingArgumentsWarning,
            stacklevel=2,
        )
        k = None

    if k is not None:
        return cutree_k(tree, k, height_table=height_table, use_labels=use_labels,
                        order_by_data=order_by_data, options=options)
    return cutree_1h(tree, h, order_by_data=order_by_data, use_labels=use_labels)


cutree_at_height = cutree_1h
cutree_at_k = cutree_k
