"""Cut dendrograms into clusters by height or by number of clusters."""

from dendcut.cut import cutree, cutree_1h, cutree_at_height, cutree_at_k, cutree_k
from dendcut.errors import (
    ConflictingArgumentsWarning,
    CutreeWarning,
    DegenerateOrderingWarning,
    MissingArgumentError,
    TruncatedInputWarning,
    UnreachableClusterCountWarning,
)
from dendcut.heights import (
    cluster_count_at_height,
    collect_heights,
    heights_per_cluster_count,
    heights_per_k,
    is_natural_number,
)
from dendcut.options import DEFAULT_OPTIONS, CutreeOptions
from dendcut.tree import (
    DendrogramNode,
    build_dendrogram,
    from_linkage,
    leaf_indices_of,
    leaves_of,
    split_at_height,
)
