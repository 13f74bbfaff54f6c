# dendcut/run_cutree.py
"""End-to-end pipeline: load data, build dendrogram, cut at requested k and h, save."""

import argparse
import json
import numpy as np
from pathlib import Path
from tqdm import tqdm

from dendcut.cut import cutree_1h, cutree_k
from dendcut.heights import heights_per_k
from dendcut.options import CutreeOptions
from dendcut.tree import build_dendrogram


def load_data(data_path: str | Path) -> np.ndarray:
    """Load an observation matrix from .npy or comma separated text."""
    data_path = Path(data_path)
    if data_path.suffix == ".npy":
        return np.load(data_path)
    return np.loadtxt(data_path, delimiter=",", ndmin=2)


def run(
    data_path: str,
    ks: list[int] | None = None,
    hs: list[float] | None = None,
    method: str = "average",
    metric: str = "euclidean",
    labels: list[str] | None = None,
    order_by_data: bool = True,
    results_dir: str = "results",
) -> list[dict]:
    results_dir = Path(results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)
    ks = ks or []
    hs = hs or []

    # ---- Phase 1: Build ----
    print("=" * 60)
    print("Phase 1: Dendrogram")
    print("=" * 60)

    data = load_data(data_path)
    tree = build_dendrogram(data, method=method, metric=metric, labels=labels)
    print(f"{tree.nleaves} leaves, {method} linkage, height {tree.height:.4f}")

    # ---- Phase 2: Heights per k ----
    print("\n" + "=" * 60)
    print("Phase 2: Cut heights per cluster count")
    print("=" * 60)

    options = CutreeOptions(show_progress=True)
    table = heights_per_k(tree, options)
    with open(results_dir / "heights_per_k.json", "w") as f:
        json.dump({str(k): h for k, h in table.items()}, f, indent=2)
    print(f"{len(table)} of {tree.nleaves} cluster counts reachable")

    # ---- Phase 3: Cut ----
    print("\n" + "=" * 60)
    print("Phase 3: Cutting")
    print("=" * 60)

    requests = [("k", k) for k in ks] + [("h", h) for h in hs]
    cuts = []
    for kind, value in tqdm(requests, desc="Cutting"):
        if kind == "k":
            assignment = cutree_k(tree, value, height_table=table,
                                  order_by_data=order_by_data, options=options)
            height = table.get(value)
        else:
            assignment = cutree_1h(tree, value, order_by_data=order_by_data)
            height = value

        n_clusters = len(set(assignment.values())) if assignment is not None else None
        cuts.append({
            kind: value,
            "height": height,
            "n_clusters": n_clusters,
            "assignment": assignment,
        })
        if assignment is None:
            print(f"  {kind}={value}: no cut")
        else:
            print(f"  {kind}={value}: {n_clusters} clusters at height {height:.4f}")

    with open(results_dir / "cuts.json", "w") as f:
        json.dump(cuts, f, indent=2, default=str)

    print("\n" + "=" * 60)
    print(f"Done! Results in {results_dir}/")
    print("=" * 60)
    return cuts


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("data_path", help="Observations as .npy or comma separated text")
    parser.add_argument("--k", type=int, action="append", default=[], help="Number of clusters (repeatable)")
    parser.add_argument("--h", type=float, action="append", default=[], help="Cut height (repeatable)")
    parser.add_argument("--method", default="average")
    parser.add_argument("--metric", default="euclidean")
    parser.add_argument("--labels", type=Path, help="Text file with one leaf label per line")
    parser.add_argument("--dendrogram-order", action="store_true",
                        help="Order output by dendrogram leaves instead of data order")
    parser.add_argument("--results-dir", default="results")
    args = parser.parse_args(argv)

    labels = args.labels.read_text().splitlines() if args.labels else None
    run(
        args.data_path,
        ks=args.k,
        hs=args.h,
        method=args.method,
        metric=args.metric,
        labels=labels,
        order_by_data=not args.dendrogram_order,
        results_dir=args.results_dir,
    )


if __name__ == "__main__":
    main()
