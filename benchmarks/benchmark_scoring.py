"""Benchmark XGBoostScorer on a synthetic ensemble."""

import io
import time
from typing import Any

import numpy as np

from xgb_scorer import XGBoostScorer


def random_tree(
    rng: np.random.Generator, n_features: int, max_depth: int
) -> dict[str, Any]:
    """Generate a complete tree in the dumped JSON shape."""
    next_id = 0

    def grow(depth: int) -> dict[str, Any]:
        nonlocal next_id
        node_id = next_id
        next_id += 1
        if depth == max_depth:
            return {"nodeid": node_id, "leaf": float(rng.normal(0, 0.1))}
        yes = grow(depth + 1)
        no = grow(depth + 1)
        return {
            "nodeid": node_id,
            "depth": depth,
            "split": f"f{rng.integers(n_features)}",
            "split_condition": float(rng.normal()),
            "yes": yes["nodeid"],
            "no": no["nodeid"],
            "missing": yes["nodeid"] if rng.random() < 0.5 else no["nodeid"],
            "children": [yes, no],
        }

    return grow(0)


def benchmark_scoring(
    n_samples: int, n_features: int, n_estimators: int, max_depth: int = 6
) -> dict[str, Any]:
    """Time vector and sparse-stream scoring."""
    print(f"\n{'=' * 60}")
    print(
        f"Scoring: {n_samples:,} samples, {n_features} features, "
        f"{n_estimators} trees of depth {max_depth}"
    )
    print("=" * 60)

    rng = np.random.default_rng(42)
    model = [random_tree(rng, n_features, max_depth) for _ in range(n_estimators)]
    feature_index = {f"f{i}": i for i in range(n_features)}
    scorer = XGBoostScorer(model, feature_index)

    X = rng.normal(size=(n_samples, n_features))
    # Drop ~20% of values so missing-branch routing is exercised.
    present = rng.random((n_samples, n_features)) > 0.2
    instances = [
        {f"f{j}": float(X[i, j]) for j in np.flatnonzero(present[i])}
        for i in range(n_samples)
    ]
    lines = "\n".join(
        "0 " + " ".join(f"{j}:{float(X[i, j])!r}" for j in np.flatnonzero(present[i]))
        for i in range(n_samples)
    )

    results = {}

    start = time.perf_counter()
    vector_scores = scorer.score_many(instances)
    results["vector_time"] = time.perf_counter() - start
    print(f"Vectors:     {results['vector_time']:.3f}s")

    start = time.perf_counter()
    stream_scores = scorer.score_many(io.StringIO(lines))
    results["stream_time"] = time.perf_counter() - start
    print(f"Stream:      {results['stream_time']:.3f}s")

    assert np.array_equal(vector_scores, stream_scores)
    results["per_instance_us"] = results["vector_time"] / n_samples * 1e6
    print(f"Per instance: {results['per_instance_us']:.1f}us")

    return results


if __name__ == "__main__":
    benchmark_scoring(n_samples=1_000, n_features=20, n_estimators=50)
    benchmark_scoring(n_samples=10_000, n_features=50, n_estimators=100)
    benchmark_scoring(n_samples=10_000, n_features=100, n_estimators=300, max_depth=8)
