"""Benchmark the incremental triangulator against SciPy's Qhull Delaunay.

Measures wall time for both, the effect of the done-flag pruning on the number
of circumcircle tests, and checks that the triangle sets agree.

Usage:
    python benchmarks/benchmark_delaunay.py --sizes 100 1000 5000
"""
import argparse
import time

import numpy as np
from scipy.spatial import Delaunay

from delaunay2d import DelaunayConfig, delaunay_2d
from delaunay2d.core.diagnostics import triangle_sets_differ
from delaunay2d.core.stats import format_stats_table


def benchmark_size(n_points, seed=42, repeats=3):
    print(f"\n{'='*70}")
    print(f"DELAUNAY BENCHMARK: {n_points} points, {repeats} repeats")
    print(f"{'='*70}")

    rng = np.random.default_rng(seed)
    points = rng.random((n_points, 2)) * 10.0
    wide = DelaunayConfig(super_triangle_scale=1000.0)

    times_ours = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        res = delaunay_2d(points, config=wide)
        times_ours.append((time.perf_counter() - t0) * 1000)

    times_ref = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        ref = Delaunay(res.points)
        times_ref.append((time.perf_counter() - t0) * 1000)

    print(f"\n  delaunay2d:     {np.median(times_ours):10.3f} ms (median)")
    print(f"  scipy (Qhull):  {np.median(times_ref):10.3f} ms (median)")
    print(f"  triangles:      {len(res)} vs {len(ref.simplices)}")
    same = not triangle_sets_differ(res.points, res.triangles, res.points, ref.simplices)
    print(f"  identical sets: {same}")

    unpruned = delaunay_2d(points, config=wide.with_overrides(use_done_flags=False))
    print("\nPruning effect:")
    print(format_stats_table({'done-flags': res.stats, 'no-pruning': unpruned.stats}))
    return {
        'n_points': n_points,
        'ours_ms': float(np.median(times_ours)),
        'scipy_ms': float(np.median(times_ref)),
        'identical': same,
    }


def main():
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument('--sizes', type=int, nargs='+', default=[100, 1000, 3000])
    ap.add_argument('--seed', type=int, default=42)
    ap.add_argument('--repeats', type=int, default=3)
    args = ap.parse_args()

    results = [benchmark_size(n, seed=args.seed, repeats=args.repeats) for n in args.sizes]

    print(f"\n{'='*70}")
    print("SUMMARY")
    print(f"{'='*70}")
    for r in results:
        print(f"  n={r['n_points']:>7}: ours {r['ours_ms']:10.3f} ms, scipy {r['scipy_ms']:8.3f} ms, "
              f"identical={r['identical']}")


if __name__ == "__main__":
    main()
