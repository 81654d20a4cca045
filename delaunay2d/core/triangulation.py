"""Incremental planar Delaunay triangulation.

Points are inserted one at a time in ascending x into a mesh seeded with an
enclosing super-triangle. Each insertion removes the triangles whose
circumcircle contains the new point and reconnects the boundary of the
resulting cavity to it. Because the sweep only moves right, a triangle whose
circumcircle lies entirely left of the current point can never be hit again;
such triangles are retired from testing but kept for the final output.

The caller's points are never modified: the sorted copy that the returned
triangle indices refer to is returned alongside them.
"""
from __future__ import annotations

import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import DelaunayConfig
from .conformity import check_mesh_conformity
from .diagnostics import delaunay_violations, hull_vertex_count
from .errors import CoincidentPointsError, EmptyInputError
from .geometry import bounding_box, in_circumcircle, triangles_signed_areas
from .logging_utils import get_logger
from .stats import InsertionStats

__all__ = [
    'ActiveTriangle',
    'DelaunayResult',
    'super_triangle',
    'cancel_edges',
    'finalize_triangles',
    'delaunay_2d',
    'triangulate',
]

logger = get_logger('delaunay2d.triangulation')

Edge = Tuple[int, int]
_TAGGED: Edge = (-1, -1)


@dataclass
class ActiveTriangle:
    """Triangle in the working set: vertex indices plus its done flag."""
    v: Tuple[int, int, int]
    done: bool = False

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        a, b, c = self.v
        return (a, b), (b, c), (c, a)


@dataclass
class DelaunayResult:
    """Output of :func:`delaunay_2d`.

    Attributes
    ----------
    points : (N, 2) float64 array
        Input points sorted by ascending x. ``triangles`` index into this.
    triangles : (M, 3) int32 array
        Triangle vertex indices, clockwise.
    order : (N,) int64 array
        Permutation such that ``points == input[order]``.
    stats : InsertionStats
        Counters gathered during insertion.
    """
    points: np.ndarray
    triangles: np.ndarray
    order: np.ndarray
    stats: InsertionStats = field(default_factory=InsertionStats)

    def original_triangles(self) -> np.ndarray:
        """Triangles re-expressed as indices into the caller's original sequence."""
        if self.triangles.size == 0:
            return np.empty((0, 3), dtype=np.int32)
        return self.order[self.triangles].astype(np.int32)

    def __len__(self) -> int:
        return int(self.triangles.shape[0])


def _as_points(points) -> np.ndarray:
    pts = np.array(points, dtype=np.float64)
    if pts.size == 0:
        raise EmptyInputError()
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"points must have shape (N, 2), got {pts.shape}")
    if not np.all(np.isfinite(pts)):
        raise ValueError("points contain non-finite coordinates")
    return pts


def super_triangle(points, config: Optional[DelaunayConfig] = None) -> np.ndarray:
    """Return a (3, 2) array of vertices enclosing every point.

    A single point (or a set of coincident points) gets a triangle centred on
    it with half-extent ``max(|x|, |y|) * single_point_scale``, falling back to
    1.0 at the origin. Otherwise the triangle is centred on the bounding box
    with half-extent ``super_triangle_scale * max(width, height)``.
    """
    cfg = config or DelaunayConfig()
    pts = np.asarray(points, dtype=np.float64)
    if pts.size == 0:
        raise EmptyInputError()
    pts = pts.reshape(-1, 2)

    minx, miny, maxx, maxy = bounding_box(pts)
    size = max(maxx - minx, maxy - miny)
    if size > 0.0:
        cx = (minx + maxx) / 2.0
        cy = (miny + maxy) / 2.0
        k = size * cfg.super_triangle_scale
    else:
        cx, cy = minx, miny
        k = max(abs(cx), abs(cy)) * cfg.single_point_scale
        if k == 0.0:
            k = 1.0

    return np.array([
        [cx - k, cy - k],
        [cx, cy + k],
        [cx + k, cy - k],
    ], dtype=np.float64)


def _canonical(e: Edge) -> Edge:
    return (e[0], e[1]) if e[0] < e[1] else (e[1], e[0])


def _cancel_edges_hash(edges: Sequence[Edge]) -> List[Edge]:
    counts = defaultdict(int)
    for e in edges:
        counts[_canonical(e)] += 1
    return [e for e in edges if counts[_canonical(e)] == 1]


def _cancel_edges_pairwise(edges: Sequence[Edge]) -> List[Edge]:
    es = list(edges)
    for j in range(len(es) - 1):
        for k in range(j + 1, len(es)):
            if es[j][0] == es[k][1] and es[j][1] == es[k][0]:
                es[j] = _TAGGED
                es[k] = _TAGGED
            # same direction twice only happens with inconsistent winding
            if es[j][0] == es[k][0] and es[j][1] == es[k][1]:
                es[j] = _TAGGED
                es[k] = _TAGGED
    return [e for e in es if e[0] >= 0 and e[1] >= 0]


def cancel_edges(edges: Iterable[Edge], method: str = 'hash') -> List[Edge]:
    """Drop edges shared by two removed triangles, keeping the cavity boundary.

    An edge and its reverse (or an exact duplicate) cancel each other. The
    surviving edges keep their direction and buffer order.
    """
    edges = [(int(a), int(b)) for a, b in edges]
    if method == 'hash':
        return _cancel_edges_hash(edges)
    if method == 'pairwise':
        return _cancel_edges_pairwise(edges)
    raise ValueError(f"Unknown edge cancellation method: {method}")


def finalize_triangles(triangles: Iterable[Sequence[int]], n: int) -> List[Tuple[int, int, int]]:
    """Keep only triangles whose three vertices are real input points (index < n)."""
    out = []
    for t in triangles:
        a, b, c = int(t[0]), int(t[1]), int(t[2])
        if a < n and b < n and c < n:
            out.append((a, b, c))
    return out


def _insert_point(i: int, coords, active: List[ActiveTriangle], closed: List[ActiveTriangle],
                  cfg: DelaunayConfig, stats: InsertionStats) -> List[ActiveTriangle]:
    """Insert point i and return the new active set."""
    p = coords[i]
    edges: List[Edge] = []
    survivors: List[ActiveTriangle] = []
    removed = 0
    for tri in active:
        a, b, c = tri.v
        stats.circle_tests += 1
        try:
            inside, done = in_circumcircle(coords[a], coords[b], coords[c], p, cfg.eps)
        except CoincidentPointsError as exc:
            # cannot be tested, treat as closed
            stats.degenerate_tests += 1
            logger.debug("Closing degenerate triangle %s at point %d: %s", tri.v, i, exc)
            tri.done = True
            closed.append(tri)
            continue
        if inside:
            edges.extend(tri.edges())
            removed += 1
        elif done and cfg.use_done_flags:
            tri.done = True
            stats.triangles_retired += 1
            closed.append(tri)
        else:
            survivors.append(tri)

    kept = cancel_edges(edges, cfg.edge_cancellation)
    survivors.extend(ActiveTriangle((e0, e1, i)) for e0, e1 in kept)
    stats.record_cavity(removed, len(edges), len(kept))
    return survivors


def delaunay_2d(points, *, config: Optional[DelaunayConfig] = None) -> DelaunayResult:
    """Delaunay triangulation of a planar point set.

    Parameters
    ----------
    points : array-like of shape (N, 2)
        Input points. Not modified.
    config : DelaunayConfig, optional
        Tolerances and tuning; defaults to ``DelaunayConfig()``.

    Returns
    -------
    DelaunayResult
        Sorted points, clockwise triangles indexing them, the sort permutation
        and insertion statistics.

    Raises
    ------
    EmptyInputError
        If ``points`` is empty.
    ValueError
        If ``points`` is not an (N, 2) array of finite numbers or the config is invalid.
    """
    cfg = config or DelaunayConfig()
    cfg.validate_fields()
    src = _as_points(points)
    n = int(src.shape[0])
    stats = InsertionStats()
    t0 = time.perf_counter()

    order = np.argsort(src[:, 0], kind='stable')
    pts = src[order]
    st = super_triangle(pts, cfg)
    # python floats for the per-triangle loop
    coords = np.vstack((pts, st)).tolist()

    active: List[ActiveTriangle] = [ActiveTriangle((n, n + 1, n + 2))]
    closed: List[ActiveTriangle] = []
    stats.peak_active = 1
    for i in range(n):
        active = _insert_point(i, coords, active, closed, cfg, stats)
        stats.points_inserted += 1
        if len(active) > stats.peak_active:
            stats.peak_active = len(active)

    candidates = [t.v for t in closed] + [t.v for t in active]
    final = finalize_triangles(candidates, n)
    stats.super_linked_dropped = len(candidates) - len(final)
    tris = np.array(final, dtype=np.int32).reshape(-1, 3)
    if n >= 3 and not final and hull_vertex_count(pts) >= 3:
        logger.warning(
            "No triangles from %d non-colinear points; the in-circle tolerance eps=%g is "
            "likely too coarse for their extent, rescale the points or lower eps", n, cfg.eps)

    if cfg.min_triangle_area is not None and tris.size:
        keep = np.abs(triangles_signed_areas(pts, tris)) >= cfg.min_triangle_area
        stats.small_area_dropped = int(np.count_nonzero(~keep))
        tris = np.ascontiguousarray(tris[keep])

    stats.time_total = time.perf_counter() - t0
    logger.debug(
        "Triangulated %d points into %d triangles (tests=%d degenerate=%d retired=%d max_cavity=%d) in %.3f ms",
        n, tris.shape[0], stats.circle_tests, stats.degenerate_tests, stats.triangles_retired,
        stats.max_cavity_triangles, stats.time_total * 1000.0)

    result = DelaunayResult(points=pts, triangles=tris, order=order, stats=stats)
    if cfg.validate:
        _log_validation(result)
    return result


def _log_validation(result: DelaunayResult) -> None:
    if result.triangles.size == 0:
        return
    ok, msgs = check_mesh_conformity(result.points, result.triangles)
    for m in msgs:
        logger.warning("Conformity: %s", m)
    bad = delaunay_violations(result.points, result.triangles)
    if bad:
        logger.warning("Empty-circle property violated by %d (triangle, point) pairs, first: %s",
                       len(bad), bad[0])
    elif ok:
        logger.debug("Validation passed for %d triangles", result.triangles.shape[0])


def triangulate(points, *, config: Optional[DelaunayConfig] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(sorted_points, triangles)`` for a planar point set.

    ``sorted_points`` is an owned copy of the input sorted by ascending x and
    ``triangles`` is an (M, 3) int32 array of indices into it.
    """
    result = delaunay_2d(points, config=config)
    return result.points, result.triangles
