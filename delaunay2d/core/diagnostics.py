"""Diagnostics for finished triangulations.

Functions operate on raw numpy arrays (sorted points and the triangle index
array returned by the triangulator) and use SciPy's spatial structures as an
independent reference.
"""
from __future__ import annotations

from typing import Any, Dict, List, Set, Tuple, FrozenSet

import numpy as np
from scipy.spatial import ConvexHull, Delaunay, QhullError, cKDTree

from .conformity import boundary_edges, check_mesh_conformity, interior_edges
from .constants import EPS_DELAUNAY
from .geometry import circumcircles
from .logging_utils import get_logger

logger = get_logger('delaunay2d.diagnostics')

__all__ = [
    'delaunay_violations',
    'hull_vertex_count',
    'expected_triangle_count',
    'reference_triangles',
    'triangle_sets_differ',
    'triangulation_report',
]


def delaunay_violations(points, triangles, rel_tol: float = EPS_DELAUNAY) -> List[Tuple[int, int, float]]:
    """Return (triangle, point, depth) for every point strictly inside a circumcircle.

    ``depth`` is ``r^2 - d^2``; a pair is reported only when it exceeds
    ``rel_tol * max(r^2, 1)``. Colinear triangles have no circumcircle and are
    skipped. Candidates are gathered with a KD-tree ball query so the check
    stays near-linear on large meshes.
    """
    pts = np.asarray(points, dtype=np.float64)
    tris = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    if tris.size == 0:
        return []
    centers, r2 = circumcircles(pts, tris)
    valid = np.isfinite(r2)
    idx = np.nonzero(valid)[0]
    if idx.size == 0:
        return []
    tree = cKDTree(pts)
    candidates = tree.query_ball_point(centers[idx], np.sqrt(r2[idx]))
    out = []
    for ti, cand in zip(idx, candidates):
        if not cand:
            continue
        own = set(int(v) for v in tris[ti])
        cand = np.asarray([c for c in cand if c not in own], dtype=np.int64)
        if cand.size == 0:
            continue
        d = pts[cand] - centers[ti]
        depth = r2[ti] - np.einsum('ij,ij->i', d, d)
        limit = rel_tol * max(float(r2[ti]), 1.0)
        for pi, dep in zip(cand[depth > limit], depth[depth > limit]):
            out.append((int(ti), int(pi), float(dep)))
    return out


def hull_vertex_count(points) -> int:
    """Number of convex hull vertices (Qhull extreme points).

    Fully colinear or coincident inputs have no 2D hull; the count of distinct
    extreme points along the line (at most 2) is returned instead.
    """
    pts = np.unique(np.asarray(points, dtype=np.float64).reshape(-1, 2), axis=0)
    if len(pts) < 3:
        return len(pts)
    try:
        return int(len(ConvexHull(pts).vertices))
    except QhullError:
        logger.debug("Qhull rejected %d points as flat; treating them as colinear", len(pts))
        return 2


def expected_triangle_count(points) -> int:
    """Triangle count of a full Delaunay triangulation: ``2n - h - 2``.

    Duplicate points are counted once. Returns 0 for colinear inputs.
    """
    pts = np.unique(np.asarray(points, dtype=np.float64).reshape(-1, 2), axis=0)
    n = len(pts)
    h = hull_vertex_count(pts)
    if n < 3 or h < 3:
        return 0
    return 2 * n - h - 2


def reference_triangles(points) -> np.ndarray:
    """Delaunay simplices from SciPy (Qhull) on the same points, for comparison."""
    pts = np.asarray(points, dtype=np.float64)
    return np.asarray(Delaunay(pts).simplices, dtype=np.int32)


def _as_vertex_sets(points, triangles) -> Set[FrozenSet[Tuple[float, float]]]:
    pts = np.asarray(points, dtype=np.float64)
    return {frozenset(tuple(pts[int(v)]) for v in tri) for tri in np.asarray(triangles).reshape(-1, 3)}


def triangle_sets_differ(points_a, tris_a, points_b, tris_b) -> bool:
    """Compare two triangulations by vertex coordinates, ignoring labels and winding."""
    return _as_vertex_sets(points_a, tris_a) != _as_vertex_sets(points_b, tris_b)


def triangulation_report(points, triangles) -> Dict[str, Any]:
    """Summary of a triangulation: counts, hull/edge structure and property checks."""
    pts = np.asarray(points, dtype=np.float64)
    tris = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    report: Dict[str, Any] = {
        'n_points': int(len(pts)),
        'n_triangles': int(len(tris)),
        'expected_triangles': expected_triangle_count(pts) if len(pts) else 0,
    }
    if tris.size == 0:
        report.update({'boundary_edges': 0, 'interior_edges': 0, 'conforming': False,
                       'conformity_messages': ["No triangles."], 'delaunay_violations': 0})
        return report
    ok, msgs = check_mesh_conformity(pts, tris)
    report.update({
        'boundary_edges': len(boundary_edges(tris)),
        'interior_edges': len(interior_edges(tris)),
        'conforming': ok,
        'conformity_messages': msgs,
        'delaunay_violations': len(delaunay_violations(pts, tris)),
    })
    return report
