"""Conformity and structural checks for triangle index arrays."""
from __future__ import annotations
import numpy as np
from collections import defaultdict
from .geometry import triangles_signed_areas
from .constants import EPS_AREA
from .logging_utils import get_logger

__all__ = [
	'build_edge_to_tri_map','build_directed_edge_map','boundary_edges','interior_edges',
	'check_mesh_conformity'
]

def build_edge_to_tri_map(triangles):
	"""Map each undirected edge (min, max) to the set of triangle indices using it."""
	edge_map = {}
	for t_idx, tri in enumerate(np.asarray(triangles, dtype=np.int64).reshape(-1, 3)):
		for i in range(3):
			a = int(tri[i]); b = int(tri[(i+1)%3])
			key = (a, b) if a < b else (b, a)
			edge_map.setdefault(key, set()).add(t_idx)
	return edge_map

def build_directed_edge_map(triangles):
	"""Map each directed edge (a, b) to the list of triangle indices traversing it in that order."""
	edge_map = defaultdict(list)
	for t_idx, tri in enumerate(np.asarray(triangles, dtype=np.int64).reshape(-1, 3)):
		for i in range(3):
			edge_map[(int(tri[i]), int(tri[(i+1)%3]))].append(t_idx)
	return dict(edge_map)

def boundary_edges(triangles):
	"""Directed edges that belong to exactly one triangle, in that triangle's orientation."""
	directed = build_directed_edge_map(triangles)
	return sorted(e for e, lst in directed.items()
				  if len(lst) == 1 and (e[1], e[0]) not in directed)

def interior_edges(triangles):
	"""Undirected edges shared by exactly two triangles."""
	return sorted(e for e, s in build_edge_to_tri_map(triangles).items() if len(s) == 2)

def check_mesh_conformity(points, triangles, verbose=False, reject_degenerate=True, require_clockwise=False):
	"""Structural checks on a triangulation.

	Reports out-of-range or repeated vertex indices, duplicate triangles,
	non-manifold edges, shared edges traversed in the same direction by both
	triangles, near-zero areas (reject_degenerate) and counter-clockwise
	triangles (require_clockwise). Returns (ok, messages).
	"""
	tris = np.ascontiguousarray(np.asarray(triangles, dtype=np.int64)).reshape(-1, 3)
	pts = np.ascontiguousarray(np.asarray(points, dtype=np.float64))
	msgs = []
	ok = True
	if tris.size == 0:
		return False, ["No triangles."]
	npts = len(pts)
	if tris.max() >= npts or tris.min() < 0:
		msgs.append("Triangle indices out of range.")
		return False, msgs
	repeated = (tris[:, 0] == tris[:, 1]) | (tris[:, 1] == tris[:, 2]) | (tris[:, 2] == tris[:, 0])
	if np.any(repeated):
		for ti in np.nonzero(repeated)[0][:10]:
			msgs.append(f"Triangle {int(ti)} repeats a vertex: {tuple(int(v) for v in tris[ti])}.")
		ok = False
	sorted_tris = np.sort(tris, axis=1)
	_, tri_counts = np.unique(sorted_tris, axis=0, return_counts=True)
	if np.any(tri_counts > 1):
		msgs.append("Duplicate triangles detected.")
		ok = False
	areas = triangles_signed_areas(pts, tris)
	if reject_degenerate:
		zero_mask = np.abs(areas) < EPS_AREA
		for ti in np.nonzero(zero_mask)[0][:50]:
			msgs.append(f"Triangle {int(ti)} has near-zero area ({abs(areas[ti]):.3e}).")
		if np.any(zero_mask):
			ok = False
	if require_clockwise:
		ccw_mask = areas >= EPS_AREA
		for ti in np.nonzero(ccw_mask)[0][:50]:
			msgs.append(f"Triangle {int(ti)} is counter-clockwise (signed area {areas[ti]:.3e}).")
		if np.any(ccw_mask):
			ok = False
	for e, s in build_edge_to_tri_map(tris).items():
		if len(s) > 2:
			msgs.append(f"Non-manifold edge {e} shared by {len(s)} triangles.")
			ok = False
	for e, lst in build_directed_edge_map(tris).items():
		if len(lst) > 1:
			msgs.append(f"Edge {e} traversed in the same direction by triangles {lst}.")
			ok = False
	if verbose:
		logger = get_logger('delaunay2d.conformity')
		for m in msgs:
			logger.info("Conformity: %s", m)
	return ok, msgs
