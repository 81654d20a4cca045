"""Planar geometry primitives used by the triangulator.

Scalar helpers take any 2-element point-like; the batch helpers follow the
canonical array layout used across the package:
    points:    (N, 2) float64 array
    triangles: (M, 3) int array
"""
from __future__ import annotations
import numpy as np
from typing import Tuple

from .constants import EPS_COINCIDENT, EPS_PARALLEL
from .errors import CoincidentPointsError

__all__ = [
	'orient','triangle_area','triangles_signed_areas','bounding_box',
	'circumcenter','in_circumcircle','circumcircles'
]

def orient(a, b, c):
	"""2D orientation (signed area * 2) for points a,b,c.

	Returns a positive value when (a,b,c) are counter-clockwise, negative when clockwise,
	and zero when colinear.
	"""
	return (b[0]-a[0])*(c[1]-a[1]) - (b[1]-a[1])*(c[0]-a[0])

def triangle_area(p0, p1, p2):
	return 0.5 * orient(p0, p1, p2)

def triangles_signed_areas(points, tris):
	"""Vectorized signed area for a batch of triangles.

	points: (N,2) float array
	tris:   (M,3) int array
	Returns: (M,) float64 array of signed areas (negative for clockwise).
	"""
	pts = np.asarray(points, dtype=np.float64)
	T = np.asarray(tris, dtype=np.int64)
	if T.size == 0:
		return np.empty((0,), dtype=float)
	p0 = pts[T[:, 0]]; p1 = pts[T[:, 1]]; p2 = pts[T[:, 2]]
	d1 = p1 - p0; d2 = p2 - p0
	return 0.5 * (d1[:, 0]*d2[:, 1] - d1[:, 1]*d2[:, 0])

def bounding_box(points) -> Tuple[float, float, float, float]:
	"""Return (minx, miny, maxx, maxy) of a non-empty (N,2) array."""
	pts = np.asarray(points, dtype=np.float64)
	lo = pts.min(axis=0); hi = pts.max(axis=0)
	return float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1])

def circumcenter(a, b, c, eps: float = EPS_COINCIDENT) -> Tuple[float, float]:
	"""Circumcenter of triangle (a,b,c) from the intersection of two perpendicular bisectors.

	The bisector of a horizontal edge is vertical and has no finite slope, so
	the pair of bisectors is chosen from the non-horizontal edges.

	Raises CoincidentPointsError when edges a-b and b-c are both horizontal, or
	when the chosen bisectors are parallel (colinear vertices).
	"""
	x1, y1 = float(a[0]), float(a[1])
	x2, y2 = float(b[0]), float(b[1])
	x3, y3 = float(c[0]), float(c[1])

	fabsy1y2 = abs(y1 - y2)
	fabsy2y3 = abs(y2 - y3)

	if fabsy1y2 < eps and fabsy2y3 < eps:
		raise CoincidentPointsError()

	if fabsy1y2 < eps:
		m2 = -(x3 - x2) / (y3 - y2)
		mx2 = (x2 + x3) / 2.0
		my2 = (y2 + y3) / 2.0
		xc = (x2 + x1) / 2.0
		yc = m2*(xc - mx2) + my2
	elif fabsy2y3 < eps:
		m1 = -(x2 - x1) / (y2 - y1)
		mx1 = (x1 + x2) / 2.0
		my1 = (y1 + y2) / 2.0
		xc = (x3 + x2) / 2.0
		yc = m1*(xc - mx1) + my1
	else:
		m1 = -(x2 - x1) / (y2 - y1)
		m2 = -(x3 - x2) / (y3 - y2)
		if abs(m1 - m2) < EPS_PARALLEL:
			raise CoincidentPointsError("colinear points")
		mx1 = (x1 + x2) / 2.0
		mx2 = (x2 + x3) / 2.0
		my1 = (y1 + y2) / 2.0
		my2 = (y2 + y3) / 2.0
		xc = (m1*mx1 - m2*mx2 + my2 - my1) / (m1 - m2)
		# bisector of the edge with the larger y-extent
		if fabsy1y2 > fabsy2y3:
			yc = m1*(xc - mx1) + my1
		else:
			yc = m2*(xc - mx2) + my2
	return xc, yc

def in_circumcircle(a, b, c, p, eps: float = EPS_COINCIDENT) -> Tuple[bool, bool]:
	"""Test p against the circumcircle of (a,b,c).

	Returns (inside, done):
	  inside -- squared distance from p to the centre is within eps of r^2 or less.
	  done   -- p lies right of the circle by more than its radius, so no point
	            with a larger x can fall inside it either.

	CoincidentPointsError from circumcenter() propagates to the caller.
	"""
	xc, yc = circumcenter(a, b, c, eps)
	dx = float(a[0]) - xc
	dy = float(a[1]) - yc
	r2 = dx*dx + dy*dy

	dx = float(p[0]) - xc
	dy = float(p[1]) - yc
	d2 = dx*dx + dy*dy

	inside = d2 - r2 <= eps
	done = dx > 0 and dx*dx > r2
	return inside, done

def circumcircles(points, tris):
	"""Vectorized circumcircles for a batch of triangles.

	Returns (centers (M,2), radii_sq (M,)). Colinear triangles yield NaN rows.
	"""
	pts = np.asarray(points, dtype=np.float64)
	T = np.asarray(tris, dtype=np.int64)
	if T.size == 0:
		return np.empty((0, 2), dtype=float), np.empty((0,), dtype=float)
	a = pts[T[:, 0]]; b = pts[T[:, 1]]; c = pts[T[:, 2]]
	# translate to a for conditioning
	bx = b[:, 0] - a[:, 0]; by = b[:, 1] - a[:, 1]
	cx = c[:, 0] - a[:, 0]; cy = c[:, 1] - a[:, 1]
	d = 2.0 * (bx*cy - by*cx)
	b2 = bx*bx + by*by; c2 = cx*cx + cy*cy
	with np.errstate(divide='ignore', invalid='ignore'):
		ux = np.where(d != 0.0, (cy*b2 - by*c2) / d, np.nan)
		uy = np.where(d != 0.0, (bx*c2 - cx*b2) / d, np.nan)
	centers = np.column_stack((ux + a[:, 0], uy + a[:, 1]))
	return centers, ux*ux + uy*uy
