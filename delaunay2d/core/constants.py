"""Central numerical tolerances for the triangulator.

Tiny numeric thresholds used across the package live here so they can be
tuned consistently and referenced without scattering literals.
"""
from __future__ import annotations

# Circumcircle arithmetic
EPS_COINCIDENT: float = 1e-9      # horizontal-edge / in-circle tolerance
EPS_PARALLEL: float = 1e-12       # minimum slope difference between bisectors

# Output checks
EPS_AREA: float = 1e-12           # minimum positive (absolute) triangle area
EPS_DELAUNAY: float = 1e-9        # relative slack for the empty-circle check

# Super-triangle defaults
SUPER_TRIANGLE_SCALE: float = 2.0   # half-extent as a multiple of the bbox size
SINGLE_POINT_SCALE: float = 0.125   # half-extent as a multiple of max(|x|, |y|)

__all__ = [
    'EPS_COINCIDENT',
    'EPS_PARALLEL',
    'EPS_AREA',
    'EPS_DELAUNAY',
    'SUPER_TRIANGLE_SCALE',
    'SINGLE_POINT_SCALE',
]
