"""Public package API for the delaunay2d planar triangulator.

This facade provides a stable, flat import surface on top of the internal
implementation package ``delaunay2d.core``.

Example
-------
    from delaunay2d import triangulate

    sorted_points, triangles = triangulate([(0, 0), (4, 0), (0, 4)])

The deeper modules (``delaunay2d.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:  # runtime version export
    from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound
    __version__ = _pkg_version("delaunay2d")
except _NotFound:  # pragma: no cover - source checkout without install
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

_const = _imp('delaunay2d.core.constants')
_errors = _imp('delaunay2d.core.errors')
_config = _imp('delaunay2d.core.config')
_geom = _imp('delaunay2d.core.geometry')
_conf = _imp('delaunay2d.core.conformity')
_diag = _imp('delaunay2d.core.diagnostics')
_stats = _imp('delaunay2d.core.stats')
_tri = _imp('delaunay2d.core.triangulation')
_log = _imp('delaunay2d.core.logging_utils')

# Triangulation entry points
triangulate = _tri.triangulate
delaunay_2d = _tri.delaunay_2d
super_triangle = _tri.super_triangle
cancel_edges = _tri.cancel_edges
DelaunayResult = _tri.DelaunayResult
DelaunayConfig = _config.DelaunayConfig
InsertionStats = _stats.InsertionStats

# Errors
DelaunayError = _errors.DelaunayError
EmptyInputError = _errors.EmptyInputError
CoincidentPointsError = _errors.CoincidentPointsError

# Geometry predicates
circumcenter = _geom.circumcenter
in_circumcircle = _geom.in_circumcircle

# Checks
check_mesh_conformity = _conf.check_mesh_conformity
delaunay_violations = _diag.delaunay_violations
triangulation_report = _diag.triangulation_report

# Logging
configure_logging = _log.configure_logging
get_logger = _log.get_logger

# Namespace submodules for exploratory users
constants = _const
geometry = _geom
conformity = _conf
diagnostics = _diag
stats = _stats
triangulation = _tri

__all__ = [
    '__version__',
    # triangulation
    'triangulate', 'delaunay_2d', 'super_triangle', 'cancel_edges',
    'DelaunayResult', 'DelaunayConfig', 'InsertionStats',
    # errors
    'DelaunayError', 'EmptyInputError', 'CoincidentPointsError',
    # predicates and checks
    'circumcenter', 'in_circumcircle', 'check_mesh_conformity',
    'delaunay_violations', 'triangulation_report',
    # logging
    'configure_logging', 'get_logger',
    # submodules / namespaces
    'constants', 'geometry', 'conformity', 'diagnostics', 'stats', 'triangulation',
]
