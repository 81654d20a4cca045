"""Internal implementation package for delaunay2d.

Modules here may change between releases; import public names from the
top-level ``delaunay2d`` package instead.
"""
