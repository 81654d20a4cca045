"""Smoke test to ensure top-level package import works without triggering
circular import errors. This guards against regressions in the flat API
layer (`delaunay2d/__init__.py`).
"""

def test_import_delaunay2d_smoke():
    import delaunay2d  # noqa: F401
    assert callable(delaunay2d.triangulate)
    assert callable(delaunay2d.delaunay_2d)
    assert issubclass(delaunay2d.EmptyInputError, ValueError)
    assert issubclass(delaunay2d.CoincidentPointsError, delaunay2d.DelaunayError)
    for name in delaunay2d.__all__:
        assert hasattr(delaunay2d, name), name
