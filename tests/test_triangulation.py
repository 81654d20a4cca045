import logging

import numpy as np
import pytest

from delaunay2d import triangulate, delaunay_2d
from delaunay2d.core import triangulation as tri_mod
from delaunay2d.core.config import DelaunayConfig
from delaunay2d.core.conformity import build_directed_edge_map, check_mesh_conformity
from delaunay2d.core.diagnostics import (
    delaunay_violations, expected_triangle_count, hull_vertex_count, reference_triangles,
    triangle_sets_differ,
)
from delaunay2d.core.errors import CoincidentPointsError, EmptyInputError
from delaunay2d.core.geometry import triangles_signed_areas
from delaunay2d.core.stats import InsertionStats

# keeps the synthetic vertices far enough away that every hull triangle survives
WIDE = DelaunayConfig(super_triangle_scale=1000.0)


def assert_valid_indices(tris, n):
    tris = np.asarray(tris)
    assert tris.ndim == 2 and tris.shape[1] == 3
    if tris.size:
        assert tris.min() >= 0 and tris.max() < n
        assert np.all(tris[:, 0] != tris[:, 1])
        assert np.all(tris[:, 1] != tris[:, 2])
        assert np.all(tris[:, 2] != tris[:, 0])


class TestScenarios:

    def test_single_triangle(self):
        pts, tris = triangulate([(0, 0), (4, 0), (0, 4)])
        assert tris.shape == (1, 3)
        assert sorted(tris[0].tolist()) == [0, 1, 2]
        # clockwise winding
        assert triangles_signed_areas(pts, tris)[0] < 0

    def test_square_gives_two_triangles_on_one_diagonal(self, square_points):
        pts, tris = triangulate(square_points)
        assert tris.shape == (2, 3)
        shared = set(tris[0].tolist()) & set(tris[1].tolist())
        assert len(shared) == 2
        # the shared pair is a diagonal: opposite corners
        a, b = (pts[i] for i in shared)
        assert a[0] != b[0] and a[1] != b[1]
        assert delaunay_violations(pts, tris) == []
        ok, msgs = check_mesh_conformity(pts, tris, require_clockwise=True)
        assert ok, msgs

    def test_single_point_gives_no_triangles(self):
        pts, tris = triangulate([(5.0, 5.0)])
        assert tris.shape == (0, 3)
        assert pts.tolist() == [[5.0, 5.0]]

    def test_single_point_at_origin(self):
        _, tris = triangulate([(0.0, 0.0)])
        assert tris.shape == (0, 3)

    @pytest.mark.parametrize("points", [
        [(0, 0), (1, 0), (2, 0)],
        [(0, 0), (0, 1), (0, 2)],
        [(0, 0), (1, 1), (2, 2), (3, 3)],
    ])
    def test_colinear_points_do_not_crash(self, points):
        pts, tris = triangulate(points)
        assert_valid_indices(tris, len(points))

    def test_colinear_with_area_filter_drops_slivers(self):
        cfg = DelaunayConfig(min_triangle_area=1e-12)
        res = delaunay_2d([(0, 0), (1, 0), (2, 0)], config=cfg)
        if res.triangles.size:
            assert np.all(np.abs(triangles_signed_areas(res.points, res.triangles)) >= 1e-12)

    def test_duplicate_points_do_not_crash(self):
        points = [(1, 1), (1, 1), (2, 3), (0, 2)]
        pts, tris = triangulate(points)
        assert_valid_indices(tris, len(points))

    @pytest.mark.parametrize("empty", [[], np.empty((0, 2)), ()])
    def test_empty_input(self, empty):
        with pytest.raises(EmptyInputError):
            triangulate(empty)

    @pytest.mark.parametrize("bad", [[1.0, 2.0, 3.0], [(0, 0, 0), (1, 1, 1)], [(0, 0), (np.nan, 1)]])
    def test_malformed_input(self, bad):
        with pytest.raises(ValueError):
            triangulate(bad)


class TestRandomPoints:

    def test_full_triangulation_count_and_edges(self, random_points):
        pts, tris = triangulate(random_points, config=WIDE)
        n = len(pts)
        h = hull_vertex_count(pts)
        assert len(tris) == 2 * n - h - 2
        assert len(tris) == expected_triangle_count(pts)
        assert_valid_indices(tris, n)

        directed = build_directed_edge_map(tris)
        singles = [e for e, lst in directed.items() if (e[1], e[0]) not in directed]
        # every other edge is shared by exactly two triangles in opposite directions
        assert all(len(lst) == 1 for lst in directed.values())
        assert len(singles) == h

    def test_matches_scipy_reference(self, random_points):
        pts, tris = triangulate(random_points, config=WIDE)
        ref = reference_triangles(pts)
        assert not triangle_sets_differ(pts, tris, pts, ref)

    def test_delaunay_property_default_config(self, random_points):
        pts, tris = triangulate(random_points)
        assert len(tris) > 0
        assert len(tris) <= expected_triangle_count(pts)
        assert delaunay_violations(pts, tris) == []
        ok, msgs = check_mesh_conformity(pts, tris, require_clockwise=True)
        assert ok, msgs

    def test_default_super_triangle_gives_subset_of_full_triangulation(self, random_points):
        pts, tris = triangulate(random_points)
        _, full = triangulate(random_points, config=WIDE)
        part = {frozenset(t) for t in tris.tolist()}
        whole = {frozenset(t) for t in full.tolist()}
        assert part <= whole
        assert len(full) == expected_triangle_count(pts)

    def test_order_independence(self, random_points):
        rng = np.random.default_rng(11)
        shuffled = random_points[rng.permutation(len(random_points))]
        pts_a, tris_a = triangulate(random_points)
        pts_b, tris_b = triangulate(shuffled)
        assert np.array_equal(pts_a, pts_b)
        assert not triangle_sets_differ(pts_a, tris_a, pts_b, tris_b)

    def test_pairwise_and_hash_cancellation_agree(self, random_points):
        a = delaunay_2d(random_points, config=DelaunayConfig(edge_cancellation='hash'))
        b = delaunay_2d(random_points, config=DelaunayConfig(edge_cancellation='pairwise'))
        assert np.array_equal(a.triangles, b.triangles)

    def test_done_flags_only_prune(self, random_points):
        fast = delaunay_2d(random_points)
        slow = delaunay_2d(random_points, config=DelaunayConfig(use_done_flags=False))
        assert {tuple(t) for t in fast.triangles.tolist()} == {tuple(t) for t in slow.triangles.tolist()}
        assert fast.stats.triangles_retired > 0
        assert slow.stats.triangles_retired == 0
        assert fast.stats.circle_tests < slow.stats.circle_tests

    def test_stats_bookkeeping(self, random_points):
        res = delaunay_2d(random_points)
        s = res.stats
        n = len(random_points)
        assert s.points_inserted == n
        assert s.degenerate_tests == 0
        assert s.edges_buffered == 3 * s.triangles_removed
        # every cavity is a disc: k removed triangles leave k + 2 boundary edges
        assert s.triangles_created == s.triangles_removed + 2 * n
        assert 1 + s.triangles_created - s.triangles_removed == len(res) + s.super_linked_dropped
        assert s.max_cavity_triangles >= 1
        assert s.time_total >= 0.0


class TestInputHandling:

    def test_caller_points_not_mutated(self):
        points = [(3.0, 1.0), (0.0, 0.0), (2.0, 5.0), (1.0, 2.0)]
        before = list(points)
        arr = np.array(points)
        arr_before = arr.copy()
        triangulate(points)
        triangulate(arr)
        assert points == before
        assert np.array_equal(arr, arr_before)

    def test_returned_points_sorted_by_x(self, random_points):
        pts, _ = triangulate(random_points)
        assert np.all(np.diff(pts[:, 0]) >= 0)
        assert pts is not random_points

    def test_order_and_original_triangles(self, random_points):
        res = delaunay_2d(random_points)
        assert np.array_equal(res.points, random_points[res.order])
        orig = res.original_triangles()
        assert orig.shape == res.triangles.shape
        assert np.array_equal(random_points[orig], res.points[res.triangles])

    def test_original_triangles_empty(self):
        res = delaunay_2d([(1.0, 1.0)])
        assert res.original_triangles().shape == (0, 3)
        assert len(res) == 0

    def test_accepts_integer_coordinates(self):
        pts, tris = triangulate(np.array([[0, 0], [4, 0], [0, 4]], dtype=int))
        assert pts.dtype == np.float64
        assert tris.dtype == np.int32

    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError):
            triangulate([(0, 0), (1, 0), (0, 1)], config=DelaunayConfig(edge_cancellation='bogus'))


class TestValidationLogging:

    def test_validate_clean_result_logs_no_warning(self, square_points, caplog):
        with caplog.at_level(logging.DEBUG, logger='delaunay2d'):
            delaunay_2d(square_points, config=DelaunayConfig(validate=True))
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
        assert any('Validation passed' in r.getMessage() for r in caplog.records)

    def test_validate_reports_violations(self, square_points, caplog, monkeypatch):
        monkeypatch.setattr(tri_mod, 'delaunay_violations', lambda pts, tris: [(0, 3, 0.5)])
        with caplog.at_level(logging.WARNING, logger='delaunay2d'):
            delaunay_2d(square_points, config=DelaunayConfig(validate=True))
        assert any('Empty-circle' in r.getMessage() for r in caplog.records)

    def test_summary_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='delaunay2d'):
            delaunay_2d([(0, 0), (0, 1), (0, 2), (0, 3)])
        assert any('Triangulated 4 points' in r.getMessage() for r in caplog.records)

    def test_tiny_extent_warns_about_eps(self, random_points, caplog):
        with caplog.at_level(logging.WARNING, logger='delaunay2d'):
            _, tris = triangulate(random_points * 1e-6)
        assert tris.shape == (0, 3)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert any('No triangles from 100 non-colinear points' in r.getMessage() for r in warnings)

    def test_tiny_extent_with_lower_eps_triangulates(self, random_points, caplog):
        with caplog.at_level(logging.WARNING, logger='delaunay2d'):
            _, tris = triangulate(random_points * 1e-6, config=DelaunayConfig(eps=1e-24))
        assert len(tris) > 0
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    @pytest.mark.parametrize("points", [[(0, 0), (1, 0), (2, 0)], [(1, 1), (1, 1), (1, 1)], [(2, 3)]])
    def test_flat_input_without_triangles_does_not_warn(self, points, caplog):
        with caplog.at_level(logging.WARNING, logger='delaunay2d'):
            triangulate(points, config=DelaunayConfig(min_triangle_area=1e-12))
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


class TestDegenerateTriangles:

    def test_insert_point_closes_untestable_triangle(self, monkeypatch):
        def always_degenerate(a, b, c, p, eps):
            raise CoincidentPointsError("colinear points")

        monkeypatch.setattr(tri_mod, 'in_circumcircle', always_degenerate)
        coords = [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [2.0, 2.0]]
        tri = tri_mod.ActiveTriangle((0, 1, 2))
        closed = []
        stats = InsertionStats()
        survivors = tri_mod._insert_point(3, coords, [tri], closed, DelaunayConfig(), stats)
        assert survivors == []
        assert closed == [tri]
        assert tri.done
        assert stats.circle_tests == 1
        assert stats.degenerate_tests == 1
        assert stats.triangles_removed == 0

    def test_degenerate_triangle_is_kept_and_never_retested(self, random_points, monkeypatch, caplog):
        real = tri_mod.in_circumcircle
        calls = {}
        forced = []

        def in_circle(a, b, c, p, eps):
            key = (tuple(a), tuple(b), tuple(c))
            calls[key] = calls.get(key, 0) + 1
            # first triangle made only of input points (all inside the unit square)
            if not forced and all(0.0 <= v <= 1.0 for q in (a, b, c) for v in q):
                forced.append(key)
            if forced and key == forced[0]:
                raise CoincidentPointsError("colinear points")
            return real(a, b, c, p, eps)

        monkeypatch.setattr(tri_mod, 'in_circumcircle', in_circle)
        with caplog.at_level(logging.DEBUG, logger='delaunay2d'):
            res = delaunay_2d(random_points)

        assert forced
        assert calls[forced[0]] == 1
        assert res.stats.degenerate_tests == 1
        assert res.stats.points_inserted == len(random_points)
        out = {frozenset(map(tuple, res.points[t].tolist())) for t in res.triangles}
        assert frozenset(forced[0]) in out
        assert any(r.levelno == logging.DEBUG and 'Closing degenerate triangle' in r.getMessage()
                   for r in caplog.records)
