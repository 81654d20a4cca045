"""Insertion statistics collected by the triangulator.

InsertionStats is filled by a single delaunay_2d() call and returned on the
result object; format_stats_table() renders one or more of them side by side.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, Mapping


@dataclass
class InsertionStats:
    points_inserted: int = 0
    circle_tests: int = 0
    degenerate_tests: int = 0
    triangles_retired: int = 0
    triangles_removed: int = 0
    triangles_created: int = 0
    edges_buffered: int = 0
    edges_cancelled: int = 0
    max_cavity_triangles: int = 0
    peak_active: int = 0
    super_linked_dropped: int = 0
    small_area_dropped: int = 0
    # Timing (seconds)
    time_total: float = 0.0

    def record_cavity(self, removed: int, buffered: int, kept: int) -> None:
        self.triangles_removed += removed
        self.edges_buffered += buffered
        self.edges_cancelled += buffered - kept
        self.triangles_created += kept
        if removed > self.max_cavity_triangles:
            self.max_cavity_triangles = removed

    def to_dict(self) -> Dict[str, Any]:
        return {
            'points_inserted': self.points_inserted,
            'circle_tests': self.circle_tests,
            'degenerate_tests': self.degenerate_tests,
            'triangles_retired': self.triangles_retired,
            'triangles_removed': self.triangles_removed,
            'triangles_created': self.triangles_created,
            'edges_buffered': self.edges_buffered,
            'edges_cancelled': self.edges_cancelled,
            'max_cavity_triangles': self.max_cavity_triangles,
            'peak_active': self.peak_active,
            'super_linked_dropped': self.super_linked_dropped,
            'small_area_dropped': self.small_area_dropped,
            'tests_per_point': (self.circle_tests / self.points_inserted) if self.points_inserted else 0.0,
            'time_total': self.time_total,
            'time_per_point': (self.time_total / self.points_inserted) if self.points_inserted else 0.0,
        }


def format_stats_table(stats_by_label: Mapping[str, Any]) -> str:
    """Return a human readable multi-line table, one row per labelled run.

    Values may be InsertionStats instances or their to_dict() output.
    """
    if not stats_by_label:
        return "<no stats>"
    header = ["run", "points", "tests", "tests/pt", "degen", "retired", "maxCav", "peak", "ms"]
    rows = []
    for label in sorted(stats_by_label.keys()):
        s = stats_by_label[label]
        if isinstance(s, InsertionStats):
            s = s.to_dict()
        rows.append([
            str(label), str(s['points_inserted']), str(s['circle_tests']),
            f"{s['tests_per_point']:.2f}", str(s['degenerate_tests']), str(s['triangles_retired']),
            str(s['max_cavity_triangles']), str(s['peak_active']), f"{s['time_total'] * 1000.0:.3f}",
        ])
    col_w = [len(h) for h in header]
    for r in rows:
        for i, v in enumerate(r):
            if len(v) > col_w[i]: col_w[i] = len(v)
    def fmt(r):
        return " ".join(r[i].rjust(col_w[i]) for i in range(len(r)))
    lines = [fmt(header), "-" * (sum(col_w) + len(col_w) - 1)] + [fmt(r) for r in rows]
    return "\n".join(lines)


__all__ = ["InsertionStats", "format_stats_table"]
