"""Configuration objects for the Delaunay triangulator."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from .constants import EPS_COINCIDENT, SUPER_TRIANGLE_SCALE, SINGLE_POINT_SCALE

_CANCELLATION_METHODS = ('hash', 'pairwise')


@dataclass
class DelaunayConfig:
    """Tuning knobs for :func:`delaunay2d.core.triangulation.delaunay_2d`.

    Attributes
    ----------
    eps : float
        Tolerance for the horizontal-edge degeneracy test and the
        in-circumcircle comparison. It is absolute, not relative to the
        point set: once squared circumradii approach ``eps`` (extents of
        about 1e-5 or less with the default) every point tests as inside
        every circumcircle and no triangles are produced. Rescale such
        inputs, or lower ``eps`` to match.
    super_triangle_scale : float
        Super-triangle half-extent as a multiple of the larger bounding box
        side. Larger values keep the super vertices further away, which
        helps hull triangles survive finalization on wide point sets. With
        the default of 2 some hull triangles can still be linked to a super
        vertex and dropped, so the result may be a non-convex subset of the
        full triangulation (fewer than ``2n - h - 2`` triangles). Use a
        large value such as 1000 when the whole convex hull must be covered.
    single_point_scale : float
        Half-extent multiplier for a lone point (times ``max(|x|, |y|)``).
    edge_cancellation : str
        ``'hash'`` counts canonical edges, ``'pairwise'`` tags reverse and
        duplicate pairs with an O(E^2) scan. Both keep the same edges.
    use_done_flags : bool
        Retire triangles whose circumcircle lies entirely left of the sweep.
        Only affects speed.
    min_triangle_area : float, optional
        When set, finalization also drops triangles with smaller absolute area.
    validate : bool
        Run the conformity and empty-circle checks on the result and log any
        problem at WARNING level.
    extras : dict
        Free-form dictionary for caller-defined hooks.
    """
    eps: float = EPS_COINCIDENT
    super_triangle_scale: float = SUPER_TRIANGLE_SCALE
    single_point_scale: float = SINGLE_POINT_SCALE
    edge_cancellation: str = 'hash'
    use_done_flags: bool = True
    min_triangle_area: Optional[float] = None
    validate: bool = False
    extras: Dict[str, Any] = field(default_factory=dict)

    def validate_fields(self) -> None:
        if not self.eps > 0.0:
            raise ValueError(f"eps must be positive, got {self.eps!r}")
        if not self.super_triangle_scale > 0.0:
            raise ValueError(f"super_triangle_scale must be positive, got {self.super_triangle_scale!r}")
        if not self.single_point_scale > 0.0:
            raise ValueError(f"single_point_scale must be positive, got {self.single_point_scale!r}")
        if self.edge_cancellation not in _CANCELLATION_METHODS:
            raise ValueError(
                f"edge_cancellation must be one of {_CANCELLATION_METHODS}, got {self.edge_cancellation!r}")
        if self.min_triangle_area is not None and self.min_triangle_area < 0.0:
            raise ValueError(f"min_triangle_area must be non-negative, got {self.min_triangle_area!r}")

    def with_overrides(self, **overrides: Any) -> 'DelaunayConfig':
        cfg = replace(self, **overrides)
        cfg.validate_fields()
        return cfg


__all__ = ['DelaunayConfig']
