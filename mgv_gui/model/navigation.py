"""Zoom, scroll, split and reverse coordinate math for single regions."""

from __future__ import annotations

import math

from ..errors import InvalidParameter
from .entities import LandmarkSpec, Region


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def zoom_scroll_region(region: Region, zoom: float, scroll: float) -> Region:
    """Zoom ``region`` about its midpoint by ``zoom`` and scroll it by ``scroll``.

    ``zoom`` multiplies the region length (``< 1`` zooms in). ``scroll`` is a fraction
    of the larger of the old and new lengths; positive moves right on screen, which is
    towards lower coordinates on a reversed region.
    """
    if zoom <= 0:
        raise InvalidParameter(f"zoom factor must be > 0, got {zoom!r}")
    length = region.end - region.start + 1
    zoomed = zoom * length
    delta = scroll * max(length, zoomed) * (-1 if region.reversed else 1)
    mid = (region.start + region.end) / 2
    start = math.floor(mid - zoomed / 2 + delta + 1)
    end = math.floor(start + zoomed - 1)
    region.start = start
    region.end = max(start, end)
    return region


def zoom_scroll_landmark(spec: LandmarkSpec, zoom: float, scroll: float) -> LandmarkSpec:
    """Return ``spec`` with its window rescaled the way locked regions are."""
    length = round_half_up(zoom * spec.length)
    delta = round_half_up(scroll * spec.length + spec.delta)
    return LandmarkSpec(
        landmark=spec.landmark,
        lgenome=spec.lgenome,
        length=max(1, length),
        anchor=spec.anchor,
        delta=delta,
    )


def split_region(region: Region, fraction: float, sibling: Region) -> tuple[Region, Region]:
    """Split ``region`` at ``fraction`` of both its width and its bp length.

    ``region`` keeps the on-screen left piece and ``sibling`` (a copy of it) becomes
    the right piece. On a reversed region the left piece holds the high coordinates.
    """
    if not 0 <= fraction <= 1:
        raise InvalidParameter(f"split fraction must be within [0, 1], got {fraction!r}")
    width = region.width
    length = region.end - region.start + 1
    if length < 2:
        raise InvalidParameter("cannot split a region shorter than 2 bp")
    # both pieces keep at least one base
    cut = min(max(1, math.floor(fraction * length)), length - 1)

    region.width = fraction * width
    sibling.width = (1 - fraction) * width
    if region.reversed:
        region.start = region.end - cut + 1
        sibling.end = sibling.end - cut
    else:
        region.end = region.start + cut - 1
        sibling.start = region.start + cut
    return region, sibling


def reverse_region(region: Region) -> Region:
    region.reversed = not region.reversed
    return region
