"""Pixel layout of regions within a strip."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from ..io.settings import ViewerSettings
from .entities import Strip


def scale_adjust(weights: Sequence[float], available: float, min_width: float) -> np.ndarray:
    """Scale ``weights`` to sum to ``available`` while imposing ``min_width``.

    Entries that would fall below ``min_width`` are raised to it and the total
    shortfall is taken from the entries above the minimum, in proportion to their
    scaled size. This is a single pass: an entry pushed below the minimum by its
    share of the deficit keeps that residual.
    """

    values = np.asarray(weights, dtype=float).reshape(-1)
    if values.size == 0:
        return values
    total = float(values.sum())
    factor = available / total if total > 0 else 0.0
    scaled = values * factor

    clamped = scaled < min_width
    deficit = float(np.sum(min_width - scaled[clamped]))
    scaled[clamped] = min_width
    if deficit == 0:
        return scaled

    donors = scaled > min_width
    donor_total = float(scaled[donors].sum())
    if donor_total <= 0:
        return scaled
    scaled[donors] -= deficit * scaled[donors] / donor_total
    return scaled


def layout_strip(strip: Strip, width: float, settings: ViewerSettings) -> Strip:
    """Assign pixel widths and x offsets to the regions of ``strip``."""
    regions = strip.regions
    if not regions:
        return strip

    gap = settings.region_gap
    dx = settings.end_cap_width
    available = width - dx - gap * (len(regions) - 1)
    weights = [r.width or settings.min_region_width for r in regions]
    widths = scale_adjust(weights, available, settings.min_region_width)

    for region, w in zip(regions, widths):
        region.width = float(w)
        region.length = region.end - region.start + 1
        region.delta_x = dx
        dx += region.width + gap
    return strip


class LayoutEngine:
    """Lays out strips at the configured zoom view width."""

    def __init__(self, settings: ViewerSettings) -> None:
        self.settings = settings

    def layout_strip(self, strip: Strip, width: float | None = None) -> Strip:
        return layout_strip(strip, width or self.settings.zoom_width, self.settings)

    def layout(self, strips: Iterable[Strip], width: float | None = None) -> list[Strip]:
        laid_out = list(strips)
        for strip in laid_out:
            self.layout_strip(strip, width)
        return laid_out
