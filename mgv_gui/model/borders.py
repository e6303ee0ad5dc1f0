"""Interactive resizing of adjacent regions."""

from __future__ import annotations

from typing import MutableSequence

from .entities import Region


def move_border(regions: MutableSequence[Region], i: int, amount: float, min_width: float) -> float:
    """Move the border between ``regions[i]`` and ``regions[i + 1]`` by ``amount`` px.

    Growing the left region past what the right one can give shoves the excess
    onto the next border to the right; shrinking past the left region's slack shoves
    onto the border to the left. Excess that reaches the end of the strip is
    dropped. Returns the distance the border actually moved.
    """
    if i < 0 or i + 1 >= len(regions):
        return 0
    left = regions[i]
    right = regions[i + 1]

    if amount > 0:
        shove = max(0, amount - (right.width - min_width))
        if shove > 0:
            shoved = move_border(regions, i + 1, shove, min_width)
            amount -= shove - shoved
    elif amount < 0:
        shove = min(0, amount + (left.width - min_width))
        if shove < 0:
            shoved = move_border(regions, i - 1, shove, min_width)
            amount -= shove - shoved
    else:
        return 0

    left.width += amount
    right.width -= amount
    right.delta_x += amount
    return amount


def swap_with_next(regions: MutableSequence[Region], i: int) -> bool:
    """Exchange ``regions[i]`` with its right-hand neighbour."""
    if i < 0 or i + 1 >= len(regions):
        return False
    regions[i], regions[i + 1] = regions[i + 1], regions[i]
    return True
