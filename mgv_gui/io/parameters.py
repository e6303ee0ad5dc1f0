"""Encoding of the displayed regions as a ``regions=`` URL parameter.

Format::

    regions=<genome>::<chr>:<start>..<end>/<width>[,<chr>:<start>..<end>/<width>...][|<genome>::...]

Strips appear in ``order`` rank (empty strips are left out), regions in display
order, and widths are floored pixel widths.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from ..errors import ParameterStringError

if TYPE_CHECKING:  # pragma: no cover
    from ..model.entities import Strip

_REGION_RE = re.compile(r"^(?P<chr>[^:]+):(?P<start>-?\d+)\.\.(?P<end>-?\d+)(?:/(?P<width>\d+(?:\.\d+)?))?$")


@dataclass(frozen=True)
class RegionParameter:
    chr: str
    start: int
    end: int
    width: float | None = None


@dataclass(frozen=True)
class StripParameter:
    genome: str
    regions: tuple[RegionParameter, ...]


def format_regions(strips: Iterable[Strip]) -> str:
    ordered = sorted(strips, key=lambda s: s.order)
    encoded = []
    for strip in ordered:
        if not strip.regions:
            continue
        regions = ",".join(
            f"{r.chr.name}:{r.start}..{r.end}/{math.floor(r.width)}" for r in strip.regions
        )
        encoded.append(f"{strip.genome.name}::{regions}")
    return "regions=" + "|".join(encoded)


def parse_regions(text: str) -> list[StripParameter]:
    """Parse a ``regions=`` string, as written by :func:`format_regions`.

    Other ``&``-separated parameters are ignored.
    """
    value = None
    for part in text.lstrip("#?").split("&"):
        key, _, rest = part.partition("=")
        if key == "regions":
            value = rest
            break
    if value is None:
        raise ParameterStringError("no regions parameter present")
    if not value:
        return []

    strips: list[StripParameter] = []
    for encoded in value.split("|"):
        genome, sep, regions = encoded.partition("::")
        if not sep or not genome:
            raise ParameterStringError(f"malformed strip {encoded!r}")
        parsed = []
        for item in regions.split(","):
            match = _REGION_RE.match(item)
            if match is None:
                raise ParameterStringError(f"malformed region {item!r}")
            start, end = int(match["start"]), int(match["end"])
            if start > end:
                raise ParameterStringError(f"region {item!r} ends before it starts")
            width = float(match["width"]) if match["width"] is not None else None
            parsed.append(RegionParameter(match["chr"], start, end, width))
        strips.append(StripParameter(genome, tuple(parsed)))
    return strips
