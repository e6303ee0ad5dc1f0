"""Cross-genome navigation modes.

Exactly one mode is active at a time. The region manager owns the current mode and
switches it through a single setter, so entering one mode always leaves the others.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .entities import LandmarkSpec


@dataclass(frozen=True)
class Free:
    """Every region navigates on its own."""


@dataclass(frozen=True)
class Locked:
    """All strips zoom and scroll together by the same factors."""


@dataclass(frozen=True)
class Reference:
    """Other genomes follow the synteny mapping of one reference region."""

    handle: int


@dataclass(frozen=True)
class Landmark:
    """Genomes are aligned on a landmark feature and scroll together."""

    spec: LandmarkSpec


NavigationMode = Union[Free, Locked, Reference, Landmark]

FREE = Free()
LOCKED = Locked()


def scrolls_together(mode: NavigationMode) -> bool:
    return isinstance(mode, (Locked, Landmark))


def describe(mode: NavigationMode) -> str:
    if isinstance(mode, Reference):
        return f"reference(region {mode.handle})"
    if isinstance(mode, Landmark):
        return f"landmark({mode.spec.landmark})"
    return type(mode).__name__.lower()
