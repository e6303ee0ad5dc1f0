"""In-memory store of the strips and regions on display."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Iterable, Sequence, TypeVar

from .entities import Chromosome, Genome, Region, Strip

T = TypeVar("T")


class RegionStore:
    """Owns the strip list and hands out region handles.

    Region ids are handles: they are assigned once, in increasing order. Lookup goes
    through handles or object identity, never through coordinate equality.
    """

    def __init__(self) -> None:
        self.strips: list[Strip] = []
        self._counter = 0

    # ------------------------------------------------------------------ factory
    def make_region(self, region: Region | None = None, **values: Any) -> Region:
        """Return a new region with a fresh id.

        Either copies ``region`` (overridden by ``values``) or builds one from
        ``values``. Coordinates are taken over unchanged.
        """
        if region is not None:
            made = dataclasses.replace(region, **values)
        else:
            made = Region(**values)
        made.id = self._next_id()
        return made

    # ------------------------------------------------------------------ lookups
    def find_strip(self, genome: Genome) -> int:
        for i, strip in enumerate(self.strips):
            if strip.genome is genome:
                return i
        return -1

    def find_region(self, region: Region | int) -> tuple[int, int]:
        """Return ``(strip_index, region_index)`` for a region or region handle.

        A region object must be the displayed object itself; equal coordinates or a
        shared id do not count. ``-1`` marks whatever could not be found.
        """
        if isinstance(region, Region):
            si = self.find_strip(region.genome)
            if si == -1:
                return -1, -1
            for ri, existing in enumerate(self.strips[si].regions):
                if existing is region:
                    return si, ri
            return si, -1
        for si, strip in enumerate(self.strips):
            for ri, existing in enumerate(strip.regions):
                if existing.id == region:
                    return si, ri
        return -1, -1

    def resolve(self, handle: int) -> Region | None:
        si, ri = self.find_region(handle)
        if ri == -1:
            return None
        return self.strips[si].regions[ri]

    def get_regions(self, genome: Genome, chromosome: Chromosome | None = None) -> list[Region]:
        regions = [r for s in self.strips if s.genome is genome for r in s.regions]
        if chromosome is not None:
            regions = [r for r in regions if r.chr == chromosome]
        return regions

    def current_genomes(self) -> list[Genome]:
        seen: list[Genome] = []
        for strip in self.strips:
            if not any(g is strip.genome for g in seen):
                seen.append(strip.genome)
        return seen

    def all_regions(self) -> Iterable[Region]:
        for strip in self.strips:
            yield from strip.regions

    def next_order(self) -> int:
        return max((s.order for s in self.strips), default=-1) + 1

    # ------------------------------------------------------------------ merging
    def merge_update(self, strips: Sequence[Strip]) -> None:
        existing = len(self.strips)
        order = self.next_order()
        _merge_lists(self.strips, strips, self.merge_strip)
        for offset, strip in enumerate(self.strips[existing:]):
            strip.order = order + offset

    def merge_strip(self, current: Strip, update: Strip) -> None:
        if current.genome is not update.genome:
            current.genome = update.genome
        _merge_lists(current.regions, update.regions, self.merge_region)

    @staticmethod
    def merge_region(current: Region, update: Region) -> None:
        if current.chr != update.chr:
            current.chr = update.chr
        if current.genome is not update.genome:
            current.genome = update.genome
        current.start = update.start
        current.end = update.end
        current.width = update.width

    # ---------------------------------------------------------------- Utilities
    def _next_id(self) -> int:
        handle = self._counter
        self._counter += 1
        return handle


def _merge_lists(target: list[T], source: Sequence[T], merge: Callable[[T, T], None]) -> None:
    """Merge ``source`` into ``target`` position by position, in place.

    Items with a counterpart are merged; the tail of ``source`` is appended and any
    surplus in ``target`` is dropped.
    """
    for current, update in zip(target, source):
        merge(current, update)
    if len(source) > len(target):
        target.extend(source[len(target):])
    else:
        del target[len(source):]
