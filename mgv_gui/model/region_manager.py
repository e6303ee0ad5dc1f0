"""Central point of control for the regions shown in the zoom view."""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from ..errors import InvalidParameter
from ..io.parameters import format_regions, parse_regions
from ..io.settings import ViewerSettings
from . import borders, navigation
from .collaborators import ChromosomeBounds, CoordinateValidator, FeatureStore, SyntenyTranslator
from .entities import Coords, Feature, Genome, LandmarkSpec, Region, Strip
from .landmark import LandmarkAligner
from .layout import LayoutEngine
from .modes import FREE, LOCKED, Landmark, NavigationMode, Reference, describe, scrolls_together
from .region_store import RegionStore
from .synteny import SyntenyMapper

logger = logging.getLogger(__name__)

Listener = Callable[[], None]

REGION_OPS = (
    "scroll",
    "zoom",
    "zoomscroll",
    "set",
    "remove",
    "split",
    "reverse",
    "make-reference",
    "delete-strip",
    "new",
)


@dataclass
class RegionChange:
    """A region command coming from the UI.

    ``amt`` is the zoom factor or scroll fraction, ``coords`` the target of ``set``,
    ``pos`` the split fraction. ``zoomscroll`` describes a rubber-band selection with
    ``pstart``/``plength`` (fractions of the region) and ``out``.
    """

    op: str
    region: Region | None = None
    amt: float | None = None
    coords: Coords | None = None
    pos: float = 0.5
    pstart: float = 0.0
    plength: float = 1.0
    out: bool = False
    only: bool = False


class RegionManager:
    """Maintains the strips and regions that drive the zoom view.

    All mutating operations lay the strips out again and then notify subscribers
    once, unless called with ``quiet=True``. Operations given a region or genome that
    is no longer displayed do nothing.
    """

    def __init__(
        self,
        features: FeatureStore,
        translator: SyntenyTranslator,
        *,
        settings: ViewerSettings | None = None,
        validator: CoordinateValidator | None = None,
    ) -> None:
        self.settings = settings or ViewerSettings()
        self.features = features
        self.validator = validator or ChromosomeBounds()
        self.store = RegionStore()
        self.engine = LayoutEngine(self.settings)
        self.synteny = SyntenyMapper(translator, self.store)
        self.landmarks = LandmarkAligner(features, self.store, self.settings)
        self.current_region: Region | None = None
        self.current_selection: list[str] = []
        self._mode: NavigationMode = FREE
        self._listeners: list[Listener] = []

    @property
    def strips(self) -> list[Strip]:
        return self.store.strips

    # ------------------------------------------------------------------ modes
    @property
    def mode(self) -> NavigationMode:
        return self._mode

    def set_mode(self, mode: NavigationMode) -> None:
        """Switch navigation mode. The previous mode is left entirely."""
        if mode != self._mode:
            logger.debug("Navigation mode %s -> %s", describe(self._mode), describe(mode))
        self._mode = mode

    @property
    def scroll_lock(self) -> bool:
        return scrolls_together(self._mode)

    def set_scroll_lock(self, enabled: bool, quiet: bool = False) -> None:
        if enabled:
            self.set_mode(LOCKED)
        elif self.scroll_lock:
            self.set_mode(FREE)
        if not quiet:
            self.announce()

    @property
    def reference_region(self) -> Region | None:
        if isinstance(self._mode, Reference):
            return self.store.resolve(self._mode.handle)
        return None

    @property
    def landmark(self) -> LandmarkSpec | None:
        if isinstance(self._mode, Landmark):
            return self._mode.spec
        return None

    def _is_reference(self, region: Region) -> bool:
        return isinstance(self._mode, Reference) and self._mode.handle == region.id

    def set_current_region(self, region: Region | None) -> None:
        self.current_region = region

    # ----------------------------------------------------------- notification
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def announce(self) -> None:
        for listener in list(self._listeners):
            listener()

    # -------------------------------------------------------------- lifecycle
    async def set_strips(self, genomes: Sequence[Genome], quiet: bool = False) -> None:
        """Show exactly ``genomes``, removing and adding strips as needed.

        New strips are appended as their initial regions resolve, so their order is
        the completion order, not the order of ``genomes``.
        """
        current = self.store.current_genomes()
        requested = set(genomes)
        existing = set(current)
        to_remove = [g for g in current if g not in requested]
        to_add = [g for g in dict.fromkeys(genomes) if g not in existing]
        for genome in to_remove:
            self.delete_strip(genome, quiet=True)
        await asyncio.gather(*(self.add_strip(g) for g in to_add))
        self.layout()
        if not quiet:
            self.announce()

    async def add_strip(self, genome: Genome, region: Region | None = None) -> Strip:
        """Append a strip for ``genome`` and return it.

        The initial region follows the active landmark, else the reference region,
        else ``region``, else the start of the first chromosome. A genome with no
        landmark window or no syntenic counterpart gets an empty strip.
        """
        reference = self.reference_region
        if isinstance(self._mode, Landmark):
            [strip] = await self.landmarks.compute_landmark_regions(self._mode.spec, [genome])
        elif reference is not None:
            strip = await self.synteny.map_region_to_genome(reference, genome)
        elif region is not None:
            if region.id < 0:
                region = self.store.make_region(region)
            strip = Strip(genome, [region])
        else:
            strip = self._default_strip(genome)

        self.engine.layout_strip(strip)
        strip.order = self.store.next_order()
        self.strips.append(strip)
        logger.debug("Added strip for %s with %d region(s)", genome.name, len(strip.regions))
        return strip

    def _default_strip(self, genome: Genome) -> Strip:
        if not genome.chromosomes:
            raise ValueError(f"Genome {genome.name!r} has no chromosomes")
        chromosome = genome.chromosomes[0]
        region = self.store.make_region(
            genome=genome,
            chr=chromosome,
            start=1,
            end=min(self.settings.default_window, chromosome.length),
        )
        return Strip(genome, [region])

    def delete_strip(self, genome: Genome, quiet: bool = False) -> None:
        si = self.store.find_strip(genome)
        if si == -1:
            return
        strip = self.strips[si]
        if any(self._is_reference(r) for r in strip.regions):
            self.set_mode(FREE)
        if self.current_region is not None and self.current_region in strip.regions:
            self.current_region = None
        del self.strips[si]
        self.features.flush_genome(genome)
        logger.debug("Deleted strip for %s", genome.name)
        if not quiet:
            self.announce()

    def merge_update(self, strips: Sequence[Strip]) -> None:
        self.store.merge_update(strips)

    def initialize_regions(self, strips: Sequence[Strip]) -> None:
        for strip in strips:
            strip.regions = [self.store.make_region(r) for r in strip.regions]
        self.merge_update(strips)
        self.layout()

    def reorder_strips(self, genomes: Sequence[Genome], quiet: bool = False) -> None:
        """Rank strips following ``genomes``; unlisted strips keep their relative order after them."""
        ranked = [g for g in genomes if self.store.find_strip(g) != -1]
        rest = [s for s in sorted(self.strips, key=lambda s: s.order) if s.genome not in ranked]
        for rank, genome in enumerate(ranked):
            self.strips[self.store.find_strip(genome)].order = rank
        for rank, strip in enumerate(rest, start=len(ranked)):
            strip.order = rank
        if not quiet:
            self.announce()

    async def add_region(self, region: Region, only: bool = False, quiet: bool = False) -> Region:
        """Show a copy of ``region`` in its genome's strip, creating the strip if needed."""
        made = self.store.make_region(region)
        si = self.store.find_strip(made.genome)
        if si == -1:
            await self.add_strip(made.genome, made)
        else:
            strip = self.strips[si]
            made.width = strip.regions[0].width if strip.regions else 1
            if only:
                if any(self._is_reference(r) for r in strip.regions):
                    self.set_mode(FREE)
                strip.regions = [made]
            else:
                strip.regions.append(made)
        self.layout()
        if not quiet:
            self.announce()
        return made

    def set_region(self, region: Region, coords: Coords, quiet: bool = False) -> None:
        if self.store.find_region(region)[1] == -1:
            return
        start, end = math.floor(coords.start), math.floor(coords.end)
        region.chr = coords.chr
        region.start, region.end = min(start, end), max(start, end)
        self.layout()
        if not quiet:
            self.announce()

    def remove_region(self, region: Region, quiet: bool = False) -> None:
        si, ri = self.store.find_region(region)
        if ri == -1:
            return
        if self._is_reference(region):
            self.set_mode(FREE)
        if self.current_region is region:
            self.current_region = None
        strip = self.strips[si]
        if len(strip.regions) == 1:
            self.delete_strip(strip.genome, quiet=True)
        else:
            del strip.regions[ri]
        self.layout()
        if not quiet:
            self.announce()

    def jump_to(self, coords: Coords, quiet: bool = False) -> None:
        """Show ``coords`` in the top strip, or in every strip when scrolling is locked."""
        if not self.strips:
            return
        if self.scroll_lock:
            targets = list(self.strips)
        else:
            top = next((s for s in self.strips if s.order == 0), self.strips[0])
            targets = [top]
        for strip in targets:
            if not strip.regions:
                continue
            validated = self.validator.validate(coords, strip.genome, True)
            if validated is None:
                continue
            del strip.regions[1:]
            self.set_region(strip.regions[0], validated, quiet=True)
        self.layout()
        if not quiet:
            self.announce()

    # --------------------------------------------------------------- geometry
    def layout(self, strips: Optional[Iterable[Strip]] = None) -> list[Strip]:
        if isinstance(self._mode, Reference) and self.reference_region is None:
            self.set_mode(FREE)
        return self.engine.layout(self.strips if strips is None else strips)

    def move_border(self, region: Region, amount: float, quiet: bool = False) -> None:
        """Drag the right border of ``region`` by ``amount`` pixels."""
        si, ri = self.store.find_region(region)
        if ri == -1:
            return
        borders.move_border(self.strips[si].regions, ri, amount, self.settings.border_min_width)
        if not quiet:
            self.announce()

    def swap(self, region: Region, quiet: bool = False) -> None:
        si, ri = self.store.find_region(region)
        if ri == -1:
            return
        borders.swap_with_next(self.strips[si].regions, ri)
        self.layout()
        if not quiet:
            self.announce()

    # ------------------------------------------------------------- navigation
    def zoom_scroll_region(self, region: Region, zoom: float, scroll: float, quiet: bool = False) -> None:
        if zoom <= 0:
            raise InvalidParameter(f"zoom factor must be > 0, got {zoom!r}")
        if self.store.find_region(region)[1] == -1:
            return
        navigation.zoom_scroll_region(region, zoom, scroll)
        self.layout()
        if not quiet:
            self.announce()

    def zoom_scroll_all_regions(self, zoom: float, scroll: float, quiet: bool = False) -> None:
        """Zoom and scroll every region together, along with the landmark window."""
        if zoom <= 0:
            raise InvalidParameter(f"zoom factor must be > 0, got {zoom!r}")
        for region in self.store.all_regions():
            navigation.zoom_scroll_region(region, zoom, scroll)
        if isinstance(self._mode, Landmark):
            self.set_mode(Landmark(navigation.zoom_scroll_landmark(self._mode.spec, zoom, scroll)))
        self.layout()
        if not quiet:
            self.announce()

    def split_region(self, region: Region, fraction: float, quiet: bool = False) -> Region | None:
        """Split ``region`` at ``fraction`` and return the new right-hand sibling."""
        si, ri = self.store.find_region(region)
        if ri == -1:
            return None
        sibling = self.store.make_region(region)
        navigation.split_region(region, fraction, sibling)
        if self._is_reference(region):
            self.set_mode(FREE)
        self.strips[si].regions.insert(ri + 1, sibling)
        self.layout()
        if not quiet:
            self.announce()
        return sibling

    def reverse_region(self, region: Region, quiet: bool = False) -> None:
        if self.store.find_region(region)[1] == -1:
            return
        navigation.reverse_region(region)
        if not quiet:
            self.announce()

    # ---------------------------------------------------------------- synteny
    async def map_region_to_genome(self, region: Region, genome: Genome) -> Strip:
        return await self.synteny.map_region_to_genome(region, genome)

    async def compute_mapped_regions(
        self,
        region: Region,
        genomes: Optional[Sequence[Genome]] = None,
        quiet: bool = False,
    ) -> None:
        """Make ``region`` the reference and show its syntenic regions in ``genomes``."""
        if self.store.find_region(region)[1] == -1:
            return
        targets = list(genomes) if genomes is not None else self.store.current_genomes()
        mapped = await asyncio.gather(*(self.synteny.map_region_to_genome(region, g) for g in targets))
        if self.store.find_region(region)[1] == -1:
            logger.debug("Reference region %d vanished while mapping; dropping result", region.id)
            return

        self.set_mode(Reference(region.id))
        for strip in mapped:
            for r in strip.regions:
                r.width = r.end - r.start + 1
            si = self.store.find_strip(strip.genome)
            if si == -1:
                strip.order = self.store.next_order()
                self.strips.append(strip)
            elif strip.genome is region.genome:
                self.strips[si].regions = [region]
            else:
                self.store.merge_strip(self.strips[si], strip)
        self.layout()
        if not quiet:
            self.announce()

    # --------------------------------------------------------------- landmark
    async def compute_landmark_regions(self, spec: LandmarkSpec, genomes: Sequence[Genome]) -> list[Strip]:
        return await self.landmarks.compute_landmark_regions(spec, genomes)

    async def feature_align(
        self,
        feature: Feature,
        base_pos: int | None = None,
        region: Region | None = None,
        quiet: bool = False,
    ) -> LandmarkSpec:
        """Align all genomes on ``feature``, anchored at the clicked base if given."""
        anchor = None
        if base_pos is not None:
            anchor = (base_pos - feature.start + 1) / feature.length
        length = region.bp_length if region is not None else 3 * feature.length
        spec = LandmarkSpec(
            landmark=feature.landmark_id,
            lgenome=feature.genome,
            length=length,
            anchor=anchor,
            delta=0,
        )
        await self.align_on_landmark(spec, quiet=quiet)
        return spec

    async def align_on_landmark(
        self,
        spec: LandmarkSpec,
        genomes: Optional[Sequence[Genome]] = None,
        quiet: bool = False,
    ) -> None:
        targets = list(genomes) if genomes is not None else self.store.current_genomes()
        strips = await self.landmarks.compute_landmark_regions(spec, targets)
        if genomes is None:
            self.merge_update(strips)
        else:
            for strip in strips:
                si = self.store.find_strip(strip.genome)
                if si == -1:
                    strip.order = self.store.next_order()
                    self.strips.append(strip)
                else:
                    self.store.merge_strip(self.strips[si], strip)
        self.set_mode(Landmark(spec))
        self.layout()
        self.current_selection = [spec.landmark]
        if not quiet:
            self.announce()

    # --------------------------------------------------------------- commands
    async def region_change(self, change: RegionChange, quiet: bool = False) -> None:
        """Apply a UI region command, then announce once."""
        op = change.op
        if op not in REGION_OPS:
            raise InvalidParameter(f"Unknown region operation {op!r}")

        if op == "new":
            if change.region is not None:
                await self.add_region(change.region, only=change.only, quiet=True)
            if not quiet:
                self.announce()
            return

        region = change.region or self.current_region
        if region is None and self.strips and self.strips[0].regions:
            region = self.strips[0].regions[0]
        if region is None:
            return

        if op in ("scroll", "zoom", "zoomscroll"):
            zoom, scroll = self._zoom_scroll_amounts(change)
            if self.scroll_lock:
                self.zoom_scroll_all_regions(zoom, scroll, quiet=True)
            else:
                self.zoom_scroll_region(region, zoom, scroll, quiet=True)
                if self._is_reference(region):
                    await self.compute_mapped_regions(region, quiet=True)
        elif op == "set":
            if change.coords is None:
                raise InvalidParameter("set requires coordinates")
            self.set_region(region, change.coords, quiet=True)
            if self._is_reference(region):
                await self.compute_mapped_regions(region, quiet=True)
        elif op == "remove":
            self.remove_region(region, quiet=True)
        elif op == "split":
            self.split_region(region, change.pos, quiet=True)
        elif op == "reverse":
            self.reverse_region(region, quiet=True)
        elif op == "make-reference":
            await self.compute_mapped_regions(region, quiet=True)
        elif op == "delete-strip":
            self.delete_strip(region.genome, quiet=True)
            self.layout()
        if not quiet:
            self.announce()

    def _zoom_scroll_amounts(self, change: RegionChange) -> tuple[float, float]:
        if change.op == "scroll":
            return 1.0, self.settings.default_pan if change.amt is None else change.amt
        if change.op == "zoom":
            return (self.settings.default_zoom if change.amt is None else change.amt), 0.0
        if change.plength <= 0:
            raise InvalidParameter("zoomscroll requires a positive selection length")
        zoom = 1 / change.plength if change.out else change.plength
        scroll = (change.pstart - 0.5 + change.plength / 2) * (-1 if change.out else 1)
        return zoom, scroll

    # ---------------------------------------------------------- serialisation
    def parameter_string(self) -> str:
        return format_regions(self.strips)

    def restore(self, text: str, genomes: Sequence[Genome], quiet: bool = False) -> None:
        """Load the strips described by a ``regions=`` string.

        Strips for unknown genomes and regions on unknown chromosomes are skipped.
        """
        by_name = {g.name: g for g in genomes}
        strips: list[Strip] = []
        for encoded in parse_regions(text):
            genome = by_name.get(encoded.genome)
            if genome is None:
                logger.warning("Skipping strip for unknown genome %r", encoded.genome)
                continue
            regions = []
            for param in encoded.regions:
                chromosome = genome.chromosome(param.chr)
                if chromosome is None:
                    logger.warning("Skipping region on unknown chromosome %s::%s", genome.name, param.chr)
                    continue
                regions.append(Region(genome, chromosome, param.start, param.end, width=param.width or 1))
            if regions:
                strips.append(Strip(genome, regions))
        self.initialize_regions(strips)
        self.reorder_strips([s.genome for s in strips], quiet=True)
        if not quiet:
            self.announce()
