"""Aligning genomes on a landmark feature."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Optional, Sequence

from ..io.settings import ViewerSettings
from .collaborators import FeatureStore
from .entities import Feature, Genome, LandmarkSpec, Region, Strip
from .navigation import round_half_up
from .region_store import RegionStore

logger = logging.getLogger(__name__)


def anchor_position(feature: Feature, anchor: float | None, policy: str) -> float:
    """Return the base position of ``feature`` that the view is aligned to.

    An explicit ``anchor`` is a relative position from start (0) to end (1).
    Otherwise ``policy`` picks a point, with ``5-prime`` and ``3-prime`` following
    the feature's strand.
    """
    if anchor is not None:
        return feature.start + anchor * (feature.end - feature.start + 1)
    plus = feature.strand == "+"
    if policy == "3-prime":
        return feature.end if plus else feature.start
    if policy == "proximal":
        return feature.start
    if policy == "distal":
        return feature.end
    if policy == "midpoint":
        return math.floor((feature.start + feature.end) / 2)
    return feature.start if plus else feature.end


class LandmarkAligner:
    """Computes landmark-anchored windows for each genome."""

    def __init__(self, features: FeatureStore, store: RegionStore, settings: ViewerSettings) -> None:
        self.features = features
        self.store = store
        self.settings = settings

    async def compute_landmark_regions(self, spec: LandmarkSpec, genomes: Sequence[Genome]) -> list[Strip]:
        """Return one strip per genome, in the order of ``genomes``."""

        async def _one(genome: Genome) -> Strip:
            await self.features.ensure_features(genome)
            return self.compute_landmark_region(spec, genome)

        return list(await asyncio.gather(*(_one(g) for g in genomes)))

    def compute_landmark_region(self, spec: LandmarkSpec, genome: Genome) -> Strip:
        """Return the region(s) around the landmark in ``genome``.

        A genome holding several copies of the landmark yields one region per copy.
        Feature data for ``genome`` must already be loaded.
        """
        copies = [f for f in self.features.get_genologs(spec.landmark, [genome]) if f is not None]
        if not copies:
            return self.guess_landmark_region(spec, genome)

        regions: list[Region] = []
        for copy in copies:
            position = anchor_position(copy, spec.anchor, self.settings.feature_alignment)
            start = round_half_up(position - spec.length / 2) + spec.delta
            regions.append(self._window(genome, copy, start, spec.length))
        return Strip(genome, regions)

    def guess_landmark_region(self, spec: LandmarkSpec, genome: Genome) -> Strip:
        """Infer where the landmark would be in a genome that lacks it.

        Walks outwards from the landmark in its own genome until a neighbour on each
        side has a genolog in ``genome``, then places the window between them. Returns
        an empty strip when neither side has one.
        """
        landmark = self.features.get_genolog(spec.landmark, spec.lgenome)
        if landmark is None:
            logger.debug("Landmark %s is not in its own genome %s", spec.landmark, spec.lgenome.name)
            return Strip(genome, [])
        neighbors = list(self.features.get_all_features_now(spec.lgenome, landmark.chr))
        position = next((i for i, f in enumerate(neighbors) if f is landmark), -1)
        if position == -1:
            return Strip(genome, [])

        left = self._neighbor_genolog(neighbors, position, -1, landmark, genome)
        right = self._neighbor_genolog(neighbors, position, +1, landmark, genome)
        if left is None and right is None:
            logger.debug("No neighbour of %s maps into %s", spec.landmark, genome.name)
            return Strip(genome, [])
        left = left or right
        right = right or left

        length = spec.length
        if left.chr == right.chr:
            mid = (min(left.start, right.start) + max(left.end, right.end)) / 2
            start = math.floor(mid - length / 2)
            return Strip(genome, [self._window(genome, left, start, length)])
        return Strip(
            genome,
            [
                self._window(genome, left, math.floor(left.start - length / 2), length),
                self._window(genome, right, math.floor(right.start - length / 2), length),
            ],
        )

    # ---------------------------------------------------------------- helpers
    def _neighbor_genolog(
        self,
        neighbors: Sequence[Feature],
        position: int,
        step: int,
        landmark: Feature,
        genome: Genome,
    ) -> Optional[Feature]:
        i = position + step
        while 0 <= i < len(neighbors):
            neighbor = neighbors[i]
            i += step
            if step > 0 and neighbor.start < landmark.end:
                continue
            if step < 0 and neighbor.end > landmark.start:
                continue
            genolog = self.features.get_genolog(neighbor, genome)
            if genolog is not None:
                return genolog
        return None

    def _window(self, genome: Genome, feature: Feature, start: int, length: int) -> Region:
        return self.store.make_region(
            genome=genome,
            chr=feature.chr,
            start=start,
            end=start + length - 1,
        )
