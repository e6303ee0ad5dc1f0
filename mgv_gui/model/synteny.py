"""Mapping a reference region into other genomes through synteny blocks."""

from __future__ import annotations

import logging
from typing import Iterable, List

from .collaborators import SyntenyBlock, SyntenyTranslator
from .entities import Genome, Region, Strip
from .region_store import RegionStore

logger = logging.getLogger(__name__)


def combine_regions(blocks: Iterable[SyntenyBlock]) -> List[SyntenyBlock]:
    """Stitch together blocks whose indexes are consecutive.

    The translator splits a mapped region into numbered fragments. Fragments with the
    same index are duplicates and are dropped; a fragment whose index follows the
    previous one extends it.
    """
    combined: List[SyntenyBlock] = []
    for block in sorted(blocks, key=lambda b: b.index):
        prev = combined[-1] if combined else None
        if prev is not None and prev.index == block.index:
            continue
        if prev is not None and prev.index + 1 == block.index:
            prev.end = block.end
            prev.index = block.index
        else:
            combined.append(block)
    return combined


class SyntenyMapper:
    """Computes the strip showing a region's syntenic counterpart in another genome."""

    def __init__(self, translator: SyntenyTranslator, store: RegionStore) -> None:
        self.translator = translator
        self.store = store

    async def map_region_to_genome(self, region: Region, genome: Genome) -> Strip:
        if region.genome is genome:
            return Strip(genome, [region])
        blocks = await self.translator.translate(
            region.genome, region.chr.name, region.start, region.end, genome
        )
        combined = combine_regions(blocks)
        logger.debug(
            "Mapped %s:%d..%d onto %s as %d block(s) from %d fragment(s)",
            region.chr.name,
            region.start,
            region.end,
            genome.name,
            len(combined),
            len(blocks),
        )
        regions = [
            self.store.make_region(
                genome=genome,
                chr=block.chr,
                start=block.start,
                end=block.end,
                width=block.end - block.start + 1,
                index=block.index,
            )
            for block in combined
        ]
        return Strip(genome, regions)
