"""Contracts for the services the region manager depends on."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Union

from .entities import Chromosome, Coords, Feature, Genome

FeatureRef = Union[Feature, str]


@dataclass
class SyntenyBlock:
    """A translated fragment of a region. ``index`` orders fragments of one translation."""

    chr: Chromosome
    start: int
    end: int
    index: int


class FeatureStore(Protocol):
    """Feature lookup and cache service.

    ``feature`` arguments accept either a :class:`Feature` or a canonical id.
    """

    async def ensure_features(self, genome: Genome) -> None: ...

    def get_genolog(self, feature: FeatureRef, genome: Genome) -> Optional[Feature]: ...

    def get_genologs(self, feature: FeatureRef, genomes: Sequence[Genome]) -> list[Optional[Feature]]: ...

    def get_all_features_now(self, genome: Genome, chromosome: Chromosome) -> Sequence[Feature]: ...

    def flush_genome(self, genome: Genome) -> None: ...


class SyntenyTranslator(Protocol):
    async def translate(
        self,
        genome: Genome,
        chr_name: str,
        start: int,
        end: int,
        target: Genome,
    ) -> list[SyntenyBlock]: ...


class CoordinateValidator(Protocol):
    def validate(self, coords: Coords, genome: Genome, clamp: bool = True) -> Coords | None: ...


class ChromosomeBounds:
    """Validates coordinates against the chromosomes of the target genome.

    The chromosome is looked up by name so coordinates taken from one genome can be
    applied to another. With ``clamp`` the span is forced into ``[1, length]``;
    without it an out of range span is rejected.
    """

    def validate(self, coords: Coords, genome: Genome, clamp: bool = True) -> Coords | None:
        chromosome = genome.chromosome(coords.chr.name)
        if chromosome is None:
            return None
        start, end = int(coords.start), int(coords.end)
        if start > end:
            start, end = end, start
        if clamp:
            start = min(max(1, start), chromosome.length)
            end = min(max(start, end), chromosome.length)
        elif start < 1 or end > chromosome.length:
            return None
        return Coords(chromosome, start, end)
