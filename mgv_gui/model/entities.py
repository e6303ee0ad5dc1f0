"""Genomes, features and the region/strip records driving the zoom view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Chromosome:
    """A named chromosome of fixed length (bp)."""

    name: str
    length: int


@dataclass(frozen=True, eq=False)
class Genome:
    """A genome with its chromosomes in karyotype order.

    Genomes compare by identity: two loaded genomes with the same name are still
    different strips.
    """

    name: str
    chromosomes: tuple[Chromosome, ...]
    taxon: str = ""
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)

    def chromosome(self, name: str) -> Chromosome | None:
        for chromosome in self.chromosomes:
            if chromosome.name == name:
                return chromosome
        return None

    def __repr__(self) -> str:
        return f"Genome({self.name!r})"


@dataclass(frozen=True)
class Cds:
    ID: str
    length: int


@dataclass(frozen=True)
class Transcript:
    ID: str
    length: int
    cds: Cds | None = None


@dataclass(eq=False)
class Feature:
    """A genome annotation. Only the fields used for alignment and sequence selection."""

    ID: str
    genome: Genome
    chr: Chromosome
    start: int
    end: int
    strand: str = "+"
    cID: str | None = None
    symbol: str | None = None
    sotype: str = "protein_coding_gene"
    transcripts: tuple[Transcript, ...] = ()

    @property
    def landmark_id(self) -> str:
        return self.cID or self.ID

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass(eq=False)
class Region:
    """One genomic window with its display geometry.

    ``width`` is a relative weight until the layout engine has run, after which it is
    a pixel width. Regions must be created with :meth:`RegionStore.make_region` so
    that ``id`` is unique.
    """

    genome: Genome
    chr: Chromosome
    start: int
    end: int
    reversed: bool = False
    width: float = 1
    delta_x: float = 0
    id: int = -1
    length: int = 0
    index: Optional[int] = None

    @property
    def bp_length(self) -> int:
        return self.end - self.start + 1


@dataclass(eq=False)
class Strip:
    """The ordered regions shown for one genome."""

    genome: Genome
    regions: list[Region] = field(default_factory=list)
    order: int = 0


@dataclass(frozen=True)
class LandmarkSpec:
    """Where and how to line genomes up on a landmark feature.

    ``anchor`` is a relative position in the landmark (0 = start, 1 = end); ``None``
    defers to the configured alignment policy. ``delta`` shifts the window and
    ``length`` is its size, both in bp.
    """

    landmark: str
    lgenome: Genome
    length: int
    anchor: float | None = None
    delta: int = 0


@dataclass(frozen=True)
class Coords:
    """A chromosome span, as used by jump-to and set commands."""

    chr: Chromosome
    start: int
    end: int
