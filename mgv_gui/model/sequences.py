"""Sequence cart entries for a feature and its genologs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..errors import UnsupportedType
from .collaborators import FeatureStore
from .entities import Feature, Genome

SEQUENCE_TYPES = ("dna", "transcript", "cds")


@dataclass(frozen=True)
class SequenceDescriptor:
    """A sequence the user selected for download."""

    genome: Genome
    ID: str
    type: str
    length: int
    header: str
    selected: bool = True


def select_sequences(
    features: FeatureStore,
    feature: Feature,
    genomes: Sequence[Genome],
    seqtype: str,
) -> list[SequenceDescriptor]:
    """Return cart entries of ``seqtype`` for the genologs of ``feature`` in ``genomes``.

    Genomes lacking the feature are skipped. CDS sequences only exist for protein
    coding genes.
    """
    if seqtype not in SEQUENCE_TYPES:
        raise UnsupportedType(f"Unknown sequence type: {seqtype!r}")
    if seqtype == "cds" and feature.sotype != "protein_coding_gene":
        return []

    selected: list[SequenceDescriptor] = []
    for genolog in features.get_genologs(feature, genomes):
        if genolog is None:
            continue
        name = genolog.symbol or genolog.ID
        prefix = genolog.genome.name
        if seqtype == "dna":
            selected.append(
                SequenceDescriptor(genolog.genome, genolog.ID, seqtype, genolog.length, f"{prefix}::{name} (genomic)")
            )
        elif seqtype == "transcript":
            for t in genolog.transcripts:
                selected.append(
                    SequenceDescriptor(genolog.genome, t.ID, seqtype, t.length, f"{prefix}::{t.ID} {name} (cDNA)")
                )
        else:
            for t in genolog.transcripts:
                if t.cds is None:
                    continue
                selected.append(
                    SequenceDescriptor(
                        genolog.genome, t.cds.ID, seqtype, t.cds.length, f"{prefix}::{t.cds.ID} {name} (CDS)"
                    )
                )
    return selected
