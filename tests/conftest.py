from __future__ import annotations

import dataclasses

import pytest

from mgv_gui.model import Chromosome, Feature, Genome, RegionManager, SyntenyBlock


class FakeFeatureStore:
    """Feature store backed by plain lists; features with the same canonical id are genologs."""

    def __init__(self):
        self.features: dict[Genome, list[Feature]] = {}
        self.ensured: list[Genome] = []
        self.flushed: list[Genome] = []

    def add(self, *features):
        for feature in features:
            self.features.setdefault(feature.genome, []).append(feature)
            self.features[feature.genome].sort(key=lambda f: (f.chr.name, f.start))

    async def ensure_features(self, genome):
        self.ensured.append(genome)

    def _copies(self, feature, genome):
        landmark = feature if isinstance(feature, str) else feature.landmark_id
        return [f for f in self.features.get(genome, []) if f.landmark_id == landmark]

    def get_genolog(self, feature, genome):
        copies = self._copies(feature, genome)
        return copies[0] if copies else None

    def get_genologs(self, feature, genomes):
        found = []
        for genome in genomes:
            found.extend(self._copies(feature, genome) or [None])
        return found

    def get_all_features_now(self, genome, chromosome):
        return [f for f in self.features.get(genome, []) if f.chr == chromosome]

    def flush_genome(self, genome):
        self.flushed.append(genome)


class FakeTranslator:
    def __init__(self):
        self.blocks: dict[Genome, list[SyntenyBlock]] = {}
        self.calls: list[tuple] = []

    async def translate(self, genome, chr_name, start, end, target):
        self.calls.append((genome, chr_name, start, end, target))
        return [dataclasses.replace(b) for b in self.blocks.get(target, [])]


def make_genome(name, *lengths, taxon="10090"):
    chromosomes = tuple(Chromosome(str(i + 1), length) for i, length in enumerate(lengths))
    return Genome(name, chromosomes, taxon)


@pytest.fixture()
def b6():
    return make_genome("C57BL/6J", 195_000_000, 182_000_000)


@pytest.fixture()
def aj():
    return make_genome("A/J", 190_000_000, 180_000_000)


@pytest.fixture()
def caroli():
    return make_genome("CAROLI/EiJ", 5_000_000, 170_000_000, taxon="10089")


@pytest.fixture()
def features():
    return FakeFeatureStore()


@pytest.fixture()
def translator():
    return FakeTranslator()


@pytest.fixture()
def manager(features, translator):
    return RegionManager(features, translator)


@pytest.fixture()
def announcements(manager):
    calls = []
    manager.subscribe(lambda: calls.append(True))
    return calls
