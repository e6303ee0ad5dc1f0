import asyncio

import pytest

from mgv_gui.io import ViewerSettings
from mgv_gui.model import Feature, LandmarkAligner, LandmarkSpec, RegionStore, anchor_position


def _feature(genome, chr_index, start, end, cid, strand="+"):
    return Feature(f"{genome.name}:{cid}", genome, genome.chromosomes[chr_index], start, end, strand=strand, cID=cid)


def _aligner(features, **settings):
    return LandmarkAligner(features, RegionStore(), ViewerSettings(**settings))


@pytest.mark.parametrize(
    "policy, strand, expected",
    [
        ("5-prime", "+", 5000),
        ("5-prime", "-", 5999),
        ("3-prime", "+", 5999),
        ("3-prime", "-", 5000),
        ("proximal", "-", 5000),
        ("distal", "+", 5999),
        ("midpoint", "+", 5499),
        ("5-prime", ".", 5999),
        ("3-prime", ".", 5000),
    ],
)
def test_anchor_position_policies(aj, policy, strand, expected):
    feature = _feature(aj, 0, 5000, 5999, "MGI:1", strand=strand)
    assert anchor_position(feature, None, policy) == expected


def test_anchor_position_explicit_fraction(aj):
    feature = _feature(aj, 0, 5000, 5999, "MGI:1")
    assert anchor_position(feature, 0.5, "5-prime") == 5500


def test_compute_landmark_region_centres_window(b6, aj, features):
    features.add(_feature(b6, 0, 100_000, 100_999, "MGI:1"), _feature(aj, 0, 5000, 5999, "MGI:1"))
    spec = LandmarkSpec("MGI:1", b6, length=3000, delta=100)
    strip = _aligner(features).compute_landmark_region(spec, aj)
    [region] = strip.regions
    assert region.chr is aj.chromosomes[0]
    assert (region.start, region.end) == (3600, 6599)


def test_compute_landmark_region_uses_configured_policy(b6, aj, features):
    features.add(_feature(aj, 0, 5000, 5999, "MGI:1"))
    spec = LandmarkSpec("MGI:1", b6, length=1000)
    strip = _aligner(features, feature_alignment="distal").compute_landmark_region(spec, aj)
    assert (strip.regions[0].start, strip.regions[0].end) == (5499, 6498)


def test_compute_landmark_region_one_region_per_copy(b6, aj, features):
    features.add(_feature(aj, 0, 5000, 5999, "MGI:1"), _feature(aj, 1, 70_000, 70_999, "MGI:1"))
    spec = LandmarkSpec("MGI:1", b6, length=1000)
    strip = _aligner(features).compute_landmark_region(spec, aj)
    assert [(r.chr.name, r.start) for r in strip.regions] == [("1", 4500), ("2", 69_500)]
    assert len({r.id for r in strip.regions}) == 2


def test_compute_landmark_regions_loads_features_first(b6, aj, features):
    features.add(_feature(b6, 0, 100_000, 100_999, "MGI:1"), _feature(aj, 0, 5000, 5999, "MGI:1"))
    spec = LandmarkSpec("MGI:1", b6, length=1000)
    strips = asyncio.run(_aligner(features).compute_landmark_regions(spec, [b6, aj]))
    assert features.ensured == [b6, aj]
    assert [s.genome for s in strips] == [b6, aj]


@pytest.fixture()
def neighbourhood(b6, features):
    landmark = _feature(b6, 0, 10_000, 11_000, "MGI:L")
    left = _feature(b6, 0, 5000, 6000, "MGI:N1")
    overlapping = _feature(b6, 0, 10_500, 10_800, "MGI:N0")
    right = _feature(b6, 0, 20_000, 21_000, "MGI:N2")
    features.add(landmark, left, overlapping, right)
    return LandmarkSpec("MGI:L", b6, length=1000)


def test_guess_uses_single_side_for_both_directions(caroli, features, neighbourhood):
    features.add(_feature(caroli, 1, 4900, 5100, "MGI:N2"))
    strip = _aligner(features).compute_landmark_region(neighbourhood, caroli)
    [region] = strip.regions
    assert region.chr.name == "2"
    assert (region.start, region.end) == (4500, 5499)


def test_guess_skips_neighbours_overlapping_landmark(caroli, features, neighbourhood):
    features.add(_feature(caroli, 0, 1, 100, "MGI:N0"), _feature(caroli, 1, 4900, 5100, "MGI:N2"))
    strip = _aligner(features).guess_landmark_region(neighbourhood, caroli)
    assert [r.chr.name for r in strip.regions] == ["2"]


def test_guess_same_chromosome_spans_both_neighbours(caroli, features, neighbourhood):
    features.add(_feature(caroli, 1, 1000, 1200, "MGI:N1"), _feature(caroli, 1, 4900, 5100, "MGI:N2"))
    strip = _aligner(features).guess_landmark_region(neighbourhood, caroli)
    [region] = strip.regions
    assert (region.start, region.end) == (2550, 3549)


def test_guess_different_chromosomes_gives_two_regions(caroli, features, neighbourhood):
    features.add(_feature(caroli, 0, 7000, 7200, "MGI:N1"), _feature(caroli, 1, 4900, 5100, "MGI:N2"))
    strip = _aligner(features).guess_landmark_region(neighbourhood, caroli)
    assert [(r.chr.name, r.start, r.end) for r in strip.regions] == [
        ("1", 6500, 7499),
        ("2", 4400, 5399),
    ]


def test_guess_without_any_mapped_neighbour_is_empty(caroli, features, neighbourhood):
    strip = _aligner(features).guess_landmark_region(neighbourhood, caroli)
    assert strip.genome is caroli
    assert strip.regions == []
