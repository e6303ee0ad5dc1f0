import asyncio

from mgv_gui.model import RegionStore, SyntenyBlock, SyntenyMapper, combine_regions


def test_combine_regions_merges_consecutive_indexes(b6):
    chr1 = b6.chromosomes[0]
    blocks = [
        SyntenyBlock(chr1, 500, 600, 3),
        SyntenyBlock(chr1, 100, 200, 0),
        SyntenyBlock(chr1, 201, 300, 1),
    ]
    combined = combine_regions(blocks)
    assert [(b.start, b.end) for b in combined] == [(100, 300), (500, 600)]


def test_combine_regions_drops_duplicates(b6):
    chr1 = b6.chromosomes[0]
    blocks = [
        SyntenyBlock(chr1, 100, 200, 0),
        SyntenyBlock(chr1, 100, 200, 0),
        SyntenyBlock(chr1, 201, 300, 1),
        SyntenyBlock(chr1, 301, 400, 2),
    ]
    combined = combine_regions(blocks)
    assert len(combined) == 1
    assert (combined[0].start, combined[0].end, combined[0].index) == (100, 400, 2)


def test_combine_regions_empty():
    assert combine_regions([]) == []


def test_map_region_to_own_genome_is_identity(b6, translator):
    store = RegionStore()
    region = store.make_region(genome=b6, chr=b6.chromosomes[0], start=1, end=1000)
    strip = asyncio.run(SyntenyMapper(translator, store).map_region_to_genome(region, b6))
    assert strip.regions[0] is region
    assert translator.calls == []


def test_map_region_to_other_genome_uses_translator(b6, aj, translator):
    store = RegionStore()
    region = store.make_region(genome=b6, chr=b6.chromosomes[0], start=1, end=1000)
    translator.blocks[aj] = [
        SyntenyBlock(aj.chromosomes[1], 201, 300, 1),
        SyntenyBlock(aj.chromosomes[1], 100, 200, 0),
    ]
    strip = asyncio.run(SyntenyMapper(translator, store).map_region_to_genome(region, aj))

    assert translator.calls == [(b6, "1", 1, 1000, aj)]
    assert strip.genome is aj
    [mapped] = strip.regions
    assert mapped.genome is aj
    assert mapped.chr is aj.chromosomes[1]
    assert (mapped.start, mapped.end, mapped.width) == (100, 300, 201)
    assert mapped.id != region.id
