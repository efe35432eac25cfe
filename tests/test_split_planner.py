import io

import pytest

from cavecall.split_planner import (
    AlignedRead,
    IgnoreRegion,
    adjusted_read_count,
    find_ignore_overlap,
    is_whole_chromosome_ignored,
    plan_sections,
    read_lengths,
    round_divide_integer,
    write_sections,
)
from cavecall.split_sections import SplitSection, all_split_sections


def _reads(positions, length=100):
    return [AlignedRead(pos, length) for pos in positions]


def _assert_contiguous(sections, chr_length):
    assert sections[0].start == 1
    assert sections[-1].stop == chr_length
    for before, after in zip(sections, sections[1:]):
        assert after.start == before.stop + 1


def test_round_divide_integer_zero_operands_give_one():
    assert round_divide_integer(0, 5) == 1
    assert round_divide_integer(7, 0) == 1


def test_round_divide_integer_exact_division():
    assert round_divide_integer(20, 5) == 4


def test_adjusted_read_count_unchanged_when_lengths_match_base():
    assert adjusted_read_count(350000, 100, 100, 100) == 350000


def test_adjusted_read_count_scales_inversely_with_length():
    shorter = adjusted_read_count(1000, 50, 50, 100)
    longer = adjusted_read_count(1000, 200, 200, 100)
    assert shorter > 1000 > longer


def test_adjusted_read_count_rejects_zero_length():
    with pytest.raises(ValueError):
        adjusted_read_count(1000, 0, 0, 100)


def test_find_ignore_overlap():
    regions = [IgnoreRegion(10, 20), IgnoreRegion(30, 40)]
    assert find_ignore_overlap(15, regions) == regions[0]
    assert find_ignore_overlap(40, regions) == regions[1]
    assert find_ignore_overlap(25, regions) is None


def test_is_whole_chromosome_ignored():
    assert is_whole_chromosome_ignored([IgnoreRegion(1, 5000)], 5000)
    assert not is_whole_chromosome_ignored([IgnoreRegion(2, 5000)], 5000)
    assert not is_whole_chromosome_ignored(
        [IgnoreRegion(1, 2000), IgnoreRegion(2001, 5000)], 5000
    )


def test_whole_chromosome_ignored_yields_no_sections():
    sections = plan_sections(
        "1", 5000, _reads([10, 20]), _reads([10, 20]), [IgnoreRegion(1, 5000)], 2
    )
    assert sections == []


def test_no_reads_gives_single_section():
    assert plan_sections("1", 5000, [], [], [], 10) == [SplitSection("1", 1, 5000)]


def test_few_reads_stay_in_one_section():
    sections = plan_sections("X", 5000, _reads([10, 20]), _reads([15, 25]), [], 100)
    assert sections == [SplitSection("X", 1, 5000)]


def test_many_reads_are_split_into_contiguous_sections():
    positions = list(range(10, 1000, 10))
    sections = plan_sections("2", 2000, _reads(positions), _reads(positions), [], 5)
    assert len(sections) > 1
    _assert_contiguous(sections, 2000)
    assert all(s.chrom == "2" for s in sections)
    for section in sections[:-1]:
        assert section.stop in positions


def test_filtered_reads_do_not_count():
    positions = list(range(10, 1000, 10))
    failing = [AlignedRead(p, 100, passes_filters=False) for p in positions]
    sections = plan_sections("2", 2000, failing, failing, [], 5)
    assert sections == [SplitSection("2", 1, 2000)]


def test_ignored_reads_do_not_count():
    positions = list(range(10, 1000, 10))
    region = IgnoreRegion(2, 1500)
    sections = plan_sections("2", 2000, _reads(positions), _reads(positions), [region], 5)
    assert sections == [SplitSection("2", 1, 2000)]


def test_cut_inside_ignore_region_moves_past_it():
    positions = [10, 20, 30, 40]
    region = IgnoreRegion(11, 19)
    sections = plan_sections("3", 500, _reads(positions), _reads(positions), [region], 2)
    _assert_contiguous(sections, 500)
    assert any(s.stop == region.end + 1 for s in sections)
    for section in sections[:-1]:
        assert find_ignore_overlap(section.stop + 1, [region]) is None


def test_plan_rejects_non_positive_read_count():
    with pytest.raises(ValueError):
        plan_sections("1", 100, [], [], [], 0)


def test_read_lengths_distinct_and_filtered():
    normal = [AlignedRead(10, 100), AlignedRead(20, 150), AlignedRead(30, 75, False)]
    tumour = [AlignedRead(40, 100), AlignedRead(50, 125)]
    ignored = [AlignedRead(60, 90)]
    lengths = read_lengths(normal, tumour + ignored, [IgnoreRegion(55, 65)])
    assert lengths == [100, 125, 150]


def test_write_sections_round_trip(tmp_path):
    positions = list(range(10, 1000, 10))
    buffer = io.StringIO()
    sections = write_sections(buffer, "7", 2000, _reads(positions), _reads(positions), [], 5)
    path = tmp_path / "splitList.7"
    path.write_text(buffer.getvalue(), encoding="utf-8")
    assert all_split_sections(path) == sections


def test_write_sections_line_format():
    buffer = io.StringIO()
    write_sections(buffer, "1", 10000, [], [], [], 10)
    assert buffer.getvalue() == "1\t0\t10000\n"


def test_write_sections_whole_chromosome_ignored_writes_nothing():
    buffer = io.StringIO()
    result = write_sections(buffer, "1", 100, [], [], [IgnoreRegion(1, 100)], 10)
    assert result == []
    assert buffer.getvalue() == ""