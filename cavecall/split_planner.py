"""Planning of split sections from paired normal and tumour read streams.

A chromosome is cut into sections so that each holds roughly a fixed number
of usable reads across both samples. Reads are walked in step from the two
position-sorted streams, so that neither stream runs ahead of the other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Set, TextIO

from cavecall.split_sections import SplitSection, write_section

__all__ = [
    "IgnoreRegion",
    "AlignedRead",
    "DEFAULT_MAX_READ_COUNT",
    "DEFAULT_READ_LENGTH_BASE",
    "round_divide_integer",
    "adjusted_read_count",
    "find_ignore_overlap",
    "is_whole_chromosome_ignored",
    "plan_sections",
    "read_lengths",
    "write_sections",
]

DEFAULT_MAX_READ_COUNT = 350000
DEFAULT_READ_LENGTH_BASE = 100


@dataclass(frozen=True)
class IgnoreRegion:
    """A region to leave out of analysis, one based and inclusive."""

    beg: int
    end: int

    def contains(self, position: int) -> bool:
        return self.beg <= position <= self.end


@dataclass(frozen=True)
class AlignedRead:
    """The parts of an aligned read that section planning needs.

    ``pos`` is the zero-based leftmost mapping position, ``length`` the
    query sequence length and ``passes_filters`` whether the read's flags
    allow it into the analysis.
    """

    pos: int
    length: int
    passes_filters: bool = True


def _c_divide(dividend: int, divisor: int) -> int:
    """Integer division truncating towards zero."""
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend < 0) == (divisor < 0) else -quotient


def round_divide_integer(dividend: int, divisor: int) -> int:
    """Divide rounding to the nearest integer; 1 if either operand is zero."""
    if dividend == 0 or divisor == 0:
        return 1
    return _c_divide(dividend + _c_divide(divisor, 2), divisor)


def adjusted_read_count(
    max_read_count: int,
    avg_read_len_normal: float,
    avg_read_len_tumour: float,
    read_length_base: int = DEFAULT_READ_LENGTH_BASE,
) -> int:
    """Scale a read-count guide by how the mean read length compares to a base length."""
    avg_read_len = (float(avg_read_len_normal) + float(avg_read_len_tumour)) / 2.0
    if avg_read_len <= 0:
        raise ValueError("Average read length must be > 0 to adjust the read count.")
    proportion = float(read_length_base) / avg_read_len
    return int(float(max_read_count) * proportion)


def find_ignore_overlap(
    position: int, ignore_regions: Sequence[IgnoreRegion]
) -> Optional[IgnoreRegion]:
    """Return the first ignore region containing ``position``, or None."""
    return next((reg for reg in ignore_regions if reg.contains(position)), None)


def is_whole_chromosome_ignored(
    ignore_regions: Sequence[IgnoreRegion], chr_length: int
) -> bool:
    """True when a single ignore region spans the whole chromosome."""
    return (
        len(ignore_regions) == 1
        and ignore_regions[0].beg == 1
        and ignore_regions[0].end >= chr_length
    )


class _ReadStream:
    """Steps through one sample's reads, remembering the last position seen."""

    def __init__(self, reads: Iterable[AlignedRead]) -> None:
        self._reads: Iterator[AlignedRead] = iter(reads)
        self.active = True
        self.pos = 0

    def advance(self, ignore_regions: Sequence[IgnoreRegion]) -> bool:
        """Move to the next read; return True if it counts towards the section."""
        read = next(self._reads, None)
        if read is None:
            self.active = False
            return False
        self.pos = read.pos
        return read.passes_filters and find_ignore_overlap(read.pos, ignore_regions) is None


def plan_sections(
    chrom: str,
    chr_length: int,
    normal_reads: Iterable[AlignedRead],
    tumour_reads: Iterable[AlignedRead],
    ignore_regions: Sequence[IgnoreRegion] = (),
    max_read_count: int = DEFAULT_MAX_READ_COUNT,
) -> List[SplitSection]:
    """Cut a chromosome into sections of about ``max_read_count`` usable reads.

    Returns no sections when the whole chromosome is ignored. Otherwise the
    last section always runs to ``chr_length``.
    """
    if max_read_count < 1:
        raise ValueError(f"max_read_count must be > 0, got {max_read_count}.")
    ignore_regions = list(ignore_regions)
    if is_whole_chromosome_ignored(ignore_regions, chr_length):
        return []

    normal = _ReadStream(normal_reads)
    tumour = _ReadStream(tumour_reads)
    sections: List[SplitSection] = []
    rd_count = 0
    sect_start = 1

    while normal.active or tumour.active:
        while (
            normal.pos <= tumour.pos
            and normal.active
            and tumour.active
            and rd_count <= max_read_count
        ):
            if normal.advance(ignore_regions):
                rd_count += 1

        while tumour.pos <= normal.pos and tumour.active and normal.active:
            if tumour.advance(ignore_regions):
                rd_count += 1

        if not normal.active and tumour.active:
            while tumour.active and rd_count <= max_read_count:
                if tumour.advance(ignore_regions):
                    rd_count += 1

        if not tumour.active and normal.active:
            while normal.active and rd_count <= max_read_count:
                if normal.advance(ignore_regions):
                    rd_count += 1

        if rd_count >= max_read_count:
            sect_stop = min(tumour.pos, normal.pos)
            region = find_ignore_overlap(sect_stop + 1, ignore_regions)
            if region is not None:
                sect_stop = region.end + 1
            if sect_stop > 0 and sect_stop >= sect_start:
                sections.append(SplitSection(chrom, sect_start, sect_stop))
            # The loops above count the read that triggered the cut.
            rd_count = 1
            sect_start = sect_stop + 1

    sections.append(SplitSection(chrom, sect_start, chr_length))
    return sections


def read_lengths(
    normal_reads: Iterable[AlignedRead],
    tumour_reads: Iterable[AlignedRead],
    ignore_regions: Sequence[IgnoreRegion] = (),
) -> List[int]:
    """Return the distinct lengths of usable reads in both samples, sorted."""
    ignore_regions = list(ignore_regions)
    lengths: Set[int] = set()
    for reads in (normal_reads, tumour_reads):
        lengths.update(
            read.length
            for read in reads
            if read.passes_filters and find_ignore_overlap(read.pos, ignore_regions) is None
        )
    return sorted(lengths)


def write_sections(
    output: TextIO,
    chrom: str,
    chr_length: int,
    normal_reads: Iterable[AlignedRead],
    tumour_reads: Iterable[AlignedRead],
    ignore_regions: Sequence[IgnoreRegion] = (),
    max_read_count: int = DEFAULT_MAX_READ_COUNT,
) -> List[SplitSection]:
    """Plan the sections of a chromosome, write them to ``output`` and return them."""
    sections = plan_sections(
        chrom, chr_length, normal_reads, tumour_reads, ignore_regions, max_read_count
    )
    for section in sections:
        write_section(output, section.chrom, section.start, section.stop)
    return sections