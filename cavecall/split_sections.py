"""Reading and writing split-section lists.

A split file holds one section per line as ``chrom<TAB>start<TAB>stop``.
The start is zero based and the stop is one based, as in BED.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterator, List, TextIO, Union

PathLike = Union[str, "os.PathLike[str]"]

__all__ = [
    "SplitSection",
    "format_section",
    "write_section",
    "section_from_index",
    "all_split_sections",
]


@dataclass(frozen=True)
class SplitSection:
    """A section of a chromosome, with a one-based start and inclusive stop."""

    chrom: str
    start: int
    stop: int

    @property
    def start_zero_based(self) -> int:
        """The start as stored in a split file."""
        return self.start - 1


def format_section(chrom: str, start_one_based: int, stop: int) -> str:
    """Return the split-file line for a section."""
    return f"{chrom}\t{start_one_based - 1}\t{stop}\n"


def write_section(output: TextIO, chrom: str, start_one_based: int, stop: int) -> int:
    """Write one section line to ``output`` and return the characters written."""
    if output is None:
        raise ValueError("output stream is required")
    line = format_section(chrom, start_one_based, stop)
    output.write(line)
    return len(line)


def _parse_line(line: str, line_number: int) -> SplitSection:
    fields = line.split()
    if len(fields) < 3:
        raise ValueError(f"Error parsing split file line number {line_number}: {line!r}.")
    chrom, start_text, stop_text = fields[:3]
    try:
        start_zero_based = int(start_text)
        stop = int(stop_text)
    except ValueError as exc:
        raise ValueError(
            f"Error parsing split file line number {line_number}: {line!r}."
        ) from exc
    return SplitSection(chrom, start_zero_based + 1, stop)


def _iter_sections(path: PathLike) -> Iterator[SplitSection]:
    with open(path, "r", encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            yield _parse_line(line, line_number)


def section_from_index(path: PathLike, index: int) -> SplitSection:
    """Return the section on the one-based line ``index`` of a split file."""
    if index <= 0:
        raise ValueError(f"Split index must be > 0, got {index}.")
    if path is None:
        raise ValueError("split file path is required")
    with open(path, "r", encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            if line_number == index:
                return _parse_line(line, line_number)
    raise IndexError(f"No section at index {index} in split file {path}.")


def all_split_sections(path: PathLike) -> List[SplitSection]:
    """Return every section listed in a split file, in file order."""
    if path is None:
        raise ValueError("split file path is required")
    return list(_iter_sections(path))