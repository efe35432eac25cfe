# cavecall

Building blocks for a somatic substitution caller that works on matched
tumour/normal sequencing data. The package has no dependencies outside the
standard library.

- **Split lists** (`cavecall.split_sections`): read and write tab-separated
  split files. Each line is `chrom<TAB>start0<TAB>stop`, with a zero-based
  start and a one-based stop, as in BED.
- **Split planning** (`cavecall.split_planner`): walk normal and tumour
  reads in step, leave out ignored regions, and cut a chromosome into
  sections that each hold about the same number of reads.
- **VCF output** (`cavecall.vcf_output`): the INFO, FORMAT, contig and
  process-log header lines, GT allele codes, and a writer that merges
  positions not analysed into BED intervals.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Split lists

```python
from cavecall.split_sections import all_split_sections, section_from_index

first = section_from_index("splitList", 1)   # line numbers count from 1
for section in all_split_sections("splitList"):
    print(section.chrom, section.start, section.stop)
```

`SplitSection` holds a one-based `start` and an inclusive `stop`.
`start_zero_based` gives the start as it appears in the file.
`format_section` returns one line, and `write_section` writes it to a stream.
`section_from_index` raises `ValueError` for an index below 1, and
`IndexError` when the file has fewer lines than that. A line that cannot be
parsed raises `ValueError`.

## Planning sections

```python
from cavecall.split_planner import AlignedRead, IgnoreRegion, write_sections

normal = [AlignedRead(pos=10, length=100), AlignedRead(pos=50, length=100)]
tumour = [AlignedRead(pos=20, length=100)]
ignored = [IgnoreRegion(beg=1000, end=2000)]

with open("splitList.chr1", "w") as out:
    sections = write_sections(out, "chr1", 5000, normal, tumour, ignored, max_read_count=2)
```

Reads must be sorted by position. A read is counted only when its
`passes_filters` is true and its position falls outside every ignore region.
`plan_sections` does the same planning without writing anything. It returns an
empty list when one ignore region covers the whole chromosome
(`is_whole_chromosome_ignored`). Otherwise the last section always runs to the
chromosome's end.

Other helpers:

- `adjusted_read_count(max_read_count, avg_normal, avg_tumour, read_length_base=100)`
  scales the read-count target by how the mean read length compares with
  the base length.
- `read_lengths(normal, tumour, ignored)` returns the distinct lengths of
  the reads that are counted, sorted.
- `find_ignore_overlap` and `round_divide_integer` are small utilities that
  the planner uses.

The default target is `DEFAULT_MAX_READ_COUNT` (350000 reads).

## VCF header lines

```python
from cavecall.vcf_output import (
    CallingParameters, Contig, generate_contig_lines,
    generate_format_lines, generate_info_lines, generate_process_log,
)

params = CallingParameters(
    normal_contamination=0.1, reference_bias=0.95,
    prior_mut_rate=6e-06, prior_snp_rate=0.0001,
    snp_cutoff=0.95, mut_cutoff=0.8,
)
header = (
    generate_process_log("1.15.5", params)
    + generate_contig_lines([Contig("chr1", 5000, "GRCh37", "human")])
    + generate_info_lines()
    + generate_format_lines()
)
```

`genotype_representation(base_counts, ref_base)` returns the GT codes for a
genotype given as a mapping from base to count:

- `(1, 1)` when the reference base is absent
- `(0, 1)` when the reference base and another base are both present
- `(0, 0)` when only the reference base is present

`VCF_VARIANT_FORMAT` is the FORMAT column string.

`NoAnalysisWriter(output, cache_size=500)` collects one-based ranges that were
not analysed. It joins a range onto the previous one when the two touch. It
writes them as BED lines with a zero-based start when it holds more than
`cache_size` ranges, or when `flush` is called. `pending` shows the ranges it
has not yet written.

## What this package does not do

- It does not read BAM, CRAM or FASTA files. Reads, contigs and chromosome
  lengths must be supplied by the caller.
- It has no command-line program. It also does not run the setup, covariate,
  merge or calling steps of a full pipeline.
- It does not write complete VCF files or per-variant VCF records. It only
  produces the header pieces listed above.