"""VCF header pieces, genotype representations and no-analysis BED output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, TextIO, Tuple

__all__ = [
    "Contig",
    "CallingParameters",
    "NoAnalysisWriter",
    "BASES",
    "VCF_VARIANT_FORMAT",
    "genotype_representation",
    "generate_info_lines",
    "generate_format_lines",
    "generate_process_log",
    "generate_contig_lines",
]

BASES = ("A", "C", "G", "T")

VCF_VARIANT_FORMAT = "GT:FAZ:FCZ:FGZ:FTZ:RAZ:RCZ:RGZ:RTZ:PM"

_INFO_KEY = "INFO"
_FORMAT_KEY = "FORMAT"
_PROCESSLOG_KEY = "vcfProcessLog"
_INPUTVCF_KEY = "InputVCF"
_INPUTSOURCE_KEY = "InputVCFSource"
_INPUT_SOURCE_VALUE = "CaVEMan"
_INPUTVERSION_KEY = "InpuVCFVer"
_INPUTPARAMS_KEY = "InputVCFParam"

_INFO_FIELDS = (
    'ID=DP,Number=1,Type=Integer,Description="Total Depth"',
    'ID=MP,Number=1,Type=Float,Description="Sum of CaVEMan somatic genotype probabilities"',
    'ID=GP,Number=1,Type=Float,Description="Sum of CaVEMan germline genotype probabilities"',
    'ID=TG,Number=1,Type=String,Description="Most probable genotype as called by CaVEMan"',
    'ID=TP,Number=1,Type=Float,Description="Probability of most probable genotype as called by CaVEMan"',
    'ID=SG,Number=1,Type=String,Description="2nd most probable genotype as called by CaVEMan"',
    'ID=SP,Number=1,Type=Float,Description="Probability of 2nd most probable genotype as called by CaVEMan"',
    'ID=DS,Number=.,Type=String,Description="DBSnp ID of known SNP"',
)


def _count_field(strand_code: str, base: str, strand_name: str) -> str:
    return (
        f"ID={strand_code}{base}Z,Number=1,Type=Integer,"
        f'Description="Reads presenting a {base} for this position, {strand_name} strand"'
    )


_FORMAT_FIELDS = (
    ('ID=GT,Number=1,Type=String,Description="Genotype"',)
    + tuple(_count_field("F", base, "forward") for base in BASES)
    + tuple(_count_field("R", base, "reverse") for base in BASES)
    + ('ID=PM,Number=1,Type=Float,Description="Proportion of mut allele"',)
)


@dataclass(frozen=True)
class Contig:
    """A reference sequence as described in a VCF contig header line."""

    name: str
    length: int
    assembly: str
    species: str


@dataclass(frozen=True)
class CallingParameters:
    """Parameters of a calling run, recorded in the VCF process log."""

    normal_contamination: float
    reference_bias: float
    prior_mut_rate: float
    prior_snp_rate: float
    snp_cutoff: float
    mut_cutoff: float


def genotype_representation(base_counts: Mapping[str, int], ref_base: str) -> Tuple[int, int]:
    """Return the ``(first, second)`` GT allele codes for a genotype's base counts.

    No reference allele gives 1/1; reference plus any other base gives 0/1;
    reference alone gives 0/0.
    """
    if base_counts.get(ref_base, 0) == 0:
        return 1, 1
    has_variant = any(
        base != ref_base and base_counts.get(base, 0) > 0 for base in BASES
    )
    return 0, 1 if has_variant else 0


def _header_lines(key: str, fields: Iterable[str]) -> str:
    return "".join(f"##{key}=<{field}>\n" for field in fields)


def generate_info_lines() -> str:
    """Return the INFO header lines."""
    return _header_lines(_INFO_KEY, _INFO_FIELDS)


def generate_format_lines() -> str:
    """Return the FORMAT header lines."""
    return _header_lines(_FORMAT_KEY, _FORMAT_FIELDS)


def generate_process_log(version: str, params: CallingParameters) -> str:
    """Return the process-log and version header lines for a run."""
    param_text = (
        "NORMAL_CONTAMINATION=%g,REF_BIAS=%g,PRIOR_MUT_RATE=%g,"
        "PRIOR_SNP_RATE=%g,SNP_CUTOFF=%g,MUT_CUTOFF=%g"
        % (
            params.normal_contamination,
            params.reference_bias,
            params.prior_mut_rate,
            params.prior_snp_rate,
            params.snp_cutoff,
            params.mut_cutoff,
        )
    )
    return (
        f"##{_PROCESSLOG_KEY}=<{_INPUTVCF_KEY}=<.>,"
        f"{_INPUTSOURCE_KEY}=<{_INPUT_SOURCE_VALUE}>,"
        f'{_INPUTVERSION_KEY}=<"{version}">,'
        f"{_INPUTPARAMS_KEY}=<{param_text}>>\n"
        f"##cavemanVersion={version}\n"
    )


def generate_contig_lines(contigs: Iterable[Contig]) -> str:
    """Return one contig header line per reference sequence."""
    return "".join(
        f"##contig=<ID={c.name},length={c.length},assembly={c.assembly},species={c.species}>\n"
        for c in contigs
    )


class NoAnalysisWriter:
    """Collects runs of positions left out of analysis and writes them as BED.

    Adjacent appended ranges are merged. Once more than ``cache_size``
    ranges are held they are flushed to ``output``.
    """

    def __init__(self, output: TextIO, cache_size: int = 500) -> None:
        if output is None:
            raise ValueError("output stream is required")
        self.output = output
        self.cache_size = cache_size
        self._sections: List[Tuple[int, int]] = []

    @property
    def pending(self) -> List[Tuple[int, int]]:
        """Ranges held but not yet written, as one-based ``(beg, end)`` pairs."""
        return list(self._sections)

    def append(self, chr_name: str, start_one_based: int, stop: int) -> None:
        """Record a range, merging it onto the previous one when they touch."""
        if self._sections and self._sections[-1][1] + 1 == start_one_based:
            beg, _ = self._sections[-1]
            self._sections[-1] = (beg, stop)
        else:
            self._sections.append((start_one_based, stop))
        if len(self._sections) > self.cache_size:
            self.flush(chr_name)

    def flush(self, chr_name: str) -> None:
        """Write every held range as a BED line and forget them."""
        self.output.writelines(
            f"{chr_name}\t{beg - 1}\t{end}\n" for beg, end in self._sections
        )
        self._sections.clear()