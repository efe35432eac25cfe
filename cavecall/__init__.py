"""Split-list access, split-section planning and VCF header helpers for somatic substitution calling."""

__version__ = "1.15.5"
__all__ = ["split_sections", "split_planner", "vcf_output"]