"""
Division taxonomy: grouping divisions under their organisational units.

All functions in this module are pure (no I/O).
"""

from domain.taxonomy.index import DivisionGroup, TaxonomyIndex, build_taxonomy_index

__all__ = [
    "DivisionGroup",
    "TaxonomyIndex",
    "build_taxonomy_index",
]
