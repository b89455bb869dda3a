"""Annotations module - inspecting, merging and stripping PDF annotations"""

from pdfannot.annotations.resolver import (
    AnnotsStorage,
    annots_storage,
    read_annotation_ids,
    mutable_annotation_array,
    get_page_annotation_objects,
    annotation_subtype,
    remove_annotations,
)
from pdfannot.annotations.stats import (
    AnnotationStats,
    StatsTable,
    compute_stats,
    collect_stats,
)
from pdfannot.annotations.merge import (
    MergeResult,
    MergeWarning,
    merge_annotations,
    would_overwrite,
)
from pdfannot.annotations.strip import (
    StripResult,
    find_strippable,
    strip_annotations,
)

__all__ = [
    'AnnotsStorage',
    'annots_storage',
    'read_annotation_ids',
    'mutable_annotation_array',
    'get_page_annotation_objects',
    'annotation_subtype',
    'remove_annotations',
    'AnnotationStats',
    'StatsTable',
    'compute_stats',
    'collect_stats',
    'MergeResult',
    'MergeWarning',
    'merge_annotations',
    'would_overwrite',
    'StripResult',
    'find_strippable',
    'strip_annotations',
]
