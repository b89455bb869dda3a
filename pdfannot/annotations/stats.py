"""Annotation statistics"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Optional, Tuple

from pdfannot.core.constants import PAGE_NUMBER_COLUMN
from pdfannot.core.pdf_base import PDFDocument
from pdfannot.annotations.resolver import annotation_subtype, get_page_annotation_objects


@dataclass
class StatsTable:
    """Tabular view of annotation counts, ready to be rendered"""
    title: str
    columns: List[str]
    rows: List[List[int]]


@dataclass
class AnnotationStats:
    """Per-page annotation counts of one document, keyed by subtype"""
    path: Path
    pages: List[Counter] = field(default_factory=list)

    @property
    def subtypes(self) -> List[str]:
        """All subtypes seen in the document, sorted"""
        seen = set()
        for counter in self.pages:
            seen.update(counter)
        return sorted(seen)

    @property
    def empty(self) -> bool:
        return not any(self.pages)

    def combined(self) -> Dict[str, int]:
        """Total count of each subtype across all pages"""
        total = Counter()
        for counter in self.pages:
            total.update(counter)
        return {subtype: total[subtype] for subtype in self.subtypes}

    def per_page(self) -> List[Tuple[int, Dict[str, int]]]:
        """Counts of every subtype for each page holding annotations (1-based)"""
        subtypes = self.subtypes
        return [
            (number, {subtype: counter[subtype] for subtype in subtypes})
            for number, counter in enumerate(self.pages, 1)
            if counter
        ]

    def table(self, per_page: bool = False) -> Optional[StatsTable]:
        """
        Build the stats table

        Args:
            per_page: One row per non-empty page instead of a single totals row

        Returns:
            The table, or None when the document has no annotation at all
        """
        if self.empty:
            return None

        subtypes = self.subtypes
        title = f"Annotations stats for: {self.path}"

        if per_page:
            rows = [
                [number] + [counts[subtype] for subtype in subtypes]
                for number, counts in self.per_page()
            ]
            return StatsTable(title, [PAGE_NUMBER_COLUMN] + subtypes, rows)

        combined = self.combined()
        return StatsTable(title, subtypes, [[combined[subtype] for subtype in subtypes]])


def compute_stats(document: PDFDocument) -> AnnotationStats:
    """Count annotations by subtype on every page, in page order"""
    stats = AnnotationStats(path=document.path)
    for page_id in document.page_ids().values():
        stats.pages.append(Counter(
            annotation_subtype(annotation)
            for annotation in get_page_annotation_objects(document, page_id)
        ))
    return stats


def collect_stats(path: Path) -> AnnotationStats:
    """Open a PDF and count its annotations"""
    with PDFDocument.open(path) as document:
        return compute_stats(document)
