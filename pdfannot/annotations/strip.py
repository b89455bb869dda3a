"""Stripping annotations from a PDF"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, List

from pdfannot.core.constants import DEFAULT_EXCLUDE
from pdfannot.core.pdf_base import PDFDocument, ObjectId
from pdfannot.annotations.resolver import (
    annotation_subtype,
    read_annotation_ids,
    remove_annotations,
)


@dataclass
class StripResult:
    source: Path
    output: Path
    excluded: FrozenSet[str]
    removed: List[ObjectId] = field(default_factory=list)


def find_strippable(document: PDFDocument, excluded: FrozenSet[str]) -> List[ObjectId]:
    """Identifiers of every annotation whose subtype is not excluded, in page order"""
    doomed = []
    for page_id in document.page_ids().values():
        for annotation_id in read_annotation_ids(document, page_id):
            subtype = annotation_subtype(document.get_object(annotation_id))
            if subtype not in excluded:
                doomed.append(annotation_id)
    # an annotation shared between pages is only reported once
    return list(dict.fromkeys(doomed))


def strip_annotations(
    path: Path,
    dest: Path,
    exclude: Iterable[str] = DEFAULT_EXCLUDE,
) -> StripResult:
    """
    Remove annotations from a PDF, keeping excluded subtypes

    The whole document is scanned before anything is removed. Removed
    annotations disappear from the object table and from the /Annots array
    of the pages that referenced them.

    Args:
        path: Input PDF path
        dest: Output PDF path
        exclude: Annotation subtypes to keep

    Returns:
        StripResult listing the removed annotation identifiers

    Raises:
        PDFOpenError: If the input cannot be read
        PDFWriteError: If the output cannot be written
    """
    excluded = frozenset(exclude)
    result = StripResult(source=Path(path), output=Path(dest), excluded=excluded)

    with PDFDocument.open(path) as document:
        result.removed = find_strippable(document, excluded)
        remove_annotations(document, result.removed)
        document.save(result.output)

    return result
