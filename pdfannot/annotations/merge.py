"""Merging annotations from several PDFs into a reference PDF"""

from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Sequence

import pikepdf

from pdfannot.core.constants import DEFAULT_EXCLUDE
from pdfannot.core.exceptions import ValidationError
from pdfannot.core.pdf_base import PDFDocument
from pdfannot.annotations.resolver import (
    annotation_subtype,
    get_page_annotation_objects,
    mutable_annotation_array,
)


@dataclass
class MergeWarning:
    """A page of a secondary file that has no counterpart in the reference file"""
    file: Path
    page_number: int
    discarded: int

    def __str__(self) -> str:
        return (
            f"Reference document does not contain page number {self.page_number}. "
            f"{self.discarded} annotation(s) from {self.file} on this page were ignored."
        )


@dataclass
class MergeResult:
    output: Path
    files: List[Path]
    excluded: FrozenSet[str]
    copied: int = 0
    pages_updated: List[int] = field(default_factory=list)
    warnings: List[MergeWarning] = field(default_factory=list)


def would_overwrite(dest: Path) -> bool:
    """Whether writing to ``dest`` would replace an existing file"""
    return Path(dest).exists()


def merge_annotations(
    files: Sequence[Path],
    dest: Path,
    exclude: Iterable[str] = DEFAULT_EXCLUDE,
) -> MergeResult:
    """
    Merge annotations of several PDFs into the first one

    Annotations are matched to pages by page number. Every annotation of a
    secondary file whose subtype is not excluded is copied into the first
    file's object table and appended to the same-numbered page. Annotations
    of the first file are always kept, whatever their subtype.

    Args:
        files: Reference PDF followed by at least one secondary PDF
        dest: Output PDF path
        exclude: Annotation subtypes not to copy from secondary files

    Returns:
        MergeResult describing what was copied and which pages were dropped

    Raises:
        ValidationError: If fewer than two files are given
        PDFOpenError: If any input cannot be read (nothing is written)
        PDFWriteError: If the output cannot be written
    """
    files = [Path(f) for f in files]
    if len(files) < 2:
        raise ValidationError(f"At least two files are required to merge annotations (got {len(files)})")

    excluded = frozenset(exclude)
    result = MergeResult(output=Path(dest), files=files, excluded=excluded)

    with ExitStack() as stack:
        primary = stack.enter_context(PDFDocument.open(files[0]))
        page_index = primary.page_ids()
        pending: Dict[int, List[pikepdf.Object]] = {}

        # Secondaries stay open until the output is saved: copied streams
        # are read from their source file at write time.
        for path in files[1:]:
            secondary = stack.enter_context(PDFDocument.open(path))

            for page_number, page_id in secondary.page_ids().items():
                annotations = [
                    annotation
                    for annotation in get_page_annotation_objects(secondary, page_id)
                    if annotation_subtype(annotation) not in excluded
                ]

                if page_number not in page_index:
                    if annotations:
                        result.warnings.append(MergeWarning(path, page_number, len(annotations)))
                    continue

                target_page = primary.page_dictionary(page_index[page_number])
                for annotation in annotations:
                    copied = primary.add_object(annotation)
                    if "/P" in annotation:
                        copied["/P"] = target_page
                    pending.setdefault(page_number, []).append(copied)
                    result.copied += 1

        for page_number in sorted(pending):
            annots = mutable_annotation_array(primary, page_index[page_number])
            annots.extend(pending[page_number])
            result.pages_updated.append(page_number)

        primary.save(result.output)

    return result
