from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence

import pikepdf
import pytest

# Per page: list of annotation subtypes, or None for a page without /Annots
PageAnnots = Optional[Sequence[str]]


def make_annotation(pdf: pikepdf.Pdf, subtype: Optional[str], **extra) -> pikepdf.Object:
    annotation = pikepdf.Dictionary(Type=pikepdf.Name.Annot, Rect=[0, 0, 10, 10], **extra)
    if subtype is not None:
        annotation["/Subtype"] = pikepdf.Name(f"/{subtype}")
    return pdf.make_indirect(annotation)


def build_pdf(pages: Sequence[PageAnnots], storage: str = "direct") -> pikepdf.Pdf:
    pdf = pikepdf.Pdf.new()
    for subtypes in pages:
        page = pdf.add_blank_page(page_size=(72, 72))
        if subtypes is None:
            continue
        annots = pikepdf.Array([make_annotation(pdf, subtype) for subtype in subtypes])
        if storage == "indirect":
            annots = pdf.make_indirect(annots)
        page.obj["/Annots"] = annots
    return pdf


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, pages: Sequence[PageAnnots], storage: str = "direct") -> Path:
        path = tmp_path / filename
        with build_pdf(pages, storage) as pdf:
            pdf.save(path)
        return path

    return _create


@pytest.fixture()
def page_subtypes() -> Callable[[Path], List[List[str]]]:
    """Subtypes found in each page's /Annots, in array order"""

    def _read(path: Path) -> List[List[str]]:
        result = []
        with pikepdf.open(path) as pdf:
            for page in pdf.pages:
                annots = page.obj.get("/Annots")
                if annots is None:
                    result.append([])
                    continue
                result.append([str(annot.get("/Subtype", ""))[1:] for annot in annots])
        return result

    return _read
