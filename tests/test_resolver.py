from __future__ import annotations

from pathlib import Path

import pikepdf
import pytest

from pdfannot.annotations.resolver import (
    AnnotsStorage,
    annotation_subtype,
    annots_storage,
    get_page_annotation_objects,
    mutable_annotation_array,
    read_annotation_ids,
    remove_annotations,
)
from pdfannot.core.exceptions import StructureError
from pdfannot.core.pdf_base import PDFDocument

from conftest import build_pdf, make_annotation


def _document(tmp_path: Path, pdf: pikepdf.Pdf) -> PDFDocument:
    return PDFDocument(tmp_path / "in-memory.pdf", pdf)


def _first_page_id(document: PDFDocument):
    return document.page_ids()[1]


@pytest.mark.parametrize("storage", ["direct", "indirect"])
def test_read_ids_follow_array_order(tmp_path: Path, storage: str) -> None:
    pdf = build_pdf([["Text", "Link", "Highlight"]], storage=storage)
    document = _document(tmp_path, pdf)
    page_id = _first_page_id(document)

    expected = [annot.objgen for annot in pdf.pages[0].obj["/Annots"]]

    assert read_annotation_ids(document, page_id) == expected
    assert annots_storage(document, page_id) is AnnotsStorage(storage)


def test_read_ids_without_annots(tmp_path: Path) -> None:
    document = _document(tmp_path, build_pdf([None]))
    page_id = _first_page_id(document)

    assert annots_storage(document, page_id) is AnnotsStorage.ABSENT
    assert read_annotation_ids(document, page_id) == []


def test_read_ids_skip_inline_and_null_entries(tmp_path: Path) -> None:
    pdf = build_pdf([["Text"]])
    annots = pdf.pages[0].obj["/Annots"]
    annots.append(pikepdf.Dictionary(Type=pikepdf.Name.Annot, Subtype=pikepdf.Name.Square))
    annots.append(None)
    document = _document(tmp_path, pdf)

    assert read_annotation_ids(document, _first_page_id(document)) == [annots[0].objgen]


def test_unexpected_annots_type_raises(tmp_path: Path) -> None:
    pdf = build_pdf([None])
    pdf.pages[0].obj["/Annots"] = pikepdf.Name.Oops
    document = _document(tmp_path, pdf)
    page_id = _first_page_id(document)

    with pytest.raises(StructureError) as excinfo:
        read_annotation_ids(document, page_id)

    assert excinfo.value.object_id == page_id
    assert f"{page_id[0]} {page_id[1]} R" in str(excinfo.value)


def test_indirect_annots_to_dictionary_raises(tmp_path: Path) -> None:
    pdf = build_pdf([None])
    pdf.pages[0].obj["/Annots"] = pdf.make_indirect(pikepdf.Dictionary())
    document = _document(tmp_path, pdf)

    with pytest.raises(StructureError):
        mutable_annotation_array(document, _first_page_id(document))


def test_page_id_that_is_not_a_dictionary_raises(tmp_path: Path) -> None:
    pdf = build_pdf([None])
    stray = pdf.make_indirect(pikepdf.Array([1, 2]))
    document = _document(tmp_path, pdf)

    with pytest.raises(StructureError):
        read_annotation_ids(document, stray.objgen)


def test_mutable_array_installed_once_when_absent(tmp_path: Path) -> None:
    pdf = build_pdf([None])
    document = _document(tmp_path, pdf)
    page_id = _first_page_id(document)
    annotation = make_annotation(pdf, "Text")

    mutable_annotation_array(document, page_id).append(annotation)
    second = mutable_annotation_array(document, page_id)

    assert len(second) == 1
    assert annots_storage(document, page_id) is AnnotsStorage.DIRECT
    assert read_annotation_ids(document, page_id) == [annotation.objgen]


def test_mutable_array_of_indirect_annots_is_the_referenced_object(tmp_path: Path) -> None:
    pdf = build_pdf([["Text"]], storage="indirect")
    document = _document(tmp_path, pdf)
    page_id = _first_page_id(document)
    stored = pdf.pages[0].obj["/Annots"]

    annots = mutable_annotation_array(document, page_id)
    annots.append(make_annotation(pdf, "Square"))

    assert annots.is_indirect
    assert annots.objgen == stored.objgen
    assert len(read_annotation_ids(document, page_id)) == 2
    assert annots_storage(document, page_id) is AnnotsStorage.INDIRECT


def test_annotation_subtype(tmp_path: Path) -> None:
    pdf = pikepdf.Pdf.new()

    assert annotation_subtype(make_annotation(pdf, "Highlight")) == "Highlight"
    assert annotation_subtype(make_annotation(pdf, None)) == ""
    assert annotation_subtype(pikepdf.Dictionary(Subtype=pikepdf.String("Text"))) == ""
    assert annotation_subtype(pikepdf.Array()) == ""


def test_annotation_objects_skip_non_dictionaries(tmp_path: Path) -> None:
    pdf = build_pdf([["Text"]])
    pdf.pages[0].obj["/Annots"].append(pdf.make_indirect(pikepdf.Array([1])))
    document = _document(tmp_path, pdf)
    page_id = _first_page_id(document)

    assert len(read_annotation_ids(document, page_id)) == 2
    objects = get_page_annotation_objects(document, page_id)
    assert [annotation_subtype(annotation) for annotation in objects] == ["Text"]


def test_remove_annotations_prunes_every_page(tmp_path: Path) -> None:
    pdf = build_pdf([["Text", "Link"], ["Text"]])
    shared = pdf.pages[0].obj["/Annots"][0]
    pdf.pages[1].obj["/Annots"].append(shared)
    document = _document(tmp_path, pdf)

    pruned = remove_annotations(document, [shared.objgen])

    assert pruned == 2
    first, second = document.page_ids().values()
    assert [annotation_subtype(a) for a in get_page_annotation_objects(document, first)] == ["Link"]
    assert [annotation_subtype(a) for a in get_page_annotation_objects(document, second)] == ["Text"]
    assert not isinstance(document.get_object(shared.objgen), pikepdf.Dictionary)


def test_remove_annotations_drops_empty_direct_array(tmp_path: Path) -> None:
    pdf = build_pdf([["Text"]])
    document = _document(tmp_path, pdf)
    page_id = _first_page_id(document)

    remove_annotations(document, read_annotation_ids(document, page_id))

    assert "/Annots" not in pdf.pages[0].obj
    assert annots_storage(document, page_id) is AnnotsStorage.ABSENT


def test_remove_annotations_keeps_empty_indirect_array(tmp_path: Path) -> None:
    pdf = build_pdf([["Text"]], storage="indirect")
    document = _document(tmp_path, pdf)
    page_id = _first_page_id(document)

    remove_annotations(document, read_annotation_ids(document, page_id))

    assert annots_storage(document, page_id) is AnnotsStorage.INDIRECT
    assert read_annotation_ids(document, page_id) == []


def test_remove_annotations_unlinks_popup(tmp_path: Path) -> None:
    pdf = build_pdf([["Text", "Popup"]])
    text, popup = pdf.pages[0].obj["/Annots"]
    text["/Popup"] = popup
    popup["/Parent"] = text
    document = _document(tmp_path, pdf)

    remove_annotations(document, [popup.objgen])

    remaining = get_page_annotation_objects(document, _first_page_id(document))
    assert len(remaining) == 1
    assert "/Popup" not in remaining[0]


def test_remove_nothing(tmp_path: Path) -> None:
    document = _document(tmp_path, build_pdf([["Text"]]))

    assert remove_annotations(document, []) == 0
    assert len(read_annotation_ids(document, _first_page_id(document))) == 1
