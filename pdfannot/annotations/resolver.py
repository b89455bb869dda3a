"""Resolution of page annotation arrays

A page's ``/Annots`` entry is either an array stored in the page dictionary,
a reference to an array stored elsewhere in the object table, or missing.
Everything above this module works on object identifiers and array handles
and never inspects the storage form itself.
"""

from enum import Enum
from typing import Iterable, List, Optional, Set

import pikepdf

from pdfannot.core.constants import ANNOTATION_LINK_KEYS
from pdfannot.core.exceptions import StructureError
from pdfannot.core.pdf_base import PDFDocument, ObjectId


class AnnotsStorage(Enum):
    DIRECT = "direct"
    INDIRECT = "indirect"
    ABSENT = "absent"


def _reference_id(entry) -> Optional[ObjectId]:
    # pikepdf hands back null as None and numbers as Python scalars
    if isinstance(entry, pikepdf.Object) and entry.is_indirect:
        return entry.objgen
    return None


def _classify(page: pikepdf.Dictionary, page_id: ObjectId) -> AnnotsStorage:
    annots = page.get("/Annots")
    if annots is None:
        return AnnotsStorage.ABSENT
    if not isinstance(annots, pikepdf.Array):
        if getattr(annots, "is_indirect", False):
            raise StructureError("/Annots reference does not resolve to an array", object_id=page_id)
        raise StructureError(f"Unexpected /Annots value of type {type(annots).__name__}", object_id=page_id)
    return AnnotsStorage.INDIRECT if annots.is_indirect else AnnotsStorage.DIRECT


def annots_storage(document: PDFDocument, page_id: ObjectId) -> AnnotsStorage:
    """Tell how the page with the given identifier stores its annotations"""
    return _classify(document.page_dictionary(page_id), page_id)


def read_annotation_ids(document: PDFDocument, page_id: ObjectId) -> List[ObjectId]:
    """
    Get the identifiers of the annotations attached to a page

    Only entries stored as references are collected; inline dictionaries and
    references that resolve to null are skipped.

    Args:
        document: Document owning the page
        page_id: Identifier of the page dictionary

    Returns:
        Annotation identifiers in array order (empty if the page has none)

    Raises:
        StructureError: If the page or its /Annots entry has an unexpected type
    """
    page = document.page_dictionary(page_id)
    if _classify(page, page_id) is AnnotsStorage.ABSENT:
        return []

    ids = (_reference_id(entry) for entry in page["/Annots"])
    return [annotation_id for annotation_id in ids if annotation_id is not None]


def mutable_annotation_array(document: PDFDocument, page_id: ObjectId) -> pikepdf.Array:
    """
    Get an appendable handle to a page's annotation array

    An indirect array is returned as the referenced object, a direct array
    in place. When the page has no /Annots, an empty array is installed first,
    so later calls for the same page return that same array.

    Args:
        document: Document owning the page
        page_id: Identifier of the page dictionary

    Returns:
        The array stored for the page

    Raises:
        StructureError: If the page or its /Annots entry has an unexpected type
    """
    page = document.page_dictionary(page_id)
    if _classify(page, page_id) is AnnotsStorage.ABSENT:
        page["/Annots"] = pikepdf.Array()
    return page["/Annots"]


def annotation_subtype(annotation) -> str:
    """Subtype name without its leading slash, or "" if missing or not a name"""
    if not isinstance(annotation, pikepdf.Dictionary):
        return ""
    subtype = annotation.get("/Subtype")
    if not isinstance(subtype, pikepdf.Name):
        return ""
    return str(subtype)[1:]


def get_page_annotation_objects(document: PDFDocument, page_id: ObjectId) -> List[pikepdf.Dictionary]:
    """Annotation dictionaries of a page; identifiers that are not dictionaries are skipped"""
    annotations = []
    for annotation_id in read_annotation_ids(document, page_id):
        annotation = document.get_object(annotation_id)
        if isinstance(annotation, pikepdf.Dictionary):
            annotations.append(annotation)
    return annotations


def _prune_form_fields(document: PDFDocument, doomed: Set[ObjectId]):
    # widget annotations are also listed in /AcroForm /Fields or a field's /Kids
    acroform = document.pdf.Root.get("/AcroForm")
    if not isinstance(acroform, pikepdf.Dictionary):
        return

    pending = [acroform.get("/Fields")]
    seen: Set[ObjectId] = set()
    while pending:
        fields = pending.pop()
        if not isinstance(fields, pikepdf.Array):
            continue
        for index in reversed(range(len(fields))):
            field_id = _reference_id(fields[index])
            if field_id in doomed:
                del fields[index]
            elif field_id is not None and field_id not in seen:
                seen.add(field_id)
                field = fields[index]
                if isinstance(field, pikepdf.Dictionary):
                    pending.append(field.get("/Kids"))


def remove_annotations(document: PDFDocument, annotation_ids: Iterable[ObjectId]) -> int:
    """
    Detach annotations from every page of a document

    Each matching reference is pruned from the page /Annots arrays, and
    /Popup, /Parent and /IRT links from the remaining annotations to a
    removed one are dropped, as are references from the interactive form
    field tree. The removed objects are then deleted from the object table,
    so any reference left elsewhere in the document reads as null.

    Args:
        document: Document to modify in place
        annotation_ids: Identifiers of the annotations to remove

    Returns:
        Number of /Annots entries pruned
    """
    doomed: Set[ObjectId] = set(annotation_ids)
    if not doomed:
        return 0

    pruned = 0
    for page_id in document.page_ids().values():
        page = document.page_dictionary(page_id)
        storage = _classify(page, page_id)
        if storage is AnnotsStorage.ABSENT:
            continue

        annots = page["/Annots"]
        for index in reversed(range(len(annots))):
            if _reference_id(annots[index]) in doomed:
                del annots[index]
                pruned += 1

        for entry in annots:
            if not isinstance(entry, pikepdf.Dictionary):
                continue
            for key in ANNOTATION_LINK_KEYS:
                if _reference_id(entry.get(key)) in doomed:
                    del entry[key]

        if storage is AnnotsStorage.DIRECT and len(annots) == 0:
            del page["/Annots"]

    _prune_form_fields(document, doomed)
    for annotation_id in doomed:
        document.delete_object(annotation_id)

    return pruned
