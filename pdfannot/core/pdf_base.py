"""Base PDF operations wrapper"""

import os
import tempfile
from pathlib import Path
from typing import Dict, Tuple, Any

import pikepdf

from pdfannot.core.exceptions import (
    PDFOpenError,
    PDFCorruptedError,
    PDFNotFoundError,
    PDFWriteError,
    StructureError,
)
from pdfannot.core.logging import get_logger

logger = get_logger()

ObjectId = Tuple[int, int]


class PDFDocument:
    """Wrapper around pikepdf.Pdf exposing the object table by identifier"""

    def __init__(self, path: Path, pdf: 'pikepdf.Pdf'):
        self.path = Path(path)
        self.pdf = pdf

    def __enter__(self) -> 'PDFDocument':
        """Context manager support"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Cleanup on exit"""
        self.close()

    @classmethod
    def open(cls, path: Path) -> 'PDFDocument':
        """
        Open a PDF file with error handling

        Args:
            path: Path to PDF file

        Returns:
            PDFDocument instance

        Raises:
            PDFNotFoundError: If file doesn't exist
            PDFCorruptedError: If the loader reports a damaged file
            PDFOpenError: For other opening errors, password protection included
        """
        path = Path(path)

        if not path.exists():
            raise PDFNotFoundError(path)

        try:
            pdf = pikepdf.open(path)
            logger.debug(f"Opened PDF: {path} ({len(pdf.pages)} pages)")
            return cls(path, pdf)

        except pikepdf.PasswordError as e:
            raise PDFOpenError("Failed to read PDF from", path=path, reason="password protected") from e

        except pikepdf.PdfError as e:
            error_str = str(e).lower()
            if "damaged" in error_str or "corrupt" in error_str:
                raise PDFCorruptedError(
                    "Failed to read PDF from",
                    path=path,
                    reason="file is damaged",
                    details={"error": str(e)},
                ) from e
            raise PDFOpenError("Failed to read PDF from", path=path, reason=str(e)) from e

        except OSError as e:
            raise PDFOpenError("Failed to read PDF from", path=path, reason=e.strerror or str(e)) from e

    def close(self):
        """Close PDF and release the underlying file"""
        if self.pdf is not None:
            self.pdf.close()
            self.pdf = None
            logger.debug(f"Closed PDF: {self.path}")

    def save(self, output_path: Path, **kwargs):
        """
        Save PDF to file

        The document is first written to a temporary file next to the
        destination and then moved into place, so a failed save never leaves
        a partial file at ``output_path``.

        Args:
            output_path: Destination path
            **kwargs: Additional arguments for pikepdf.Pdf.save()

        Raises:
            PDFWriteError: If the file cannot be written
        """
        output_path = Path(output_path)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
            )
            os.close(fd)
        except OSError as e:
            raise PDFWriteError(output_path, reason=e.strerror or str(e)) from e

        temp_path = Path(temp_name)
        try:
            self.pdf.save(temp_path, **kwargs)
            os.replace(temp_path, output_path)
        except (OSError, pikepdf.PdfError) as e:
            temp_path.unlink(missing_ok=True)
            raise PDFWriteError(output_path, reason=str(e)) from e

        logger.info(f"Saved PDF: {output_path}")

    @property
    def num_pages(self) -> int:
        """Get number of pages"""
        return len(self.pdf.pages)

    def page_ids(self) -> Dict[int, ObjectId]:
        """Map 1-based page numbers to page object identifiers, in page order"""
        return {
            number: page.obj.objgen
            for number, page in enumerate(self.pdf.pages, 1)
        }

    def get_object(self, object_id: ObjectId) -> Any:
        """Get a specific object by identifier (None if it resolves to null)"""
        return self.pdf.get_object(object_id)

    def page_dictionary(self, page_id: ObjectId) -> 'pikepdf.Dictionary':
        """Get a page dictionary, failing if the identifier is not a dictionary"""
        page = self.get_object(page_id)
        if not isinstance(page, pikepdf.Dictionary):
            raise StructureError("Page object is not a dictionary", object_id=page_id)
        return page

    def add_object(self, obj: 'pikepdf.Object') -> 'pikepdf.Object':
        """
        Insert an object into this document's object table

        Objects owned by another document are deep-copied with
        ``copy_foreign``; the copy gets a fresh identifier in this document's
        numbering and every object it references is copied along with it.
        References to pages of the foreign document are not followed.

        Args:
            obj: Object to insert

        Returns:
            The indirect object now owned by this document
        """
        if obj.is_indirect and not obj.is_owned_by(self.pdf):
            copied = self.pdf.copy_foreign(obj)
        else:
            copied = self.pdf.make_indirect(obj)
        logger.debug(f"Added object {copied.objgen} to {self.path.name}")
        return copied

    def delete_object(self, object_id: ObjectId):
        """
        Remove an object from the object table

        The identifier is bound to null afterwards, so every remaining
        reference to it reads as null and the object itself is not written
        when the document is saved.
        """
        self.pdf._replace_object(object_id, pikepdf.Object.parse(b"null"))
        logger.debug(f"Deleted object {object_id} from {self.path.name}")

    def __repr__(self) -> str:
        return f"PDFDocument(path={self.path}, pages={self.num_pages})"
