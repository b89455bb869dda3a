"""
pdfannot - Inspect, merge and strip PDF annotations
"""

__version__ = "0.1.0"
__author__ = "pdfannot Contributors"

from pdfannot.core.pdf_base import PDFDocument
from pdfannot.core.exceptions import (
    PDFAnnotError,
    PDFOpenError,
    PDFCorruptedError,
    PDFNotFoundError,
    PDFWriteError,
    StructureError,
)

__all__ = [
    "PDFDocument",
    "PDFAnnotError",
    "PDFOpenError",
    "PDFCorruptedError",
    "PDFNotFoundError",
    "PDFWriteError",
    "StructureError",
]
