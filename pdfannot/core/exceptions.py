"""Custom exception hierarchy for pdfannot"""


class PDFAnnotError(Exception):
    """Base exception for all pdfannot errors"""
    pass


class PDFOpenError(PDFAnnotError):
    """Raised when a PDF file cannot be opened"""

    def __init__(self, message="PDF file cannot be opened", path=None, reason=None):
        if path:
            message = f"{message}: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path
        self.reason = reason


class PDFCorruptedError(PDFOpenError):
    """Raised when the loader reports a damaged or malformed PDF"""

    def __init__(self, message="PDF is corrupted", path=None, reason=None, details=None):
        super().__init__(message, path=path, reason=reason)
        self.details = details or {}


class PDFNotFoundError(PDFAnnotError):
    """Raised when a PDF file is not found"""

    def __init__(self, path):
        super().__init__(f"PDF file not found: {path}")
        self.path = path


class PDFWriteError(PDFAnnotError):
    """Raised when the resulting PDF cannot be written"""

    def __init__(self, path, reason=None):
        message = f"Failed to write PDF to: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path
        self.reason = reason


class StructureError(PDFAnnotError):
    """Raised when a page or its /Annots entry has an unexpected object type"""

    def __init__(self, message, object_id=None):
        if object_id is not None:
            message = f"{message} (object {object_id[0]} {object_id[1]} R)"
        super().__init__(message)
        self.object_id = object_id


class ConfigurationError(PDFAnnotError):
    """Raised when configuration is invalid"""
    pass


class ValidationError(PDFAnnotError):
    """Raised when input validation fails"""
    pass
