"""Logging infrastructure for pdfannot"""

import logging
from typing import Optional


class PDFAnnotLogger:
    """Centralized logger for pdfannot"""

    def __init__(self, name: str = "pdfannot", level: int = logging.WARNING):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(level)

            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            handler.setFormatter(formatter)

            self.logger.addHandler(handler)

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, extra=kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(message, extra=kwargs)

    def set_level(self, level: int):
        self.logger.setLevel(level)
        for handler in self.logger.handlers:
            handler.setLevel(level)


_default_logger: Optional[PDFAnnotLogger] = None


def get_logger(name: str = "pdfannot") -> PDFAnnotLogger:
    """Get or create the default logger"""
    global _default_logger
    if _default_logger is None:
        _default_logger = PDFAnnotLogger(name)
    return _default_logger


def setup_logger(verbose: bool = False, debug: bool = False, quiet: bool = False) -> PDFAnnotLogger:
    """Setup logger with appropriate level"""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logger = get_logger()
    logger.set_level(level)
    return logger
