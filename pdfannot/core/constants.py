"""Shared constants for pdfannot"""

from enum import Enum

PROG_NAME = "pdfannot"

DEFAULT_EXCLUDE = ("Link",)
DEFAULT_MERGE_DEST = "merged_annotations.pdf"
DEFAULT_STRIP_DEST = "stripped_annotations.pdf"

NO_ANNOTATIONS_MESSAGE = "No annotation was found in the given file."
PAGE_NUMBER_COLUMN = "Page no."

# Keys through which one annotation points at another
ANNOTATION_LINK_KEYS = ("/Popup", "/Parent", "/IRT")


class ColorChoice(Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


COMPLETION_SHELLS = ["bash", "zsh", "fish"]
