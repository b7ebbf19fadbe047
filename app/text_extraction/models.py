from dataclasses import dataclass
from enum import Enum


class SourceFormat(str, Enum):
    PDF = "pdf"
    SPREADSHEET = "spreadsheet"


@dataclass(frozen=True)
class ExtractedText:
    """Plain text produced from one uploaded file."""

    text: str
    source_format: SourceFormat
