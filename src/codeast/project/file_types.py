"""Coarse classification of files by extension."""

from enum import Enum
from pathlib import PurePath
from typing import Union


class SourceCodeFileType(Enum):
    """Content categories recognized by file extension."""
    BINARY = "binary"
    JAVA = "java"
    GO = "go"
    TEXT = "text"
    XML = "xml"
    JSON = "json"
    OTHER = "other"

    @classmethod
    def exists(cls, filename: Union[str, PurePath]) -> bool:
        """True if the file's extension (case-insensitive) names one of the categories."""
        extension = PurePath(filename).suffix.lstrip(".").lower()
        return any(file_type.value == extension for file_type in cls)

    @classmethod
    def of(cls, filename: Union[str, PurePath]) -> 'SourceCodeFileType':
        """Category of a file, OTHER when the extension is not recognized."""
        extension = PurePath(filename).suffix.lstrip(".").lower()
        for file_type in cls:
            if file_type.value == extension:
                return file_type
        return cls.OTHER
