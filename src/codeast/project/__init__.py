from .file_types import SourceCodeFileType

__all__ = [
    "SourceCodeFileType",
]
