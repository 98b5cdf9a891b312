"""
codeast: source code ASTs rebuilt from a binary interchange format.

- codeast.ast: immutable node model, kind enumerations, visitors
- codeast.converters: protobuf schema and the tree builder
"""

from .ast import ASTVisitor, Root
from .converters import ASTConverter, convert_ast
from .exceptions import (
    ASTError,
    ConversionError,
    MalformedMessageError,
    UnknownKindError,
)

__version__ = "0.1.0"

__all__ = [
    "ASTVisitor",
    "Root",
    "ASTConverter",
    "convert_ast",
    "ASTError",
    "ConversionError",
    "MalformedMessageError",
    "UnknownKindError",
]
