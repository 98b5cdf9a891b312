"""
Converters from serialized ASTs to the codeast model.

This module handles:
- The Protocol Buffers schema of the interchange format
- Rebuilding Root trees from serialized ASTRoot messages
"""

from . import schema
from .ast_converter import ASTConverter, convert_ast

__all__ = [
    "schema",
    "ASTConverter",
    "convert_ast",
]
