"""
AST module for source code.

This module provides:
- Kind enumerations for expressions, statements, declarations and modifiers
- Immutable node class definitions for one source file's structure
- The enter/leave visitor protocol and a few stock visitors
- Content hashing for change detection
"""

from .types import (
    ExpressionType,
    StatementType,
    DeclarationType,
    ModifierType,
    VisibilityType,
    kind_from_name,
)

from .node import (
    ASTNode,
    NodeType,
    Root,
    Namespace,
    Declaration,
    Method,
    Variable,
    Statement,
    Expression,
    Modifier,
    Type,
)

from .visitor import (
    ASTVisitor,
    NodeCountVisitor,
    SearchVisitor,
    PrettyPrintVisitor,
)

from .hashing import (
    NodeHasher,
    hash_tree,
)

__all__ = [
    # Kinds
    "ExpressionType",
    "StatementType",
    "DeclarationType",
    "ModifierType",
    "VisibilityType",
    "kind_from_name",
    # Nodes
    "ASTNode",
    "NodeType",
    "Root",
    "Namespace",
    "Declaration",
    "Method",
    "Variable",
    "Statement",
    "Expression",
    "Modifier",
    "Type",
    # Visitors
    "ASTVisitor",
    "NodeCountVisitor",
    "SearchVisitor",
    "PrettyPrintVisitor",
    # Hashing
    "NodeHasher",
    "hash_tree",
]
