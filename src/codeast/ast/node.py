"""
AST node definitions for source code.

This module defines the entities that make up one source file's structure:
a Root owning Namespaces, which own Declarations, which own Variables,
Methods, Statements and Expressions. Ownership is strictly hierarchical and
every node is immutable once built.

Sequence arguments are copied into tuples on construction, so a caller that
keeps mutating the list it passed in can never change the node, and every
accessor hands out an immutable tuple.
"""

import dataclasses
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple

from .types import (
    DeclarationType,
    ExpressionType,
    ModifierType,
    StatementType,
    VisibilityType,
)


class NodeType(Enum):
    """Enumeration of AST node types."""
    ROOT = "root"
    NAMESPACE = "namespace"
    DECLARATION = "declaration"
    METHOD = "method"
    VARIABLE = "variable"
    STATEMENT = "statement"
    EXPRESSION = "expression"
    MODIFIER = "modifier"
    TYPE = "type"


class ASTNode:
    """
    Base class for all AST nodes.

    Subclasses are frozen dataclasses that declare:
    - node_type: used by visitors for double dispatch
    - _sequence_fields: fields frozen into tuples on construction
    - _child_fields: child groups in traversal order; a group is either a
      tuple of nodes or a single node
    """

    node_type: ClassVar[NodeType]
    _sequence_fields: ClassVar[Tuple[str, ...]] = ()
    _child_fields: ClassVar[Tuple[str, ...]] = ()

    def __post_init__(self) -> None:
        for name in self._sequence_fields:
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def accept(self, visitor) -> bool:
        """
        Let a visitor traverse this node and its descendants.

        visit_enter decides whether the children are offered to the visitor.
        Sequence groups are walked left to right until a child's accept
        answers False; single-node groups are always visited. visit_leave is
        called whether or not the node was descended into.

        Args:
            visitor: Object implementing visit_enter/visit_leave

        Returns:
            The result of visit_leave: True if the parent should continue
            with this node's siblings, False if not
        """
        if visitor.visit_enter(self):
            for name in self._child_fields:
                group = getattr(self, name)
                if isinstance(group, ASTNode):
                    group.accept(visitor)
                    continue
                for child in group:
                    if not child.accept(visitor):
                        break

        return visitor.visit_leave(self)

    def children(self) -> Tuple['ASTNode', ...]:
        """All direct children, flattened in traversal order."""
        result = []
        for name in self._child_fields:
            group = getattr(self, name)
            if isinstance(group, ASTNode):
                result.append(group)
            else:
                result.extend(group)
        return tuple(result)

    def attributes(self) -> Dict[str, Any]:
        """Scalar (non-child) fields of this node."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if f.name not in self._child_fields
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to a JSON-compatible dictionary."""
        result = {"node_type": self.node_type.value}
        for f in dataclasses.fields(self):
            result[f.name] = _serialize_value(getattr(self, f.name))
        return result

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def _serialize_value(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, tuple):
        return [_serialize_value(v) for v in value]
    return value


@dataclass(frozen=True)
class Type(ASTNode):
    """A type reference: a name and what kind of declaration it refers to."""
    node_type: ClassVar[NodeType] = NodeType.TYPE

    name: str = ""
    kind: DeclarationType = DeclarationType.OTHER


@dataclass(frozen=True)
class Modifier(ASTNode):
    """An access modifier, annotation, or other modifier keyword."""
    node_type: ClassVar[NodeType] = NodeType.MODIFIER
    _sequence_fields: ClassVar[Tuple[str, ...]] = ("members_and_values",)

    name: str = ""
    kind: ModifierType = ModifierType.OTHER
    members_and_values: Tuple[str, ...] = ()  # annotation member/value pairs
    visibility: VisibilityType = VisibilityType.UNKNOWN
    other: str = ""  # free text for modifiers not otherwise classified


@dataclass(frozen=True)
class Expression(ASTNode):
    """
    An expression.

    Which fields are meaningful depends on kind: method and
    method_arguments for METHODCALL, new_type for NEW, literal for LITERAL
    and so on. Nothing enforces that; the model trusts its producer. The
    default instance (kind OTHER, everything empty) stands in for absent
    conditions and initializers.
    """
    node_type: ClassVar[NodeType] = NodeType.EXPRESSION
    _sequence_fields: ClassVar[Tuple[str, ...]] = (
        "method_arguments", "variable_declarations", "expressions",
    )
    _child_fields: ClassVar[Tuple[str, ...]] = (
        "expressions", "method_arguments", "variable_declarations", "new_type",
    )

    kind: ExpressionType = ExpressionType.OTHER
    literal: str = ""
    method: str = ""
    variable: str = ""
    method_arguments: Tuple['Expression', ...] = ()
    variable_declarations: Tuple['Variable', ...] = ()
    is_postfix: bool = False
    new_type: Type = field(default_factory=Type)
    expressions: Tuple['Expression', ...] = ()  # operands


@dataclass(frozen=True)
class Variable(ASTNode):
    """A field, argument, or local variable declaration."""
    node_type: ClassVar[NodeType] = NodeType.VARIABLE
    _sequence_fields: ClassVar[Tuple[str, ...]] = ("modifiers",)
    _child_fields: ClassVar[Tuple[str, ...]] = ("modifiers", "type", "initializer")

    name: str
    type: Type = field(default_factory=Type)
    initializer: Expression = field(default_factory=Expression)
    modifiers: Tuple[Modifier, ...] = ()


@dataclass(frozen=True)
class Statement(ASTNode):
    """A statement, possibly containing nested statements."""
    node_type: ClassVar[NodeType] = NodeType.STATEMENT
    _sequence_fields: ClassVar[Tuple[str, ...]] = (
        "expressions", "statements", "initializations", "updates",
    )
    _child_fields: ClassVar[Tuple[str, ...]] = (
        "expressions", "initializations", "updates", "condition", "statements",
    )

    kind: StatementType
    expressions: Tuple[Expression, ...] = ()  # e.g. a return value or the compare part of a for loop
    condition: Expression = field(default_factory=Expression)  # if/while/do condition, empty otherwise
    statements: Tuple['Statement', ...] = ()  # body: try block, else branch, loop body...
    initializations: Tuple[Expression, ...] = ()  # for loop init
    updates: Tuple[Expression, ...] = ()  # for loop update


@dataclass(frozen=True)
class Method(ASTNode):
    """A method, constructor, or function."""
    node_type: ClassVar[NodeType] = NodeType.METHOD
    _sequence_fields: ClassVar[Tuple[str, ...]] = (
        "modifiers", "arguments", "statements", "body_content",
    )
    _child_fields: ClassVar[Tuple[str, ...]] = (
        "modifiers", "arguments", "return_type", "statements", "body_content",
    )

    name: str
    return_type: Type = field(default_factory=Type)
    modifiers: Tuple[Modifier, ...] = ()
    arguments: Tuple[Variable, ...] = ()
    statements: Tuple[Statement, ...] = ()
    body_content: Tuple[Expression, ...] = ()  # expression-bodied members


@dataclass(frozen=True)
class Declaration(ASTNode):
    """A type declaration (class, interface, enum...)."""
    node_type: ClassVar[NodeType] = NodeType.DECLARATION
    _sequence_fields: ClassVar[Tuple[str, ...]] = (
        "modifiers", "fields", "methods", "parents", "nested_declarations",
    )
    _child_fields: ClassVar[Tuple[str, ...]] = (
        "modifiers", "parents", "fields", "methods", "nested_declarations",
    )

    name: str
    kind: DeclarationType = DeclarationType.CLASS
    modifiers: Tuple[Modifier, ...] = ()
    fields: Tuple[Variable, ...] = ()
    methods: Tuple[Method, ...] = ()
    parents: Tuple[Type, ...] = ()  # supertypes
    nested_declarations: Tuple['Declaration', ...] = ()


@dataclass(frozen=True)
class Namespace(ASTNode):
    """A package or namespace and the declarations it contains."""
    node_type: ClassVar[NodeType] = NodeType.NAMESPACE
    _sequence_fields: ClassVar[Tuple[str, ...]] = ("modifiers", "declarations")
    _child_fields: ClassVar[Tuple[str, ...]] = ("modifiers", "declarations")

    name: str
    modifiers: Tuple[Modifier, ...] = ()
    declarations: Tuple[Declaration, ...] = ()


@dataclass(frozen=True)
class Root(ASTNode):
    """Root node representing one source file."""
    node_type: ClassVar[NodeType] = NodeType.ROOT
    _sequence_fields: ClassVar[Tuple[str, ...]] = ("imports", "namespaces")
    _child_fields: ClassVar[Tuple[str, ...]] = ("namespaces",)

    imports: Tuple[str, ...] = ()
    namespaces: Tuple[Namespace, ...] = ()
