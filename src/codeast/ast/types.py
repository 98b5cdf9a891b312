"""
Kind tags for AST nodes.

Each enumeration is a closed set identifying the semantic subtype of a
structural node. Serialized tags are mapped onto these members by name.
"""

from enum import Enum
from typing import Type, TypeVar

from ..exceptions import UnknownKindError

K = TypeVar('K', bound=Enum)


class ExpressionType(Enum):
    """Kinds of expressions."""
    ASSIGN = "assign"
    CAST = "cast"
    CONDITIONAL = "conditional"
    LITERAL = "literal"
    FIELD_ACCESS = "field_access"
    RETURN_VALUE = "return_value"
    NEW = "new"
    METHODCALL = "methodcall"
    OTHER = "other"
    TYPECOMPARE = "typecompare"
    VARIABLE_DECLARATION = "variable_declaration"


class StatementType(Enum):
    """Kinds of statements."""
    BLOCK = "block"
    BREAK = "break"
    CASE = "case"
    CATCH = "catch"
    CONTINUE = "continue"
    DO = "do"
    EMPTY = "empty"
    EXPRESSION = "expression"
    FOR = "for"
    FOREACH = "foreach"
    IF = "if"
    LABEL = "label"
    RETURN = "return"
    SWITCH = "switch"
    SYNCHRONIZED = "synchronized"
    THROW = "throw"
    TRY = "try"
    TYPEDECL = "typedecl"
    WHILE = "while"
    OTHER = "other"


class DeclarationType(Enum):
    """What a declaration (or a type reference) names."""
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "annotation"
    PRIMITIVE = "primitive"
    GENERIC = "generic"
    ARRAY = "array"
    OTHER = "other"


class ModifierType(Enum):
    """Kinds of modifiers."""
    ANNOTATION = "annotation"
    ACCESS = "access"
    OTHER = "other"


class VisibilityType(Enum):
    """Visibility carried by access modifiers."""
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    PACKAGE = "package"
    UNKNOWN = "unknown"


def kind_from_name(enum_cls: Type[K], name: str) -> K:
    """
    Look up a kind tag by member name.

    Args:
        enum_cls: One of the kind enumerations
        name: Member name as it appears in the serialized form

    Returns:
        The matching member

    Raises:
        UnknownKindError: If the enumeration has no member with that name
    """
    try:
        return enum_cls[name]
    except KeyError:
        raise UnknownKindError(f"{enum_cls.__name__} has no member {name!r}") from None
