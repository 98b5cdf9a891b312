"""
Rebuild AST trees from serialized ASTRoot messages.

The converter walks the decoded protobuf message and constructs the
immutable node tree from codeast.ast, translating every kind tag by name.
Any decoding problem or unknown kind tag fails the whole conversion; no
partial tree is returned.

Nesting of statements and of declarations is bounded (see
ConverterConstants); anything below the bound is dropped without error.
"""

import logging
from enum import Enum
from typing import List, Optional, Type as TypingType

from google.protobuf.message import DecodeError

from ..ast.node import (
    Declaration,
    Expression,
    Method,
    Modifier,
    Namespace,
    Root,
    Statement,
    Type,
    Variable,
)
from ..ast.types import (
    DeclarationType,
    ExpressionType,
    ModifierType,
    StatementType,
    VisibilityType,
    kind_from_name,
)
from ..constants import ConverterConstants
from ..exceptions import MalformedMessageError, UnknownKindError
from . import schema

logger = logging.getLogger(__name__)


class ASTConverter:
    """
    Maps an ASTRoot protocol buffer message onto its Root model.

    The converter keeps no state besides its configuration, so a single
    instance may be shared between threads.

    Usage:
        converter = ASTConverter()
        root = converter.convert(data)
    """

    def __init__(
        self,
        max_statement_depth: Optional[int] = ConverterConstants.MAX_STATEMENT_DEPTH,
        max_declaration_depth: Optional[int] = ConverterConstants.MAX_DECLARATION_DEPTH,
    ):
        """
        Initialize the converter.

        Args:
            max_statement_depth: Depth at which nested statement lists are
                left empty (method body statements are depth 0). None keeps
                every level.
            max_declaration_depth: Depth at which nested declaration lists
                are left empty (namespace declarations are depth 0). None
                keeps every level.
        """
        for name, value in (
            ("max_statement_depth", max_statement_depth),
            ("max_declaration_depth", max_declaration_depth),
        ):
            if value is not None and value < 0:
                raise ValueError(f"{name} must be >= 0 or None, got {value}")

        self.max_statement_depth = max_statement_depth
        self.max_declaration_depth = max_declaration_depth

    def convert(self, data: bytes) -> Root:
        """
        Decode and convert a serialized ASTRoot.

        Args:
            data: Serialized ASTRoot message

        Returns:
            The rebuilt Root

        Raises:
            MalformedMessageError: If the bytes cannot be decoded
            UnknownKindError: If a kind tag has no model counterpart
        """
        try:
            message = schema.ASTRoot.FromString(data)
        except DecodeError as e:
            raise MalformedMessageError(f"Cannot decode ASTRoot message: {e}") from e

        return self.convert_message(message)

    def convert_message(self, message) -> Root:
        """Convert an already decoded ASTRoot message."""
        namespaces = [self._convert_namespace(namespace) for namespace in message.namespaces]
        root = Root(imports=message.imports, namespaces=namespaces)

        logger.debug(f"Converted AST with {len(root.imports)} imports and {len(namespaces)} namespaces")
        return root

    def _convert_namespace(self, message) -> Namespace:
        return Namespace(
            name=message.name,
            modifiers=[self._convert_modifier(modifier) for modifier in message.modifiers],
            declarations=[self._convert_declaration(declaration) for declaration in message.declarations],
        )

    def _convert_modifier(self, message) -> Modifier:
        return Modifier(
            name=message.name,
            kind=self._kind(ModifierType, message),
            members_and_values=message.members_and_values,
            visibility=self._kind(VisibilityType, message, "visibility"),
            other=message.other,
        )

    def _convert_type(self, message) -> Type:
        return Type(name=message.name, kind=self._kind(DeclarationType, message))

    def _convert_declaration(self, message, depth: int = 0) -> Declaration:
        nested_declarations = []
        if _within(depth, self.max_declaration_depth):
            nested_declarations = [
                self._convert_declaration(nested, depth + 1)
                for nested in message.nested_declarations
            ]
        elif message.nested_declarations:
            logger.debug(
                f"Dropping {len(message.nested_declarations)} declarations nested in "
                f"{message.name!r} beyond depth {self.max_declaration_depth}"
            )

        return Declaration(
            name=message.name,
            kind=self._kind(DeclarationType, message),
            modifiers=[self._convert_modifier(modifier) for modifier in message.modifiers],
            fields=[self._convert_variable(variable) for variable in message.fields],
            methods=[self._convert_method(method) for method in message.methods],
            parents=[self._convert_type(parent) for parent in message.parents],
            nested_declarations=nested_declarations,
        )

    def _convert_method(self, message) -> Method:
        return Method(
            name=message.name,
            return_type=self._convert_type(message.return_type),
            modifiers=[self._convert_modifier(modifier) for modifier in message.modifiers],
            arguments=[self._convert_variable(argument) for argument in message.arguments],
            statements=[self._convert_statement(statement) for statement in message.statements],
            body_content=[self._convert_expression(expression) for expression in message.body_content],
        )

    def _convert_variable(self, message) -> Variable:
        return Variable(
            name=message.name,
            type=self._convert_type(message.type),
            initializer=self._convert_initializer(message.initializer),
            modifiers=[self._convert_modifier(modifier) for modifier in message.modifiers],
        )

    def _convert_statement(self, message, depth: int = 0) -> Statement:
        nested_statements = []
        if _within(depth, self.max_statement_depth):
            nested_statements = [
                self._convert_statement(nested, depth + 1)
                for nested in message.statements
            ]
        elif message.statements:
            logger.debug(
                f"Dropping {len(message.statements)} statements nested "
                f"beyond depth {self.max_statement_depth}"
            )

        return Statement(
            kind=self._kind(StatementType, message),
            expressions=self._convert_expressions(message.expressions),
            condition=self._convert_expression(message.condition),
            statements=nested_statements,
            initializations=self._convert_expressions(message.initializations),
            updates=self._convert_expressions(message.updates),
        )

    def _convert_expressions(self, messages) -> List[Expression]:
        return [self._convert_expression(expression) for expression in messages]

    def _convert_expression(self, message) -> Expression:
        kind = self._kind(ExpressionType, message)

        # Arguments are only meaningful for method calls
        method_arguments = []
        if kind is ExpressionType.METHODCALL:
            method_arguments = self._convert_expressions(message.method_arguments)

        return Expression(
            kind=kind,
            literal=message.literal,
            method=message.method,
            variable=message.variable,
            method_arguments=method_arguments,
            variable_declarations=[self._convert_variable(variable) for variable in message.variable_declarations],
            is_postfix=message.is_postfix,
            new_type=self._convert_type(message.new_type),
            expressions=self._convert_expressions(message.expressions),
        )

    def _convert_initializer(self, message) -> Expression:
        """Variable initializers keep their operands but no call arguments or inline declarations."""
        return Expression(
            kind=self._kind(ExpressionType, message),
            literal=message.literal,
            method=message.method,
            variable=message.variable,
            is_postfix=message.is_postfix,
            new_type=self._convert_type(message.new_type),
            expressions=self._convert_expressions(message.expressions),
        )

    def _kind(self, enum_cls: TypingType[Enum], message, field_name: str = "type"):
        """
        Translate a serialized enum field into a model kind tag by name.

        Raises:
            UnknownKindError: If the wire number is not part of the schema
                or the schema name is not a member of enum_cls
        """
        number = getattr(message, field_name)
        enum_value = message.DESCRIPTOR.fields_by_name[field_name].enum_type.values_by_number.get(number)
        if enum_value is None:
            raise UnknownKindError(
                f"{message.DESCRIPTOR.name}.{field_name} has unknown tag {number}"
            )
        return kind_from_name(enum_cls, enum_value.name)


def _within(depth: int, limit: Optional[int]) -> bool:
    return limit is None or depth < limit


def convert_ast(data: bytes, **options) -> Root:
    """
    Convenience function to convert a serialized ASTRoot.

    Args:
        data: Serialized ASTRoot message
        **options: Passed to ASTConverter

    Returns:
        The rebuilt Root
    """
    return ASTConverter(**options).convert(data)
