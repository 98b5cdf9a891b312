"""
Protocol Buffers schema for serialized ASTs.

The message classes are built at import time from descriptor protos through
the protobuf runtime, so no generated *_pb2 module has to be checked in. The
same schema is kept in human-readable form in ast.proto next to this file;
producers compile that file, and the two must stay in sync field for field.

Every kind enum is nested in the message that owns it. Value 0 of each enum
is the placeholder member (OTHER or UNKNOWN), so an unset sub-message such
as a missing condition decodes as a semantically empty node.
"""

from typing import Dict, Optional, Tuple

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "codeast"
FILE_NAME = "codeast/ast.proto"

_FIELD = descriptor_pb2.FieldDescriptorProto

STRING = _FIELD.TYPE_STRING
BOOL = _FIELD.TYPE_BOOL
MESSAGE = _FIELD.TYPE_MESSAGE
ENUM = _FIELD.TYPE_ENUM

# (message, enum) -> members in wire-number order
ENUMS: Dict[Tuple[str, str], Tuple[str, ...]] = {
    ("Expression", "ExpressionType"): (
        "OTHER", "ASSIGN", "CAST", "CONDITIONAL", "LITERAL", "FIELD_ACCESS",
        "RETURN_VALUE", "NEW", "METHODCALL", "TYPECOMPARE", "VARIABLE_DECLARATION",
    ),
    ("Statement", "StatementType"): (
        "OTHER", "BLOCK", "BREAK", "CASE", "CATCH", "CONTINUE", "DO", "EMPTY",
        "EXPRESSION", "FOR", "FOREACH", "IF", "LABEL", "RETURN", "SWITCH",
        "SYNCHRONIZED", "THROW", "TRY", "TYPEDECL", "WHILE",
    ),
    ("Declaration", "DeclarationType"): (
        "OTHER", "CLASS", "INTERFACE", "ENUM", "ANNOTATION", "PRIMITIVE",
        "GENERIC", "ARRAY",
    ),
    ("Modifier", "ModifierType"): (
        "OTHER", "ANNOTATION", "ACCESS",
    ),
    ("Modifier", "VisibilityType"): (
        "UNKNOWN", "PUBLIC", "PROTECTED", "PRIVATE", "PACKAGE",
    ),
}

# message -> (field name, number, field type, referenced type, repeated)
FieldSpec = Tuple[str, int, int, Optional[str], bool]

MESSAGES: Dict[str, Tuple[FieldSpec, ...]] = {
    "Type": (
        ("name", 1, STRING, None, False),
        ("type", 2, ENUM, "Declaration.DeclarationType", False),
    ),
    "Modifier": (
        ("name", 1, STRING, None, False),
        ("type", 2, ENUM, "Modifier.ModifierType", False),
        ("members_and_values", 3, STRING, None, True),
        ("visibility", 4, ENUM, "Modifier.VisibilityType", False),
        ("other", 5, STRING, None, False),
    ),
    "Expression": (
        ("type", 1, ENUM, "Expression.ExpressionType", False),
        ("literal", 2, STRING, None, False),
        ("method", 3, STRING, None, False),
        ("variable", 4, STRING, None, False),
        ("method_arguments", 5, MESSAGE, "Expression", True),
        ("variable_declarations", 6, MESSAGE, "Variable", True),
        ("is_postfix", 7, BOOL, None, False),
        ("new_type", 8, MESSAGE, "Type", False),
        ("expressions", 9, MESSAGE, "Expression", True),
    ),
    "Variable": (
        ("name", 1, STRING, None, False),
        ("type", 2, MESSAGE, "Type", False),
        ("initializer", 3, MESSAGE, "Expression", False),
        ("modifiers", 4, MESSAGE, "Modifier", True),
    ),
    "Statement": (
        ("type", 1, ENUM, "Statement.StatementType", False),
        ("expressions", 2, MESSAGE, "Expression", True),
        ("condition", 3, MESSAGE, "Expression", False),
        ("statements", 4, MESSAGE, "Statement", True),
        ("initializations", 5, MESSAGE, "Expression", True),
        ("updates", 6, MESSAGE, "Expression", True),
    ),
    "Method": (
        ("name", 1, STRING, None, False),
        ("arguments", 2, MESSAGE, "Variable", True),
        ("return_type", 3, MESSAGE, "Type", False),
        ("modifiers", 4, MESSAGE, "Modifier", True),
        ("body_content", 5, MESSAGE, "Expression", True),
        ("statements", 6, MESSAGE, "Statement", True),
    ),
    "Declaration": (
        ("name", 1, STRING, None, False),
        ("type", 2, ENUM, "Declaration.DeclarationType", False),
        ("modifiers", 3, MESSAGE, "Modifier", True),
        ("fields", 4, MESSAGE, "Variable", True),
        ("methods", 5, MESSAGE, "Method", True),
        ("parents", 6, MESSAGE, "Type", True),
        ("nested_declarations", 7, MESSAGE, "Declaration", True),
    ),
    "Namespace": (
        ("name", 1, STRING, None, False),
        ("modifiers", 2, MESSAGE, "Modifier", True),
        ("declarations", 3, MESSAGE, "Declaration", True),
    ),
    "ASTRoot": (
        ("imports", 1, STRING, None, True),
        ("namespaces", 2, MESSAGE, "Namespace", True),
    ),
}


def build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    """Assemble the FileDescriptorProto for the AST schema."""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=FILE_NAME, package=PACKAGE, syntax="proto3",
    )

    message_protos = {}
    for message_name, field_specs in MESSAGES.items():
        message_proto = file_proto.message_type.add(name=message_name)
        message_protos[message_name] = message_proto
        for name, number, field_type, type_name, repeated in field_specs:
            field_proto = message_proto.field.add(
                name=name,
                number=number,
                type=field_type,
                label=_FIELD.LABEL_REPEATED if repeated else _FIELD.LABEL_OPTIONAL,
            )
            if type_name:
                field_proto.type_name = f".{PACKAGE}.{type_name}"

    for (message_name, enum_name), members in ENUMS.items():
        enum_proto = message_protos[message_name].enum_type.add(name=enum_name)
        for number, member in enumerate(members):
            enum_proto.value.add(name=member, number=number)

    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(build_file_descriptor().SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


Type = _message_class("Type")
Modifier = _message_class("Modifier")
Expression = _message_class("Expression")
Variable = _message_class("Variable")
Statement = _message_class("Statement")
Method = _message_class("Method")
Declaration = _message_class("Declaration")
Namespace = _message_class("Namespace")
ASTRoot = _message_class("ASTRoot")


def enum_number(enum_name: str, member: str) -> int:
    """
    Resolve the wire number of an enum member.

    Args:
        enum_name: Enum name, e.g. "StatementType"
        member: Member name, e.g. "IF"

    Returns:
        The number used on the wire

    Raises:
        KeyError: If the enum or the member is not part of the schema
    """
    for message_name, name in ENUMS:
        if name == enum_name:
            enum_descriptor = _pool.FindEnumTypeByName(f"{PACKAGE}.{message_name}.{enum_name}")
            return enum_descriptor.values_by_name[member].number
    raise KeyError(enum_name)
