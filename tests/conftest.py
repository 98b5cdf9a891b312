"""Shared fixtures: serialized ASTs built through the protobuf schema."""

import pytest

from codeast.converters import schema


def kind(enum_name, member):
    return schema.enum_number(enum_name, member)


def build_sample_message():
    """
    A small but complete ASTRoot:

        import java.util.List; import java.io.File;
        package com.example;
        @Deprecated public class Foo extends Bar {
            private int count = 0;
            public boolean run(String arg) {
                if (check(arg)) { return true; }
                for (int i = 0; i < 3; i++) { }
            }
            class Inner { }
        }
    """
    root = schema.ASTRoot(imports=["java.util.List", "java.io.File"])

    namespace = root.namespaces.add(name="com.example")
    namespace.modifiers.add(name="strictfp", type=kind("ModifierType", "OTHER"), other="strictfp")

    foo = namespace.declarations.add(name="Foo", type=kind("DeclarationType", "CLASS"))
    foo.modifiers.add(
        name="Deprecated",
        type=kind("ModifierType", "ANNOTATION"),
        members_and_values=["since", "1.0"],
    )
    foo.modifiers.add(
        name="public",
        type=kind("ModifierType", "ACCESS"),
        visibility=kind("VisibilityType", "PUBLIC"),
    )
    foo.parents.add(name="Bar", type=kind("DeclarationType", "CLASS"))

    count = foo.fields.add(name="count")
    count.type.name = "int"
    count.type.type = kind("DeclarationType", "PRIMITIVE")
    count.initializer.type = kind("ExpressionType", "LITERAL")
    count.initializer.literal = "0"
    count.modifiers.add(
        name="private",
        type=kind("ModifierType", "ACCESS"),
        visibility=kind("VisibilityType", "PRIVATE"),
    )

    run = foo.methods.add(name="run")
    run.return_type.name = "boolean"
    run.return_type.type = kind("DeclarationType", "PRIMITIVE")
    arg = run.arguments.add(name="arg")
    arg.type.name = "String"
    arg.type.type = kind("DeclarationType", "CLASS")

    if_statement = run.statements.add(type=kind("StatementType", "IF"))
    if_statement.condition.type = kind("ExpressionType", "METHODCALL")
    if_statement.condition.method = "check"
    if_statement.condition.method_arguments.add(
        type=kind("ExpressionType", "OTHER"), variable="arg",
    )
    return_statement = if_statement.statements.add(type=kind("StatementType", "RETURN"))
    return_statement.expressions.add(type=kind("ExpressionType", "LITERAL"), literal="true")

    for_statement = run.statements.add(type=kind("StatementType", "FOR"))
    init = for_statement.initializations.add(type=kind("ExpressionType", "VARIABLE_DECLARATION"))
    declared = init.variable_declarations.add(name="i")
    declared.type.name = "int"
    declared.type.type = kind("DeclarationType", "PRIMITIVE")
    declared.initializer.type = kind("ExpressionType", "LITERAL")
    declared.initializer.literal = "0"
    compare = for_statement.expressions.add(type=kind("ExpressionType", "OTHER"), literal="<")
    compare.expressions.add(type=kind("ExpressionType", "OTHER"), variable="i")
    compare.expressions.add(type=kind("ExpressionType", "LITERAL"), literal="3")
    for_statement.updates.add(type=kind("ExpressionType", "OTHER"), variable="i", is_postfix=True)

    foo.nested_declarations.add(name="Inner", type=kind("DeclarationType", "CLASS"))
    return root


def build_statement_chain(levels):
    """An ASTRoot whose only method body holds a chain of `levels` nested blocks."""
    root = schema.ASTRoot()
    declaration = root.namespaces.add(name="ns").declarations.add(
        name="Chain", type=kind("DeclarationType", "CLASS"),
    )
    method = declaration.methods.add(name="deep")

    statements = method.statements
    for level in range(levels):
        statement = statements.add(type=kind("StatementType", "BLOCK"))
        statement.expressions.add(type=kind("ExpressionType", "LITERAL"), literal=f"level-{level}")
        statement.condition.type = kind("ExpressionType", "LITERAL")
        statement.condition.literal = f"condition-{level}"
        statements = statement.statements
    return root


def build_declaration_chain(levels):
    """An ASTRoot whose namespace holds a chain of `levels` nested declarations."""
    root = schema.ASTRoot()
    declarations = root.namespaces.add(name="ns").declarations
    for level in range(levels):
        declaration = declarations.add(name=f"D{level}", type=kind("DeclarationType", "CLASS"))
        declaration.methods.add(name=f"m{level}")
        declaration.fields.add(name=f"f{level}")
        declarations = declaration.nested_declarations
    return root


@pytest.fixture
def sample_message():
    return build_sample_message()


@pytest.fixture
def sample_bytes(sample_message):
    return sample_message.SerializeToString()


@pytest.fixture
def statement_chain():
    return build_statement_chain


@pytest.fixture
def declaration_chain():
    return build_declaration_chain


@pytest.fixture
def kind_number():
    return kind
