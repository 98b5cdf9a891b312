"""
Tests for the enter/leave traversal protocol.

Verifies that:
1. Every entered node is left exactly once, with or without descent
2. Children are offered in a fixed order
3. A False from a child stops only the remaining siblings of its own list
4. The condition of a statement is always visited
5. The stock visitors count, search and print trees
"""

import pytest

from codeast.ast import (
    ASTVisitor,
    Declaration,
    DeclarationType,
    Expression,
    ExpressionType,
    Method,
    Modifier,
    Namespace,
    NodeCountVisitor,
    NodeType,
    PrettyPrintVisitor,
    Root,
    SearchVisitor,
    Statement,
    StatementType,
    Type,
    Variable,
)
from codeast.converters import ASTConverter


class RecordingVisitor(ASTVisitor):
    """Records every notification; can refuse descent or stop siblings per node."""

    def __init__(self, refuse=(), stop_after=(), descend=True):
        self.events = []
        self.refuse = {id(node) for node in refuse}
        self.stop_after = {id(node) for node in stop_after}
        self.descend = descend

    def generic_enter(self, node):
        self.events.append(("enter", node))
        return self.descend and id(node) not in self.refuse

    def generic_leave(self, node):
        self.events.append(("leave", node))
        return id(node) not in self.stop_after

    def entered(self, *node_types):
        return [node for event, node in self.events if event == "enter" and node.node_type in node_types]


def _label(node):
    if node.node_type is NodeType.STATEMENT:
        return node.kind.name
    return node.literal


class TestEnterLeavePairing:
    """Every node that is entered is also left."""

    def test_single_node_always_false(self):
        statement = Statement(kind=StatementType.IF, expressions=[Expression(literal="x")])
        visitor = RecordingVisitor(descend=False)

        result = statement.accept(visitor)

        assert visitor.events == [("enter", statement), ("leave", statement)]
        assert result is True

    def test_pairs_match_on_converted_tree(self, sample_bytes):
        root = ASTConverter().convert(sample_bytes)
        visitor = RecordingVisitor()

        visitor.traverse(root)

        entered = [id(node) for event, node in visitor.events if event == "enter"]
        left = [id(node) for event, node in visitor.events if event == "leave"]
        assert len(entered) == len(left)
        assert sorted(entered) == sorted(left)
        assert len(set(entered)) == len(entered)

    def test_leave_fires_without_descent(self):
        refused = Expression(literal="refused", expressions=[Expression(literal="hidden")])
        statement = Statement(kind=StatementType.RETURN, expressions=[refused])
        visitor = RecordingVisitor(refuse=[refused])

        statement.accept(visitor)

        assert ("leave", refused) in visitor.events
        assert "hidden" not in [_label(n) for n in visitor.entered(NodeType.EXPRESSION)]

    def test_accept_returns_leave_result(self):
        statement = Statement(kind=StatementType.BREAK)

        assert statement.accept(RecordingVisitor(stop_after=[statement])) is False
        assert statement.accept(RecordingVisitor()) is True


class TestTraversalOrder:
    """Children are offered in a fixed order."""

    def test_statement_order(self):
        statement = Statement(
            kind=StatementType.FOR,
            expressions=[Expression(literal="compare")],
            condition=Expression(literal="condition"),
            statements=[Statement(kind=StatementType.RETURN, condition=Expression(literal="inner"))],
            initializations=[Expression(literal="init")],
            updates=[Expression(literal="update")],
        )
        visitor = RecordingVisitor()

        statement.accept(visitor)

        labels = [_label(n) for n in visitor.entered(NodeType.STATEMENT, NodeType.EXPRESSION)]
        assert labels == ["FOR", "compare", "init", "update", "condition", "RETURN", "inner"]

    def test_depth_first(self):
        outer = Expression(literal="outer", expressions=[Expression(literal="inner")])
        statement = Statement(kind=StatementType.EXPRESSION, expressions=[outer, Expression(literal="next")])
        visitor = RecordingVisitor()

        statement.accept(visitor)

        expression_events = [
            (event, node.literal) for event, node in visitor.events
            if node.node_type is NodeType.EXPRESSION and node.literal
        ]
        assert expression_events == [
            ("enter", "outer"), ("enter", "inner"), ("leave", "inner"),
            ("leave", "outer"), ("enter", "next"), ("leave", "next"),
        ]

    def test_method_order(self):
        method = Method(
            name="m",
            return_type=Type(name="void"),
            modifiers=[Modifier(name="public")],
            arguments=[Variable(name="arg")],
            statements=[Statement(kind=StatementType.EMPTY)],
            body_content=[Expression(literal="body")],
        )
        visitor = RecordingVisitor()

        method.accept(visitor)

        own = {id(node) for node in (method,) + method.children()}
        kinds = [node.node_type for event, node in visitor.events if event == "enter" and id(node) in own]
        assert kinds == [
            NodeType.METHOD, NodeType.MODIFIER, NodeType.VARIABLE,
            NodeType.TYPE, NodeType.STATEMENT, NodeType.EXPRESSION,
        ]

    def test_declaration_order(self):
        declaration = Declaration(
            name="A",
            kind=DeclarationType.CLASS,
            modifiers=[Modifier(name="public")],
            fields=[Variable(name="f")],
            methods=[Method(name="m")],
            parents=[Type(name="Base")],
            nested_declarations=[Declaration(name="B", kind=DeclarationType.CLASS)],
        )

        assert [n.node_type for n in declaration.children()] == [
            NodeType.MODIFIER, NodeType.TYPE, NodeType.VARIABLE,
            NodeType.METHOD, NodeType.DECLARATION,
        ]


class TestShortCircuit:
    """A False from a child only stops its own sibling list."""

    def test_condition_visited_after_stopped_expressions(self):
        first = Expression(literal="first")
        skipped = Expression(literal="skipped")
        condition = Expression(literal="condition")
        statement = Statement(kind=StatementType.IF, expressions=[first, skipped], condition=condition)
        visitor = RecordingVisitor(refuse=[first], stop_after=[first])

        statement.accept(visitor)

        labels = [_label(n) for n in visitor.entered(NodeType.EXPRESSION)]
        assert "first" in labels
        assert "skipped" not in labels
        assert "condition" in labels
        assert ("leave", condition) in visitor.events

    def test_other_lists_continue(self):
        first = Expression(literal="first")
        statement = Statement(
            kind=StatementType.FOR,
            expressions=[first, Expression(literal="skipped")],
            initializations=[Expression(literal="init")],
            updates=[Expression(literal="update")],
            statements=[Statement(kind=StatementType.BLOCK)],
        )
        visitor = RecordingVisitor(stop_after=[first])

        statement.accept(visitor)

        labels = [_label(n) for n in visitor.entered(NodeType.EXPRESSION, NodeType.STATEMENT)]
        assert "skipped" not in labels
        assert labels[:4] == ["FOR", "first", "init", "update"]
        assert "BLOCK" in labels

    def test_nested_statements_stop(self):
        first = Statement(kind=StatementType.BREAK)
        statement = Statement(
            kind=StatementType.BLOCK,
            statements=[first, Statement(kind=StatementType.CONTINUE), Statement(kind=StatementType.RETURN)],
        )
        visitor = RecordingVisitor(stop_after=[first])

        result = statement.accept(visitor)

        assert [_label(n) for n in visitor.entered(NodeType.STATEMENT)] == ["BLOCK", "BREAK"]
        assert visitor.events[-1] == ("leave", statement)
        assert result is True

    def test_variable_type_and_initializer_always_visited(self):
        modifier = Modifier(name="final")
        variable = Variable(
            name="x",
            modifiers=[modifier, Modifier(name="static")],
            initializer=Expression(kind=ExpressionType.LITERAL, literal="1"),
        )
        visitor = RecordingVisitor(stop_after=[modifier])

        variable.accept(visitor)

        assert [n.name for n in visitor.entered(NodeType.MODIFIER)] == ["final"]
        assert len(visitor.entered(NodeType.TYPE)) >= 1
        assert [n.literal for n in visitor.entered(NodeType.EXPRESSION)] == ["1"]


class TestDispatch:
    """enter_<type>/leave_<type> methods take precedence over the generic ones."""

    def test_type_specific_methods(self):
        class StatementOnly(ASTVisitor):
            def __init__(self):
                self.statements = []
                self.left = 0

            def enter_statement(self, node):
                self.statements.append(node.kind)
                return True

            def leave_statement(self, node):
                self.left += 1
                return True

            def enter_expression(self, node):
                return False

        visitor = StatementOnly()
        Statement(kind=StatementType.WHILE, statements=[Statement(kind=StatementType.BREAK)]).accept(visitor)

        assert visitor.statements == [StatementType.WHILE, StatementType.BREAK]
        assert visitor.left == 2

    def test_visitor_exceptions_propagate(self):
        class Failing(ASTVisitor):
            def enter_expression(self, node):
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            Statement(kind=StatementType.RETURN).accept(Failing())


class TestStockVisitors:
    """NodeCountVisitor, SearchVisitor and PrettyPrintVisitor."""

    def test_node_count(self):
        root = Root(namespaces=[Namespace(name="p", declarations=[Declaration(name="A", kind=DeclarationType.CLASS)])])

        counts = NodeCountVisitor().count(root)

        assert counts == {"root": 1, "namespace": 1, "declaration": 1}

    def test_find_by_type(self, sample_bytes):
        root = ASTConverter().convert(sample_bytes)

        statements = SearchVisitor().find_by_type(root, NodeType.STATEMENT)

        assert [s.kind for s in statements] == [StatementType.IF, StatementType.RETURN, StatementType.FOR]

    def test_find_by_predicate(self, sample_bytes):
        root = ASTConverter().convert(sample_bytes)

        calls = SearchVisitor().find_by_predicate(
            root,
            lambda node: node.node_type is NodeType.EXPRESSION and node.kind is ExpressionType.METHODCALL,
        )

        assert [call.method for call in calls] == ["check"]

    def test_pretty_print(self):
        root = Root(imports=["a.B"], namespaces=[Namespace(name="p")])

        output = PrettyPrintVisitor(indent=2).print(root)

        assert output.splitlines() == ["root (imports=[a.B])", "  namespace (name=p)"]
