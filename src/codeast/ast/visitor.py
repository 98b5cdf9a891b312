"""
Visitor pattern implementation for AST traversal.

This module provides:
- The enter/leave visitor protocol driven by ASTNode.accept
- Node counting per node type
- Searching by node type or predicate
- Pretty printing for debugging
"""

from collections import Counter
from enum import Enum
from typing import Any, Callable, Dict, List

from .node import ASTNode, NodeType


class ASTVisitor:
    """
    Base visitor class for traversing AST nodes.

    Nodes call visit_enter when the traversal arrives and visit_leave when it
    departs. Both dispatch on the node type to enter_{node_type.value} and
    leave_{node_type.value} (e.g. enter_statement), falling back to
    generic_enter/generic_leave.

    Subclass this and override enter_*/leave_* methods to implement custom
    behavior. Returning False from an enter method skips that node's
    children; returning False from a leave method stops the parent from
    offering the remaining siblings in the same list.
    """

    def visit_enter(self, node: ASTNode) -> bool:
        method_name = f"enter_{node.node_type.value}"
        visitor_method = getattr(self, method_name, self.generic_enter)
        return visitor_method(node)

    def visit_leave(self, node: ASTNode) -> bool:
        method_name = f"leave_{node.node_type.value}"
        visitor_method = getattr(self, method_name, self.generic_leave)
        return visitor_method(node)

    def generic_enter(self, node: ASTNode) -> bool:
        """Default enter: always descend."""
        return True

    def generic_leave(self, node: ASTNode) -> bool:
        """Default leave: continue with siblings."""
        return True

    def traverse(self, node: ASTNode) -> bool:
        """Start a depth-first traversal at node."""
        return node.accept(self)


class NodeCountVisitor(ASTVisitor):
    """Visitor that counts the nodes of each type in a tree."""

    def __init__(self):
        self.counts: Counter = Counter()

    def generic_enter(self, node: ASTNode) -> bool:
        self.counts[node.node_type] += 1
        return True

    def count(self, root: ASTNode) -> Dict[str, int]:
        """
        Count all nodes below (and including) root.

        Returns:
            Mapping of node type value to count, in NodeType order
        """
        self.counts = Counter()
        self.traverse(root)
        return {
            node_type.value: self.counts[node_type]
            for node_type in NodeType
            if self.counts[node_type]
        }


class SearchVisitor(ASTVisitor):
    """Visitor for searching nodes by various criteria."""

    def __init__(self):
        self._predicate: Callable[[ASTNode], bool] = lambda node: False
        self._results: List[ASTNode] = []

    def generic_enter(self, node: ASTNode) -> bool:
        if self._predicate(node):
            self._results.append(node)
        return True

    def find_by_type(self, root: ASTNode, node_type: NodeType) -> List[ASTNode]:
        """Find all nodes of a specific type."""
        return self.find_by_predicate(root, lambda node: node.node_type == node_type)

    def find_by_predicate(self, root: ASTNode, predicate: Callable[[ASTNode], bool]) -> List[ASTNode]:
        """Find all nodes matching a predicate function, in traversal order."""
        self._predicate = predicate
        self._results = []
        self.traverse(root)
        return self._results


class PrettyPrintVisitor(ASTVisitor):
    """Visitor that creates a human-readable string representation of the AST."""

    def __init__(self, indent: int = 2):
        self.indent = indent
        self.current_depth = 0
        self.lines: List[str] = []

    def generic_enter(self, node: ASTNode) -> bool:
        indent_str = " " * (self.current_depth * self.indent)
        details = ", ".join(
            f"{key}={_format_attribute(value)}"
            for key, value in node.attributes().items()
            if value not in ("", (), False)
        )
        self.lines.append(f"{indent_str}{node.node_type.value}" + (f" ({details})" if details else ""))
        self.current_depth += 1
        return True

    def generic_leave(self, node: ASTNode) -> bool:
        self.current_depth -= 1
        return True

    def print(self, node: ASTNode) -> str:
        """Generate pretty-printed string of the AST."""
        self.current_depth = 0
        self.lines = []
        self.traverse(node)
        return "\n".join(self.lines)


def _format_attribute(value: Any) -> str:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, tuple):
        return "[" + ", ".join(str(v) for v in value) + "]"
    return str(value)
