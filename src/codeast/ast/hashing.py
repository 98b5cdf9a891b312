"""
Content hashing for AST nodes.

Computes stable content-based fingerprints for trees, enabling:
- Fast change detection between two conversions of the same file
- Cache keys that survive interpreter restarts (unlike hash())
"""

import hashlib
import json
from enum import Enum
from typing import Any, Dict

from .node import ASTNode


class NodeHasher:
    """
    Computes hex digests for AST nodes.

    The hash is computed from:
    - Node type
    - Node attributes
    - Hashes of all children, in traversal order
    """

    def __init__(self, algorithm: str = "sha256"):
        """
        Initialize the hasher.

        Args:
            algorithm: Hash algorithm to use (default: sha256)
        """
        self.algorithm = algorithm

    def hash_node(self, node: ASTNode) -> str:
        """
        Compute hash for a node and, recursively, its children.

        Args:
            node: The AST node to hash

        Returns:
            Hexadecimal hash string
        """
        hasher = hashlib.new(self.algorithm)
        hasher.update(node.node_type.value.encode('utf-8'))
        hasher.update(self._serialize_attributes(node.attributes()).encode('utf-8'))

        # Child hashes, not full child content
        for child in node.children():
            hasher.update(self.hash_node(child).encode('utf-8'))

        return hasher.hexdigest()

    def _serialize_attributes(self, attributes: Dict[str, Any]) -> str:
        """
        Serialize attributes to a deterministic string.

        Uses JSON serialization with sorted keys.
        """
        return json.dumps(attributes, sort_keys=True, default=_json_default)

    def same_content(self, first: ASTNode, second: ASTNode) -> bool:
        """Compare two trees by digest."""
        return self.hash_node(first) == self.hash_node(second)


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name
    return str(value)


def hash_tree(root: ASTNode, algorithm: str = "sha256") -> str:
    """
    Convenience function to hash an entire AST tree.

    Args:
        root: Root node of the tree
        algorithm: Hash algorithm to use

    Returns:
        Hexadecimal digest of the root
    """
    return NodeHasher(algorithm=algorithm).hash_node(root)
