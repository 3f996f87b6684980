"""Grammar validation of parsed glyph trees.

Each node's own descriptor governs what its children may be: a node is checked against the set its parent accepts
on that side, then its children are checked against the node's own acceptance sets. The first violation aborts
validation.
"""

from glyph.grammar.syntax import ROOT, SYNTAX
from glyph.lang.error import GrammarViolation


def validate(tree):
    """Validates tree, whose root must be a Program. Returns tree if well-formed."""
    validate_node(tree, ROOT)
    return tree


def validate_node(node, allowed):
    """Raises GrammarViolation if node (or any descendant) is not allowed where it stands."""
    if node.kind not in allowed:
        raise GrammarViolation(node.char, node.position, allowed)

    if node.children:
        descriptor = SYNTAX[node.char]
        validate_node(node.left, descriptor.left)
        validate_node(node.right, descriptor.right)
