"""glyph syntax tree generation.

Parsing is shape-only: every character is looked up in the syntax table and a parent symbol unconditionally parses
exactly two children, left then right, whatever they turn out to be. Whether a child is allowed where it stands is
checked separately (see validator.py), so the parser never consults the acceptance sets.
"""

from glyph.grammar.syntax import Kind, lookup
from glyph.lang.error import TrailingInput, UnexpectedEndOfInput
from glyph.source import CharSource, EOF


WHITESPACE = " \t\n\r"


class Node:
    """Syntax tree node. Both children are present iff the symbol is a parent. Never mutated once parsed."""

    def __init__(self, char, kind, position, left=None, right=None):
        self.char = char
        self.kind = kind
        self.position = position
        self.left = left
        self.right = right

    @property
    def children(self):
        return [] if self.left is None else [self.left, self.right]

    def __repr__(self):
        return f"Node('{unparse(self)}')"

    def __eq__(self, other):
        """Structural equality, ignoring positions."""
        return (isinstance(other, Node) and self.char == other.char and self.kind is other.kind
                and self.children == other.children)

    __hash__ = object.__hash__


class Parser:
    """Recursive-descent parser over a CharSource."""

    def __init__(self, source):
        self.source = source

    def _next_char(self):
        """Returns the next (char, position), skipping whitespace."""
        char, position = self.source.read()
        while char != EOF and char in WHITESPACE:
            char, position = self.source.read()
        return char, position

    def parse_one(self):
        """Parses a single node and, if it is a parent, its two children. End of input yields a Kind.NONE leaf."""
        char, position = self._next_char()
        descriptor = lookup(char, position)

        if descriptor.is_leaf:
            return Node(char, descriptor.kind, position)

        left = self._parse_child(char, position)
        right = self._parse_child(char, position)
        return Node(char, descriptor.kind, position, left, right)

    def _parse_child(self, parent_char, parent_position):
        child = self.parse_one()
        if child.kind is Kind.NONE:
            raise UnexpectedEndOfInput("input ended before '{}' received both children", parent_char,
                                       position=parent_position)
        return child

    def parse_program(self):
        """Parses exactly one top-level node, which must be followed by end of input."""
        tree = self.parse_one()
        if tree.kind is Kind.NONE:
            raise UnexpectedEndOfInput("expected a program, but input is empty", diagnosis=False)

        char, position = self._next_char()
        if char != EOF:
            lookup(char, position)
            raise TrailingInput("unexpected '{}' after the end of the program", char, position=position)

        return tree


def parse(text):
    """Parses a whole program from a string."""
    return Parser(CharSource.from_string(text)).parse_program()


def unparse(node):
    """Serializes node back to its prefix character form, without whitespace."""
    return node.char + "".join(unparse(child) for child in node.children)


def display(node, level=0):
    """Returns tree with one character per line, each indented one space per level of depth."""
    lines = " " * level + node.char
    for child in node.children:
        lines += "\n" + display(child, level + 1)
    return lines
