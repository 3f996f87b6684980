"""Session control for the glyph language: loads a program, parses and validates it, then runs it and writes its
result.
"""

import sys

from glyph.grammar.parser import Parser, display
from glyph.grammar.validator import validate
from glyph.lang.error import ParseError, SourceOpenError
from glyph.lang.evaluator import Evaluator
from glyph.lang.values import format_value
from glyph.source import CharSource, TokenReader


class Session:
    """Governs a single glyph program. stdin is the ambient input of the read built-ins, stdout receives the result.
    If text is given, path is only used as a name in error messages.
    """

    def __init__(self, path, error_handler=None, stdin=None, stdout=None, text=None):
        self.path = path
        self.error_handler = error_handler
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

        if text is None:
            try:
                with open(path, "r", encoding="latin-1") as file:  # every byte maps to one char
                    text = file.read()
            except OSError:
                raise SourceOpenError("'{}' could not be opened", path, diagnosis=False)

        self.text = text
        self.tree = None

        if self.error_handler is not None:
            self.error_handler.register_file(path, text)

    def parse(self):
        """Builds the syntax tree. Does not validate it."""
        try:
            self.tree = Parser(CharSource.from_string(self.text)).parse_program()
        except RecursionError:
            raise ParseError("'{}' nests too deeply to parse", self.path, diagnosis=False)
        return self.tree

    def validate(self):
        if self.tree is None:
            self.parse()
        try:
            return validate(self.tree)
        except RecursionError:
            raise ParseError("'{}' nests too deeply to validate", self.path, diagnosis=False)

    def execute(self):
        """Validates and evaluates the program, returning its value."""
        tree = self.validate()
        return Evaluator(TokenReader(self.stdin), self.error_handler).execute(tree)

    def run(self):
        """Executes the program and writes its formatted value. Returns the value."""
        value = self.execute()
        self.stdout.write(format_value(value))
        self.stdout.flush()
        return value

    def display(self):
        """Parsed tree, one symbol per line."""
        if self.tree is None:
            self.parse()
        return display(self.tree)
