"""Character and token streams for glyph.

CharSource feeds the parser one character at a time from the program text. TokenReader feeds the ReadInt/ReadToken
built-ins from the ambient input stream, which is distinct from the program text.
"""

import io
from collections import namedtuple

from glyph.lang.error import InputError


EOF = ""       # what io streams return from read(1) at end of stream
TAB_WIDTH = 4

Position = namedtuple("Position", "line column")


class CharSource:
    """Yields characters one at a time, tracking 1-based line and 0-based column."""

    def __init__(self, stream):
        self.stream = stream
        self.line = 1
        self.column = 0

    @classmethod
    def from_string(cls, text):
        return cls(io.StringIO(text))

    @property
    def position(self):
        return Position(self.line, self.column)

    def read(self):
        """Consumes one character and returns (char, position it was read at). char is EOF at end of stream."""
        position = self.position
        char = self.stream.read(1)

        if char == "\n":
            self.line += 1
            self.column = 0
        elif char == "\t":
            self.column += TAB_WIDTH
        elif char != EOF:
            self.column += 1

        return char, position


class TokenReader:
    """Reads whitespace-delimited tokens, consuming no more of the stream than a token needs."""

    def __init__(self, stream):
        self.stream = stream

    def read_token(self):
        char = self.stream.read(1)
        while char and char.isspace():
            char = self.stream.read(1)

        token = ""
        while char and not char.isspace():
            token += char
            char = self.stream.read(1)

        if not token:
            raise InputError("expected an input token, but input is exhausted", diagnosis=False)
        return token

    def read_int(self):
        token = self.read_token()
        try:
            return int(token)
        except ValueError:
            raise InputError("expected an integer input token, got '{}'", token, diagnosis=False)
