"""Runtime values and environment frames for glyph.

A value is one of Integer, List or Closure. Lists are chains of immutable Cons cells ending in nil (a List with no
cell). Strings are lists of character codes: reading a token produces one, and a List result is printed as a list
of such rows, one per line.
"""

from dataclasses import dataclass, field
from enum import Enum

from glyph.lang.error import TypeMismatch, UnboundVariable


INT_BITS = 64


def wrap(number):
    """Wraps number into a signed 64-bit integer."""
    number &= (1 << INT_BITS) - 1
    return number - (1 << INT_BITS) if number >> (INT_BITS - 1) else number


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True, eq=False)
class Cons:
    """Pair cell. Compared by identity, never by content."""
    head: object
    tail: object


@dataclass(frozen=True)
class List:
    cell: Cons = None  # None is nil, the empty list

    @property
    def empty(self):
        return self.cell is None


class Builtin(Enum):
    READ_INT = "ReadInt"
    READ_TOKEN = "ReadToken"
    FIRST = "First"
    REST = "Rest"


@dataclass(frozen=True, eq=False)
class Closure:
    """User closures carry the lambda node that defines them, built-ins carry a Builtin instead."""
    frame: "Frame" = field(repr=False)
    lambda_node: object = None
    builtin: Builtin = None


NIL = List()

BUILTINS = {"I": Builtin.READ_INT, "R": Builtin.READ_TOKEN, "H": Builtin.FIRST, "T": Builtin.REST}
NIL_NAME = "N"


class Frame:
    """Lexical scope: bindings of single-character names, chained to the enclosing frame."""

    def __init__(self, parent=None):
        self.bindings = {}
        self.parent = parent

    def define(self, name, value):
        """Binds name in this frame only, shadowing any outer binding."""
        self.bindings[name] = value

    def _resolve(self, name, position):
        """Returns the nearest frame binding name."""
        frame = self
        while frame is not None:
            if name in frame.bindings:
                return frame
            frame = frame.parent
        raise UnboundVariable("'{}' is not bound", name, position=position)

    def lookup(self, name, position=None):
        return self._resolve(name, position).bindings[name]

    def assign(self, name, value, position=None):
        """Rebinds name in the nearest frame that already binds it. Never creates a binding."""
        self._resolve(name, position).bindings[name] = value

    def __repr__(self):
        return f"Frame({sorted(self.bindings)}, parent={self.parent!r})"


def root_frame():
    """Frame every program starts in: the four built-ins and nil."""
    frame = Frame()
    for name, builtin in BUILTINS.items():
        frame.define(name, Closure(frame, builtin=builtin))
    frame.define(NIL_NAME, NIL)
    return frame


def truthy(value):
    if isinstance(value, Integer):
        return value.value != 0
    elif isinstance(value, List):
        return not value.empty
    return True


def equal(left, right):
    """Kind first, then Integers by value and Lists/Closures by identity."""
    if type(left) is not type(right):
        return False
    elif isinstance(left, Integer):
        return left.value == right.value
    elif isinstance(left, List):
        return left.cell is right.cell
    return left is right


def iterate(value, position=None):
    """Yields the heads of list value in order."""
    if not isinstance(value, List):
        raise TypeMismatch("expected a list, got {}", kind_name(value), position=position)

    while not value.empty:
        yield value.cell.head
        value = value.cell.tail
        if not isinstance(value, List):
            raise TypeMismatch("list ends in {} instead of nil", kind_name(value), position=position)


def from_string(text):
    """Converts text to a list of character codes."""
    value = NIL
    for char in reversed(text):
        value = List(Cons(Integer(ord(char)), value))
    return value


def to_string(value):
    """Converts a list of character codes back to text."""
    chars = []
    for code in iterate(value):
        if not isinstance(code, Integer) or not 0 <= code.value <= 0x10FFFF:
            raise TypeMismatch("expected a character code, got {}", describe(code))
        chars.append(chr(code.value))
    return "".join(chars)


def kind_name(value):
    return type(value).__name__.lower()


def describe(value):
    """Short human-readable rendering of value, used in error messages."""
    if isinstance(value, Integer):
        return str(value.value)
    elif isinstance(value, Closure):
        return "<closure>" if value.builtin is None else f"<builtin {value.builtin.value}>"
    return "<list>" if not value.empty else "<nil>"


def format_value(value):
    """Output form of a program result: an Integer in decimal, a List as one line per row of character codes."""
    if isinstance(value, List):
        return "".join(to_string(row) + "\n" for row in iterate(value))
    return describe(value) + "\n"
