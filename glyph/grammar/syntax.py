r"""glyph syntax table: the single declarative source of truth for the language grammar.

Every construct is one character written in prefix order. A symbol is either a leaf or a parent of exactly two
children, and each parent declares the syntax kinds it accepts in its left and right positions. Formally,

```
<program>  ::= "{" <expr> <cont>                     ; "Program" (also usable as an expression: a block)
<cont>     ::= ";" <expr> <cont> | "}"               ; "ProgramCont" / "ProgramEnd"
<expr>     ::= <program> | <assign> | <call> | <lambda> | <op> | <if> | <hex2> | <hex> | <var>
<assign>   ::= "!" <var> <expr>                      ; binds var in the current frame
<call>     ::= "~" <expr> <args>                     ; callee, then argument chain
<args>     ::= "(" <expr> <args-rest> | "_"          ; "CallArgList" / "CallArgEmpty"
<args-rest>::= "," <expr> <args-rest> | ")"          ; "CallArgCont" / "CallArgEnd"
<lambda>   ::= "\" <params> <expr>                   ; parameter chain, then body
<params>   ::= "[" <var> <params-rest> | "]"         ; "LambdaArgList" / "LambdaArgEnd" (no parameters)
<params-rest> ::= "." <var> <params-rest> | "]"      ; "LambdaArgCont" / "LambdaArgEnd"
<op>       ::= ("+" | "-" | "=" | "<" | ">" | ":") <expr> <expr>
<if>       ::= "?" <expr> <branch>                   ; condition, then "IfBranch"
<branch>   ::= "|" <expr> <expr>                     ; then, else
<hex2>     ::= "#" <hex> <hex>                       ; byte literal, high digit first
<hex>      ::= "0" ... "9" | "a" ... "f"
<var>      ::= "g" ... "z" | "A" ... "Z"             ; a-f are hex digits, never variables
```

`!` is assignment and `=` is equality; `=` never assigns. The parser only uses a symbol's shape: whether children
fit is checked afterwards by the validator using the acceptance sets below.
"""

import string
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from glyph.lang.error import MalformedInput
from glyph.source import EOF


class Kind(Enum):
    """Syntax kinds produced by symbols."""
    PROGRAM = "Program"
    PROGRAM_CONT = "ProgramCont"
    PROGRAM_END = "ProgramEnd"
    ASSIGN_EXP = "AssignExp"
    CALL_EXP = "CallExp"
    LAMBDA_EXP = "LambdaExp"
    CALL_ARG_LIST = "CallArgList"
    CALL_ARG_CONT = "CallArgCont"
    CALL_ARG_END = "CallArgEnd"
    CALL_ARG_EMPTY = "CallArgEmpty"
    LAMBDA_ARG_LIST = "LambdaArgList"
    LAMBDA_ARG_CONT = "LambdaArgCont"
    LAMBDA_ARG_END = "LambdaArgEnd"
    OP_EXP = "OpExp"
    IF_EXP = "IfExp"
    IF_BRANCH = "IfBranch"
    HEX2 = "Hex2"
    HEX = "Hex"
    VARIABLE = "Variable"
    NONE = "None"  # end of input


class Shape(Enum):
    LEAF = "leaf"
    PARENT = "parent"


@dataclass(frozen=True)
class SymbolDescriptor:
    """What a character produces, and what its children may produce. Leaves accept nothing."""
    char: str
    shape: Shape
    kind: Kind
    left: frozenset = frozenset()
    right: frozenset = frozenset()

    @property
    def is_leaf(self):
        return self.shape is Shape.LEAF


EXPRESSION = frozenset({
    Kind.PROGRAM, Kind.ASSIGN_EXP, Kind.CALL_EXP, Kind.LAMBDA_EXP, Kind.OP_EXP, Kind.IF_EXP, Kind.HEX2, Kind.HEX,
    Kind.VARIABLE,
})
ROOT = frozenset({Kind.PROGRAM})

PROGRAM_REST = frozenset({Kind.PROGRAM_CONT, Kind.PROGRAM_END})
CALL_ARGS = frozenset({Kind.CALL_ARG_LIST, Kind.CALL_ARG_EMPTY})
CALL_ARGS_REST = frozenset({Kind.CALL_ARG_CONT, Kind.CALL_ARG_END})
LAMBDA_ARGS = frozenset({Kind.LAMBDA_ARG_LIST, Kind.LAMBDA_ARG_END})
LAMBDA_ARGS_REST = frozenset({Kind.LAMBDA_ARG_CONT, Kind.LAMBDA_ARG_END})
VARIABLE = frozenset({Kind.VARIABLE})
HEX = frozenset({Kind.HEX})

VARIABLES = "ghijklmnopqrstuvwxyz" + string.ascii_uppercase
HEX_DIGITS = string.digits + "abcdef"
OPERATORS = "+-=<>:"


def _leaf(char, kind):
    return SymbolDescriptor(char, Shape.LEAF, kind)


def _parent(char, kind, left, right):
    return SymbolDescriptor(char, Shape.PARENT, kind, left, right)


SYNTAX = MappingProxyType({
    **{char: _leaf(char, Kind.VARIABLE) for char in VARIABLES},
    **{char: _leaf(char, Kind.HEX) for char in HEX_DIGITS},

    "{": _parent("{", Kind.PROGRAM, EXPRESSION, PROGRAM_REST),
    ";": _parent(";", Kind.PROGRAM_CONT, EXPRESSION, PROGRAM_REST),
    "}": _leaf("}", Kind.PROGRAM_END),

    "#": _parent("#", Kind.HEX2, HEX, HEX),
    "!": _parent("!", Kind.ASSIGN_EXP, VARIABLE, EXPRESSION),

    "~": _parent("~", Kind.CALL_EXP, EXPRESSION, CALL_ARGS),
    "(": _parent("(", Kind.CALL_ARG_LIST, EXPRESSION, CALL_ARGS_REST),
    ",": _parent(",", Kind.CALL_ARG_CONT, EXPRESSION, CALL_ARGS_REST),
    ")": _leaf(")", Kind.CALL_ARG_END),
    "_": _leaf("_", Kind.CALL_ARG_EMPTY),

    "\\": _parent("\\", Kind.LAMBDA_EXP, LAMBDA_ARGS, EXPRESSION),
    "[": _parent("[", Kind.LAMBDA_ARG_LIST, VARIABLE, LAMBDA_ARGS_REST),
    ".": _parent(".", Kind.LAMBDA_ARG_CONT, VARIABLE, LAMBDA_ARGS_REST),
    "]": _leaf("]", Kind.LAMBDA_ARG_END),

    **{char: _parent(char, Kind.OP_EXP, EXPRESSION, EXPRESSION) for char in OPERATORS},

    "?": _parent("?", Kind.IF_EXP, EXPRESSION, frozenset({Kind.IF_BRANCH})),
    "|": _parent("|", Kind.IF_BRANCH, EXPRESSION, EXPRESSION),

    EOF: _leaf(EOF, Kind.NONE),
})


def lookup(char, position=None):
    """Returns the SymbolDescriptor for char, raising MalformedInput if char is not a glyph symbol."""
    try:
        return SYNTAX[char]
    except KeyError:
        raise MalformedInput("'{}' is not a glyph symbol", char, position=position)
