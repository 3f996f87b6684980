"""Tree-walking evaluation of validated glyph trees.

Evaluation is strict and eager. Closures are lexically scoped: a call frame is a child of the frame the closure
captured, never of the caller's frame, while the call's arguments are evaluated in the caller's frame.
"""

import operator

from glyph.grammar.syntax import Kind
from glyph.lang.error import ArityMismatch, EmptyListAccess, GenericException, TypeMismatch
from glyph.lang.values import (Builtin, Closure, Cons, Frame, Integer, List, equal, from_string, kind_name,
                               root_frame, truthy, wrap)


ARITHMETIC = {"+": operator.add, "-": operator.sub, "<": operator.lt, ">": operator.gt}

ARGUMENTS = (Kind.CALL_ARG_LIST, Kind.CALL_ARG_CONT)
ARGUMENTS_END = (Kind.CALL_ARG_END, Kind.CALL_ARG_EMPTY)
PARAMETERS = (Kind.LAMBDA_ARG_LIST, Kind.LAMBDA_ARG_CONT)


def chain_length(node, links):
    """Number of links in an argument or parameter chain."""
    length = 0
    while node.kind in links:
        length += 1
        node = node.right
    return length


class Evaluator:
    """Evaluates nodes against frames. reader supplies the ambient input of the ReadInt/ReadToken built-ins, and
    error_handler (optional) receives runtime warnings.
    """

    def __init__(self, reader, error_handler=None):
        self.reader = reader
        self.error_handler = error_handler

        self._dispatch = {
            Kind.PROGRAM: self._sequence,
            Kind.PROGRAM_CONT: self._sequence,
            Kind.ASSIGN_EXP: self._assign,
            Kind.CALL_EXP: self._call,
            Kind.LAMBDA_EXP: self._lambda,
            Kind.OP_EXP: self._operator,
            Kind.IF_EXP: self._if,
            Kind.HEX2: self._hex2,
            Kind.HEX: self._hex,
            Kind.VARIABLE: self._variable,
        }

    def execute(self, tree):
        """Evaluates a validated program in a fresh root frame and returns its value."""
        return self.evaluate(tree, root_frame())

    def evaluate(self, node, frame):
        try:
            method = self._dispatch[node.kind]
        except KeyError:
            raise GenericException("'{}' cannot be evaluated", node.char, position=node.position, internal=True)
        return method(node, frame)

    def _sequence(self, node, frame):
        result = self.evaluate(node.left, frame)
        if node.right.kind is Kind.PROGRAM_END:
            return result
        return self.evaluate(node.right, frame)

    def _assign(self, node, frame):
        value = self.evaluate(node.right, frame)
        frame.define(node.left.char, value)
        return value

    def _lambda(self, node, frame):
        return Closure(frame, lambda_node=node)

    def _call(self, node, frame):
        callee = self.evaluate(node.left, frame)
        if not isinstance(callee, Closure):
            raise TypeMismatch("cannot call {}", kind_name(callee), position=node.position)

        if callee.builtin is not None:
            return self._call_builtin(callee.builtin, node, frame)

        params, body = callee.lambda_node.left, callee.lambda_node.right
        args = node.right
        call_frame = Frame(callee.frame)

        while params.kind in PARAMETERS and args.kind in ARGUMENTS:
            call_frame.define(params.left.char, self.evaluate(args.left, frame))
            params, args = params.right, args.right

        if params.kind in PARAMETERS or args.kind not in ARGUMENTS_END:
            expected = chain_length(callee.lambda_node.left, PARAMETERS)
            given = chain_length(node.right, ARGUMENTS)
            raise ArityMismatch("closure takes {} argument(s), but {} were given", (expected, given),
                                position=node.position)

        return self.evaluate(body, call_frame)

    def _call_builtin(self, builtin, node, frame):
        # ReadInt and ReadToken never evaluate their arguments
        if builtin is Builtin.READ_INT:
            return Integer(wrap(self.reader.read_int()))
        elif builtin is Builtin.READ_TOKEN:
            return from_string(self.reader.read_token())

        args = node.right
        if args.kind is Kind.CALL_ARG_EMPTY:
            raise ArityMismatch("{} expects a list argument", builtin.value, position=node.position)
        if args.right.kind is not Kind.CALL_ARG_END and self.error_handler is not None:
            self.error_handler.warn("{} uses only its first argument, the rest are ignored", builtin.value,
                                    position=node.position)

        value = self.evaluate(args.left, frame)
        if not isinstance(value, List):
            raise TypeMismatch("{} expects a list, got {}", (builtin.value, kind_name(value)), position=node.position)
        elif value.empty:
            raise EmptyListAccess("{} of the empty list", builtin.value, position=node.position)

        return value.cell.head if builtin is Builtin.FIRST else value.cell.tail

    def _operator(self, node, frame):
        left = self.evaluate(node.left, frame)
        right = self.evaluate(node.right, frame)

        if node.char == ":":
            return List(Cons(left, right))
        elif node.char == "=":
            return Integer(int(equal(left, right)))

        if not isinstance(left, Integer) or not isinstance(right, Integer):
            kinds = (node.char, kind_name(left), kind_name(right))
            raise TypeMismatch("'{}' expects integers, got {} and {}", kinds, position=node.position)
        return Integer(wrap(int(ARITHMETIC[node.char](left.value, right.value))))

    def _if(self, node, frame):
        branch = node.right
        if truthy(self.evaluate(node.left, frame)):
            return self.evaluate(branch.left, frame)
        return self.evaluate(branch.right, frame)

    def _hex2(self, node, frame):
        high = self.evaluate(node.left, frame).value
        low = self.evaluate(node.right, frame).value
        return Integer((high << 4) | low)

    def _hex(self, node, frame):
        return Integer(int(node.char, 16))

    def _variable(self, node, frame):
        return frame.lookup(node.char, node.position)
