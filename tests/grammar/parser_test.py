import unittest

from glyph.grammar.parser import Node, display, parse, unparse
from glyph.grammar.syntax import Kind
from glyph.lang.error import MalformedInput, TrailingInput, UnexpectedEndOfInput
from glyph.source import Position


class ParserTestCase(unittest.TestCase):

    def test_parse(self):
        tree = parse("{ !x #41 ; x }")
        self.assertEqual("{", tree.char)
        self.assertIs(Kind.PROGRAM, tree.kind)

        assign, cont = tree.children
        self.assertEqual(["x", "#"], [child.char for child in assign.children])
        self.assertEqual(["4", "1"], [child.char for child in assign.right.children])
        self.assertEqual(["x", "}"], [child.char for child in cont.children])
        self.assertEqual([], cont.right.children)
        self.assertIsNone(cont.right.left)

    def test_shape_only(self):
        # children are parsed by arity alone, even where the grammar would reject them
        tree = parse("{])")
        self.assertEqual([Kind.LAMBDA_ARG_END, Kind.CALL_ARG_END], [child.kind for child in tree.children])

        tree = parse("#gh")
        self.assertIs(Kind.HEX2, tree.kind)

    def test_round_trip(self):
        cases = [
            "{ a }",
            "{ !x #41 ; x }",
            "{ !F \\[x.y] -xy ; ~F(9,3) }",
            "{\n\t!F \\[n] ?n | :n ~F(-n1) N\n\t; ~F(3)\n}",
            "{ ~I_ }",
            "{ ?0|12 }",
        ]
        for case in cases:
            self.assertEqual("".join(case.split()), unparse(parse(case)), case)
            self.assertEqual(parse(case), parse(unparse(parse(case))), case)

    def test_equality(self):
        self.assertEqual(parse("{a}"), parse(" {\n a } "))
        self.assertNotEqual(parse("{a}"), parse("{b}"))
        self.assertNotEqual(parse("{+12}"), parse("{-12}"))

    def test_positions(self):
        tree = parse("{\n\tx }")
        self.assertEqual(Position(1, 0), tree.position)
        self.assertEqual(Position(2, 4), tree.left.position)
        self.assertEqual(Position(2, 6), tree.right.position)

    def test_malformed(self):
        should_raise = ["{ @ }", "{ a } @", "{ x$ }", "λ"]
        for case in should_raise:
            self.assertRaises(MalformedInput, parse, case)

        with self.assertRaises(MalformedInput) as context:
            parse("{\n @ }")
        self.assertEqual(Position(2, 1), context.exception.position)

    def test_trailing(self):
        should_raise = ["{a}{a}", "{a} b", "{a}\n\n}"]
        for case in should_raise:
            self.assertRaises(TrailingInput, parse, case)

        with self.assertRaises(TrailingInput) as context:
            parse("{a} b")
        self.assertEqual(Position(1, 4), context.exception.position)

    def test_unexpected_end(self):
        should_raise = ["", "   \n", "{", "{ a", "{ !x #4", "~F(1,"]
        for case in should_raise:
            self.assertRaises(UnexpectedEndOfInput, parse, case)

        with self.assertRaises(UnexpectedEndOfInput) as context:
            parse("{ #4")
        self.assertEqual(Position(1, 2), context.exception.position)

    def test_display(self):
        self.assertEqual("{\n a\n }", display(parse("{a}")))
        self.assertEqual("{\n +\n  1\n  2\n }", display(parse("{+12}")))

    def test_repr(self):
        self.assertEqual("Node('{!x1}')", repr(parse("{ !x 1 }")))
        self.assertIsInstance(parse("{a}").left, Node)


if __name__ == '__main__':
    unittest.main()
