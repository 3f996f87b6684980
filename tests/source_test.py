import io
import unittest

from glyph.lang.error import InputError
from glyph.source import CharSource, EOF, Position, TokenReader


class CharSourceTestCase(unittest.TestCase):

    def test_read(self):
        source = CharSource.from_string("{\n\tx }")
        cases = [("{", (1, 0)), ("\n", (1, 1)), ("\t", (2, 0)), ("x", (2, 4)), (" ", (2, 5)), ("}", (2, 6))]
        for char, position in cases:
            self.assertEqual((char, Position(*position)), source.read(), char)

        self.assertEqual((EOF, Position(2, 7)), source.read())
        self.assertEqual((EOF, Position(2, 7)), source.read())

    def test_position(self):
        source = CharSource.from_string("ab\ncd")
        for __ in range(4):
            source.read()
        self.assertEqual(Position(2, 1), source.position)


class TokenReaderTestCase(unittest.TestCase):

    def test_read_token(self):
        reader = TokenReader(io.StringIO("  hello\n\tworld 12"))
        for expected in ["hello", "world", "12"]:
            self.assertEqual(expected, reader.read_token())
        self.assertRaises(InputError, reader.read_token)

    def test_read_int(self):
        reader = TokenReader(io.StringIO("42 -7 x"))
        self.assertEqual(42, reader.read_int())
        self.assertEqual(-7, reader.read_int())
        self.assertRaises(InputError, reader.read_int)
        self.assertRaises(InputError, reader.read_int)

    def test_reads_only_what_it_needs(self):
        stream = io.StringIO("12 34")
        TokenReader(stream).read_int()
        self.assertEqual("34", stream.read())


if __name__ == '__main__':
    unittest.main()
