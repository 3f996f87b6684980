import io
import os
import tempfile
import unittest

from glyph.grammar.syntax import Kind
from glyph.lang.error import (ErrorHandler, GrammarViolation, MalformedInput, ParseError, SourceOpenError,
                              UnexpectedEndOfInput)
from glyph.lang.session import Session
from glyph.lang.values import Integer


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.directory.name, "prog.gl")

    def tearDown(self):
        self.directory.cleanup()

    def write(self, text):
        with open(self.path, "w") as file:
            file.write(text)

    def test_run_file(self):
        self.write("{ !x #41 ;\n  x }\n")
        stdout = io.StringIO()
        value = Session(self.path, stdout=stdout).run()

        self.assertEqual(Integer(65), value)
        self.assertEqual("65\n", stdout.getvalue())

    def test_run_rows(self):
        stdout = io.StringIO()
        sess = Session("<echo>", stdin=io.StringIO("hello there"), stdout=stdout, text="{ :~R_:~R_N }")
        sess.run()
        self.assertEqual("hello\nthere\n", stdout.getvalue())

    def test_missing_file(self):
        with self.assertRaises(SourceOpenError) as context:
            Session(os.path.join(self.directory.name, "missing.gl"))
        self.assertEqual(2, context.exception.exit_code)

    def test_non_ascii_byte(self):
        with open(self.path, "wb") as file:
            file.write(b"{ a \xff }")

        with self.assertRaises(MalformedInput) as context:
            Session(self.path).execute()
        self.assertEqual((1, 4), context.exception.position)
        self.assertEqual(3, context.exception.exit_code)

    def test_too_deep(self):
        sess = Session("<deep>", text="{" + "1;" * 100000 + "2}")
        with self.assertRaises(ParseError) as context:
            sess.parse()
        self.assertIn("nests too deeply", context.exception.plain_msg)
        self.assertEqual(3, context.exception.exit_code)

    def test_stages(self):
        sess = Session("<prog>", text="{ ])")
        self.assertIs(Kind.PROGRAM, sess.parse().kind)
        self.assertRaises(GrammarViolation, sess.validate)
        self.assertRaises(GrammarViolation, sess.execute)

        self.assertRaises(UnexpectedEndOfInput, Session("<prog>", text="{ a").execute)

    def test_display(self):
        self.assertEqual("{\n #\n  4\n  1\n }", Session("<prog>", text="{#41}").display())

    def test_registers_source(self):
        error_handler = ErrorHandler(fatal=False)
        Session("<prog>", error_handler, text="{ a\n; b }")
        self.assertEqual("<prog>", error_handler.path)
        self.assertEqual(["{ a", "; b }"], error_handler.lines)


if __name__ == '__main__':
    unittest.main()
