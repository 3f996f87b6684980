"""Command-line entry point of the glyph interpreter. Uses the error handling context manager, so glyph errors are
reported with their source position and exit with their own code. Installed as the `glyph` script.
"""

import argparse
import sys

from glyph.lang.error import ErrorHandler, USAGE_EXIT_CODE
from glyph.lang.session import Session


RECURSION_LIMIT = 20000  # parsing, validation and evaluation all recurse on tree/call depth


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with glyph's usage exit code."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(USAGE_EXIT_CODE, f"{self.prog}: error: {message}\n")


def main(argv=None):
    """Runs the glyph interpreter on the file named in argv."""
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    with ErrorHandler() as error_handler:
        parser = UsageParser(prog="glyph", description="Validate and run a glyph program.")
        parser.add_argument("file", help="glyph program to run")
        parser.add_argument("--tree", action="store_true", help="print the parsed tree instead of running it")
        args = parser.parse_args(argv)

        sess = Session(args.file, error_handler)
        if args.tree:
            print(sess.display())
        else:
            sess.run()


if __name__ == "__main__":
    main()
