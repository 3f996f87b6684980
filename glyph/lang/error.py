"""Error handling for the glyph language. Only GenericExceptions should be encountered during running: if another type
of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every GenericException is fatal for the current run: there is no recovery, and the first one raised aborts parsing,
validation or evaluation. Each family of errors maps to its own process exit code.
"""

import sys

from termcolor import colored


USAGE_EXIT_CODE = 1
SOURCE_EXIT_CODE = 2
GRAMMAR_EXIT_CODE = 3
RUNTIME_EXIT_CODE = 4


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a glyph error/warning. exprs are the
    snippets formatted into msg (bolded when displayed), position is the (line, column) of the offending character.
    """
    exit_code = RUNTIME_EXIT_CODE

    def __init__(self, msg, exprs=None, position=None, diagnosis=True, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.plain_msg = msg.format(*exprs)
        self.exprs = exprs
        self.position = position
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.plain_msg)


class SourceOpenError(GenericException):
    """Program file could not be opened or read."""
    exit_code = SOURCE_EXIT_CODE


class ParseError(GenericException):
    """Superclass for errors raised while building the syntax tree."""
    exit_code = GRAMMAR_EXIT_CODE


class MalformedInput(ParseError):
    """Character has no entry in the syntax table."""


class TrailingInput(ParseError):
    """Content follows the single top-level form."""


class UnexpectedEndOfInput(ParseError):
    """Input ended while a parent symbol still expected a child."""


class GrammarViolation(GenericException):
    """A node's syntax kind is not permitted in the position it occupies."""
    exit_code = GRAMMAR_EXIT_CODE

    def __init__(self, char, position, allowed):
        self.char = char
        self.allowed = frozenset(allowed)

        expected = ", ".join(sorted(kind.value for kind in self.allowed))
        super().__init__("'{}' is not allowed here, expected one of: {}", (char, expected), position=position)


class EvaluationError(GenericException):
    """Superclass for errors raised while running a validated tree."""


class ArityMismatch(EvaluationError):
    """Number of call arguments differs from the number of closure parameters."""


class UnboundVariable(EvaluationError):
    """Name is not bound in any enclosing frame."""


class EmptyListAccess(EvaluationError):
    """First/Rest applied to the empty list."""


class TypeMismatch(EvaluationError):
    """Operation applied to a value of the wrong kind."""


class InputError(EvaluationError):
    """Ambient input is exhausted or holds a token of the wrong form."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom glyph errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.path = None
        self.lines = []

    def register_file(self, path, text=None):
        """Registers path and its source text, used to locate and display offending characters."""
        self.path = path
        self.lines = text.splitlines() if text else []

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def _location(self, position):
        """Returns 'path:line:col: ' prefix, or as much of it as is known."""
        location = self.path or ""
        if position is not None:
            line, column = position
            location += f":{line}:{column}"
        return colored(f"{location}: ", attrs=["bold"]) if location else ""

    def diagnose(self, error, warning=False):
        """Returns source line of error with the offending character highlighted and marked by a caret. Returns None
        if the line is unknown (e.g. the error occurred at end of input).
        """
        if error.position is None:
            return None

        line_num, column = error.position
        if not 0 < line_num <= len(self.lines):
            return None

        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        line = self.lines[line_num - 1].replace("\t", " " * 4)  # columns count a tab as 4

        diagnosis = "  " + line[:column]
        diagnosis += colored(line[column:column + 1], color, attrs=["bold"])
        diagnosis += line[column + 1:] + "\n"
        diagnosis += "  " + " " * column + colored("^", color, attrs=["bold"])
        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        warning = GenericException(*args, **kwargs)

        self._print(self._location(warning.position) + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"])
                    + warning.msg)

        diagnosis = self.diagnose(warning, warning=True) if warning.diagnosis else None
        if diagnosis:
            self._print(diagnosis)

    def throw(self, error):
        """Prints error, then exits with error.exit_code if this handler is fatal."""
        error_msg = self._location(error.position)
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        diagnosis = self.diagnose(error) if error.diagnosis and not error.internal else None
        if diagnosis:
            self._print(diagnosis)

        if self.fatal:
            sys.exit(error.exit_code)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("maximum recursion depth exceeded", diagnosis=False))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
