"""Error handling for crust. Only CrustExceptions should be encountered during running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every crust error is fatal at the point where it is detected. The exception classes below let library callers and the
interactive shell catch them; ErrorHandler is what turns them into a message and an exit status.
"""

import sys

from termcolor import colored


class CrustException(Exception):
    """Templates an error/warning message so that it can be used to throw a crust error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """msg is formatted with exprs (bolded). exprs[0] should be the offending expr; start and end delimit the part
        of it that the diagnosis underlines.
        """
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(msg.format(*exprs))


class UsageError(CrustException):
    """Command-line misuse, e.g. a wrong number of arguments."""


class ParseError(CrustException):
    """Token sequence that does not form complete expressions."""


class UnresolvedSymbol(CrustException):
    """Symbol with no binding in the environment."""


class MalformedDefine(CrustException):
    """define whose first argument isn't a symbol, or with too few arguments."""


class UnknownFunction(CrustException):
    """Application of something other than +, -, *, / or define."""


class ArithmeticFault(CrustException):
    """Division with no arguments or by zero."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom crust errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.root = None  # (root_num, root) currently being evaluated

    def register_root(self, root_num, root):
        """Registers root as the one being evaluated. Should be called prior to evaluating it."""
        self.root = (root_num, str(root))

    def remove_root(self):
        """Should be called after root was evaluated successfully."""
        self.root = None

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def _context(self, error):
        """Root that error occurred in, if it isn't already the offending expr."""
        if self.root is None or error.internal:
            return ""

        root_num, root = self.root
        if root == error.expr:
            return ""
        return f"In root {root_num}:\n  {root}\n"

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = CrustException(*args, **kwargs)

        warning_msg = self._context(error)
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(warning_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error, which must be a CrustException. Exits if self.fatal."""
        error_msg = self._context(error)

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.root = None  # if error occurred, reset context (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(CrustException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            msg = "maximum recursion depth exceeded: nesting too deep or cyclic definition"
            self.throw(CrustException(msg, diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, CrustException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(CrustException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
