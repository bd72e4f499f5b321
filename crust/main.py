"""Runs a crust program given on the command line. Uses error handling context manager. Called from crust executable
script.
"""

import argparse

from crust.lang.error import ErrorHandler, UsageError
from crust.lang.session import Session


class ArgumentParser(argparse.ArgumentParser):
    """argparse.ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError("{}\n" + self.format_usage().rstrip(), message, diagnosis=False)


def main(argv=None):
    """Runs crust interpreter on the single program argument and prints its result."""
    with ErrorHandler() as error_handler:
        parser = ArgumentParser(prog="crust", description="Evaluates a program of +, -, *, / and define expressions.")
        parser.add_argument("program", help="program source, e.g. \"(define x 5) (+ x x)\"; put '--' before a "
                                             "program that starts with '-'")
        parser.add_argument("-q", "--quiet", action="store_true", help="only print the final result")
        parser.add_argument("-W", "--no-warnings", action="store_true", help="do not warn about wrap-around")
        args = parser.parse_args(argv)

        sess = Session(error_handler, trace=not args.quiet, warnings=not args.no_warnings)
        sess.add(args.program)
        print(sess.run())


if __name__ == "__main__":
    main()
