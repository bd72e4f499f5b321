"""Handles interactive/command-line mode for crust. Uses cmd as backend."""

import cmd

from crust.lang.error import ErrorHandler
from crust.lang.session import Session
from crust.lang.syntax import parse_source


class Shell(cmd.Cmd):
    """crust interpreter shell."""
    intro = "crust interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    @staticmethod
    def needs_more(line):
        """Whether or not line has unclosed parentheses and continues on the next line."""
        return line.count("(") > line.count(")")

    def default(self, line):
        """Evaluates arbitrary crust expressions."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = f"{self._tmp_line} {line}" if self._tmp_line else line

            if Shell.needs_more(line):
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            evaluated = len(self.sess.results)
            self.sess.add(line)
            try:
                self.sess.run()
            finally:  # roots before a failing one still show their results
                for __, result in self.sess.results[evaluated:]:
                    print(result)

    def do_env(self, arg):
        """Lists names bound with define."""
        for name, node in self.sess.env.bindings.items():
            print(f"{name} := {node}")

    def do_ast(self, arg):
        """Shows syntax trees of arg without evaluating it."""
        with self.sess.error_handler:
            for root in parse_source(arg):
                print(root.display())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the crust interpreter!\n\n"
              "Expressions are written in prefix form with parentheses: '(+ 1 2 3)' is 6 and \n"
              "'(* 2 (+ 1 4))' is 10. Numbers are unsigned 64-bit integers, and '-' subtracts \n"
              "every argument from 0, so '(- 5)' wraps around instead of being negative.\n\n"
              "Try it out by typing '(define x 5)'. This binds the expression '5' to the name 'x'. \n"
              "Next, try typing '(+ x x)', giving 10 as the result.\n\n"
              "Commands: 'env' lists bindings, 'ast EXPR' shows the syntax tree of EXPR, 'exit' quits.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True


def main():
    """Runs crust interpreter shell. Called from crust-shell executable script."""
    with ErrorHandler(fatal=False) as error_handler:
        Shell(Session(error_handler, trace=False)).cmdloop()


if __name__ == "__main__":
    main()
