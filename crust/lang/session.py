"""Session control for crust. A session is one program run: a fresh environment, shared by every root evaluated in it,
that lives as long as the session does.
"""

from crust.lang.evaluator import Environment, Evaluator
from crust.lang.syntax import parse_source


class Session:
    """Governs a crust session: parses sources into roots and evaluates them in order against one environment."""

    def __init__(self, error_handler=None, trace=True, warnings=True):
        self.error_handler = error_handler
        self.trace = trace  # whether or not to print each root and its result

        self.env = Environment()
        self.evaluator = Evaluator(self.env, error_handler if warnings else None)

        self.to_eval = []  # roots waiting to be evaluated
        self.results = []  # list of (root, result) for evaluated roots

    def add(self, source):
        """Tokenizes and parses source, queueing its roots. Evaluation is delayed until run is called."""
        roots = parse_source(source)
        self.to_eval.extend(roots)
        return roots

    def run(self):
        """Evaluates queued roots in order and returns the program result (result of the last root evaluated in this
        session, 0 if there is none). The first error aborts the run and drops the roots that are still queued.
        """
        roots, self.to_eval = self.to_eval, []

        for root in roots:
            root_num = len(self.results) + 1
            if self.error_handler is not None:
                self.error_handler.register_root(root_num, root)

            if self.trace:
                print(f"root: {root}")

            result = self.evaluator.evaluate(root)
            self.results.append((root, result))

            if self.trace:
                print(f"result: {result}")

            if self.error_handler is not None:
                self.error_handler.remove_root()

        return self.result

    @property
    def result(self):
        """Program result so far."""
        return self.results[-1][1] if self.results else 0


def evaluate(source):
    """Evaluates program source silently and returns its result. Raises CrustException on failure."""
    sess = Session(trace=False, warnings=False)
    sess.add(source)
    return sess.run()
