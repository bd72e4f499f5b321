"""Tree-walking evaluation of crust syntax trees against a flat global environment.

Names are bound to syntax nodes, not to values: `(define x (+ 1 2))` stores the node `(+ 1 2)` and every later use of
`x` evaluates it again, resolving any symbols inside it against the environment as it is at that point.
"""

import operator

from crust.lang.error import ArithmeticFault, MalformedDefine, UnknownFunction, UnresolvedSymbol
from crust.lang.numerical import in_range, wrap
from crust.lang.syntax import Application, Number, Symbol


class Environment:
    """Binding table of name: node shared by every root of a program."""

    def __init__(self):
        self.bindings = {}

    def define(self, name, node):
        """Binds name to node, replacing any earlier binding."""
        self.bindings[name] = node

    def lookup(self, symbol):
        """Returns node bound to symbol. Raises UnresolvedSymbol on failure."""
        try:
            return self.bindings[symbol.name]
        except KeyError:
            raise UnresolvedSymbol("'{}' is not defined", symbol.name) from None

    def __contains__(self, name):
        return name in self.bindings

    def __len__(self):
        return len(self.bindings)

    def __repr__(self):
        return f"Environment({self.bindings})"


class Evaluator:
    """Evaluates syntax trees to unsigned 64-bit integers. If error_handler is given, it is warned whenever an
    arithmetic result wraps around.

    Every level of nesting costs two Python frames (evaluate, then the fold or function evaluating the args), so
    evaluation handles expressions nested up to roughly half of sys.getrecursionlimit() deep.
    """
    FOLDS = {"+": (0, operator.add), "-": (0, operator.sub), "*": (1, operator.mul)}  # name: (seed, op)
    FUNCTIONS = {"/": "_div", "define": "_define"}

    def __init__(self, env=None, error_handler=None):
        self.env = env if env is not None else Environment()
        self.error_handler = error_handler

    def evaluate(self, node):
        """Evaluates node, binding names in self.env as a side effect of define."""
        if isinstance(node, Number):
            return node.value

        elif isinstance(node, Symbol):
            return self.evaluate(self.env.lookup(node))

        elif isinstance(node, Application):
            if node.name in Evaluator.FOLDS:
                return self._fold(node, *Evaluator.FOLDS[node.name])
            elif node.name in Evaluator.FUNCTIONS:
                return getattr(self, Evaluator.FUNCTIONS[node.name])(node)

            msg = "unknown function '{1}' in '{0}'"
            raise UnknownFunction(msg, (str(node), node.name), start=1, end=1 + len(node.name))

        raise TypeError(f"cannot evaluate {node!r}")

    @staticmethod
    def _span(app, idx):
        """Start and end of app.args[idx] within str(app)."""
        start = len(app.name) + 2 + sum(len(str(arg)) + 1 for arg in app.args[:idx])
        return {"start": start, "end": start + len(str(app.args[idx]))}

    def _fold(self, app, seed, op):
        """Folds app's args, evaluated left to right, into seed with op, wrapping the result to 64 bits. Note that
        '-' folds from zero too: (- 5) is 0 - 5, not -5.
        """
        acc = seed
        wrapped = False
        for arg in app.args:
            acc = op(acc, self.evaluate(arg))
            if not in_range(acc):
                acc = wrap(acc)
                wrapped = True

        if wrapped and self.error_handler is not None:
            self.error_handler.warn("'{}' wrapped around to {}", (str(app), str(acc)))
        return acc

    def _div(self, app):
        if not app.args:
            raise ArithmeticFault("'{}' needs at least one argument", str(app))

        acc = self.evaluate(app.args[0])
        for idx in range(1, len(app.args)):
            value = self.evaluate(app.args[idx])
            if value == 0:
                msg = "division by zero: '{1}' is 0 in '{0}'"
                raise ArithmeticFault(msg, (str(app), str(app.args[idx])), **Evaluator._span(app, idx))
            acc //= value
        return acc

    def _define(self, app):
        """Binds app.args[0] to app.args[1] unevaluated. Any further args are ignored."""
        if len(app.args) < 2:
            raise MalformedDefine("'{}' expects a name and a value", str(app))

        name = app.args[0]
        if not isinstance(name, Symbol):
            msg = "unexpected node '{1}' in '{0}': expected a name"
            raise MalformedDefine(msg, (str(app), str(name)), **Evaluator._span(app, 0))

        self.env.define(name.name, app.args[1])
        return 0
