"""Syntax trees for crust, generated from tokens by recursive descent.

Grammar:

```
<program>     ::= <expr>*
<expr>        ::= <number>                              ; Number
                | <symbol>                              ; Symbol
                | "(" <symbol> <expr>* ")"              ; Application (function name, then arguments)
```

Every application is parenthesized, so there is no precedence to speak of. Parsing costs one Python frame per level of
nesting and evaluating costs two (see lang/evaluator.py), so with the default recursion limit of 1000, expressions
nested a few hundred deep evaluate (300 is tested) and roughly 450 and beyond end in a RecursionError, which
ErrorHandler reports as a fatal error. Rendering a tree with str() also recurses once per level.
"""

from dataclasses import dataclass

from crust.lang.error import ParseError
from crust.lang.lexical import LeftParen, NumberToken, RightParen, SymbolToken, tokenize, untokenize


class Node:
    """Superclass for syntax tree nodes. Nodes are immutable and an Application owns its arguments exclusively."""
    args = ()

    def display(self, indents=0):
        """Recursively displays node tree with readable format.

        Format:
        Application(name='<name>', args=[
            <Node>(...),
            ...
        ])
        """
        indent = "    " * indents
        if not self.args:
            return indent + repr(self)

        result = f"{indent}{type(self).__name__}(name='{self.name}', args=["
        for arg in self.args:
            result += "\n" + arg.display(indents + 1) + ","
        return result[:-1] + f"\n{indent}])"


@dataclass(frozen=True)
class Symbol(Node):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Number(Node):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Application(Node):
    name: str
    args: tuple = ()

    def __str__(self):
        return "(" + " ".join([self.name, *(str(arg) for arg in self.args)]) + ")"


def _snippet(tokens, first, offending):
    """Returns args for a ParseError pointing at tokens[offending], shown in context from tokens[first]."""
    expr = untokenize(tokens[first:offending + 1])
    start = len(untokenize(tokens[first:offending])) + (offending > first)
    return {"exprs": expr, "start": start, "end": start + len(str(tokens[offending]))}


def parse_expr(tokens, pos=0):
    """Parses the expression that starts at tokens[pos]. Returns the node and the position right after it."""
    if pos >= len(tokens):
        raise ParseError("expected an expression, but there are no tokens left", diagnosis=False)

    token = tokens[pos]
    if isinstance(token, NumberToken):
        return Number(token.value), pos + 1
    elif isinstance(token, SymbolToken):
        return Symbol(token.text), pos + 1
    elif isinstance(token, RightParen):
        raise ParseError("unexpected token '{}'", **_snippet(tokens, pos, pos))

    assert isinstance(token, LeftParen)
    if len(tokens) - pos < 3:
        raise ParseError("too few tokens in '{}'", untokenize(tokens[pos:]))

    name = tokens[pos + 1]
    if not isinstance(name, SymbolToken):
        msg = "unexpected token in '{}': expected function name"
        raise ParseError(msg, **_snippet(tokens, pos, pos + 1))

    args = []
    first, pos = pos, pos + 2
    while pos < len(tokens) and not isinstance(tokens[pos], RightParen):
        arg, pos = parse_expr(tokens, pos)
        args.append(arg)

    if pos >= len(tokens):
        raise ParseError("'{}' is missing a closing ')'", untokenize(tokens[first:]))
    return Application(name.text, tuple(args)), pos + 1


def parse(tokens):
    """Parses tokens into a list of syntax tree roots, accounting for every token."""
    roots = []
    pos = 0
    while pos < len(tokens):
        root, pos = parse_expr(tokens, pos)
        roots.append(root)

    if pos != len(tokens):
        raise ParseError(f"parsed {pos} tokens, but there are {len(tokens)}", internal=True)
    return roots


def parse_source(source):
    """Tokenizes and parses source."""
    return parse(tokenize(source))
