"""Lexical analysis for crust. Turns an arbitrary source string into a flat list of tokens.

All tokens can be loosely defined as follows:

```
<left_paren>  ::= "("
<right_paren> ::= ")"
<number>      ::= ["+"] <digit>+      ; unsigned 64-bit integer, see lang/numerical.py
<symbol>      ::= <char>+             ; any other maximal run of non-whitespace, non-paren chars
```

Parentheses are tokens of their own even when they touch other text: `(apa)` is three tokens. Tokenizing never fails;
text that is neither a paren nor a number is a symbol, and any problem with it surfaces while parsing or evaluating.
"""

import re
from dataclasses import dataclass

from crust.lang.numerical import number

SEPARATORS = "()"

# runs of chars without the Unicode White_Space property (str.split would also split on \x1c-\x1f)
WORDS = re.compile("[^\t\n\x0b\x0c\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+")


class Token:
    """Superclass representing any token in crust."""

    def __str__(self):
        return self.text


@dataclass(frozen=True)
class LeftParen(Token):
    text = "("


@dataclass(frozen=True)
class RightParen(Token):
    text = ")"


@dataclass(frozen=True)
class NumberToken(Token):
    value: int

    @property
    def text(self):
        return str(self.value)


@dataclass(frozen=True)
class SymbolToken(Token):
    text: str


def separate(word, separators=SEPARATORS):
    """Splits word into runs of non-separator chars, with every separator char as a piece of its own.

    >>> separate("(+(apa")
    ['(', '+', '(', 'apa']
    """
    pieces = []
    start = 0
    for idx, char in enumerate(word):
        if char in separators:
            if idx > start:
                pieces.append(word[start:idx])
            pieces.append(char)
            start = idx + 1

    if start < len(word):
        pieces.append(word[start:])
    return pieces


def classify(piece):
    """Returns the Token that piece (a paren or a run from separate) represents."""
    if piece == LeftParen.text:
        return LeftParen()
    elif piece == RightParen.text:
        return RightParen()

    num = number(piece)
    if num is not None:
        return NumberToken(num)
    return SymbolToken(piece)


def tokenize(source):
    """Tokenizes source. Whitespace only separates tokens."""
    return [classify(piece) for word in WORDS.findall(source) for piece in separate(word)]


def untokenize(tokens):
    """Renders tokens back to source text, one space between tokens."""
    return " ".join(str(token) for token in tokens)
