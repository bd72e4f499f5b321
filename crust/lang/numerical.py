"""Natural numbers in crust. Every number is an unsigned 64-bit integer: literals outside that range are not numbers at
all (the tokenizer treats them as symbols), and arithmetic results that leave it wrap around modulo WORD.
"""

import re

WORD = 2 ** 64
MAX = WORD - 1

LITERAL = re.compile(r"\+?[0-9]+")  # optional leading '+', ASCII digits only


def number(text):
    """Returns int value of text if text is an unsigned 64-bit integer literal, else None."""
    if not LITERAL.fullmatch(text):
        return None

    digits = text.lstrip("+").lstrip("0")
    if len(digits) > len(str(MAX)):  # also keeps int() clear of its digit limit
        return None

    num = int(digits) if digits else 0
    return num if num <= MAX else None


def in_range(num):
    """Whether or not num fits in an unsigned 64-bit integer."""
    return 0 <= num <= MAX


def wrap(num):
    """Reduces num modulo WORD, the way unsigned 64-bit arithmetic does."""
    return num % WORD
