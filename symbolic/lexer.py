# symbolic/lexer.py
import math
import re
from dataclasses import dataclass
from typing import List, Union

from core.exceptions import ExpressionSyntaxError

NUMBER = "NUMBER"
NAME = "NAME"
OP = "OP"
EOF = "EOF"

# Longest operators first so that e.g. '>>>' is not read as '>>' '>'.
OPERATORS = (
    ">>>", "===", "!==",
    "**", "<<", ">>", "<=", ">=", "==", "!=", "&&", "||",
    "+", "-", "*", "/", "%", "<", ">", "!", "~", "&", "|", "^",
    "?", ":", "(", ")", ",",
)

TOKEN_RE = re.compile(
    r"(?P<ws>\s+)"
    r"|(?P<hex>0[xX][0-9a-fA-F]+)"
    r"|(?P<number>(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
    r"|(?P<name>[A-Za-z_$][A-Za-z_$0-9]*)"
    r"|(?P<op>" + "|".join(re.escape(op) for op in OPERATORS) + r")"
)


@dataclass(frozen=True)
class Token:
    kind: str
    value: Union[str, float]
    position: int


def tokenize(source: str) -> List[Token]:
    """
    Split source text into tokens, ending with a single EOF token.

    :raises ExpressionSyntaxError: On a character that starts no token.
    """
    tokens: List[Token] = []
    pos = 0
    while pos < len(source):
        match = TOKEN_RE.match(source, pos)
        if match is None:
            raise ExpressionSyntaxError(f"Unexpected character {source[pos]!r}", pos)
        kind = match.lastgroup
        text = match.group()
        if kind == "hex":
            try:
                value = float(int(text, 16))
            except OverflowError:
                value = math.inf
            tokens.append(Token(NUMBER, value, pos))
        elif kind == "number":
            tokens.append(Token(NUMBER, float(text), pos))
        elif kind == "name":
            tokens.append(Token(NAME, text, pos))
        elif kind == "op":
            tokens.append(Token(OP, text, pos))
        pos = match.end()
    tokens.append(Token(EOF, "", len(source)))
    return tokens
