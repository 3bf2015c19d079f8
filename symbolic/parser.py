# symbolic/parser.py
from typing import List, Tuple

from core.exceptions import ExpressionSyntaxError
from symbolic.ast_nodes import Binary, Call, Conditional, Logical, Name, Node, Num, Unary
from symbolic.lexer import EOF, NAME, NUMBER, OP, Token, tokenize

# Binary operator levels, loosest first. Strict equality is plain equality
# for numbers, so '===' and '!==' are folded into '==' and '!='.
BINARY_LEVELS: Tuple[Tuple[str, ...], ...] = (
    ("||",),
    ("&&",),
    ("|",),
    ("^",),
    ("&",),
    ("==", "!=", "===", "!=="),
    ("<", "<=", ">", ">="),
    ("<<", ">>", ">>>"),
    ("+", "-"),
    ("*", "/", "%"),
)
_ALIASES = {"===": "==", "!==": "!="}
UNARY_OPS = ("-", "+", "!", "~")


class Parser:
    """
    Recursive descent parser for a single numeric expression.

    One instance parses one token list; create a new parser per source.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def consume(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.kind != EOF:
            self.pos += 1
        return tok

    def at_op(self, *ops: str) -> bool:
        tok = self.peek()
        return tok.kind == OP and tok.value in ops

    def expect(self, op: str) -> Token:
        if not self.at_op(op):
            raise self.error(f"Expected '{op}'")
        return self.consume()

    def error(self, message: str) -> ExpressionSyntaxError:
        tok = self.peek()
        if tok.kind == EOF:
            return ExpressionSyntaxError(f"{message}, got end of expression", tok.position)
        return ExpressionSyntaxError(f"{message}, got {tok.value!r}", tok.position)

    def parse(self) -> Node:
        node = self.conditional()
        if self.peek().kind != EOF:
            raise self.error("Unexpected token")
        return node

    def conditional(self) -> Node:
        test = self.binary(0)
        if not self.at_op("?"):
            return test
        self.consume()
        then = self.conditional()
        self.expect(":")
        return Conditional(test, then, self.conditional())

    def binary(self, level: int) -> Node:
        if level == len(BINARY_LEVELS):
            return self.unary()
        ops = BINARY_LEVELS[level]
        node = self.binary(level + 1)
        while self.at_op(*ops):
            op = self.consume().value
            op = _ALIASES.get(op, op)
            right = self.binary(level + 1)
            if op in ("&&", "||"):
                node = Logical(op, node, right)
            else:
                node = Binary(op, node, right)
        return node

    def unary(self) -> Node:
        if self.at_op(*UNARY_OPS):
            op = self.consume().value
            return Unary(op, self.unary())
        return self.power()

    def power(self) -> Node:
        base = self.postfix()
        if self.at_op("**"):
            self.consume()
            # the exponent may itself carry a sign: 2 ** -1
            return Binary("**", base, self.unary())
        return base

    def postfix(self) -> Node:
        node = self.primary()
        while self.at_op("("):
            self.consume()
            args = []
            if not self.at_op(")"):
                args.append(self.conditional())
                while self.at_op(","):
                    self.consume()
                    args.append(self.conditional())
            self.expect(")")
            node = Call(node, tuple(args))
        return node

    def primary(self) -> Node:
        tok = self.peek()
        if tok.kind == NUMBER:
            self.consume()
            return Num(tok.value)
        if tok.kind == NAME:
            self.consume()
            return Name(tok.value)
        if self.at_op("("):
            self.consume()
            node = self.conditional()
            self.expect(")")
            return node
        raise self.error("Expected a number, name or '('")


def parse_expr(source: str) -> Node:
    """
    Parse source text into an expression tree.

    :param source: A single expression, e.g. "sin(t - x) * y".
    :return: The root node of the tree.
    :raises ExpressionSyntaxError: If the text is not a valid expression.
    """
    if not isinstance(source, str):
        raise ExpressionSyntaxError(f"Expression must be a string, not {type(source).__name__}")
    return Parser(tokenize(source)).parse()
