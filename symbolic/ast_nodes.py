# symbolic/ast_nodes.py
"""Immutable expression tree produced by the parser."""
from dataclasses import dataclass
from typing import Iterator, Tuple, Union


@dataclass(frozen=True)
class Num:
    value: float


@dataclass(frozen=True)
class Name:
    ident: str


@dataclass(frozen=True)
class Unary:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class Binary:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Logical:
    """Short-circuiting '&&' / '||'."""
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Conditional:
    test: "Node"
    then: "Node"
    orelse: "Node"


@dataclass(frozen=True)
class Call:
    func: "Node"
    args: Tuple["Node", ...]


Node = Union[Num, Name, Unary, Binary, Logical, Conditional, Call]


def iter_names(node: Node) -> Iterator[str]:
    """Yield every identifier referenced in the tree, in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Name):
            yield current.ident
        elif isinstance(current, Unary):
            stack.append(current.operand)
        elif isinstance(current, (Binary, Logical)):
            stack.extend((current.right, current.left))
        elif isinstance(current, Conditional):
            stack.extend((current.orelse, current.then, current.test))
        elif isinstance(current, Call):
            stack.extend(reversed(current.args))
            stack.append(current.func)
