from dataclasses import dataclass
from typing import Iterator, Mapping, Union

from .assignment import VariableSet
from .errors import MissingVariable
from .operators import OperatorKind


@dataclass(frozen=True)
class Var:
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class UnaryOp:
    kind: OperatorKind
    operand: "Expression"

    def __str__(self):
        return f"{self.kind.symbol}{self.operand}"


@dataclass(frozen=True)
class BinaryOp:
    kind: OperatorKind
    left: "Expression"
    right: "Expression"

    def __str__(self):
        return f"({self.left} {self.kind.symbol} {self.right})"


Expression = Union[Var, UnaryOp, BinaryOp]


def children(node: Expression):
    if isinstance(node, BinaryOp):
        return (node.left, node.right)
    if isinstance(node, UnaryOp):
        return (node.operand,)
    return ()


def walk(expression: Expression) -> Iterator[Expression]:
    """
    Pre-order, left to right
    """
    stack = [expression]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(children(node)))


def to_rpn(expression: Expression) -> list:
    """
    Post-order, left to right. Operands always precede their operator
    """
    output = []
    stack = [(expression, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            output.append(node)
            continue
        stack.append((node, True))
        for child in reversed(children(node)):
            stack.append((child, False))
    return output


def collect_variables(expression: Expression):
    variables = VariableSet()
    for node in walk(expression):
        if isinstance(node, Var):
            variables.add(node.name)
    return variables


def evaluate_rpn(rpn, assignment: Mapping[str, bool]) -> bool:
    """
    Evaluates nodes already in post-order, see to_rpn
    """
    # Explicit stack so nesting depth is not bounded by the recursion limit
    values = []
    for node in rpn:
        if isinstance(node, Var):
            try:
                values.append(bool(assignment[node.name]))
            except KeyError:
                raise MissingVariable(node.name) from None
        elif isinstance(node, UnaryOp):
            values.append(node.kind.apply(values.pop()))
        elif isinstance(node, BinaryOp):
            right = values.pop()
            left = values.pop()
            values.append(node.kind.apply(left, right))
        else:
            raise TypeError(f"{node!r} is not an expression node")
    return values.pop()


def evaluate(expression: Expression, assignment: Mapping[str, bool]) -> bool:
    return evaluate_rpn(to_rpn(expression), assignment)
