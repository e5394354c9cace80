from enum import Enum


class Associativity(Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class OperatorKind(Enum):
    """
    Boolean connectives.

    Higher precedence binds tighter: NOT > AND > OR > XOR > IMPLIES > IFF
    """

    NOT = "NOT"
    AND = "AND"
    OR = "OR"
    XOR = "XOR"
    IMPLIES = "IMPLIES"
    IFF = "IFF"

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    @property
    def arity(self) -> int:
        return 1 if self is OperatorKind.NOT else 2

    @property
    def associativity(self) -> Associativity:
        return Associativity.RIGHT if self is OperatorKind.NOT else Associativity.LEFT

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    def apply(self, *args: bool) -> bool:
        if len(args) != self.arity:
            raise ValueError(
                f"{self.name} takes {self.arity} operand(s), got {len(args)}"
            )
        return _SEMANTICS[self](*args)


_PRECEDENCE = {
    OperatorKind.NOT: 5,
    OperatorKind.AND: 4,
    OperatorKind.OR: 3,
    OperatorKind.XOR: 2,
    OperatorKind.IMPLIES: 1,
    OperatorKind.IFF: 0,
}

_SYMBOLS = {
    OperatorKind.NOT: "!",
    OperatorKind.AND: "&&",
    OperatorKind.OR: "||",
    OperatorKind.XOR: "^",
    OperatorKind.IMPLIES: "=>",
    OperatorKind.IFF: "<=>",
}

_SEMANTICS = {
    OperatorKind.NOT: lambda a: not a,
    OperatorKind.AND: lambda a, b: a and b,
    OperatorKind.OR: lambda a, b: a or b,
    OperatorKind.XOR: lambda a, b: a != b,
    OperatorKind.IMPLIES: lambda a, b: not a or b,
    OperatorKind.IFF: lambda a, b: a == b,
}
