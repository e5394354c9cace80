from enum import Enum


class TruthTableError(Exception):
    pass


class SourceError(TruthTableError):
    """
    An error tied to a span of the expression text
    """

    def __init__(self, err, start, end):
        super().__init__(err, start, end)
        self.err = err
        self.start = start
        self.end = end

    @property
    def position(self):
        return self.start

    def __str__(self):
        return f"@[{self.start}, {self.end}]: {self.err}"


class LexError(SourceError):
    def __init__(self, char, position):
        super().__init__(f"Unrecognized character {char!r}", position, position + 1)
        self.char = char


class ParseErrorKind(Enum):
    UNEXPECTED_TOKEN = "UnexpectedToken"
    UNMATCHED_PAREN = "UnmatchedParen"
    EMPTY_EXPRESSION = "EmptyExpression"
    MISSING_OPERAND = "MissingOperand"


class ParseError(SourceError):
    def __init__(self, kind: ParseErrorKind, err, start, end):
        super().__init__(err, start, end)
        self.kind = kind

    def __str__(self):
        return f"@[{self.start}, {self.end}]: {self.kind.value}: {self.err}"


class EvalError(TruthTableError):
    pass


class MissingVariable(EvalError, KeyError):
    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"No value assigned to variable {self.name!r}"


class TableError(TruthTableError):
    pass


class TooManyVariables(TableError):
    def __init__(self, count, limit):
        super().__init__(count, limit)
        self.count = count
        self.limit = limit

    def __str__(self):
        return f"Expression has {self.count} variables, the limit is {self.limit}"
