from .assignment import Assignment, VariableSet
from .errors import (
    EvalError,
    LexError,
    MissingVariable,
    ParseError,
    ParseErrorKind,
    TableError,
    TooManyVariables,
    TruthTableError,
)
from .expression import BinaryOp, UnaryOp, Var, collect_variables, evaluate
from .formatter import format_table
from .logic import generate_truth_table, print_truth_table
from .operators import Associativity, OperatorKind
from .parser import ParseResult, Parser, parse, parse_expression
from .table import TableRow, TruthTable, build_table, iter_rows
from .tokens import Lexer, Tokenlib, tokenize

__all__ = [
    "Assignment",
    "Associativity",
    "BinaryOp",
    "EvalError",
    "LexError",
    "Lexer",
    "MissingVariable",
    "OperatorKind",
    "ParseError",
    "ParseErrorKind",
    "ParseResult",
    "Parser",
    "TableError",
    "TableRow",
    "Tokenlib",
    "TooManyVariables",
    "TruthTable",
    "TruthTableError",
    "UnaryOp",
    "Var",
    "VariableSet",
    "build_table",
    "collect_variables",
    "evaluate",
    "format_table",
    "generate_truth_table",
    "iter_rows",
    "parse",
    "parse_expression",
    "print_truth_table",
    "tokenize",
]
