import sys

from .parser import Parser, default_parser
from .table import TruthTable


def generate_truth_table(inp, max_variables=None, parser: Parser = None):
    """
    Parses `inp` into a table over every assignment of its variables. Rows
    are evaluated when the table is read.
    """
    p = (parser or default_parser).parse(inp)

    return TruthTable(inp, p.expression, p.variables, max_variables)


def print_truth_table(inp, file=None, max_variables=None, parser: Parser = None):
    table = generate_truth_table(inp, max_variables, parser=parser)

    out = file or sys.stdout
    for line in table.iter_lines():
        out.write(line + "\n")
