import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

import pandas as pd

from .assignment import Assignment
from .constants import app_configuration
from .errors import TooManyVariables
from .expression import Expression, collect_variables, evaluate_rpn, to_rpn
from .formatter import iter_table_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableRow:
    index: int
    assignment: Assignment
    result: bool

    @property
    def values(self):
        return self.assignment.bits


def check_variable_count(variables, max_variables=None):
    limit = app_configuration["max_variables"] if max_variables is None else max_variables
    if len(variables) > limit:
        raise TooManyVariables(len(variables), limit)


def iter_rows(
    expression: Expression, variables=None, max_variables: Optional[int] = None
) -> Iterator[TableRow]:
    """
    Lazily yields one row per assignment, index 0 first. The variable count
    is checked before the first row is produced.
    """
    if variables is None:
        variables = collect_variables(expression)
    names = tuple(variables)
    check_variable_count(names, max_variables)
    return _rows(expression, names)


def _rows(expression, names):
    # Shared by every row, only the index differs
    rpn = to_rpn(expression)
    shifts = Assignment.shifts(names)
    for index in range(2 ** len(names)):
        assignment = Assignment(names, index, shifts)
        yield TableRow(index, assignment, evaluate_rpn(rpn, assignment))


def build_table(
    expression: Expression, variables=None, max_variables: Optional[int] = None
) -> List[TableRow]:
    rows = list(iter_rows(expression, variables, max_variables))
    logger.debug("Built %d row(s)", len(rows))
    return rows


class TruthTable:
    """
    Rows are evaluated on demand, so formatting a table streams it
    """

    def __init__(self, text, expression, variables, max_variables=None):
        check_variable_count(variables, max_variables)
        self.text = text
        self.expression = expression
        self.variables = variables

    @property
    def headers(self):
        return [*self.variables, self.text]

    def iter_rows(self):
        # The variable count was checked in __init__
        return _rows(self.expression, tuple(self.variables))

    def iter_lines(self):
        return iter_table_lines(self.variables, self.text, self.iter_rows())

    def format(self):
        return "\n".join(self.iter_lines())

    def to_dataframe(self):
        """
        Returns pandas dataframe
        """
        columns = [[] for _ in self.headers]
        for row in self.iter_rows():
            for column, bit in zip(columns, (*row.values, int(row.result))):
                column.append(bit)
        df = pd.DataFrame(
            {i: pd.Series(column, dtype="int8") for i, column in enumerate(columns)}
        )
        # Positional keys first, a variable may be named like the whole expression
        df.columns = self.headers
        return df

    def __len__(self):
        return 2 ** len(self.variables)

    def __str__(self):
        return self.format()

    def __repr__(self):
        return f"TruthTable({self.text!r}, {len(self.variables)} variables, {len(self)} rows)"
