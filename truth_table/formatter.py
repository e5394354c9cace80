def iter_table_lines(variable_names, expression_text, rows):
    """
    Yields the lines of a bordered table, one row at a time

        -------------
        |A|B|A && B|
        -------------
        |0|0|     0|
        -------------

    Variable values are right aligned under their names, the result under the
    expression text. A dash line goes before and after the header and after
    every row.
    """
    names = list(variable_names)
    widths = [len(name) for name in names]
    result_width = len(expression_text)

    header = "|" + "".join(f"{name}|" for name in names) + f"{expression_text}|"
    separator = "-" * len(header)

    yield separator
    yield header
    yield separator
    for row in rows:
        cells = "".join(f"{bit:>{width}}|" for bit, width in zip(row.values, widths))
        yield f"|{cells}{int(row.result):>{result_width}}|"
        yield separator


def format_table(variable_names, expression_text, rows):
    return "\n".join(iter_table_lines(variable_names, expression_text, rows))
