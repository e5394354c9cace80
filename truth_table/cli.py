import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .constants import app_configuration
from .errors import ParseError, SourceError, TruthTableError
from .logic import generate_truth_table
from .parser import Parser
from .tokens import Tokenlib

logger = logging.getLogger(__name__)

ERROR_TAG = "[ERROR]: "

OUTPUT_FORMATS = ["table", "frame", "csv", "json"]


def make_parser(core_only=False):
    if core_only:
        return Parser(Tokenlib.load(Tokenlib.base, Tokenlib.core))
    return Parser()


def grammar_table(parser):
    table = Table(title="Operators, tightest binding first")
    table.add_column("Operator")
    table.add_column("Precedence", justify="right")
    table.add_column("Associativity")
    table.add_column("Spellings")
    for op in sorted(parser.lexer.operators, key=lambda t: -t.kind.precedence):
        table.add_row(
            op.kind.name,
            str(op.kind.precedence),
            "prefix" if op.kind.arity == 1 else op.kind.associativity.value.lower(),
            "  ".join(op.spellings),
        )
    table.caption = (
        "Variables are letters followed by letters or digits, case-sensitive. "
        "Word operators are reserved upper-case words."
    )
    return table


def report_source_error(console, source, error: SourceError):
    """
    Echoes the source with the offending span highlighted and a caret under it
    """
    start = min(error.start, len(source))
    end = min(max(error.end, start), len(source))
    line = Text(ERROR_TAG, style="bold red")
    line.append(source[:start])
    line.append(source[start:end], style="bold red underline")
    line.append(source[end:])
    console.print(line, soft_wrap=True)

    pad = len(ERROR_TAG) + start
    console.print(Text(" " * pad + "^", style="yellow"), soft_wrap=True)

    message = f"{error.kind.value}: {error.err}" if isinstance(error, ParseError) else error.err
    marker = Text("-" * pad + "┆ ", style="yellow")
    marker.append(message, style="red")
    console.print(marker, soft_wrap=True)


def read_expression(args):
    if args.expression is not None and args.file is not None:
        raise ValueError("Give the expression either as an argument or with --file, not both")
    if args.expression is not None:
        text = args.expression.strip()
        if "\n" in text or "\r" in text:
            raise ValueError("The expression must fit on a single line")
        return text
    # Only the first line, the rest of a file is ignored
    if args.file is not None:
        with Path(args.file).open(encoding="utf-8") as f:
            text = f.readline()
    else:
        text = sys.stdin.readline()
    return text.strip()


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def render(table, output_format, out):
    if output_format == "table":
        for line in table.iter_lines():
            out.write(line + "\n")
        return
    df = table.to_dataframe()
    if output_format == "frame":
        out.write(df.to_string(index=False) + "\n")
    elif output_format == "csv":
        df.to_csv(out, index=False)
    elif output_format == "json":
        # "split" tolerates a variable named like the whole expression
        out.write(df.to_json(orient="split", index=False) + "\n")
    else:
        raise ValueError(f"Unknown output format {output_format!r}")


def main(argv=None):
    #
    # Configure command line parsing.
    #
    arg_parser = argparse.ArgumentParser(
        prog=app_configuration["program_name"],
        description="Print the truth table of a boolean expression.",
    )
    arg_parser.add_argument(
        "expression",
        nargs="?",
        help="The expression, e.g. 'A && (B || !C)'. Read from stdin when omitted",
    )
    arg_parser.add_argument(
        "-f", "--file", type=str, help="Read the expression from a UTF-8 text file"
    )
    arg_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="table",
        help="Output format (default: table)",
    )
    arg_parser.add_argument(
        "--max-variables",
        type=positive_int,
        default=None,
        help=f"Refuse expressions with more variables (default: {app_configuration['max_variables']})",
    )
    arg_parser.add_argument(
        "--core-only",
        action="store_true",
        help="Only recognize NOT, AND and OR",
    )
    arg_parser.add_argument(
        "--grammar",
        action="store_true",
        help="Show the recognized operator spellings and exit",
    )
    arg_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    parser = make_parser(args.core_only)
    console = Console()
    error_console = Console(stderr=True, highlight=False)

    if args.grammar:
        console.print(grammar_table(parser))
        return 0

    try:
        text = read_expression(args)
    except (OSError, ValueError) as e:
        error_console.print(Text(ERROR_TAG + str(e), style="red"), soft_wrap=True)
        return 1

    try:
        table = generate_truth_table(text, args.max_variables, parser=parser)
    except SourceError as e:
        logger.debug("Rejected %r: %s", text, e)
        report_source_error(error_console, text, e)
        return 1
    except TruthTableError as e:
        error_console.print(Text(ERROR_TAG + str(e), style="red"), soft_wrap=True)
        return 1

    render(table, args.format, sys.stdout)
    return 0


def run():
    sys.exit(main())
