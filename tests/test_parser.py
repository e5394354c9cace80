import pytest

from truth_table.errors import LexError, ParseError, ParseErrorKind
from truth_table.expression import BinaryOp, UnaryOp, Var
from truth_table.operators import OperatorKind
from truth_table.parser import Parser, parse, parse_expression
from truth_table.tokens import (
    And,
    EndOfInput,
    Negation,
    Tokenlib,
    Variable,
    tokenize,
)

AND = OperatorKind.AND
OR = OperatorKind.OR
NOT = OperatorKind.NOT
XOR = OperatorKind.XOR
IMPLIES = OperatorKind.IMPLIES
IFF = OperatorKind.IFF


class TestParse:
    """Test cases for building expression trees."""

    def test_and(self):
        expression, variables = parse_expression("A && B")
        assert expression == BinaryOp(AND, Var("A"), Var("B"))
        assert variables == ["A", "B"]

    def test_parse_takes_tokens(self):
        result = parse(tokenize("A && B"))
        assert result.expression == BinaryOp(AND, Var("A"), Var("B"))
        assert result.variables == ["A", "B"]

    def test_parse_hand_built_tokens(self):
        tokens = [
            Negation("!", 0, 1),
            Variable("X", 1, 2),
            And("&&", 3, 5),
            Variable("Y", 6, 7),
            EndOfInput("", 7, 7),
        ]
        expression, variables = parse(tokens)
        assert expression == BinaryOp(AND, UnaryOp(NOT, Var("X")), Var("Y"))
        assert variables == ["X", "Y"]

    def test_stream_without_sentinel(self):
        expression, _ = parse([Variable("A", 0, 1)])
        assert expression == Var("A")

    def test_single_variable(self):
        expression, variables = parse_expression("A")
        assert expression == Var("A")
        assert variables == ["A"]

    def test_not_binds_tighter_than_or(self):
        expression, _ = parse_expression("!A || B")
        assert expression == BinaryOp(OR, UnaryOp(NOT, Var("A")), Var("B"))

    def test_and_binds_tighter_than_or(self):
        expression, _ = parse_expression("A || B && C")
        assert expression == BinaryOp(OR, Var("A"), BinaryOp(AND, Var("B"), Var("C")))

        expression, _ = parse_expression("A && B || C")
        assert expression == BinaryOp(OR, BinaryOp(AND, Var("A"), Var("B")), Var("C"))

    def test_full_precedence_ladder(self):
        """NOT > AND > OR > XOR > IMPLIES > IFF"""
        expression, _ = parse_expression("A <=> B => C ^ D || E && !F")
        assert expression == BinaryOp(
            IFF,
            Var("A"),
            BinaryOp(
                IMPLIES,
                Var("B"),
                BinaryOp(
                    XOR,
                    Var("C"),
                    BinaryOp(OR, Var("D"), BinaryOp(AND, Var("E"), UnaryOp(NOT, Var("F")))),
                ),
            ),
        )

    def test_binary_operators_are_left_associative(self):
        expression, _ = parse_expression("A && B && C")
        assert expression == BinaryOp(AND, BinaryOp(AND, Var("A"), Var("B")), Var("C"))

        expression, _ = parse_expression("A -> B -> C")
        assert expression == BinaryOp(
            IMPLIES, BinaryOp(IMPLIES, Var("A"), Var("B")), Var("C")
        )

    def test_not_is_right_associative_prefix(self):
        expression, _ = parse_expression("!!A")
        assert expression == UnaryOp(NOT, UnaryOp(NOT, Var("A")))

    def test_not_applies_to_parenthesized_group(self):
        expression, _ = parse_expression("!(A && B)")
        assert expression == UnaryOp(NOT, BinaryOp(AND, Var("A"), Var("B")))

    def test_parentheses_override_precedence(self):
        expression, _ = parse_expression("A && (B || C)")
        assert expression == BinaryOp(AND, Var("A"), BinaryOp(OR, Var("B"), Var("C")))

    def test_redundant_parentheses_are_erased(self):
        expression, _ = parse_expression("((A)) && (B)")
        assert expression == BinaryOp(AND, Var("A"), Var("B"))

    def test_word_operators(self):
        expression, _ = parse_expression("NOT A OR B")
        assert expression == BinaryOp(OR, UnaryOp(NOT, Var("A")), Var("B"))

    def test_deep_nesting(self):
        """No recursion limit in the way."""
        depth = 5000
        expression, variables = parse_expression("(" * depth + "A" + ")" * depth)
        assert expression == Var("A")
        assert variables == ["A"]


class TestVariableSet:
    """Test cases for variable collection."""

    def test_first_occurrence_order(self):
        _, variables = parse_expression("C && (A || C) && B && A")
        assert variables == ["C", "A", "B"]

    def test_case_sensitive(self):
        _, variables = parse_expression("a && A")
        assert variables == ["a", "A"]

    def test_multi_character_names(self):
        _, variables = parse_expression("foo || bar && foo")
        assert list(variables) == ["foo", "bar"]


def parse_error(text):
    with pytest.raises(ParseError) as exc_info:
        parse_expression(text)
    return exc_info.value


class TestParseErrors:
    """Test cases for malformed input."""

    @pytest.mark.parametrize("text", ["", "   ", "()", "(", "(("])
    def test_empty_expression(self, text):
        assert parse_error(text).kind == ParseErrorKind.EMPTY_EXPRESSION

    def test_empty_parentheses_inside(self):
        error = parse_error("A && ()")
        assert error.kind == ParseErrorKind.EMPTY_EXPRESSION
        assert (error.start, error.end) == (5, 7)

    def test_missing_right_operand(self):
        error = parse_error("A &&")
        assert error.kind == ParseErrorKind.MISSING_OPERAND
        assert error.position == 2

    def test_missing_left_operand(self):
        error = parse_error("&& A")
        assert error.kind == ParseErrorKind.MISSING_OPERAND
        assert error.position == 0

    def test_missing_operand_before_close(self):
        error = parse_error("(A || )")
        assert error.kind == ParseErrorKind.MISSING_OPERAND
        assert error.position == 3

    def test_two_binary_operators(self):
        error = parse_error("A && || B")
        assert error.kind == ParseErrorKind.MISSING_OPERAND
        assert error.position == 5

    def test_dangling_not(self):
        error = parse_error("A && !")
        assert error.kind == ParseErrorKind.MISSING_OPERAND
        assert error.position == 5

    def test_unclosed_parenthesis(self):
        error = parse_error("((A)")
        assert error.kind == ParseErrorKind.UNMATCHED_PAREN
        assert error.position == 0

    def test_unclosed_parenthesis_at_end(self):
        error = parse_error("A && (")
        assert error.kind == ParseErrorKind.UNMATCHED_PAREN
        assert error.position == 5

    def test_unmatched_close(self):
        error = parse_error("(A))")
        assert error.kind == ParseErrorKind.UNMATCHED_PAREN
        assert error.position == 3

    def test_close_first(self):
        error = parse_error(") A")
        assert error.kind == ParseErrorKind.UNMATCHED_PAREN
        assert error.position == 0

    @pytest.mark.parametrize(
        "text, position",
        [("A B", 2), ("A (B)", 2), ("A !B", 2), ("(A) B", 4)],
    )
    def test_unexpected_token(self, text, position):
        error = parse_error(text)
        assert error.kind == ParseErrorKind.UNEXPECTED_TOKEN
        assert error.position == position

    def test_message_names_expected_and_found(self):
        error = parse_error("A B")
        assert "Expected an operator or ')'" in error.err
        assert "variable 'B'" in error.err
        assert str(error) == f"@[2, 3]: UnexpectedToken: {error.err}"

    def test_lex_errors_propagate(self):
        with pytest.raises(LexError):
            parse_expression("A && #")


class TestParser:
    """Test cases for parsers over custom token collections."""

    def test_core_only(self):
        parser = Parser(Tokenlib.load(Tokenlib.base, Tokenlib.core))
        expression, variables = parser.parse("A && !B")
        assert expression == BinaryOp(AND, Var("A"), UnaryOp(NOT, Var("B")))
        assert variables == ["A", "B"]

    def test_parse_to_rpn(self):
        parser = Parser()
        rpn, variables = parser.parse_to_rpn(parser.tokenize("A && B || C"))
        assert [t.value for t in rpn] == ["A", "B", "&&", "C", "||"]
        assert variables == ["A", "B", "C"]
