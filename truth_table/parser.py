import logging
from typing import NamedTuple

from .assignment import VariableSet
from .errors import ParseError, ParseErrorKind
from .expression import BinaryOp, Expression, UnaryOp, Var
from .operators import Associativity
from .tokens import (
    CloseParenthesisToken,
    EndOfInputToken,
    IdentifierToken,
    Lexer,
    OpenParenthesisToken,
    OperatorToken,
)

logger = logging.getLogger(__name__)

# A shunting yard parser. On top of the classic algorithm it tracks whether
# the next token has to start an operand or has to follow one. Any token that
# breaks that rule is reported at its own position, so the RPN handed to
# rpn_to_ast is always well formed.


class ParseResult(NamedTuple):
    expression: Expression
    variables: VariableSet


def describe(token):
    if isinstance(token, IdentifierToken):
        return f"variable {token.value!r}"
    if isinstance(token, OperatorToken):
        return f"operator {token.value!r}"
    if isinstance(token, OpenParenthesisToken):
        return "'('"
    if isinstance(token, CloseParenthesisToken):
        return "')'"
    if isinstance(token, EndOfInputToken):
        return "end of input"
    return repr(token)


class Parser:
    def __init__(self, tokens=None):
        self.lexer = Lexer(tokens)

    @staticmethod
    def should_pop_op(stack, op):
        if not stack:
            return False

        top_op = stack[-1]

        if isinstance(top_op, OpenParenthesisToken):
            return False

        if op.associativity == Associativity.LEFT:
            return op.precedence <= top_op.precedence
        elif op.associativity == Associativity.RIGHT:
            return op.precedence < top_op.precedence
        raise ValueError(
            f"{op!r} has invalid associativity value {op.associativity!r}"
        )

    @staticmethod
    def unexpected(token, expected):
        return ParseError(
            ParseErrorKind.UNEXPECTED_TOKEN,
            f"Expected {expected} but found {describe(token)}",
            token.start,
            token.end,
        )

    @staticmethod
    def missing_operand(op, side):
        return ParseError(
            ParseErrorKind.MISSING_OPERAND,
            f"Missing {side} operand of {describe(op)}",
            op.start,
            op.end,
        )

    def tokenize(self, string):
        return self.lexer.tokenize(string)

    def parse_to_rpn(self, tokens):
        """
        Returns the tokens in reverse polish notation and the variables in
        order of first occurrence
        """
        output = []
        operator_stack = []
        variables = VariableSet()

        last_token = None
        expect_operand = True
        seen_operator = False
        open_parens = 0

        for token in tokens:
            if isinstance(token, IdentifierToken):
                if not expect_operand:
                    raise self.unexpected(token, "an operator or ')'")
                output.append(token)
                variables.add(token.value)
                expect_operand = False

            elif isinstance(token, OpenParenthesisToken):
                if not expect_operand:
                    raise self.unexpected(token, "an operator or ')'")
                operator_stack.append(token)
                open_parens += 1

            elif isinstance(token, CloseParenthesisToken):
                if not open_parens:
                    raise ParseError(
                        ParseErrorKind.UNMATCHED_PAREN,
                        "Closing parenthesis has no matching '('",
                        token.start,
                        token.end,
                    )
                if expect_operand:
                    if isinstance(last_token, OpenParenthesisToken):
                        raise ParseError(
                            ParseErrorKind.EMPTY_EXPRESSION,
                            "Empty parentheses",
                            last_token.start,
                            token.end,
                        )
                    raise self.missing_operand(last_token, "right")

                while not isinstance(operator_stack[-1], OpenParenthesisToken):
                    output.append(operator_stack.pop())

                # Pop the open parenthesis
                operator_stack.pop()
                open_parens -= 1

            elif isinstance(token, OperatorToken):
                seen_operator = True
                if token.arity == 1:
                    # Prefix, nothing on its left to bind
                    if not expect_operand:
                        raise self.unexpected(token, "a binary operator or ')'")
                    operator_stack.append(token)
                else:
                    if expect_operand:
                        raise self.missing_operand(token, "left")
                    while self.should_pop_op(operator_stack, token):
                        output.append(operator_stack.pop())
                    operator_stack.append(token)
                    expect_operand = True

            elif isinstance(token, EndOfInputToken):
                break

            else:
                raise self.unexpected(token, "an operand or an operator")

            last_token = token
        else:
            # Token stream without a sentinel
            end = last_token.end if last_token is not None else 0
            token = EndOfInputToken("", end, end)

        if expect_operand:
            if not variables and not seen_operator:
                raise ParseError(
                    ParseErrorKind.EMPTY_EXPRESSION,
                    "Expression is empty",
                    0,
                    token.end,
                )
            if isinstance(last_token, OperatorToken):
                raise self.missing_operand(last_token, "right")
            # Only an unclosed "(" is left
            raise ParseError(
                ParseErrorKind.UNMATCHED_PAREN,
                "Opening parenthesis is never closed",
                last_token.start,
                last_token.end,
            )

        while operator_stack:
            op = operator_stack.pop()
            if isinstance(op, OpenParenthesisToken):
                raise ParseError(
                    ParseErrorKind.UNMATCHED_PAREN,
                    "Opening parenthesis is never closed",
                    op.start,
                    op.end,
                )
            output.append(op)

        return output, variables

    @staticmethod
    def rpn_to_ast(rpn) -> Expression:
        stack = []
        for token in rpn:
            if isinstance(token, IdentifierToken):
                stack.append(Var(token.value))
            elif isinstance(token, OperatorToken):
                if token.arity == 1:
                    stack.append(UnaryOp(token.kind, stack.pop()))
                else:
                    right = stack.pop()
                    left = stack.pop()
                    stack.append(BinaryOp(token.kind, left, right))

        if len(stack) != 1:
            raise ValueError(f"Invalid RPN, {len(stack)} operands left")

        return stack[0]

    def parse_tokens(self, tokens) -> ParseResult:
        rpn, variables = self.parse_to_rpn(tokens)
        expression = self.rpn_to_ast(rpn)
        logger.debug(
            "Parsed %d tokens into a tree over %d variable(s)", len(rpn), len(variables)
        )
        return ParseResult(expression, variables)

    def parse(self, string) -> ParseResult:
        return self.parse_tokens(self.tokenize(string))


default_parser = Parser()


def parse(tokens) -> ParseResult:
    return default_parser.parse_tokens(tokens)


def parse_expression(text) -> ParseResult:
    return default_parser.parse(text)
