from enum import Enum
import re

from .errors import LexError
from .operators import OperatorKind

# Tokens are matched by trying each token class in turn at the current
# position. The first class that matches wins, so identifiers are always
# tried last to let keyword operators (AND, OR, ...) claim their words.

# Utils


def str_match(string: str, m: str, pos=0):
    if pos >= len(string):
        return None
    if string.startswith(m, pos):
        return m, len(m)
    return None


def re_match(string, r, pos=0):
    m = re.compile(r).match(string, pos)
    if m:
        return m.group(0), m.end() - pos
    return None


def _immutable(self, *args, **kws):
    raise TypeError("cannot change object - object is immutable")


class IToken:
    m_re = None
    m_str = None

    __slots__ = ("value", "start", "end")

    def __init__(self, value, start, end):
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    __setattr__ = _immutable
    __delattr__ = _immutable

    @classmethod
    def match(cls, string, pos=0):
        """
        Returns (value, length) when this token starts at `pos` of `string`
        """
        if cls.m_re:
            return re_match(string, cls.m_re, pos)
        elif cls.m_str:
            return str_match(string, cls.m_str, pos)
        raise NotImplementedError()

    def __eq__(self, other):
        return (
            type(self) is type(other)
            and self.value == other.value
            and self.start == other.start
            and self.end == other.end
        )

    def __hash__(self):
        return hash((type(self), self.value, self.start, self.end))

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.value!r} @{self.start}>"


class WhitespaceToken(IToken):
    __slots__ = ()


class IdentifierToken(IToken):
    __slots__ = ()


class OperatorToken(IToken):
    """
    Must provide a kind and its spellings

    Word spellings only match as whole words, so `ANDY` stays a variable
    """

    kind: OperatorKind = None
    spellings = ()

    __slots__ = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.spellings:
            alternatives = []
            # Longest first so "||" wins over "|"
            for spelling in sorted(cls.spellings, key=len, reverse=True):
                pattern = re.escape(spelling)
                if spelling.isalnum():
                    pattern += r"(?![A-Za-z0-9])"
                alternatives.append(pattern)
            cls.m_re = "|".join(alternatives)

    @property
    def precedence(self):
        return self.kind.precedence

    @property
    def associativity(self):
        return self.kind.associativity

    @property
    def arity(self):
        return self.kind.arity


class OpenParenthesisToken(IToken):
    __slots__ = ()


class CloseParenthesisToken(IToken):
    __slots__ = ()


class EndOfInputToken(IToken):
    __slots__ = ()

    def __repr__(self):
        return f"<{self.__class__.__name__} @{self.start}>"


# Built in tokens


class Whitespace(WhitespaceToken):
    __slots__ = ()
    m_re = r"\s+"


class Variable(IdentifierToken):
    __slots__ = ()
    m_re = r"[A-Za-z][A-Za-z0-9]*"


class OpenParenthesis(OpenParenthesisToken):
    __slots__ = ()
    m_str = "("


class CloseParenthesis(CloseParenthesisToken):
    __slots__ = ()
    m_str = ")"


class EndOfInput(EndOfInputToken):
    __slots__ = ()


class Negation(OperatorToken):
    __slots__ = ()
    kind = OperatorKind.NOT
    spellings = ("!", "~", "¬", "NOT")


class And(OperatorToken):
    __slots__ = ()
    kind = OperatorKind.AND
    spellings = ("&&", "&", "∧", "AND")


class Or(OperatorToken):
    __slots__ = ()
    kind = OperatorKind.OR
    spellings = ("||", "|", "∨", "OR")


class Xor(OperatorToken):
    __slots__ = ()
    kind = OperatorKind.XOR
    spellings = ("^", "⊕", "XOR")


class Implies(OperatorToken):
    __slots__ = ()
    kind = OperatorKind.IMPLIES
    spellings = ("=>", "->", "→", "IMPLIES")


class Iff(OperatorToken):
    __slots__ = ()
    kind = OperatorKind.IFF
    spellings = ("<=>", "<->", "↔", "IFF")


class ITokenCollection(Enum):
    @classmethod
    def list(cls):
        return list(map(lambda c: c.value, cls))


class BaseTokens(ITokenCollection):
    WHITESPACE = Whitespace
    OPEN_PARENTHESIS = OpenParenthesis
    CLOSE_PARENTHESIS = CloseParenthesis
    VARIABLE = Variable


class CoreLogicalTokens(ITokenCollection):
    NEGATION = Negation
    AND = And
    OR = Or


class ExtendedLogicalTokens(ITokenCollection):
    XOR = Xor
    IMPLIES = Implies
    IFF = Iff


class Tokenlib:
    base = BaseTokens
    core = CoreLogicalTokens
    extended = ExtendedLogicalTokens

    @staticmethod
    def load(*args):
        # dict keeps the first-seen order, a set would not
        return list(dict.fromkeys(t for arg in args for t in arg.list()))


DEFAULT_TOKENS = Tokenlib.load(Tokenlib.base, Tokenlib.core, Tokenlib.extended)


class Lexer:
    def __init__(self, tokens=None):
        tokens = DEFAULT_TOKENS if tokens is None else tokens
        for token in tokens:
            if not issubclass(token, IToken):
                raise TypeError(f"{token!r} is not a token")
            if issubclass(token, OperatorToken) and token.kind is None:
                raise TypeError(
                    f"class '{token.__name__}' has no kind. OperatorToken must have a kind"
                )
        # Stable sort, identifiers go last
        self.tokens = sorted(tokens, key=lambda t: issubclass(t, IdentifierToken))

    @property
    def operators(self):
        return [t for t in self.tokens if issubclass(t, OperatorToken)]

    def tokenize(self, string):
        """
        Lazily yields tokens, always finishing with a single EndOfInput
        """
        pointer = 0
        length = len(string)
        while pointer < length:
            for token in self.tokens:
                if m := token.match(string, pointer):
                    v, l = m
                    if not issubclass(token, WhitespaceToken):
                        yield token(v, pointer, pointer + l)
                    pointer += l
                    break
            else:
                raise LexError(string[pointer], pointer)
        yield EndOfInput("", length, length)


default_lexer = Lexer()


def tokenize(text):
    return default_lexer.tokenize(text)
