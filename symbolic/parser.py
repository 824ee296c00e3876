# symbolic/parser.py
"""
Tokenizer and recursive-descent parser for formula strings.

Grammar (lowest to highest binding)::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/' | '%') unary | <implicit> power)*
    unary   := ('-' | '+') unary | power
    power   := primary ('^' unary)?
    primary := NUMBER | CONSTANT | VARIABLE | FUNC '(' expr ')' | '(' expr ')'

Implicit multiplication applies when an identifier or '(' directly follows an
operand, so ``2x``, ``2(x+1)`` and ``(x+1)(x-1)`` are accepted. Only the
function names listed in ``symbolic.constants.FUNCTIONS`` may be called.
Trees deeper than ``MAX_EXPRESSION_DEPTH`` are rejected, so every tree the
parser returns can be walked recursively.
"""
import math
import re
from typing import Callable, List, NamedTuple

from core.exceptions import ParseError
from symbolic.ast_nodes import NEGATE, BinaryOp, Node, Number, UnaryCall, Variable, tree_depth
from symbolic.constants import CONSTANTS, FUNCTIONS, MAX_EXPRESSION_DEPTH
from utils.logging_config import get_logger

logger = get_logger(__name__)

_TOKEN_RE = re.compile(r"""
    (?P<ws>\s+)
  | (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
  | (?P<ident>[A-Za-z_][A-Za-z0-9_]*|π)
  | (?P<op>[-+*/%^()])
""", re.VERBOSE)


class Token(NamedTuple):
    kind: str  # 'number', 'ident', 'op' or 'eof'
    text: str
    pos: int


def tokenize(source: str) -> List[Token]:
    tokens: List[Token] = []
    pos = 0
    while pos < len(source):
        match = _TOKEN_RE.match(source, pos)
        if match is None:
            raise ParseError(f"Unknown token '{source[pos]}' at position {pos}", source, pos)
        kind = match.lastgroup
        if kind != "ws":
            tokens.append(Token(kind, match.group(), pos))
        pos = match.end()
    tokens.append(Token("eof", "", len(source)))
    return tokens


class Parser:
    """Builds an expression tree from a token list. One instance per source string."""

    def __init__(self, source: str):
        self.source = source
        self.tokens = tokenize(source)
        self.index = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _at_op(self, *ops: str) -> bool:
        return self.current.kind == "op" and self.current.text in ops

    def _error(self, message: str) -> ParseError:
        return ParseError(f"{message} at position {self.current.pos}", self.source, self.current.pos)

    def _expect(self, op: str) -> None:
        if not self._at_op(op):
            found = self.current.text or "end of expression"
            raise self._error(f"Expected '{op}' but found '{found}'")
        self._advance()

    def _nested(self, rule: Callable[[], Node]) -> Node:
        self.depth += 1
        if self.depth > MAX_EXPRESSION_DEPTH:
            raise self._error("Expression nested too deeply")
        node = rule()
        self.depth -= 1
        return node

    def parse(self) -> Node:
        if self.current.kind == "eof":
            raise self._error("Empty expression")
        node = self._expr()
        if self.current.kind != "eof":
            raise self._error(f"Unexpected '{self.current.text}'")
        # long operator chains build deep trees without nesting
        if tree_depth(node) > MAX_EXPRESSION_DEPTH:
            raise ParseError("Expression nested too deeply", self.source, 0)
        return node

    def _expr(self) -> Node:
        node = self._term()
        while self._at_op("+", "-"):
            op = self._advance().text
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while True:
            if self._at_op("*", "/", "%"):
                op = self._advance().text
                node = BinaryOp(op, node, self._unary())
            elif self.current.kind == "ident" or self._at_op("("):
                node = BinaryOp("*", node, self._power())
            else:
                return node

    def _unary(self) -> Node:
        if self._at_op("-"):
            self._advance()
            operand = self._nested(self._unary)
            if isinstance(operand, Number) and operand.label is None:
                return Number(-operand.value)
            return UnaryCall(NEGATE, operand)
        if self._at_op("+"):
            self._advance()
            return self._nested(self._unary)
        return self._power()

    def _power(self) -> Node:
        base = self._primary()
        if self._at_op("^"):
            self._advance()
            return BinaryOp("^", base, self._nested(self._unary))
        return base

    def _primary(self) -> Node:
        token = self.current
        if token.kind == "number":
            value = float(token.text)
            if math.isinf(value):
                raise self._error(f"Number '{token.text}' is out of range")
            self._advance()
            return Number(value)
        if token.kind == "ident":
            self._advance()
            name = token.text
            if name in FUNCTIONS:
                self._expect("(")
                arg = self._nested(self._expr)
                self._expect(")")
                return UnaryCall(name, arg)
            if self._at_op("("):
                raise ParseError(f"Unknown function '{name}' at position {token.pos}", self.source, token.pos)
            if name in CONSTANTS:
                return Number(CONSTANTS[name], label=name)
            return Variable(name)
        if self._at_op("("):
            self._advance()
            node = self._nested(self._expr)
            self._expect(")")
            return node
        if token.kind == "eof":
            raise self._error("Unexpected end of expression")
        raise self._error(f"Unexpected '{token.text}'")


def parse(source: str) -> Node:
    """
    Parse a formula string into an expression tree.

    :raises ParseError: On unknown tokens, unbalanced parentheses or misplaced operators.
    """
    if not isinstance(source, str):
        raise ParseError(f"Expression must be a string, got {type(source).__name__}", str(source))
    try:
        return Parser(source).parse()
    except ParseError as e:
        logger.error("Could not parse expression '%s': %s", source, e)
        raise
