"""
Custom logic evaluation over criterion outcomes.

Scheme authors may override the default "all criteria must pass" verdict
with a boolean expression over criterion keys, e.g. "C1 && (C2 || !C3)".
Expressions are parsed with a small recursive-descent parser and evaluated
against the per-criterion outcome map; nothing else is reachable from them.

Grammar:
    expr    := or
    or      := and ( "||" and )*
    and     := unary ( "&&" unary )*
    unary   := "!" unary | primary
    primary := IDENT | "(" expr ")"
    IDENT   := [A-Za-z0-9_$][A-Za-z0-9_$.-]*

Identifiers may start with a digit so numeric criterion ids ("1", "7")
can be referenced; the grammar has no numeric literals.
"""

import re
from dataclasses import dataclass
from typing import List, Mapping, Set, Tuple, Union

from eligibility.core.exceptions import ExpressionEvaluationError

# Bounds recursion on hostile input
MAX_DEPTH = 100

_TOKEN_RE = re.compile(
    r"\s*(?:(?P<op>&&|\|\||!|\(|\))|(?P<ident>[A-Za-z0-9_$][A-Za-z0-9_$.\-]*))"
)


@dataclass(frozen=True)
class Token:
    kind: str  # "op", "ident" or "end"
    value: str
    position: int


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class Not:
    operand: "Node"


@dataclass(frozen=True)
class And:
    operands: Tuple["Node", ...]


@dataclass(frozen=True)
class Or:
    operands: Tuple["Node", ...]


Node = Union[Identifier, Not, And, Or]


def tokenize(expression: str) -> List[Token]:
    """Split an expression into tokens, rejecting anything outside the grammar."""
    tokens: List[Token] = []
    position = 0
    length = len(expression)

    while position < length:
        if expression[position].isspace():
            position += 1
            continue
        match = _TOKEN_RE.match(expression, position)
        if match is None:
            raise ExpressionEvaluationError(
                f"Unexpected character {expression[position]!r} at position {position}",
                details={"expression": expression, "position": position},
            )
        kind = "op" if match.group("op") else "ident"
        tokens.append(Token(kind, match.group(kind), match.start(kind)))
        position = match.end()

    tokens.append(Token("end", "", length))
    return tokens


class _Parser:
    """Single-use parser over a token list."""

    def __init__(self, expression: str):
        self.expression = expression
        self.tokens = tokenize(expression)
        self.index = 0
        self.depth = 0

    def parse(self) -> Node:
        if self._peek().kind == "end":
            raise self._error("Expression is empty")
        node = self._or()
        if self._peek().kind != "end":
            raise self._error(f"Unexpected token {self._peek().value!r}")
        return node

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _accept(self, value: str) -> bool:
        token = self._peek()
        if token.kind == "op" and token.value == value:
            self.index += 1
            return True
        return False

    def _error(self, message: str) -> ExpressionEvaluationError:
        token = self._peek()
        return ExpressionEvaluationError(
            f"{message} at position {token.position}",
            details={"expression": self.expression, "position": token.position},
        )

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > MAX_DEPTH:
            raise self._error("Expression is nested too deeply")

    def _or(self) -> Node:
        operands = [self._and()]
        while self._accept("||"):
            operands.append(self._and())
        return operands[0] if len(operands) == 1 else Or(tuple(operands))

    def _and(self) -> Node:
        operands = [self._unary()]
        while self._accept("&&"):
            operands.append(self._unary())
        return operands[0] if len(operands) == 1 else And(tuple(operands))

    def _unary(self) -> Node:
        if self._accept("!"):
            self._enter()
            node = Not(self._unary())
            self.depth -= 1
            return node
        return self._primary()

    def _primary(self) -> Node:
        token = self._peek()
        if token.kind == "ident":
            self._advance()
            return Identifier(token.value)
        if self._accept("("):
            self._enter()
            node = self._or()
            if not self._accept(")"):
                raise self._error("Expected ')'")
            self.depth -= 1
            return node
        if token.kind == "end":
            raise self._error("Unexpected end of expression")
        raise self._error(f"Unexpected token {token.value!r}")


def identifiers(node: Node) -> Set[str]:
    """Collect every criterion key referenced by a parsed expression."""
    if isinstance(node, Identifier):
        return {node.name}
    if isinstance(node, Not):
        return identifiers(node.operand)
    names: Set[str] = set()
    for operand in node.operands:
        names |= identifiers(operand)
    return names


def _evaluate(node: Node, values: Mapping[str, bool]) -> bool:
    if isinstance(node, Identifier):
        return values[node.name]
    if isinstance(node, Not):
        return not _evaluate(node.operand, values)
    if isinstance(node, And):
        return all(_evaluate(operand, values) for operand in node.operands)
    return any(_evaluate(operand, values) for operand in node.operands)


class CustomLogicEvaluator:
    """
    Evaluates custom logic expressions against criterion outcomes.

    Stateless; one instance can be shared by every evaluation.
    """

    def parse(self, expression: str) -> Node:
        """
        Parse an expression into a node tree.

        Raises:
            ExpressionEvaluationError: On characters or syntax outside the grammar
        """
        if not isinstance(expression, str):
            raise ExpressionEvaluationError(
                f"Expression must be a string, got {type(expression).__name__}"
            )
        return _Parser(expression).parse()

    def evaluate(self, expression: str, evaluation_results: Mapping[str, bool]) -> bool:
        """
        Evaluate an expression against the per-criterion outcome map.

        Every referenced key is checked before evaluation, so
        short-circuiting never hides a reference to an unknown criterion.

        Args:
            expression: Boolean expression over criterion keys
            evaluation_results: Criterion key -> passed

        Returns:
            The expression's value

        Raises:
            ExpressionEvaluationError: On syntax errors, unknown keys or
                non-boolean outcome values
        """
        node = self.parse(expression)

        unknown = sorted(identifiers(node) - set(evaluation_results))
        if unknown:
            raise ExpressionEvaluationError(
                f"Unknown criterion key(s) in expression: {', '.join(unknown)}",
                details={"expression": expression, "unknown": unknown},
            )

        for name in identifiers(node):
            if not isinstance(evaluation_results[name], bool):
                raise ExpressionEvaluationError(
                    f"Criterion '{name}' does not have a boolean outcome",
                    details={"expression": expression, "key": name},
                )

        return _evaluate(node, evaluation_results)
