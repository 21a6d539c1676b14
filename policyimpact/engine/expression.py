"""Safe arithmetic expression evaluator.

Formula expressions are authored upstream by an LLM and are untrusted, so
they are never handed to eval/exec. Instead they go through a two-phase
pipeline over a closed grammar:

    expr    := term (('+' | '-') term)*
    term    := factor (('*' | '/') factor)*
    factor  := number | '(' expr ')' | ('-' | '+') factor | funcname '(' args ')'
    args    := expr (',' expr)*

1) ``tokenize`` turns the string into tokens, resolving identifiers on the
   way: whitelisted function names (case-insensitive) become function
   tokens, bound variables (case-sensitive) are replaced by their value.
2) ``Parser`` walks the tokens with a single forward cursor and computes
   the value directly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Mapping, Optional


class ExpressionError(Exception):
    """Base class for every reason an expression cannot be evaluated."""


class InvalidCharacterError(ExpressionError):
    pass


class UnknownIdentifierError(ExpressionError):
    pass


class UnknownFunctionError(ExpressionError):
    pass


class ExpressionSyntaxError(ExpressionError):
    pass


class DivisionByZeroError(ExpressionError):
    pass


class NonFiniteResultError(ExpressionError):
    pass


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


# name -> (callable, min_args, max_args); None means unbounded
FUNCTIONS: dict[str, tuple[Callable[..., float], int, Optional[int]]] = {
    "min": (min, 1, None),
    "max": (max, 1, None),
    "abs": (abs, 1, 1),
    "round": (_round_half_up, 1, 1),
    "floor": (math.floor, 1, 1),
    "ceil": (math.ceil, 1, 1),
}

OPERATORS = frozenset("+-*/")


@dataclass(frozen=True)
class Token:
    kind: str  # number | operator | lparen | rparen | comma | function
    value: object = None
    name: Optional[str] = None  # source identifier for substituted variables


def tokenize(expression: str, variables: Mapping[str, float]) -> list[Token]:
    """Split an expression into tokens, substituting bound variables."""
    tokens: list[Token] = []
    i = 0
    length = len(expression)

    while i < length:
        char = expression[i]

        if char.isspace():
            i += 1
            continue

        next_char = expression[i + 1] if i + 1 < length else ""
        if _is_digit(char) or (char == "." and _is_digit(next_char)):
            start = i
            while i < length and (_is_digit(expression[i]) or expression[i] == "."):
                i += 1
            literal = expression[start:i]
            try:
                tokens.append(Token("number", float(literal)))
            except ValueError:
                raise ExpressionSyntaxError(f"Malformed number: {literal!r}") from None
            continue

        if char in OPERATORS:
            tokens.append(Token("operator", char))
            i += 1
            continue

        if char == "(":
            tokens.append(Token("lparen"))
            i += 1
            continue

        if char == ")":
            tokens.append(Token("rparen"))
            i += 1
            continue

        if char == ",":
            tokens.append(Token("comma"))
            i += 1
            continue

        if _is_ident_start(char):
            start = i
            while i < length and (_is_ident_start(expression[i]) or _is_digit(expression[i])):
                i += 1
            ident = expression[start:i]

            if ident.lower() in FUNCTIONS:
                tokens.append(Token("function", ident.lower()))
            elif ident in variables and _is_number(variables[ident]):
                tokens.append(Token("number", float(variables[ident]), name=ident))
            else:
                raise UnknownIdentifierError(f"Unknown identifier in expression: {ident}")
            continue

        raise InvalidCharacterError(f"Invalid character in expression: {char!r}")

    return tokens


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_ident_start(char: str) -> bool:
    return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float))


class Parser:
    """Recursive-descent evaluator over a token list."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    def parse(self) -> float:
        result = self._expression()
        if self.pos < len(self.tokens):
            raise ExpressionSyntaxError("Unexpected trailing input after expression")
        return result

    def _peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _consume(self) -> Token:
        token = self._peek()
        if token is None:
            raise ExpressionSyntaxError("Unexpected end of expression")
        self.pos += 1
        return token

    def _expect(self, kind: str) -> Token:
        token = self._consume()
        if token.kind != kind:
            raise ExpressionSyntaxError(f"Expected {kind}, got {token.kind}")
        return token

    def _at_operator(self, ops: str) -> bool:
        token = self._peek()
        return token is not None and token.kind == "operator" and token.value in ops

    def _expression(self) -> float:
        left = self._term()
        while self._at_operator("+-"):
            op = self._consume().value
            right = self._term()
            left = left + right if op == "+" else left - right
        return left

    def _term(self) -> float:
        left = self._factor()
        while self._at_operator("*/"):
            op = self._consume().value
            right = self._factor()
            if op == "/":
                if right == 0:
                    raise DivisionByZeroError("Division by zero")
                left = left / right
            else:
                left = left * right
        return left

    def _factor(self) -> float:
        token = self._consume()

        if token.kind == "operator" and token.value == "-":
            return -self._factor()
        if token.kind == "operator" and token.value == "+":
            return self._factor()

        if token.kind == "number":
            return token.value

        if token.kind == "lparen":
            result = self._expression()
            self._expect("rparen")
            return result

        if token.kind == "function":
            return self._call(token.value)

        raise ExpressionSyntaxError(f"Unexpected token: {token.kind}")

    def _call(self, name: str) -> float:
        self._expect("lparen")
        args: list[float] = []
        next_token = self._peek()
        if next_token is None or next_token.kind != "rparen":
            args.append(self._expression())
            while self._peek() is not None and self._peek().kind == "comma":
                self._consume()
                args.append(self._expression())
        self._expect("rparen")

        if name not in FUNCTIONS:
            raise UnknownFunctionError(f"Unknown function: {name}")
        fn, min_args, max_args = FUNCTIONS[name]
        if len(args) < min_args or (max_args is not None and len(args) > max_args):
            raise ExpressionSyntaxError(
                f"{name}() takes {min_args}"
                f"{'' if max_args == min_args else ' or more'} argument(s), got {len(args)}"
            )
        if not all(math.isfinite(arg) for arg in args):
            raise NonFiniteResultError(f"{name}() received a non-finite argument")
        try:
            return float(fn(*args))
        except (OverflowError, ValueError) as e:
            raise NonFiniteResultError(f"{name}() produced a non-finite value: {e}") from e


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one expression.

    Exactly one of ``value`` and ``error`` is set. ``referenced`` lists the
    variables the expression substituted, in first-use order.
    """

    value: Optional[float] = None
    error: Optional[str] = None
    referenced: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None


def _run(expression: str, variables: Mapping[str, float]) -> tuple[float, list[Token]]:
    tokens = tokenize(expression, variables)
    try:
        result = Parser(tokens).parse()
    except RecursionError:
        raise ExpressionSyntaxError("Expression is nested too deeply") from None
    if not math.isfinite(result):
        raise NonFiniteResultError(f"Expression produced a non-finite value: {result}")
    return result, tokens


def evaluate_strict(expression: str, variables: Mapping[str, float]) -> float:
    """Evaluate an expression, raising an ExpressionError subclass on failure."""
    result, _ = _run(expression, variables)
    return result


def evaluate(expression: str, variables: Mapping[str, float]) -> Evaluation:
    """Evaluate an expression without raising for bad content."""
    try:
        result, tokens = _run(expression, variables)
    except ExpressionError as e:
        return Evaluation(error=str(e))

    referenced = tuple(dict.fromkeys(t.name for t in tokens if t.name is not None))
    return Evaluation(value=result, referenced=referenced)
