"""
Grammar-limited arithmetic.

Accepts numeric literals, + - * /, unary sign, parentheses and whitespace.
The text is parsed into a Python AST and walked against a whitelist; nothing
is ever compiled or executed.
"""
import ast
import operator
import re
from typing import Optional, Union

from .errors import ArithmeticParseError

Number = Union[int, float]

# runs of characters that can appear in an expression
_EXPR_CHARS = re.compile(r"[\d+\-*/().\s]+")

_BINARY = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
}
_UNARY = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

MAX_EXPRESSION_LENGTH = 200


def extract_expression(text: str) -> Optional[str]:
    """
    Return the longest digit-bearing run of expression characters, stripped.

    Trailing dots are sentence punctuation. A dangling operator is dropped
    only when words follow it ("6 * 7 - thanks"); at the end of the message
    it stays, so "2 + " is still reported as malformed.
    """
    text = text or ""
    runs = []
    for m in _EXPR_CHARS.finditer(text):
        run = m.group().strip().rstrip(". ")
        if text[m.end():m.end() + 1].isalpha():
            run = run.rstrip("+-*/. ")
        if any(c.isdigit() for c in run):
            runs.append(run)
    if not runs:
        return None
    return max(runs, key=len)


def evaluate(expression: str) -> Number:
    expr = (expression or "").strip()
    if not expr:
        raise ArithmeticParseError(expression, "empty expression")
    if len(expr) > MAX_EXPRESSION_LENGTH:
        raise ArithmeticParseError(expr, "expression too long")
    try:
        tree = ast.parse(expr, mode="eval")
    except SyntaxError as e:
        raise ArithmeticParseError(expr, "syntax error") from e
    return _eval(tree.body, expr)


def _eval(node: ast.AST, expr: str) -> Number:
    if isinstance(node, ast.Constant) and type(node.value) in (int, float):
        return node.value
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY:
        left = _eval(node.left, expr)
        right = _eval(node.right, expr)
        try:
            return _BINARY[type(node.op)](left, right)
        except ZeroDivisionError as e:
            raise ArithmeticParseError(expr, "division by zero") from e
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY:
        return _UNARY[type(node.op)](_eval(node.operand, expr))
    raise ArithmeticParseError(expr, f"unsupported element {type(node).__name__}")


def format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
