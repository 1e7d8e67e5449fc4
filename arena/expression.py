# arena/expression.py
"""Whitelisted expression evaluator for the eval and setting commands.

Expressions are parsed with ``ast`` and walked node by node; only
literals, names from the given scope, public attribute access,
subscripts, arithmetic, comparisons, boolean logic, conditionals and a
handful of pure builtins are allowed. No statements, no method calls,
no private attributes.
"""

import ast
import logging
import operator
from typing import Any, Mapping

from arena.utils.errors import ExpressionError

logger = logging.getLogger(__name__)

BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

UNARY_OPS = {
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
    ast.Not: operator.not_,
}

COMPARE_OPS = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.In: lambda a, b: a in b,
    ast.NotIn: lambda a, b: a not in b,
    ast.Is: operator.is_,
    ast.IsNot: operator.is_not,
}

SAFE_BUILTINS = {
    "len": len,
    "min": min,
    "max": max,
    "sum": sum,
    "abs": abs,
    "round": round,
    "sorted": sorted,
    "list": list,
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
}

LITERAL_ALIASES = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
}

MAX_POWER_EXPONENT = 1000


def evaluate(expression: str, scope: Mapping[str, Any] = None) -> Any:
    """Evaluate an operator expression against a scope.

    Args:
        expression: Expression source
        scope: Names the expression may reference

    Returns:
        The expression's value

    Raises:
        ExpressionError: if the expression is malformed or uses anything
            outside the whitelist
    """
    if not expression or not expression.strip():
        raise ExpressionError("empty expression")
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as e:
        raise ExpressionError(f"syntax error: {e.msg}") from e
    return _Evaluator(scope or {}).visit(tree.body)


class _Evaluator(ast.NodeVisitor):

    def __init__(self, scope):
        self.scope = scope

    def generic_visit(self, node):
        raise ExpressionError(f"unsupported expression: {type(node).__name__}")

    def visit_Constant(self, node):
        return node.value

    def visit_Name(self, node):
        if node.id in self.scope:
            return self.scope[node.id]
        if node.id in LITERAL_ALIASES:
            return LITERAL_ALIASES[node.id]
        if node.id in SAFE_BUILTINS:
            return SAFE_BUILTINS[node.id]
        raise ExpressionError(f"{node.id} is not defined")

    def visit_Attribute(self, node):
        if node.attr.startswith("_"):
            raise ExpressionError(f"access to {node.attr} is not allowed")
        value = self.visit(node.value)
        try:
            return getattr(value, node.attr)
        except AttributeError as e:
            raise ExpressionError(str(e)) from e

    def visit_Subscript(self, node):
        value = self.visit(node.value)
        key = self.visit(node.slice)
        try:
            return value[key]
        except (KeyError, IndexError, TypeError) as e:
            raise ExpressionError(f"cannot index with {key!r}: {e}") from e

    def visit_Slice(self, node):
        lower = self.visit(node.lower) if node.lower else None
        upper = self.visit(node.upper) if node.upper else None
        step = self.visit(node.step) if node.step else None
        return slice(lower, upper, step)

    def visit_Tuple(self, node):
        return tuple(self.visit(elt) for elt in node.elts)

    def visit_List(self, node):
        return [self.visit(elt) for elt in node.elts]

    def visit_Dict(self, node):
        if any(key is None for key in node.keys):
            raise ExpressionError("dict unpacking is not allowed")
        return {self.visit(k): self.visit(v) for k, v in zip(node.keys, node.values)}

    def visit_UnaryOp(self, node):
        op = UNARY_OPS.get(type(node.op))
        if op is None:
            raise ExpressionError(f"unsupported operator: {type(node.op).__name__}")
        return op(self.visit(node.operand))

    def visit_BinOp(self, node):
        op = BINARY_OPS.get(type(node.op))
        if op is None:
            raise ExpressionError(f"unsupported operator: {type(node.op).__name__}")
        left, right = self.visit(node.left), self.visit(node.right)
        if isinstance(node.op, ast.Pow) and isinstance(right, (int, float)) and abs(right) > MAX_POWER_EXPONENT:
            raise ExpressionError("exponent too large")
        try:
            return op(left, right)
        except (ArithmeticError, TypeError) as e:
            raise ExpressionError(str(e)) from e

    def visit_BoolOp(self, node):
        if isinstance(node.op, ast.And):
            result = True
            for value in node.values:
                result = self.visit(value)
                if not result:
                    return result
            return result
        result = False
        for value in node.values:
            result = self.visit(value)
            if result:
                return result
        return result

    def visit_Compare(self, node):
        left = self.visit(node.left)
        for op_node, comparator in zip(node.ops, node.comparators):
            right = self.visit(comparator)
            try:
                if not COMPARE_OPS[type(op_node)](left, right):
                    return False
            except TypeError as e:
                raise ExpressionError(str(e)) from e
            left = right
        return True

    def visit_IfExp(self, node):
        return self.visit(node.body) if self.visit(node.test) else self.visit(node.orelse)

    def visit_Call(self, node):
        func = self.visit(node.func)
        if not any(func is builtin for builtin in SAFE_BUILTINS.values()):
            raise ExpressionError("only builtin functions may be called")
        if node.keywords:
            raise ExpressionError("keyword arguments are not allowed")
        args = [self.visit(arg) for arg in node.args]
        try:
            return func(*args)
        except (ValueError, TypeError) as e:
            raise ExpressionError(str(e)) from e
