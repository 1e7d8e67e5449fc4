"""Tests for the whitelisted expression evaluator."""

from types import SimpleNamespace

import pytest

from arena.expression import evaluate
from arena.utils.errors import ExpressionError


@pytest.mark.parametrize("source, expected", [
    ("1 + 2 * 3", 7),
    ("(1 + 2) * 3", 9),
    ("7 // 2", 3),
    ("7 % 4", 3),
    ("2 ** 10", 1024),
    ("-5 + +2", -3),
    ("10 / 4", 2.5),
    ("'a' + 'b'", "ab"),
    ("[1, 2, 3]", [1, 2, 3]),
    ("(1, 2)", (1, 2)),
    ("{'k': 1}", {"k": 1}),
    ("true and not false", True),
    ("null", None),
    ("1 < 2 < 3", True),
    ("3 > 2 > 5", False),
    ("2 in [1, 2]", True),
    ("'x' not in 'abc'", True),
    ("1 if 0 else 2", 2),
    ("max(1, 5, 3)", 5),
    ("len('abcd')", 4),
    ("round(2.567, 1)", 2.6),
    ("[1, 2, 3][1:]", [2, 3]),
])
def test_evaluates_whitelisted_expressions(source, expected):
    assert evaluate(source) == expected


def test_resolves_names_and_attributes_from_scope():
    scope = {
        "handle": SimpleNamespace(running=True, stats=SimpleNamespace(limit=50)),
        "players": {1: "one"},
    }
    assert evaluate("handle.running", scope) is True
    assert evaluate("handle.stats.limit * 2", scope) == 100
    assert evaluate("players[1]", scope) == "one"


def test_boolean_operators_short_circuit():
    # the right-hand side would fail if evaluated
    assert evaluate("0 and missing") == 0
    assert evaluate("1 or missing") == 1


@pytest.mark.parametrize("source, message", [
    ("missing", "missing is not defined"),
    ("1 +", "syntax error"),
    ("", "empty expression"),
    ("x._secret", "access to _secret is not allowed"),
    ("().__class__", "access to __class__ is not allowed"),
    ("__import__('os')", "__import__ is not defined"),
    ("[x for x in [1]]", "unsupported expression: ListComp"),
    ("lambda: 1", "unsupported expression: Lambda"),
    ("1 / 0", "division by zero"),
    ("2 ** 100000", "exponent too large"),
    ("int('x')", "invalid literal"),
    ("max(1, key=abs)", "keyword arguments are not allowed"),
])
def test_rejects_or_reports(source, message):
    with pytest.raises(ExpressionError) as excinfo:
        evaluate(source, {"x": object()})
    assert message in str(excinfo.value)


def test_method_calls_are_not_allowed():
    calls = []
    scope = {"obj": SimpleNamespace(run=lambda: calls.append(1))}

    with pytest.raises(ExpressionError):
        evaluate("obj.run()", scope)
    assert calls == []
