from __future__ import annotations

import pytest

from tests.support.harness import (
    MallowArityError,
    MallowNotImplemented,
    MallowTypeError,
    MallowVariableNotFound,
    N,
    program,
    run_case,
    run_program,
)

def _plus(lhs, rhs):
    return N.method_call(lhs, "+", [rhs])

SCENARIOS = [
    pytest.param(
        program(_plus(N.int_literal(2), N.int_literal(2))),
        ("int", 4),
        None,
        id="int-plus-int",
    ),
    pytest.param(
        program(_plus(N.float_literal(2.5), N.int_literal(2))),
        ("float", 4.5),
        None,
        id="float-plus-int",
    ),
    pytest.param(
        program(_plus(N.int_literal(2), N.float_literal(2.5))),
        ("float", 4.5),
        None,
        id="int-plus-float",
    ),
    pytest.param(
        program(_plus(N.float_literal(2.5), N.float_literal(2.5))),
        ("float", 5.0),
        None,
        id="float-plus-float",
    ),
    pytest.param(
        program(N.method_call(N.int_literal(7), "-", [N.int_literal(10)])),
        ("int", -3),
        None,
        id="int-minus-int",
    ),
    pytest.param(
        program(N.method_call(N.int_literal(3), "*", [N.float_literal(0.5)])),
        ("float", 1.5),
        None,
        id="int-times-float",
    ),
    pytest.param(
        program(
            N.variable_declaration("x", N.int_literal(40)),
            _plus(N.variable_access("x"), _plus(N.int_literal(1), N.int_literal(1))),
        ),
        ("int", 42),
        None,
        id="nested-plus-through-variable",
    ),
    pytest.param(
        program(N.method_call(N.int_literal(1), "+", [N.int_literal(1), N.int_literal(2)])),
        None,
        MallowArityError,
        id="plus-arity",
    ),
    pytest.param(
        program(_plus(N.string_literal("a"), N.int_literal(1))),
        None,
        MallowTypeError,
        id="plus-string-typeerror",
    ),
    pytest.param(
        program(N.method_call(N.int_literal(1), "frobnicate", [])),
        None,
        MallowNotImplemented,
        id="method-call-not-implemented",
    ),
    pytest.param(
        program(N.less_than(N.int_literal(1), N.float_literal(1.5))),
        ("bool", True),
        None,
        id="less-than-mixed",
    ),
    pytest.param(
        program(N.greater_than(N.int_literal(1), N.int_literal(1))),
        ("bool", False),
        None,
        id="greater-than-equal-operands",
    ),
    pytest.param(
        program(N.less_than(N.string_literal("1"), N.int_literal(2))),
        None,
        MallowTypeError,
        id="less-than-string-typeerror",
    ),
    pytest.param(
        program(N.and_(N.int_literal(0), N.string_literal("rhs"))),
        ("int", 0),
        None,
        id="and-returns-falsy-left",
    ),
    pytest.param(
        program(N.and_(N.int_literal(1), N.string_literal("rhs"))),
        ("string", "rhs"),
        None,
        id="and-returns-right",
    ),
    pytest.param(
        program(N.or_(N.string_literal("lhs"), N.variable_access("missing"))),
        ("string", "lhs"),
        None,
        id="or-short-circuit",
    ),
    pytest.param(
        program(N.or_(N.string_literal("0"), N.float_literal(0.0))),
        ("float", 0.0),
        None,
        id="or-returns-right-even-if-falsy",
    ),
    pytest.param(
        program(N.and_(N.bool_literal(True), N.variable_access("missing"))),
        None,
        MallowVariableNotFound,
        id="and-evaluates-right-when-truthy",
    ),
    pytest.param(
        program(N.not_(N.array_literal())),
        ("bool", True),
        None,
        id="not-empty-array",
    ),
    pytest.param(
        program(N.not_(N.string_literal("0.0"))),
        ("bool", False),
        None,
        id="not-string-zero-point-zero",
    ),
]

@pytest.mark.parametrize("ast, expectation, expected_exc", SCENARIOS)
def test_operators(ast, expectation, expected_exc) -> None:
    run_case(ast, expectation, expected_exc)


@pytest.mark.parametrize("a, b", [(0, 0), (-5, 3), (2**40, 2**40), (17, -17)])
def test_int_addition_stays_int(a: int, b: int) -> None:
    result = run_program(program(_plus(N.int_literal(a), N.int_literal(b))))
    assert result.value == a + b
    assert type(result.value) is int


@pytest.mark.parametrize(
    "make_logical, lhs",
    [
        pytest.param(N.and_, N.bool_literal(False), id="false-and"),
        pytest.param(N.or_, N.bool_literal(True), id="true-or"),
    ],
)
def test_short_circuit_skips_rhs(root_env, make_logical, lhs) -> None:
    ast = program(
        N.variable_declaration("hit", N.int_literal(0)),
        make_logical(lhs, N.variable_assignment("hit", N.int_literal(1))),
    )
    run_program(ast, root_env)
    assert root_env.get("hit").value == 0
