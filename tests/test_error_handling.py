from __future__ import annotations

import pytest

from lark import Token, Tree

from tests.support.harness import (
    MallowNotImplemented,
    MallowRuntimeError,
    MallowSuperclassNotFound,
    MallowTypeError,
    MallowUnknownNode,
    MallowVariableNotFound,
    N,
    program,
    run_case,
    run_program,
)
from mallow_ref.evaluator import eval_node
from mallow_ref.nodes import PLACEHOLDER_LABELS
from mallow_ref.runtime import (
    Environment,
    MallowArityError,
    MallowNotIncrementable,
    MallowSubroutineNotFound,
    MlwClass,
    MlwString,
    make_root_env,
)

def _body():
    return N.statements(N.int_literal(1))

PLACEHOLDERS = {
    "class_access": N.class_access("Point"),
    "class_declaration": N.class_declaration("Point", "Base", _body()),
    "constructor_declaration": N.constructor_declaration(["x"], _body()),
    "destructor_declaration": N.destructor_declaration([], _body()),
    "method_declaration": N.method_declaration("area", [], _body()),
    "attribute_access": N.attribute_access("x"),
    "attribute_assignment": N.attribute_assignment("x", N.int_literal(1)),
    "attribute_declaration": N.attribute_declaration("x", N.int_literal(1)),
    "try": N.try_(_body(), [N.catch("Error", "e", _body())], [N.finally_(_body())]),
    "catch": N.catch("Error", "e", _body()),
    "finally": N.finally_(_body()),
}

def test_placeholder_table_covers_every_label() -> None:
    assert set(PLACEHOLDERS) == set(PLACEHOLDER_LABELS)


@pytest.mark.parametrize("label", sorted(PLACEHOLDERS))
def test_placeholder_nodes_are_not_implemented(label: str) -> None:
    with pytest.raises(MallowNotImplemented) as excinfo:
        run_program(program(PLACEHOLDERS[label]))

    assert excinfo.value.feature == label


SCENARIOS = [
    pytest.param(
        program(Tree("goto", [])),
        None,
        MallowUnknownNode,
        id="unknown-label",
    ),
    pytest.param(
        N.compilation_unit(N.statements(Token("NAME", "loose"))),
        None,
        MallowUnknownNode,
        id="token-in-statement-position",
    ),
    pytest.param(
        program(N.class_declaration("Point", None, _body())),
        None,
        MallowNotImplemented,
        id="class-without-superclass",
    ),
    pytest.param(
        program(N.method_call(N.int_literal(1), "area")),
        None,
        MallowNotImplemented,
        id="named-method-call",
    ),
    pytest.param(
        program(N.self_literal()),
        ("undef", None),
        None,
        id="self-without-invocant",
    ),
    pytest.param(
        program(N.class_literal()),
        ("undef", None),
        None,
        id="class-without-class",
    ),
    pytest.param(
        program(N.super_literal()),
        None,
        MallowSuperclassNotFound,
        id="super-without-class",
    ),
    pytest.param(
        program(Tree("variable_access", [])),
        None,
        MallowRuntimeError,
        id="malformed-variable-access",
    ),
    pytest.param(
        program(Tree("variable_access", [Token("INT", "1")])),
        None,
        MallowRuntimeError,
        id="variable-name-not-a-name",
    ),
    pytest.param(
        program(Tree("bool_literal", [Token("INT", "1")])),
        None,
        MallowRuntimeError,
        id="bool-literal-bad-token",
    ),
    pytest.param(
        program(Tree("int_literal", [N.int_literal(1)])),
        None,
        MallowRuntimeError,
        id="literal-without-token",
    ),
    pytest.param(
        program(Tree("subroutine_declaration", [N.name("f"), Tree("args", []), _body()])),
        None,
        MallowRuntimeError,
        id="subroutine-params-not-paramlist",
    ),
]

@pytest.mark.parametrize("ast, expectation, expected_exc", SCENARIOS)
def test_error_handling(ast, expectation, expected_exc) -> None:
    run_case(ast, expectation, expected_exc)


@pytest.mark.parametrize("value", [None, 42, "int_literal"], ids=["none", "int", "str"])
def test_non_node_is_unknown(value) -> None:
    with pytest.raises(MallowUnknownNode):
        eval_node(value, make_root_env())


def test_super_without_superclass_names_class() -> None:
    env = make_root_env()
    env.current_class = MlwClass("Point")

    with pytest.raises(MallowSuperclassNotFound) as excinfo:
        run_program(program(N.super_literal()), env)

    assert excinfo.value.class_name == "Point"


def test_super_and_class_resolve_from_context() -> None:
    base = MlwClass("Base")
    point = MlwClass("Point", base)

    env = make_root_env()
    env.current_class = point
    env.current_invocant = MlwString("instance")

    assert run_program(program(N.super_literal()), env) is base
    assert run_program(program(N.class_literal()), env) is point
    assert run_program(program(N.self_literal()), env) == MlwString("instance")


def test_error_hierarchy() -> None:
    for exc_type in (
        MallowTypeError,
        MallowUnknownNode,
        MallowVariableNotFound,
        MallowSubroutineNotFound,
        MallowSuperclassNotFound,
        MallowNotImplemented,
        MallowNotIncrementable,
    ):
        assert issubclass(exc_type, MallowRuntimeError)

    assert issubclass(MallowArityError, MallowTypeError)


def test_location_attached_from_innermost_node() -> None:
    inner = N.variable_access("missing")
    inner.meta.empty = False
    inner.meta.line = 3
    inner.meta.column = 7

    outer = N.statements(inner)
    outer.meta.empty = False
    outer.meta.line = 1
    outer.meta.column = 1

    with pytest.raises(MallowVariableNotFound) as excinfo:
        eval_node(N.compilation_unit(outer), make_root_env())

    assert excinfo.value.mlw_meta is inner.meta
    assert str(excinfo.value) == "Variable 'missing' not found (line 3, col 7)"


def test_location_absent_without_parser_meta() -> None:
    with pytest.raises(MallowVariableNotFound) as excinfo:
        eval_node(program(N.variable_access("missing")), Environment.root())

    assert excinfo.value.mlw_meta is None
    assert str(excinfo.value) == "Variable 'missing' not found"
