from __future__ import annotations

from typing import Callable, Optional

from lark import Tree

from .runtime import (
    Environment,
    MlwUndef,
    MlwValue,
    MallowRuntimeError,
    MallowUnknownNode,
    make_root_env,
)
from .nodes import DERIVED_CONDITIONALS, PLACEHOLDER_LABELS
from .tree import Node, is_token, is_tree, node_meta, tree_children

from .eval.bind import (
    eval_array_element_access,
    eval_hash_element_access,
    eval_variable_access,
    eval_variable_assignment,
    eval_variable_declaration,
)
from .eval.blocks import eval_compilation_unit, eval_scope, eval_statements
from .eval.control import eval_derived_conditional, eval_if_else
from .eval.expr import eval_compare, eval_logical, eval_not, eval_step
from .eval.fn import eval_package_declaration, eval_subroutine_call, eval_subroutine_declaration
from .eval.literals import eval_array_literal, eval_hash_literal, eval_pair_literal, eval_token_literal
from .eval.loops import eval_do_while, eval_for, eval_foreach, eval_while
from .eval.objects import (
    eval_class_literal,
    eval_method_call,
    eval_placeholder,
    eval_self_literal,
    eval_super_literal,
)


def _maybe_attach_location(exc: MallowRuntimeError, node: Node) -> None:
    if getattr(exc, "_augmented", False):
        return

    meta = node_meta(node)

    if meta is not None and getattr(meta, "line", None) is not None:
        exc.mlw_meta = meta
        exc._augmented = True  # type: ignore[attr-defined]

# ---------------- Public API ----------------

def evaluate(env: Optional[Environment], node: Node) -> MlwValue:
    """Evaluate a whole program (or any node) against `env`, a fresh root scope if None."""
    if env is None:
        env = make_root_env()

    return eval_node(node, env)

# ---------------- Core evaluator ----------------

def eval_node(n: Node, env: Environment) -> MlwValue:
    try:
        return _eval_node_inner(n, env)
    except MallowRuntimeError as e:
        _maybe_attach_location(e, n)
        raise


def _eval_node_inner(n: Node, env: Environment) -> MlwValue:
    if not is_tree(n):
        kind = f"token {n.type}" if is_token(n) else type(n).__name__
        raise MallowUnknownNode(kind)

    d = str(n.data)
    handler = _NODE_DISPATCH.get(d)
    if handler is not None:
        return handler(n, env)

    if d in DERIVED_CONDITIONALS:
        return eval_derived_conditional(n, env, eval_node)

    if d in PLACEHOLDER_LABELS:
        return eval_placeholder(n, env)

    raise MallowUnknownNode(d)


_NODE_DISPATCH: dict[str, Callable[[Tree, Environment], MlwValue]] = {
    # containers
    'compilation_unit': lambda n, env: eval_compilation_unit(n, env, eval_node),
    'scope': lambda n, env: eval_scope(n, env, eval_node),
    'statements': lambda n, env: eval_statements(tree_children(n), env, eval_node),
    # literals
    'int_literal': eval_token_literal,
    'float_literal': eval_token_literal,
    'string_literal': eval_token_literal,
    'bool_literal': eval_token_literal,
    'undef_literal': lambda _, __: MlwUndef(),
    'self_literal': lambda _, env: eval_self_literal(env),
    'class_literal': lambda _, env: eval_class_literal(env),
    'super_literal': lambda _, env: eval_super_literal(env),
    'array_literal': lambda n, env: eval_array_literal(n, env, eval_node),
    'pair_literal': lambda n, env: eval_pair_literal(n, env, eval_node),
    'hash_literal': lambda n, env: eval_hash_literal(n, env, eval_node),
    # operators
    'increment': lambda n, env: eval_step(n, env, eval_node),
    'decrement': lambda n, env: eval_step(n, env, eval_node),
    'not': lambda n, env: eval_not(n, env, eval_node),
    'and': lambda n, env: eval_logical(n, env, eval_node),
    'or': lambda n, env: eval_logical(n, env, eval_node),
    'less_than': lambda n, env: eval_compare(n, env, eval_node),
    'greater_than': lambda n, env: eval_compare(n, env, eval_node),
    # bindings
    'variable_access': lambda n, env: eval_variable_access(n, env),
    'variable_assignment': lambda n, env: eval_variable_assignment(n, env, eval_node),
    'variable_declaration': lambda n, env: eval_variable_declaration(n, env, eval_node),
    'array_element_access': lambda n, env: eval_array_element_access(n, env, eval_node),
    'hash_element_access': lambda n, env: eval_hash_element_access(n, env, eval_node),
    # declarations and calls
    'package_declaration': lambda n, env: eval_package_declaration(n, env, eval_node),
    'subroutine_declaration': lambda n, env: eval_subroutine_declaration(n, env),
    'subroutine_call': lambda n, env: eval_subroutine_call(n, env, eval_node),
    'method_call': lambda n, env: eval_method_call(n, env, eval_node),
    # control flow
    'if_else': lambda n, env: eval_if_else(n, env, eval_node),
    'while': lambda n, env: eval_while(n, env, eval_node),
    'do_while': lambda n, env: eval_do_while(n, env, eval_node),
    'for': lambda n, env: eval_for(n, env, eval_node),
    'foreach': lambda n, env: eval_foreach(n, env, eval_node),
}
