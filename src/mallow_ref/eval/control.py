from __future__ import annotations

from typing import Callable

from lark import Tree

from ..lower import canonical_conditional
from ..runtime import Environment, MlwValue, MallowRuntimeError
from ..tree import Node, tree_label
from .common import expect_children
from .helpers import is_truthy

EvalFunc = Callable[[Node, Environment], MlwValue]

def eval_if_else(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    cond_node, body_node, else_node = expect_children(n, 3)

    if is_truthy(eval_func(cond_node, env)):
        return eval_func(body_node, env)

    return eval_func(else_node, env)

def eval_derived_conditional(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    """if/elsif/unless shapes only ever run as the if_else they lower to."""
    lowered = canonical_conditional(n)

    if lowered is n:
        raise MallowRuntimeError(f"Malformed {tree_label(n)}")

    return eval_func(lowered, env)
