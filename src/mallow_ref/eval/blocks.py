from __future__ import annotations

from typing import Any, Callable, List

from lark import Tree

from ..runtime import Environment, MlwUndef, MlwValue
from ..tree import Node
from .common import expect_children

EvalFunc = Callable[[Node, Environment], MlwValue]

def eval_statements(children: List[Any], env: Environment, eval_func: EvalFunc) -> MlwValue:
    """Run a statement list in order, returning the last value (undef when empty)."""
    result: MlwValue = MlwUndef()

    for child in children:
        result = eval_func(child, env)

    return result

def eval_scope(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    (body,) = expect_children(n, 1)
    return eval_func(body, Environment(parent=env))

def eval_compilation_unit(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    (body,) = expect_children(n, 1)
    return eval_func(body, env)
