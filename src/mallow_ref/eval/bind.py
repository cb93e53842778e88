from __future__ import annotations

from typing import Callable

from lark import Tree

from ..runtime import (
    Environment,
    MlwArray,
    MlwHash,
    MlwInt,
    MlwUndef,
    MlwValue,
    MallowTypeError,
)
from ..tree import Node
from ..utils import stringify
from .common import expect_children, expect_name_token

EvalFunc = Callable[[Node, Environment], MlwValue]

def eval_variable_access(n: Tree, env: Environment) -> MlwValue:
    (name_tok,) = expect_children(n, 1)
    return env.get(expect_name_token(name_tok, "Variable name"))

def eval_variable_assignment(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    name_tok, expr = expect_children(n, 2)
    name = expect_name_token(name_tok, "Variable name")
    # assignment never declares; set() raises for an unknown name
    env.set(name, eval_func(expr, env))
    return env.get(name)

def eval_variable_declaration(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    name_tok, expr = expect_children(n, 2)
    name = expect_name_token(name_tok, "Variable name")
    env.create(name, eval_func(expr, env))
    return env.get(name)

def eval_array_element_access(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    name_tok, index_node = expect_children(n, 2)
    name = expect_name_token(name_tok, "Array name")
    container = env.get(name)

    if not isinstance(container, MlwArray):
        raise MallowTypeError(f"'{name}' is not an array; got {type(container).__name__}")

    index = eval_func(index_node, env)
    if not isinstance(index, MlwInt):
        raise MallowTypeError(f"Array index must be an integer; got {type(index).__name__}")

    items = container.items
    pos = index.value + len(items) if index.value < 0 else index.value

    if 0 <= pos < len(items):
        return items[pos]

    return MlwUndef()

def eval_hash_element_access(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    name_tok, key_node = expect_children(n, 2)
    name = expect_name_token(name_tok, "Hash name")
    container = env.get(name)

    if not isinstance(container, MlwHash):
        raise MallowTypeError(f"'{name}' is not a hash; got {type(container).__name__}")

    key = stringify(eval_func(key_node, env))

    return container.slots.get(key, MlwUndef())
