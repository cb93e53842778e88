from __future__ import annotations

from typing import Callable

from lark import Tree

from ..runtime import Environment, MlwArray, MlwUndef, MlwValue, MallowTypeError
from ..tree import Node, tree_label
from .common import expect_children, expect_name_token
from .helpers import is_truthy as _is_truthy

EvalFunc = Callable[[Node, Environment], MlwValue]

# Every loop gets one child scope for its whole run, not one per iteration:
# a declaration in the body is still visible on the next pass.

def eval_while(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    cond_node, body_node = expect_children(n, 2)
    loop_env = Environment(parent=env)

    while _is_truthy(eval_func(cond_node, loop_env)):
        eval_func(body_node, loop_env)

    return MlwUndef()

def eval_do_while(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    cond_node, body_node = expect_children(n, 2)
    loop_env = Environment(parent=env)

    while True:
        eval_func(body_node, loop_env)

        if not _is_truthy(eval_func(cond_node, loop_env)):
            break

    return MlwUndef()

def eval_for(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    init_node, cond_node, update_node, body_node = expect_children(n, 4)
    loop_env = Environment(parent=env)
    eval_func(init_node, loop_env)

    while _is_truthy(eval_func(cond_node, loop_env)):
        eval_func(body_node, loop_env)
        eval_func(update_node, loop_env)

    return MlwUndef()

def eval_foreach(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    topic_node, list_node, body_node = expect_children(n, 3)
    items = eval_func(list_node, env)

    if not isinstance(items, MlwArray):
        raise MallowTypeError(f"foreach expects an array; got {type(items).__name__}")

    topic_label = tree_label(topic_node)
    match topic_label:
        case 'variable_declaration':
            name_tok, _ = expect_children(topic_node, 2)
        case 'variable_access':
            (name_tok,) = expect_children(topic_node, 1)
        case _:
            raise MallowTypeError(f"foreach topic must be a variable, not {topic_label}")

    name = expect_name_token(name_tok, "foreach topic")
    loop_env = Environment(parent=env)

    # snapshot; growing the array in the body does not extend the loop
    for item in list(items.items):
        if topic_label == 'variable_declaration':
            loop_env.create(name, item)
        else:
            loop_env.set(name, item)

        eval_func(body_node, loop_env)

    return MlwUndef()
