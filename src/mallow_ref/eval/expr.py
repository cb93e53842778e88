from __future__ import annotations

from typing import Callable, Tuple

from lark import Tree

from ..runtime import (
    Environment,
    MlwBool,
    MlwFloat,
    MlwInt,
    MlwString,
    MlwValue,
    MallowRuntimeError,
    MallowTypeError,
)
from ..tree import Node, tree_children, tree_label
from ..utils import increment_string
from .common import expect_children, expect_name_token, token_kind
from .helpers import is_truthy, to_number

EvalFunc = Callable[[Node, Environment], MlwValue]

def eval_not(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwBool:
    (receiver,) = expect_children(n, 1)
    return MlwBool(not is_truthy(eval_func(receiver, env)))

def eval_logical(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    lhs_node, rhs_node = expect_children(n, 2)
    lhs = eval_func(lhs_node, env)

    if tree_label(n) == 'and':
        return eval_func(rhs_node, env) if is_truthy(lhs) else lhs

    return lhs if is_truthy(lhs) else eval_func(rhs_node, env)

def eval_compare(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwBool:
    lhs_node, rhs_node = expect_children(n, 2)
    lhs = to_number(eval_func(lhs_node, env))
    rhs = to_number(eval_func(rhs_node, env))

    match tree_label(n):
        case 'less_than':
            return MlwBool(lhs < rhs)
        case 'greater_than':
            return MlwBool(lhs > rhs)
        case label:
            raise MallowRuntimeError(f"Unknown comparator {label}")

def _step(value: MlwValue, delta: int) -> MlwValue:
    match value:
        case MlwInt(value=i):
            return MlwInt(i + delta)
        case MlwFloat(value=f):
            return MlwFloat(f + float(delta))
        case MlwString(value=s) if delta > 0:
            return MlwString(increment_string(s))
        case _:
            op = '++' if delta > 0 else '--'
            raise MallowTypeError(f"Cannot apply {op} to {type(value).__name__}")

def _split_step_node(n: Tree) -> Tuple[Node, str]:
    children = tree_children(n)

    if len(children) == 1:
        return children[0], 'prefix'

    if len(children) == 2 and token_kind(children[1]) == 'FIXITY':
        fixity = str(children[1].value)
        if fixity in ('prefix', 'postfix'):
            return children[0], fixity

    raise MallowRuntimeError(f"Malformed {tree_label(n)}")

def eval_step(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    """`++`/`--` on a variable; prefix yields the new value, postfix the old one."""
    receiver, fixity = _split_step_node(n)

    match tree_label(receiver):
        case 'variable_access':
            (name_tok,) = expect_children(receiver, 1)
        case 'variable_declaration':
            name_tok, _ = expect_children(receiver, 2)
            eval_func(receiver, env)
        case label:
            raise MallowTypeError(f"{tree_label(n)} target must be a variable, not {label}")

    name = expect_name_token(name_tok, "Variable name")
    old_val = env.get(name)
    new_val = _step(old_val, 1 if tree_label(n) == 'increment' else -1)
    env.set(name, new_val)

    return old_val if fixity == 'postfix' else new_val
