from __future__ import annotations

from typing import Callable

from lark import Tree

from ..runtime import (
    Environment,
    MlwUndef,
    MlwValue,
    MallowNotImplemented,
    MallowSuperclassNotFound,
    call_operator,
    is_operator_name,
)
from ..tree import Node, tree_label
from .common import arg_nodes, expect_children, expect_name_token

EvalFunc = Callable[[Node, Environment], MlwValue]

def eval_self_literal(env: Environment) -> MlwValue:
    invocant = env.current_invocant
    return invocant if invocant is not None else MlwUndef()

def eval_class_literal(env: Environment) -> MlwValue:
    klass = env.current_class
    return klass if klass is not None else MlwUndef()

def eval_super_literal(env: Environment) -> MlwValue:
    klass = env.current_class

    if klass is None:
        raise MallowSuperclassNotFound(None)

    if klass.superclass is None:
        raise MallowSuperclassNotFound(klass.name)

    return klass.superclass

def eval_method_call(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    """Only operator methods (`2.+(3)`) dispatch; real method calls await a class system."""
    invocant_node, method_tok, args_node = expect_children(n, 3)
    method = expect_name_token(method_tok, "Method name")

    if not is_operator_name(method):
        raise MallowNotImplemented(f"method call '{method}'")

    recv = eval_func(invocant_node, env)
    args = [eval_func(a, env) for a in arg_nodes(args_node)]

    return call_operator(recv, method, args)

def eval_placeholder(n: Tree, env: Environment) -> MlwValue:
    raise MallowNotImplemented(str(tree_label(n)))
