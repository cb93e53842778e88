from __future__ import annotations

from typing import Callable, Dict

from lark import Tree

from ..runtime import (
    Environment,
    MlwArray,
    MlwHash,
    MlwPair,
    MlwValue,
    MallowRuntimeError,
    MallowTypeError,
)
from ..tree import Node, is_token, tree_children, tree_label
from ..utils import stringify
from .common import expect_children, token_bool, token_float, token_int, token_string

EvalFunc = Callable[[Node, Environment], MlwValue]

_TOKEN_LITERALS = {
    'int_literal': token_int,
    'float_literal': token_float,
    'string_literal': token_string,
    'bool_literal': token_bool,
}

def eval_token_literal(n: Tree, env: Environment) -> MlwValue:
    (tok,) = expect_children(n, 1)

    if not is_token(tok):
        raise MallowRuntimeError(f"Malformed {tree_label(n)}")

    return _TOKEN_LITERALS[str(n.data)](tok)

def eval_array_literal(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwArray:
    return MlwArray([eval_func(c, env) for c in tree_children(n)])

def eval_pair_literal(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwPair:
    key_node, value_node = expect_children(n, 2)
    return MlwPair(eval_func(key_node, env), eval_func(value_node, env))

def eval_hash_literal(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwHash:
    slots: Dict[str, MlwValue] = {}

    for child in tree_children(n):
        pair = eval_func(child, env)

        if not isinstance(pair, MlwPair):
            raise MallowTypeError(f"Hash literal elements must be pairs; got {type(pair).__name__}")

        # last key wins
        slots[stringify(pair.key)] = pair.value

    return MlwHash(slots)
