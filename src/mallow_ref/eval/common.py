from __future__ import annotations

from typing import Any, List

from lark import Token

from ..runtime import MlwBool, MlwFloat, MlwInt, MlwString, MallowRuntimeError
from ..tree import is_token, is_tree, tree_children, tree_label

def token_kind(node: Any) -> str | None:
    if not is_token(node):
        return None
    tok: Token = node
    return str(tok.type)

def expect_name_token(node: Any, context: str) -> str:
    if is_token(node) and token_kind(node) == 'NAME':
        return str(node.value)

    raise MallowRuntimeError(f"{context} must be a name")

def expect_children(node: Any, count: int) -> List[Any]:
    children = tree_children(node)

    if len(children) != count:
        raise MallowRuntimeError(f"Malformed {tree_label(node)}: expected {count} children, got {len(children)}")

    return children

def extract_param_names(params_node: Any, context: str="parameter list") -> List[str]:
    if params_node is None:
        return []

    if not is_tree(params_node) or tree_label(params_node) != 'paramlist':
        raise MallowRuntimeError(f"Malformed {context}")

    return [expect_name_token(p, context) for p in tree_children(params_node)]

def arg_nodes(args_node: Any) -> List[Any]:
    if args_node is None:
        return []

    if not is_tree(args_node) or tree_label(args_node) != 'args':
        raise MallowRuntimeError("Malformed argument list")

    return tree_children(args_node)

def token_int(token: Token) -> MlwInt:
    return MlwInt(int(token.value))

def token_float(token: Token) -> MlwFloat:
    return MlwFloat(float(token.value))

def token_string(token: Token) -> MlwString:
    return MlwString(str(token.value))

def token_bool(token: Token) -> MlwBool:
    match token_kind(token):
        case 'TRUE':
            return MlwBool(True)
        case 'FALSE':
            return MlwBool(False)
        case kind:
            raise MallowRuntimeError(f"Unexpected boolean token {kind}")
