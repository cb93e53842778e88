"""Shared helpers for working with the Lark Tree/Token nodes that make up a Mallow AST."""
from __future__ import annotations

from typing import Any, List, Optional, TypeGuard

from lark import Token, Tree
from typing_extensions import TypeAlias

Node: TypeAlias = Tree | Token


def is_tree(node: Any) -> TypeGuard[Tree]:
    return isinstance(node, Tree)

def is_token(node: Any) -> TypeGuard[Token]:
    return isinstance(node, Token)

def tree_label(node: Any) -> Optional[str]:
    return str(node.data) if is_tree(node) else None

def tree_children(node: Any) -> List[Any]:
    if not is_tree(node):
        return []

    children = getattr(node, "children", None)
    if children is None:
        return []

    return list(children)

def node_meta(node: Any) -> Optional[Any]:
    if not is_tree(node):
        return None

    # Tree.meta builds an empty Meta on first access; only report one a parser filled in
    meta = node.meta
    if getattr(meta, "empty", True):
        return None

    return meta

def token_value(node: Any) -> Optional[str]:
    if not is_token(node):
        return None

    return str(node.value)
