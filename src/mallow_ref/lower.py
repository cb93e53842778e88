from __future__ import annotations

import logging
from typing import List

from lark import Tree

from .nodes import DERIVED_CONDITIONALS, if_else, not_, undef_literal
from .tree import Node, is_tree, tree_children, tree_label

logger = logging.getLogger(__name__)


def lower(ast: Node) -> Node:
    """Lowering pass: rewrite every if/elsif/unless form into nested if_else."""
    return _lower_conditionals(ast)


def canonical_conditional(node: Tree) -> Tree:
    """Rewrite one derived conditional into if_else; anything else comes back unchanged.

    if (c) B                      -> if_else(c, B, undef)
    if (c) B elsif (c2) B2        -> if_else(c, B, if_else(c2, B2, undef))
    if (c) B elsif (c2) B2 else E -> if_else(c, B, if_else(c2, B2, E))
    unless (c) B                  -> if_else(not c, B, undef)
    unless (c) B else E           -> if_else(not c, B, E)
    """
    children = tree_children(node)

    match tree_label(node), children:
        case 'if', [cond, body]:
            lowered = if_else(cond, body, undef_literal())
        case 'if_elsif', [cond, body, elsif_cond, elsif_body]:
            lowered = if_else(cond, body, if_else(elsif_cond, elsif_body, undef_literal()))
        case 'if_elsif_else', [cond, body, elsif_cond, elsif_body, else_body]:
            lowered = if_else(cond, body, if_else(elsif_cond, elsif_body, else_body))
        case 'unless', [cond, body]:
            lowered = if_else(not_(cond), body, undef_literal())
        case 'unless_else', [cond, body, else_body]:
            lowered = if_else(not_(cond), body, else_body)
        case _:
            return node

    return Tree(lowered.data, lowered.children, node.meta)


def _lower_conditionals(node: Node) -> Node:
    if not is_tree(node):
        return node

    children = tree_children(node)
    lowered_children: List[Node] = [_lower_conditionals(child) for child in children]
    changed = any(new is not old for new, old in zip(lowered_children, children))

    candidate = Tree(node.data, lowered_children, node.meta) if changed else node

    if tree_label(candidate) in DERIVED_CONDITIONALS:
        logger.debug("lowering %s", tree_label(candidate))
        return canonical_conditional(candidate)

    return candidate
