"""Generic pre-order traversal over Mallow AST nodes.

Unlike the evaluator the walker is not a closed-world authority: a shape it
does not know is treated as a leaf. A callback that returns `False` prunes the
node's children from the walk.
"""
from __future__ import annotations

from typing import Any, Callable, List, Optional

from .tree import Node, is_tree, tree_children, tree_label

WalkCallback = Callable[[Node], Optional[bool]]

# node shapes whose child nodes are walked; literals and variable/class/attribute
# access are leaves
_BRANCHES = frozenset({
    'compilation_unit',
    'scope',
    'statements',
    'array_literal',
    'pair_literal',
    'hash_literal',
    'increment',
    'decrement',
    'not',
    'and',
    'or',
    'less_than',
    'greater_than',
    'variable_assignment',
    'variable_declaration',
    'array_element_access',
    'hash_element_access',
    'attribute_assignment',
    'attribute_declaration',
    'class_declaration',
    'constructor_declaration',
    'destructor_declaration',
    'method_declaration',
    'package_declaration',
    'subroutine_declaration',
    'method_call',
    'subroutine_call',
    'if',
    'if_else',
    'if_elsif',
    'if_elsif_else',
    'unless',
    'unless_else',
    'while',
    'do_while',
    'foreach',
    'for',
    'try',
    'catch',
    'finally',
})

# grouping trees built around argument, parameter, catch and finally lists;
# walked through but never handed to the callback
_WRAPPERS = frozenset({'args', 'paramlist', 'catches', 'finallies'})

def _children_in_order(node: Any) -> List[Any]:
    children = tree_children(node)

    match tree_label(node), children:
        case 'do_while', [cond, body]:
            # body runs before the first condition check
            return [body, cond]
        case _:
            return children

def walk(node: Node, callback: WalkCallback) -> None:
    """Call `callback` on `node` and then on every sub-node, depth first, pre-order."""
    if not is_tree(node):
        return

    label = tree_label(node)

    if label in _WRAPPERS:
        for child in tree_children(node):
            walk(child, callback)
        return

    if callback(node) is False or label not in _BRANCHES:
        return

    for child in _children_in_order(node):
        walk(child, callback)
