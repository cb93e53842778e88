"""Constructors for every Mallow AST node.

An external parser may build the same `Tree`/`Token` shapes directly; these
helpers exist so hosts and tests can assemble programs without one.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from lark import Token, Tree

from .tree import Node

PREFIX = "prefix"
POSTFIX = "postfix"

# labels the evaluator turns into MallowNotImplemented
PLACEHOLDER_LABELS = frozenset({
    'class_access',
    'class_declaration',
    'constructor_declaration',
    'destructor_declaration',
    'method_declaration',
    'attribute_access',
    'attribute_assignment',
    'attribute_declaration',
    'try',
    'catch',
    'finally',
})

DERIVED_CONDITIONALS = frozenset({'if', 'if_elsif', 'if_elsif_else', 'unless', 'unless_else'})

def name(text: str) -> Token:
    return Token('NAME', text)

def _names(names: Iterable[str]) -> list:
    return [name(n) for n in names]

# ---------------- containers ----------------

def compilation_unit(body: Node) -> Tree:
    return Tree('compilation_unit', [body])

def scope(body: Node) -> Tree:
    return Tree('scope', [body])

def statements(*nodes: Node) -> Tree:
    return Tree('statements', list(nodes))

# ---------------- literals ----------------

def int_literal(value: int) -> Tree:
    return Tree('int_literal', [Token('INT', str(value))])

def float_literal(value: float) -> Tree:
    return Tree('float_literal', [Token('FLOAT', repr(float(value)))])

def string_literal(value: str) -> Tree:
    return Tree('string_literal', [Token('STRING', value)])

def bool_literal(value: bool) -> Tree:
    tok = Token('TRUE', 'true') if value else Token('FALSE', 'false')
    return Tree('bool_literal', [tok])

def undef_literal() -> Tree:
    return Tree('undef_literal', [])

def self_literal() -> Tree:
    return Tree('self_literal', [])

def class_literal() -> Tree:
    return Tree('class_literal', [])

def super_literal() -> Tree:
    return Tree('super_literal', [])

def array_literal(*values: Node) -> Tree:
    return Tree('array_literal', list(values))

def pair_literal(key: Node, value: Node) -> Tree:
    return Tree('pair_literal', [key, value])

def hash_literal(*pairs: Node) -> Tree:
    return Tree('hash_literal', list(pairs))

# ---------------- operators ----------------

def increment(receiver: Node, fixity: str=PREFIX) -> Tree:
    return Tree('increment', [receiver, Token('FIXITY', fixity)])

def decrement(receiver: Node, fixity: str=PREFIX) -> Tree:
    return Tree('decrement', [receiver, Token('FIXITY', fixity)])

def not_(receiver: Node) -> Tree:
    return Tree('not', [receiver])

def and_(lhs: Node, rhs: Node) -> Tree:
    return Tree('and', [lhs, rhs])

def or_(lhs: Node, rhs: Node) -> Tree:
    return Tree('or', [lhs, rhs])

def less_than(lhs: Node, rhs: Node) -> Tree:
    return Tree('less_than', [lhs, rhs])

def greater_than(lhs: Node, rhs: Node) -> Tree:
    return Tree('greater_than', [lhs, rhs])

# ---------------- bindings ----------------

def variable_access(var: str) -> Tree:
    return Tree('variable_access', [name(var)])

def variable_assignment(var: str, expr: Node) -> Tree:
    return Tree('variable_assignment', [name(var), expr])

def variable_declaration(var: str, expr: Optional[Node]=None) -> Tree:
    return Tree('variable_declaration', [name(var), expr if expr is not None else undef_literal()])

def array_element_access(var: str, index: Node) -> Tree:
    return Tree('array_element_access', [name(var), index])

def hash_element_access(var: str, key: Node) -> Tree:
    return Tree('hash_element_access', [name(var), key])

def class_access(cls: str) -> Tree:
    return Tree('class_access', [name(cls)])

def attribute_access(attr: str) -> Tree:
    return Tree('attribute_access', [name(attr)])

def attribute_assignment(attr: str, expr: Node) -> Tree:
    return Tree('attribute_assignment', [name(attr), expr])

def attribute_declaration(attr: str, expr: Node) -> Tree:
    return Tree('attribute_declaration', [name(attr), expr])

# ---------------- declarations ----------------

def paramlist(params: Sequence[str]) -> Tree:
    return Tree('paramlist', _names(params))

def args(*exprs: Node) -> Tree:
    return Tree('args', list(exprs))

def class_declaration(cls: str, superclass: Optional[str], body: Node) -> Tree:
    return Tree('class_declaration', [name(cls), name(superclass) if superclass else None, body])

def constructor_declaration(params: Sequence[str], body: Node) -> Tree:
    return Tree('constructor_declaration', [paramlist(params), body])

def destructor_declaration(params: Sequence[str], body: Node) -> Tree:
    return Tree('destructor_declaration', [paramlist(params), body])

def method_declaration(method: str, params: Sequence[str], body: Node) -> Tree:
    return Tree('method_declaration', [name(method), paramlist(params), body])

def package_declaration(pkg: str, body: Node) -> Tree:
    return Tree('package_declaration', [name(pkg), body])

def subroutine_declaration(sub: str, params: Sequence[str], body: Node) -> Tree:
    return Tree('subroutine_declaration', [name(sub), paramlist(params), body])

# ---------------- calls ----------------

def method_call(invocant: Node, method: str, arguments: Sequence[Node]=()) -> Tree:
    return Tree('method_call', [invocant, name(method), args(*arguments)])

def subroutine_call(sub: str, arguments: Sequence[Node]=()) -> Tree:
    return Tree('subroutine_call', [name(sub), args(*arguments)])

# ---------------- control flow ----------------

def if_(cond: Node, body: Node) -> Tree:
    return Tree('if', [cond, body])

def if_else(cond: Node, body: Node, else_body: Node) -> Tree:
    return Tree('if_else', [cond, body, else_body])

def if_elsif(cond: Node, body: Node, elsif_cond: Node, elsif_body: Node) -> Tree:
    return Tree('if_elsif', [cond, body, elsif_cond, elsif_body])

def if_elsif_else(cond: Node, body: Node, elsif_cond: Node, elsif_body: Node, else_body: Node) -> Tree:
    return Tree('if_elsif_else', [cond, body, elsif_cond, elsif_body, else_body])

def unless(cond: Node, body: Node) -> Tree:
    return Tree('unless', [cond, body])

def unless_else(cond: Node, body: Node, else_body: Node) -> Tree:
    return Tree('unless_else', [cond, body, else_body])

def while_(cond: Node, body: Node) -> Tree:
    return Tree('while', [cond, body])

def do_while(cond: Node, body: Node) -> Tree:
    return Tree('do_while', [cond, body])

def foreach(topic: Node, items: Node, body: Node) -> Tree:
    return Tree('foreach', [topic, items, body])

def for_(init: Node, cond: Node, update: Node, body: Node) -> Tree:
    return Tree('for', [init, cond, update, body])

def try_(body: Node, catches: Sequence[Node]=(), finallies: Sequence[Node]=()) -> Tree:
    return Tree('try', [body, Tree('catches', list(catches)), Tree('finallies', list(finallies))])

def catch(type_name: str, local_name: str, body: Node) -> Tree:
    return Tree('catch', [name(type_name), name(local_name), body])

def finally_(body: Node) -> Tree:
    return Tree('finally', [body])
