from __future__ import annotations

from typing import Iterable, Optional, Set

from .eval.common import expect_children, expect_name_token, extract_param_names
from .runtime import Environment, MallowVariableNotFound
from .tree import Node, tree_label
from .walker import walk


def validate_closure_hygiene(env: Environment, params: Iterable[str], body: Node) -> None:
    """Reject a subroutine body that reads a variable its closure cannot see yet.

    A read is fine if the name is a parameter, was declared earlier in the
    body (walk order), or is already bound somewhere in `env`. Anything else
    would only resolve through a binding made after the declaration.

    A nested subroutine is checked on its own, with its parameters added to
    what is declared at that point; neither its parameters nor its
    declarations count for the rest of the enclosing body.
    """
    declared: Set[str] = set(params)

    def check(node: Node) -> Optional[bool]:
        match tree_label(node):
            case 'variable_declaration':
                name_tok, _ = expect_children(node, 2)
                declared.add(expect_name_token(name_tok, "Variable name"))
            case 'subroutine_declaration':
                _, params_node, nested_body = expect_children(node, 3)
                nested_params = extract_param_names(params_node, context="subroutine declaration")
                validate_closure_hygiene(env, declared | set(nested_params), nested_body)
                return False
            case 'variable_access':
                (name_tok,) = expect_children(node, 1)
                name = expect_name_token(name_tok, "Variable name")
                if name not in declared and not env.has(name):
                    raise MallowVariableNotFound(name)

        return None

    walk(body, check)
