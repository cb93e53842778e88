from __future__ import annotations

import logging
from typing import Callable

from lark import Tree

from ..hygiene import validate_closure_hygiene
from ..runtime import (
    Environment,
    MlwPackage,
    MlwSubroutine,
    MlwValue,
    MallowRuntimeError,
    MallowSubroutineNotFound,
    call_subroutine,
)
from ..tree import Node
from .common import arg_nodes, expect_children, expect_name_token, extract_param_names

logger = logging.getLogger(__name__)

EvalFunc = Callable[[Node, Environment], MlwValue]

def _enclosing_package(env: Environment) -> MlwPackage:
    pkg = env.current_package
    if pkg is None:
        raise MallowRuntimeError("No current package; evaluate from a root environment")

    return pkg

def eval_package_declaration(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    name_tok, body = expect_children(n, 2)
    name = expect_name_token(name_tok, "Package name")
    parent = _enclosing_package(env)

    pkg_env = Environment(parent=env)
    pkg = MlwPackage(name, pkg_env)
    parent.add_subpackage(pkg)
    pkg_env.current_package = pkg
    logger.debug("declared package %s under %s", name, parent.name)

    return eval_func(body, pkg_env)

def eval_subroutine_declaration(n: Tree, env: Environment) -> MlwSubroutine:
    name_tok, params_node, body = expect_children(n, 3)
    name = expect_name_token(name_tok, "Subroutine name")
    params = extract_param_names(params_node, context="subroutine declaration")

    validate_closure_hygiene(env, params, body)

    sub = MlwSubroutine(name=name, params=params, body=body, closure=Environment(parent=env))
    pkg = _enclosing_package(env)

    if pkg.has_subroutine(name):
        logger.debug("redefining sub %s in package %s", name, pkg.name)

    pkg.add_subroutine(sub)

    return sub

def eval_subroutine_call(n: Tree, env: Environment, eval_func: EvalFunc) -> MlwValue:
    name_tok, args_node = expect_children(n, 2)
    name = expect_name_token(name_tok, "Subroutine name")

    # current package only; no search through enclosing packages
    sub = _enclosing_package(env).get_subroutine(name)
    if sub is None:
        raise MallowSubroutineNotFound(name)

    args = [eval_func(a, env) for a in arg_nodes(args_node)]

    return call_subroutine(sub, args)
