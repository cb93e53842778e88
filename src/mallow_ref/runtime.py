from __future__ import annotations

import logging
from typing import Callable, Dict, List

from .types import (
    MlwUndef, MlwInt, MlwFloat, MlwString, MlwBool, MlwArray, MlwPair, MlwHash,
    MlwClass, MlwSubroutine, MlwPackage, MlwValue, MlwNumber, Environment,
    MallowRuntimeError, MallowTypeError, MallowArityError, MallowUnknownNode,
    MallowVariableNotFound, MallowSubroutineNotFound, MallowSuperclassNotFound,
    MallowNotImplemented, MallowNotIncrementable,
    ROOT_PACKAGE_NAME, is_number,
)

logger = logging.getLogger(__name__)
logging.getLogger("mallow_ref").addHandler(logging.NullHandler())

OperatorFn = Callable[[MlwNumber, MlwNumber], MlwNumber]

class Builtins:
    number_operators: Dict[str, OperatorFn] = {}

def make_root_env() -> Environment:
    return Environment.root()

def register_operator(name: str):
    def dec(fn: OperatorFn):
        Builtins.number_operators[name] = fn
        return fn

    return dec

def _promote(lhs: MlwNumber, rhs: MlwNumber, op: Callable) -> MlwNumber:
    """int op int stays int; a float on either side computes on doubles."""
    if isinstance(lhs, MlwInt) and isinstance(rhs, MlwInt):
        return MlwInt(op(lhs.value, rhs.value))

    return MlwFloat(op(float(lhs.value), float(rhs.value)))

@register_operator("+")
def _number_add(lhs: MlwNumber, rhs: MlwNumber) -> MlwNumber:
    return _promote(lhs, rhs, lambda a, b: a + b)

@register_operator("-")
def _number_sub(lhs: MlwNumber, rhs: MlwNumber) -> MlwNumber:
    return _promote(lhs, rhs, lambda a, b: a - b)

@register_operator("*")
def _number_mul(lhs: MlwNumber, rhs: MlwNumber) -> MlwNumber:
    return _promote(lhs, rhs, lambda a, b: a * b)

def is_operator_name(name: str) -> bool:
    return name in Builtins.number_operators

def call_operator(recv: MlwValue, name: str, args: List[MlwValue]) -> MlwValue:
    handler = Builtins.number_operators.get(name)
    if handler is None:
        raise MallowNotImplemented(f"method call '{name}'")

    if len(args) != 1:
        raise MallowArityError(f"Operator '{name}' expects 1 argument; got {len(args)}")

    rhs = args[0]
    if not is_number(recv) or not is_number(rhs):
        raise MallowTypeError(
            f"Operator '{name}' expects numbers; got {type(recv).__name__} and {type(rhs).__name__}"
        )

    return handler(recv, rhs)

def call_subroutine(sub: MlwSubroutine, args: List[MlwValue]) -> MlwValue:
    """Run `sub` in a fresh child of its closure with parameters bound positionally."""
    from .evaluator import eval_node  # local import to avoid cycle

    if len(args) != len(sub.params):
        raise MallowArityError(f"Subroutine '{sub.name}' expects {len(sub.params)} args; got {len(args)}")

    callee_env = Environment(parent=sub.closure)

    for name, val in zip(sub.params, args):
        callee_env.create(name, val)

    logger.debug("calling sub %s with %d args", sub.name, len(args))

    return eval_node(sub.body, callee_env)
