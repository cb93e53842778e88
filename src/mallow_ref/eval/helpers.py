from __future__ import annotations

from ..runtime import (
    MlwArray,
    MlwBool,
    MlwFloat,
    MlwHash,
    MlwInt,
    MlwString,
    MlwUndef,
    MlwValue,
    MallowTypeError,
)

def is_truthy(val: MlwValue) -> bool:
    match val:
        case MlwBool(value=b):
            return b
        case MlwUndef():
            return False
        case MlwInt(value=num) | MlwFloat(value=num):
            return num != 0
        case MlwString(value=s):
            return s not in ("", "0")
        case MlwArray(items=items):
            return bool(items)
        case MlwHash(slots=slots):
            return bool(slots)
        case _:
            return True

def to_number(val: MlwValue) -> float:
    """Double-precision value of an int or float; anything else is a type error."""
    match val:
        case MlwInt(value=num):
            return float(num)
        case MlwFloat(value=num):
            return num
        case _:
            raise MallowTypeError(f"Expected a number; got {type(val).__name__}")
