from __future__ import annotations

import re
from typing import Any

from .types import (
    MlwValue,
    MlwUndef,
    MlwInt,
    MlwFloat,
    MlwString,
    MlwBool,
    MlwArray,
    MlwPair,
    MlwHash,
    MallowNotIncrementable,
)

_INCREMENTABLE = re.compile(r"([a-zA-Z]*)([0-9]*)")


def native_value(value: MlwValue) -> Any:
    """Plain Python form of a runtime value, for content comparisons."""
    match value:
        case MlwUndef():
            return None
        case MlwInt(value=v) | MlwFloat(value=v) | MlwString(value=v) | MlwBool(value=v):
            return v
        case MlwArray(items=items):
            return [native_value(item) for item in items]
        case MlwPair(key=k, value=v):
            return (native_value(k), native_value(v))
        case MlwHash(slots=slots):
            return {k: native_value(v) for k, v in slots.items()}
        case _:
            return value


def stringify(value: MlwValue) -> str:
    match value:
        case MlwString(value=s):
            return s
        case MlwInt(value=i):
            return str(i)
        case MlwFloat(value=f):
            return repr(f)
        case MlwBool(value=b):
            return "true" if b else "false"
        case MlwUndef():
            return ""
        case _:
            return repr(value)


def _increment_digits(digits: str) -> str:
    # fixed width; gains one digit on carry-out ("99" -> "100")
    number = int(digits) if digits else 0
    return str(number + 1).zfill(len(digits))


def _increment_letters(letters: str) -> str:
    out = []
    carry = True

    for ch in reversed(letters):
        if not carry:
            out.append(ch)
            continue

        match ch:
            case 'z':
                out.append('a')
            case 'Z':
                out.append('A')
            case _:
                out.append(chr(ord(ch) + 1))
                carry = False

    out.reverse()

    if carry:
        out.insert(0, out[0])

    return "".join(out)


def increment_string(text: str) -> str:
    """Perl-style magical increment of an `alpha* digit*` string.

    "az" -> "ba", "zz" -> "aaa", "a9" -> "b0", "zz99" -> "aaa00".
    """
    match = _INCREMENTABLE.fullmatch(text)
    if match is None:
        raise MallowNotIncrementable(text)

    letters, digits = match.groups()

    if not letters:
        return _increment_digits(digits)

    if not digits:
        return _increment_letters(letters)

    next_digits = _increment_digits(digits)
    if len(next_digits) == len(digits):
        return letters + next_digits

    return _increment_letters(letters) + next_digits[1:]
