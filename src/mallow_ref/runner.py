from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from lark import Token, Tree

from .evaluator import evaluate
from .lower import lower
from .runtime import MallowRuntimeError, MlwValue, make_root_env
from .tree import Node

logger = logging.getLogger(__name__)

RECURSION_LIMIT_VAR = "MALLOW_RECURSION_LIMIT"

class AstFormatError(ValueError):
    pass

def ast_from_json(data: Any) -> Optional[Node]:
    """Rebuild a node from its JSON form.

    {"node": label, "children": [...]} is a Tree, {"token": TYPE, "value": text}
    is a Token, null is None (e.g. a class declaration without a superclass).
    """
    if data is None:
        return None

    if not isinstance(data, dict):
        raise AstFormatError(f"Expected an object, got {type(data).__name__}")

    if "node" in data:
        children = data.get("children", [])
        if not isinstance(children, list):
            raise AstFormatError(f"children of {data['node']!r} must be a list")
        return Tree(str(data["node"]), [ast_from_json(ch) for ch in children])

    if "token" in data:
        return Token(str(data["token"]), str(data.get("value", "")))

    raise AstFormatError(f"Unrecognized AST entry with keys {sorted(data)}")

def recursion_limit_from_env(default: Optional[int]=None) -> Optional[int]:
    raw = os.getenv(RECURSION_LIMIT_VAR)
    if raw is None:
        return default

    raw = raw.strip()
    if raw.lower() in {"", "default"}:
        return None

    try:
        value = int(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not an integer", RECURSION_LIMIT_VAR, raw)
        return default

    return value if value > 0 else default

def run(src: str, use_lowering: bool=False) -> MlwValue:
    try:
        ast = ast_from_json(json.loads(src))
    except json.JSONDecodeError as exc:
        raise AstFormatError(f"Invalid JSON: {exc}") from exc

    if ast is None:
        raise AstFormatError("Empty program")

    if use_lowering:
        ast = lower(ast)

    limit = recursion_limit_from_env()
    if limit is not None and limit > sys.getrecursionlimit():
        logger.debug("raising recursion limit to %d", limit)
        sys.setrecursionlimit(limit)

    return evaluate(make_root_env(), ast)

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal JSON.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    try:
        is_file = candidate.is_file()
    except (OSError, ValueError):
        # inline JSON longer than the platform allows for a path
        is_file = False

    if is_file:
        return candidate.read_text(encoding="utf-8")

    return arg

def main(argv: Optional[list[str]]=None) -> int:
    use_lowering = False
    verbose = False
    arg = None

    for token in (sys.argv[1:] if argv is None else argv):
        if token == "--lower":
            use_lowering = True
            continue

        if token in ("-v", "--verbose"):
            verbose = True
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, stream=sys.stderr)

    source = _load_source(arg or "-")

    try:
        result = run(source, use_lowering=use_lowering)
    except (MallowRuntimeError, AstFormatError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(result)
    return 0

if __name__ == "__main__":
    sys.exit(main())
