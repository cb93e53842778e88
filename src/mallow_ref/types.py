from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from typing_extensions import TypeAlias, TypeGuard

from .tree import Node

# ---------- Value Model ----------

@dataclass
class MlwUndef:
    def __repr__(self) -> str:
        return "undef"

@dataclass
class MlwInt:
    value: int
    def __repr__(self) -> str:
        return str(self.value)

@dataclass
class MlwFloat:
    value: float
    def __repr__(self) -> str:
        return repr(self.value)

@dataclass
class MlwString:
    value: str
    def __repr__(self) -> str:
        return f'"{self.value}"'

@dataclass
class MlwBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

@dataclass
class MlwArray:
    items: List['MlwValue']
    def __repr__(self) -> str:
        return "[" + ", ".join(repr(x) for x in self.items) + "]"

@dataclass
class MlwPair:
    key: 'MlwValue'
    value: 'MlwValue'
    def __repr__(self) -> str:
        return f"{self.key!r} => {self.value!r}"

@dataclass
class MlwHash:
    slots: Dict[str, 'MlwValue']
    def __repr__(self) -> str:
        pairs = []

        for k, v in self.slots.items():
            pairs.append(f"{k} => {repr(v)}")

        return "{ " + ", ".join(pairs) + " }"

@dataclass
class MlwClass:
    """Placeholder class object: only what `class`/`super` literals need."""
    name: str
    superclass: Optional['MlwClass'] = None
    def __repr__(self) -> str:
        return f"<class {self.name}>"

@dataclass(eq=False)
class MlwSubroutine:
    name: str
    params: List[str]
    body: Node
    closure: 'Environment'
    def __repr__(self) -> str:
        param_desc = ", ".join(self.params) if self.params else "nullary"
        return f"<sub {self.name} params={param_desc}>"

MlwValue: TypeAlias = (
    MlwUndef
    | MlwInt
    | MlwFloat
    | MlwString
    | MlwBool
    | MlwArray
    | MlwPair
    | MlwHash
    | MlwClass
    | MlwSubroutine
)

MlwNumber: TypeAlias = MlwInt | MlwFloat

# ---------- Packages ----------

class MlwPackage:
    def __init__(self, name: str, env: 'Environment'):
        self.name = name
        self.env = env
        self.subroutines: Dict[str, MlwSubroutine] = {}
        self.subpackages: List[MlwPackage] = []

    def add_subpackage(self, pkg: MlwPackage) -> None:
        self.subpackages.append(pkg)

    def add_subroutine(self, sub: MlwSubroutine) -> None:
        self.subroutines[sub.name] = sub

    def get_subroutine(self, name: str) -> Optional[MlwSubroutine]:
        return self.subroutines.get(name)

    def has_subroutine(self, name: str) -> bool:
        return name in self.subroutines

    def __repr__(self) -> str:
        return f"<package {self.name}>"

ROOT_PACKAGE_NAME = "main"

# ---------- Environment ----------

class Environment:
    def __init__(self, parent: Optional['Environment']=None):
        self.parent = parent
        self.vars: Dict[str, MlwValue] = {}
        self._invocant: Optional[MlwValue] = None
        self._class: Optional[MlwClass] = None
        self._package: Optional[MlwPackage] = None

    @classmethod
    def root(cls) -> 'Environment':
        """Fresh top-level scope owning its own `main` package."""
        env = cls()
        env.current_package = MlwPackage(ROOT_PACKAGE_NAME, env)
        return env

    def chain(self) -> Iterator['Environment']:
        cur: Optional[Environment] = self

        while cur is not None:
            yield cur
            cur = cur.parent

    def _owner(self, name: str) -> Optional['Environment']:
        for scope in self.chain():
            if name in scope.vars:
                return scope

        return None

    def create(self, name: str, val: MlwValue) -> None:
        self.vars[name] = val

    def get(self, name: str) -> MlwValue:
        owner = self._owner(name)
        if owner is None:
            raise MallowVariableNotFound(name)

        return owner.vars[name]

    def set(self, name: str, val: MlwValue) -> None:
        owner = self._owner(name)
        if owner is None:
            raise MallowVariableNotFound(name)

        owner.vars[name] = val

    def has(self, name: str) -> bool:
        return self._owner(name) is not None

    @property
    def current_invocant(self) -> Optional[MlwValue]:
        for scope in self.chain():
            if scope._invocant is not None:
                return scope._invocant

        return None

    @current_invocant.setter
    def current_invocant(self, val: Optional[MlwValue]) -> None:
        self._invocant = val

    @property
    def current_class(self) -> Optional[MlwClass]:
        for scope in self.chain():
            if scope._class is not None:
                return scope._class

        return None

    @current_class.setter
    def current_class(self, klass: Optional[MlwClass]) -> None:
        self._class = klass

    @property
    def current_package(self) -> Optional[MlwPackage]:
        for scope in self.chain():
            if scope._package is not None:
                return scope._package

        return None

    @current_package.setter
    def current_package(self, pkg: Optional[MlwPackage]) -> None:
        self._package = pkg

# ---------- Exceptions ----------

class MallowRuntimeError(Exception):
    mlw_meta: Optional[object]

    def __init__(self, message: str):
        super().__init__(message)
        self.mlw_meta = None

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        msg = super().__str__()

        meta = getattr(self, "mlw_meta", None)
        if meta is None:
            return msg

        line = getattr(meta, "line", None)
        col = getattr(meta, "column", None)

        if line is None:
            return msg

        if col is None:
            return f"{msg} (line {line})"

        return f"{msg} (line {line}, col {col})"

class MallowTypeError(MallowRuntimeError):
    pass

class MallowArityError(MallowTypeError):
    pass

class MallowUnknownNode(MallowRuntimeError):
    def __init__(self, label: str):
        super().__init__(f"Unknown node: {label}")
        self.label = label

class MallowVariableNotFound(MallowRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Variable '{name}' not found")
        self.name = name

class MallowSubroutineNotFound(MallowRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Subroutine '{name}' not found")
        self.name = name

class MallowSuperclassNotFound(MallowRuntimeError):
    def __init__(self, class_name: Optional[str]):
        if class_name is None:
            super().__init__("No current class to take a superclass of")
        else:
            super().__init__(f"Class '{class_name}' has no superclass")
        self.class_name = class_name

class MallowNotImplemented(MallowRuntimeError):
    def __init__(self, feature: str):
        super().__init__(f"{feature} is not implemented")
        self.feature = feature

class MallowNotIncrementable(MallowRuntimeError):
    def __init__(self, text: str):
        super().__init__(f"String {text!r} is not incrementable")
        self.text = text

def is_number(value: object) -> TypeGuard[MlwNumber]:
    return isinstance(value, (MlwInt, MlwFloat))
