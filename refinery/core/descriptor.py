"""Type Descriptors: the read-only description of a user data type handed in by the driver.

Invariants:
    - Descriptors are frozen: the engine reads them, never mutates them
    - Constructor argument order is the source declaration's order
    - ParamArgument.index and every ParamRef inside argument types index into TypeDescriptor.params
"""

from dataclasses import dataclass, field
from typing import Union

from refinery.core.domain_types import Explicitness, Multiplicity
from refinery.core.terms import Term, Var, apply


@dataclass(frozen=True)
class SourceLocation:
    file: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class TypeParameter:
    """A parameter of the type constructor, e.g. `n : Nat` in `UnitVector n`."""
    name: str
    type: Term


@dataclass(frozen=True)
class ParamArgument:
    """Constructor argument standing for one of the type's own parameters."""
    index: int


@dataclass(frozen=True)
class NamedArgument:
    """Ordinary constructor argument with its binder attributes and type."""
    name: str | None
    multiplicity: Multiplicity
    explicitness: Explicitness
    type: Term


ConstructorArgument = Union[ParamArgument, NamedArgument]


@dataclass(frozen=True)
class Constructor:
    name: str
    args: tuple[ConstructorArgument, ...] = ()


@dataclass(frozen=True)
class TypeDescriptor:
    """A named data declaration: parameters, constructors and where it was declared."""
    name: str
    params: tuple[TypeParameter, ...] = ()
    constructors: tuple[Constructor, ...] = ()
    location: SourceLocation | None = field(default=None, compare=False)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params)

    @property
    def applied_type(self) -> Term:
        """The type constructor applied to its parameters, e.g. `UnitVector n`."""
        return apply(Var(self.name), *(Var(n) for n in self.param_names))
