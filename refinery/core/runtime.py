"""Runtime Values: the Python side of the decision-procedure and option contracts.

Invariants:
    - A decision procedure returns exactly one of Yes(witness) or No(); nothing else
    - Just/NOTHING are the only option values generated `refine` functions produce
    - from_just never returns on NOTHING: it raises LiteralRejectedError
"""

from dataclasses import dataclass
from typing import Any, Protocol

from refinery.core.errors import LiteralRejectedError


@dataclass(frozen=True)
class Yes:
    """The predicate holds; `witness` is its evidence (None when erased)."""
    witness: Any = None


@dataclass(frozen=True)
class No:
    """The predicate does not hold."""
    contra: Any = None


Decision = Yes | No


class DecisionProcedure(Protocol):
    """Two-outcome contract: decide whether `predicate` holds for `value`."""
    def __call__(self, predicate: Any, value: Any) -> Decision: ...


@dataclass(frozen=True)
class Just:
    value: Any


@dataclass(frozen=True)
class Nothing:
    pass


NOTHING = Nothing()


def from_just(option: Just | Nothing) -> Any:
    """Unwrap a Just. The checked failure path of literal conversions."""
    if isinstance(option, Just):
        return option.value
    raise LiteralRejectedError(
        "literal does not satisfy the refinement predicate",
    )
