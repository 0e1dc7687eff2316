"""Shape Matcher: classifies a constructor's arguments against the refinement pattern.

The accepted shape is

    <parameter argument>*  (nm : V)  (prf : P nm)

where `nm` is explicit with unrestricted quantity and `prf` is explicit or
auto-implicit with quantity 0 or unrestricted. Anything else is a mismatch.

Invariants:
    - classify_arguments is PURE: one left-to-right pass, returns a shape or a Mismatch
    - A ShapeProof is only ever built from a successful classification and is never re-checked
    - Every ParamRef in the value type, predicate and parameter types is within the
      descriptor's parameter list, so extraction and synthesis downstream cannot fail
"""

from dataclasses import dataclass
from typing import Sequence, Union

from refinery.core.descriptor import (
    Constructor,
    ConstructorArgument,
    NamedArgument,
    ParamArgument,
    TypeDescriptor,
)
from refinery.core.domain_types import Explicitness, Multiplicity
from refinery.core.errors import (
    ErrorContext,
    NotSingleConstructorError,
    ShapeMismatchError,
)
from refinery.core.terms import App, Term, Var, param_refs


PROOF_EXPLICITNESS = frozenset({Explicitness.EXPLICIT, Explicitness.AUTO_IMPLICIT})
PROOF_MULTIPLICITY = frozenset({Multiplicity.ZERO, Multiplicity.UNRESTRICTED})


# ─── Classification result ───────────────────────────────────────

@dataclass(frozen=True)
class ValueProofShape:
    """The value/proof pair that ends a matching argument list."""
    value_name: str
    value_type: Term
    proof_name: str | None
    proof_info: Explicitness
    predicate: Term
    erased: bool


@dataclass(frozen=True)
class ParamShape:
    """A parameter argument, followed by the rest of a matching argument list."""
    index: int
    rest: "ArgShape"


@dataclass(frozen=True)
class Mismatch:
    reason: str


ArgShape = Union[ParamShape, ValueProofShape]


@dataclass(frozen=True)
class ShapeProof:
    """Certificate that `constructor` of `descriptor` has the refinement shape."""
    descriptor: TypeDescriptor
    constructor: Constructor
    shape: ArgShape


# ─── Classification ──────────────────────────────────────────────

def classify_arguments(
    args: Sequence[ConstructorArgument],
) -> ParamShape | ValueProofShape | Mismatch:
    """Classify a constructor argument list. Parameter arguments are skipped over."""
    if not args:
        return Mismatch("constructor has no value argument")
    head, rest = args[0], args[1:]
    if isinstance(head, ParamArgument):
        inner = classify_arguments(rest)
        if isinstance(inner, Mismatch):
            return inner
        return ParamShape(head.index, inner)
    return _classify_pair(head, rest)


def _classify_pair(
    value: NamedArgument, rest: Sequence[ConstructorArgument],
) -> ValueProofShape | Mismatch:
    error = _check_value_argument(value)
    if error:
        return error
    if not rest:
        return Mismatch(f"value argument '{value.name}' has no proof argument")
    proof, trailing = rest[0], rest[1:]
    if isinstance(proof, ParamArgument):
        return Mismatch(
            f"parameter argument follows value argument '{value.name}'"
        )
    if trailing:
        return Mismatch(
            f"expected exactly one proof argument, found "
            f"{len(trailing)} extra argument(s) after it"
        )
    error = _check_proof_argument(proof, value.name)
    if error:
        return error
    return ValueProofShape(
        value_name=value.name,
        value_type=value.type,
        proof_name=proof.name,
        proof_info=proof.explicitness,
        predicate=proof.type.fn,
        erased=proof.multiplicity is Multiplicity.ZERO,
    )


def _check_value_argument(value: NamedArgument) -> Mismatch | None:
    if value.explicitness is not Explicitness.EXPLICIT:
        return Mismatch(
            f"value argument must be explicit, got {value.explicitness.value}"
        )
    if value.multiplicity is not Multiplicity.UNRESTRICTED:
        return Mismatch(
            f"value argument must have unrestricted quantity, "
            f"got {value.multiplicity.value}"
        )
    if not value.name:
        return Mismatch("value argument must be named")
    return None


def _check_proof_argument(proof: NamedArgument, value_name: str) -> Mismatch | None:
    if proof.explicitness not in PROOF_EXPLICITNESS:
        return Mismatch(
            f"proof argument must be explicit or auto-implicit, "
            f"got {proof.explicitness.value}"
        )
    if proof.multiplicity not in PROOF_MULTIPLICITY:
        return Mismatch(
            f"proof argument quantity must be zero or unrestricted, "
            f"got {proof.multiplicity.value}"
        )
    applied = proof.type
    if not isinstance(applied, App) or applied.info is not Explicitness.EXPLICIT:
        return Mismatch(
            f"proof argument type must be a predicate applied to '{value_name}'"
        )
    if applied.arg != Var(value_name):
        return Mismatch(
            f"proof argument must apply its predicate to '{value_name}'"
        )
    return None


# ─── Entry point ─────────────────────────────────────────────────

def match_shape(descriptor: TypeDescriptor) -> ShapeProof:
    """Validate `descriptor` and return its ShapeProof, or raise a DerivationError."""
    location = str(descriptor.location) if descriptor.location else None
    if len(descriptor.constructors) != 1:
        raise NotSingleConstructorError(
            descriptor.name, len(descriptor.constructors),
            ErrorContext(location=location),
        )
    constructor = descriptor.constructors[0]
    context = ErrorContext(constructor_name=constructor.name, location=location)

    shape = classify_arguments(constructor.args)
    if isinstance(shape, Mismatch):
        raise ShapeMismatchError(descriptor.name, shape.reason, context)

    out_of_range = _out_of_range_params(shape, len(descriptor.params))
    for param in descriptor.params:
        out_of_range |= {
            i for i in param_refs(param.type)
            if not 0 <= i < len(descriptor.params)
        }
    if out_of_range:
        raise ShapeMismatchError(
            descriptor.name,
            f"constructor refers to parameter(s) {sorted(out_of_range)} but "
            f"{descriptor.name} has {len(descriptor.params)} parameter(s)",
            context,
        )
    return ShapeProof(descriptor, constructor, shape)


def _out_of_range_params(shape: ArgShape, count: int) -> set[int]:
    indices: set[int] = set()
    while isinstance(shape, ParamShape):
        indices.add(shape.index)
        shape = shape.rest
    indices |= param_refs(shape.value_type) | param_refs(shape.predicate)
    return {i for i in indices if not 0 <= i < count}
