"""Term Extraction: projections from a ShapeProof to the terms the synthesizer needs.

Invariants:
    - All functions are PURE and total over any ShapeProof produced by match_shape
    - Extracted terms are self-contained: ParamRefs are replaced by the type's parameter names
"""

from dataclasses import dataclass

from refinery.core.match_shape import ArgShape, ParamShape, ShapeProof, ValueProofShape
from refinery.core.terms import Term, substitute_params


@dataclass(frozen=True)
class ExtractedTerms:
    value_type: Term
    predicate: Term
    erased: bool


def value_proof_pair(shape: ArgShape) -> ValueProofShape:
    if isinstance(shape, ParamShape):
        return value_proof_pair(shape.rest)
    return shape


def value_type(proof: ShapeProof) -> Term:
    """Type of the raw value, e.g. `Vect n Double`."""
    return substitute_params(
        value_proof_pair(proof.shape).value_type, proof.descriptor.param_names,
    )


def predicate(proof: ShapeProof) -> Term:
    """The proof's predicate with its application to the value stripped off."""
    return substitute_params(
        value_proof_pair(proof.shape).predicate, proof.descriptor.param_names,
    )


def is_erased(proof: ShapeProof) -> bool:
    """True when the proof argument has quantity zero."""
    return value_proof_pair(proof.shape).erased


def extract_terms(proof: ShapeProof) -> ExtractedTerms:
    return ExtractedTerms(
        value_type=value_type(proof),
        predicate=predicate(proof),
        erased=is_erased(proof),
    )
