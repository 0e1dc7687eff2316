"""Declaration Synthesis: builds `refine` and the literal conversions for a refinement type.

Generated shapes (names from the Vocabulary):

    refine : {0 p : T} -> (v : V) -> Maybe (R p)
    refine v = case decide P v of
      Yes prf => Just (MkR v prf)
      No _ => Nothing

    fromInteger : {0 p : T} -> (n : Integer) -> {auto 0 _ : IsJust (refine (fromInteger n))} -> R p
    fromInteger n = fromJust (refine (fromInteger n))

Invariants:
    - All functions are PURE: a ShapeProof in, a fresh GeneratedDeclaration out
    - Type parameters become erased implicit binders of every generated signature
    - Erased proofs bind no witness: the Yes pattern is `Yes _` and the proof slot is `_`
    - Auto-implicit proofs are still threaded explicitly, as `MkR v @{prf}`
    - Generated binder names never shadow the type's parameters or referenced names
"""

from dataclasses import dataclass

from refinery.core.domain_types import Explicitness, LiteralKind, Multiplicity, Visibility
from refinery.core.extract_terms import value_proof_pair, extract_terms
from refinery.core.match_shape import ShapeProof
from refinery.core.terms import (
    Alt,
    App,
    BindPattern,
    Binder,
    Case,
    ConPattern,
    Hole,
    Term,
    Var,
    WildPattern,
    apply,
    free_vars,
    fresh_name,
    pi_type,
    substitute_params,
)
from refinery.core.vocabulary import DEFAULT_VOCABULARY, Vocabulary


@dataclass(frozen=True)
class GeneratedDeclaration:
    """One top-level binding: `name : signature` and `name arguments = body`."""
    name: str
    signature: Term
    arguments: tuple[str, ...]
    body: Term
    visibility: Visibility = Visibility.PUBLIC_EXPORT
    namespace: str | None = None


def _parameter_binders(proof: ShapeProof) -> list[Binder]:
    names = proof.descriptor.param_names
    return [
        Binder(
            p.name, substitute_params(p.type, names),
            Multiplicity.ZERO, Explicitness.IMPLICIT,
        )
        for p in proof.descriptor.params
    ]


def _reserved_names(proof: ShapeProof, vocabulary: Vocabulary) -> set[str]:
    """Names a generated binder must not capture."""
    terms = extract_terms(proof)
    reserved = set(proof.descriptor.param_names)
    reserved |= {proof.descriptor.name, proof.constructor.name}
    reserved |= free_vars(terms.value_type) | free_vars(terms.predicate)
    reserved |= {vocabulary.refine_name, vocabulary.decide}
    return reserved


def refine_declaration(
    proof: ShapeProof,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    visibility: Visibility = Visibility.PUBLIC_EXPORT,
) -> GeneratedDeclaration:
    """The total runtime check `refine : V -> Maybe R`."""
    terms = extract_terms(proof)
    descriptor = proof.descriptor
    reserved = _reserved_names(proof, vocabulary)
    raw = fresh_name(vocabulary.raw_name, reserved)
    witness = fresh_name(vocabulary.witness_name, reserved | {raw})

    signature = pi_type(
        _parameter_binders(proof) + [Binder(raw, terms.value_type)],
        App(Var(vocabulary.maybe_type), descriptor.applied_type),
    )

    if terms.erased:
        yes_pattern = ConPattern(vocabulary.yes, (WildPattern(),))
        proof_slot: Term = Hole()
    else:
        yes_pattern = ConPattern(vocabulary.yes, (BindPattern(witness),))
        proof_slot = Var(witness)
    constructed = App(
        App(Var(proof.constructor.name), Var(raw)),
        proof_slot,
        value_proof_pair(proof.shape).proof_info,
    )

    body = Case(
        apply(Var(vocabulary.decide), terms.predicate, Var(raw)),
        (
            Alt(yes_pattern, App(Var(vocabulary.just), constructed)),
            Alt(
                ConPattern(vocabulary.no, (WildPattern(),)),
                Var(vocabulary.nothing),
            ),
        ),
    )
    return GeneratedDeclaration(
        name=vocabulary.refine_name,
        signature=signature,
        arguments=(raw,),
        body=body,
        visibility=visibility,
        namespace=descriptor.name,
    )


def literal_declaration(
    proof: ShapeProof,
    kind: LiteralKind,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    visibility: Visibility = Visibility.PUBLIC_EXPORT,
) -> GeneratedDeclaration:
    """Literal conversion guarded by an `IsJust (refine ...)` auto obligation."""
    conversion = vocabulary.literal(kind)
    reserved = _reserved_names(proof, vocabulary) | {conversion.function, conversion.literal_type}
    literal = fresh_name(vocabulary.literal_name, reserved)

    refined = App(
        Var(vocabulary.refine_name), App(Var(conversion.function), Var(literal)),
    )
    obligation = Binder(
        None, App(Var(vocabulary.is_just), refined),
        Multiplicity.ZERO, Explicitness.AUTO_IMPLICIT,
    )
    signature = pi_type(
        _parameter_binders(proof)
        + [Binder(literal, Var(conversion.literal_type)), obligation],
        proof.descriptor.applied_type,
    )
    return GeneratedDeclaration(
        name=conversion.function,
        signature=signature,
        arguments=(literal,),
        body=App(Var(vocabulary.from_just), refined),
        visibility=visibility,
        namespace=proof.descriptor.name,
    )
