"""Term Extraction: tests for value type, predicate and erasure projections."""

from refinery.core.domain_types import Multiplicity
from refinery.core.descriptor import ParamArgument, TypeParameter
from refinery.core.extract_terms import (
    ExtractedTerms,
    extract_terms,
    is_erased,
    predicate,
    value_type,
)
from refinery.core.match_shape import match_shape
from refinery.core.terms import App, Lit, ParamRef, Var, apply
from tests.samples import named, percent, single, unit_vector


def test_unit_vector_value_type_substitutes_parameter_name():
    proof = match_shape(unit_vector())
    assert value_type(proof) == apply(Var("Vect"), Var("n"), Var("Double"))


def test_unit_vector_predicate_is_bare_predicate():
    assert predicate(match_shape(unit_vector())) == Var("IsUnitVector")


def test_unit_vector_proof_is_not_erased():
    assert is_erased(match_shape(unit_vector())) is False


def test_zero_quantity_proof_is_erased():
    proof = match_shape(unit_vector(proof_multiplicity=Multiplicity.ZERO))
    assert is_erased(proof) is True


def test_partially_applied_predicate_keeps_its_arguments():
    assert predicate(match_shape(percent())) == apply(Var("FromTo"), Lit(0), Lit(100))


def test_predicate_parameter_references_are_substituted():
    proof = match_shape(
        single(
            "Below",
            ParamArgument(0),
            named("value", Var("Nat")),
            named("prf", App(App(Var("GT"), ParamRef(0)), Var("value"))),
            params=(TypeParameter("bound", Var("Nat")),),
        )
    )
    assert predicate(proof) == App(Var("GT"), Var("bound"))


def test_extraction_is_idempotent():
    proof = match_shape(unit_vector())
    assert value_type(proof) == value_type(proof)
    assert predicate(proof) == predicate(proof)
    assert is_erased(proof) == is_erased(proof)
    assert extract_terms(proof) == extract_terms(proof)


def test_extract_terms_bundles_projections():
    proof = match_shape(percent())
    assert extract_terms(proof) == ExtractedTerms(
        value_type=Var("Double"),
        predicate=apply(Var("FromTo"), Lit(0), Lit(100)),
        erased=True,
    )
