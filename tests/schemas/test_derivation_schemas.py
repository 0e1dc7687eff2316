"""Derivation Schemas: tests for JSON parsing and conversion to core descriptors.

Tests cover:
    - Tagged term and argument unions resolve by `kind`
    - to_core() reproduces the hand-built sample descriptors exactly
    - Literal values keep their JSON type
    - Malformed payloads are rejected by validation
"""

import pytest
from pydantic import ValidationError

from refinery.core.domain_types import Strategy, Visibility
from refinery.core.terms import App, Hole, Lit, Pi, Var
from refinery.schemas.derivation import (
    DeriveRequest,
    DescriptorSchema,
    LitTerm,
    PiTerm,
)
from tests.payloads import percent_descriptor, unit_vector_descriptor
from tests.samples import UNIT_VECTOR_LOCATION, percent, unit_vector


def test_unit_vector_payload_converts_to_core_descriptor():
    descriptor = DescriptorSchema.model_validate(unit_vector_descriptor()).to_core()
    assert descriptor == unit_vector()
    assert descriptor.location == UNIT_VECTOR_LOCATION


def test_percent_payload_converts_to_core_descriptor():
    descriptor = DescriptorSchema.model_validate(percent_descriptor()).to_core()
    assert descriptor == percent()
    assert descriptor.location is None


@pytest.mark.parametrize("value", [3, 2.5, "abc"])
def test_literal_keeps_json_type(value):
    term = LitTerm.model_validate({"value": value}).to_core()
    assert term == Lit(value)
    assert type(term.value) is type(value)


def test_pi_and_hole_terms():
    schema = PiTerm.model_validate({
        "name": "x",
        "arg_type": {"kind": "var", "name": "A"},
        "result": {"kind": "app", "fn": {"kind": "var", "name": "P"}, "arg": {"kind": "hole"}},
    })
    term = schema.to_core()
    assert isinstance(term, Pi)
    assert term.arg_type == Var("A")
    assert term.result == App(Var("P"), Hole())


def test_request_defaults():
    request = DeriveRequest.model_validate({"descriptor": percent_descriptor()})
    assert request.strategy is Strategy.PLAIN
    assert request.visibility is None


def test_request_accepts_strategy_and_visibility_names():
    request = DeriveRequest.model_validate({
        "strategy": "float_literals",
        "visibility": "export",
        "descriptor": percent_descriptor(),
    })
    assert request.strategy is Strategy.FLOAT_LITERALS
    assert request.visibility is Visibility.EXPORT


def test_term_without_kind_is_rejected():
    payload = percent_descriptor()
    payload["constructors"][0]["args"][0]["type"] = {"name": "Double"}
    with pytest.raises(ValidationError):
        DescriptorSchema.model_validate(payload)


def test_unknown_strategy_is_rejected():
    with pytest.raises(ValidationError):
        DeriveRequest.model_validate({"strategy": "octal", "descriptor": percent_descriptor()})


def test_negative_parameter_index_is_rejected():
    payload = unit_vector_descriptor()
    payload["constructors"][0]["args"][0]["index"] = -1
    with pytest.raises(ValidationError):
        DescriptorSchema.model_validate(payload)


def test_location_line_must_be_positive():
    payload = unit_vector_descriptor()
    payload["location"]["line"] = 0
    with pytest.raises(ValidationError):
        DescriptorSchema.model_validate(payload)
