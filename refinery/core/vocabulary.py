"""Vocabulary: host-language names emitted by the declaration synthesizer.

Invariants:
    - Defaults follow Prelude conventions (Maybe/Just/Nothing, Dec-style Yes/No, fromInteger, ...)
    - The vocabulary is plain data; core never reads configuration, the shell builds it from Settings
"""

from dataclasses import dataclass

from refinery.core.domain_types import LiteralKind


@dataclass(frozen=True)
class LiteralSpec:
    """How one literal syntax is converted: `function : literal_type -> V`."""
    function: str
    literal_type: str


@dataclass(frozen=True)
class Vocabulary:
    # Option type
    maybe_type: str = "Maybe"
    just: str = "Just"
    nothing: str = "Nothing"
    is_just: str = "IsJust"
    from_just: str = "fromJust"

    # Decision procedure: `decide p v` evaluates to `yes w` or `no`
    decide: str = "decide"
    yes: str = "Yes"
    no: str = "No"

    refine_name: str = "refine"

    # Preferred binder names, freshened against the type's parameters
    raw_name: str = "v"
    literal_name: str = "n"
    witness_name: str = "prf"

    integer_conversion: str = "fromInteger"
    integer_type: str = "Integer"
    float_conversion: str = "fromDouble"
    float_type: str = "Double"
    string_conversion: str = "fromString"
    string_type: str = "String"

    def literal(self, kind: LiteralKind) -> LiteralSpec:
        if kind is LiteralKind.INTEGER:
            return LiteralSpec(self.integer_conversion, self.integer_type)
        if kind is LiteralKind.FLOAT:
            return LiteralSpec(self.float_conversion, self.float_type)
        return LiteralSpec(self.string_conversion, self.string_type)


DEFAULT_VOCABULARY = Vocabulary()
