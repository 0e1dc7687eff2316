"""Derivation Entry Points: named strategies composing match -> extract -> synthesize.

Invariants:
    - match_shape runs first; on failure the DerivationError propagates and nothing is emitted
    - Every call returns a fresh list, refine first, conversions in LiteralKind order
    - FLOAT_LITERALS emits the integer conversion too (float literals subsume integer literals)

Design Decisions:
    - Explicit DERIVATIONS dict: every strategy -> function mapping visible in one place
"""

from typing import Callable

from refinery.core.descriptor import TypeDescriptor
from refinery.core.domain_types import LiteralKind, Strategy, Visibility
from refinery.core.match_shape import match_shape
from refinery.core.synthesize import (
    GeneratedDeclaration,
    literal_declaration,
    refine_declaration,
)
from refinery.core.vocabulary import DEFAULT_VOCABULARY, Vocabulary


STRATEGY_LITERALS: dict[Strategy, tuple[LiteralKind, ...]] = {
    Strategy.PLAIN: (),
    Strategy.INTEGER_LITERALS: (LiteralKind.INTEGER,),
    Strategy.FLOAT_LITERALS: (LiteralKind.INTEGER, LiteralKind.FLOAT),
    Strategy.STRING_LITERALS: (LiteralKind.STRING,),
}


def _derive(
    descriptor: TypeDescriptor,
    literals: tuple[LiteralKind, ...],
    vocabulary: Vocabulary,
    visibility: Visibility,
) -> list[GeneratedDeclaration]:
    proof = match_shape(descriptor)
    declarations = [refine_declaration(proof, vocabulary, visibility)]
    for kind in literals:
        declarations.append(
            literal_declaration(proof, kind, vocabulary, visibility),
        )
    return declarations


def derive_plain(
    descriptor: TypeDescriptor,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    visibility: Visibility = Visibility.PUBLIC_EXPORT,
) -> list[GeneratedDeclaration]:
    """refine only."""
    return _derive(
        descriptor, STRATEGY_LITERALS[Strategy.PLAIN], vocabulary, visibility,
    )


def derive_with_integer_literals(
    descriptor: TypeDescriptor,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    visibility: Visibility = Visibility.PUBLIC_EXPORT,
) -> list[GeneratedDeclaration]:
    """refine + fromInteger."""
    return _derive(
        descriptor, STRATEGY_LITERALS[Strategy.INTEGER_LITERALS],
        vocabulary, visibility,
    )


def derive_with_float_literals(
    descriptor: TypeDescriptor,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    visibility: Visibility = Visibility.PUBLIC_EXPORT,
) -> list[GeneratedDeclaration]:
    """refine + fromInteger + fromDouble."""
    return _derive(
        descriptor, STRATEGY_LITERALS[Strategy.FLOAT_LITERALS],
        vocabulary, visibility,
    )


def derive_with_string_literals(
    descriptor: TypeDescriptor,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    visibility: Visibility = Visibility.PUBLIC_EXPORT,
) -> list[GeneratedDeclaration]:
    """refine + fromString."""
    return _derive(
        descriptor, STRATEGY_LITERALS[Strategy.STRING_LITERALS],
        vocabulary, visibility,
    )


DerivationFn = Callable[
    [TypeDescriptor, Vocabulary, Visibility], list[GeneratedDeclaration],
]

DERIVATIONS: dict[Strategy, DerivationFn] = {
    Strategy.PLAIN: derive_plain,
    Strategy.INTEGER_LITERALS: derive_with_integer_literals,
    Strategy.FLOAT_LITERALS: derive_with_float_literals,
    Strategy.STRING_LITERALS: derive_with_string_literals,
}


def derive(
    strategy: Strategy | str,
    descriptor: TypeDescriptor,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    visibility: Visibility = Visibility.PUBLIC_EXPORT,
) -> list[GeneratedDeclaration]:
    """Run the named strategy. Raises ValueError for an unknown strategy name."""
    return DERIVATIONS[Strategy(strategy)](descriptor, vocabulary, visibility)
