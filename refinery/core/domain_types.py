"""Domain Types: enums shared by the descriptor model, the synthesizer and the API.

Invariants:
    - All valid states encoded as Enums, no raw string matching
    - Enum values are the wire spelling used in JSON request/response bodies

Design Decisions:
    - str Enums: serialize to JSON without custom encoders (schemas reuse them directly)
"""

from enum import Enum


# ─── Binder attributes ───────────────────────────────────────────

class Multiplicity(str, Enum):
    """Quantity of a binder. ZERO arguments are erased at runtime."""
    ZERO = "zero"
    LINEAR = "linear"
    UNRESTRICTED = "unrestricted"


class Explicitness(str, Enum):
    """How an argument is supplied at call sites."""
    EXPLICIT = "explicit"
    IMPLICIT = "implicit"
    AUTO_IMPLICIT = "auto_implicit"
    DEFAULT_IMPLICIT = "default_implicit"


# ─── Generation ──────────────────────────────────────────────────

class LiteralKind(str, Enum):
    """Literal syntaxes a refinement type can opt into."""
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"


class Strategy(str, Enum):
    """Named derivation strategies exposed to the driver."""
    PLAIN = "plain"
    INTEGER_LITERALS = "integer_literals"
    FLOAT_LITERALS = "float_literals"
    STRING_LITERALS = "string_literals"


class Visibility(str, Enum):
    """Export modifier attached to every generated declaration."""
    PRIVATE = "private"
    EXPORT = "export"
    PUBLIC_EXPORT = "public export"
