"""Error Hierarchy: typed, categorized exceptions for every Refinery failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Derivation errors (422) are reported to the caller; evaluation errors carry their own status
    - to_response() produces the REST envelope used by the API error handlers
    - A failed derivation never yields partial declarations: the error is the whole result

Design Decisions:
    - Single hierarchy with RefineryError base: the FastAPI global handler catches all
    - ErrorContext as dataclass: carries the offending type and location without
      coupling core to the logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """ERROR for rejected input, CRITICAL for failures inside the engine."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    SHAPE = "shape"
    EVALUATION = "evaluation"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where a failure happened: the type being derived and its source position."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    type_name: str | None = None
    constructor_name: str | None = None
    strategy: str | None = None
    location: str | None = None

    def describe(self) -> dict[str, str | None]:
        return {
            "type_name": self.type_name,
            "constructor_name": self.constructor_name,
            "strategy": self.strategy,
            "location": self.location,
        }

    def log_extra(self) -> dict[str, str]:
        """Fields for `logger.*(extra=...)`; unset ones are left out."""
        return {
            key: value for key, value in self.describe().items()
            if key != "constructor_name" and value is not None
        }


class RefineryError(Exception):
    """Base exception for all Refinery errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def is_client_error(self) -> bool:
        return self.http_status < 500

    def to_response(self) -> dict:
        """The REST envelope: `{"error": {code, message, ..., context}}`."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": self.context.describe(),
            }
        }


# ─── Derivation Errors ───────────────────────────────────────────

class DerivationError(RefineryError):
    """A type descriptor cannot be derived. Base for the shape diagnostics."""

    def __init__(
        self, message: str, code: str, type_name: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.type_name = type_name
        super().__init__(
            message, code, ErrorCategory.SHAPE,
            ErrorSeverity.ERROR, ctx, 422,
        )
        self.type_name = type_name


class NotSingleConstructorError(DerivationError):
    """Refinement types have exactly one constructor."""
    def __init__(
        self, type_name: str, constructor_count: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{type_name} is not a refinement type: expected exactly one "
            f"constructor, found {constructor_count}",
            "NOT_SINGLE_CONSTRUCTOR", type_name, context,
        )
        self.constructor_count = constructor_count


class ShapeMismatchError(DerivationError):
    """The single constructor is not a value argument followed by its proof."""
    def __init__(
        self, type_name: str, reason: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{type_name} is not a refinement type: {reason}",
            "SHAPE_MISMATCH", type_name, context,
        )
        self.reason = reason


# ─── Term Errors ─────────────────────────────────────────────────

class TermError(RefineryError):
    """A term refers to a type parameter that does not exist."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "TERM_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 422,
        )


# ─── Evaluation Errors ───────────────────────────────────────────

class EvaluationError(RefineryError):
    """A generated declaration could not be interpreted."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "EVALUATION_ERROR", ErrorCategory.EVALUATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class LiteralRejectedError(RefineryError):
    """A literal conversion was applied to a value its predicate rejects."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "LITERAL_REJECTED", ErrorCategory.EVALUATION,
            ErrorSeverity.ERROR, context, 422,
        )
