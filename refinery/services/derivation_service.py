"""Derivation Service: runs a strategy for a request and renders the result.

Invariants:
    - Exactly one log line per derivation: info on success, warning on DerivationError
    - DerivationError propagates unchanged to the API error handler (no partial responses)
    - Vocabulary and default visibility come from Settings; core never sees Settings
"""

import logging

from refinery.config import Settings
from refinery.core.derive import STRATEGY_LITERALS, derive
from refinery.core.errors import DerivationError
from refinery.core.render import (
    render_clause,
    render_declaration,
    render_module,
    render_signature,
)
from refinery.core.synthesize import GeneratedDeclaration
from refinery.schemas.derivation import (
    DeclarationOut,
    DeriveRequest,
    DeriveResponse,
    StrategyInfo,
)

logger = logging.getLogger(__name__)


def _declaration_out(declaration: GeneratedDeclaration) -> DeclarationOut:
    return DeclarationOut(
        name=declaration.name,
        namespace=declaration.namespace,
        visibility=declaration.visibility,
        signature=render_signature(declaration),
        clause=render_clause(declaration),
        source=render_declaration(declaration),
    )


def run_derivation(request: DeriveRequest, settings: Settings) -> DeriveResponse:
    """Derive declarations for the requested descriptor and strategy."""
    descriptor = request.descriptor.to_core()
    visibility = request.visibility or settings.default_visibility
    try:
        declarations = derive(
            request.strategy, descriptor, settings.vocabulary(), visibility,
        )
    except DerivationError as exc:
        exc.context.strategy = request.strategy.value
        logger.warning(
            f"Derivation rejected: {exc.message}",
            extra={"error_code": exc.code, **exc.context.log_extra()},
        )
        raise

    logger.info(
        f"Derived {len(declarations)} declaration(s) for {descriptor.name}",
        extra={
            "type_name": descriptor.name,
            "strategy": request.strategy.value,
            "declaration_count": len(declarations),
        },
    )
    return DeriveResponse(
        type_name=descriptor.name,
        strategy=request.strategy,
        declarations=[_declaration_out(d) for d in declarations],
        module=render_module(declarations),
    )


def list_strategies() -> list[StrategyInfo]:
    return [
        StrategyInfo(name=strategy, literals=list(literals))
        for strategy, literals in STRATEGY_LITERALS.items()
    ]
