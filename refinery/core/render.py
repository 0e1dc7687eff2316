"""Rendering: pretty-prints terms and generated declarations as host-language source.

Invariants:
    - Application binds tighter than arrows; nested applications in argument position are parenthesized
    - Output is deterministic for equal inputs
    - A top-level case body is laid out one alternative per line; nested cases use braces
    - Floats print with a decimal point, never an exponent; negative literals are
      parenthesized in argument position; non-finite floats raise TermError
"""

import json
import math
from decimal import Decimal

from refinery.core.domain_types import Explicitness, Multiplicity
from refinery.core.errors import TermError
from refinery.core.synthesize import GeneratedDeclaration
from refinery.core.terms import (
    App,
    BindPattern,
    Case,
    ConPattern,
    Hole,
    Lit,
    ParamRef,
    Pattern,
    Pi,
    Term,
    Var,
    free_vars,
    spine,
)


# Precedence levels
_TOP = 0
_FUN = 1
_ARG = 2

INDENT = "  "

_QUANTITY_PREFIX = {
    Multiplicity.ZERO: "0 ",
    Multiplicity.LINEAR: "1 ",
    Multiplicity.UNRESTRICTED: "",
}


def _parens(text: str, wrap: bool) -> str:
    return f"({text})" if wrap else text


def _render_float(value: float) -> str:
    """Decimal-point notation only: `1e20` prints as `100000000000000000000.0`."""
    if not math.isfinite(value):
        raise TermError(f"Float literal {value!r} has no source form")
    text = format(Decimal(repr(value)), "f")
    return text if "." in text else f"{text}.0"


def _render_literal(value: int | float | str, prec: int) -> str:
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    text = _render_float(value) if isinstance(value, float) else str(value)
    # `f -1` would parse as subtraction
    return _parens(text, text.startswith("-") and prec >= _ARG)


def _render_app(term: App, prec: int) -> str:
    head, args = spine(term)
    parts = [render_term(head, _ARG)]
    for arg, info in args:
        if info is Explicitness.EXPLICIT:
            parts.append(render_term(arg, _ARG))
        elif info is Explicitness.AUTO_IMPLICIT:
            parts.append("@{" + render_term(arg) + "}")
        else:
            parts.append("{" + render_term(arg) + "}")
    return _parens(" ".join(parts), prec >= _ARG)


def _render_binder(term: Pi) -> str:
    quantity = _QUANTITY_PREFIX[term.multiplicity]
    name = term.name if term.name is not None else "_"
    arg_type = render_term(term.arg_type)
    if term.info is Explicitness.EXPLICIT:
        if term.name is None and not quantity:
            return render_term(term.arg_type, _FUN)
        return f"({quantity}{name} : {arg_type})"
    if term.info is Explicitness.AUTO_IMPLICIT:
        return f"{{auto {quantity}{name} : {arg_type}}}"
    if term.info is Explicitness.DEFAULT_IMPLICIT:
        return f"{{default {quantity}{name} : {arg_type}}}"
    return f"{{{quantity}{name} : {arg_type}}}"


def render_pattern(pattern: Pattern, nested: bool = False) -> str:
    if isinstance(pattern, BindPattern):
        return pattern.name
    if isinstance(pattern, ConPattern):
        if not pattern.args:
            return pattern.con
        inner = " ".join(render_pattern(a, nested=True) for a in pattern.args)
        return _parens(f"{pattern.con} {inner}", nested)
    return "_"


def render_term(term: Term, prec: int = _TOP) -> str:
    if isinstance(term, Var):
        return term.name
    if isinstance(term, ParamRef):
        return f"param#{term.index}"
    if isinstance(term, Lit):
        return _render_literal(term.value, prec)
    if isinstance(term, Hole):
        return "_"
    if isinstance(term, App):
        return _render_app(term, prec)
    if isinstance(term, Pi):
        text = f"{_render_binder(term)} -> {render_term(term.result)}"
        return _parens(text, prec > _TOP)
    if isinstance(term, Case):
        alts = "; ".join(
            f"{render_pattern(a.pattern)} => {render_term(a.body)}"
            for a in term.alternatives
        )
        text = f"case {render_term(term.scrutinee)} of {{ {alts} }}"
        return _parens(text, prec > _TOP)
    raise TypeError(f"Cannot render {type(term).__name__}")


# ─── Declarations ────────────────────────────────────────────────

def _strip_implicits(term: Term) -> Term:
    """Drop non-explicit binders and the names of explicit binders nothing refers to."""
    if not isinstance(term, Pi):
        return term
    result = _strip_implicits(term.result)
    if term.info is not Explicitness.EXPLICIT:
        return result
    name = term.name if term.name in free_vars(result) else None
    return Pi(name, term.multiplicity, term.info, term.arg_type, result)


def render_signature(
    declaration: GeneratedDeclaration, show_implicits: bool = True,
) -> str:
    signature = declaration.signature
    if not show_implicits:
        signature = _strip_implicits(signature)
    return f"{declaration.name} : {render_term(signature)}"


def render_clause(declaration: GeneratedDeclaration) -> str:
    lhs = " ".join((declaration.name, *declaration.arguments))
    body = declaration.body
    if not isinstance(body, Case):
        return f"{lhs} = {render_term(body)}"
    lines = [f"{lhs} = case {render_term(body.scrutinee)} of"]
    for alt in body.alternatives:
        lines.append(
            f"{INDENT}{render_pattern(alt.pattern)} => {render_term(alt.body)}"
        )
    return "\n".join(lines)


def render_declaration(declaration: GeneratedDeclaration) -> str:
    return "\n".join((
        declaration.visibility.value,
        render_signature(declaration),
        render_clause(declaration),
    ))


def render_module(declarations: list[GeneratedDeclaration]) -> str:
    """All declarations, grouped into `namespace` blocks in first-seen order."""
    groups: dict[str | None, list[GeneratedDeclaration]] = {}
    for declaration in declarations:
        groups.setdefault(declaration.namespace, []).append(declaration)

    blocks = []
    for namespace, members in groups.items():
        rendered = "\n\n".join(render_declaration(d) for d in members)
        if namespace is None:
            blocks.append(rendered)
            continue
        indented = "\n".join(
            f"{INDENT}{line}" if line else line
            for line in rendered.splitlines()
        )
        blocks.append(f"namespace {namespace}\n{indented}")
    return "\n\n".join(blocks) + "\n"
