"""Terms: the small expression language descriptors are written in and declarations are built from.

Invariants:
    - Every term node is a frozen dataclass: terms are values, never mutated after construction
    - ParamRef(i) only appears in descriptor input; generated code refers to parameters by Var(name)
    - Application is binary and curried: f x y == App(App(f, x), y)

Design Decisions:
    - Plain dataclasses + isinstance dispatch, no visitor classes
    - Patterns are a separate family from terms: a pattern never appears in expression position
"""

from dataclasses import dataclass
from typing import Iterable, Union

from refinery.core.domain_types import Explicitness, Multiplicity
from refinery.core.errors import TermError


# ─── Term nodes ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Var:
    """Bare reference to a name."""
    name: str


@dataclass(frozen=True)
class ParamRef:
    """Bound reference to the enclosing type's parameter at `index`."""
    index: int


@dataclass(frozen=True)
class App:
    """Application of `fn` to `arg`. `info` distinguishes `f x`, `f {x}` and `f @{x}`."""
    fn: "Term"
    arg: "Term"
    info: Explicitness = Explicitness.EXPLICIT


@dataclass(frozen=True)
class Lit:
    """Integer, floating-point or string literal."""
    value: int | float | str


@dataclass(frozen=True)
class Hole:
    """The irrelevant placeholder `_`."""


@dataclass(frozen=True)
class Pi:
    """Dependent function type `(name : arg_type) -> result` with binder attributes."""
    name: str | None
    multiplicity: Multiplicity
    info: Explicitness
    arg_type: "Term"
    result: "Term"


# ─── Patterns ────────────────────────────────────────────────────

@dataclass(frozen=True)
class ConPattern:
    """Constructor pattern, e.g. `Yes prf`."""
    con: str
    args: tuple["Pattern", ...] = ()


@dataclass(frozen=True)
class BindPattern:
    name: str


@dataclass(frozen=True)
class WildPattern:
    pass


Pattern = Union[ConPattern, BindPattern, WildPattern]


@dataclass(frozen=True)
class Alt:
    """One `pattern => body` alternative of a case expression."""
    pattern: Pattern
    body: "Term"


@dataclass(frozen=True)
class Case:
    scrutinee: "Term"
    alternatives: tuple[Alt, ...]


Term = Union[Var, ParamRef, App, Lit, Hole, Pi, Case]


# ─── Construction helpers ────────────────────────────────────────

def apply(
    fn: Term, *args: Term, info: Explicitness = Explicitness.EXPLICIT,
) -> Term:
    """Left-nested application of `fn` to every argument, all with the same `info`."""
    result = fn
    for arg in args:
        result = App(result, arg, info)
    return result


@dataclass(frozen=True)
class Binder:
    """One binder of a Pi chain, used by pi_type."""
    name: str | None
    arg_type: Term
    multiplicity: Multiplicity = Multiplicity.UNRESTRICTED
    info: Explicitness = Explicitness.EXPLICIT


def pi_type(binders: Iterable[Binder], result: Term) -> Term:
    """Fold binders right-to-left into a Pi chain ending in `result`."""
    term = result
    for binder in reversed(list(binders)):
        term = Pi(
            binder.name, binder.multiplicity, binder.info,
            binder.arg_type, term,
        )
    return term


# ─── Inspection ──────────────────────────────────────────────────

def spine(term: Term) -> tuple[Term, list[tuple[Term, Explicitness]]]:
    """Split `f a b c` into (f, [(a, info), (b, info), (c, info)])."""
    args: list[tuple[Term, Explicitness]] = []
    while isinstance(term, App):
        args.append((term.arg, term.info))
        term = term.fn
    args.reverse()
    return term, args


def param_refs(term: Term) -> set[int]:
    """Indices of every ParamRef occurring in `term`."""
    if isinstance(term, ParamRef):
        return {term.index}
    if isinstance(term, App):
        return param_refs(term.fn) | param_refs(term.arg)
    if isinstance(term, Pi):
        return param_refs(term.arg_type) | param_refs(term.result)
    if isinstance(term, Case):
        found = param_refs(term.scrutinee)
        for alt in term.alternatives:
            found |= param_refs(alt.body)
        return found
    return set()


def pattern_binds(pattern: Pattern) -> set[str]:
    if isinstance(pattern, BindPattern):
        return {pattern.name}
    if isinstance(pattern, ConPattern):
        bound: set[str] = set()
        for arg in pattern.args:
            bound |= pattern_binds(arg)
        return bound
    return set()


def free_vars(term: Term) -> set[str]:
    """Names referenced by `term` and not bound inside it."""
    if isinstance(term, Var):
        return {term.name}
    if isinstance(term, App):
        return free_vars(term.fn) | free_vars(term.arg)
    if isinstance(term, Pi):
        inner = free_vars(term.result)
        if term.name is not None:
            inner.discard(term.name)
        return free_vars(term.arg_type) | inner
    if isinstance(term, Case):
        found = free_vars(term.scrutinee)
        for alt in term.alternatives:
            found |= free_vars(alt.body) - pattern_binds(alt.pattern)
        return found
    return set()


# ─── Rewriting ───────────────────────────────────────────────────

def substitute_params(term: Term, names: tuple[str, ...] | list[str]) -> Term:
    """Replace every ParamRef(i) with Var(names[i])."""
    if isinstance(term, ParamRef):
        if not 0 <= term.index < len(names):
            raise TermError(
                f"Parameter reference {term.index} is out of range "
                f"for {len(names)} parameter(s)"
            )
        return Var(names[term.index])
    if isinstance(term, App):
        return App(
            substitute_params(term.fn, names),
            substitute_params(term.arg, names),
            term.info,
        )
    if isinstance(term, Pi):
        return Pi(
            term.name, term.multiplicity, term.info,
            substitute_params(term.arg_type, names),
            substitute_params(term.result, names),
        )
    if isinstance(term, Case):
        return Case(
            substitute_params(term.scrutinee, names),
            tuple(
                Alt(alt.pattern, substitute_params(alt.body, names))
                for alt in term.alternatives
            ),
        )
    return term


def fresh_name(base: str, taken: Iterable[str]) -> str:
    """`base` if unused, else the first of base1, base2, ... not in `taken`."""
    used = set(taken)
    if base not in used:
        return base
    suffix = 1
    while f"{base}{suffix}" in used:
        suffix += 1
    return f"{base}{suffix}"
