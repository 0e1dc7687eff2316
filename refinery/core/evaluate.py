"""Evaluator: runs generated declarations against Python callables.

Generated code only needs application, case analysis and a handful of
builtins, so a direct interpreter over terms is enough. The host supplies the
decision procedure plus bindings for the constructor, the predicates and any
literal conversions the raw type needs.

Invariants:
    - Name lookup order: local variables, host bindings, builtins, declarations of the
      same namespace, then any declaration by qualified name
    - A body never resolves its own declaration: a missing host binding is an unbound name
    - materialize keys functions by qualified name (`Percent.refine`)
    - Applications are uncurried at call time: `f a b` calls f(a, b)
    - `_` evaluates to None (an erased proof slot carries no runtime value)
    - Types (Pi, ParamRef) are never evaluated
"""

from dataclasses import dataclass, field, fields
from typing import Any, Callable

from refinery.core.errors import EvaluationError, LiteralRejectedError
from refinery.core.runtime import (
    NOTHING,
    DecisionProcedure,
    Just,
    No,
    Nothing,
    Yes,
    from_just,
)
from refinery.core.synthesize import GeneratedDeclaration
from refinery.core.terms import (
    App,
    BindPattern,
    Case,
    ConPattern,
    Hole,
    Lit,
    Pattern,
    Term,
    Var,
    spine,
)
from refinery.core.vocabulary import DEFAULT_VOCABULARY, Vocabulary


@dataclass
class RuntimeEnv:
    """Host side of an evaluation: decision procedure and named values."""
    decide: DecisionProcedure
    bindings: dict[str, Any] = field(default_factory=dict)
    vocabulary: Vocabulary = DEFAULT_VOCABULARY

    def builtins(self) -> dict[str, Any]:
        v = self.vocabulary
        return {
            v.decide: self.decide,
            v.yes: Yes,
            v.no: No,
            v.just: Just,
            v.nothing: NOTHING,
            v.from_just: from_just,
        }

    def constructor_classes(self) -> dict[str, type]:
        v = self.vocabulary
        return {v.yes: Yes, v.no: No, v.just: Just, v.nothing: Nothing}


@dataclass(frozen=True)
class _Frame:
    """The declaration whose body is being evaluated."""
    namespace: str | None
    name: str
    qualified: str


class _Evaluator:
    def __init__(self, env: RuntimeEnv):
        self.env = env
        self.builtins = env.builtins()
        self.classes = env.constructor_classes()
        # qualified name -> function, and namespace -> {bare name -> function}
        self.generated: dict[str, Callable] = {}
        self.namespaces: dict[str | None, dict[str, Callable]] = {}

    def define(self, declaration: GeneratedDeclaration, function: Callable) -> None:
        qualified = qualified_name(declaration)
        if qualified in self.generated:
            raise EvaluationError(f"Duplicate declaration '{qualified}'")
        self.generated[qualified] = function
        self.namespaces.setdefault(declaration.namespace, {})[declaration.name] = function

    def lookup(self, name: str, scope: dict[str, Any], frame: _Frame) -> Any:
        for table in (scope, self.env.bindings, self.builtins):
            if name in table:
                return table[name]
        # A declaration never resolves its own name: `fromInteger n` inside
        # fromInteger means the host conversion.
        if name != frame.name:
            siblings = self.namespaces.get(frame.namespace, {})
            if name in siblings:
                return siblings[name]
        if name in self.generated and name != frame.qualified:
            return self.generated[name]
        raise EvaluationError(f"Unbound name '{name}'")

    def eval(self, term: Term, scope: dict[str, Any], frame: _Frame) -> Any:
        if isinstance(term, Var):
            return self.lookup(term.name, scope, frame)
        if isinstance(term, Lit):
            return term.value
        if isinstance(term, Hole):
            return None
        if isinstance(term, App):
            head, args = spine(term)
            fn = self.eval(head, scope, frame)
            if not callable(fn):
                raise EvaluationError(f"Cannot apply non-function {fn!r}")
            return fn(*(self.eval(arg, scope, frame) for arg, _ in args))
        if isinstance(term, Case):
            value = self.eval(term.scrutinee, scope, frame)
            for alt in term.alternatives:
                bound = self.match(alt.pattern, value)
                if bound is not None:
                    return self.eval(alt.body, {**scope, **bound}, frame)
            raise EvaluationError(f"No case alternative matches {value!r}")
        raise EvaluationError(f"Cannot evaluate {type(term).__name__}")

    def match(self, pattern: Pattern, value: Any) -> dict[str, Any] | None:
        if isinstance(pattern, BindPattern):
            return {pattern.name: value}
        if not isinstance(pattern, ConPattern):
            return {}
        cls = self.classes.get(pattern.con)
        if cls is None:
            raise EvaluationError(f"Unknown constructor pattern '{pattern.con}'")
        if not isinstance(value, cls):
            return None
        values = [getattr(value, f.name) for f in fields(value)]
        if len(pattern.args) > len(values):
            raise EvaluationError(
                f"Pattern '{pattern.con}' has too many arguments"
            )
        bound: dict[str, Any] = {}
        for sub, sub_value in zip(pattern.args, values):
            result = self.match(sub, sub_value)
            if result is None:
                return None
            bound.update(result)
        return bound


def qualified_name(declaration: GeneratedDeclaration) -> str:
    """`Namespace.name`, or the bare name for an unscoped declaration."""
    if declaration.namespace:
        return f"{declaration.namespace}.{declaration.name}"
    return declaration.name


def materialize(
    declarations: list[GeneratedDeclaration], env: RuntimeEnv,
) -> dict[str, Callable]:
    """Turn generated declarations into Python callables keyed by qualified name.

    Declarations of several types can be materialized together: a body
    resolves names in its own namespace before the others, so
    `Percent.fromInteger` calls `Percent.refine` even when `Name.refine`
    sits next to it.
    """
    evaluator = _Evaluator(env)
    for declaration in declarations:
        evaluator.define(declaration, _function(declaration, evaluator))
    return dict(evaluator.generated)


def _function(
    declaration: GeneratedDeclaration, evaluator: _Evaluator,
) -> Callable:
    qualified = qualified_name(declaration)
    frame = _Frame(declaration.namespace, declaration.name, qualified)

    def function(*args: Any) -> Any:
        if len(args) != len(declaration.arguments):
            raise EvaluationError(
                f"{qualified} expects {len(declaration.arguments)} "
                f"argument(s), got {len(args)}"
            )
        scope = dict(zip(declaration.arguments, args))
        try:
            return evaluator.eval(declaration.body, scope, frame)
        except LiteralRejectedError as exc:
            rendered = ", ".join(repr(a) for a in args)
            raise LiteralRejectedError(
                f"{qualified}({rendered}): {exc.message}", exc.context,
            ) from exc

    function.__name__ = declaration.name
    function.__qualname__ = qualified
    return function
