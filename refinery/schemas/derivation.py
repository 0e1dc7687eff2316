"""Derivation Schemas: JSON contracts for type descriptors and generated declarations.

Invariants:
    - Terms and constructor arguments are tagged unions discriminated by `kind`
    - to_core() is the only path from request data to core dataclasses
    - Response declarations carry rendered source; core terms never leave the process

Design Decisions:
    - Recursive term models resolved with model_rebuild() once the union alias exists
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from refinery.core.descriptor import (
    Constructor,
    NamedArgument,
    ParamArgument,
    SourceLocation,
    TypeDescriptor,
    TypeParameter,
)
from refinery.core.domain_types import (
    Explicitness,
    LiteralKind,
    Multiplicity,
    Strategy,
    Visibility,
)
from refinery.core.terms import App, Hole, Lit, ParamRef, Pi, Term, Var


# ─── Terms ───────────────────────────────────────────────────────

class VarTerm(BaseModel):
    kind: Literal["var"] = "var"
    name: str = Field(min_length=1)

    def to_core(self) -> Term:
        return Var(self.name)


class ParamTerm(BaseModel):
    kind: Literal["param"] = "param"
    index: int = Field(ge=0)

    def to_core(self) -> Term:
        return ParamRef(self.index)


class AppTerm(BaseModel):
    kind: Literal["app"] = "app"
    fn: "TermSchema"
    arg: "TermSchema"
    info: Explicitness = Explicitness.EXPLICIT

    def to_core(self) -> Term:
        return App(self.fn.to_core(), self.arg.to_core(), self.info)


class LitTerm(BaseModel):
    kind: Literal["lit"] = "lit"
    value: int | float | str

    def to_core(self) -> Term:
        return Lit(self.value)


class HoleTerm(BaseModel):
    kind: Literal["hole"] = "hole"

    def to_core(self) -> Term:
        return Hole()


class PiTerm(BaseModel):
    kind: Literal["pi"] = "pi"
    name: str | None = None
    multiplicity: Multiplicity = Multiplicity.UNRESTRICTED
    info: Explicitness = Explicitness.EXPLICIT
    arg_type: "TermSchema"
    result: "TermSchema"

    def to_core(self) -> Term:
        return Pi(
            self.name, self.multiplicity, self.info,
            self.arg_type.to_core(), self.result.to_core(),
        )


TermSchema = Annotated[
    Union[VarTerm, ParamTerm, AppTerm, LitTerm, HoleTerm, PiTerm],
    Field(discriminator="kind"),
]

AppTerm.model_rebuild()
PiTerm.model_rebuild()


# ─── Descriptors ─────────────────────────────────────────────────

class ParamArgumentSchema(BaseModel):
    kind: Literal["param"] = "param"
    index: int = Field(ge=0)


class NamedArgumentSchema(BaseModel):
    kind: Literal["named"] = "named"
    name: str | None = None
    multiplicity: Multiplicity = Multiplicity.UNRESTRICTED
    explicitness: Explicitness = Explicitness.EXPLICIT
    type: TermSchema


ArgumentSchema = Annotated[
    Union[ParamArgumentSchema, NamedArgumentSchema],
    Field(discriminator="kind"),
]


class ParameterSchema(BaseModel):
    name: str = Field(min_length=1)
    type: TermSchema


class ConstructorSchema(BaseModel):
    name: str = Field(min_length=1)
    args: list[ArgumentSchema] = []


class LocationSchema(BaseModel):
    file: str
    line: int = Field(ge=1)
    column: int = Field(default=0, ge=0)


class DescriptorSchema(BaseModel):
    """A data declaration as sent by the driver."""
    name: str = Field(min_length=1)
    params: list[ParameterSchema] = []
    constructors: list[ConstructorSchema] = []
    location: LocationSchema | None = None

    def to_core(self) -> TypeDescriptor:
        return TypeDescriptor(
            name=self.name,
            params=tuple(
                TypeParameter(p.name, p.type.to_core()) for p in self.params
            ),
            constructors=tuple(
                Constructor(c.name, tuple(_argument(a) for a in c.args))
                for c in self.constructors
            ),
            location=(
                SourceLocation(
                    self.location.file, self.location.line, self.location.column,
                )
                if self.location else None
            ),
        )


def _argument(arg: ParamArgumentSchema | NamedArgumentSchema):
    if isinstance(arg, ParamArgumentSchema):
        return ParamArgument(arg.index)
    return NamedArgument(
        arg.name, arg.multiplicity, arg.explicitness, arg.type.to_core(),
    )


# ─── Requests / Responses ────────────────────────────────────────

class DeriveRequest(BaseModel):
    strategy: Strategy = Strategy.PLAIN
    descriptor: DescriptorSchema
    visibility: Visibility | None = None


class DeclarationOut(BaseModel):
    """One generated declaration, rendered."""
    name: str
    namespace: str | None = None
    visibility: Visibility
    signature: str
    clause: str
    source: str


class DeriveResponse(BaseModel):
    type_name: str
    strategy: Strategy
    declarations: list[DeclarationOut] = []
    module: str


class StrategyInfo(BaseModel):
    name: Strategy
    literals: list[LiteralKind] = []
