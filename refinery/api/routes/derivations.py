"""Derivation Routes: derive companion declarations for a refinement type.

Invariants:
    - POST /api/v1/derivations returns every declaration of the strategy, or a 422 error envelope
    - GET /api/v1/derivations/strategies lists strategies with the literal conversions they emit
    - Routes are thin: conversion, derivation and logging live in derivation_service
"""

from fastapi import APIRouter, Depends

from refinery.config import Settings, get_settings
from refinery.schemas.derivation import DeriveRequest, DeriveResponse, StrategyInfo
from refinery.services.derivation_service import list_strategies, run_derivation

router = APIRouter(prefix="/api/v1/derivations", tags=["derivations"])


@router.post("", response_model=DeriveResponse)
async def create_derivation(
    request: DeriveRequest, settings: Settings = Depends(get_settings),
):
    """Derive refine (and any literal conversions) for the given descriptor."""
    return run_derivation(request, settings)


@router.get("/strategies", response_model=list[StrategyInfo])
async def get_strategies():
    return list_strategies()
