"""Pydantic Schemas: request/response validation for the derivation API.

Invariants:
    - Schemas validate at the system boundary and convert to core dataclasses
    - Domain enums from core/ used for enum fields
"""
