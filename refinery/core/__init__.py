"""Core Layer: pure derivation logic, no IO, no async, no logging.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - All functions are pure and deterministic; inputs are never mutated

Design Decisions:
    - Functional core separated from the HTTP shell: the driver can call core directly
"""
