"""Refinery: derives smart constructors and literal conversions for refinement types.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
