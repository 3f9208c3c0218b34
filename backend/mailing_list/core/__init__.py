"""Core: pure domain types, validation rules, and boundary contracts.

Invariants:
    - Nothing in core performs IO or imports from infrastructure/services/api
"""
