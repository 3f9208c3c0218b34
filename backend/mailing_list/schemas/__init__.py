"""Schemas: Pydantic models for REST and JSON-RPC boundaries.

Invariants:
    - Schemas validate shape only; business preconditions live in core/enforce_requests
"""
