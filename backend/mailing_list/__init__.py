"""Mailing List Service: subscriber store served over REST and JSON-RPC.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
