"""Services: protocol-agnostic facade and JSON-RPC dispatch.

Invariants:
    - Services never build HTTP responses (front-ends own wire formats)
"""
