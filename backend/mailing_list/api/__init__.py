"""API Layer: FastAPI routes and error handlers for both front-ends.

Invariants:
    - Routes registered explicitly in main.py / rpc_main.py (no auto-discovery)
    - Routes never contain business logic (delegate to the facade)
"""
