"""API layer: canonical listing surface for asks.

Key rules:

1. No SQLAlchemy imports - only call repo and query functions
2. Validation happens before any store call
3. Return Pydantic models only
"""
