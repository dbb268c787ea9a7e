"""
Feature modules for RideWise Splits.

Each feature is a self-contained module with:
- models.py - Dataclasses (immutable values)
- schemas.py - Pydantic schemas
- service.py - Orchestration (optional)
- calculators/ - Calculation logic (optional)
"""
