"""Domain models and analytics for the sales tracking service.

This package contains in-memory (Pydantic) models describing sellers and their
transactions, plus the pure analytics run over them. They are independent from
persistence models so that business logic and testing can evolve without DB
coupling.
"""

__all__ = [
    "analytics",
    "base_types",
    "period",
    "sales",
]
