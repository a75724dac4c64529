"""SQLAlchemy Declarative Base — shared base class for all ORM models.

Invariants:
    - All models and link tables register on Base.metadata
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all localesync ORM models."""
    pass
