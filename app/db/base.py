"""SQLAlchemy declarative base shared by the engine's models."""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for progress, session, achievement and student models."""

    pass
