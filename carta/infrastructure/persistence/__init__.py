"""Persistence adapters (SQLAlchemy)."""

from carta.infrastructure.persistence.di import PersistenceProvider

__all__ = ["PersistenceProvider"]
