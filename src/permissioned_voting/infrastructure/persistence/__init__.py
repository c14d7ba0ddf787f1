"""Persistence layer: aiosqlite database and repositories."""

from permissioned_voting.infrastructure.persistence.database import Database

__all__ = ["Database"]
