"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import Column, DateTime, Index, MetaData, String, Table

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (role-bearing projection of the user record)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", String, primary_key=True),
    Column("username", String(64), nullable=False, unique=True),
    Column("role", String(16), nullable=True),  # Role name; NULL or unknown = no role
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_users_created_at", users_table.c.created_at)
