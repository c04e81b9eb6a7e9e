"""Shared table metadata and column helpers."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, MetaData, String, func

# Metadata for all tables
metadata = MetaData()


def new_id() -> str:
    """Generate a text primary key."""
    return str(uuid4())


def id_column() -> Column:
    """Text primary key generated client-side."""
    return Column("id", String(64), primary_key=True, default=new_id)


def audit_columns() -> list[Column]:
    """created_at / updated_at columns shared by every table."""
    return [
        Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
        Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    ]
