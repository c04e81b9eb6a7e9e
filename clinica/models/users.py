"""Staff user table."""

from sqlalchemy import JSON, Column, String, Table, Text

from clinica.models.base import audit_columns, id_column, metadata

users = Table(
    "users",
    metadata,
    id_column(),
    Column("name", Text, nullable=False),
    # Unique only among non-null values; empty strings are stored as NULL
    Column("email", Text, nullable=True, unique=True),
    Column("access_key", Text, nullable=True, index=True),
    Column("role", String(30), nullable=False),
    Column("company_id", String(64), nullable=True, index=True),
    Column("sede_ids", JSON, nullable=False, default=list),
    Column("avatar", Text, nullable=True),
    *audit_columns(),
)
