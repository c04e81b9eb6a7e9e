"""Company (tenant branding) table."""

from sqlalchemy import Column, String, Table, Text

from clinica.models.base import audit_columns, metadata

companies = Table(
    "companies",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", Text, nullable=False),
    Column("primary_color", String(20), nullable=True),
    Column("logo", Text, nullable=True),
    Column("portal_hero", Text, nullable=True),
    *audit_columns(),
)
