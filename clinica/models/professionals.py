"""Professional (specialist) table."""

from sqlalchemy import JSON, Column, String, Table, Text

from clinica.models.base import audit_columns, id_column, metadata

professionals = Table(
    "professionals",
    metadata,
    id_column(),
    Column("name", Text, nullable=False),
    Column("specialty", Text, nullable=True),
    Column("avatar", Text, nullable=True),
    Column("sede_ids", JSON, nullable=False, default=list),
    Column("user_id", String(64), nullable=True, index=True),
    Column("company_id", String(64), nullable=True, index=True),
    *audit_columns(),
)
