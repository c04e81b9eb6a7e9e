"""Patient table."""

from sqlalchemy import Column, Date, String, Table, Text

from clinica.models.base import audit_columns, id_column, metadata

patients = Table(
    "patients",
    metadata,
    id_column(),
    Column("name", Text, nullable=False, index=True),
    Column("email", Text, nullable=True),
    Column("phone", String(30), nullable=True),
    Column("document_id", String(20), nullable=True, index=True),
    Column("birth_date", Date, nullable=True),
    Column("company_id", String(64), nullable=True, index=True),
    *audit_columns(),
)
