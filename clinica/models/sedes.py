"""Sede (clinic location) table."""

from sqlalchemy import JSON, Column, String, Table, Text

from clinica.models.base import audit_columns, id_column, metadata

sedes = Table(
    "sedes",
    metadata,
    id_column(),
    Column("name", Text, nullable=False, index=True),
    Column("address", Text, nullable=False),
    Column("phone", String(30), nullable=True),
    Column("whatsapp", String(30), nullable=True),
    # Example: {"Lunes": {"isOpen": true, "intervals": [{"start": "09:00", "end": "13:00"}]}}
    Column("availability", JSON, nullable=True),
    Column("company_id", String(64), nullable=True, index=True),
    *audit_columns(),
)
