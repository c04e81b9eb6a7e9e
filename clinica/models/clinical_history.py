"""Clinical history entries table."""

from sqlalchemy import Column, Date, String, Table, Text

from clinica.models.base import audit_columns, id_column, metadata

clinical_history = Table(
    "clinical_history",
    metadata,
    id_column(),
    Column("patient_id", String(64), nullable=False, index=True),
    Column("date", Date, nullable=False),
    Column("professional_id", String(64), nullable=True),
    Column("diagnosis", Text, nullable=False),
    Column("notes", Text, nullable=False),
    Column("recommendations", Text, nullable=True),
    Column("appointment_id", String(64), nullable=True, index=True),
    *audit_columns(),
)
