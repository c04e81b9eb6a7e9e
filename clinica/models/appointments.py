"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import CheckConstraint, Column, Date, String, Table, Text, Time

from clinica.models.base import audit_columns, id_column, metadata

appointments = Table(
    "appointments",
    metadata,
    id_column(),
    # References
    Column("patient_id", String(64), nullable=True, index=True),
    Column("sede_id", String(64), nullable=True, index=True),
    Column("professional_id", String(64), nullable=True),
    Column("service_id", String(64), nullable=True),
    Column("company_id", String(64), nullable=True, index=True),
    # Patient snapshot fields (denormalized at booking time)
    Column("patient_name", Text, nullable=False),
    Column("patient_phone", String(30), nullable=True),
    Column("patient_dni", String(20), nullable=True),
    Column("patient_email", Text, nullable=True),
    # Slot
    Column("date", Date, nullable=False, index=True),
    Column("time", Time, nullable=False),
    # Status management
    Column("status", String(20), nullable=False),
    Column("booking_code", String(32), nullable=False, index=True),
    Column("notes", Text, nullable=True),
    *audit_columns(),
    CheckConstraint(
        "status IN ('POR CONFIRMAR', 'CONFIRMADO', 'CANCELADO', 'COMPLETADO', "
        "'NO ASISTIÓ', 'ATENDIDO')",
        name="appointments_status_check",
    ),
)
