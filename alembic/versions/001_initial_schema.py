"""Initial schema - companies, sedes, staff, patients, appointments, history.

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "companies",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("primary_color", sa.String(length=20), nullable=True),
        sa.Column("logo", sa.Text(), nullable=True),
        sa.Column("portal_hero", sa.Text(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "sedes",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("whatsapp", sa.String(length=30), nullable=True),
        sa.Column("availability", sa.JSON(), nullable=True),
        sa.Column("company_id", sa.String(length=64), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sedes_name", "sedes", ["name"])
    op.create_index("ix_sedes_company_id", "sedes", ["company_id"])

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("access_key", sa.Text(), nullable=True),
        sa.Column("role", sa.String(length=30), nullable=False),
        sa.Column("company_id", sa.String(length=64), nullable=True),
        sa.Column("sede_ids", sa.JSON(), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="users_email_key"),
    )
    op.create_index("ix_users_access_key", "users", ["access_key"])
    op.create_index("ix_users_company_id", "users", ["company_id"])

    op.create_table(
        "professionals",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("specialty", sa.Text(), nullable=True),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column("sede_ids", sa.JSON(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("company_id", sa.String(length=64), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_professionals_user_id", "professionals", ["user_id"])
    op.create_index("ix_professionals_company_id", "professionals", ["company_id"])

    op.create_table(
        "patients",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("document_id", sa.String(length=20), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("company_id", sa.String(length=64), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_patients_name", "patients", ["name"])
    op.create_index("ix_patients_document_id", "patients", ["document_id"])
    op.create_index("ix_patients_company_id", "patients", ["company_id"])

    op.create_table(
        "appointments",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("patient_id", sa.String(length=64), nullable=True),
        sa.Column("sede_id", sa.String(length=64), nullable=True),
        sa.Column("professional_id", sa.String(length=64), nullable=True),
        sa.Column("service_id", sa.String(length=64), nullable=True),
        sa.Column("company_id", sa.String(length=64), nullable=True),
        sa.Column("patient_name", sa.Text(), nullable=False),
        sa.Column("patient_phone", sa.String(length=30), nullable=True),
        sa.Column("patient_dni", sa.String(length=20), nullable=True),
        sa.Column("patient_email", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.Time(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("booking_code", sa.String(length=32), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_audit_columns(),
        sa.CheckConstraint(
            "status IN ('POR CONFIRMAR', 'CONFIRMADO', 'CANCELADO', 'COMPLETADO', "
            "'NO ASISTIÓ', 'ATENDIDO')",
            name="appointments_status_check",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_appointments_patient_id", "appointments", ["patient_id"])
    op.create_index("ix_appointments_sede_id", "appointments", ["sede_id"])
    op.create_index("ix_appointments_company_id", "appointments", ["company_id"])
    op.create_index("ix_appointments_date", "appointments", ["date"])
    op.create_index("ix_appointments_booking_code", "appointments", ["booking_code"])

    op.create_table(
        "clinical_history",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("patient_id", sa.String(length=64), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("professional_id", sa.String(length=64), nullable=True),
        sa.Column("diagnosis", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("recommendations", sa.Text(), nullable=True),
        sa.Column("appointment_id", sa.String(length=64), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_clinical_history_patient_id", "clinical_history", ["patient_id"])
    op.create_index("ix_clinical_history_appointment_id", "clinical_history", ["appointment_id"])


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index("ix_clinical_history_appointment_id", table_name="clinical_history")
    op.drop_index("ix_clinical_history_patient_id", table_name="clinical_history")
    op.drop_table("clinical_history")

    op.drop_index("ix_appointments_booking_code", table_name="appointments")
    op.drop_index("ix_appointments_date", table_name="appointments")
    op.drop_index("ix_appointments_company_id", table_name="appointments")
    op.drop_index("ix_appointments_sede_id", table_name="appointments")
    op.drop_index("ix_appointments_patient_id", table_name="appointments")
    op.drop_table("appointments")

    op.drop_index("ix_patients_company_id", table_name="patients")
    op.drop_index("ix_patients_document_id", table_name="patients")
    op.drop_index("ix_patients_name", table_name="patients")
    op.drop_table("patients")

    op.drop_index("ix_professionals_company_id", table_name="professionals")
    op.drop_index("ix_professionals_user_id", table_name="professionals")
    op.drop_table("professionals")

    op.drop_index("ix_users_company_id", table_name="users")
    op.drop_index("ix_users_access_key", table_name="users")
    op.drop_table("users")

    op.drop_index("ix_sedes_company_id", table_name="sedes")
    op.drop_index("ix_sedes_name", table_name="sedes")
    op.drop_table("sedes")

    op.drop_table("companies")
