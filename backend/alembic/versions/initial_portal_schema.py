"""initial portal schema

Creates the Better-Auth user/session tables (owned by the frontend's
Better-Auth instance, created here so schema ownership is explicit), portal
user profiles, patient records, AI instructions, the chat log, and the
clinical tables.

Revision ID: initial_portal_schema
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "initial_portal_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- Better-Auth ---
    op.create_table(
        "user",
        sa.Column("id", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("emailVerified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("createdAt", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updatedAt", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "session",
        sa.Column("id", sa.Text(), nullable=False),
        sa.Column("expiresAt", sa.DateTime(timezone=True), nullable=False),
        sa.Column("token", sa.Text(), nullable=False),
        sa.Column("createdAt", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updatedAt", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("ipAddress", sa.Text(), nullable=True),
        sa.Column("userAgent", sa.Text(), nullable=True),
        sa.Column("userId", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_session_token", "session", ["token"], unique=True)
    op.create_index("ix_session_userId", "session", ["userId"])

    # --- Portal profiles ---
    user_type_enum = sa.Enum("DOCTOR", "PATIENT", name="user_type", create_constraint=True)
    op.create_table(
        "user_profiles",
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("user_type", user_type_enum, nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("specialization", sa.String(length=255), nullable=True),
        sa.Column("license_number", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("user_id"),
    )
    op.create_index("ix_user_profiles_user_type", "user_profiles", ["user_type"])

    # --- Patient records ---
    op.create_table(
        "patient_records",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("doctor_id", sa.Text(), nullable=False),
        sa.Column("linked_auth_uid", sa.Text(), nullable=True, comment="Identity-provider uid of the patient once linked"),
        sa.Column("patient_specific_prompts", sa.Text(), nullable=True, comment="Doctor-authored guidance for the assistant, scoped to this patient"),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("id_number", sa.String(length=64), nullable=False, comment="Doctor-assigned patient number, e.g. P001"),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("date_of_birth", sa.String(length=10), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("phone_number", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_patient_records_doctor_id", "patient_records", ["doctor_id"])
    op.create_index("ix_patient_records_linked_auth_uid", "patient_records", ["linked_auth_uid"])
    op.create_index("idx_patient_records_doctor_created", "patient_records", ["doctor_id", "created_at"])

    # --- AI instructions ---
    op.create_table(
        "ai_instructions",
        sa.Column("doctor_id", sa.Text(), nullable=False),
        sa.Column("instruction_text", sa.Text(), nullable=False),
        sa.Column("prompt_text", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("doctor_id"),
    )

    # --- Chat log ---
    sender_role_enum = sa.Enum("PATIENT", "ASSISTANT", name="sender_role", create_constraint=True)
    op.create_table(
        "chat_messages",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("patient_auth_uid", sa.Text(), nullable=False),
        sa.Column("sender_role", sender_role_enum, nullable=False),
        sa.Column("sender_name", sa.String(length=255), nullable=False),
        sa.Column("message_text", sa.Text(), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_chat_messages_patient_sent", "chat_messages", ["patient_auth_uid", "sent_at"])

    # --- Clinical ---
    op.create_table(
        "diagnoses",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("patient_record_id", sa.String(length=64), sa.ForeignKey("patient_records.id", ondelete="CASCADE"), nullable=False),
        sa.Column("diagnosis_text", sa.Text(), nullable=False),
        sa.Column("diagnosed_by", sa.Text(), nullable=False),
        sa.Column("doctor_name", sa.String(length=255), nullable=True),
        sa.Column("diagnosis_date", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_diagnoses_patient_record_id", "diagnoses", ["patient_record_id"])

    op.create_table(
        "appointments",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("patient_auth_uid", sa.Text(), nullable=False),
        sa.Column("patient_record_id", sa.String(length=64), sa.ForeignKey("patient_records.id", ondelete="SET NULL"), nullable=True),
        sa.Column("doctor_id", sa.Text(), nullable=False),
        sa.Column("appointment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("patient_name", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_appointments_patient_auth_uid", "appointments", ["patient_auth_uid"])
    op.create_index("ix_appointments_doctor_id", "appointments", ["doctor_id"])

    op.create_table(
        "pill_reminders",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("patient_auth_uid", sa.Text(), nullable=False),
        sa.Column("medication_name", sa.String(length=255), nullable=False),
        sa.Column("dosage", sa.String(length=255), nullable=False),
        sa.Column("frequency", sa.String(length=255), nullable=False),
        sa.Column("times", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_pill_reminders_patient_auth_uid", "pill_reminders", ["patient_auth_uid"])


def downgrade() -> None:
    op.drop_table("pill_reminders")
    op.drop_table("appointments")
    op.drop_table("diagnoses")
    op.drop_table("chat_messages")
    op.drop_table("ai_instructions")
    op.drop_table("patient_records")
    op.drop_table("user_profiles")
    op.drop_table("session")
    op.drop_table("user")
    op.execute("DROP TYPE IF EXISTS sender_role")
    op.execute("DROP TYPE IF EXISTS user_type")
