"""initial_schema

Create the schema for recommender invitations:
- Applications and their target universities (read by the invitation flow)
- Invitations (one active invitation per application and recommender email)
- Recommender profiles (created once, when an invitation is confirmed)

Revision ID: 3c1f9a2b7d40
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE program_type AS ENUM (
                'undergraduate', 'graduate', 'mba', 'llm', 'medical', 'phd'
            );
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invitation_status AS ENUM (
                'invited', 'confirmed', 'expired', 'deleted'
            );
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # APPLICATIONS table
    # ========================================================================
    op.create_table(
        "applications",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("student_id", sa.UUID(), nullable=False),
        sa.Column("legal_name", sa.String(255), nullable=False),
        sa.Column(
            "program_type",
            postgresql.ENUM(name="program_type", create_type=False),
            nullable=False,
        ),
        sa.Column("application_term", sa.String(50), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_applications_student_id", "applications", ["student_id"])

    op.create_table(
        "application_universities",
        sa.Column("application_id", sa.UUID(), nullable=False),
        sa.Column("university_id", sa.UUID(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["application_id"], ["applications.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("application_id", "university_id"),
    )

    # ========================================================================
    # INVITATIONS table
    # ========================================================================
    op.create_table(
        "invitations",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("application_id", sa.UUID(), nullable=False),
        sa.Column("recommender_email", sa.String(255), nullable=False),
        sa.Column("token", sa.String(255), nullable=False, unique=True),
        sa.Column(
            "status",
            postgresql.ENUM(name="invitation_status", create_type=False),
            nullable=False,
            server_default="invited",
        ),
        sa.Column("custom_message", sa.Text(), nullable=True),
        sa.Column("invited_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "invitation_expires_at", sa.TIMESTAMP(timezone=True), nullable=False
        ),
        sa.Column("last_sent_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("resend_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("confirmed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("recommender_profile_id", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(
            ["application_id"], ["applications.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_invitations_application_id_invited_at",
        "invitations",
        ["application_id", "invited_at"],
    )

    op.execute("""
        CREATE INDEX idx_invitations_pending_expiry
        ON invitations (invitation_expires_at)
        WHERE status = 'invited'
    """)

    # Only one invited/confirmed invitation per application and email;
    # concurrent duplicate inserts fail here
    op.execute("""
        CREATE UNIQUE INDEX idx_invitations_unique_active_email
        ON invitations (application_id, lower(recommender_email))
        WHERE status IN ('invited', 'confirmed')
    """)

    # ========================================================================
    # RECOMMENDER PROFILES table
    # ========================================================================
    op.create_table(
        "recommender_profiles",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("invitation_id", sa.UUID(), nullable=False, unique=True),
        sa.Column("application_id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("organization", sa.String(255), nullable=False),
        sa.Column("relationship_duration", sa.String(100), nullable=False),
        sa.Column("relationship_type", sa.String(100), nullable=False),
        sa.Column("mobile_phone", sa.String(20), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column(
            "university_ids",
            postgresql.ARRAY(sa.UUID()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("confirmed_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["invitation_id"], ["invitations.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["application_id"], ["applications.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_recommender_profiles_email", "recommender_profiles", ["email"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("recommender_profiles")
    op.drop_table("invitations")
    op.drop_table("application_universities")
    op.drop_table("applications")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS invitation_status")
    op.execute("DROP TYPE IF EXISTS program_type")
