"""SQLAlchemy table definitions for the recommendation letters service.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# APPLICATIONS TABLE (owned by the student application flow; read here)
# ============================================================================
applications_table = Table(
    "applications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("student_id", UUID, nullable=False),
    Column("legal_name", String(255), nullable=False),
    Column(
        "program_type",
        Enum(
            "undergraduate",
            "graduate",
            "mba",
            "llm",
            "medical",
            "phd",
            name="program_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("application_term", String(50), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_applications_student_id", applications_table.c.student_id)

# ============================================================================
# APPLICATION UNIVERSITIES TABLE (target set, order preserved by position)
# ============================================================================
application_universities_table = Table(
    "application_universities",
    metadata,
    Column(
        "application_id",
        UUID,
        ForeignKey("applications.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("university_id", UUID, primary_key=True),
    Column("position", Integer, nullable=False),
)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "application_id",
        UUID,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("recommender_email", String(255), nullable=False),  # Stored lower-cased
    Column("token", String(255), nullable=False, unique=True),  # URL-safe token
    Column(
        "status",
        Enum(
            "invited",
            "confirmed",
            "expired",
            "deleted",
            name="invitation_status",
            create_type=False,
        ),
        nullable=False,
        server_default="invited",
    ),
    Column("custom_message", Text, nullable=True),
    Column("invited_at", TIMESTAMP(timezone=True), nullable=False),
    Column("invitation_expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("last_sent_at", TIMESTAMP(timezone=True), nullable=False),
    Column("resend_count", Integer, nullable=False, server_default="0"),
    Column("confirmed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("recommender_profile_id", UUID, nullable=True),
)

Index(
    "idx_invitations_application_id_invited_at",
    invitations_table.c.application_id,
    invitations_table.c.invited_at,
)

# Sweep scans pending rows by expiry
Index(
    "idx_invitations_pending_expiry",
    invitations_table.c.invitation_expires_at,
    postgresql_where=invitations_table.c.status == "invited",
)

# At most one invited/confirmed invitation per application and email
Index(
    "idx_invitations_unique_active_email",
    invitations_table.c.application_id,
    func.lower(invitations_table.c.recommender_email),
    unique=True,
    postgresql_where=invitations_table.c.status.in_(["invited", "confirmed"]),
)

# ============================================================================
# RECOMMENDER PROFILES TABLE
# ============================================================================
recommender_profiles_table = Table(
    "recommender_profiles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "invitation_id",
        UUID,
        ForeignKey("invitations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,  # One profile per confirmed invitation
    ),
    Column(
        "application_id",
        UUID,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("email", String(255), nullable=False),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("title", String(255), nullable=False),
    Column("organization", String(255), nullable=False),
    Column("relationship_duration", String(100), nullable=False),
    Column("relationship_type", String(100), nullable=False),
    Column("mobile_phone", String(20), nullable=True),
    Column("password_hash", String(255), nullable=False),
    # Snapshot of the application's universities at confirmation time
    Column("university_ids", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("confirmed_at", TIMESTAMP(timezone=True), nullable=False),
)

Index("idx_recommender_profiles_email", recommender_profiles_table.c.email)
