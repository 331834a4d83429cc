"""SQLAlchemy table definitions for Genie.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PRINCIPALS TABLE (Identity store: authenticated identities and claims)
# ============================================================================
principals_table = Table(
    "principals",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("email", String(320), nullable=True),
    Column(
        "user_metadata", JSONB, nullable=False, server_default=text("'{}'::jsonb")
    ),
    Column("claims", JSONB, nullable=False, server_default=text("'{}'::jsonb")),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_principals_email", principals_table.c.email)

# ============================================================================
# SCHOOLS / CLASSROOMS TABLES
# ============================================================================
schools_table = Table(
    "schools",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("name", String(200), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

classrooms_table = Table(
    "classrooms",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "school_id", UUID, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False
    ),
    Column("name", String(200), nullable=False),
    Column("grade", String(10), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_classrooms_school_id", classrooms_table.c.school_id)

# ============================================================================
# PROFILES TABLE (one row per principal)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column(
        "id", UUID, ForeignKey("principals.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("role", String(20), nullable=False),
    Column("email", String(320), nullable=True),
    Column("full_name", String(200), nullable=True),
    Column(
        "school_id", UUID, ForeignKey("schools.id", ondelete="SET NULL"), nullable=True
    ),
    Column(
        "classroom_id",
        UUID,
        ForeignKey("classrooms.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("child_first_name", String(100), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "role IN ('DIRECTOR', 'TEACHER', 'PARENT')", name="check_profile_role"
    ),
)

Index("idx_profiles_school_id", profiles_table.c.school_id)
Index("idx_profiles_classroom_id", profiles_table.c.classroom_id)

# ============================================================================
# INVITATION LINKS TABLE (the invitation ledger)
# ============================================================================
invitation_links_table = Table(
    "invitation_links",
    metadata,
    Column("token", Text, primary_key=True),
    Column(
        "school_id", UUID, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "classroom_id",
        UUID,
        ForeignKey("classrooms.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("intended_role", String(20), nullable=False),
    Column(
        "created_by",
        UUID,
        ForeignKey("principals.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("used_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "intended_role IN ('PARENT', 'TEACHER')",
        name="check_invitation_intended_role",
    ),
)

# Covers the issuer's "newest active link for (classroom, role)" lookup
Index(
    "idx_invitation_links_active",
    invitation_links_table.c.classroom_id,
    invitation_links_table.c.intended_role,
    invitation_links_table.c.expires_at,
)
