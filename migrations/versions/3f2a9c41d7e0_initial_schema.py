"""initial_schema

Create the schema for the invitation and role-issuance flow:
- Principals (identity store: signup metadata and session claims)
- Schools and Classrooms
- Profiles (one per principal: role and placement)
- Invitation links (the invitation ledger)

Revision ID: 3f2a9c41d7e0
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2a9c41d7e0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "principals",
        sa.Column("id", postgresql.UUID(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column(
            "user_metadata",
            postgresql.JSONB(),
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        sa.Column(
            "claims",
            postgresql.JSONB(),
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_principals_email", "principals", ["email"])

    op.create_table(
        "schools",
        sa.Column("id", postgresql.UUID(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "classrooms",
        sa.Column("id", postgresql.UUID(), nullable=False),
        sa.Column("school_id", postgresql.UUID(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("grade", sa.String(length=10), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_classrooms_school_id", "classrooms", ["school_id"])

    op.create_table(
        "profiles",
        sa.Column("id", postgresql.UUID(), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("full_name", sa.String(length=200), nullable=True),
        sa.Column("school_id", postgresql.UUID(), nullable=True),
        sa.Column("classroom_id", postgresql.UUID(), nullable=True),
        sa.Column("child_first_name", sa.String(length=100), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "role IN ('DIRECTOR', 'TEACHER', 'PARENT')", name="check_profile_role"
        ),
        sa.ForeignKeyConstraint(["id"], ["principals.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["classroom_id"], ["classrooms.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_profiles_school_id", "profiles", ["school_id"])
    op.create_index("idx_profiles_classroom_id", "profiles", ["classroom_id"])

    op.create_table(
        "invitation_links",
        sa.Column("token", sa.Text(), nullable=False),
        sa.Column("school_id", postgresql.UUID(), nullable=False),
        sa.Column("classroom_id", postgresql.UUID(), nullable=False),
        sa.Column("intended_role", sa.String(length=20), nullable=False),
        sa.Column("created_by", postgresql.UUID(), nullable=True),
        sa.Column("expires_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("used_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "intended_role IN ('PARENT', 'TEACHER')",
            name="check_invitation_intended_role",
        ),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["classroom_id"], ["classrooms.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["created_by"], ["principals.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("token"),
    )
    op.create_index(
        "idx_invitation_links_active",
        "invitation_links",
        ["classroom_id", "intended_role", "expires_at"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_invitation_links_active", table_name="invitation_links")
    op.drop_table("invitation_links")
    op.drop_index("idx_profiles_classroom_id", table_name="profiles")
    op.drop_index("idx_profiles_school_id", table_name="profiles")
    op.drop_table("profiles")
    op.drop_index("idx_classrooms_school_id", table_name="classrooms")
    op.drop_table("classrooms")
    op.drop_table("schools")
    op.drop_index("idx_principals_email", table_name="principals")
    op.drop_table("principals")
