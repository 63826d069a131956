"""initial_auth_schema

Create the passwordless authentication schema:
- auth_identity (one row per login email)
- otp_code (SHA-256 hashes of issued one-time codes)
- user (profile, 1:1 with auth_identity)

Revision ID: 3f1c9a2d7b40
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # AUTH_IDENTITY table
    # ========================================================================
    op.create_table(
        "auth_identity",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column(
            "provider",
            sa.String(length=50),
            server_default="email_otp",
            nullable=False,
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="auth_identity_email_key"),
    )

    # ========================================================================
    # OTP_CODE table (hashes only, never plaintext)
    # ========================================================================
    op.create_table(
        "otp_code",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("auth_id", sa.UUID(), nullable=False),
        sa.Column("code_hash", sa.String(length=64), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["auth_id"], ["auth_identity.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_otp_code_code_hash", "otp_code", ["code_hash"])
    op.create_index("idx_otp_code_auth_id", "otp_code", ["auth_id"])

    # ========================================================================
    # USER table ("user" is reserved, always quoted)
    # ========================================================================
    op.create_table(
        "user",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("auth_id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(length=32), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column(
            "privacy_level",
            sa.String(length=20),
            server_default="public",
            nullable=False,
        ),
        sa.Column("avatar_key", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["auth_id"], ["auth_identity.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("auth_id", name="user_auth_id_key"),
        sa.UniqueConstraint("username", name="user_username_key"),
        sa.CheckConstraint(
            "privacy_level IN ('public', 'private')", name="user_privacy_level_check"
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("user")
    op.drop_index("idx_otp_code_auth_id", table_name="otp_code")
    op.drop_index("idx_otp_code_code_hash", table_name="otp_code")
    op.drop_table("otp_code")
    op.drop_table("auth_identity")
