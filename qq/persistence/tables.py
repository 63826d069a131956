"""SQLAlchemy table definitions for the qq auth store.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, ForeignKey, Index, MetaData, String, Table, Text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# AUTH IDENTITY TABLE (one row per login email)
# ============================================================================
auth_identity_table = Table(
    "auth_identity",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("provider", String(50), nullable=False, server_default="email_otp"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# OTP CODE TABLE (hashes only)
# ============================================================================
otp_code_table = Table(
    "otp_code",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "auth_id",
        UUID(as_uuid=True),
        ForeignKey("auth_identity.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("code_hash", String(64), nullable=False),  # Hex SHA-256
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_otp_code_code_hash", otp_code_table.c.code_hash)
Index("idx_otp_code_auth_id", otp_code_table.c.auth_id)

# ============================================================================
# USER TABLE (profile, 1:1 with auth_identity)
# ============================================================================
user_table = Table(
    "user",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "auth_id",
        UUID(as_uuid=True),
        ForeignKey("auth_identity.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column("username", String(32), nullable=False, unique=True),
    Column("display_name", String(255), nullable=True),
    Column("privacy_level", String(20), nullable=False, server_default="public"),
    Column("avatar_key", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)
