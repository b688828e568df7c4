"""create_users_and_logs

Revision ID: 3f1c2a7d9e04
Revises:
Create Date: 2026-01-10 09:00:12.118204+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a7d9e04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(*, mutable: bool) -> list[sa.Column]:
    columns = [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        )
    ]
    if mutable:
        columns.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.text("now()"),
                nullable=False,
            )
        )
    return columns


def upgrade() -> None:
    """Create users, user_profiles, user_passwords and logs tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(mutable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column(
            "type",
            sa.Enum(
                "GUEST", "USER", "ADMIN",
                name="user_type",
                native_enum=False,
                length=16,
            ),
            nullable=False,
        ),
        sa.Column("roles", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_created_at", "users", ["created_at"])

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(mutable=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("username", sa.String(length=100), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index("ix_user_profiles_created_at", "user_profiles", ["created_at"])

    op.create_table(
        "user_passwords",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(mutable=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("hash", sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index(
        "ix_user_passwords_created_at", "user_passwords", ["created_at"]
    )

    op.create_table(
        "logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(mutable=False),
        sa.Column(
            "type",
            sa.Enum(
                "LOG", "INFO", "ERROR", "WARNING", "DEBUG", "CRITICAL",
                name="log_type",
                native_enum=False,
                length=16,
            ),
            nullable=False,
        ),
        sa.Column(
            "origin",
            sa.Enum("API", name="log_origin", native_enum=False, length=16),
            nullable=False,
        ),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_logs_created_at", "logs", ["created_at"])
    op.create_index("idx_logs_type_created", "logs", ["type", "created_at"])


def downgrade() -> None:
    """Drop all tables created in upgrade()."""
    op.drop_index("idx_logs_type_created", table_name="logs")
    op.drop_index("ix_logs_created_at", table_name="logs")
    op.drop_table("logs")
    op.drop_index("ix_user_passwords_created_at", table_name="user_passwords")
    op.drop_table("user_passwords")
    op.drop_index("ix_user_profiles_created_at", table_name="user_profiles")
    op.drop_table("user_profiles")
    op.drop_index("ix_users_created_at", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
