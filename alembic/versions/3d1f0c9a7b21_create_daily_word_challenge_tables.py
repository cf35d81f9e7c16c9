"""Create daily word challenge tables

Revision ID: 3d1f0c9a7b21
Revises:
Create Date: 2025-12-06 10:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3d1f0c9a7b21"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "daily_challenges",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("challenge_date", sa.Date(), nullable=False),
        sa.Column("language", sa.String(), nullable=False, server_default="en"),
        sa.Column("word", sa.String(), nullable=False),
        sa.Column("definition", sa.Text(), nullable=True),
        sa.Column("example_sentence", sa.Text(), nullable=True),
        sa.Column("hint", sa.Text(), nullable=True),
        sa.Column(
            "difficulty",
            sa.Enum("easy", "medium", "hard", name="challenge_difficulty", native_enum=False),
            nullable=False,
            server_default="medium",
        ),
        sa.Column("meta", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_daily_challenges_id", "daily_challenges", ["id"])
    op.create_index("ix_daily_challenges_challenge_date", "daily_challenges", ["challenge_date"])

    op.create_table(
        "daily_challenge_attempts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("challenge_id", sa.Integer(), sa.ForeignKey("daily_challenges.id"), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("guess", sa.Text(), nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("attempt_number", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_daily_challenge_attempts_id", "daily_challenge_attempts", ["id"])
    op.create_index("ix_daily_challenge_attempts_challenge_id", "daily_challenge_attempts", ["challenge_id"])
    op.create_index("ix_daily_challenge_attempts_user_id", "daily_challenge_attempts", ["user_id"])

    op.create_table(
        "user_challenge_stats",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("total_played", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_solved", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("best_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_played_date", sa.Date(), nullable=True),
        sa.Column("last_solved_date", sa.Date(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    # One stats row per user
    op.create_index("ix_user_challenge_stats_user_id", "user_challenge_stats", ["user_id"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_user_challenge_stats_user_id", table_name="user_challenge_stats")
    op.drop_table("user_challenge_stats")
    op.drop_index("ix_daily_challenge_attempts_user_id", table_name="daily_challenge_attempts")
    op.drop_index("ix_daily_challenge_attempts_challenge_id", table_name="daily_challenge_attempts")
    op.drop_index("ix_daily_challenge_attempts_id", table_name="daily_challenge_attempts")
    op.drop_table("daily_challenge_attempts")
    op.drop_index("ix_daily_challenges_challenge_date", table_name="daily_challenges")
    op.drop_index("ix_daily_challenges_id", table_name="daily_challenges")
    op.drop_table("daily_challenges")
