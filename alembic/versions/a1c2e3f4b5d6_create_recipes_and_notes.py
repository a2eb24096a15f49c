"""Create recipes and notes

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-19 12:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = 'a1c2e3f4b5d6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("image", sa.String(), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("cook_time", sa.String(), nullable=False, server_default=""),
        sa.Column("prep_time", sa.String(), nullable=False, server_default=""),
        sa.Column("total_time", sa.String(), nullable=False, server_default=""),
        sa.Column("category", sa.JSON(), nullable=False),
        sa.Column("cuisine", sa.JSON(), nullable=False),
        sa.Column("ingredients", sa.JSON(), nullable=False),
        sa.Column("instructions", sa.JSON(), nullable=False),
        sa.Column("yield", sa.String(), nullable=False, server_default=""),
        sa.Column("source_url", sa.String(), nullable=True),
        sa.Column("parsing_method", sa.String(length=11), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_recipes_id", "recipes", ["id"])
    op.create_index("ix_recipes_user_id", "recipes", ["user_id"])

    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=4), nullable=False),
        sa.Column("is_from_ai", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_notes_id", "notes", ["id"])
    op.create_index("ix_notes_recipe_id", "notes", ["recipe_id"])
    op.create_index("ix_notes_user_id", "notes", ["user_id"])
    op.create_index("ix_notes_recipe_user", "notes", ["recipe_id", "user_id"])


def downgrade() -> None:
    op.drop_index("ix_notes_recipe_user", table_name="notes")
    op.drop_index("ix_notes_user_id", table_name="notes")
    op.drop_index("ix_notes_recipe_id", table_name="notes")
    op.drop_index("ix_notes_id", table_name="notes")
    op.drop_table("notes")
    op.drop_index("ix_recipes_user_id", table_name="recipes")
    op.drop_index("ix_recipes_id", table_name="recipes")
    op.drop_table("recipes")
