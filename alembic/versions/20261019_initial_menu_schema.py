"""Initial migration - users, categories, menus and user menu assignments

Revision ID: 20261019_init
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019_init"
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum("admin", "staff", "manager", "user", name="userrole")
menu_type = sa.Enum("link", "filter", name="menutype")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=24), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("role", user_role, nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "categories",
        sa.Column("id", sa.String(length=24), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_categories_name"), "categories", ["name"], unique=True)

    op.create_table(
        "menus",
        sa.Column("id", sa.String(length=24), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("link", sa.String(length=500), nullable=False),
        sa.Column("menu_type", menu_type, nullable=False, server_default="link"),
        sa.Column("filter_province", sa.String(length=200), nullable=True),
        sa.Column("filter_district", sa.String(length=200), nullable=True),
        sa.Column("filter_categories", sa.JSON(), nullable=True),
        sa.Column("parent_id", sa.String(length=24), nullable=True),
        sa.Column("order", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("is_global", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("user_id", sa.String(length=24), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["parent_id"], ["menus.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_menus_parent_id"), "menus", ["parent_id"], unique=False)
    op.create_index("ix_menus_parent_order", "menus", ["parent_id", "order"], unique=False)

    op.create_table(
        "user_menus",
        sa.Column("id", sa.String(length=24), nullable=False),
        sa.Column("user_id", sa.String(length=24), nullable=False),
        sa.Column("menu_id", sa.String(length=24), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["menu_id"], ["menus.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "menu_id", name="uq_user_menu"),
    )
    op.create_index(op.f("ix_user_menus_user_id"), "user_menus", ["user_id"], unique=False)
    op.create_index(op.f("ix_user_menus_menu_id"), "user_menus", ["menu_id"], unique=False)


def downgrade() -> None:
    # Drop assignment table first (due to foreign keys)
    op.drop_index(op.f("ix_user_menus_menu_id"), table_name="user_menus")
    op.drop_index(op.f("ix_user_menus_user_id"), table_name="user_menus")
    op.drop_table("user_menus")

    op.drop_index("ix_menus_parent_order", table_name="menus")
    op.drop_index(op.f("ix_menus_parent_id"), table_name="menus")
    op.drop_table("menus")

    op.drop_index(op.f("ix_categories_name"), table_name="categories")
    op.drop_table("categories")

    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")

    menu_type.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
