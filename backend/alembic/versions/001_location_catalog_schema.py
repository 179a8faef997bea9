"""Location catalog schema: users, categories, locations, owners, tags, votes, photos

Revision ID: 001_location_catalog
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy import inspect

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_location_catalog"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    tables = inspect(bind).get_table_names()

    if "users" not in tables:
        op.create_table(
            "users",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("email", sa.String(), nullable=True),
            sa.Column("name", sa.String(), nullable=True),
            sa.Column("role", sa.String(), nullable=False, server_default="user"),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )

    if "categories" not in tables:
        op.create_table(
            "categories",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("slug", sa.String(), nullable=False),
            sa.Column("name_vi", sa.String(), nullable=False),
            sa.Column("name_en", sa.String(), nullable=True),
            sa.Column("icon", sa.String(), nullable=True),
            sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_categories_slug"), "categories", ["slug"], unique=True)

    if "locations" not in tables:
        op.create_table(
            "locations",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("name_vi", sa.String(), nullable=False),
            sa.Column("name_en", sa.String(), nullable=True),
            sa.Column("slug_vi", sa.String(), nullable=False),
            sa.Column("slug_en", sa.String(), nullable=True),
            sa.Column("address_vi", sa.String(), nullable=False),
            sa.Column("address_en", sa.String(), nullable=True),
            sa.Column("district_vi", sa.String(), nullable=False),
            sa.Column("district_en", sa.String(), nullable=True),
            sa.Column("cuisine_vi", sa.String(), nullable=False),
            sa.Column("cuisine_en", sa.String(), nullable=True),
            sa.Column("description_vi", sa.String(), nullable=True),
            sa.Column("description_en", sa.String(), nullable=True),
            sa.Column("latitude", sa.Float(), nullable=False),
            sa.Column("longitude", sa.Float(), nullable=False),
            sa.Column("category", sa.String(), nullable=False),
            sa.Column("category_id", sa.String(), nullable=True),
            sa.Column("price_range", sa.String(), nullable=False),
            sa.Column("phone", sa.String(), nullable=True),
            sa.Column("website", sa.String(), nullable=True),
            sa.Column("hours_open", sa.String(), nullable=True),
            sa.Column("hours_close", sa.String(), nullable=True),
            sa.Column("status", sa.String(), nullable=False, server_default="pending"),
            sa.Column("submitted_by", sa.String(), nullable=False),
            sa.Column("approved_by", sa.String(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=False),
            sa.CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_locations_latitude"),
            sa.CheckConstraint("longitude BETWEEN -180 AND 180", name="ck_locations_longitude"),
            sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
            sa.ForeignKeyConstraint(["submitted_by"], ["users.id"]),
            sa.ForeignKeyConstraint(["approved_by"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_locations_slug_vi"), "locations", ["slug_vi"], unique=True)
        op.create_index(op.f("ix_locations_slug_en"), "locations", ["slug_en"], unique=True)
        op.create_index(op.f("ix_locations_status"), "locations", ["status"], unique=False)
        op.create_index(op.f("ix_locations_created_at"), "locations", ["created_at"], unique=False)
        op.create_index(op.f("ix_locations_district_vi"), "locations", ["district_vi"], unique=False)
        op.create_index(op.f("ix_locations_cuisine_vi"), "locations", ["cuisine_vi"], unique=False)
        op.create_index(op.f("ix_locations_category"), "locations", ["category"], unique=False)
        op.create_index(op.f("ix_locations_category_id"), "locations", ["category_id"], unique=False)
        op.create_index(op.f("ix_locations_price_range"), "locations", ["price_range"], unique=False)

    if "location_owners" not in tables:
        op.create_table(
            "location_owners",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("location_id", sa.String(), nullable=False),
            sa.Column("user_id", sa.String(), nullable=False),
            sa.Column("status", sa.String(), nullable=False, server_default="pending"),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("location_id", "user_id", name="uq_location_owner"),
        )
        op.create_index(op.f("ix_location_owners_location_id"), "location_owners", ["location_id"], unique=False)
        op.create_index(op.f("ix_location_owners_user_id"), "location_owners", ["user_id"], unique=False)

    if "tags" not in tables:
        op.create_table(
            "tags",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("name_vi", sa.String(), nullable=False),
            sa.Column("name_en", sa.String(), nullable=True),
            sa.Column("category", sa.String(), nullable=False),
            sa.Column("icon", sa.String(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )

    if "location_tags" not in tables:
        # Composite PK is the one-vote-per-(location, tag, user) guarantee
        op.create_table(
            "location_tags",
            sa.Column("location_id", sa.String(), nullable=False),
            sa.Column("tag_id", sa.String(), nullable=False),
            sa.Column("user_id", sa.String(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("location_id", "tag_id", "user_id"),
        )
        op.create_index(op.f("ix_location_tags_tag_id"), "location_tags", ["tag_id"], unique=False)
        op.create_index(op.f("ix_location_tags_user_id"), "location_tags", ["user_id"], unique=False)

    if "photos" not in tables:
        op.create_table(
            "photos",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("location_id", sa.String(), nullable=False),
            sa.Column("user_id", sa.String(), nullable=False),
            sa.Column("url", sa.String(), nullable=False),
            sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_photos_location_id"), "photos", ["location_id"], unique=False)


def downgrade() -> None:
    op.drop_table("photos")
    op.drop_table("location_tags")
    op.drop_table("tags")
    op.drop_table("location_owners")
    op.drop_table("locations")
    op.drop_table("categories")
    op.drop_table("users")
