"""Create sellers and car_listings tables

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "sellers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sellers_username"), "sellers", ["username"], unique=True)

    op.create_table(
        "car_listings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("brand_name_en", sa.String(length=100), nullable=False),
        sa.Column("brand_name_ar", sa.String(length=100), nullable=True),
        sa.Column("model_name_en", sa.String(length=100), nullable=False),
        sa.Column("model_name_ar", sa.String(length=100), nullable=True),
        sa.Column("model_year", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False),
        sa.Column("governorate_name_en", sa.String(length=100), nullable=True),
        sa.Column("governorate_name_ar", sa.String(length=100), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("transmission_id", sa.Integer(), nullable=True),
        sa.Column("fuel_type_id", sa.Integer(), nullable=True),
        sa.Column("body_style_id", sa.Integer(), nullable=True),
        sa.Column("seller_type_id", sa.Integer(), nullable=True),
        sa.Column("approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sold", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("expired", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_user_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("expiration_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("seller_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["seller_id"], ["sellers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_car_listings_brand_name_en"), "car_listings", ["brand_name_en"], unique=False)
    op.create_index(op.f("ix_car_listings_model_name_en"), "car_listings", ["model_name_en"], unique=False)
    op.create_index(op.f("ix_car_listings_seller_id"), "car_listings", ["seller_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_car_listings_seller_id"), table_name="car_listings")
    op.drop_index(op.f("ix_car_listings_model_name_en"), table_name="car_listings")
    op.drop_index(op.f("ix_car_listings_brand_name_en"), table_name="car_listings")
    op.drop_table("car_listings")
    op.drop_index(op.f("ix_sellers_username"), table_name="sellers")
    op.drop_table("sellers")
