"""SQLAlchemy ORM models for sellers and car listings."""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class SellerModel(Base):
    """SQLAlchemy model for sellers table."""

    __tablename__ = "sellers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(100), nullable=True)


class CarListingModel(Base):
    """SQLAlchemy model for car_listings table."""

    __tablename__ = "car_listings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    brand_name_en = Column(String(100), nullable=False, index=True)
    brand_name_ar = Column(String(100), nullable=True)
    model_name_en = Column(String(100), nullable=False, index=True)
    model_name_ar = Column(String(100), nullable=True)
    model_year = Column(Integer, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    mileage = Column(Integer, nullable=False)
    governorate_name_en = Column(String(100), nullable=True)
    governorate_name_ar = Column(String(100), nullable=True)
    location = Column(String(255), nullable=True)
    transmission_id = Column(Integer, nullable=True)
    fuel_type_id = Column(Integer, nullable=True)
    body_style_id = Column(Integer, nullable=True)
    seller_type_id = Column(Integer, nullable=True)
    approved = Column(Boolean, nullable=False, default=False)
    sold = Column(Boolean, nullable=False, default=False)
    archived = Column(Boolean, nullable=False, default=False)
    expired = Column(Boolean, nullable=False, default=False)
    is_user_active = Column(Boolean, nullable=False, default=True)
    expiration_date = Column(DateTime(timezone=True), nullable=True)
    seller_id = Column(Integer, ForeignKey("sellers.id"), nullable=True, index=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    seller = relationship(SellerModel, lazy="joined")
