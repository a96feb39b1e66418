"""Postgres-backed car listing repository adapter."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.adapters.outbound.listing.models import CarListingModel, SellerModel
from app.adapters.outbound.listing.predicate_compiler import compile_predicates
from app.application.dtos.listing import ListingPage, ListingSummary
from app.application.ports.car_listing_repository import CarListingRepository
from app.domain.entities.car_listing import CarListing, Seller
from app.domain.value_objects.predicate import PredicateSet
from app.infrastructure.db import get_db_session
from app.infrastructure.logging.logger import logger

# Columns copied one-to-one between the entity and the model
_LISTING_COLUMNS = (
    "title",
    "description",
    "brand_name_en",
    "brand_name_ar",
    "model_name_en",
    "model_name_ar",
    "model_year",
    "price",
    "mileage",
    "governorate_name_en",
    "governorate_name_ar",
    "location",
    "transmission_id",
    "fuel_type_id",
    "body_style_id",
    "seller_type_id",
    "approved",
    "sold",
    "archived",
    "expired",
    "is_user_active",
    "expiration_date",
    "created_at",
    "updated_at",
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite returns naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PostgresCarListingRepository(CarListingRepository):
    """Postgres implementation of car listing repository."""

    def __init__(self) -> None:
        """Initialize Postgres repository."""
        pass

    def _model_to_entity(self, model: CarListingModel) -> CarListing:
        """
        Convert CarListingModel to CarListing entity.

        Args:
            model: SQLAlchemy model instance

        Returns:
            CarListing entity
        """
        values = {name: getattr(model, name) for name in _LISTING_COLUMNS}
        for name in ("expiration_date", "created_at", "updated_at"):
            values[name] = _as_utc(values[name])

        seller = None
        if model.seller is not None:
            seller = Seller(
                id=model.seller.id,
                username=model.seller.username,
                email=model.seller.email,
            )
        return CarListing(id=model.id, seller=seller, **values)

    def _resolve_seller_id(self, db: Session, seller: Optional[Seller]) -> Optional[int]:
        """
        Find (or create) the seller row for a listing's seller.

        Args:
            db: Active session
            seller: Seller entity, or None

        Returns:
            Seller row id, or None when the listing has no seller
        """
        if seller is None:
            return None
        if seller.id is not None:
            return seller.id
        if not seller.username:
            return None

        model = db.query(SellerModel).filter(SellerModel.username == seller.username).first()
        if model is None:
            model = SellerModel(username=seller.username, email=seller.email)
            db.add(model)
            db.flush()
        return model.id

    async def get(self, listing_id: int) -> Optional[CarListing]:
        """
        Get a listing by id.

        Args:
            listing_id: Listing identifier

        Returns:
            CarListing entity, or None if not found
        """
        db: Session = get_db_session()
        try:
            model = db.query(CarListingModel).filter(CarListingModel.id == listing_id).first()
            if model is None:
                return None
            return self._model_to_entity(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting listing {listing_id}: {str(e)}")
            raise
        finally:
            db.close()

    async def save(self, listing: CarListing) -> CarListing:
        """
        Save a listing (insert when it has no id, update otherwise).

        Args:
            listing: Listing entity to save

        Returns:
            The saved listing, with its id set
        """
        db: Session = get_db_session()
        try:
            model = None
            if listing.id is not None:
                model = db.query(CarListingModel).filter(CarListingModel.id == listing.id).first()
            if model is None:
                model = CarListingModel(id=listing.id)
                db.add(model)

            for name in _LISTING_COLUMNS:
                setattr(model, name, getattr(listing, name))
            model.seller_id = self._resolve_seller_id(db, listing.seller)

            db.commit()
            db.refresh(model)
            return self._model_to_entity(model)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while saving listing {listing.id}: {str(e)}")
            raise
        finally:
            db.close()

    async def search(
        self,
        predicates: PredicateSet,
        page: int,
        size: int,
        sort_by: str = "created_at",
        sort_direction: str = "desc",
    ) -> ListingPage:
        """
        Search listings matching every predicate.

        Args:
            predicates: Predicate set (AND)
            page: Zero-based page index
            size: Page size
            sort_by: Listing attribute to sort by
            sort_direction: 'asc' or 'desc'

        Returns:
            Page of listing summaries
        """
        db: Session = get_db_session()
        try:
            query = db.query(CarListingModel).filter(compile_predicates(predicates))
            total_elements = query.order_by(None).count()

            sort_column = getattr(CarListingModel, sort_by)
            ordering = sort_column.desc() if sort_direction == "desc" else sort_column.asc()
            models = query.order_by(ordering, CarListingModel.id.asc()).offset(page * size).limit(size).all()

            items = [ListingSummary.from_entity(self._model_to_entity(model)) for model in models]
            return ListingPage.build(items, page=page, size=size, total_elements=total_elements)
        except SQLAlchemyError as e:
            logger.error(f"Database error while searching listings: {str(e)}")
            raise
        finally:
            db.close()
