"""
Listing model for items offered on the marketplace.
Handles item data, pricing, status and the owning user.
"""

from sqlalchemy import String, Numeric, JSON, Enum as SQLEnum, Index, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from marketplace_api.database import Base
from decimal import Decimal
import enum
import uuid
from typing import List

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
MAX_PICTURES = 10
PRICE_DECIMAL_PLACES = 2


class ListingCondition(str, enum.Enum):
    """Item condition."""
    NEW = "new"
    USED = "used"


class ListingCategory(str, enum.Enum):
    """Fixed set of listing categories."""
    ELECTRONICS = "Electronics"
    FURNITURE = "Furniture"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    SPORTS = "Sports"
    HOME_AND_GARDEN = "Home & Garden"
    TOYS_AND_GAMES = "Toys & Games"
    VEHICLES = "Vehicles"
    OTHER = "Other"


class ListingStatus(str, enum.Enum):
    """Whether the item can still be bought."""
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


def _enum_values(enum_cls) -> List[str]:
    return [member.value for member in enum_cls]


class Listing(Base):
    """
    Listing model. Every listing has exactly one owner, who alone may
    update or delete it.
    """

    __tablename__ = "listings"

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        index=True,
        comment="Listing title"
    )

    description: Mapped[str] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH),
        nullable=False,
        comment="Listing description"
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=PRICE_DECIMAL_PLACES),
        nullable=False,
        comment="Asking price, non-negative"
    )

    condition: Mapped[ListingCondition] = mapped_column(
        SQLEnum(ListingCondition, name="listing_condition", values_callable=_enum_values),
        nullable=False
    )

    category: Mapped[ListingCategory] = mapped_column(
        SQLEnum(ListingCategory, name="listing_category", values_callable=_enum_values),
        nullable=False,
        index=True
    )

    status: Mapped[ListingStatus] = mapped_column(
        SQLEnum(ListingStatus, name="listing_status", values_callable=_enum_values),
        nullable=False,
        default=ListingStatus.AVAILABLE,
        index=True
    )

    pictures: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered picture references"
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this listing"
    )

    def __repr__(self) -> str:
        return f"<Listing(id={self.id}, title={self.title[:30]}, price={self.price})>"

    @staticmethod
    def validate_price(price) -> Decimal:
        """
        Check a price before it reaches the column, which would round extra places.

        Raises:
            ValueError: If price is missing, negative or has more than two decimal places
        """
        price = Decimal(price) if price is not None else None
        if price is None or price < 0:
            raise ValueError("Listing price cannot be negative")
        if price.as_tuple().exponent < -PRICE_DECIMAL_PLACES:
            raise ValueError(f"Listing price cannot have more than {PRICE_DECIMAL_PLACES} decimal places")
        return price

    def to_dict(self) -> dict:
        """Convert listing to dictionary."""
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "price": float(self.price),
            "condition": self.condition.value,
            "category": self.category.value,
            "status": self.status.value,
            "pictures": list(self.pictures or []),
            "owner_id": str(self.owner_id),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


# Listing feeds are filtered by category/status and ordered by recency
category_status_index = Index(
    'idx_listings_category_status',
    Listing.category,
    Listing.status,
    Listing.created_at.desc()
)

owner_created_index = Index(
    'idx_listings_owner_created',
    Listing.owner_id,
    Listing.created_at.desc()
)
