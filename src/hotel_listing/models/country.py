from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from hotel_listing.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .hotel import Hotel


class Country(Base):
    """
    SQLAlchemy model for a Country.

    A country owns many hotels; deleting a country deletes its hotels.
    """
    __tablename__ = "countries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # ISO-style short code, e.g. "JM"
    short_name: Mapped[str | None] = mapped_column(String(10), nullable=True)

    # --- Relationships ---

    # One-to-Many: loaded explicitly (joinedload) by the detail query, never lazily.
    # passive_deletes: the database cascade removes hotels, so deleting a country
    # does not need to load the collection first.
    hotels: Mapped[list["Hotel"]] = relationship(
        "Hotel",
        back_populates="country",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise_on_sql",
        order_by="Hotel.id",
    )

    def __repr__(self) -> str:
        return f"<Country(id={self.id!r}, name={self.name!r}, short_name={self.short_name!r})>"
