from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from hotel_listing.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .country import Country


class Hotel(Base):
    """SQLAlchemy model for a Hotel; every hotel belongs to one country."""
    __tablename__ = "hotels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(150), nullable=False)

    address: Mapped[str | None] = mapped_column(String(255), nullable=True)

    rating: Mapped[float | None] = mapped_column(Float, nullable=True)

    country_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("countries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # --- Relationships ---

    country: Mapped["Country"] = relationship(
        "Country",
        back_populates="hotels",
        lazy="raise_on_sql",
    )

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id!r}, name={self.name!r}, country_id={self.country_id!r})>"
