from datetime import datetime
from sqlalchemy import Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from gazetteer.db.base import Base, exact_string, utcnow

class Place(Base):
    __tablename__ = "places"
    # Import dedup lookup; not unique, the API may create the same triple twice.
    __table_args__ = (Index("ix_places_dedup", "postal_code", "name", "county_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    postal_code: Mapped[str] = mapped_column(exact_string(16))
    name: Mapped[str] = mapped_column(exact_string(150))
    county_id: Mapped[int] = mapped_column(ForeignKey("counties.id"), index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    county = relationship("County", back_populates="places")
