from datetime import datetime
from sqlalchemy import Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from gazetteer.db.base import Base, exact_string, utcnow

class County(Base):
    __tablename__ = "counties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(exact_string(150), unique=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Loaded by querying places.county_id; nothing is stored on the county row.
    # passive_deletes="all" keeps the ORM from nulling places.county_id; deleting a county with places is refused upstream.
    places = relationship("Place", back_populates="county", order_by="Place.id", passive_deletes="all")
