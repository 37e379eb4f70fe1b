from __future__ import annotations

import logging

from sqlalchemy.orm import Session, selectinload

from gazetteer.core.errors import NotFound, ValidationFailed
from gazetteer.db.models.county import County
from gazetteer.db.models.place import Place
from gazetteer.db.session import commit_or_invalid
from gazetteer.schemas import CountyIn

logger = logging.getLogger("gazetteer.counties")

NAME_REQUIRED = "The name field is required."
NAME_TAKEN = "The name has already been taken."
HAS_PLACES = "The county still has places and cannot be deleted."


def list_counties(db: Session) -> list[County]:
    return db.query(County).options(selectinload(County.places)).order_by(County.id.asc()).all()


def get_county(db: Session, county_id: int, *, with_places: bool = False) -> County:
    q = db.query(County)
    if with_places:
        q = q.options(selectinload(County.places))
    county = q.filter(County.id == county_id).first()
    if county is None:
        raise NotFound("County", county_id)
    return county


def _clean_name(value: str | None) -> str:
    name = (value or "").strip()
    if not name:
        raise ValidationFailed.field("name", NAME_REQUIRED)
    return name


def _ensure_unique_name(db: Session, name: str, exclude_id: int | None = None) -> None:
    q = db.query(County.id).filter(County.name == name)
    if exclude_id is not None:
        q = q.filter(County.id != exclude_id)
    if q.first() is not None:
        raise ValidationFailed.field("name", NAME_TAKEN)


def create_county(db: Session, data: CountyIn) -> County:
    name = _clean_name(data.name)
    _ensure_unique_name(db, name)

    county = County(name=name)
    db.add(county)
    # the unique index still guards against a concurrent insert of the same name
    commit_or_invalid(db, "name", NAME_TAKEN)
    db.refresh(county)
    logger.info("Created county %s (%s)", county.id, county.name)
    return county


def update_county(db: Session, county_id: int, data: CountyIn) -> County:
    county = get_county(db, county_id)
    name = _clean_name(data.name)
    _ensure_unique_name(db, name, exclude_id=county.id)

    county.name = name
    commit_or_invalid(db, "name", NAME_TAKEN)
    db.refresh(county)
    logger.info("Updated county %s (%s)", county.id, county.name)
    return county


def delete_county(db: Session, county_id: int) -> None:
    county = get_county(db, county_id)
    has_places = db.query(Place.id).filter(Place.county_id == county.id).first() is not None
    if has_places:
        raise ValidationFailed.field("places", HAS_PLACES)

    db.delete(county)
    # a place inserted meanwhile trips the foreign key instead
    commit_or_invalid(db, "places", HAS_PLACES)
    logger.info("Deleted county %s", county_id)
