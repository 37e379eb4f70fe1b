"""
Place queries and single-record mutations.

Initial-letter grouping is done in Python rather than with SQL UPPER/LEFT:
database functions disagree on non-ASCII input (SQLite only folds ASCII), so
the rule lives in `place_initial` and behaves the same on every backend.
"""

from __future__ import annotations

import logging
import unicodedata

from sqlalchemy.orm import Session, selectinload

from gazetteer.core.errors import NotFound, ValidationFailed
from gazetteer.db.models.county import County
from gazetteer.db.models.place import Place
from gazetteer.db.session import commit_or_invalid
from gazetteer.modules.counties.service import get_county
from gazetteer.schemas import PlaceCreate, PlaceUpdate

logger = logging.getLogger("gazetteer.places")

TEXT_FIELDS = ("postal_code", "name")
COUNTY_INVALID = "The selected county id is invalid."
LETTER_INVALID = "The letter must be a single character."


def _required(field: str) -> str:
    return f"The {field.replace('_', ' ')} field is required."


def _upper_char(ch: str) -> str:
    # keep one code point: "ß".upper() is "SS", "ﬁ".upper() is "FI"
    upper = ch.upper()
    return upper if len(upper) == 1 else ch


def place_initial(name: str | None) -> str:
    """NFC-normalized, uppercased first character of a place name.

    Accented letters keep their accent ("Ábrahámhegy" -> "Á"). Characters whose
    uppercase form is longer than one character are kept as they are, so every
    initial is a valid `letter` for `places_by_initial`.
    """
    normalized = unicodedata.normalize("NFC", (name or "").strip())
    return _upper_char(normalized[:1])


def normalize_letter(letter: str | None) -> str:
    normalized = unicodedata.normalize("NFC", (letter or "").strip())
    if len(normalized) != 1:
        raise ValidationFailed.field("letter", LETTER_INVALID)
    return _upper_char(normalized)


def list_places(db: Session) -> list[Place]:
    return db.query(Place).options(selectinload(Place.county)).order_by(Place.id.asc()).all()


def get_place(db: Session, place_id: int) -> Place:
    place = db.query(Place).options(selectinload(Place.county)).filter(Place.id == place_id).first()
    if place is None:
        raise NotFound("Place", place_id)
    return place


def list_places_for_county(db: Session, county_id: int) -> list[Place]:
    county = get_county(db, county_id)
    return db.query(Place).filter(Place.county_id == county.id).order_by(Place.id.asc()).all()


def initials_for_county(db: Session, county_id: int) -> list[str]:
    county = get_county(db, county_id)
    names = db.query(Place.name).filter(Place.county_id == county.id).all()
    initials = {place_initial(name) for (name,) in names}
    initials.discard("")
    return sorted(initials)


def places_by_initial(db: Session, county_id: int, letter: str) -> list[Place]:
    """Places of a county whose initial matches `letter`, by name (code point order) then id."""
    county = get_county(db, county_id)
    wanted = normalize_letter(letter)
    places = db.query(Place).filter(Place.county_id == county.id).all()
    matches = [p for p in places if place_initial(p.name) == wanted]
    return sorted(matches, key=lambda p: (p.name, p.id))


def _check_county(db: Session, county_id: int | None, errors: dict[str, list[str]]) -> None:
    if county_id is None:
        errors["county_id"] = [_required("county_id")]
    elif db.get(County, county_id) is None:
        errors["county_id"] = [COUNTY_INVALID]


def create_place(db: Session, data: PlaceCreate) -> Place:
    errors: dict[str, list[str]] = {}
    values: dict[str, str] = {}
    for field in TEXT_FIELDS:
        value = (getattr(data, field) or "").strip()
        if not value:
            errors[field] = [_required(field)]
        values[field] = value
    _check_county(db, data.county_id, errors)
    if errors:
        raise ValidationFailed(errors)

    place = Place(postal_code=values["postal_code"], name=values["name"], county_id=data.county_id)
    db.add(place)
    # foreign key catches a county deleted between the check and the insert
    commit_or_invalid(db, "county_id", COUNTY_INVALID)
    db.refresh(place)
    logger.info("Created place %s (%s %s) in county %s", place.id, place.postal_code, place.name, place.county_id)
    return place


def update_place(db: Session, place_id: int, data: PlaceUpdate) -> Place:
    place = get_place(db, place_id)
    supplied = data.model_dump(exclude_unset=True)

    errors: dict[str, list[str]] = {}
    changes: dict[str, object] = {}
    for field in TEXT_FIELDS:
        if field not in supplied:
            continue
        value = (supplied[field] or "").strip()
        if not value:
            errors[field] = [_required(field)]
        else:
            changes[field] = value
    if "county_id" in supplied:
        _check_county(db, supplied["county_id"], errors)
        changes["county_id"] = supplied["county_id"]
    if errors:
        raise ValidationFailed(errors)

    for field, value in changes.items():
        setattr(place, field, value)
    commit_or_invalid(db, "county_id", COUNTY_INVALID)
    db.refresh(place)
    logger.info("Updated place %s: %s", place.id, sorted(changes))
    return place


def delete_place(db: Session, place_id: int) -> None:
    place = db.get(Place, place_id)
    if place is None:
        raise NotFound("Place", place_id)
    db.delete(place)
    db.commit()
    logger.info("Deleted place %s", place_id)
