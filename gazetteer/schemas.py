"""
API schemas (request/response models) for counties and places.

Request models accept missing and null fields so the services can report
every problem as a field -> messages map instead of failing on the first one.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CountyIn(BaseModel):
    name: str | None = None


class PlaceCreate(BaseModel):
    postal_code: str | None = None
    name: str | None = None
    county_id: int | None = None


class PlaceUpdate(BaseModel):
    # Partial update: only fields present in the request body are applied.
    postal_code: str | None = None
    name: str | None = None
    county_id: int | None = None


class CountyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PlaceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    postal_code: str
    name: str
    county_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CountyWithPlaces(CountyOut):
    places: list[PlaceOut] = []


class PlaceWithCounty(PlaceOut):
    county: CountyOut
