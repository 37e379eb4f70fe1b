from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from gazetteer.db.session import get_db
from gazetteer.auth.deps import get_current_subject
from gazetteer.core.responses import success
from gazetteer.modules.places import service
from gazetteer.schemas import PlaceCreate, PlaceUpdate, PlaceOut, PlaceWithCounty

router = APIRouter(prefix="/places", tags=["places"])

# Place listings scoped to one county live under the county path.
county_router = APIRouter(prefix="/counties/{county_id}", tags=["places"])

@router.get("")
def index(db: Session = Depends(get_db)):
    places = service.list_places(db)
    return success([PlaceWithCounty.model_validate(p) for p in places])

@router.get("/{place_id}")
def show(place_id: int, db: Session = Depends(get_db)):
    place = service.get_place(db, place_id)
    return success(PlaceWithCounty.model_validate(place))

@router.post("", status_code=201)
def create(data: PlaceCreate, subject: str = Depends(get_current_subject), db: Session = Depends(get_db)):
    place = service.create_place(db, data)
    return success(PlaceOut.model_validate(place), message="Place created successfully")

@router.api_route("/{place_id}", methods=["PUT", "PATCH"])
def update(place_id: int, data: PlaceUpdate, subject: str = Depends(get_current_subject), db: Session = Depends(get_db)):
    place = service.update_place(db, place_id, data)
    return success(PlaceOut.model_validate(place), message="Place updated successfully")

@router.delete("/{place_id}", status_code=204)
def delete(place_id: int, subject: str = Depends(get_current_subject), db: Session = Depends(get_db)):
    service.delete_place(db, place_id)
    return Response(status_code=204)


@county_router.get("/places")
def county_places(county_id: int, db: Session = Depends(get_db)):
    places = service.list_places_for_county(db, county_id)
    return success([PlaceOut.model_validate(p) for p in places])

@county_router.get("/abc")
def county_initials(county_id: int, db: Session = Depends(get_db)):
    return success(service.initials_for_county(db, county_id))

@county_router.get("/abc/{letter}")
def county_places_by_initial(county_id: int, letter: str, db: Session = Depends(get_db)):
    places = service.places_by_initial(db, county_id, letter)
    return success([PlaceOut.model_validate(p) for p in places])
