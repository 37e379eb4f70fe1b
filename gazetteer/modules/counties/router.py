from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from gazetteer.db.session import get_db
from gazetteer.auth.deps import get_current_subject
from gazetteer.core.responses import success
from gazetteer.modules.counties import service
from gazetteer.schemas import CountyIn, CountyOut, CountyWithPlaces

router = APIRouter(prefix="/counties", tags=["counties"])

@router.get("")
def index(db: Session = Depends(get_db)):
    counties = service.list_counties(db)
    return success([CountyWithPlaces.model_validate(c) for c in counties])

@router.get("/{county_id}")
def show(county_id: int, db: Session = Depends(get_db)):
    county = service.get_county(db, county_id, with_places=True)
    return success(CountyWithPlaces.model_validate(county))

# subject is declared before db so a missing credential fails before a session is opened
@router.post("", status_code=201)
def create(data: CountyIn, subject: str = Depends(get_current_subject), db: Session = Depends(get_db)):
    county = service.create_county(db, data)
    return success(CountyOut.model_validate(county), message="County created successfully")

@router.put("/{county_id}")
def update(county_id: int, data: CountyIn, subject: str = Depends(get_current_subject), db: Session = Depends(get_db)):
    county = service.update_county(db, county_id, data)
    return success(CountyOut.model_validate(county), message="County updated successfully")

@router.delete("/{county_id}", status_code=204)
def delete(county_id: int, subject: str = Depends(get_current_subject), db: Session = Depends(get_db)):
    service.delete_county(db, county_id)
    return Response(status_code=204)
