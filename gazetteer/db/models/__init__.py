# Import all models so SQLAlchemy metadata is fully populated on startup.
from gazetteer.db.models.county import County
from gazetteer.db.models.place import Place


__all__ = [
    "County",
    "Place",
]
