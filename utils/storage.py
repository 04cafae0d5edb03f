import logging
from config import DATA_DIR, DATABASE_FILE
from core.models import Location, LocationType, NationalPark, utc_now
from datetime import datetime
from pathlib import Path
from tinydb import Query, TinyDB

logger = logging.getLogger(__name__)

LOCATIONS_TABLE = 'locations'
LOCATION_TYPES_TABLE = 'location_types'
NATIONAL_PARKS_TABLE = 'national_parks'


class LocationNotFoundError(LookupError):
    """Raised when updating a location id that is not stored"""


def open_database(path: Path = DATA_DIR / DATABASE_FILE) -> TinyDB:
    """Open (creating if needed) the JSON document database"""
    path.parent.mkdir(parents=True, exist_ok=True)
    return TinyDB(path, indent=2)


class LocationRepository:
    """Stores locations, always scoped to their owner"""

    def __init__(self, db: TinyDB):
        self.table = db.table(LOCATIONS_TABLE)

    def get_by_id(self, location_id: str, user_id: str) -> Location | None:
        Loc = Query()
        doc = self.table.get((Loc.id == location_id) & (Loc.user_id == user_id))
        return Location.from_document(doc) if doc else None

    def get_all_by_user(self, user_id: str) -> list[Location]:
        docs = self.table.search(Query().user_id == user_id)
        return [Location.from_document(doc) for doc in docs]

    def get_by_date_range(self, user_id: str, start_date: datetime, end_date: datetime) -> list[Location]:
        """Locations whose start date falls within [start_date, end_date]"""
        return [loc for loc in self.get_all_by_user(user_id) if start_date <= loc.start_date <= end_date]

    def get_by_state(self, user_id: str, state: str) -> list[Location]:
        Loc = Query()
        docs = self.table.search((Loc.user_id == user_id) & (Loc.state == state))
        return [Location.from_document(doc) for doc in docs]

    def create(self, location: Location) -> Location:
        location.created_date = utc_now()
        location.modified_date = location.created_date
        self.table.insert(location.to_document())
        logger.debug(f"Stored location {location.id} ({location.name}) for user {location.user_id}")
        return location

    def update(self, location: Location) -> Location:
        location.modified_date = utc_now()
        doc = location.to_document()
        doc.pop('created_date')
        Loc = Query()
        updated = self.table.update(doc, (Loc.id == location.id) & (Loc.user_id == location.user_id))
        if not updated:
            raise LocationNotFoundError(f"Location with ID {location.id} not found.")
        return location

    def delete(self, location_id: str, user_id: str):
        Loc = Query()
        removed = self.table.remove((Loc.id == location_id) & (Loc.user_id == user_id))
        if removed:
            logger.debug(f"Deleted location {location_id} for user {user_id}")


class LocationTypeRepository:
    """Read access to the controlled location-type vocabulary"""

    def __init__(self, db: TinyDB):
        self.table = db.table(LOCATION_TYPES_TABLE)

    def _to_entry(self, doc) -> LocationType:
        return LocationType(id=doc.doc_id, name=doc['name'], description=doc.get('description', ''))

    def get_all(self) -> list[LocationType]:
        return [self._to_entry(doc) for doc in self.table.all()]

    def get_by_id(self, type_id: int) -> LocationType | None:
        doc = self.table.get(doc_id=type_id)
        return self._to_entry(doc) if doc else None

    def get_by_name(self, name: str) -> LocationType | None:
        """Exact, case-sensitive lookup"""
        doc = self.table.get(Query().name == name)
        return self._to_entry(doc) if doc else None

    def seed(self, entries: list[tuple[str, str]]) -> int:
        """Insert (name, description) pairs that are not stored yet"""
        added = 0
        for name, description in entries:
            if self.get_by_name(name) is None:
                self.table.insert({'name': name, 'description': description})
                added += 1
        if added:
            logger.info(f"Seeded {added} location types")
        return added


class NationalParkRepository:
    """Read access to the national parks reference catalog"""

    def __init__(self, db: TinyDB):
        self.table = db.table(NATIONAL_PARKS_TABLE)

    def _to_park(self, doc) -> NationalPark:
        return NationalPark(
            id=doc.doc_id,
            name=doc['name'],
            state=doc.get('state', ''),
            latitude=doc.get('latitude', 0.0),
            longitude=doc.get('longitude', 0.0),
            description=doc.get('description', ''),
        )

    def get_all(self) -> list[NationalPark]:
        return [self._to_park(doc) for doc in self.table.all()]

    def get_by_id(self, park_id: int) -> NationalPark | None:
        doc = self.table.get(doc_id=park_id)
        return self._to_park(doc) if doc else None

    def get_by_state(self, state: str) -> list[NationalPark]:
        return [self._to_park(doc) for doc in self.table.search(Query().state == state)]

    def seed(self, entries: list[tuple[str, str]]) -> int:
        """Insert (name, state) pairs that are not stored yet"""
        Park = Query()
        added = 0
        for name, state in entries:
            if not self.table.contains(Park.name == name):
                self.table.insert({'name': name, 'state': state})
                added += 1
        if added:
            logger.info(f"Seeded {added} national parks")
        return added
