import logging
from collections import Counter
from config import NATIONAL_PARK_TYPE
from core.models import Location, LocationType, NationalPark
from core.validation import LocationTypeValidator, names_match
from datetime import datetime

logger = logging.getLogger(__name__)


class LocationService:
    """Location queries and mutations; every write passes the location type check first"""

    def __init__(self, location_repository, location_type_repository, national_park_repository):
        self.locations = location_repository
        self.type_validator = LocationTypeValidator(location_type_repository, national_park_repository)

    def get_location_by_id(self, location_id: str, user_id: str) -> Location | None:
        return self.locations.get_by_id(location_id, user_id)

    def get_all_locations(self, user_id: str) -> list[Location]:
        return self.locations.get_all_by_user(user_id)

    def get_locations_by_date_range(self, user_id: str, start_date: datetime, end_date: datetime) -> list[Location]:
        if start_date > end_date:
            raise ValueError("Start date must be before end date")
        return self.locations.get_by_date_range(user_id, start_date, end_date)

    def get_locations_by_state(self, user_id: str, state: str) -> list[Location]:
        return self.locations.get_by_state(user_id, state)

    def get_state_counts(self, user_id: str) -> dict[str, int]:
        """Number of locations per state"""
        return dict(Counter(loc.state for loc in self.locations.get_all_by_user(user_id)))

    def create_location(self, location: Location) -> Location:
        location.location_type = self.type_validator.validate_and_normalize(location.location_type, location.name)
        return self.locations.create(location)

    def update_location(self, location: Location) -> Location:
        location.location_type = self.type_validator.validate_and_normalize(location.location_type, location.name)
        return self.locations.update(location)

    def delete_location(self, location_id: str, user_id: str):
        self.locations.delete(location_id, user_id)


class LocationTypeService:
    def __init__(self, location_type_repository):
        self.location_types = location_type_repository

    def get_all_location_types(self) -> list[LocationType]:
        return self.location_types.get_all()

    def get_location_type_by_id(self, type_id: int) -> LocationType | None:
        return self.location_types.get_by_id(type_id)

    def get_location_type_by_name(self, name: str) -> LocationType | None:
        return self.location_types.get_by_name(name)

    def is_valid_location_type(self, name: str | None) -> bool:
        if not name or not name.strip():
            return False
        return self.location_types.get_by_name(name) is not None


class NationalParkService:
    def __init__(self, national_park_repository, location_repository):
        self.national_parks = national_park_repository
        self.locations = location_repository

    def get_all_parks(self) -> list[NationalPark]:
        return self.national_parks.get_all()

    def get_park_by_id(self, park_id: int) -> NationalPark | None:
        return self.national_parks.get_by_id(park_id)

    def get_parks_by_state(self, state: str) -> list[NationalPark]:
        return self.national_parks.get_by_state(state)

    def get_visited_parks(self, user_id: str) -> list[NationalPark]:
        """Catalog parks matched by name to the user's National Park locations"""
        park_visits = [
            loc for loc in self.locations.get_all_by_user(user_id) if loc.location_type.lower() == NATIONAL_PARK_TYPE.lower()
        ]
        return [
            park for park in self.national_parks.get_all() if any(names_match(park.name, loc.name) for loc in park_visits)
        ]
