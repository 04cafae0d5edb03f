import logging
from config import NATIONAL_PARK_TYPE

logger = logging.getLogger(__name__)


class LocationTypeError(ValueError):
    """A declared location type cannot be accepted for a location"""


class EmptyTypeError(LocationTypeError):
    def __init__(self):
        super().__init__("Location type is required.")


class UnknownTypeError(LocationTypeError):
    def __init__(self, location_type: str, valid_types: list[str]):
        self.location_type = location_type
        self.valid_types = valid_types
        super().__init__(f"Invalid location type '{location_type}'. Valid types are: {', '.join(valid_types)}")


class LandmarkNotFoundError(LocationTypeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"National Park '{name}' is not found in the National Parks database. Please verify the park name."
        )


def names_match(first: str, second: str) -> bool:
    """Case-insensitive substring match in either direction; a blank name matches nothing"""
    first = (first or '').strip().lower()
    second = (second or '').strip().lower()
    if not first or not second:
        return False
    return first in second or second in first


class LocationTypeValidator:
    """
    Checks a declared location type against the vocabulary and, for national
    parks, the location name against the parks catalog.

    Shared by the import pipelines and by LocationService create/update.
    """

    def __init__(self, location_type_repository, national_park_repository):
        self.location_types = location_type_repository
        self.national_parks = national_park_repository

    def validate_and_normalize(self, location_type: str | None, location_name: str) -> str:
        """
        Return the canonical type name, or raise a LocationTypeError subclass.

        Raises:
            EmptyTypeError: the type is blank
            UnknownTypeError: the type is not in the vocabulary
            LandmarkNotFoundError: a National Park name matches no catalog entry
        """
        if not location_type or not location_type.strip():
            raise EmptyTypeError()

        declared = location_type.strip()
        entry = self.location_types.get_by_name(declared)
        if entry is None:
            valid_types = [known.name for known in self.location_types.get_all()]
            raise UnknownTypeError(declared, valid_types)

        if entry.name.lower() == NATIONAL_PARK_TYPE.lower():
            parks = self.national_parks.get_all()
            if not any(names_match(park.name, location_name) for park in parks):
                logger.debug(f"No catalog park matches '{location_name}' among {len(parks)} parks")
                raise LandmarkNotFoundError(location_name)

        return entry.name
