import io
import json
import logging
from config import CSV_EXPORT_HEADER, EXPORT_DATE_FORMAT
from core.models import Location
from core.parsing import escape_csv_field
from datetime import datetime

logger = logging.getLogger(__name__)


def format_date(value: datetime | None) -> str | None:
    return value.strftime(EXPORT_DATE_FORMAT) if value else None


def format_coordinate(value: float) -> str:
    """Shortest round-trip text for a coordinate, without a trailing '.0'"""
    text = repr(float(value))
    return text[:-2] if text.endswith('.0') else text


def location_to_export_dict(location: Location) -> dict:
    return {
        'name': location.name,
        'tripName': location.trip_name,
        'locationType': location.location_type,
        'address': location.address,
        'city': location.city,
        'state': location.state,
        'zipCode': location.zip_code,
        'latitude': location.latitude,
        'longitude': location.longitude,
        'startDate': format_date(location.start_date),
        'endDate': format_date(location.end_date),
        'rating': location.rating,
        'comments': location.comments,
        'tags': list(location.tags),
    }


def location_to_csv_row(location: Location) -> str:
    fields = [
        escape_csv_field(location.name),
        format_date(location.start_date) or '',
        format_date(location.end_date) or '',
        escape_csv_field(location.comments),
        escape_csv_field(location.address),
        format_coordinate(location.latitude),
        format_coordinate(location.longitude),
        escape_csv_field(location.location_type),
        escape_csv_field(location.trip_name),
    ]
    return ','.join(fields)


class DataExportService:
    """Serializes all of a user's locations; the caller owns the returned stream"""

    def __init__(self, location_repository):
        self.locations = location_repository

    def export_to_json(self, user_id: str) -> io.BytesIO:
        locations = self.locations.get_all_by_user(user_id)
        payload = {'locations': [location_to_export_dict(loc) for loc in locations]}
        logger.info(f"Exporting {len(locations)} locations for user {user_id} as JSON")
        return io.BytesIO(json.dumps(payload, indent=2).encode('utf-8'))

    def export_to_csv(self, user_id: str) -> io.BytesIO:
        locations = self.locations.get_all_by_user(user_id)
        lines = [CSV_EXPORT_HEADER] + [location_to_csv_row(loc) for loc in locations]
        logger.info(f"Exporting {len(locations)} locations for user {user_id} as CSV")
        return io.BytesIO(''.join(f"{line}\n" for line in lines).encode('utf-8'))
