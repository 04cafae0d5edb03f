"""
Bulk import of locations from JSON or delimited text.

Both pipelines isolate failures per record: a record that cannot be mapped,
fails the location type check or cannot be stored is counted and reported,
and processing moves on to the next one. Only a payload that cannot be read
at all (bad encoding, bad JSON, no 'locations' array, missing or wrong CSV
header) fails the whole run, before any record is touched.

The pipelines never close the stream they are given.
"""

import io
import json
import logging
from config import (
    CSV_DEFAULT_RATING,
    CSV_IMPORT_HEADER,
    CSV_MIN_FIELDS,
    DEFAULT_LOCATION_NAME,
    DEFAULT_LOCATION_TYPE,
)
from core.address import extract_city, extract_state, extract_zip_code
from core.models import ImportResult, Location, LocationUpload, ValidationResult, utc_now
from core.parsing import parse_coordinate, parse_csv_fields, parse_iso_date, parse_visit_date
from core.validation import LocationTypeError, LocationTypeValidator
from typing import BinaryIO

logger = logging.getLogger(__name__)

MISSING_LOCATIONS_ERROR = "Invalid JSON structure. Missing 'locations' array."
MISSING_HEADER_ERROR = "CSV file is empty or missing header row."
INVALID_HEADER_ERROR = f"Invalid CSV header. Expected: {CSV_IMPORT_HEADER}"


class ImportFormatError(ValueError):
    """The payload as a whole cannot be read; no record is processed"""


def _read_text(stream: BinaryIO) -> str:
    data = stream.read()
    if isinstance(data, str):
        return data
    try:
        return data.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise ImportFormatError("File must be UTF-8 encoded.") from e


def load_json_locations(stream: BinaryIO) -> list:
    """Decode a JSON upload and return its 'locations' array (key matched case-insensitively)"""
    text = _read_text(stream)
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportFormatError(f"Invalid JSON: {e}") from e

    if not isinstance(document, dict):
        raise ImportFormatError(MISSING_LOCATIONS_ERROR)

    locations = next((value for key, value in document.items() if key.lower() == 'locations'), None)
    if not isinstance(locations, list):
        raise ImportFormatError(MISSING_LOCATIONS_ERROR)

    return locations


def read_csv_rows(stream: BinaryIO) -> list[tuple[int, str]]:
    """
    Check the header of a delimited upload and return (line_number, line) for
    every line after it. The header is line 1; blank lines keep their number.
    """
    buffer = io.StringIO(_read_text(stream), newline=None)
    header = buffer.readline().rstrip('\n')
    if not header.strip():
        raise ImportFormatError(MISSING_HEADER_ERROR)

    if header.strip().lower() != CSV_IMPORT_HEADER.lower():
        raise ImportFormatError(INVALID_HEADER_ERROR)

    return [(line_number, line.rstrip('\n')) for line_number, line in enumerate(buffer, start=2)]


def _text(value) -> str:
    return value if isinstance(value, str) else str(value)


def _parse_rating(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class DataImportService:
    """Imports and pre-validates location uploads for one owner at a time"""

    def __init__(self, location_repository, location_type_repository, national_park_repository):
        self.locations = location_repository
        self.type_validator = LocationTypeValidator(location_type_repository, national_park_repository)

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def import_from_json(self, stream: BinaryIO, user_id: str) -> ImportResult:
        """Import every element of the 'locations' array, isolating failures per element"""
        result = ImportResult()
        logger.info(f"Starting JSON import for user {user_id}")

        try:
            entries = load_json_locations(stream)
        except ImportFormatError as e:
            logger.error(f"JSON import rejected: {e}")
            result.errors.append(str(e))
            return result

        result.total_records = len(entries)

        for entry in entries:
            if isinstance(entry, dict):
                upload = LocationUpload.from_dict(entry)
                name = _text(upload.name).strip() if upload.name is not None else ''
                name = name or DEFAULT_LOCATION_NAME
                location, error = self._map_json_location(upload, name, user_id)
            else:
                name = DEFAULT_LOCATION_NAME
                location, error = None, "Location entry must be a JSON object."

            if error is None:
                error = self._store(location)

            if error is None:
                result.imported_records += 1
            else:
                result.failed_records += 1
                result.errors.append(f"Failed to import location '{name}': {error}")
                logger.warning(f"Skipped location '{name}': {error}")

        result.success = result.imported_records > 0
        logger.info(
            f"JSON import finished: {result.imported_records}/{result.total_records} imported, "
            f"{result.failed_records} failed"
        )
        return result

    def _map_json_location(self, upload: LocationUpload, name: str, user_id: str) -> tuple[Location | None, str | None]:
        """Build a location from one upload element; returns (location, None) or (None, reason)"""
        latitude = parse_coordinate(upload.latitude)
        if latitude is None:
            return None, "Latitude is required." if upload.latitude is None else f"Invalid latitude value: {upload.latitude}"

        longitude = parse_coordinate(upload.longitude)
        if longitude is None:
            return None, "Longitude is required." if upload.longitude is None else f"Invalid longitude value: {upload.longitude}"

        start_date = parse_iso_date(upload.start_date)
        if start_date is None:
            return None, "Start date is required." if upload.start_date is None else f"Invalid start date: {upload.start_date}"

        end_date = None
        if upload.end_date is not None:
            end_date = parse_iso_date(upload.end_date)
            if end_date is None:
                return None, f"Invalid end date: {upload.end_date}"

        rating = 0
        if upload.rating is not None:
            rating = _parse_rating(upload.rating)
            if rating is None:
                return None, f"Invalid rating value: {upload.rating}"

        tags = []
        if upload.tags is not None:
            if not isinstance(upload.tags, list):
                return None, "Tags must be a list."
            tags = [_text(tag) for tag in upload.tags]

        declared_type = _text(upload.location_type) if upload.location_type is not None else DEFAULT_LOCATION_TYPE
        try:
            location_type = self.type_validator.validate_and_normalize(declared_type, name)
        except LocationTypeError as e:
            return None, str(e)

        address = _text(upload.address) if upload.address is not None else ''
        city = _text(upload.city) if upload.city is not None else ''
        state = _text(upload.state) if upload.state is not None else ''
        zip_code = _text(upload.zip_code) if upload.zip_code is not None else ''

        return (
            Location(
                user_id=user_id,
                name=name,
                trip_name=_text(upload.trip_name) if upload.trip_name is not None else None,
                location_type=location_type,
                address=address,
                city=city or extract_city(address),
                state=state or extract_state(address),
                zip_code=zip_code or extract_zip_code(address),
                latitude=latitude,
                longitude=longitude,
                start_date=start_date,
                end_date=end_date,
                rating=rating,
                comments=_text(upload.comments) if upload.comments is not None else '',
                tags=tags,
            ),
            None,
        )

    def validate_json(self, stream: BinaryIO) -> ValidationResult:
        """Check a JSON upload without storing anything"""
        result = ValidationResult()

        try:
            entries = load_json_locations(stream)
        except ImportFormatError as e:
            result.is_valid = False
            result.errors.append(str(e))
            return result

        result.record_count = len(entries)
        result.validation_messages.append(f"Found {result.record_count} locations in JSON file.")

        valid_locations = 0
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            upload = LocationUpload.from_dict(entry)
            if _text(upload.name or '').strip() and _text(upload.state or '').strip():
                valid_locations += 1

        if valid_locations == 0:
            result.is_valid = False
            result.errors.append("No valid locations found. Each location must have at least a name and state.")
        else:
            result.validation_messages.append(f"{valid_locations} locations are valid and ready for import.")

        return result

    # ------------------------------------------------------------------
    # Delimited text
    # ------------------------------------------------------------------

    def import_from_csv(self, stream: BinaryIO, user_id: str) -> ImportResult:
        """Import every non-blank data line, isolating failures per line"""
        result = ImportResult()
        logger.info(f"Starting CSV import for user {user_id}")

        try:
            rows = read_csv_rows(stream)
        except ImportFormatError as e:
            logger.error(f"CSV import rejected: {e}")
            result.errors.append(str(e))
            return result

        for line_number, line in rows:
            if not line.strip():
                continue

            result.total_records += 1
            location, error = self._map_csv_location(line, user_id)
            if error is None:
                error = self._store(location)

            if error is None:
                result.imported_records += 1
            else:
                result.failed_records += 1
                result.errors.append(f"Line {line_number}: {error}")
                logger.warning(f"Skipped line {line_number}: {error}")

        result.success = result.imported_records > 0
        logger.info(
            f"CSV import finished: {result.imported_records}/{result.total_records} imported, "
            f"{result.failed_records} failed"
        )
        return result

    def _map_csv_location(self, line: str, user_id: str) -> tuple[Location | None, str | None]:
        """Build a location from one data line; returns (location, None) or (None, reason)"""
        fields = parse_csv_fields(line)
        if len(fields) < CSV_MIN_FIELDS:
            return None, f"Invalid CSV format. Expected {CSV_MIN_FIELDS} fields, found {len(fields)}."

        name, arrival, departure, comments, address, latitude_text, longitude_text, row_type = (
            value.strip() for value in fields[:CSV_MIN_FIELDS]
        )

        if not name:
            return None, "Location name is required."

        latitude = parse_coordinate(latitude_text)
        if latitude is None:
            return None, f"Invalid latitude value: {latitude_text}"

        longitude = parse_coordinate(longitude_text)
        if longitude is None:
            return None, f"Invalid longitude value: {longitude_text}"

        try:
            location_type = self.type_validator.validate_and_normalize(row_type or DEFAULT_LOCATION_TYPE, name)
        except LocationTypeError as e:
            return None, str(e)

        return (
            Location(
                user_id=user_id,
                name=name,
                location_type=location_type,
                address=address,
                city=extract_city(address),
                state=extract_state(address),
                zip_code=extract_zip_code(address),
                latitude=latitude,
                longitude=longitude,
                start_date=parse_visit_date(arrival) or utc_now(),
                end_date=parse_visit_date(departure),
                rating=CSV_DEFAULT_RATING,
                comments=comments,
                tags=[],
            ),
            None,
        )

    def validate_csv(self, stream: BinaryIO) -> ValidationResult:
        """Structural check of a delimited upload; location types are not looked up"""
        result = ValidationResult()

        try:
            rows = read_csv_rows(stream)
        except ImportFormatError as e:
            result.is_valid = False
            result.errors.append(str(e))
            return result

        result.validation_messages.append("CSV header is valid.")

        line_count = 0
        valid_lines = 0
        for _, line in rows:
            if not line.strip():
                continue
            line_count += 1
            fields = parse_csv_fields(line)
            if len(fields) >= CSV_MIN_FIELDS and fields[1].strip():
                valid_lines += 1

        result.record_count = line_count
        result.validation_messages.append(f"Found {line_count} data rows in CSV file.")

        if valid_lines == 0:
            result.is_valid = False
            result.errors.append("No valid data rows found in CSV file.")
        else:
            result.validation_messages.append(f"{valid_lines} rows appear valid and ready for import.")

        return result

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _store(self, location: Location) -> str | None:
        """Persist one validated location; returns the failure reason instead of raising"""
        try:
            self.locations.create(location)
        except Exception as e:
            logger.error(f"Error storing location '{location.name}': {e}")
            return str(e) or e.__class__.__name__
        return None
