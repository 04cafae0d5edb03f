import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from dateutil.parser import parse as parse_date


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form all visit dates are stored in"""
    return datetime.now(UTC).replace(tzinfo=None)


def _to_iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _from_iso(value: str | None) -> datetime | None:
    return parse_date(value) if value else None


@dataclass
class Location:
    """A visited place owned by one user"""

    user_id: str
    name: str
    location_type: str
    latitude: float
    longitude: float
    start_date: datetime
    address: str = ''
    city: str = ''
    state: str = ''
    zip_code: str = ''
    end_date: datetime | None = None
    rating: int = 0
    comments: str = ''
    tags: list[str] = field(default_factory=list)
    trip_name: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_date: datetime = field(default_factory=utc_now)
    modified_date: datetime = field(default_factory=utc_now)

    def to_document(self) -> dict:
        """Serialize for storage"""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'trip_name': self.trip_name,
            'location_type': self.location_type,
            'address': self.address,
            'city': self.city,
            'state': self.state,
            'zip_code': self.zip_code,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'start_date': _to_iso(self.start_date),
            'end_date': _to_iso(self.end_date),
            'rating': self.rating,
            'comments': self.comments,
            'tags': list(self.tags),
            'created_date': _to_iso(self.created_date),
            'modified_date': _to_iso(self.modified_date),
        }

    @classmethod
    def from_document(cls, doc: dict) -> 'Location':
        return cls(
            id=doc['id'],
            user_id=doc['user_id'],
            name=doc.get('name', ''),
            trip_name=doc.get('trip_name'),
            location_type=doc.get('location_type', ''),
            address=doc.get('address', ''),
            city=doc.get('city', ''),
            state=doc.get('state', ''),
            zip_code=doc.get('zip_code', ''),
            latitude=doc.get('latitude', 0.0),
            longitude=doc.get('longitude', 0.0),
            start_date=_from_iso(doc.get('start_date')),
            end_date=_from_iso(doc.get('end_date')),
            rating=doc.get('rating', 0),
            comments=doc.get('comments', ''),
            tags=list(doc.get('tags') or []),
            created_date=_from_iso(doc.get('created_date')) or utc_now(),
            modified_date=_from_iso(doc.get('modified_date')) or utc_now(),
        )


@dataclass
class LocationType:
    """An entry of the controlled location-type vocabulary"""

    name: str
    description: str = ''
    id: int | None = None


@dataclass
class NationalPark:
    """An entry of the national parks reference catalog"""

    name: str
    state: str = ''
    latitude: float = 0.0
    longitude: float = 0.0
    description: str = ''
    id: int | None = None


# JSON upload element keys, lower-cased, mapped to LocationUpload attributes
UPLOAD_FIELDS = {
    'name': 'name',
    'tripname': 'trip_name',
    'locationtype': 'location_type',
    'address': 'address',
    'city': 'city',
    'state': 'state',
    'zipcode': 'zip_code',
    'latitude': 'latitude',
    'longitude': 'longitude',
    'startdate': 'start_date',
    'enddate': 'end_date',
    'rating': 'rating',
    'comments': 'comments',
    'tags': 'tags',
}


@dataclass
class LocationUpload:
    """
    One element of a JSON upload, before any validation.

    Every field is optional; values are kept exactly as decoded so that the
    import pipeline decides defaults and failures in one place.
    """

    name: str | None = None
    trip_name: str | None = None
    location_type: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    latitude: object = None
    longitude: object = None
    start_date: object = None
    end_date: object = None
    rating: object = None
    comments: str | None = None
    tags: object = None

    @classmethod
    def from_dict(cls, data: dict) -> 'LocationUpload':
        """Map a decoded JSON object onto the upload fields, ignoring key case and unknown keys"""
        values = {}
        for key, value in data.items():
            attribute = UPLOAD_FIELDS.get(str(key).lower())
            if attribute and value is not None:
                values[attribute] = value
        return cls(**values)


@dataclass
class ImportResult:
    """Outcome of one import run; success means at least one record was stored"""

    success: bool = False
    total_records: int = 0
    imported_records: int = 0
    failed_records: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'success': self.success,
            'total_records': self.total_records,
            'imported_records': self.imported_records,
            'failed_records': self.failed_records,
            'errors': list(self.errors),
        }


@dataclass
class ValidationResult:
    """Outcome of a pre-flight check of an upload"""

    is_valid: bool = True
    record_count: int = 0
    validation_messages: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'is_valid': self.is_valid,
            'record_count': self.record_count,
            'validation_messages': list(self.validation_messages),
            'errors': list(self.errors),
        }
