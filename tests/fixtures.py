"""Test data fixtures for travel log tests"""

import io
import json
from tinydb import TinyDB
from tinydb.storages import MemoryStorage
from utils.storage import LocationRepository, LocationTypeRepository, NationalParkRepository


class TestDataFixtures:
    """Centralized test data fixtures"""

    LOCATION_TYPES = [
        ('National Park', 'US National Park'),
        ('Hotel', 'Hotel or lodging'),
        ('Restaurant', 'Restaurant or dining'),
        ('Other', 'Anything else'),
    ]

    NATIONAL_PARKS = [
        ('Yellowstone National Park', 'WY'),
        ('Yosemite', 'CA'),
    ]

    CSV_HEADER = 'Location,Arrival,Departure,Comments,Address,Latitude,Longitude,Type'

    @classmethod
    def create_repositories(cls) -> tuple[LocationRepository, LocationTypeRepository, NationalParkRepository]:
        """In-memory repositories seeded with a small vocabulary and parks catalog"""
        db = TinyDB(storage=MemoryStorage)
        location_types = LocationTypeRepository(db)
        national_parks = NationalParkRepository(db)
        location_types.seed(cls.LOCATION_TYPES)
        national_parks.seed(cls.NATIONAL_PARKS)
        return LocationRepository(db), location_types, national_parks

    @staticmethod
    def get_test_json_upload():
        """Generate a JSON upload with two valid locations"""
        return {
            "locations": [
                {
                    "name": "Test Hotel",
                    "locationType": "Hotel",
                    "address": "123 Main St, Los Angeles, CA 90210",
                    "state": "CA",
                    "latitude": 34.0522,
                    "longitude": -118.2437,
                    "startDate": "2024-01-01",
                    "endDate": "2024-01-03",
                    "rating": 4,
                    "comments": "Nice pool",
                    "tags": ["pool", "city"],
                },
                {
                    "name": "Yellowstone",
                    "locationType": "National Park",
                    "state": "WY",
                    "latitude": 44.427963,
                    "longitude": -110.588455,
                    "startDate": "2024-06-15",
                },
            ]
        }

    @classmethod
    def get_test_csv_upload(cls):
        """Generate a CSV upload with three valid rows"""
        return "\n".join(
            [
                cls.CSV_HEADER,
                'Location 1,2024-01-01,2024-01-02,Comment 1,"Address 1, CA",37.7749,-122.4194,Hotel',
                'Location 2,2024-02-01,2024-02-02,Comment 2,"Address 2, NY",40.7128,-74.0060,Restaurant',
                'Location 3,2024-03-01,2024-03-02,Comment 3,"Address 3, TX",29.7604,-95.3698,Other',
            ]
        )

    @staticmethod
    def to_stream(payload) -> io.BytesIO:
        """Wrap a dict (as JSON) or text in a binary stream"""
        if isinstance(payload, dict):
            payload = json.dumps(payload)
        return io.BytesIO(payload.encode('utf-8'))
