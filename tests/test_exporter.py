import json
import pytest
from core.exporter import DataExportService, format_coordinate, location_to_csv_row
from core.importer import DataImportService
from core.models import Location
from datetime import datetime
from tests.fixtures import TestDataFixtures

USER_ID = "user-123"
EXPORT_HEADER = "Location,Arrival,Departure,Comments,Address,Latitude,Longitude,Type,TripName"


def make_location(**overrides) -> Location:
    values = {
        "user_id": USER_ID,
        "name": "Test Hotel",
        "location_type": "Hotel",
        "latitude": 34.0522,
        "longitude": -118.2437,
        "start_date": datetime(2024, 1, 1, 15, 30),
        "end_date": datetime(2024, 1, 3),
        "address": "123 Main St, Los Angeles, CA 90210",
        "city": "Los Angeles",
        "state": "CA",
        "zip_code": "90210",
        "rating": 4,
        "comments": "Nice pool",
        "tags": ["pool"],
        "trip_name": "West Coast",
    }
    values.update(overrides)
    return Location(**values)


class TestDataExportService:
    """Test suite for DataExportService"""

    @pytest.fixture
    def repositories(self):
        return TestDataFixtures.create_repositories()

    @pytest.fixture
    def location_repository(self, repositories):
        return repositories[0]

    @pytest.fixture
    def exporter(self, location_repository):
        return DataExportService(location_repository)

    def test_json_export_fields(self, exporter, location_repository):
        """Test exported JSON uses camelCase keys and yyyy-MM-dd dates"""
        location_repository.create(make_location())

        document = json.loads(exporter.export_to_json(USER_ID).getvalue().decode("utf-8"))

        assert len(document["locations"]) == 1
        assert document["locations"][0] == {
            "name": "Test Hotel",
            "tripName": "West Coast",
            "locationType": "Hotel",
            "address": "123 Main St, Los Angeles, CA 90210",
            "city": "Los Angeles",
            "state": "CA",
            "zipCode": "90210",
            "latitude": 34.0522,
            "longitude": -118.2437,
            "startDate": "2024-01-01",
            "endDate": "2024-01-03",
            "rating": 4,
            "comments": "Nice pool",
            "tags": ["pool"],
        }

    def test_json_export_missing_end_date(self, exporter, location_repository):
        location_repository.create(make_location(end_date=None, trip_name=None))

        exported = json.loads(exporter.export_to_json(USER_ID).getvalue())["locations"][0]

        assert exported["endDate"] is None
        assert exported["tripName"] is None

    def test_json_export_is_indented(self, exporter):
        assert exporter.export_to_json(USER_ID).getvalue().decode("utf-8") == '{\n  "locations": []\n}'

    def test_export_only_includes_owner(self, exporter, location_repository):
        location_repository.create(make_location(name="Mine"))
        location_repository.create(make_location(name="Theirs", user_id="someone-else"))

        names = [loc["name"] for loc in json.loads(exporter.export_to_json(USER_ID).getvalue())["locations"]]

        assert names == ["Mine"]

    def test_csv_export(self, exporter, location_repository):
        """Test CSV export writes the header then one escaped row per location"""
        location_repository.create(make_location(comments='Nice place, the "best" pool'))

        lines = exporter.export_to_csv(USER_ID).getvalue().decode("utf-8").split("\n")

        assert lines[0] == EXPORT_HEADER
        assert lines[1] == (
            'Test Hotel,2024-01-01,2024-01-03,"Nice place, the ""best"" pool",'
            '"123 Main St, Los Angeles, CA 90210",34.0522,-118.2437,Hotel,West Coast'
        )
        assert lines[2] == ""
        assert len(lines) == 3

    def test_csv_export_empty_user(self, exporter):
        assert exporter.export_to_csv(USER_ID).getvalue() == (EXPORT_HEADER + "\n").encode("utf-8")

    def test_csv_row_optional_fields(self):
        row = location_to_csv_row(make_location(end_date=None, comments="", trip_name=None, latitude=40.0))
        assert row == 'Test Hotel,2024-01-01,,,"123 Main St, Los Angeles, CA 90210",40,-118.2437,Hotel,'

    def test_format_coordinate(self):
        assert format_coordinate(44.427963) == "44.427963"
        assert format_coordinate(-110.0) == "-110"
        assert format_coordinate(0) == "0"


class TestRoundTrip:
    """Test exports read back through the import pipeline"""

    @pytest.fixture
    def repositories(self):
        return TestDataFixtures.create_repositories()

    def test_json_round_trip(self, repositories):
        """Test export then import preserves count, names, states and coordinates"""
        location_repository = repositories[0]
        importer = DataImportService(*repositories)
        exporter = DataExportService(location_repository)
        importer.import_from_json(TestDataFixtures.to_stream(TestDataFixtures.get_test_json_upload()), USER_ID)

        result = importer.import_from_json(exporter.export_to_json(USER_ID), "new-owner")

        assert result.success
        assert result.imported_records == 2
        original = {loc.name: loc for loc in location_repository.get_all_by_user(USER_ID)}
        copied = {loc.name: loc for loc in location_repository.get_all_by_user("new-owner")}
        assert set(copied) == set(original)
        for name, location in copied.items():
            assert location.state == original[name].state
            assert location.latitude == original[name].latitude
            assert location.longitude == original[name].longitude
            assert location.location_type == original[name].location_type
            assert location.trip_name == original[name].trip_name

    def test_duplicate_import_is_not_deduplicated(self, repositories):
        location_repository = repositories[0]
        importer = DataImportService(*repositories)

        for _ in range(2):
            importer.import_from_csv(TestDataFixtures.to_stream(TestDataFixtures.get_test_csv_upload()), USER_ID)

        names = sorted(loc.name for loc in location_repository.get_all_by_user(USER_ID))
        assert names == ["Location 1", "Location 1", "Location 2", "Location 2", "Location 3", "Location 3"]
