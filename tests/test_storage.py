import json
import pytest
from core.models import Location
from datetime import datetime
from tests.fixtures import TestDataFixtures
from utils.storage import (
    LocationNotFoundError,
    LocationRepository,
    LocationTypeRepository,
    open_database,
)

USER_ID = "user-123"


def make_location(name="Spot", state="CA", start_date=datetime(2024, 1, 1), user_id=USER_ID) -> Location:
    return Location(
        user_id=user_id,
        name=name,
        location_type="Hotel",
        latitude=1.0,
        longitude=2.0,
        start_date=start_date,
        state=state,
    )


class TestLocationRepository:
    """Test suite for LocationRepository"""

    @pytest.fixture
    def repository(self):
        return TestDataFixtures.create_repositories()[0]

    def test_create_and_get(self, repository):
        """Test a stored location reads back with its owner scope"""
        location = repository.create(make_location(start_date=datetime(2024, 6, 15, 8, 30)))

        loaded = repository.get_by_id(location.id, USER_ID)

        assert loaded == location
        assert loaded.start_date == datetime(2024, 6, 15, 8, 30)
        assert repository.get_by_id(location.id, "someone-else") is None
        assert repository.get_by_id("missing", USER_ID) is None

    def test_create_stamps_dates(self, repository):
        location = repository.create(make_location())
        assert location.created_date == location.modified_date

    def test_get_all_by_user(self, repository):
        repository.create(make_location(name="A"))
        repository.create(make_location(name="B"))
        repository.create(make_location(name="C", user_id="other"))

        assert [loc.name for loc in repository.get_all_by_user(USER_ID)] == ["A", "B"]
        assert repository.get_all_by_user("nobody") == []

    def test_get_by_date_range_is_inclusive(self, repository):
        repository.create(make_location(name="Jan", start_date=datetime(2024, 1, 1)))
        repository.create(make_location(name="Feb", start_date=datetime(2024, 2, 1)))
        repository.create(make_location(name="Mar", start_date=datetime(2024, 3, 1)))

        found = repository.get_by_date_range(USER_ID, datetime(2024, 1, 1), datetime(2024, 2, 1))

        assert [loc.name for loc in found] == ["Jan", "Feb"]

    def test_get_by_state(self, repository):
        repository.create(make_location(name="A", state="CA"))
        repository.create(make_location(name="B", state="NY"))

        assert [loc.name for loc in repository.get_by_state(USER_ID, "NY")] == ["B"]

    def test_update(self, repository):
        location = repository.create(make_location())
        created = location.created_date

        location.name = "Renamed"
        repository.update(location)

        loaded = repository.get_by_id(location.id, USER_ID)
        assert loaded.name == "Renamed"
        assert loaded.created_date == created
        assert loaded.modified_date >= created

    def test_update_missing_location(self, repository):
        with pytest.raises(LocationNotFoundError, match="not found"):
            repository.update(make_location())

    def test_update_is_owner_scoped(self, repository):
        """Test an update cannot move or rewrite another owner's location"""
        location = repository.create(make_location(name="Original"))
        intruder = make_location(name="Hijacked", user_id="someone-else")
        intruder.id = location.id

        with pytest.raises(LocationNotFoundError):
            repository.update(intruder)

        assert repository.get_by_id(location.id, USER_ID).name == "Original"
        assert repository.get_all_by_user("someone-else") == []

    def test_delete_is_owner_scoped(self, repository):
        location = repository.create(make_location())

        repository.delete(location.id, "someone-else")
        assert repository.get_by_id(location.id, USER_ID) is not None

        repository.delete(location.id, USER_ID)
        assert repository.get_by_id(location.id, USER_ID) is None


class TestReferenceRepositories:
    """Test suite for the location type and national park repositories"""

    @pytest.fixture
    def repositories(self):
        return TestDataFixtures.create_repositories()

    def test_location_types_in_insertion_order(self, repositories):
        _, location_types, _ = repositories
        assert [entry.name for entry in location_types.get_all()] == ["National Park", "Hotel", "Restaurant", "Other"]

    def test_get_type_by_name_and_id(self, repositories):
        _, location_types, _ = repositories

        hotel = location_types.get_by_name("Hotel")

        assert hotel.description == "Hotel or lodging"
        assert location_types.get_by_id(hotel.id) == hotel
        assert location_types.get_by_name("hotel") is None
        assert location_types.get_by_id(999) is None

    def test_seed_skips_existing(self, repositories):
        _, location_types, national_parks = repositories

        assert location_types.seed(TestDataFixtures.LOCATION_TYPES) == 0
        assert location_types.seed([("Campground", "Tent or RV site")]) == 1
        assert national_parks.seed(TestDataFixtures.NATIONAL_PARKS) == 0

    def test_parks_by_state(self, repositories):
        _, _, national_parks = repositories

        parks = national_parks.get_by_state("WY")

        assert [park.name for park in parks] == ["Yellowstone National Park"]
        assert national_parks.get_by_id(parks[0].id).state == "WY"
        assert len(national_parks.get_all()) == 2


class TestOpenDatabase:
    """Test suite for the on-disk database"""

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "travel_log.json"

        db = open_database(path)
        LocationTypeRepository(db).seed([("Other", "")])
        db.close()

        assert path.exists()
        assert json.loads(path.read_text())["location_types"]["1"]["name"] == "Other"

    def test_locations_persist_across_opens(self, tmp_path):
        path = tmp_path / "travel_log.json"

        db = open_database(path)
        location = LocationRepository(db).create(make_location())
        db.close()

        db = open_database(path)
        try:
            assert LocationRepository(db).get_by_id(location.id, USER_ID).name == "Spot"
        finally:
            db.close()
