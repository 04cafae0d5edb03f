from decouple import config
from pathlib import Path

# Directory paths
DATA_DIR = Path(config('DATA_DIR', default='data'))
EXPORT_DIR = Path(config('EXPORT_DIR', default='exports'))

# File names
DATABASE_FILE = config('DATABASE_FILE', default='travel_log.json')
JSON_EXPORT_FILE = 'locations.json'
CSV_EXPORT_FILE = 'locations.csv'

# Owner used when no --user-id is given
DEFAULT_USER_ID = config('DEFAULT_USER_ID', default='local')

# Delimited formats
CSV_IMPORT_HEADER = 'Location,Arrival,Departure,Comments,Address,Latitude,Longitude,Type'
CSV_EXPORT_HEADER = 'Location,Arrival,Departure,Comments,Address,Latitude,Longitude,Type,TripName'
CSV_MIN_FIELDS = 8
CSV_DEFAULT_RATING = 5  # delimited format has no rating column

# Import defaults
DEFAULT_LOCATION_NAME = 'Unknown'
DEFAULT_LOCATION_TYPE = 'Other'
EXPORT_DATE_FORMAT = '%Y-%m-%d'

# Location type that requires a matching entry in the national parks catalog
NATIONAL_PARK_TYPE = 'National Park'

US_STATE_ABBREVIATIONS = frozenset(
    [
        'AL', 'AK', 'AZ', 'AR', 'CA', 'CO', 'CT', 'DE', 'FL', 'GA',
        'HI', 'ID', 'IL', 'IN', 'IA', 'KS', 'KY', 'LA', 'ME', 'MD',
        'MA', 'MI', 'MN', 'MS', 'MO', 'MT', 'NE', 'NV', 'NH', 'NJ',
        'NM', 'NY', 'NC', 'ND', 'OH', 'OK', 'OR', 'PA', 'RI', 'SC',
        'SD', 'TN', 'TX', 'UT', 'VT', 'VA', 'WA', 'WV', 'WI', 'WY',
    ]
)

# Controlled vocabulary seed (name, description)
DEFAULT_LOCATION_TYPES = [
    ('RV Park', 'RV Park or campground'),
    ('National Park', 'US National Park'),
    ('National Monument', 'US National Monument'),
    ('Harvest Host', 'Harvest Host location'),
    ('State Park', 'State Park'),
    ('Family', 'Family or friends location'),
    ('Other', 'Any other kind of stop'),
]

# National parks catalog seed (name, primary state)
DEFAULT_NATIONAL_PARKS = [
    ('Acadia National Park', 'ME'),
    ('American Samoa National Park', 'AS'),
    ('Arches National Park', 'UT'),
    ('Badlands National Park', 'SD'),
    ('Big Bend National Park', 'TX'),
    ('Biscayne National Park', 'FL'),
    ('Black Canyon of the Gunnison National Park', 'CO'),
    ('Bryce Canyon National Park', 'UT'),
    ('Canyonlands National Park', 'UT'),
    ('Capitol Reef National Park', 'UT'),
    ('Carlsbad Caverns National Park', 'NM'),
    ('Channel Islands National Park', 'CA'),
    ('Congaree National Park', 'SC'),
    ('Crater Lake National Park', 'OR'),
    ('Cuyahoga Valley National Park', 'OH'),
    ('Death Valley National Park', 'CA'),
    ('Denali National Park', 'AK'),
    ('Dry Tortugas National Park', 'FL'),
    ('Everglades National Park', 'FL'),
    ('Gates of the Arctic National Park', 'AK'),
    ('Gateway Arch National Park', 'MO'),
    ('Glacier National Park', 'MT'),
    ('Glacier Bay National Park', 'AK'),
    ('Grand Canyon National Park', 'AZ'),
    ('Grand Teton National Park', 'WY'),
    ('Great Basin National Park', 'NV'),
    ('Great Sand Dunes National Park', 'CO'),
    ('Great Smoky Mountains National Park', 'TN'),
    ('Guadalupe Mountains National Park', 'TX'),
    ('Haleakala National Park', 'HI'),
    ('Hawaii Volcanoes National Park', 'HI'),
    ('Hot Springs National Park', 'AR'),
    ('Indiana Dunes National Park', 'IN'),
    ('Isle Royale National Park', 'MI'),
    ('Joshua Tree National Park', 'CA'),
    ('Katmai National Park', 'AK'),
    ('Kenai Fjords National Park', 'AK'),
    ('Kings Canyon National Park', 'CA'),
    ('Kobuk Valley National Park', 'AK'),
    ('Lake Clark National Park', 'AK'),
    ('Lassen Volcanic National Park', 'CA'),
    ('Mammoth Cave National Park', 'KY'),
    ('Mesa Verde National Park', 'CO'),
    ('Mount Rainier National Park', 'WA'),
    ('New River Gorge National Park', 'WV'),
    ('North Cascades National Park', 'WA'),
    ('Olympic National Park', 'WA'),
    ('Petrified Forest National Park', 'AZ'),
    ('Pinnacles National Park', 'CA'),
    ('Redwood National Park', 'CA'),
    ('Rocky Mountain National Park', 'CO'),
    ('Saguaro National Park', 'AZ'),
    ('Sequoia National Park', 'CA'),
    ('Shenandoah National Park', 'VA'),
    ('Theodore Roosevelt National Park', 'ND'),
    ('Virgin Islands National Park', 'VI'),
    ('Voyageurs National Park', 'MN'),
    ('White Sands National Park', 'NM'),
    ('Wind Cave National Park', 'SD'),
    ('Wrangell-St. Elias National Park', 'AK'),
    ('Yellowstone National Park', 'WY'),
    ('Yosemite National Park', 'CA'),
    ('Zion National Park', 'UT'),
]
