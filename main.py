#!/usr/bin/env python

"""
Travel Log - bulk import, validation and export of visited locations

Usage:
    main.py <command> [file] [options]

Commands:
    seed: Load the default location types and national parks catalog
    import-json: Import locations from a JSON file ({"locations": [...]})
    import-csv: Import locations from a CSV file (Location,Arrival,Departure,Comments,Address,Latitude,Longitude,Type)
    validate-json: Check a JSON file without importing it
    validate-csv: Check a CSV file without importing it
    export-json: Write all locations of the user to JSON
    export-csv: Write all locations of the user to CSV
    list-types: Show the valid location types
    list-parks: Show the national parks catalog (optionally --state XX)
    visited-parks: Show catalog parks the user has visited
    count-by-state: Show how many locations the user has per state

Options:
    --user-id: Owner of the imported/exported locations (default: DEFAULT_USER_ID or 'local')
    --data-dir: Directory holding the location database (default: data)
    --output: Export destination file (default: exports/locations.json|csv)
    --dry-run: For imports, validate the file instead of importing it
    --verbose: Enable verbose logging output
"""

import argparse
import json
import logging
import sys
from config import (
    CSV_EXPORT_FILE,
    DATA_DIR,
    DATABASE_FILE,
    DEFAULT_LOCATION_TYPES,
    DEFAULT_NATIONAL_PARKS,
    DEFAULT_USER_ID,
    EXPORT_DIR,
    JSON_EXPORT_FILE,
)
from core.exporter import DataExportService
from core.importer import DataImportService
from core.services import LocationService, LocationTypeService, NationalParkService
from pathlib import Path
from utils.storage import LocationRepository, LocationTypeRepository, NationalParkRepository, open_database

logger = logging.getLogger(__name__)

IMPORT_COMMANDS = {'import-json', 'import-csv', 'validate-json', 'validate-csv'}
COMMANDS = IMPORT_COMMANDS | {
    'seed',
    'export-json',
    'export-csv',
    'list-types',
    'list-parks',
    'visited-parks',
    'count-by-state',
}


class TravelLog:
    """Wires repositories and services over one database file"""

    def __init__(self, data_dir: Path = DATA_DIR):
        self.db = open_database(data_dir / DATABASE_FILE)
        self.location_repository = LocationRepository(self.db)
        self.location_type_repository = LocationTypeRepository(self.db)
        self.national_park_repository = NationalParkRepository(self.db)

        self.importer = DataImportService(
            self.location_repository, self.location_type_repository, self.national_park_repository
        )
        self.exporter = DataExportService(self.location_repository)
        self.locations = LocationService(
            self.location_repository, self.location_type_repository, self.national_park_repository
        )
        self.location_types = LocationTypeService(self.location_type_repository)
        self.national_parks = NationalParkService(self.national_park_repository, self.location_repository)

    def seed(self) -> tuple[int, int]:
        types_added = self.location_type_repository.seed(DEFAULT_LOCATION_TYPES)
        parks_added = self.national_park_repository.seed(DEFAULT_NATIONAL_PARKS)
        return types_added, parks_added

    def close(self):
        self.db.close()


def run_import(app: TravelLog, command: str, file_path: Path, user_id: str, dry_run: bool = False) -> bool:
    """Import or validate one file and print the outcome"""
    if dry_run and command.startswith('import-'):
        logger.info(f"DRY RUN: validating {file_path} instead of importing")
        command = command.replace('import-', 'validate-')

    with open(file_path, 'rb') as stream:
        if command == 'import-json':
            result = app.importer.import_from_json(stream, user_id)
        elif command == 'import-csv':
            result = app.importer.import_from_csv(stream, user_id)
        elif command == 'validate-json':
            result = app.importer.validate_json(stream)
        else:
            result = app.importer.validate_csv(stream)

    summary = result.to_dict()
    if command.startswith('import-'):
        print("\n=== Import Results ===")
        print(f"Status: {'SUCCESS' if result.success else 'FAILED'}")
        print(f"Total records: {summary['total_records']}")
        print(f"Imported: {summary['imported_records']}")
        print(f"Failed: {summary['failed_records']}")
        success = result.success
    else:
        print("\n=== Validation Results ===")
        print(f"Status: {'VALID' if result.is_valid else 'INVALID'}")
        print(f"Records: {summary['record_count']}")
        for message in summary['validation_messages']:
            print(f"  {message}")
        success = result.is_valid

    if summary['errors']:
        print("Errors:")
        for error in summary['errors']:
            print(f"  - {error}")

    return success


def run_export(app: TravelLog, command: str, output: Path | None, user_id: str) -> Path:
    """Export the user's locations and return the written file"""
    if command == 'export-json':
        stream = app.exporter.export_to_json(user_id)
        output = output or EXPORT_DIR / JSON_EXPORT_FILE
    else:
        stream = app.exporter.export_to_csv(user_id)
        output = output or EXPORT_DIR / CSV_EXPORT_FILE

    output.parent.mkdir(parents=True, exist_ok=True)
    with stream, open(output, 'wb') as f:
        f.write(stream.getvalue())

    logger.info(f"Export written to {output}")
    return output


def parse_arguments(argv: list[str] | None = None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Travel Log - bulk import, validation and export of visited locations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument('command', nargs='?', default='help', help='Command to execute')
    parser.add_argument('file', nargs='?', type=Path, help='Input file for import and validate commands')
    parser.add_argument('--user-id', default=DEFAULT_USER_ID, help='Owner of the locations')
    parser.add_argument('--data-dir', type=Path, default=DATA_DIR, help='Directory holding the location database')
    parser.add_argument('--output', type=Path, help='Export destination file')
    parser.add_argument('--state', help='Two-letter state code for list-parks')
    parser.add_argument('--dry-run', action='store_true', help='Validate import files instead of importing them')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose logging output')

    return parser.parse_args(argv)


def setup_logging(verbose: bool = False):
    """Configure logging based on verbosity level"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s', force=True)


def main(argv: list[str] | None = None):
    args = parse_arguments(argv)

    setup_logging(args.verbose)

    command = args.command

    if command not in COMMANDS:
        print(__doc__.strip())
        return

    if command in IMPORT_COMMANDS:
        if args.file is None or not args.file.exists():
            logger.error(f"Input file not found: {args.file}")
            sys.exit(1)

    app = TravelLog(data_dir=args.data_dir)
    try:
        if command == 'seed':
            types_added, parks_added = app.seed()
            print(f"Added {types_added} location types and {parks_added} national parks")
            sys.exit(0)

        elif command in IMPORT_COMMANDS:
            success = run_import(app, command, args.file, args.user_id, dry_run=args.dry_run)
            sys.exit(0 if success else 1)

        elif command in ('export-json', 'export-csv'):
            output = run_export(app, command, args.output, args.user_id)
            print(f"Exported locations to {output}")
            sys.exit(0)

        elif command == 'list-types':
            for location_type in app.location_types.get_all_location_types():
                print(f"{location_type.name}: {location_type.description}")
            sys.exit(0)

        elif command == 'list-parks':
            if args.state:
                parks = app.national_parks.get_parks_by_state(args.state.upper())
            else:
                parks = app.national_parks.get_all_parks()
            for park in parks:
                print(f"{park.name} ({park.state})")
            sys.exit(0)

        elif command == 'visited-parks':
            parks = app.national_parks.get_visited_parks(args.user_id)
            print(f"\n=== Visited National Parks ({len(parks)}) ===")
            for park in parks:
                print(f"{park.name} ({park.state})")
            sys.exit(0)

        elif command == 'count-by-state':
            counts = app.locations.get_state_counts(args.user_id)
            print(json.dumps(dict(sorted(counts.items())), indent=2))
            sys.exit(0)
    finally:
        app.close()


if __name__ == "__main__":
    main()
