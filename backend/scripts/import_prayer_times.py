#!/usr/bin/env python
# scripts/import_prayer_times.py

import argparse
import os
import random
import sys
import time
from datetime import datetime

# This script is intended to be run from the command line.
# It needs access to the main Flask application context.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from waktusolat import create_app
from waktusolat.errors import UpstreamFetchError
from waktusolat.services.gazetteer import get_gazetteer
from waktusolat.services.ingestion_service import ingest_zone_month


def import_prayer_times(year, zone_codes=None, months=None, pause=(1, 3)):
    """
    Imports a year of official prayer times from JAKIM e-solat into the database.

    Runs the same ingestion path as the Celery tasks, but synchronously, so it
    can seed a fresh database or backfill a year before the workers are up.

    Workflow:
    1. Take the requested zones (default: every zone in the gazetteer).
    2. For each zone and month, fetch the month from e-solat.
    3. Store it only if every day of the month is present.
    4. Sleep for a random interval between calls to stay polite to the upstream.

    Returns:
        list: (zone, month) pairs that failed.
    """
    app = create_app(os.getenv('FLASK_CONFIG') or 'default')
    failures = []
    with app.app_context():
        gazetteer = get_gazetteer()
        codes = zone_codes or [zone.code for zone in gazetteer]
        unknown = [code for code in codes if code not in gazetteer]
        if unknown:
            print(f"ERROR: Unknown zone code(s): {', '.join(unknown)}. Aborting.")
            return [(code, None) for code in unknown]

        months = months or list(range(1, 13))
        print(f"--- Importing {year} for {len(codes)} zone(s), {len(months)} month(s) ---")

        for i, code in enumerate(codes):
            print(f"\n--- Processing {i + 1}/{len(codes)}: Zone='{code}' ---")
            for month in months:
                try:
                    written = ingest_zone_month(code, year, month)
                    print(f"  SUCCESS: {year}-{month:02d}: stored {written} days.")
                except UpstreamFetchError as e:
                    print(f"  ERROR: {year}-{month:02d}: {e}")
                    failures.append((code, month))

                if pause:
                    time.sleep(random.uniform(*pause))

        print(f"\n--- Import finished with {len(failures)} failure(s). ---")
    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(description="Import JAKIM prayer times into the database.")
    parser.add_argument('--year', type=int, default=datetime.utcnow().year)
    parser.add_argument('--zone', action='append', dest='zones', help="Zone code; repeat for several. Default: all zones.")
    parser.add_argument('--month', action='append', type=int, dest='months', help="Month 1-12; repeat for several. Default: all months.")
    args = parser.parse_args(argv)

    failures = import_prayer_times(args.year, args.zones, args.months)
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
