#!/usr/bin/env python3
"""Show the owner payable for a car, for one month or a whole year."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fleet_payables import config
from fleet_payables.formatting import format_currency
from fleet_payables.resolver import PayableResolver
from fleet_payables.schedule import owner_split_schedule
from fleet_payables.storage import SqliteLedgerStore


def main(car_id: str, year: int, month: Optional[int] = None, db_path: Optional[str] = None) -> int:
    store = SqliteLedgerStore(db_path)

    if month is not None:
        result = PayableResolver(store).resolve(car_id, year, month)
        if not result.found:
            print(f"Income/expense ledger not found for car {car_id} in {year}.")
            return 1
        print(f"Car {car_id} {year}-{month:02d} payable: {format_currency(result.display)}")
        return 0

    ledger = store.load(car_id, year)
    if ledger is None:
        print(f"Income/expense ledger not found for car {car_id} in {year}.")
        return 1
    previous = store.load(car_id, year - 1)
    schedule = owner_split_schedule(ledger, year, previous=previous)
    print(f"Owner split schedule for car {car_id}, {year}:")
    print(schedule.round(2).to_string())
    print(f"\nYear total: {format_currency(schedule['owner_split'].sum())}")
    return 0


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Show owner payables computed from a car ledger.')
    parser.add_argument('--car-id', required=True, help='Car identifier')
    parser.add_argument('--year', type=int, required=True, help='Ledger year')
    parser.add_argument('--month', type=int, choices=range(1, 13), help='Single month (1-12); omit for the full year')
    parser.add_argument('--db', dest='db_path', help='Path to the ledger database')
    return parser.parse_args(argv)


if __name__ == '__main__':
    logging.basicConfig(level=config.LOG_LEVEL, format='%(levelname)s %(name)s: %(message)s')
    args = _parse_args()
    raise SystemExit(main(args.car_id, args.year, month=args.month, db_path=args.db_path))
