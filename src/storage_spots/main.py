# File: src/storage_spots/main.py
"""
Console demo for the Storage Spots rental system
Builds a location, rents units to two customers, bills a month and prints the unit map
"""

from datetime import date
import logging
import os
import sys

from .config import AppConfig
from .domain.models import Customer, UnitType
from .domain.aggregates import StorageLocation


def setup_logging() -> logging.Logger:
    """Setup application logging configuration"""
    log_dir = AppConfig.LOG_DIR
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    logging.basicConfig(
        level=getattr(logging, AppConfig.LOG_LEVEL.upper(), logging.INFO),
        format=AppConfig.LOG_FORMAT,
        handlers=[
            logging.FileHandler(os.path.join(log_dir, AppConfig.LOG_FILE)),
            logging.StreamHandler(sys.stderr)
        ]
    )
    return logging.getLogger(__name__)


def run_demo(out=None) -> StorageLocation:
    """Run the demo scenario, writing the report to out (stdout by default)"""
    out = out or sys.stdout
    today = date.today()

    location = StorageLocation("WA23Issaquah", "100.0")
    location.add_customer(Customer("Pat Perkins", "425-555-1314"))
    location.add_customer(Customer("Chris Connoly", "425-555-3141"))

    print(f"Storage Location : {location.designation}", file=out)
    print(f"Customer count   : {location.customer_count:3d}", file=out)
    print(f"Empty unit count : {len(location.get_empty_units()):3d}", file=out)

    print("\nRenting three units to Pat Perkins", file=out)
    pat = location.get_customer(0)
    for row, slot in ((1, 1), (8, 2), (11, 3)):
        location.get_storage_unit(row, slot).rent(pat, today)

    print("\nRenting three units to Chris Connoly", file=out)
    chris = location.get_customer(1)
    for row, slot in ((11, 1), (11, 2), (11, 5)):
        location.get_storage_unit(row, slot).rent(chris, today)

    print(file=out)
    print(f"Empty count                  : {len(location.get_empty_units()):3d}", file=out)
    print(f"Pat's unit count             : {len(location.get_customer_units(pat)):3d}", file=out)
    print(f"Chris's unit count           : {len(location.get_customer_units(chris)):3d}", file=out)
    for unit_type in UnitType:
        label = f"Empty {unit_type.value} unit count"
        print(f"{label:<29}: {len(location.get_empty_units(unit_type)):3d}", file=out)

    print("\nShowing storage units, rented and unrented", file=out)
    print(location.get_storage_unit(1, 5), file=out)
    print(location.get_storage_unit(11, 5), file=out)

    print(file=out)
    print(f"Pat's balance before charging monthly rent   :  ${pat.balance:>9,.2f}", file=out)
    print(f"Chris's balance before charging monthly rent :  ${chris.balance:>9,.2f}", file=out)
    total = location.charge_monthly_rent()
    print(f"Pat's balance after charging monthly rent    :  ${pat.balance:>9,.2f}", file=out)
    print(f"Chris's balance after charging monthly rent  :  ${chris.balance:>9,.2f}", file=out)
    print(f"Total rent charged for all units             :  ${total:>9,.2f}", file=out)

    print(location.unit_map(), file=out)
    return location


def main() -> int:
    logger = setup_logging()
    logger.info(f"Starting {AppConfig.APP_NAME} v{AppConfig.VERSION}")
    run_demo()
    return 0


if __name__ == "__main__":
    sys.exit(main())
