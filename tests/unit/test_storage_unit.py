#!/usr/bin/env python3
"""
Unit tests for the StorageUnit entity and its Dimensions value object
"""

import unittest
from datetime import date
from decimal import Decimal

from storage_spots.domain.models import (
    Customer, Dimensions, InvalidArgumentError, StorageUnit, UnitType
)
from storage_spots.domain.aggregates import StorageLocation


class StorageUnitTestBase(unittest.TestCase):
    """Base class with a location to attach units to"""

    def setUp(self):
        """Set up test data"""
        self.location = StorageLocation("WA23Issaquah", "100.00")
        self.customer = Customer("Pat Perkins", "425-555-1314")
        self.start = date(2024, 3, 1)

    def make_unit(self, unit_type=UnitType.STANDARD, width=4, length=8, height=8, level=None):
        return StorageUnit(unit_type, width, length, height, self.location, level=level)


class TestUnitConstruction(StorageUnitTestBase):
    """Construction and validation"""

    def test_valid_dimensions(self):
        """Test every aligned, positive size is accepted"""
        for width in (4, 8, 12):
            for length in (4, 8, 16):
                for height in (2, 4, 8):
                    unit = self.make_unit(width=width, length=length, height=height)
                    self.assertEqual(
                        (unit.width, unit.length, unit.height), (width, length, height)
                    )

    def test_invalid_dimensions(self):
        """Test non-positive or misaligned sizes are rejected"""
        invalid = [
            (0, 8, 8), (-4, 8, 8), (4, 0, 8), (4, 8, 0), (4, 8, -2),
            (5, 8, 8), (4, 6, 8), (4, 8, 3), (2, 2, 2),
        ]
        for width, length, height in invalid:
            with self.assertRaises(InvalidArgumentError, msg=f"{width}x{length}x{height}"):
                self.make_unit(width=width, length=length, height=height)

    def test_dimensions_value_object(self):
        """Test area and volume helpers"""
        dims = Dimensions(4, 8, 6)
        self.assertEqual(dims.floor_area, 32)
        self.assertEqual(dims.volume, 192)
        self.assertEqual(str(dims), "4'(w) x 8'(l) x 6'(h)")

    def test_location_required(self):
        """Test a unit needs an owning location"""
        with self.assertRaises(InvalidArgumentError):
            StorageUnit(UnitType.STANDARD, 4, 8, 8, None)

    def test_unit_outlives_location_variable(self):
        """Test a unit fetched from a temporary location stays usable"""
        unit = StorageLocation("WA23Issaquah", 10).get_storage_unit(0, 0)
        self.assertTrue(unit.rent(self.customer, self.start))
        self.assertEqual(unit.get_price(), Decimal('85.0'))
        self.assertEqual(unit.location.designation, "WA23Issaquah")
        self.assertIn("rented to Pat Perkins for $85.00", str(unit))

    def test_humidity_level_bounds(self):
        """Test humidity levels must fall within 20-60"""
        self.assertEqual(self.make_unit(UnitType.HUMIDITY, level=20).level, 20)
        self.assertEqual(self.make_unit(UnitType.HUMIDITY, level=60).level, 60)
        for level in (19, 61, None):
            with self.assertRaises(InvalidArgumentError, msg=f"level={level}"):
                self.make_unit(UnitType.HUMIDITY, level=level)

    def test_temperature_level_bounds(self):
        """Test temperature levels must fall within 45-70"""
        self.assertEqual(self.make_unit(UnitType.TEMPERATURE, level=45).level, 45)
        self.assertEqual(self.make_unit(UnitType.TEMPERATURE, level=70).level, 70)
        for level in (44, 71, None):
            with self.assertRaises(InvalidArgumentError, msg=f"level={level}"):
                self.make_unit(UnitType.TEMPERATURE, level=level)

    def test_standard_unit_has_no_level(self):
        """Test standard units reject a climate level"""
        self.assertIsNone(self.make_unit().level)
        with self.assertRaises(InvalidArgumentError):
            self.make_unit(UnitType.STANDARD, level=30)

    def test_set_level(self):
        """Test changing a level re-validates it"""
        unit = self.make_unit(UnitType.HUMIDITY, level=30)
        unit.set_level(25)
        self.assertEqual(unit.level, 25)
        with self.assertRaises(InvalidArgumentError):
            unit.set_level(70)
        self.assertEqual(unit.level, 25)


class TestUnitRental(StorageUnitTestBase):
    """Rent and release lifecycle"""

    def test_new_unit_is_vacant(self):
        """Test a new unit is vacant with a zero price"""
        unit = self.make_unit()
        self.assertFalse(unit.is_rented())
        self.assertIsNone(unit.occupant)
        self.assertIsNone(unit.rental_start)
        self.assertEqual(unit.get_price(), Decimal('0'))

    def test_rent_then_release(self):
        """Test rent followed by release restores the vacant state"""
        unit = self.make_unit()

        self.assertTrue(unit.rent(self.customer, self.start))
        self.assertTrue(unit.is_rented())
        self.assertIs(unit.occupant, self.customer)
        self.assertEqual(unit.rental_start, self.start)
        self.assertEqual(unit.get_price(), Decimal('175.0'))

        self.assertTrue(unit.release())
        self.assertFalse(unit.is_rented())
        self.assertIsNone(unit.occupant)
        self.assertIsNone(unit.rental_start)
        self.assertEqual(unit.get_price(), Decimal('0'))

    def test_rent_occupied_unit_declined(self):
        """Test renting an occupied unit returns False and changes nothing"""
        unit = self.make_unit()
        other = Customer("Chris Connoly", "425-555-3141")
        unit.rent(self.customer, self.start)

        self.assertFalse(unit.rent(other, date(2024, 4, 1)))
        self.assertIs(unit.occupant, self.customer)
        self.assertEqual(unit.rental_start, self.start)

    def test_release_vacant_unit_declined(self):
        """Test releasing a vacant unit returns False"""
        self.assertFalse(self.make_unit().release())

    def test_rent_requires_start_date(self):
        """Test a missing start date is invalid usage"""
        unit = self.make_unit()
        with self.assertRaises(InvalidArgumentError):
            unit.rent(self.customer, None)
        self.assertFalse(unit.is_rented())

    def test_rent_to_no_customer(self):
        """Test renting to None is accepted but leaves the unit vacant"""
        unit = self.make_unit()
        with self.assertLogs("StorageUnit", level="WARNING"):
            self.assertTrue(unit.rent(None, self.start))
        self.assertFalse(unit.is_rented())
        self.assertIsNone(unit.rental_start)
        self.assertTrue(unit.rent(self.customer, self.start))


class TestUnitPricing(StorageUnitTestBase):
    """Variant-specific pricing through the unit"""

    def test_standard_price_ignores_dimensions(self):
        """Test standard units always add 75.0"""
        for width, length, height in ((4, 4, 2), (4, 8, 8), (12, 16, 10)):
            unit = self.make_unit(width=width, length=length, height=height)
            self.assertEqual(unit.unit_specific_price(), Decimal('75.0'))

    def test_humidity_pricing(self):
        """Test humidity price is floor area * 5 with a low-humidity surcharge"""
        cases = [(20, '180.0'), (25, '180.0'), (29, '180.0'), (30, '160.0'),
                 (40, '160.0'), (60, '160.0')]
        for level, expected in cases:
            unit = self.make_unit(UnitType.HUMIDITY, level=level)
            self.assertEqual(unit.unit_specific_price(), Decimal(expected), msg=f"level={level}")

    def test_temperature_pricing(self):
        """Test temperature price is volume * 1 with surcharges at the extremes"""
        cases = [(45, '286.0'), (47, '286.0'), (49, '286.0'), (50, '256.0'),
                 (55, '256.0'), (64, '256.0'), (65, '286.0'), (70, '286.0')]
        for level, expected in cases:
            unit = self.make_unit(UnitType.TEMPERATURE, level=level)
            self.assertEqual(unit.unit_specific_price(), Decimal(expected), msg=f"level={level}")

    def test_price_includes_location_base_price(self):
        """Test the rented price tracks the location base price"""
        unit = self.make_unit(UnitType.TEMPERATURE, level=47)
        unit.rent(self.customer, self.start)
        self.assertEqual(unit.get_price(), Decimal('386.0'))
        self.assertEqual(unit.price, Decimal('386.0'))

        self.location.base_price = 0
        self.assertEqual(unit.get_price(), Decimal('286.0'))

    def test_level_change_reprices(self):
        """Test a level change is picked up on the next price call"""
        unit = self.make_unit(UnitType.HUMIDITY, level=40)
        unit.rent(self.customer, self.start)
        self.assertEqual(unit.get_price(), Decimal('260.0'))
        unit.set_level(22)
        self.assertEqual(unit.get_price(), Decimal('280.0'))


class TestUnitRendering(StorageUnitTestBase):
    """String rendering"""

    def test_available_unit(self):
        self.assertEqual(
            str(self.make_unit()),
            "Standard unit, 4'(w) x 8'(l) x 8'(h), available"
        )

    def test_rented_unit(self):
        unit = self.make_unit(UnitType.TEMPERATURE, level=50)
        unit.rent(self.customer, self.start)
        self.assertEqual(
            str(unit),
            "Temperature unit, 4'(w) x 8'(l) x 8'(h), rented to Pat Perkins for $356.00"
        )

    def test_to_dict(self):
        unit = self.make_unit(UnitType.HUMIDITY, level=30)
        unit.rent(self.customer, self.start)
        data = unit.to_dict()
        self.assertEqual(data["unit_type"], "humidity")
        self.assertEqual(data["occupant"], "Pat Perkins")
        self.assertEqual(data["rental_start"], "2024-03-01")
        self.assertEqual(data["price"], "260.00")


if __name__ == "__main__":
    unittest.main()
