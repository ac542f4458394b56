#!/usr/bin/env python3
"""
Focused Integration Tests for Critical Scenarios

End-to-end rental and billing scenarios that must work correctly,
including the console demo.
"""

import io
import unittest
from datetime import date
from decimal import Decimal
from unittest.mock import patch

from storage_spots.domain.aggregates import StorageLocation
from storage_spots.domain.models import Customer, UnitType
from storage_spots.main import run_demo


class TestCriticalScenarios(unittest.TestCase):
    """Test critical scenarios that must work"""

    def setUp(self):
        """Set up for each test"""
        self.location = StorageLocation("WA23Issaquah", 100)
        self.start = date(2024, 1, 15)

    def test_1_fill_facility_and_bill(self):
        """CRITICAL: Every unit rented to one customer is billed once with the discount"""
        customer = Customer("Big Renter", "555-0100")
        self.location.add_customer(customer)

        for unit in self.location.get_empty_units():
            self.assertTrue(unit.rent(customer, self.start))
        self.assertEqual(self.location.get_empty_units(), [])

        # 70 * 175 + 24 * 260 + 12 * 356 = 12250 + 6240 + 4272 = 22762
        total = self.location.charge_monthly_rent()
        self.assertEqual(total, Decimal('21623.90'))
        self.assertEqual(customer.balance, total)

    def test_2_turnover_between_customers(self):
        """CRITICAL: A released unit can be rented again and bills the new tenant"""
        first = Customer("First", "555-0001")
        second = Customer("Second", "555-0002")
        self.location.add_customer(first)
        self.location.add_customer(second)

        unit = self.location.get_storage_unit(9, 7)
        unit.rent(first, self.start)
        self.location.charge_monthly_rent()
        unit.release()
        self.assertTrue(unit.rent(second, date(2024, 2, 15)))
        self.location.charge_monthly_rent()

        self.assertEqual(first.balance, Decimal('260'))
        self.assertEqual(second.balance, Decimal('260'))

    def test_3_payments_offset_rent(self):
        """CRITICAL: Credits reduce the balance and may leave the customer in credit"""
        customer = Customer("Payer", "555-0003")
        self.location.add_customer(customer)
        self.location.get_storage_unit(10, 0).rent(customer, self.start)

        self.location.charge_monthly_rent()
        self.assertEqual(customer.credit(400), Decimal('-44'))
        self.location.charge_monthly_rent()
        self.assertEqual(customer.balance, Decimal('312'))

    def test_4_climate_change_reprices_next_bill(self):
        """CRITICAL: Changing a unit's level changes the next month's rent"""
        customer = Customer("Cold Storage", "555-0004")
        self.location.add_customer(customer)
        unit = self.location.get_storage_unit(11, 0)
        unit.rent(customer, self.start)

        self.assertEqual(self.location.charge_monthly_rent(), Decimal('356'))
        unit.set_level(68)
        self.assertEqual(self.location.charge_monthly_rent(), Decimal('386'))

    def test_5_console_demo(self):
        """CRITICAL: The console demo runs and reports the expected totals"""
        out = io.StringIO()
        with patch("storage_spots.main.date") as mock_date:
            mock_date.today.return_value = self.start
            location = run_demo(out)

        report = out.getvalue()
        self.assertIn("Storage Location : WA23Issaquah", report)
        self.assertIn("Empty count                  : 100", report)
        self.assertIn("Empty temperature unit count :   8", report)
        self.assertIn("rented to Chris Connoly for $356.00", report)
        self.assertIn("751.45", report)
        self.assertIn("1,014.60", report)
        self.assertIn("1,766.05", report)
        self.assertIn("Unit Map for Location WA23Issaquah", report)

        self.assertEqual(len(location.get_empty_units(UnitType.HUMIDITY)), 23)
        self.assertEqual(location.get_customer(0).balance, Decimal('751.45'))


if __name__ == "__main__":
    unittest.main()
