# File: src/storage_spots/domain/aggregates.py
"""
Aggregate Roots for the Storage Spots rental system
Following Domain-Driven Design (DDD) Aggregate Pattern

Aggregates:
1. StorageLocation - Root aggregate owning the unit grid and customer roster

Key Concepts:
- The location exclusively owns the units it builds; units only look it up
- Units are reached through the root (row, slot) accessors
- Domain events are raised for state changes made through the root
- Everything is single-threaded; rent() is check-then-act and
  charge_monthly_rent() is read-then-mutate, so callers sharing a location
  across threads must serialize access themselves
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Any
from datetime import date
from decimal import Decimal
import logging
import re

from ..config import FacilityLayout
from .models import (
    Entity, Customer, StorageUnit, UnitType, DomainEvent,
    InvalidArgumentError, ZERO, to_amount,
    CustomerAddedEvent, UnitRentedEvent, UnitReleasedEvent, MonthlyRentChargedEvent
)
from .strategies import MultiUnitDiscountStrategy


# ============================================================================
# BASE AGGREGATE ROOT
# ============================================================================

class AggregateRoot(Entity):
    """
    Base class for all aggregate roots
    Provides domain event collection and versioning
    """

    def __init__(self, id: Optional[str] = None):
        super().__init__(id)
        self._version: int = 1
        self._changes: List[DomainEvent] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def version(self) -> int:
        """Get current aggregate version"""
        return self._version

    def _increment_version(self) -> None:
        self._version += 1

    def _add_domain_event(self, event: DomainEvent) -> None:
        """Add a domain event to the list of changes"""
        self._changes.append(event)
        self._logger.debug(f"Added domain event: {event.__class__.__name__}")

    @property
    def pending_events(self) -> Tuple[DomainEvent, ...]:
        """Pending domain events, oldest first, without clearing them"""
        return tuple(self._changes)

    def clear_events(self) -> List[DomainEvent]:
        """Clear and return all domain events"""
        events = self._changes.copy()
        self._changes.clear()
        return events

    @property
    def has_changes(self) -> bool:
        """Check if aggregate has pending domain events"""
        return len(self._changes) > 0


# ============================================================================
# STORAGE LOCATION AGGREGATE
# ============================================================================

@dataclass
class BillingPolicies:
    """Value Object: Monthly billing policies of a location"""
    multi_unit_discount: Decimal = Decimal('0.05')
    rounding_increment: Decimal = Decimal('0.05')

    def __post_init__(self):
        """Validate policy values"""
        self.multi_unit_discount = to_amount(self.multi_unit_discount)
        self.rounding_increment = to_amount(self.rounding_increment)
        if not Decimal('0') <= self.multi_unit_discount < Decimal('1'):
            raise InvalidArgumentError("Multi-unit discount must be in [0, 1)")

        if self.rounding_increment <= Decimal('0'):
            raise InvalidArgumentError("Rounding increment must be positive")


class StorageLocation(AggregateRoot):
    """
    Aggregate Root: A storage facility with a fixed grid of units and a roster
    of customers. Provides unit queries, rentals and monthly billing.
    """

    def __init__(
        self,
        designation: str,
        base_price: Any,
        policies: Optional[BillingPolicies] = None,
        id: Optional[str] = None
    ):
        super().__init__(id)
        if not designation or not isinstance(designation, str):
            raise InvalidArgumentError("The location designation can't be empty or null")
        if not re.fullmatch(FacilityLayout.DESIGNATION_PATTERN, designation):
            raise InvalidArgumentError(
                f"Designation doesn't match required pattern: {designation}"
            )

        self._designation = designation
        self.base_price = base_price
        self.policies = policies or BillingPolicies()
        self._discount_strategy = MultiUnitDiscountStrategy(
            self.policies.multi_unit_discount,
            self.policies.rounding_increment
        )

        # Roster has a fixed capacity and is append-only
        self._customers: List[Customer] = []

        self._units: List[List[StorageUnit]] = []
        self._initialize_units()

        self._logger.info(
            f"Created StorageLocation: {self.designation} "
            f"({self.unit_count} units, base price ${self.base_price:.2f})"
        )

    def _initialize_units(self) -> None:
        """Build the full grid; each row holds a single unit variant"""
        width, length, height = FacilityLayout.unit_dimensions()

        for row in range(FacilityLayout.NUM_ROWS):
            unit_type, slots, level = self._row_layout(row)
            self._units.append([
                StorageUnit(unit_type, width, length, height, self, level=level)
                for _ in range(slots)
            ])

        self._logger.debug(f"Initialized {self.unit_count} units in {self.row_count} rows")

    @staticmethod
    def _row_layout(row: int) -> Tuple[UnitType, int, Optional[int]]:
        """Get (unit_type, slot_count, default_level) for a grid row"""
        if row >= FacilityLayout.ROW_START_TEMPERATURE:
            return (UnitType.TEMPERATURE, FacilityLayout.SLOTS_IN_TEMPERATURE_ROW,
                    FacilityLayout.DEFAULT_TEMPERATURE_LEVEL)
        if row >= FacilityLayout.ROW_START_HUMIDITY:
            return (UnitType.HUMIDITY, FacilityLayout.SLOTS_IN_HUMIDITY_ROW,
                    FacilityLayout.DEFAULT_HUMIDITY_LEVEL)
        return UnitType.STANDARD, FacilityLayout.SLOTS_IN_STANDARD_ROW, None

    # ========================================================================
    # PROPERTIES
    # ========================================================================

    @property
    def designation(self) -> str:
        return self._designation

    @property
    def base_price(self) -> Decimal:
        """Monthly amount added to every occupied unit"""
        return self._base_price

    @base_price.setter
    def base_price(self, value: Any) -> None:
        value = to_amount(value)
        if value < 0:
            raise InvalidArgumentError("Price cannot be negative.")
        self._base_price = value

    @property
    def multi_unit_discount(self) -> Decimal:
        return self.policies.multi_unit_discount

    @property
    def row_count(self) -> int:
        return len(self._units)

    @property
    def unit_count(self) -> int:
        return sum(len(row) for row in self._units)

    @property
    def customer_count(self) -> int:
        return len(self._customers)

    @property
    def customers(self) -> Tuple[Customer, ...]:
        """Snapshot of the roster in insertion order"""
        return tuple(self._customers)

    # ========================================================================
    # ACCESSORS
    # ========================================================================

    def get_units_per_row_count(self, row: int) -> int:
        """Number of slots in a row"""
        self._check_row(row)
        return len(self._units[row])

    def get_storage_unit(self, row: int, slot: int) -> StorageUnit:
        """
        Get the unit at (row, slot)
        Raises: InvalidArgumentError if either index is out of range
        """
        self._check_row(row)
        if not 0 <= slot < len(self._units[row]):
            raise InvalidArgumentError(f"Slot index {slot} is out of bounds for row {row}")
        return self._units[row][slot]

    def get_customer(self, index: int) -> Customer:
        """
        Get the customer at a roster index
        Raises: InvalidArgumentError if the index is out of range
        """
        if not 0 <= index < len(self._customers):
            raise InvalidArgumentError(f"Customer index {index} is out of bounds")
        return self._customers[index]

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self._units):
            raise InvalidArgumentError(f"Row index {row} is out of bounds")

    def iter_units(self):
        """Yield (row, slot, unit) in row-major order"""
        for row, units in enumerate(self._units):
            for slot, unit in enumerate(units):
                yield row, slot, unit

    # ========================================================================
    # PUBLIC BUSINESS METHODS
    # ========================================================================

    def add_customer(self, customer: Customer) -> int:
        """
        Append a customer to the roster
        Returns: the customer's roster index
        Raises: InvalidArgumentError if customer is None or the roster is full
        """
        if customer is None:
            raise InvalidArgumentError("Customer reference must not be null")
        if len(self._customers) >= FacilityLayout.MAX_CUSTOMERS:
            raise InvalidArgumentError(
                f"Customer roster is full ({FacilityLayout.MAX_CUSTOMERS} customers)"
            )

        self._customers.append(customer)
        index = len(self._customers) - 1

        self._increment_version()
        self._add_domain_event(CustomerAddedEvent(self.designation, customer.id, index))
        self._logger.info(f"Added customer {customer.name} at index {index}")
        return index

    def get_customer_units(self, customer: Optional[Customer]) -> List[StorageUnit]:
        """All units rented by the given customer, in row-major order"""
        if customer is None:
            return []
        return [unit for _, _, unit in self.iter_units() if unit.occupant is customer]

    def get_empty_units(self, unit_type: Optional[UnitType] = None) -> List[StorageUnit]:
        """
        All vacant units in row-major order
        Optionally restricted to a single unit type
        """
        return [
            unit for _, _, unit in self.iter_units()
            if not unit.is_rented() and (unit_type is None or unit.unit_type == unit_type)
        ]

    def rent_unit(self, row: int, slot: int, customer: Optional[Customer],
                  start_date: date) -> bool:
        """
        Rent the unit at (row, slot) and record the rental on the aggregate
        Returns: the unit's rent() result
        """
        unit = self.get_storage_unit(row, slot)
        if not unit.rent(customer, start_date):
            self._logger.info(f"Unit {row}-{slot} is already rented")
            return False
        if customer is None:
            # Accepted by the unit but nothing changed
            return True

        self._increment_version()
        self._add_domain_event(UnitRentedEvent(
            self.designation, row, slot, customer.id, start_date
        ))
        self._logger.info(
            f"Unit {row}-{slot} rented to {customer.name} from {start_date.isoformat()}"
        )
        return True

    def release_unit(self, row: int, slot: int) -> bool:
        """
        Release the unit at (row, slot)
        Returns: False if it was already vacant
        """
        unit = self.get_storage_unit(row, slot)
        occupant = unit.occupant
        if not unit.release():
            self._logger.info(f"Unit {row}-{slot} is not rented")
            return False

        self._increment_version()
        self._add_domain_event(UnitReleasedEvent(self.designation, row, slot, occupant.id))
        self._logger.info(f"Unit {row}-{slot} released by {occupant.name}")
        return True

    def calculate_customer_rent(self, customer: Customer) -> Decimal:
        """
        Monthly rent owed by a customer, without charging it
        Multi-unit renters get the discount and nickel rounding
        """
        _, _, amount = self._rent_breakdown(customer)
        return amount

    def _rent_breakdown(self, customer: Customer) -> Tuple[List[StorageUnit], Decimal, Decimal]:
        """Get (units, undiscounted subtotal, amount due) for a customer"""
        units = self.get_customer_units(customer)
        subtotal = sum((unit.get_price() for unit in units), ZERO)
        return units, subtotal, self._discount_strategy.apply(subtotal, len(units))

    def charge_monthly_rent(self) -> Decimal:
        """
        Charge every customer their monthly rent, in roster order
        Returns: total charged across the location
        """
        total = ZERO
        charges = []

        for customer in self._customers:
            units, subtotal, amount = self._rent_breakdown(customer)

            customer.charge(amount)
            total += amount
            charges.append((customer.id, len(units), subtotal, amount))

        self._increment_version()
        self._add_domain_event(MonthlyRentChargedEvent(self.designation, tuple(charges), total))
        self._logger.info(
            f"Charged monthly rent to {len(charges)} customers at {self.designation}: "
            f"${total:.2f}"
        )
        return total

    # ========================================================================
    # REPORTING
    # ========================================================================

    def unit_map(self) -> str:
        """
        Fixed-width text map of the grid
        Rented units show S* or their climate level (H30, T50); vacant show S__
        """
        width = FacilityLayout.MAP_SCREEN_WIDTH
        rule = "-" * width
        title = f"Unit Map for Location {self.designation}"
        padding = " " * ((width - len(title)) // 2)

        lines = [rule, padding + title, rule, ""]
        header = "     " + "".join(
            f"{slot}    " for slot in range(FacilityLayout.SLOTS_IN_STANDARD_ROW)
        )
        lines.extend([header, ""])

        for row, units in enumerate(self._units):
            cells = []
            for unit in units:
                symbol = unit.unit_type.map_symbol
                if not unit.is_rented():
                    cells.append(f"{symbol}__  ")
                elif unit.unit_type.is_climate_controlled:
                    cells.append(f"{symbol}{unit.level}  ")
                else:
                    cells.append(f"{symbol}*   ")
            lines.append(f"{row:02d}:  " + "".join(cells))

        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return (f"StorageLocation {self.designation}: {self.unit_count} units, "
                f"{len(self.get_empty_units())} available, {self.customer_count} customers")
