# File: src/storage_spots/domain/models.py
"""
Domain Models for the Storage Spots rental system
Following Domain-Driven Design (DDD) principles with rich domain models

This module contains:
1. Value Objects: Dimensions of a storage unit
2. Enums: The unit variant tag (standard, humidity, temperature)
3. Entities: Customer and StorageUnit
4. Domain Events: Events representing business occurrences

All models validate their input and raise InvalidArgumentError on bad data.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any, Tuple, TYPE_CHECKING
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
import logging
import uuid

if TYPE_CHECKING:
    from .aggregates import StorageLocation


# ============================================================================
# ERRORS AND MONEY HELPERS
# ============================================================================

class InvalidArgumentError(ValueError):
    """Raised for every validation failure in the rental domain"""
    pass


ZERO = Decimal('0.00')


def to_amount(value: Any) -> Decimal:
    """
    Convert a monetary input to Decimal
    Floats go through str() so 75.0 becomes Decimal('75.0'), not its binary expansion
    """
    if isinstance(value, bool) or value is None:
        raise InvalidArgumentError(f"Amount must be numeric, got: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise InvalidArgumentError(f"Amount must be numeric, got: {value!r}") from None
    if not amount.is_finite():
        raise InvalidArgumentError(f"Amount must be finite, got: {value!r}")
    return amount


# ============================================================================
# VALUE OBJECTS
# ============================================================================

@dataclass(frozen=True)
class Dimensions:
    """
    Value Object: Width, length and height of a storage unit in feet
    Width and length come in 4 ft increments, height in 2 ft increments
    """
    width: int
    length: int
    height: int

    WIDTH_LENGTH_MULTIPLE = 4
    HEIGHT_MULTIPLE = 2

    def __post_init__(self):
        """Validate dimensions"""
        for name in ("width", "length", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgumentError(f"{name} must be an integer, got: {value!r}")

        if self.width <= 0 or self.length <= 0 or self.height <= 0:
            raise InvalidArgumentError("All dimensions must be > 0")

        if (self.width % self.WIDTH_LENGTH_MULTIPLE != 0
                or self.length % self.WIDTH_LENGTH_MULTIPLE != 0):
            raise InvalidArgumentError(
                f"Width and length must be a multiple of {self.WIDTH_LENGTH_MULTIPLE}"
            )

        if self.height % self.HEIGHT_MULTIPLE != 0:
            raise InvalidArgumentError(f"Height must be a multiple of {self.HEIGHT_MULTIPLE}")

    @property
    def floor_area(self) -> int:
        """Square feet of floor space"""
        return self.width * self.length

    @property
    def volume(self) -> int:
        """Cubic feet of space"""
        return self.width * self.length * self.height

    def __str__(self) -> str:
        return f"{self.width}'(w) x {self.length}'(l) x {self.height}'(h)"


# ============================================================================
# ENUMS FOR DOMAIN TYPES
# ============================================================================

class UnitType(Enum):
    """
    Enumeration of storage unit variants
    Each variant carries its own pricing rule and optional climate level
    """
    STANDARD = "standard"
    HUMIDITY = "humidity"          # Humidity-controlled, level in percent
    TEMPERATURE = "temperature"    # Temperature-controlled, level in degrees F

    @property
    def map_symbol(self) -> str:
        """Single-letter symbol used in the unit map"""
        symbols = {
            UnitType.STANDARD: "S",
            UnitType.HUMIDITY: "H",
            UnitType.TEMPERATURE: "T",
        }
        return symbols[self]

    @property
    def level_range(self) -> Optional[Tuple[int, int]]:
        """Inclusive (low, high) bounds for the climate level, None if not controlled"""
        ranges = {
            UnitType.HUMIDITY: (20, 60),
            UnitType.TEMPERATURE: (45, 70),
        }
        return ranges.get(self)

    @property
    def is_climate_controlled(self) -> bool:
        return self.level_range is not None

    def validate_level(self, level: Optional[int]) -> Optional[int]:
        """
        Check a climate level against this variant's bounds
        Standard units take no level; controlled units require one in range
        """
        if not self.is_climate_controlled:
            if level is not None:
                raise InvalidArgumentError(f"{self} units do not have a climate level")
            return None

        low, high = self.level_range
        if isinstance(level, bool) or not isinstance(level, int):
            raise InvalidArgumentError(f"{self} level must be an integer, got: {level!r}")
        if level < low or level > high:
            raise InvalidArgumentError(
                f"{self} level {level} is out of bounds [{low}, {high}]"
            )
        return level

    def __str__(self) -> str:
        """Human-readable string representation"""
        return self.value.title()


# ============================================================================
# DOMAIN ENTITIES
# ============================================================================

class Entity:
    """
    Base class for all domain entities
    Provides common functionality for entities with identity
    """

    def __init__(self, id: Optional[str] = None):
        self._id = id or str(uuid.uuid4())

    @property
    def id(self) -> str:
        """Get entity ID"""
        return self._id

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same ID and type"""
        if not isinstance(other, Entity):
            return False
        return self.id == other.id and type(self) == type(other)

    def __hash__(self) -> int:
        return hash((self.id, type(self).__name__))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"


class Customer(Entity):
    """
    Entity: An account holder renting storage units
    The balance changes only through charge() and credit()
    """

    def __init__(self, name: str, phone: str, id: Optional[str] = None):
        super().__init__(id)
        self.name = name
        self.phone = phone
        self._balance: Decimal = ZERO

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if not value or not isinstance(value, str):
            raise InvalidArgumentError("Name must be a non-empty string")
        self._name = value

    @property
    def phone(self) -> str:
        return self._phone

    @phone.setter
    def phone(self, value: str) -> None:
        if not value or not isinstance(value, str):
            raise InvalidArgumentError("Phone must be a non-empty string")
        self._phone = value

    @property
    def balance(self) -> Decimal:
        """Amount currently owed; negative means the customer is in credit"""
        return self._balance

    def charge(self, amount: Any) -> Decimal:
        """
        Add an amount to the balance
        Returns: the new balance
        Raises: InvalidArgumentError if amount is negative
        """
        amount = to_amount(amount)
        if amount < 0:
            raise InvalidArgumentError("Amounts must be non-negative")
        self._balance += amount
        return self._balance

    def credit(self, amount: Any) -> Decimal:
        """
        Subtract an amount from the balance (the balance may go negative)
        Returns: the new balance
        Raises: InvalidArgumentError if amount is negative
        """
        amount = to_amount(amount)
        if amount < 0:
            raise InvalidArgumentError("Amounts must be non-negative")
        self._balance -= amount
        return self._balance

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "balance": str(self.balance),
        }

    def __str__(self) -> str:
        return f"{self.name} ({self.phone}) balance ${self.balance:.2f}"


class StorageUnit(Entity):
    """
    Entity: A rentable cell in a storage location

    One class for all variants; the unit_type tag selects the pricing rule
    and whether a climate level applies. The unit keeps a back-reference to the
    location that built it and uses it only to look up the base price.
    """

    def __init__(
        self,
        unit_type: UnitType,
        width: int,
        length: int,
        height: int,
        location: 'StorageLocation',
        level: Optional[int] = None,
        id: Optional[str] = None
    ):
        super().__init__(id)
        if not isinstance(unit_type, UnitType):
            raise InvalidArgumentError(f"Unknown unit type: {unit_type!r}")
        if location is None:
            raise InvalidArgumentError("Storage location must be non-null")

        self.unit_type = unit_type
        self.dimensions = Dimensions(width, length, height)
        self._level = unit_type.validate_level(level)
        self._location = location

        self.occupant: Optional[Customer] = None
        self.rental_start: Optional[date] = None
        self._price: Decimal = ZERO
        self._logger = logging.getLogger(self.__class__.__name__)

    # Dimension shortcuts
    @property
    def width(self) -> int:
        return self.dimensions.width

    @property
    def length(self) -> int:
        return self.dimensions.length

    @property
    def height(self) -> int:
        return self.dimensions.height

    @property
    def level(self) -> Optional[int]:
        """Humidity percent or temperature in degrees F; None for standard units"""
        return self._level

    def set_level(self, level: int) -> None:
        """Change the climate level, re-validating against the variant bounds"""
        self._level = self.unit_type.validate_level(level)

    @property
    def location(self) -> 'StorageLocation':
        return self._location

    def is_rented(self) -> bool:
        return self.occupant is not None

    def rent(self, customer: Optional[Customer], start_date: date) -> bool:
        """
        Rent this unit to a customer starting on the given date
        Returns: True if rented, False if the unit was already rented
        Raises: InvalidArgumentError if start_date is missing
        """
        if start_date is None:
            raise InvalidArgumentError("Rental start date must not be null")

        if self.is_rented():
            self._logger.debug(f"{self.unit_type} unit {self.id} already rented")
            return False

        if customer is None:
            # Accepted without error, but the unit stays vacant
            self._logger.warning(f"Unit {self.id} rented to no customer; unit stays vacant")
            return True

        self.occupant = customer
        self.rental_start = start_date
        return True

    def release(self) -> bool:
        """
        Release this unit from its current customer
        Returns: True if released, False if the unit was already vacant
        """
        if not self.is_rented():
            return False

        self.occupant = None
        self.rental_start = None
        self._price = ZERO
        return True

    def unit_specific_price(self) -> Decimal:
        """Monthly surcharge for this variant, independent of occupancy"""
        from .strategies import calculate_unit_specific_price
        return calculate_unit_specific_price(self)

    def get_price(self) -> Decimal:
        """
        Current monthly price: 0 while vacant, otherwise the location base
        price plus the variant surcharge. Recomputed on every call.
        """
        if not self.is_rented():
            self._price = ZERO
        else:
            self._price = self.location.base_price + self.unit_specific_price()
        return self._price

    @property
    def price(self) -> Decimal:
        return self.get_price()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "id": self.id,
            "unit_type": self.unit_type.value,
            "width": self.width,
            "length": self.length,
            "height": self.height,
            "level": self.level,
            "is_rented": self.is_rented(),
            "occupant": self.occupant.name if self.occupant else None,
            "rental_start": self.rental_start.isoformat() if self.rental_start else None,
            "price": str(self.get_price()),
        }

    def __str__(self) -> str:
        info = f"{self.unit_type} unit, {self.dimensions}, "
        if self.occupant is None:
            return info + "available"
        return info + f"rented to {self.occupant.name} for ${self.get_price():.2f}"


# ============================================================================
# DOMAIN EVENTS
# ============================================================================

class DomainEvent(ABC):
    """
    Base class for all domain events
    Events represent something that happened in the domain
    """

    def __init__(self):
        self.event_id = str(uuid.uuid4())
        self.timestamp = datetime.now()

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization"""
        pass

    def __str__(self) -> str:
        return f"{self.__class__.__name__} at {self.timestamp}"


class CustomerAddedEvent(DomainEvent):
    """Event: A customer joined a location's roster"""

    def __init__(self, designation: str, customer_id: str, roster_index: int):
        super().__init__()
        self.designation = designation
        self.customer_id = customer_id
        self.roster_index = roster_index

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "customer_added",
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "designation": self.designation,
            "customer_id": self.customer_id,
            "roster_index": self.roster_index,
        }


class UnitRentedEvent(DomainEvent):
    """Event: A unit was rented through its location"""

    def __init__(self, designation: str, row: int, slot: int,
                 customer_id: Optional[str], start_date: date):
        super().__init__()
        self.designation = designation
        self.row = row
        self.slot = slot
        self.customer_id = customer_id
        self.start_date = start_date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "unit_rented",
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "designation": self.designation,
            "row": self.row,
            "slot": self.slot,
            "customer_id": self.customer_id,
            "start_date": self.start_date.isoformat(),
        }


class UnitReleasedEvent(DomainEvent):
    """Event: A unit was released through its location"""

    def __init__(self, designation: str, row: int, slot: int, customer_id: str):
        super().__init__()
        self.designation = designation
        self.row = row
        self.slot = slot
        self.customer_id = customer_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "unit_released",
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "designation": self.designation,
            "row": self.row,
            "slot": self.slot,
            "customer_id": self.customer_id,
        }


class MonthlyRentChargedEvent(DomainEvent):
    """
    Event: Monthly rent was charged to every customer on the roster
    charges holds (customer_id, unit_count, subtotal, amount_charged) in roster order
    """

    def __init__(self, designation: str,
                 charges: Tuple[Tuple[str, int, Decimal, Decimal], ...],
                 total: Decimal):
        super().__init__()
        self.designation = designation
        self.charges = charges
        self.total = total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "monthly_rent_charged",
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "designation": self.designation,
            "charges": [
                {
                    "customer_id": customer_id,
                    "unit_count": unit_count,
                    "subtotal": str(subtotal),
                    "amount_charged": str(charged),
                }
                for customer_id, unit_count, subtotal, charged in self.charges
            ],
            "total": str(self.total),
        }
