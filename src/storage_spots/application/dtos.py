# File: src/storage_spots/application/dtos.py
"""
Data Transfer Objects (DTOs) for the Storage Spots rental system

This module defines DTOs for handing data to callers outside the domain:
1. Input DTOs - Requests for rental operations
2. Output DTOs - Units, customers, billing summaries and location status

DTO Principles:
- Validation at creation
- No business logic, only data
- Serialization support via pydantic
"""

from typing import Dict, List, Optional, Any
from datetime import date
from decimal import Decimal
from enum import Enum
import json

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.models import Customer, StorageUnit, UnitType


# ============================================================================
# BASE DTO CLASSES
# ============================================================================

class BaseDTO(BaseModel):
    """Base DTO with common functionality"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self, exclude_none: bool = False, **kwargs) -> Dict[str, Any]:
        """Convert DTO to dictionary"""
        data = self.model_dump(**kwargs)
        if exclude_none:
            data = {k: v for k, v in data.items() if v is not None}
        return data

    def to_json(self, **kwargs) -> str:
        """Convert DTO to JSON string"""
        return self.model_dump_json(**kwargs)

    @classmethod
    def from_json(cls, json_str: str) -> 'BaseDTO':
        """Create DTO from JSON string"""
        return cls(**json.loads(json_str))


# ============================================================================
# ENUM DTOs
# ============================================================================

class UnitTypeDTO(str, Enum):
    """Storage unit type DTO"""
    STANDARD = "standard"
    HUMIDITY = "humidity"
    TEMPERATURE = "temperature"

    def to_domain(self) -> UnitType:
        return UnitType(self.value)


# ============================================================================
# ENTITY DTOs
# ============================================================================

class CustomerDTO(BaseDTO):
    """Customer DTO"""
    index: int = Field(ge=0, description="Roster index at the location")
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    balance: Decimal

    @classmethod
    def from_domain(cls, index: int, customer: Customer) -> 'CustomerDTO':
        return cls(index=index, name=customer.name, phone=customer.phone,
                   balance=customer.balance)


class StorageUnitDTO(BaseDTO):
    """Storage unit DTO"""
    row: int = Field(ge=0)
    slot: int = Field(ge=0)
    unit_type: UnitTypeDTO
    width: int
    length: int
    height: int
    level: Optional[int] = None
    is_rented: bool
    occupant_name: Optional[str] = None
    rental_start: Optional[date] = None
    price: Decimal = Field(description="Current monthly price, 0 while vacant")

    @classmethod
    def from_domain(cls, row: int, slot: int, unit: StorageUnit) -> 'StorageUnitDTO':
        return cls(
            row=row,
            slot=slot,
            unit_type=UnitTypeDTO(unit.unit_type.value),
            width=unit.width,
            length=unit.length,
            height=unit.height,
            level=unit.level,
            is_rented=unit.is_rented(),
            occupant_name=unit.occupant.name if unit.occupant else None,
            rental_start=unit.rental_start,
            price=unit.get_price(),
        )


# ============================================================================
# REQUEST / RESULT DTOs
# ============================================================================

class CustomerCreateDTO(BaseDTO):
    """Request to register a customer"""
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)

    @field_validator('name', 'phone')
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Value must not be blank")
        return v


class RentRequestDTO(BaseDTO):
    """Request to rent the unit at (row, slot) to a roster customer"""
    row: int = Field(ge=0)
    slot: int = Field(ge=0)
    customer_index: int = Field(ge=0)
    start_date: date


class RentalResultDTO(BaseDTO):
    """Result of a rent or release request"""
    success: bool
    row: int
    slot: int
    unit: Optional[StorageUnitDTO] = None
    message: Optional[str] = None


class CustomerChargeDTO(BaseDTO):
    """One customer's line on a monthly billing run"""
    customer_index: int
    customer_name: str
    unit_count: int = Field(ge=0)
    subtotal: Decimal
    amount_charged: Decimal
    discount_applied: bool
    new_balance: Decimal


class MonthlyRentSummaryDTO(BaseDTO):
    """Result of a monthly billing run"""
    designation: str
    charges: List[CustomerChargeDTO] = Field(default_factory=list)
    total_charged: Decimal


class LocationStatusDTO(BaseDTO):
    """Occupancy snapshot of a location"""
    designation: str
    base_price: Decimal
    total_units: int
    rented_units: int
    empty_units_by_type: Dict[str, int]
    customer_count: int

    @property
    def occupancy_rate(self) -> float:
        if self.total_units == 0:
            return 0.0
        return self.rented_units / self.total_units
