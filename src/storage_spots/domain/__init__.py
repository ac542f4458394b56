"""Domain layer: entities, pricing strategies and the StorageLocation aggregate"""

from .models import (
    InvalidArgumentError, Dimensions, UnitType, Customer, StorageUnit,
    DomainEvent, CustomerAddedEvent, UnitRentedEvent, UnitReleasedEvent,
    MonthlyRentChargedEvent
)
from .aggregates import StorageLocation, BillingPolicies

__all__ = [
    "InvalidArgumentError", "Dimensions", "UnitType", "Customer", "StorageUnit",
    "DomainEvent", "CustomerAddedEvent", "UnitRentedEvent", "UnitReleasedEvent",
    "MonthlyRentChargedEvent", "StorageLocation", "BillingPolicies",
]
