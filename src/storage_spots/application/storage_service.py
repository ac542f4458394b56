# File: src/storage_spots/application/storage_service.py
"""
Storage Rental Application Service

This module implements the application service layer for the rental system.
It orchestrates the StorageLocation aggregate and hands results to callers
as DTOs.

Responsibilities:
1. Execute use cases: register customers, rent and release units, bill monthly rent
2. Translate domain validation failures into unsuccessful result DTOs
3. Log every use case
"""

from typing import List, Optional, Any
import logging

from ..domain.models import Customer, InvalidArgumentError, MonthlyRentChargedEvent, UnitType
from ..domain.aggregates import StorageLocation, BillingPolicies
from .dtos import (
    CustomerCreateDTO, CustomerDTO, StorageUnitDTO, UnitTypeDTO,
    RentRequestDTO, RentalResultDTO, CustomerChargeDTO,
    MonthlyRentSummaryDTO, LocationStatusDTO
)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class StorageServiceError(Exception):
    """Base exception for storage service errors"""
    pass


class UnknownCustomerError(StorageServiceError):
    """Raised when a roster index does not name a customer"""
    pass


# ============================================================================
# MAIN STORAGE SERVICE
# ============================================================================

class StorageService:
    """
    Main application service for one storage location

    Use cases:
    1. Customer registration
    2. Renting and releasing units
    3. Availability and per-customer queries
    4. Monthly billing
    5. Status reporting
    """

    def __init__(self, location: StorageLocation):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.location = location
        self.logger.info(f"StorageService initialized for {location.designation}")

    # ========================================================================
    # CUSTOMERS
    # ========================================================================

    def register_customer(self, request: CustomerCreateDTO) -> CustomerDTO:
        """
        Add a new customer to the location roster
        Raises: InvalidArgumentError if the roster is full
        """
        customer = Customer(request.name, request.phone)
        index = self.location.add_customer(customer)
        return CustomerDTO.from_domain(index, customer)

    def get_customer(self, index: int) -> CustomerDTO:
        return CustomerDTO.from_domain(index, self._customer_at(index))

    def _customer_at(self, index: int) -> Customer:
        try:
            return self.location.get_customer(index)
        except InvalidArgumentError as e:
            raise UnknownCustomerError(str(e)) from e

    # ========================================================================
    # RENTALS
    # ========================================================================

    def rent_unit(self, request: RentRequestDTO) -> RentalResultDTO:
        """
        Rent a unit to a roster customer

        Use Case: Unit Rental
        1. Resolve the customer by roster index
        2. Rent the unit through the location
        3. Report the unit's new state
        """
        self.logger.info(
            f"Processing rent request for unit {request.row}-{request.slot} "
            f"(customer {request.customer_index})"
        )

        try:
            customer = self.location.get_customer(request.customer_index)
            rented = self.location.rent_unit(
                request.row, request.slot, customer, request.start_date
            )
        except InvalidArgumentError as e:
            self.logger.warning(f"Rent request rejected: {e}")
            return RentalResultDTO(success=False, row=request.row, slot=request.slot,
                                   message=str(e))

        unit = self.location.get_storage_unit(request.row, request.slot)
        message = (f"Rented to {customer.name}" if rented
                   else "Unit is already rented")
        return RentalResultDTO(
            success=rented,
            row=request.row,
            slot=request.slot,
            unit=StorageUnitDTO.from_domain(request.row, request.slot, unit),
            message=message,
        )

    def release_unit(self, row: int, slot: int) -> RentalResultDTO:
        """Release a rented unit"""
        self.logger.info(f"Processing release request for unit {row}-{slot}")

        try:
            released = self.location.release_unit(row, slot)
        except InvalidArgumentError as e:
            self.logger.warning(f"Release request rejected: {e}")
            return RentalResultDTO(success=False, row=row, slot=slot, message=str(e))

        unit = self.location.get_storage_unit(row, slot)
        return RentalResultDTO(
            success=released,
            row=row,
            slot=slot,
            unit=StorageUnitDTO.from_domain(row, slot, unit),
            message="Unit released" if released else "Unit is not rented",
        )

    # ========================================================================
    # QUERIES
    # ========================================================================

    def list_empty_units(self, unit_type: Optional[UnitTypeDTO] = None) -> List[StorageUnitDTO]:
        """Vacant units in row-major order, optionally of one type"""
        wanted: Optional[UnitType] = UnitTypeDTO(unit_type).to_domain() if unit_type else None
        return [
            StorageUnitDTO.from_domain(row, slot, unit)
            for row, slot, unit in self.location.iter_units()
            if not unit.is_rented() and (wanted is None or unit.unit_type == wanted)
        ]

    def list_customer_units(self, customer_index: int) -> List[StorageUnitDTO]:
        """Units rented by a roster customer in row-major order"""
        customer = self._customer_at(customer_index)
        return [
            StorageUnitDTO.from_domain(row, slot, unit)
            for row, slot, unit in self.location.iter_units()
            if unit.occupant is customer
        ]

    def get_location_status(self) -> LocationStatusDTO:
        """Current occupancy snapshot"""
        empty_by_type = {
            unit_type.value: len(self.location.get_empty_units(unit_type))
            for unit_type in UnitType
        }
        total = self.location.unit_count
        return LocationStatusDTO(
            designation=self.location.designation,
            base_price=self.location.base_price,
            total_units=total,
            rented_units=total - sum(empty_by_type.values()),
            empty_units_by_type=empty_by_type,
            customer_count=self.location.customer_count,
        )

    def render_unit_map(self) -> str:
        return self.location.unit_map()

    # ========================================================================
    # BILLING
    # ========================================================================

    def run_monthly_billing(self) -> MonthlyRentSummaryDTO:
        """
        Charge monthly rent to every customer and summarize the run

        Use Case: Monthly Billing
        1. Charge the location's monthly rent
        2. Read per-customer lines from the billing event
        3. Build the summary
        """
        self.logger.info(f"Running monthly billing for {self.location.designation}")

        total = self.location.charge_monthly_rent()

        # The newest billing event belongs to this run; other pending events stay queued
        billing_event = next(
            event for event in reversed(self.location.pending_events)
            if isinstance(event, MonthlyRentChargedEvent)
        )

        lines = []
        for index, (_, unit_count, subtotal, charged) in enumerate(billing_event.charges):
            customer = self.location.get_customer(index)
            lines.append(CustomerChargeDTO(
                customer_index=index,
                customer_name=customer.name,
                unit_count=unit_count,
                subtotal=subtotal,
                amount_charged=charged,
                discount_applied=unit_count > 1,
                new_balance=customer.balance,
            ))

        self.logger.info(f"Monthly billing complete: ${total:.2f} across {len(lines)} customers")
        return MonthlyRentSummaryDTO(
            designation=self.location.designation,
            charges=lines,
            total_charged=total,
        )


# ============================================================================
# SERVICE FACTORY
# ============================================================================

class StorageServiceFactory:
    """Factory for creating storage service instances"""

    DEFAULT_DESIGNATION = "WA23Issaquah"
    DEFAULT_BASE_PRICE = "100.00"

    @staticmethod
    def create_default_service() -> StorageService:
        """Create a service over a fresh default location"""
        return StorageService(StorageLocation(
            StorageServiceFactory.DEFAULT_DESIGNATION,
            StorageServiceFactory.DEFAULT_BASE_PRICE
        ))

    @staticmethod
    def create_service(designation: str, base_price: Any,
                       policies: Optional[BillingPolicies] = None) -> StorageService:
        """Create a service over a new location"""
        return StorageService(StorageLocation(designation, base_price, policies))
