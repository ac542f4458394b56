# File: src/storage_spots/domain/strategies.py
"""
Strategy Pattern Implementation for the Storage Spots rental system

This module encapsulates the pricing algorithms of the rental engine. The
strategy for a unit is selected at runtime from its UnitType tag, so units
themselves stay a single class.

Key Strategies:
1. Unit Pricing Strategies - One monthly surcharge rule per unit variant
2. Discount Strategies - How a customer's combined rent is reduced

Benefits:
- New variants are added by registering a strategy, not by subclassing units
- Each strategy is independently testable
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
from decimal import Decimal, ROUND_HALF_UP
import logging

from .models import StorageUnit, UnitType, InvalidArgumentError, to_amount


# ============================================================================
# STRATEGY INTERFACES
# ============================================================================

class UnitPricingStrategy(ABC):
    """
    Abstract base class for unit pricing strategies
    Defines the interface for the variant-specific part of a unit's rent
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def calculate_unit_specific_price(self, unit: StorageUnit) -> Decimal:
        """
        Calculate the monthly surcharge for the given unit
        Returns: Surcharge, excluding the location base price
        """
        pass

    def get_strategy_name(self) -> str:
        """Get human-readable strategy name"""
        return self.__class__.__name__.replace("PricingStrategy", "")

    def __str__(self) -> str:
        return f"{self.get_strategy_name()} Pricing Strategy"


class DiscountStrategy(ABC):
    """
    Abstract base class for rent discount strategies
    Applied to a customer's combined monthly subtotal
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def apply(self, subtotal: Decimal, unit_count: int) -> Decimal:
        """
        Apply the discount to a subtotal covering unit_count units
        Returns: Amount to charge
        """
        pass


# ============================================================================
# UNIT PRICING STRATEGIES
# ============================================================================

class StandardPricingStrategy(UnitPricingStrategy):
    """
    Standard units: flat monthly rate regardless of size
    """

    FLAT_RATE = Decimal('75.0')

    def calculate_unit_specific_price(self, unit: StorageUnit) -> Decimal:
        return self.FLAT_RATE


class HumidityPricingStrategy(UnitPricingStrategy):
    """
    Humidity-controlled units
    - Priced per square foot of floor space
    - Low humidity settings (20-29%) cost extra to maintain
    """

    PRICE_PER_SQ_FT = Decimal('5.0')
    LOW_HUMIDITY_SURCHARGE = Decimal('20.0')
    LOW_BAND = (20, 29)

    def calculate_unit_specific_price(self, unit: StorageUnit) -> Decimal:
        price = unit.length * unit.width * self.PRICE_PER_SQ_FT

        low, high = self.LOW_BAND
        if low <= unit.level <= high:
            price += self.LOW_HUMIDITY_SURCHARGE

        self.logger.debug(f"Humidity unit at {unit.level}% priced at {price}")
        return price


class TemperaturePricingStrategy(UnitPricingStrategy):
    """
    Temperature-controlled units
    - Priced per cubic foot
    - Extreme settings (45-49F or 65-70F) carry a surcharge; 50-64F does not
    """

    PRICE_PER_CUBIC_FT = Decimal('1.0')
    EXTREME_TEMPERATURE_SURCHARGE = Decimal('30.0')
    EXTREME_BANDS = ((45, 49), (65, 70))

    def calculate_unit_specific_price(self, unit: StorageUnit) -> Decimal:
        price = unit.length * unit.width * unit.height * self.PRICE_PER_CUBIC_FT

        if any(low <= unit.level <= high for low, high in self.EXTREME_BANDS):
            price += self.EXTREME_TEMPERATURE_SURCHARGE

        self.logger.debug(f"Temperature unit at {unit.level}F priced at {price}")
        return price


# ============================================================================
# DISCOUNT STRATEGIES
# ============================================================================

class MultiUnitDiscountStrategy(DiscountStrategy):
    """
    Multi-unit discount
    - Customers renting more than one unit get discount_rate off the subtotal
    - The discounted amount is rounded half-up to the nearest rounding_increment
    - A single unit is charged at its undiscounted price
    """

    def __init__(
        self,
        discount_rate: Decimal = Decimal('0.05'),
        rounding_increment: Decimal = Decimal('0.05')
    ):
        super().__init__()
        self.discount_rate = to_amount(discount_rate)
        self.rounding_increment = to_amount(rounding_increment)

        if not Decimal('0') <= self.discount_rate < Decimal('1'):
            raise InvalidArgumentError("Discount rate must be in [0, 1)")
        if self.rounding_increment <= 0:
            raise InvalidArgumentError("Rounding increment must be positive")

    def apply(self, subtotal: Decimal, unit_count: int) -> Decimal:
        if unit_count <= 1:
            return subtotal

        discounted = subtotal - subtotal * self.discount_rate
        rounded = self.round_to_increment(discounted)
        self.logger.debug(
            f"Applied multi-unit discount on {unit_count} units: {subtotal} -> {rounded}"
        )
        return rounded

    def round_to_increment(self, amount: Decimal) -> Decimal:
        """Round half-up to the nearest increment, e.g. 0.05 -> nearest nickel"""
        steps = (amount / self.rounding_increment).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
        return steps * self.rounding_increment


# ============================================================================
# STRATEGY FACTORY
# ============================================================================

class UnitPricingStrategyFactory:
    """
    Factory/registry mapping each UnitType tag to its pricing strategy
    """

    _strategies: Dict[UnitType, UnitPricingStrategy] = {
        UnitType.STANDARD: StandardPricingStrategy(),
        UnitType.HUMIDITY: HumidityPricingStrategy(),
        UnitType.TEMPERATURE: TemperaturePricingStrategy(),
    }

    @classmethod
    def get_strategy(cls, unit_type: UnitType) -> UnitPricingStrategy:
        """Get the pricing strategy registered for a unit type"""
        strategy: Optional[UnitPricingStrategy] = cls._strategies.get(unit_type)
        if strategy is None:
            raise InvalidArgumentError(f"No pricing strategy for unit type: {unit_type!r}")
        return strategy

    @classmethod
    def register_strategy(cls, unit_type: UnitType, strategy: UnitPricingStrategy) -> None:
        """Replace the strategy used for a unit type"""
        cls._strategies[unit_type] = strategy


def calculate_unit_specific_price(unit: StorageUnit) -> Decimal:
    """Dispatch on the unit's tag to compute its variant surcharge"""
    return UnitPricingStrategyFactory.get_strategy(unit.unit_type).calculate_unit_specific_price(unit)
