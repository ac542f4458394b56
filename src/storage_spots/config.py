# File: src/storage_spots/config.py
"""
Configuration for the Storage Spots rental system

AppConfig holds application-level settings (logging is read from the
environment). FacilityLayout holds the fixed shape of every storage location.
"""

import os
from typing import Tuple


class AppConfig:
    """Application configuration"""
    APP_NAME = "Storage Spots Rental System"
    VERSION = "1.0.0"
    COMPANY = "Stanley's Storage Spots"

    # Logging
    LOG_LEVEL = os.getenv("STORAGE_SPOTS_LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("STORAGE_SPOTS_LOG_DIR", "logs")
    LOG_FILE = "storage_spots.log"
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class FacilityLayout:
    """Fixed grid layout shared by all storage locations"""

    NUM_ROWS = 12

    # First row of each unit variant; a variant runs until the next one starts
    ROW_START_STANDARD = 0
    ROW_START_HUMIDITY = 7
    ROW_START_TEMPERATURE = 10

    SLOTS_IN_STANDARD_ROW = 10
    SLOTS_IN_HUMIDITY_ROW = 8
    SLOTS_IN_TEMPERATURE_ROW = 6

    # Every unit is built with the same dimensions (feet)
    UNIT_WIDTH = 4
    UNIT_LENGTH = 8
    UNIT_HEIGHT = 8

    DEFAULT_HUMIDITY_LEVEL = 30
    DEFAULT_TEMPERATURE_LEVEL = 50

    MAX_CUSTOMERS = 100

    # Unit map report
    MAP_SCREEN_WIDTH = 60

    DESIGNATION_PATTERN = r'[A-Z]{2}[0-9]{2}[A-Za-z ]+'

    @classmethod
    def unit_dimensions(cls) -> Tuple[int, int, int]:
        return cls.UNIT_WIDTH, cls.UNIT_LENGTH, cls.UNIT_HEIGHT
