"""
Unit Tests Package for the Storage Spots rental system

Covers the domain layer in isolation: customers, storage units,
pricing strategies and the StorageLocation aggregate.
"""

import sys
from pathlib import Path

# Add the src directory to Python path for imports
src_dir = Path(__file__).parent.parent.parent / "src"
sys.path.insert(0, str(src_dir))
