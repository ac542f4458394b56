"""
Integration Tests Package for the Storage Spots rental system

Integration tests focus on:
1. The application service driving the StorageLocation aggregate
2. End-to-end billing scenarios
3. The console demo
"""

import sys
from pathlib import Path

# Add the src directory to Python path for imports
src_dir = Path(__file__).parent.parent.parent / "src"
sys.path.insert(0, str(src_dir))
