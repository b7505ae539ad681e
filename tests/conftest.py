"""Pytest configuration for import map resolver tests."""

import sys
from pathlib import Path

# Make the package importable from a source checkout without installing it
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))
