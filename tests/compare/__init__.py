"""
HTML Compare Tests Package
==========================
Test suite for the element-level HTML comparison modules.

Run all tests: python3 -m pytest tests/compare/ -v
Run specific: python3 -m pytest tests/compare/test_mapper.py -v
"""

__version__ = "1.0.0"
