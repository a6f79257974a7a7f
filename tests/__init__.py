"""
Test suite for the CSV → Strapi importer.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_field_mapper.py -v
"""
