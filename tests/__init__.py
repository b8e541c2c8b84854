"""
Test Suite for the Gold Savings analysis workbench

Includes:
- Unit tests for each price query
- XML persistence round-trip tests
- Aggregator and CLI tests against tests/fixtures
"""
