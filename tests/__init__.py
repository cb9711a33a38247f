#!/usr/bin/env python3
"""
Test suite.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Skip tests that touch a database
    python -m pytest tests/ -v -m "not db"

    # Using unittest
    python -m unittest discover tests -v

Repository and dispatcher tests use an in-memory SQLite database, so no
external services are needed.
"""
