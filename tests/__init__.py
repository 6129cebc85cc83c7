"""
Test suite for eventhub-core

Contains:
- tests/unit/ : Unit and property tests for the domain core
"""
