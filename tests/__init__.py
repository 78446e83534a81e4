"""
Test suite for token-swap-engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
