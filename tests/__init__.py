"""
Test suite for ecobalance

Contains:
- tests/unit/          : Unit tests for individual modules
"""
