"""Intensive property tests for the codec round trip.

Excluded from normal runs; run with: pytest -m fuzz

Python 3.13+.
"""
